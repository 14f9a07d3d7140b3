"""
Core problem, result and error types for the convex oracle layer.

Linear programs use the pair ``(G, h)`` for inequality constraints
``G x <= h`` and optional element-wise bounds ``lb``/``ub``; ``None`` denotes
a free bound whereas ``np.inf`` or ``-np.inf`` represent one-sided bounds.

The sparse-solution heuristic works on :class:`InequalitySystem`, the feasible
region ``{x : A x <= b}``, and asks an oracle to minimise a weighted L1 norm
over it. LP routines report their exit through :class:`Status`; the oracle
layer turns any non-optimal exit into a :class:`SolverError` subclass via
:func:`raise_for_status`.

References:
    - Boyd & Vandenberghe, *Convex Optimization* (2004), Section 6.3
    - Candes, Wakin & Boyd, *Enhancing Sparsity by Reweighted l1
      Minimization* (2008)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class Status(Enum):
    """Solution status for optimization routines."""

    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    MAX_ITER = "max_iter"
    NUMERICAL_ERROR = "numerical_error"


class SolverError(RuntimeError):
    """Base class for failures reported by a convex-optimization oracle."""

    status: Status = Status.NUMERICAL_ERROR

    def __init__(self, message: str, status: Optional[Status] = None) -> None:
        super().__init__(message)
        if status is not None:
            self.status = status


class InfeasibleError(SolverError):
    """No point satisfies the constraints."""

    status = Status.INFEASIBLE


class UnboundedError(SolverError):
    """The objective decreases without bound over the feasible region."""

    status = Status.UNBOUNDED


class SolverFailure(SolverError):
    """Numerical failure or iteration limit before convergence."""

    status = Status.NUMERICAL_ERROR


@dataclass(frozen=True)
class InequalitySystem:
    """
    Linear inequality system ``A x <= b``.

    ``A`` has shape ``(m, n)`` and ``b`` has shape ``(m,)``. Both arrays are
    copied on construction and marked read-only so that the instance stays
    immutable across every oracle call of a reweighting run.
    """

    A: np.ndarray
    b: np.ndarray

    def __post_init__(self) -> None:
        a_mat = np.array(self.A, dtype=float)
        b_vec = np.array(self.b, dtype=float).reshape(-1)
        if a_mat.ndim != 2:
            raise ValueError(f"A must be a 2D array, got shape {a_mat.shape}")
        if a_mat.shape[0] == 0:
            raise ValueError("A must have at least one row")
        if a_mat.shape[1] == 0:
            raise ValueError("A must have at least one column")
        if a_mat.shape[0] != b_vec.shape[0]:
            raise ValueError(
                f"A and b dimension mismatch: A has {a_mat.shape[0]} rows, "
                f"b has {b_vec.shape[0]} entries"
            )
        if not (np.all(np.isfinite(a_mat)) and np.all(np.isfinite(b_vec))):
            raise ValueError("A and b must contain only finite values")
        a_mat.setflags(write=False)
        b_vec.setflags(write=False)
        object.__setattr__(self, "A", a_mat)
        object.__setattr__(self, "b", b_vec)

    @property
    def n_constraints(self) -> int:
        return int(self.A.shape[0])

    @property
    def n_vars(self) -> int:
        return int(self.A.shape[1])

    def violation(self, x: np.ndarray) -> float:
        """Return ``max(A x - b)`` clipped at zero (0.0 means feasible)."""

        residual = self.A @ np.asarray(x, dtype=float).reshape(-1) - self.b
        return float(max(np.max(residual), 0.0))


@dataclass
class LPProblem:
    """
    Linear program ``min c^T x`` subject to ``G x <= h`` and ``lb <= x <= ub``.

    The weighted-L1 reformulation produced by
    :func:`rwsparse.convex.utils.weighted_l1_lp` fills every field.
    """

    c: np.ndarray
    G: Optional[np.ndarray] = None
    h: Optional[np.ndarray] = None
    lb: Optional[np.ndarray] = None
    ub: Optional[np.ndarray] = None


@dataclass
class OptimizeResult:
    """
    Solution container shared across all LP routines.

    Attributes:
        x: Primal solution vector (or ``None`` if unavailable).
        fun: Objective value at ``x`` (or ``None`` when not computed).
        status: Enumeration describing solver exit.
        message: Human-readable string explaining the status.
        nit: Number of iterations performed.
        primal_residual: Norm of primal feasibility residual, if computed.
        slack: Slack variables for inequality constraints when available.
    """

    x: Optional[np.ndarray]
    fun: Optional[float]
    status: Status
    message: str
    nit: int
    primal_residual: Optional[float] = None
    slack: Optional[np.ndarray] = None


_STATUS_ERRORS = {
    Status.INFEASIBLE: InfeasibleError,
    Status.UNBOUNDED: UnboundedError,
    Status.MAX_ITER: SolverFailure,
    Status.NUMERICAL_ERROR: SolverFailure,
}


def raise_for_status(result: OptimizeResult) -> np.ndarray:
    """
    Return ``result.x`` for an optimal result, otherwise raise.

    Raises:
        InfeasibleError: ``result.status`` is ``INFEASIBLE``.
        UnboundedError: ``result.status`` is ``UNBOUNDED``.
        SolverFailure: any other non-optimal status, or an optimal status
            without a solution vector.
    """

    if result.status is Status.OPTIMAL:
        if result.x is None:
            raise SolverFailure("Solver reported optimality without a solution")
        return result.x
    error_cls = _STATUS_ERRORS[result.status]
    raise error_cls(result.message, status=result.status)


__all__ = [
    "Status",
    "SolverError",
    "InfeasibleError",
    "UnboundedError",
    "SolverFailure",
    "InequalitySystem",
    "LPProblem",
    "OptimizeResult",
    "raise_for_status",
]

"""
Convex-optimization oracles for weighted-L1 minimisation.

An oracle exposes a single operation, :meth:`WeightedL1Oracle.solve`, which
returns a minimiser of ``sum_i w_i |x_i|`` subject to ``A x <= b`` or raises a
:class:`~rwsparse.convex.core.SolverError` subclass. The reweighting driver
only ever talks to this interface, so tests can substitute a scripted fake.

Three backends are provided:

- :class:`LinprogOracle` solves the split-variable LP with SciPy's HiGHS.
- :class:`SimplexOracle` solves the same LP with the NumPy revised simplex;
  it suits small instances and has no solver dependency beyond NumPy.
- :class:`CvxpyOracle` states the problem in the CVXPY modelling layer with
  the weights as a non-negative parameter, so the problem is canonicalised
  once per system and re-solved for each weight vector.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

import cvxpy as cp
import numpy as np
from cvxpy.error import SolverError as CvxpySolverError

from ..logging import get_logger
from .core import (
    InequalitySystem,
    InfeasibleError,
    LPProblem,
    OptimizeResult,
    SolverFailure,
    UnboundedError,
    raise_for_status,
)
from .lp import linprog_wrapper, simplex
from .utils import check_weights, recover_solution, weighted_l1_lp

logger = get_logger(__name__)


class WeightedL1Oracle(ABC):
    """Solve ``min sum_i w_i |x_i|`` subject to ``A x <= b``."""

    name: str = "oracle"

    @abstractmethod
    def solve(self, system: InequalitySystem, weights: np.ndarray) -> np.ndarray:
        """
        Return an optimal ``x`` of length ``system.n_vars``.

        Raises:
            InfeasibleError: No ``x`` satisfies ``A x <= b``.
            UnboundedError: The solver reports an unbounded objective.
            SolverFailure: The solver failed to converge.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class _LPOracle(WeightedL1Oracle):
    """Shared plumbing for oracles backed by an inequality-form LP routine."""

    def __init__(self, tol: float = 1e-9, maxiter: Optional[int] = None) -> None:
        if tol <= 0.0:
            raise ValueError(f"tol must be positive, got {tol}")
        self.tol = float(tol)
        self.maxiter = maxiter

    @abstractmethod
    def _solve_lp(self, lp: LPProblem) -> OptimizeResult:
        """Run the underlying LP routine."""

    def solve(self, system: InequalitySystem, weights: np.ndarray) -> np.ndarray:
        lp = weighted_l1_lp(system, weights)
        result = self._solve_lp(lp)
        logger.debug(
            "%s: status=%s nit=%d fun=%s",
            self.name,
            result.status.value,
            result.nit,
            result.fun,
        )
        z = raise_for_status(result)
        return recover_solution(z, system.n_vars)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tol={self.tol}, maxiter={self.maxiter})"


class LinprogOracle(_LPOracle):
    """Weighted-L1 oracle backed by :func:`scipy.optimize.linprog`."""

    name = "linprog"

    def __init__(
        self, tol: float = 1e-9, maxiter: Optional[int] = None, method: str = "highs"
    ) -> None:
        super().__init__(tol=tol, maxiter=maxiter)
        self.method = method

    def _solve_lp(self, lp: LPProblem) -> OptimizeResult:
        return linprog_wrapper(
            lp.c,
            g_mat=lp.G,
            h_vec=lp.h,
            lb=lp.lb,
            ub=lp.ub,
            maxiter=self.maxiter,
            tol=self.tol,
            method=self.method,
        )


class SimplexOracle(_LPOracle):
    """Weighted-L1 oracle backed by the NumPy two-phase revised simplex."""

    name = "simplex"

    def __init__(self, tol: float = 1e-9, maxiter: Optional[int] = 5000) -> None:
        super().__init__(tol=tol, maxiter=maxiter)

    def _solve_lp(self, lp: LPProblem) -> OptimizeResult:
        return simplex(
            lp.c,
            g_mat=lp.G,
            h_vec=lp.h,
            lb=lp.lb,
            ub=lp.ub,
            maxiter=self.maxiter or 5000,
            tol=self.tol,
        )


class CvxpyOracle(WeightedL1Oracle):
    """
    Weighted-L1 oracle stated in CVXPY.

    Args:
        solver: CVXPY solver name (e.g. ``"CLARABEL"``, ``"ECOS"``,
            ``"HIGHS"``). ``None`` lets CVXPY choose.
        **solver_options: Forwarded to :meth:`cvxpy.Problem.solve`.
    """

    name = "cvxpy"

    def __init__(self, solver: Optional[str] = None, **solver_options: Any) -> None:
        self.solver = solver
        self.solver_options = solver_options
        self._system: Optional[InequalitySystem] = None
        self._x: Optional[cp.Variable] = None
        self._w: Optional[cp.Parameter] = None
        self._problem: Optional[cp.Problem] = None

    def _build(self, system: InequalitySystem) -> None:
        n = system.n_vars
        self._x = cp.Variable(n)
        self._w = cp.Parameter(n, nonneg=True)
        objective = cp.Minimize(cp.norm1(cp.multiply(self._w, self._x)))
        self._problem = cp.Problem(objective, [system.A @ self._x <= system.b])
        self._system = system

    def solve(self, system: InequalitySystem, weights: np.ndarray) -> np.ndarray:
        w = check_weights(weights, system.n_vars)
        if self._system is not system:
            self._build(system)
        self._w.value = w

        try:
            self._problem.solve(solver=self.solver, **self.solver_options)
        except CvxpySolverError as exc:
            raise SolverFailure(f"CVXPY solver failed: {exc}") from exc

        status = self._problem.status
        logger.debug("cvxpy: status=%s value=%s", status, self._problem.value)
        if status in (cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE):
            raise InfeasibleError(f"CVXPY reported status '{status}'")
        if status in (cp.UNBOUNDED, cp.UNBOUNDED_INACCURATE):
            raise UnboundedError(f"CVXPY reported status '{status}'")
        if status == cp.OPTIMAL_INACCURATE:
            logger.warning("cvxpy: solution is only optimal to reduced accuracy")
        elif status != cp.OPTIMAL:
            raise SolverFailure(f"CVXPY reported status '{status}'")
        if self._x.value is None:
            raise SolverFailure("CVXPY returned no primal solution")
        return np.asarray(self._x.value, dtype=float).reshape(-1).copy()

    def __repr__(self) -> str:
        return f"CvxpyOracle(solver={self.solver!r})"


_ORACLES: Dict[str, Type[WeightedL1Oracle]] = {
    LinprogOracle.name: LinprogOracle,
    SimplexOracle.name: SimplexOracle,
    CvxpyOracle.name: CvxpyOracle,
}


def make_oracle(name: str = "linprog", **options: Any) -> WeightedL1Oracle:
    """
    Create an oracle by name.

    Args:
        name: One of ``"linprog"``, ``"simplex"``, ``"cvxpy"``
            (case-insensitive).
        **options: Keyword arguments for the oracle constructor.

    Raises:
        ValueError: If the name is not supported.
    """

    key = name.lower()
    if key not in _ORACLES:
        raise ValueError(
            f"Unknown oracle '{name}'. Supported oracles: {', '.join(sorted(_ORACLES))}."
        )
    return _ORACLES[key](**options)


__all__ = [
    "WeightedL1Oracle",
    "LinprogOracle",
    "SimplexOracle",
    "CvxpyOracle",
    "make_oracle",
]

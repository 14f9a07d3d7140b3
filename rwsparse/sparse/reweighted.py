"""
Iterative reweighted-L1 heuristic for sparse solutions of ``A x <= b``.

The number of nonzero entries of ``x`` is not convex, so it is replaced by the
concave surrogate ``sum_i log(delta + |x_i|)``. Linearising the surrogate at
the current iterate gives a weighted L1 problem, which is convex for positive
weights:

```
    W = 1
    repeat K times:
        x = argmin sum_i W_i |x_i|   subject to  A x <= b
        W_i = 1 / (delta + |x_i|)
```

Coordinates that are already large get a small weight, so the penalty
concentrates on near-zero coordinates and pushes them to exactly zero. The
first pass (``W = 1``) is the plain L1 heuristic, which is also run once on
its own as a baseline for comparison.

Each weighted sub-problem is delegated to a
:class:`~rwsparse.convex.oracle.WeightedL1Oracle`. Oracle failures are not
retried: ``A`` and ``b`` never change between iterations, so an infeasible or
failing sub-problem aborts the whole run.

References:
    - Candes, Wakin & Boyd, *Enhancing Sparsity by Reweighted l1
      Minimization*, J. Fourier Anal. Appl. 14 (2008).
    - Boyd & Vandenberghe, *Convex Optimization* (2004), Section 6.3.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..convex.core import InequalitySystem
from ..convex.oracle import LinprogOracle, WeightedL1Oracle
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReweightedConfig:
    """
    Configuration for a reweighted-L1 run.

    Args:
        delta: Sparsity threshold. Entries with ``|x_i| <= delta`` count as
            zero, and ``delta`` keeps every weight finite. Must be positive.
        num_iter: Number of weighted solves ``K``. Must be >= 1.
        baseline: Whether :func:`sparse_solution` also runs the plain L1
            solve for comparison.
    """

    delta: float = 1e-8
    num_iter: int = 15
    baseline: bool = True

    def __post_init__(self) -> None:
        """Validate ReweightedConfig invariants."""
        if not np.isfinite(self.delta) or self.delta <= 0.0:
            raise ValueError(f"delta must be a positive finite number, got {self.delta}.")
        if self.num_iter < 1:
            raise ValueError(f"num_iter must be >= 1, got {self.num_iter}.")


@dataclass(frozen=True)
class ReweightedResult:
    """
    Outcome of a reweighted-L1 run.

    Attributes:
        x: Final solution vector of length ``n``.
        nnz: Number of entries of ``x`` with magnitude above ``delta``.
        trace: Nonzero count after each iteration, in order.
        weights: Weight vector after the final update.
        max_violation: ``max(A x - b)`` clipped at zero.
        delta: Threshold used for counting.
    """

    x: np.ndarray
    nnz: int
    trace: Tuple[int, ...]
    weights: np.ndarray
    max_violation: float
    delta: float

    def __post_init__(self) -> None:
        """Validate ReweightedResult invariants."""
        if self.x.ndim != 1 or self.weights.shape != self.x.shape:
            raise ValueError(
                f"x and weights must be 1D with equal length, "
                f"got shapes {self.x.shape} and {self.weights.shape}"
            )
        if not self.trace or self.trace[-1] != self.nnz:
            raise ValueError("trace must be non-empty and end with nnz")

    @property
    def num_iter(self) -> int:
        return len(self.trace)

    @property
    def support(self) -> np.ndarray:
        """Indices of the entries counted as nonzero."""
        return np.flatnonzero(np.abs(self.x) > self.delta)

    @property
    def plateau_iteration(self) -> int:
        """First iteration (1-based) from which the trace stays constant."""
        k = len(self.trace)
        while k > 1 and self.trace[k - 2] == self.trace[-1]:
            k -= 1
        return k


@dataclass(frozen=True)
class SparseSolutionReport:
    """Plain L1 baseline next to the reweighted result."""

    baseline: Optional[ReweightedResult]
    reweighted: ReweightedResult
    config: ReweightedConfig

    @property
    def improvement(self) -> Optional[int]:
        """Nonzeros removed by reweighting relative to the baseline."""
        if self.baseline is None:
            return None
        return self.baseline.nnz - self.reweighted.nnz


def count_nonzeros(x: np.ndarray, delta: float) -> int:
    """Return ``|{i : |x_i| > delta}|``."""

    return int(np.count_nonzero(np.abs(np.asarray(x, dtype=float)) > delta))


def update_weights(x: np.ndarray, delta: float) -> np.ndarray:
    """
    Return the reweighting step ``W_i = 1 / (delta + |x_i|)``.

    This is the gradient of ``sum_i log(delta + |x_i|)`` with respect to
    ``|x_i|``. Weights are strictly positive and strictly decreasing in
    ``|x_i|`` for any ``delta > 0``.

    Raises:
        ValueError: If ``delta`` is not positive.
    """

    if delta <= 0.0:
        raise ValueError(f"delta must be positive, got {delta}")
    return 1.0 / (delta + np.abs(np.asarray(x, dtype=float)))


def weighted_l1_norm(x: np.ndarray, weights: np.ndarray) -> float:
    """Evaluate the sub-problem objective ``sum_i w_i |x_i|``."""

    return float(np.dot(np.asarray(weights, dtype=float), np.abs(np.asarray(x, dtype=float))))


def _check_solution(x: np.ndarray, n: int, oracle: WeightedL1Oracle) -> np.ndarray:
    x = np.asarray(x, dtype=float).reshape(-1)
    if x.shape[0] != n:
        raise ValueError(f"{oracle!r} returned a vector of length {x.shape[0]}, expected {n}")
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{oracle!r} returned a non-finite solution")
    return x


def reweighted_l1(
    system: InequalitySystem,
    oracle: WeightedL1Oracle,
    delta: float = 1e-8,
    num_iter: int = 15,
) -> ReweightedResult:
    """
    Run ``num_iter`` rounds of the reweighted-L1 heuristic.

    Args:
        system: Feasible inequality system ``A x <= b``. Feasibility is not
            checked up front; an infeasible system makes the first oracle
            call fail.
        oracle: Solver for the weighted sub-problems.
        delta: Sparsity threshold and weight offset (> 0).
        num_iter: Number of weighted solves (>= 1). ``num_iter=1`` is the
            plain L1 solve since the first weights are all ones.

    Returns:
        :class:`ReweightedResult` with the last solution and the per-iteration
        nonzero counts.

    Raises:
        ValueError: If ``delta`` or ``num_iter`` is invalid.
        SolverError: Propagated from the oracle; no partial result is kept.
    """

    config = ReweightedConfig(delta=delta, num_iter=num_iter)
    n = system.n_vars
    weights = np.ones(n)
    trace = []
    x = np.zeros(n)

    for iteration in range(1, config.num_iter + 1):
        x = _check_solution(oracle.solve(system, weights), n, oracle)
        nnz = count_nonzeros(x, config.delta)
        trace.append(nnz)
        logger.info(
            "iteration %d/%d: %d nonzeros (weighted l1 = %.6g)",
            iteration,
            config.num_iter,
            nnz,
            weighted_l1_norm(x, weights),
        )
        weights = update_weights(x, config.delta)

    return ReweightedResult(
        x=x,
        nnz=trace[-1],
        trace=tuple(trace),
        weights=weights,
        max_violation=system.violation(x),
        delta=config.delta,
    )


def l1_baseline(
    system: InequalitySystem,
    oracle: WeightedL1Oracle,
    delta: float = 1e-8,
) -> ReweightedResult:
    """Solve the unweighted problem ``min ||x||_1`` s.t. ``A x <= b`` once."""

    return reweighted_l1(system, oracle, delta=delta, num_iter=1)


def sparse_solution(
    system: InequalitySystem,
    oracle: Optional[WeightedL1Oracle] = None,
    config: Optional[ReweightedConfig] = None,
) -> SparseSolutionReport:
    """
    Run the plain L1 baseline and the reweighted heuristic on ``system``.

    Args:
        system: Feasible inequality system.
        oracle: Weighted-L1 solver. Defaults to :class:`LinprogOracle`.
        config: Run configuration. Defaults to ``ReweightedConfig()``.

    Returns:
        :class:`SparseSolutionReport` holding both final nonzero counts and
        the reweighting trace.
    """

    config = config or ReweightedConfig()
    oracle = oracle or LinprogOracle()
    logger.info(
        "sparse solution: m=%d n=%d delta=%g num_iter=%d oracle=%r",
        system.n_constraints,
        system.n_vars,
        config.delta,
        config.num_iter,
        oracle,
    )

    baseline = None
    if config.baseline:
        baseline = l1_baseline(system, oracle, delta=config.delta)
        logger.info("plain l1: %d nonzeros", baseline.nnz)

    result = reweighted_l1(system, oracle, delta=config.delta, num_iter=config.num_iter)
    logger.info(
        "reweighted l1: %d nonzeros after %d iterations (stable from iteration %d)",
        result.nnz,
        result.num_iter,
        result.plateau_iteration,
    )
    return SparseSolutionReport(baseline=baseline, reweighted=result, config=config)


__all__ = [
    "ReweightedConfig",
    "ReweightedResult",
    "SparseSolutionReport",
    "count_nonzeros",
    "update_weights",
    "weighted_l1_norm",
    "reweighted_l1",
    "l1_baseline",
    "sparse_solution",
]

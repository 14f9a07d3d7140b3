"""
Helpers that turn weighted-L1 minimisation into a linear program.

The sub-problem solved at every reweighting step is

```
    minimize    sum_i w_i |x_i|
    subject to  A x <= b
```

Splitting ``x = p - q`` with ``p, q >= 0`` gives the LP

```
    minimize    w^T p + w^T q
    subject to  [A, -A] [p; q] <= b,   p, q >= 0
```

At an optimal vertex at most one of ``p_i``, ``q_i`` is nonzero whenever
``w_i > 0``, so ``p_i + q_i = |x_i|`` and the two optima coincide. Vertex
solutions also return exact zeros for inactive coordinates, which keeps the
support count insensitive to the threshold.
"""

from __future__ import annotations

import numpy as np

from .core import InequalitySystem, LPProblem


def check_weights(weights: np.ndarray, n: int) -> np.ndarray:
    """
    Validate a weight vector and return it as a float array.

    Raises:
        ValueError: If the length differs from ``n`` or any entry is not a
            finite, strictly positive number.
    """

    w = np.asarray(weights, dtype=float).reshape(-1)
    if w.shape[0] != n:
        raise ValueError(f"Weight vector has length {w.shape[0]}, expected {n}")
    if not np.all(np.isfinite(w)):
        raise ValueError("Weights must be finite")
    if np.any(w <= 0.0):
        raise ValueError("Weights must be strictly positive")
    return w


def weighted_l1_lp(system: InequalitySystem, weights: np.ndarray) -> LPProblem:
    """Build the split-variable LP for ``min sum w_i |x_i|`` s.t. ``A x <= b``."""

    n = system.n_vars
    w = check_weights(weights, n)
    return LPProblem(
        c=np.concatenate([w, w]),
        G=np.hstack([system.A, -system.A]),
        h=np.array(system.b, copy=True),
        lb=np.zeros(2 * n),
        ub=None,
    )


def recover_solution(z: np.ndarray, n: int) -> np.ndarray:
    """Map an LP point ``[p; q]`` back to ``x = p - q``."""

    z = np.asarray(z, dtype=float).reshape(-1)
    if z.shape[0] != 2 * n:
        raise ValueError(f"LP solution has length {z.shape[0]}, expected {2 * n}")
    return z[:n] - z[n:]


__all__ = ["check_weights", "weighted_l1_lp", "recover_solution"]

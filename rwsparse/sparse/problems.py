"""Reproducible random inequality systems for examples and tests."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..convex.core import InequalitySystem


def random_inequality_system(
    m: int,
    n: int,
    seed: Optional[int] = 0,
    margin: float = 1.0,
) -> InequalitySystem:
    """
    Generate a feasible system ``A x <= b`` with Gaussian ``A``.

    A hidden point ``x0 ~ N(0, I)`` is drawn and ``b = A x0 + s`` with slack
    ``s ~ U(0, margin)``, so ``x0`` satisfies every constraint. Because ``b``
    has negative entries with high probability, ``x = 0`` is usually
    infeasible and the L1 solutions are nontrivial.

    Args:
        m: Number of constraints (>= 1).
        n: Number of variables (>= 1).
        seed: Seed for :func:`numpy.random.default_rng`.
        margin: Upper end of the uniform slack (>= 0).

    Returns:
        A new :class:`InequalitySystem`.
    """

    if m < 1 or n < 1:
        raise ValueError(f"m and n must be >= 1, got m={m}, n={n}")
    if margin < 0.0:
        raise ValueError(f"margin must be non-negative, got {margin}")
    rng = np.random.default_rng(seed)
    a_mat = rng.standard_normal((m, n))
    x0 = rng.standard_normal(n)
    b_vec = a_mat @ x0 + margin * rng.random(m)
    return InequalitySystem(A=a_mat, b=b_vec)


__all__ = ["random_inequality_system"]

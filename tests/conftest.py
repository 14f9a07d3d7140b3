"""Pytest configuration and shared fixtures for rwsparse tests.

This module provides:
- A deterministic numpy RNG fixture
- Small inequality systems with known weighted-L1 optima
"""

import os

import numpy as np
import pytest

from rwsparse.convex.core import InequalitySystem


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def two_var_system() -> InequalitySystem:
    """Region ``2.5 x1 + x2 >= 1.5`` and ``x1 + 1.8 x2 >= 2``.

    The plain L1 minimiser is the dense vertex ``(0.2, 1.0)``. With weights
    ``(5, 1)`` the unique minimiser is the sparse vertex ``(0, 1.5)``, which
    is a fixed point of the reweighting.
    """
    A = np.array([[-2.5, -1.0], [-1.0, -1.8]])
    b = np.array([-1.5, -2.0])
    return InequalitySystem(A=A, b=b)


@pytest.fixture
def infeasible_system() -> InequalitySystem:
    """``x <= -1`` and ``x >= 1``."""
    return InequalitySystem(A=np.array([[1.0], [-1.0]]), b=np.array([-1.0, -1.0]))

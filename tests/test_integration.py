"""
Integration tests for the top-level package.

Checks that the public API is importable from ``rwsparse`` and that the
pieces compose into the full sparse-solution workflow.
"""

import numpy as np
import pytest

import rwsparse
from rwsparse import (
    InequalitySystem,
    InfeasibleError,
    ReweightedConfig,
    SolverError,
    Status,
    make_oracle,
    random_inequality_system,
    reweighted_l1,
    sparse_solution,
)


def test_main_package_exports():
    for name in rwsparse.__all__:
        assert hasattr(rwsparse, name), name
    assert isinstance(rwsparse.__version__, str)


@pytest.mark.parametrize("oracle_name", ["linprog", "simplex"])
def test_workflow_on_small_random_instance(oracle_name):
    system = random_inequality_system(30, 12, seed=5)
    report = sparse_solution(
        system, make_oracle(oracle_name), ReweightedConfig(delta=1e-8, num_iter=8)
    )
    assert report.reweighted.max_violation <= 1e-6
    assert report.reweighted.nnz <= report.baseline.nnz
    assert len(report.reweighted.trace) == 8


def test_infeasible_system_aborts_with_status():
    system = InequalitySystem(A=np.array([[1.0, 0.0], [-1.0, 0.0]]), b=np.array([-1.0, -1.0]))
    with pytest.raises(SolverError) as excinfo:
        reweighted_l1(system, make_oracle("linprog"), num_iter=3)
    assert isinstance(excinfo.value, InfeasibleError)
    assert excinfo.value.status is Status.INFEASIBLE

from types import SimpleNamespace

import numpy as np
import pytest

from rwsparse.convex import lp
from rwsparse.convex.core import Status
from rwsparse.convex.lp import linprog_wrapper, simplex


def test_simplex_canonical_example():
    c = np.array([-3.0, -5.0])
    G = np.array([[1.0, 2.0], [3.0, 2.0]])
    h = np.array([4.0, 6.0])
    result = simplex(c, g_mat=G, h_vec=h)
    assert result.status is Status.OPTIMAL
    assert np.allclose(result.x, np.array([1.0, 1.5]), atol=1e-6)
    assert pytest.approx(-10.5, rel=1e-8) == result.fun
    assert np.allclose(result.slack, np.zeros(2), atol=1e-9)
    assert result.primal_residual <= 1e-9


def test_simplex_infeasible():
    c = np.array([1.0])
    G = np.array([[-1.0], [1.0]])
    h = np.array([-1.0, 0.0])
    result = simplex(c, g_mat=G, h_vec=h)
    assert result.status is Status.INFEASIBLE
    assert result.x is None


def test_simplex_negative_rhs_feasible():
    # x >= 2 written as -x <= -2
    c = np.array([1.0])
    res = simplex(c, g_mat=np.array([[-1.0]]), h_vec=np.array([-2.0]))
    assert res.status is Status.OPTIMAL
    assert pytest.approx(2.0, rel=1e-9) == res.x[0]


def test_simplex_trivial_solution_no_constraints():
    c = np.array([2.0, 3.0])
    res = simplex(c)
    assert res.status is Status.OPTIMAL
    assert np.allclose(res.x, np.zeros_like(c))
    assert res.fun == 0.0


def test_simplex_unbounded_without_constraints():
    res = simplex(np.array([-1.0]))
    assert res.status is Status.UNBOUNDED


def test_simplex_unbounded_with_constraints():
    # minimize -x1 subject to x1 - x2 <= 1, x >= 0
    c = np.array([-1.0, 0.0])
    res = simplex(c, g_mat=np.array([[1.0, -1.0]]), h_vec=np.array([1.0]))
    assert res.status is Status.UNBOUNDED


def test_simplex_upper_bounds():
    c = np.array([-1.0])
    res = simplex(c, ub=np.array([1.0]))
    assert res.status is Status.OPTIMAL
    assert pytest.approx(-1.0, rel=1e-8) == res.fun
    assert pytest.approx(1.0, rel=1e-8) == res.x[0]


def test_simplex_free_variable_split_path():
    # minimize free x subject to x >= -3 written as -x <= 3
    c = np.array([1.0])
    G = np.array([[-1.0]])
    h = np.array([3.0])
    res = simplex(c, g_mat=G, h_vec=h, lb=np.array([-np.inf]))
    assert res.status is Status.OPTIMAL
    assert pytest.approx(-3.0, rel=1e-9) == res.x[0]


def test_simplex_shifted_lower_bound():
    c = np.array([1.0, 1.0])
    res = simplex(c, lb=np.array([1.0, -2.0]))
    assert res.status is Status.OPTIMAL
    assert np.allclose(res.x, [1.0, -2.0])


def test_simplex_degenerate_l1_problem_terminates():
    # Split form of min |x1| + |x2| + |x3| with x1 + x2 + x3 >= 1: many ties
    G = np.array([[-1.0, -1.0, -1.0, 1.0, 1.0, 1.0]])
    h = np.array([-1.0])
    c = np.ones(6)
    res = simplex(c, g_mat=G, h_vec=h)
    assert res.status is Status.OPTIMAL
    assert pytest.approx(1.0, rel=1e-9) == res.fun


def test_simplex_invalid_dimension_error():
    c = np.array([1.0, 2.0])
    res = simplex(c, g_mat=np.ones((1, 3)), h_vec=np.ones(1))
    assert res.status is Status.NUMERICAL_ERROR


def test_simplex_requires_g_and_h_together():
    res = simplex(np.array([1.0]), g_mat=np.ones((1, 1)))
    assert res.status is Status.NUMERICAL_ERROR
    assert "together" in res.message


def test_simplex_invalid_lower_bound_length():
    c = np.array([1.0, 2.0])
    res = simplex(c, lb=np.zeros(3))
    assert res.status is Status.NUMERICAL_ERROR


def test_linprog_wrapper_matches_simplex(rng):
    c = rng.random(3) - 0.5
    G = rng.standard_normal((4, 3))
    h = np.ones(4)
    simplex_res = simplex(c, g_mat=np.vstack([G, np.eye(3)]), h_vec=np.concatenate([h, 5 * np.ones(3)]))
    scipy_res = linprog_wrapper(c, g_mat=G, h_vec=h, ub=5.0)
    assert simplex_res.status is Status.OPTIMAL
    assert scipy_res.status is Status.OPTIMAL
    assert pytest.approx(simplex_res.fun, rel=1e-6, abs=1e-9) == scipy_res.fun


def test_linprog_wrapper_reports_infeasible():
    c = np.array([1.0])
    res = linprog_wrapper(c, g_mat=np.array([[-1.0], [1.0]]), h_vec=np.array([-1.0, 0.0]))
    assert res.status is Status.INFEASIBLE
    assert res.x is None


def test_linprog_wrapper_unbounded_has_no_solution():
    res = linprog_wrapper(np.array([-1.0]))
    assert res.status is not Status.OPTIMAL
    assert res.x is None
    assert res.fun is None


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, Status.MAX_ITER),
        (2, Status.INFEASIBLE),
        (3, Status.UNBOUNDED),
        (4, Status.NUMERICAL_ERROR),
    ],
)
def test_linprog_wrapper_maps_scipy_status(monkeypatch, code, expected):
    def fake_linprog(**kwargs):
        del kwargs  # unused
        return SimpleNamespace(status=code, x=None, fun=None, message="stub", nit=7)

    monkeypatch.setattr(lp, "_scipy_linprog", fake_linprog)
    res = linprog_wrapper(np.array([1.0]))
    assert res.status is expected
    assert res.nit == 7
    assert res.message == "stub"


def test_linprog_wrapper_free_variables():
    c = np.array([1.0])
    res = linprog_wrapper(c, g_mat=np.array([[-1.0]]), h_vec=np.array([3.0]), lb=-np.inf)
    assert res.status is Status.OPTIMAL
    assert pytest.approx(-3.0) == res.x[0]
    assert res.primal_residual <= 1e-9


def test_linprog_wrapper_invalid_bounds_raises():
    c = np.array([1.0, 2.0])
    with pytest.raises(ValueError):
        linprog_wrapper(c, lb=np.zeros(3), ub=np.ones(2))

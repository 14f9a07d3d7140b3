import numpy as np
import pytest

from rwsparse.sparse.problems import random_inequality_system


def test_random_system_shapes_and_reproducibility():
    sys_a = random_inequality_system(100, 50, seed=0)
    sys_b = random_inequality_system(100, 50, seed=0)
    assert sys_a.A.shape == (100, 50)
    assert sys_a.b.shape == (100,)
    assert np.array_equal(sys_a.A, sys_b.A)
    assert np.array_equal(sys_a.b, sys_b.b)

    sys_c = random_inequality_system(100, 50, seed=1)
    assert not np.array_equal(sys_a.A, sys_c.A)


def test_random_system_hidden_point_is_feasible():
    m, n, seed = 30, 10, 7
    system = random_inequality_system(m, n, seed=seed)
    # regenerate the hidden point with the same stream
    rng = np.random.default_rng(seed)
    rng.standard_normal((m, n))
    x0 = rng.standard_normal(n)
    assert system.violation(x0) == 0.0


def test_random_system_origin_usually_infeasible():
    system = random_inequality_system(100, 50, seed=0)
    assert system.violation(np.zeros(50)) > 0.0


@pytest.mark.parametrize("m, n, margin", [(0, 5, 1.0), (5, 0, 1.0), (5, 5, -0.1)])
def test_random_system_rejects_bad_arguments(m, n, margin):
    with pytest.raises(ValueError):
        random_inequality_system(m, n, margin=margin)

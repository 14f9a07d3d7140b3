"""
Linear programming routines: revised simplex and a SciPy HiGHS wrapper.

Both routines accept the inequality form

```
    minimize    c^T x
    subject to  G x <= h
                lb <= x <= ub
```

which is exactly what the weighted-L1 sub-problems of the reweighting
heuristic produce. The simplex converts the data to the standard equality
form with nonnegative variables: finite lower bounds shift their variable,
free variables become the difference of two nonnegative variables, and
finite upper bounds become extra inequality rows. A slack column is added per
inequality before the two-phase method runs. Pivoting follows Bland's rule so
that degenerate vertices, which are common in L1 problems, cannot cycle.

Example:
    >>> import numpy as np
    >>> from rwsparse.convex.lp import simplex
    >>> c = np.array([-3.0, -5.0])  # maximize 3x + 5y -> minimize negative
    >>> G = np.array([[1.0, 2.0], [3.0, 2.0]])
    >>> h = np.array([4.0, 6.0])
    >>> result = simplex(c, g_mat=G, h_vec=h, lb=np.zeros(2))
    >>> result.status
    <Status.OPTIMAL: 'optimal'>

References:
    - Nocedal & Wright, *Numerical Optimization*, 2nd edition, 2006.
    - Bertsimas & Tsitsiklis, *Introduction to Linear Optimization*, 1997.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from scipy.optimize import linprog as _scipy_linprog

from ..logging import get_logger
from .core import OptimizeResult, Status

logger = get_logger(__name__)

# scipy.optimize.linprog integer status codes
_SCIPY_STATUS = {
    0: Status.OPTIMAL,
    1: Status.MAX_ITER,
    2: Status.INFEASIBLE,
    3: Status.UNBOUNDED,
    4: Status.NUMERICAL_ERROR,
}


@dataclass
class _StandardFormLP:
    A: np.ndarray
    b: np.ndarray
    c: np.ndarray
    transform: np.ndarray
    shift: np.ndarray
    base_var_count: int
    n_real: int


@dataclass
class _SimplexState:
    x: np.ndarray
    objective: float
    basis: List[int]
    iterations: int
    status: Status
    message: str


def _coerce_bound(vec: Optional[np.ndarray], n: int, fill: float) -> np.ndarray:
    if vec is None:
        return np.full(n, fill)
    arr = np.asarray(vec, dtype=float)
    if arr.ndim == 0:
        return np.full(n, float(arr))
    arr = arr.reshape(-1)
    if arr.shape[0] != n:
        raise ValueError(f"Bound has {arr.shape[0]} entries, expected {n}")
    return arr.copy()


def _convert_to_standard(
    c: np.ndarray,
    g_mat: Optional[np.ndarray],
    h_vec: Optional[np.ndarray],
    lb: Optional[np.ndarray],
    ub: Optional[np.ndarray],
) -> _StandardFormLP:
    n = c.shape[0]
    if n == 0:
        raise ValueError("Linear program must contain at least one variable")
    if (g_mat is None) ^ (h_vec is None):
        raise ValueError("G and h must be provided together")

    lb_vec = _coerce_bound(lb, n, 0.0)
    ub_vec = _coerce_bound(ub, n, np.inf)

    # x = shift + transform @ z with z >= 0
    shift = np.where(np.isfinite(lb_vec), lb_vec, 0.0)
    columns: List[np.ndarray] = []
    for i in range(n):
        unit = np.zeros(n)
        unit[i] = 1.0
        columns.append(unit)
        if not np.isfinite(lb_vec[i]):
            columns.append(-unit)
    transform = np.column_stack(columns)
    base_var_count = transform.shape[1]

    rows: List[np.ndarray] = []
    rhs: List[np.ndarray] = []
    if g_mat is not None:
        g_arr = np.asarray(g_mat, dtype=float)
        h_arr = np.asarray(h_vec, dtype=float).reshape(-1)
        if g_arr.ndim != 2 or g_arr.shape[1] != n:
            raise ValueError(f"G must have shape (m, {n}), got {g_arr.shape}")
        if g_arr.shape[0] != h_arr.shape[0]:
            raise ValueError("G and h dimension mismatch")
        rows.append(g_arr @ transform)
        rhs.append(h_arr - g_arr @ shift)

    for idx in np.flatnonzero(np.isfinite(ub_vec)):
        rows.append(transform[idx, :][np.newaxis, :])
        rhs.append(np.array([ub_vec[idx] - shift[idx]]))

    if rows:
        g_std = np.vstack(rows)
        h_std = np.concatenate(rhs)
    else:
        g_std = np.zeros((0, base_var_count))
        h_std = np.zeros(0)

    m = g_std.shape[0]
    a_std = np.hstack([g_std, np.eye(m)])
    b_std = h_std.copy()
    negative = b_std < 0
    a_std[negative, :] *= -1.0
    b_std[negative] *= -1.0

    c_std = np.concatenate([transform.T @ c, np.zeros(m)])
    return _StandardFormLP(
        A=a_std,
        b=b_std,
        c=c_std,
        transform=transform,
        shift=shift,
        base_var_count=base_var_count,
        n_real=base_var_count + m,
    )


def _failed(n: int, basis: List[int], nit: int, status: Status, message: str) -> _SimplexState:
    return _SimplexState(
        x=np.zeros(n),
        objective=np.inf,
        basis=basis,
        iterations=nit,
        status=status,
        message=message,
    )


def _revised_simplex(
    a_mat: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    basis: List[int],
    n_eligible: int,
    maxiter: int,
    tol: float,
) -> _SimplexState:
    """Revised simplex on ``min c^T z, A z = b, z >= 0`` from a feasible basis.

    Only the first ``n_eligible`` columns may enter the basis.
    """

    n = a_mat.shape[1]
    basis = basis.copy()
    nit = 0
    while nit < maxiter:
        nit += 1
        basis_matrix = a_mat[:, basis]
        try:
            x_basic = np.linalg.solve(basis_matrix, b)
            y = np.linalg.solve(basis_matrix.T, c[basis])
        except np.linalg.LinAlgError:
            return _failed(n, basis, nit, Status.NUMERICAL_ERROR, "Basis matrix singular")
        if np.any(x_basic < -1e3 * tol):
            idx = int(np.argmin(x_basic))
            return _failed(
                n, basis, nit, Status.NUMERICAL_ERROR, f"Infeasible basic solution at row {idx}"
            )
        x_basic = np.maximum(x_basic, 0.0)

        reduced = c[:n_eligible] - a_mat[:, :n_eligible].T @ y
        reduced[np.array([j for j in basis if j < n_eligible], dtype=int)] = 0.0
        candidates = np.flatnonzero(reduced < -tol)
        if candidates.size == 0:
            x_full = np.zeros(n)
            x_full[basis] = x_basic
            return _SimplexState(
                x=x_full,
                objective=float(c @ x_full),
                basis=basis,
                iterations=nit,
                status=Status.OPTIMAL,
                message="Optimal solution reached",
            )
        # Bland's rule: lowest-index improving column enters
        entering = int(candidates[0])

        try:
            direction = np.linalg.solve(basis_matrix, a_mat[:, entering])
        except np.linalg.LinAlgError:
            return _failed(n, basis, nit, Status.NUMERICAL_ERROR, "Direction solve failed")
        positive = direction > tol
        if not np.any(positive):
            return _failed(
                n, basis, nit, Status.UNBOUNDED, "Objective decreases along a feasible ray"
            )
        ratios = np.full_like(x_basic, np.inf)
        ratios[positive] = x_basic[positive] / direction[positive]
        best = np.min(ratios)
        tied = np.flatnonzero(ratios <= best + tol)
        # Bland's rule: among tied rows, the basic variable with lowest index leaves
        leave_pos = int(min(tied, key=lambda pos: basis[pos]))
        basis[leave_pos] = entering
    return _failed(n, basis, nit, Status.MAX_ITER, "Maximum iterations exceeded")


def _drive_out_artificials(
    a_mat: np.ndarray, basis: List[int], n_real: int, tol: float
) -> List[int]:
    """Pivot zero-level artificial columns out of a Phase I basis where possible."""

    basis = basis.copy()
    for pos, col in enumerate(basis):
        if col < n_real:
            continue
        basis_matrix = a_mat[:, basis]
        for j in range(n_real):
            if j in basis:
                continue
            try:
                direction = np.linalg.solve(basis_matrix, a_mat[:, j])
            except np.linalg.LinAlgError:
                break
            if abs(direction[pos]) > tol:
                basis[pos] = j
                break
    return basis


def simplex(
    c: np.ndarray,
    g_mat: Optional[np.ndarray] = None,
    h_vec: Optional[np.ndarray] = None,
    lb: Optional[np.ndarray] = None,
    ub: Optional[np.ndarray] = None,
    maxiter: int = 5000,
    tol: float = 1e-9,
) -> OptimizeResult:
    """
    Solve an inequality-form linear program via a two-phase revised simplex.

    Args:
        c: Cost vector of length ``n``.
        g_mat: Inequality matrix ``G`` with ``n`` columns, or ``None``.
        h_vec: Inequality right-hand side ``h``, or ``None``.
        lb: Lower bounds (default ``0``; ``-np.inf`` marks a free variable).
        ub: Upper bounds (default ``+inf``).
        maxiter: Iteration cap for each phase.
        tol: Pivoting and feasibility tolerance.

    Returns:
        :class:`OptimizeResult`. Dimension errors are reported as
        ``NUMERICAL_ERROR`` rather than raised.
    """

    c = np.asarray(c, dtype=float).reshape(-1)
    try:
        standard = _convert_to_standard(c, g_mat, h_vec, lb, ub)
    except ValueError as exc:
        return OptimizeResult(
            x=None, fun=None, status=Status.NUMERICAL_ERROR, message=str(exc), nit=0
        )

    m = standard.A.shape[0]
    if m == 0:
        if np.any(standard.c[: standard.base_var_count] < -tol):
            return OptimizeResult(
                x=None,
                fun=None,
                status=Status.UNBOUNDED,
                message="Objective decreases without constraints",
                nit=0,
            )
        x = standard.shift.copy()
        return OptimizeResult(
            x=x,
            fun=float(c @ x),
            status=Status.OPTIMAL,
            message="Trivial solution (no constraints)",
            nit=0,
            primal_residual=0.0,
        )

    a_phase = np.hstack([standard.A, np.eye(m)])
    c_phase1 = np.concatenate([np.zeros(standard.n_real), np.ones(m)])
    basis = list(range(standard.n_real, standard.n_real + m))

    phase1 = _revised_simplex(
        a_phase, standard.b, c_phase1, basis, a_phase.shape[1], maxiter, tol
    )
    if phase1.status != Status.OPTIMAL:
        return OptimizeResult(
            x=None,
            fun=None,
            status=phase1.status,
            message=f"Phase I failed: {phase1.message}",
            nit=phase1.iterations,
        )
    if phase1.objective > max(tol, 1e-7 * (1.0 + float(np.max(standard.b)))):
        return OptimizeResult(
            x=None,
            fun=None,
            status=Status.INFEASIBLE,
            message="Problem infeasible (Phase I objective > 0)",
            nit=phase1.iterations,
        )

    start = _drive_out_artificials(a_phase, phase1.basis, standard.n_real, tol)
    c_phase2 = np.concatenate([standard.c, np.zeros(m)])
    phase2 = _revised_simplex(
        a_phase, standard.b, c_phase2, start, standard.n_real, maxiter, tol
    )
    nit_total = phase1.iterations + phase2.iterations
    if phase2.status != Status.OPTIMAL:
        return OptimizeResult(
            x=None,
            fun=None,
            status=phase2.status,
            message=f"Phase II failed: {phase2.message}",
            nit=nit_total,
        )

    z_base = phase2.x[: standard.base_var_count]
    x = standard.shift + standard.transform @ z_base

    slack = None
    primal_residual = 0.0
    if g_mat is not None:
        slack = np.asarray(h_vec, dtype=float).reshape(-1) - np.asarray(g_mat, dtype=float) @ x
        if slack.size:
            primal_residual = float(np.max(np.maximum(-slack, 0.0)))

    logger.debug("simplex converged in %d iterations", nit_total)
    return OptimizeResult(
        x=x,
        fun=float(c @ x),
        status=Status.OPTIMAL,
        message="Optimal solution found",
        nit=nit_total,
        primal_residual=primal_residual,
        slack=slack,
    )


def linprog_wrapper(
    c: np.ndarray,
    g_mat: Optional[np.ndarray] = None,
    h_vec: Optional[np.ndarray] = None,
    lb: Optional[np.ndarray] = None,
    ub: Optional[np.ndarray] = None,
    maxiter: Optional[int] = None,
    tol: float = 1e-9,
    method: str = "highs",
) -> OptimizeResult:
    """
    Solve an inequality-form LP with SciPy's ``linprog`` (HiGHS by default).

    Bounds follow the same convention as :func:`simplex`: ``lb`` defaults to
    ``0`` and ``ub`` to ``+inf``.

    Raises:
        ValueError: If ``lb``/``ub`` do not match the variable dimension.
    """

    c_arr = np.asarray(c, dtype=float).reshape(-1)
    n = c_arr.shape[0]
    lb_vec = _coerce_bound(lb, n, 0.0)
    ub_vec = _coerce_bound(ub, n, np.inf)
    bounds = [
        (None if np.isneginf(lo) else lo, None if np.isposinf(hi) else hi)
        for lo, hi in zip(lb_vec, ub_vec)
    ]

    options = {
        "primal_feasibility_tolerance": tol,
        "dual_feasibility_tolerance": tol,
    }
    if maxiter is not None:
        options["maxiter"] = maxiter

    res = _scipy_linprog(
        c=c_arr,
        A_ub=g_mat,
        b_ub=h_vec,
        bounds=bounds,
        method=method,
        options=options,
    )
    status = _SCIPY_STATUS.get(res.status, Status.NUMERICAL_ERROR)
    optimal = status is Status.OPTIMAL and res.x is not None
    slack = getattr(res, "slack", None) if optimal else None
    primal_residual = None
    if slack is not None and slack.size:
        primal_residual = float(np.max(np.maximum(-slack, 0.0)))
    return OptimizeResult(
        x=np.asarray(res.x, dtype=float) if optimal else None,
        fun=float(res.fun) if optimal else None,
        status=status,
        message=str(res.message),
        nit=int(getattr(res, "nit", 0) or 0),
        primal_residual=primal_residual,
        slack=slack,
    )


__all__ = ["simplex", "linprog_wrapper"]

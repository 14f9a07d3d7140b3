"""
Convex-optimization oracle layer.

This subpackage holds the LP routines (a NumPy revised simplex and a SciPy
HiGHS wrapper), the weighted-L1 to LP reformulation, and the oracle classes
that the reweighting driver calls. Non-optimal solver exits surface as
:class:`SolverError` subclasses.
"""

from . import core, lp, oracle, utils
from .core import (
    InequalitySystem,
    InfeasibleError,
    LPProblem,
    OptimizeResult,
    SolverError,
    SolverFailure,
    Status,
    UnboundedError,
    raise_for_status,
)
from .lp import linprog_wrapper, simplex
from .oracle import (
    CvxpyOracle,
    LinprogOracle,
    SimplexOracle,
    WeightedL1Oracle,
    make_oracle,
)
from .utils import check_weights, recover_solution, weighted_l1_lp

__all__ = [
    "core",
    "lp",
    "oracle",
    "utils",
    # Core types
    "Status",
    "InequalitySystem",
    "LPProblem",
    "OptimizeResult",
    # Errors
    "SolverError",
    "InfeasibleError",
    "UnboundedError",
    "SolverFailure",
    "raise_for_status",
    # LP routines
    "simplex",
    "linprog_wrapper",
    "weighted_l1_lp",
    "recover_solution",
    "check_weights",
    # Oracles
    "WeightedL1Oracle",
    "LinprogOracle",
    "SimplexOracle",
    "CvxpyOracle",
    "make_oracle",
]

"""rwsparse - sparse solutions of linear inequalities by reweighted L1."""

__version__ = "0.1.0"

# Convex oracle layer
from .convex import (
    CvxpyOracle,
    InequalitySystem,
    InfeasibleError,
    LinprogOracle,
    LPProblem,
    OptimizeResult,
    SimplexOracle,
    SolverError,
    SolverFailure,
    Status,
    UnboundedError,
    WeightedL1Oracle,
    linprog_wrapper,
    make_oracle,
    simplex,
    weighted_l1_lp,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Reweighted-L1 heuristic
from .sparse import (
    ReweightedConfig,
    ReweightedResult,
    SparseSolutionReport,
    count_nonzeros,
    l1_baseline,
    random_inequality_system,
    reweighted_l1,
    sparse_solution,
    update_weights,
    weighted_l1_norm,
)

__all__ = [
    "__version__",
    # Convex oracle layer
    "Status",
    "InequalitySystem",
    "LPProblem",
    "OptimizeResult",
    "SolverError",
    "InfeasibleError",
    "UnboundedError",
    "SolverFailure",
    "simplex",
    "linprog_wrapper",
    "weighted_l1_lp",
    "WeightedL1Oracle",
    "LinprogOracle",
    "SimplexOracle",
    "CvxpyOracle",
    "make_oracle",
    # Reweighted-L1 heuristic
    "ReweightedConfig",
    "ReweightedResult",
    "SparseSolutionReport",
    "count_nonzeros",
    "update_weights",
    "weighted_l1_norm",
    "reweighted_l1",
    "l1_baseline",
    "sparse_solution",
    "random_inequality_system",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]

"""Sparse solutions of linear inequalities via iterative reweighted L1."""

from . import problems, reweighted
from .problems import random_inequality_system
from .reweighted import (
    ReweightedConfig,
    ReweightedResult,
    SparseSolutionReport,
    count_nonzeros,
    l1_baseline,
    reweighted_l1,
    sparse_solution,
    update_weights,
    weighted_l1_norm,
)

__all__ = [
    "problems",
    "reweighted",
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
]

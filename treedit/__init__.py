"""
Tree edit distance module.

This module computes the edit distance between two rooted ordered trees with
the Zhang-Shasha algorithm, and one optimal edit script realizing it.
Four operations are used: Remove, Insert, Update, Match.

Distances are computed with given remove, insert and update cost functions.
"""

from .annotation import AnnotatedTree, annotate
from .costs import (
    UNIT_COSTS,
    CostModel,
    checked_cost,
    equality_cost,
    script_cost,
    unit_cost,
)
from .distance import TreeEditDistance, tree_edit_distance
from .engine import ForestDistanceEngine, ScriptArena, TreeDistances, compute_tree_distances
from .errors import (
    CostOverflowError,
    InvalidTreeError,
    KeyrootOrderError,
    MissingArgumentError,
    NegativeCostError,
    TreeEditError,
)
from .operations import Operation, OperationType
from .trees import Tree, children_of, tree_from_children, tree_from_edges, vertices

__all__ = [
    # Operations
    "Operation",
    "OperationType",
    # Trees
    "Tree",
    "vertices",
    "tree_from_edges",
    "tree_from_children",
    "children_of",
    # Annotation
    "AnnotatedTree",
    "annotate",
    # Costs
    "CostModel",
    "UNIT_COSTS",
    "unit_cost",
    "equality_cost",
    "checked_cost",
    "script_cost",
    # Distance
    "TreeEditDistance",
    "tree_edit_distance",
    "ForestDistanceEngine",
    "ScriptArena",
    "TreeDistances",
    "compute_tree_distances",
    # Errors
    "TreeEditError",
    "MissingArgumentError",
    "InvalidTreeError",
    "NegativeCostError",
    "KeyrootOrderError",
    "CostOverflowError",
]

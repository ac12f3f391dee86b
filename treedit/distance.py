"""
Tree edit distance between two rooted ordered trees.

Usage:
    >>> tree1 = tree_from_edges([("f", "d"), ("f", "e"), ("d", "a")])
    >>> tree2 = tree_from_edges([("f", "d"), ("f", "e")])
    >>> ted = TreeEditDistance(tree1, "f", tree2, "f")
    >>> ted.distance()
    1

The computation runs on first use and its result is kept for the lifetime of
the instance.
"""

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Any, Generic, TypeVar

from .annotation import AnnotatedTree, annotate
from .costs import UNIT_COSTS, CostModel, equality_cost, unit_cost
from .engine import TreeDistances, compute_tree_distances
from .errors import MissingArgumentError
from .operations import Operation
from .trees import Tree

logger = logging.getLogger(__name__)

V1 = TypeVar("V1", bound=Hashable)
V2 = TypeVar("V2", bound=Hashable)


class TreeEditDistance(Generic[V1, V2]):
    """
    Zhang-Shasha edit distance from (tree1, root1) to (tree2, root2).

    Args:
        tree1, tree2: Ordered adjacencies (see treedit.trees).
        root1, root2: Roots of the two trees.
        remove_cost: Cost of removing a vertex of tree1.
        insert_cost: Cost of inserting a vertex of tree2.
        update_cost: Cost of turning a vertex of tree1 into one of tree2.

    Raises:
        MissingArgumentError: If any argument is None.
    """

    def __init__(
        self,
        tree1: Tree[V1],
        root1: V1,
        tree2: Tree[V2],
        root2: V2,
        remove_cost: Callable[[V1], int] = unit_cost,
        insert_cost: Callable[[V2], int] = unit_cost,
        update_cost: Callable[[V1, V2], int] = equality_cost,
    ):
        for name, value in (
            ("first input tree", tree1),
            ("first input root", root1),
            ("second input tree", tree2),
            ("second input root", root2),
        ):
            if value is None:
                raise MissingArgumentError(f"{name} cannot be None")

        self.tree1 = tree1
        self.root1 = root1
        self.tree2 = tree2
        self.root2 = root2
        self.costs: CostModel[V1, V2] = CostModel(remove_cost, insert_cost, update_cost)

        self._lock = threading.Lock()
        self._annotations: tuple[AnnotatedTree[V1], AnnotatedTree[V2]] | None = None
        self._result: TreeDistances[V1, V2] | None = None
        self._script: tuple[Operation, ...] | None = None

    @classmethod
    def with_costs(
        cls,
        tree1: Tree[V1],
        root1: V1,
        tree2: Tree[V2],
        root2: V2,
        costs: CostModel[V1, V2],
    ) -> "TreeEditDistance[V1, V2]":
        if costs is None:
            raise MissingArgumentError("cost model cannot be None")
        return cls(tree1, root1, tree2, root2, costs.remove, costs.insert, costs.update)

    def _compute(self) -> TreeDistances[V1, V2]:
        result = self._result
        if result is not None:
            return result
        with self._lock:
            if self._result is None:
                a = annotate(self.tree1, self.root1)
                b = annotate(self.tree2, self.root2)
                distances = compute_tree_distances(a, b, self.costs)
                script = distances.whole_script()
                logger.debug(
                    f"Tree edit distance {distances.whole_distance()} "
                    f"with {len(script)} operations"
                )
                # Published last: readers outside the lock only see complete results
                self._annotations = (a, b)
                self._script = script
                self._result = distances
            return self._result

    @property
    def annotations(self) -> tuple[AnnotatedTree[V1], AnnotatedTree[V2]]:
        self._compute()
        assert self._annotations is not None
        return self._annotations

    def distance(self) -> int:
        """Minimum cost of transforming the first tree into the second."""
        return self._compute().whole_distance()

    def edit_script(self) -> tuple[Operation, ...]:
        """One optimal edit script, in application order."""
        self._compute()
        assert self._script is not None
        return self._script

    def subtree_distance(self, source: V1, target: V2) -> int:
        """Distance between the subtree rooted at source and the one rooted at target."""
        distances = self._compute()
        a, b = self.annotations
        return distances.distance(a.post_order_index[source], b.post_order_index[target])

    def subtree_edit_script(self, source: V1, target: V2) -> tuple[Operation, ...]:
        distances = self._compute()
        a, b = self.annotations
        return distances.script(a.post_order_index[source], b.post_order_index[target])


def tree_edit_distance(
    tree1: Tree[Any],
    root1: Any,
    tree2: Tree[Any],
    root2: Any,
    costs: CostModel = UNIT_COSTS,
) -> tuple[int, tuple[Operation, ...]]:
    """
    Computes the Zhang-Shasha tree edit distance.

    Args:
        tree1: First tree, as an ordered adjacency.
        root1: Root of the first tree.
        tree2: Second tree, as an ordered adjacency.
        root2: Root of the second tree.
        costs: Remove, insert and update cost functions.

    Returns:
        Tuple of (distance, edit script).
    """
    ted = TreeEditDistance.with_costs(tree1, root1, tree2, root2, costs)
    return ted.distance(), ted.edit_script()

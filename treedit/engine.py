"""
Zhang-Shasha forest and tree distance tables.

For every pair of keyroots (i, j), taken in increasing postorder, a local
forest distance table is filled over the leftmost-path slices ending at i
and j. Cells where both slice prefixes are whole subtrees are tree
distances: they are written once into the global tables. Every other cell
reuses a tree distance written by an earlier keyroot pair.

Edit scripts are never copied per cell. Each cell stores a reference into a
ScriptArena: either a back-pointer to its predecessor plus one appended
operation, or the concatenation of two finished scripts. Full scripts are
expanded on demand.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from .annotation import AnnotatedTree
from .constants import EMPTY_SCRIPT, MAX_COST, UNSET
from .costs import CostModel, checked_cost
from .errors import CostOverflowError, KeyrootOrderError
from .operations import Operation

logger = logging.getLogger(__name__)

V1 = TypeVar("V1", bound=Hashable)
V2 = TypeVar("V2", bound=Hashable)


class ScriptArena(Generic[V1, V2]):
    """
    Append-only storage of edit scripts sharing their prefixes.

    A reference is an index into the arena (EMPTY_SCRIPT for the empty
    script). Entry k is either (prefix, operation): the script prefix
    followed by one operation, or (prefix, suffix): two scripts joined.
    """

    def __init__(self) -> None:
        self._prefix: list[int] = []
        self._operation: list[Operation | None] = []
        self._suffix: list[int] = []

    def __len__(self) -> int:
        return len(self._prefix)

    def append(self, prefix: int, operation: Operation) -> int:
        self._prefix.append(int(prefix))
        self._operation.append(operation)
        self._suffix.append(EMPTY_SCRIPT)
        return len(self._prefix) - 1

    def concat(self, prefix: int, suffix: int) -> int:
        prefix, suffix = int(prefix), int(suffix)
        if suffix == EMPTY_SCRIPT:
            return prefix
        if prefix == EMPTY_SCRIPT:
            return suffix
        self._prefix.append(prefix)
        self._operation.append(None)
        self._suffix.append(suffix)
        return len(self._prefix) - 1

    def expand(self, reference: int) -> tuple[Operation, ...]:
        """Rebuilds the script behind a reference, in order."""
        script: list[Operation] = []
        stack: list[int | Operation] = [int(reference)]
        while stack:
            item = stack.pop()
            if isinstance(item, Operation):
                script.append(item)
                continue
            if item == EMPTY_SCRIPT:
                continue
            operation = self._operation[item]
            # Pushed in reverse: the prefix is emitted first
            if operation is None:
                stack.append(self._suffix[item])
            else:
                stack.append(operation)
            stack.append(self._prefix[item])
        return tuple(script)


@dataclass(frozen=True)
class TreeDistances(Generic[V1, V2]):
    """Tree distances and scripts for every pair of subtrees, by postorder index."""

    treedists: np.ndarray
    scripts: np.ndarray
    arena: ScriptArena[V1, V2]

    @property
    def shape(self) -> tuple[int, int]:
        return self.treedists.shape

    def distance(self, i: int, j: int) -> int:
        value = self.treedists[i, j]
        if value == UNSET:
            raise KeyrootOrderError(f"Tree distance ({i}, {j}) was never computed")
        return int(value)

    def script(self, i: int, j: int) -> tuple[Operation, ...]:
        self.distance(i, j)
        return self.arena.expand(self.scripts[i, j])

    def whole_distance(self) -> int:
        n1, n2 = self.shape
        return self.distance(n1 - 1, n2 - 1)

    def whole_script(self) -> tuple[Operation, ...]:
        n1, n2 = self.shape
        return self.script(n1 - 1, n2 - 1)


class ForestDistanceEngine(Generic[V1, V2]):
    """
    Fills the global tree distance tables of two annotated trees.

    Tie-break, for reproducible scripts: removal first, then insertion, then
    the diagonal (or subtree) branch. A diagonal step that leaves the
    distance unchanged is a Match, otherwise an Update.
    """

    def __init__(
        self,
        a: AnnotatedTree[V1],
        b: AnnotatedTree[V2],
        costs: CostModel[V1, V2],
    ):
        self.a = a
        self.b = b
        self.costs = costs
        self.remove_costs = [
            checked_cost(costs.remove(vertex), "remove cost") for vertex in a.postorder
        ]
        self.insert_costs = [
            checked_cost(costs.insert(vertex), "insert cost") for vertex in b.postorder
        ]
        total = sum(self.remove_costs) + sum(self.insert_costs)
        if total > MAX_COST:
            raise CostOverflowError(
                f"Removal and insertion costs sum to {total}, above 2**61"
            )
        self.treedists = np.full((len(a), len(b)), UNSET, dtype=np.int64)
        self.scripts = np.full((len(a), len(b)), EMPTY_SCRIPT, dtype=np.int64)
        self.arena: ScriptArena[V1, V2] = ScriptArena()

    def run(self) -> TreeDistances[V1, V2]:
        for i in self.a.keyroot_indices:
            for j in self.b.keyroot_indices:
                self.treedist(i, j)
        logger.debug(
            f"Filled {len(self.a.keyroot_indices) * len(self.b.keyroot_indices)} "
            f"keyroot pairs, arena holds {len(self.arena)} script entries"
        )
        return TreeDistances(self.treedists, self.scripts, self.arena)

    def _update_cost(self, node1: int, node2: int) -> int:
        return checked_cost(
            self.costs.update(self.a.postorder[node1], self.b.postorder[node2]),
            "update cost",
        )

    def _read(self, node1: int, node2: int) -> tuple[int, int]:
        value = self.treedists[node1, node2]
        if value == UNSET:
            raise KeyrootOrderError(
                f"Tree distance ({node1}, {node2}) read before it was computed"
            )
        return int(value), int(self.scripts[node1, node2])

    def _write(self, node1: int, node2: int, value: int, script: int) -> None:
        if self.treedists[node1, node2] != UNSET:
            raise KeyrootOrderError(
                f"Tree distance ({node1}, {node2}) computed twice"
            )
        self.treedists[node1, node2] = value
        self.scripts[node1, node2] = script

    def treedist(self, i: int, j: int) -> None:
        """Fills the forest distance table of keyroots i and j."""
        Al = self.a.lmld_indices
        Bl = self.b.lmld_indices
        An = self.a.postorder
        Bn = self.b.postorder
        arena = self.arena

        # Local tables cover the slices Al[i]..i and Bl[j]..j, plus the empty forest
        m = i - Al[i] + 2
        n = j - Bl[j] + 2
        # Adding an offset turns a local index into a postorder index
        ioff = Al[i] - 1
        joff = Bl[j] - 1

        fd = np.zeros((m, n), dtype=np.int64)
        partial = np.full((m, n), EMPTY_SCRIPT, dtype=np.int64)

        for x in range(1, m):
            node1 = x + ioff
            fd[x, 0] = fd[x - 1, 0] + self.remove_costs[node1]
            partial[x, 0] = arena.append(partial[x - 1, 0], Operation.remove(An[node1]))

        for y in range(1, n):
            node2 = y + joff
            fd[0, y] = fd[0, y - 1] + self.insert_costs[node2]
            partial[0, y] = arena.append(partial[0, y - 1], Operation.insert(Bn[node2]))

        for x in range(1, m):
            node1 = x + ioff
            for y in range(1, n):
                node2 = y + joff
                remove = fd[x - 1, y] + self.remove_costs[node1]
                insert = fd[x, y - 1] + self.insert_costs[node2]

                if Al[i] == Al[node1] and Bl[j] == Bl[node2]:
                    # Both prefixes are whole subtrees: forest distance is tree distance
                    diagonal = fd[x - 1, y - 1]
                    best = min(remove, insert, diagonal + self._update_cost(node1, node2))
                    if remove == best:
                        script = arena.append(
                            partial[x - 1, y], Operation.remove(An[node1])
                        )
                    elif insert == best:
                        script = arena.append(
                            partial[x, y - 1], Operation.insert(Bn[node2])
                        )
                    elif best == diagonal:
                        script = arena.append(
                            partial[x - 1, y - 1], Operation.match(An[node1], Bn[node2])
                        )
                    else:
                        script = arena.append(
                            partial[x - 1, y - 1], Operation.update(An[node1], Bn[node2])
                        )
                    fd[x, y] = best
                    partial[x, y] = script
                    self._write(node1, node2, int(best), script)
                else:
                    # Forests preceding the subtrees of node1 and node2, in local indices
                    p = Al[node1] - 1 - ioff
                    q = Bl[node2] - 1 - joff
                    subtree_distance, subtree_script = self._read(node1, node2)
                    best = min(remove, insert, fd[p, q] + subtree_distance)
                    if remove == best:
                        script = arena.append(
                            partial[x - 1, y], Operation.remove(An[node1])
                        )
                    elif insert == best:
                        script = arena.append(
                            partial[x, y - 1], Operation.insert(Bn[node2])
                        )
                    else:
                        script = arena.concat(partial[p, q], subtree_script)
                    fd[x, y] = best
                    partial[x, y] = script


def compute_tree_distances(
    a: AnnotatedTree[V1], b: AnnotatedTree[V2], costs: CostModel[V1, V2]
) -> TreeDistances[V1, V2]:
    """Runs the Zhang-Shasha recursion over two annotated trees."""
    return ForestDistanceEngine(a, b, costs).run()

"""
Postorder annotation of an ordered tree.

Everything the Zhang-Shasha recursion needs is derived once per input tree:

    postorder        - vertices, children before parents, root last
    post_order_index - vertex -> position in postorder
    parents          - postorder index of each vertex's parent (-1 for the root)
    lmld_indices     - postorder index of each vertex's leftmost leaf descendant
    keyroot_indices  - increasing postorder indices of the keyroots

A keyroot is a vertex such that no later vertex in postorder shares its
leftmost leaf descendant: the root, and every child that is not the first
child of its parent.
"""

import logging
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from functools import cached_property
from typing import Generic, TypeVar

from .errors import InvalidTreeError
from .trees import Tree, _children, vertices

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Hashable)


@dataclass(frozen=True)
class AnnotatedTree(Generic[V]):
    postorder: tuple[V, ...]
    post_order_index: Mapping[V, int]
    parents: tuple[int, ...]
    lmld_indices: tuple[int, ...]
    keyroot_indices: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.postorder)

    @property
    def root(self) -> V:
        return self.postorder[-1]

    @cached_property
    def lmld(self) -> dict[V, V]:
        """Leftmost leaf descendant of every vertex."""
        return {
            vertex: self.postorder[self.lmld_indices[index]]
            for index, vertex in enumerate(self.postorder)
        }

    @cached_property
    def lmlds(self) -> tuple[V, ...]:
        """Leftmost leaf descendants, aligned with postorder."""
        return tuple(self.postorder[index] for index in self.lmld_indices)

    @cached_property
    def keyroots(self) -> frozenset[V]:
        return frozenset(self.postorder[index] for index in self.keyroot_indices)


def annotate(tree: Tree[V], root: V) -> AnnotatedTree[V]:
    """
    Annotates a tree for the Zhang-Shasha recursion.

    The traversal uses an explicit stack: children are pushed in sibling
    order and popped last-in first-out, so the discovery order is a
    right-to-left preorder and its reverse is the left-to-right postorder.

    Args:
        tree: Ordered adjacency of the tree (see treedit.trees).
        root: Root vertex.

    Returns:
        The immutable AnnotatedTree.

    Raises:
        InvalidTreeError: If root is not a vertex, if a cycle is reachable,
            or if some vertex is not reachable from root.
    """
    all_vertices = vertices(tree)
    if root not in set(all_vertices):
        raise InvalidTreeError(f"Root {root!r} is not a vertex of the tree")

    # Discovery order and, for each discovered vertex, its parent's discovery index
    discovered: list[V] = []
    discovered_parent: list[int] = []
    seen = {root}
    stack: list[tuple[V, int]] = [(root, -1)]
    while stack:
        current, parent_index = stack.pop()
        index = len(discovered)
        discovered.append(current)
        discovered_parent.append(parent_index)
        is_root = parent_index < 0
        parent_vertex = None if is_root else discovered[parent_index]
        for child in _children(tree, current, parent_vertex, seen, is_root):
            stack.append((child, index))

    n = len(discovered)
    if n != len(all_vertices):
        missing = [vertex for vertex in all_vertices if vertex not in seen]
        raise InvalidTreeError(
            f"{len(missing)} vertices are not reachable from root {root!r}: "
            f"{missing[:10]}"
        )

    # Reversing the discovery order maps discovery index d to postorder n-1-d
    postorder = tuple(reversed(discovered))
    parents: list[int] = []
    for k in range(n):
        parent_discovery = discovered_parent[n - 1 - k]
        parents.append(-1 if parent_discovery < 0 else n - 1 - parent_discovery)

    # The first child of a vertex is the first of its children met in postorder
    lmld = [-1] * n
    for k in range(n):
        if lmld[k] < 0:
            lmld[k] = k
        parent = parents[k]
        if parent >= 0 and lmld[parent] < 0:
            lmld[parent] = lmld[k]

    keyroots = tuple(
        k for k in range(n) if parents[k] < 0 or lmld[k] != lmld[parents[k]]
    )
    post_order_index = {vertex: k for k, vertex in enumerate(postorder)}

    logger.debug(
        f"Annotated tree rooted at {root!r}: {n} vertices, {len(keyroots)} keyroots"
    )
    return AnnotatedTree(
        postorder=postorder,
        post_order_index=post_order_index,
        parents=tuple(parents),
        lmld_indices=tuple(lmld),
        keyroot_indices=keyroots,
    )

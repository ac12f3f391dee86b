"""
Ordered tree inputs.

A tree is given as a mapping from each vertex to its neighbours, listed in
sibling order. Two shapes are accepted:

    directed   - parent -> ordered children, leaves may be omitted
    undirected - vertex -> ordered incident neighbours, parent included

The sibling order of the children is part of the input: two trees that only
differ by the order of some siblings are different ordered trees.

Functions:
    vertices(tree)          - All vertices, in first-seen order
    tree_from_edges(edges)  - Undirected adjacency in edge insertion order
    tree_from_children(map) - Normalized directed adjacency
    children_of(tree, root) - Children of every vertex, oriented from root
"""

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import TypeVar

from .errors import InvalidTreeError

V = TypeVar("V", bound=Hashable)

Tree = Mapping[V, Sequence[V]]


def vertices(tree: Tree[V]) -> tuple[V, ...]:
    """Returns every vertex of the tree: the keys and all listed neighbours."""
    seen: dict[V, None] = {}
    for vertex, neighbours in tree.items():
        seen.setdefault(vertex)
        for neighbour in neighbours:
            seen.setdefault(neighbour)
    return tuple(seen)


def tree_from_edges(
    edges: Iterable[tuple[V, V]], extra_vertices: Iterable[V] = ()
) -> dict[V, tuple[V, ...]]:
    """
    Builds an undirected ordered adjacency from an edge list.

    The neighbours of a vertex are listed in the order their edges were
    given, the way a graph enumerates the edges touching a vertex.

    Args:
        edges: (u, v) pairs.
        extra_vertices: Vertices to declare even without edges (e.g. a
            single-vertex tree).

    Returns:
        dict mapping each vertex to its ordered neighbours.
    """
    adjacency: dict[V, list[V]] = {}
    for vertex in extra_vertices:
        adjacency.setdefault(vertex, [])
    for u, v in edges:
        adjacency.setdefault(u, []).append(v)
        adjacency.setdefault(v, []).append(u)
    return {vertex: tuple(neighbours) for vertex, neighbours in adjacency.items()}


def tree_from_children(children: Mapping[V, Sequence[V]]) -> dict[V, tuple[V, ...]]:
    """Copies a parent -> children mapping, adding every leaf as a key."""
    return {vertex: tuple(children.get(vertex, ())) for vertex in vertices(children)}


def children_of(tree: Tree[V], root: V) -> dict[V, tuple[V, ...]]:
    """
    Orients the tree from its root.

    Returns:
        dict mapping each reachable vertex to its ordered children.

    Raises:
        InvalidTreeError: If the root is not a vertex or a cycle is reachable.
    """
    if root not in set(vertices(tree)):
        raise InvalidTreeError(f"Root {root!r} is not a vertex of the tree")

    oriented: dict[V, tuple[V, ...]] = {}
    stack: list[tuple[V, V | None, bool]] = [(root, None, True)]
    seen = {root}
    while stack:
        current, parent, is_root = stack.pop()
        kids = list(_children(tree, current, parent, seen, is_root))
        oriented[current] = tuple(kids)
        stack.extend((kid, current, False) for kid in kids)
    return oriented


def _children(
    tree: Tree[V], vertex: V, parent: V | None, seen: set[V], is_root: bool
) -> Iterable[V]:
    """
    Yields the children of vertex in sibling order, marking them as seen.

    The parent is skipped once, wherever it sits in the neighbour list. Any
    other neighbour that was already seen closes a cycle. The root has no
    parent: is_root tells it apart from a vertex whose parent is None.
    """
    parent_skipped = is_root
    for neighbour in tree.get(vertex, ()):
        if not parent_skipped and neighbour == parent:
            parent_skipped = True
            continue
        if neighbour in seen:
            raise InvalidTreeError(
                f"Vertex {neighbour!r} is reached twice from {vertex!r}: "
                "the input contains a cycle"
            )
        seen.add(neighbour)
        yield neighbour

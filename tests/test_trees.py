"""Tests for treedit/trees.py"""

import pytest

from treedit import InvalidTreeError, children_of, tree_from_children, tree_from_edges, vertices


class TestTreeFromEdges:
    def test_neighbours_follow_edge_order(self):
        tree = tree_from_edges([("f", "d"), ("f", "e"), ("d", "a"), ("d", "c")])
        assert tree["f"] == ("d", "e")
        assert tree["d"] == ("f", "a", "c")
        assert tree["a"] == ("d",)

    def test_single_vertex(self):
        tree = tree_from_edges([], extra_vertices=["x"])
        assert tree == {"x": ()}

    def test_empty(self):
        assert tree_from_edges([]) == {}


class TestTreeFromChildren:
    def test_leaves_become_keys(self):
        tree = tree_from_children({"r": ["a", "b"], "a": ["c"]})
        assert tree == {"r": ("a", "b"), "a": ("c",), "b": (), "c": ()}


def test_vertices_first_seen_order():
    assert vertices({"r": ["b", "a"], "b": ["c"]}) == ("r", "b", "a", "c")


class TestChildrenOf:
    def test_orients_undirected_adjacency(self):
        tree = tree_from_edges([("c", "d"), ("f", "c"), ("f", "e")])
        assert children_of(tree, "f") == {"f": ("c", "e"), "c": ("d",), "d": (), "e": ()}

    def test_other_root(self):
        tree = tree_from_edges([("a", "b"), ("b", "c")])
        assert children_of(tree, "c") == {"c": ("b",), "b": ("a",), "a": ()}

    def test_unknown_root(self):
        with pytest.raises(InvalidTreeError, match="not a vertex"):
            children_of({"a": ["b"]}, "z")

    def test_cycle(self):
        with pytest.raises(InvalidTreeError, match="cycle"):
            children_of({"a": ["b"], "b": ["c"], "c": ["a"]}, "a")

    def test_none_vertex_next_to_root(self):
        tree = {"r": (None,), None: ("r", "y"), "y": (None,)}
        assert children_of(tree, "r") == {"r": (None,), None: ("y",), "y": ()}

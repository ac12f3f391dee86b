"""Tests for treedit/engine.py"""

import pytest

from treedit import (
    UNIT_COSTS,
    CostModel,
    ForestDistanceEngine,
    KeyrootOrderError,
    Operation,
    ScriptArena,
    TreeDistances,
    annotate,
    compute_tree_distances,
)
from treedit.constants import EMPTY_SCRIPT, UNSET


class TestScriptArena:
    def test_empty(self):
        arena = ScriptArena()
        assert arena.expand(EMPTY_SCRIPT) == ()
        assert len(arena) == 0

    def test_shared_prefix(self):
        arena = ScriptArena()
        first = arena.append(EMPTY_SCRIPT, Operation.remove("a"))
        left = arena.append(first, Operation.insert("b"))
        right = arena.append(first, Operation.insert("c"))
        assert arena.expand(left) == (Operation.remove("a"), Operation.insert("b"))
        assert arena.expand(right) == (Operation.remove("a"), Operation.insert("c"))
        assert len(arena) == 3

    def test_concat(self):
        arena = ScriptArena()
        prefix = arena.append(EMPTY_SCRIPT, Operation.match("a", "a"))
        suffix = arena.append(EMPTY_SCRIPT, Operation.remove("b"))
        suffix = arena.append(suffix, Operation.insert("c"))
        joined = arena.concat(prefix, suffix)
        assert arena.expand(joined) == (
            Operation.match("a", "a"),
            Operation.remove("b"),
            Operation.insert("c"),
        )
        tail = arena.append(joined, Operation.match("r", "r"))
        assert arena.expand(tail)[-1] == Operation.match("r", "r")
        assert len(arena.expand(tail)) == 4

    def test_concat_with_empty(self):
        arena = ScriptArena()
        ref = arena.append(EMPTY_SCRIPT, Operation.remove("a"))
        assert arena.concat(EMPTY_SCRIPT, ref) == ref
        assert arena.concat(ref, EMPTY_SCRIPT) == ref
        assert arena.concat(EMPTY_SCRIPT, EMPTY_SCRIPT) == EMPTY_SCRIPT

    def test_long_chain(self):
        arena = ScriptArena()
        ref = EMPTY_SCRIPT
        for k in range(20000):
            ref = arena.append(ref, Operation.insert(k))
        script = arena.expand(ref)
        assert len(script) == 20000
        assert script[0] == Operation.insert(0)


class TestTieBreaks:
    def test_update_then_match(self):
        a = annotate({"a": ["b"]}, "a")
        b = annotate({"a": ["c"]}, "a")
        distances = compute_tree_distances(a, b, UNIT_COSTS)
        assert distances.whole_distance() == 1
        assert distances.whole_script() == (
            Operation.update("b", "c"),
            Operation.match("a", "a"),
        )

    def test_remove_preferred_over_insert(self):
        a = annotate({"x": ()}, "x")
        b = annotate({"y": ()}, "y")
        costs = CostModel(update=lambda v, w: 5)
        distances = compute_tree_distances(a, b, costs)
        assert distances.whole_distance() == 2
        assert distances.whole_script() == (
            Operation.insert("y"),
            Operation.remove("x"),
        )

    def test_removed_leaf(self):
        a = annotate({"a": ["b", "c"]}, "a")
        b = annotate({"a": ["b"]}, "a")
        distances = compute_tree_distances(a, b, UNIT_COSTS)
        assert distances.whole_distance() == 1
        assert distances.whole_script() == (
            Operation.match("b", "b"),
            Operation.remove("c"),
            Operation.match("a", "a"),
        )

    def test_subtree_branch_concatenates(self):
        a = annotate({"a": ["b", "c"]}, "a")
        b = annotate({"a": ["b", "c"]}, "a")
        distances = compute_tree_distances(a, b, UNIT_COSTS)
        assert distances.whole_script() == (
            Operation.match("b", "b"),
            Operation.match("c", "c"),
            Operation.match("a", "a"),
        )


class TestGlobalTables:
    def test_every_pair_is_computed(self):
        a = annotate({"f": ["d", "e"], "d": ["a", "c"], "c": ["b"]}, "f")
        b = annotate({"f": ["c", "e"], "c": ["d"], "d": ["a", "b"]}, "f")
        distances = compute_tree_distances(a, b, UNIT_COSTS)
        assert distances.shape == (6, 6)
        assert (distances.treedists != UNSET).all()

    def test_subtree_distances(self):
        a = annotate({"a": ["b", "c"]}, "a")
        b = annotate({"a": ["b"]}, "a")
        distances = compute_tree_distances(a, b, UNIT_COSTS)
        # postorder: a = (b, c, a), b = (b, a)
        assert distances.distance(0, 0) == 0
        assert distances.distance(0, 1) == 1
        assert distances.distance(1, 0) == 1
        assert distances.distance(1, 1) == 2
        assert distances.distance(2, 0) == 2
        assert distances.script(1, 1) == (
            Operation.update("c", "b"),
            Operation.insert("a"),
        )

    def test_read_before_write(self):
        a = annotate({"a": ["b", "c"]}, "a")
        engine = ForestDistanceEngine(a, a, UNIT_COSTS)
        with pytest.raises(KeyrootOrderError, match="before"):
            engine.treedist(2, 2)

    def test_write_twice(self):
        a = annotate({"a": ["b", "c"]}, "a")
        engine = ForestDistanceEngine(a, a, UNIT_COSTS)
        engine.run()
        with pytest.raises(KeyrootOrderError, match="twice"):
            engine.treedist(2, 2)

    def test_unset_cell(self):
        a = annotate({"a": ["b", "c"]}, "a")
        engine = ForestDistanceEngine(a, a, UNIT_COSTS)
        distances = TreeDistances(engine.treedists, engine.scripts, engine.arena)
        with pytest.raises(KeyrootOrderError, match="never"):
            distances.whole_distance()

"""Tests for the BST, B-Tree, skip list, trie and segment tree tracers."""

import pytest

from algorithms.btree import ORDER, btree
from algorithms.segment_tree import INITIAL_ARRAY, segment_tree
from algorithms.skip_list import INITIAL_NODES, random_levels, skip_list
from algorithms.tree_set import in_order, tree_set
from algorithms.trie import trie


def _ops(steps):
    return [s.operation for s in steps]


# ── BST ──────────────────────────────────────────────────────────────

def _bst_ok(node, lo=float("-inf"), hi=float("inf")):
    if node is None:
        return True
    return (
        lo < node["value"] < hi
        and _bst_ok(node["left"], lo, node["value"])
        and _bst_ok(node["right"], node["value"], hi)
    )


class TestTreeSet:
    def setup_method(self):
        self.steps = list(tree_set())

    def test_final_in_order(self):
        final = self.steps[-1].snapshot
        assert in_order(final["root"]) == [20, 30, 35, 40, 50, 60, 70, 80]
        assert final["size"] == 8

    def test_ordering_after_every_insert(self):
        for step in self.steps:
            if step.operation == "insert":
                assert _bst_ok(step.snapshot["root"])

    def test_contains_outcomes(self):
        outcomes = [s.operation for s in self.steps if s.operation in ("found", "not_found")]
        assert outcomes == ["found", "not_found"]

    def test_one_compare_per_node_on_the_path(self):
        # contains(40): 50 → 30 → 40
        found = next(s for s in self.steps if s.operation == "found")
        assert found.highlights["path"] == [50, 30, 40]
        compares_before = self.steps[found.step_number - 3:found.step_number]
        assert _ops(compares_before) == ["compare"] * 3

    def test_duplicate(self):
        steps = list(tree_set([("add", 5), ("add", 5)]))
        assert _ops(steps) == ["init", "insert", "compare", "duplicate", "done"]
        assert steps[-1].snapshot["size"] == 1


# ── B-Tree ───────────────────────────────────────────────────────────

def _leaf_depths(nodes, node_id, depth=0):
    node = nodes[node_id]
    if node["leaf"]:
        return {depth}
    depths = set()
    for child in node["children"]:
        depths |= _leaf_depths(nodes, child, depth + 1)
    return depths


def _keys_in_order(nodes, node_id):
    node = nodes[node_id]
    if node["leaf"]:
        return list(node["keys"])
    out = []
    for i, child in enumerate(node["children"]):
        out += _keys_in_order(nodes, child)
        if i < len(node["keys"]):
            out.append(node["keys"][i])
    return out


class TestBTree:
    def setup_method(self):
        self.steps = list(btree())

    def test_final_structure(self):
        snap = self.steps[-1].snapshot
        nodes, root = snap["nodes"], snap["root"]
        assert nodes[root]["keys"] == [10, 20]
        assert [nodes[c]["keys"] for c in nodes[root]["children"]] == [[5], [15], [25, 30]]

    def test_invariants_after_every_insert(self):
        for step in self.steps:
            if step.operation != "insert" or step.highlights.get("phase") != "placed":
                continue
            nodes, root = step.snapshot["nodes"], step.snapshot["root"]
            keys = _keys_in_order(nodes, root)
            assert keys == sorted(keys)

    def test_leaves_share_one_depth_after_every_split(self):
        for step in self.steps:
            if step.operation == "split" and "left" in step.highlights:
                nodes, root = step.snapshot["nodes"], step.snapshot["root"]
                assert len(_leaf_depths(nodes, root)) == 1
                assert all(len(n["keys"]) < ORDER for n in nodes.values())

    def test_two_splits(self):
        assert self.steps[-1].metrics["splits"] == 2
        medians = [s.highlights["median"] for s in self.steps if s.operation == "split"]
        assert medians == [10, 10, 20, 20]

    def test_search_outcomes(self):
        outcomes = [s.operation for s in self.steps if s.operation in ("found", "not_found")]
        assert outcomes == ["found", "not_found"]

    def test_duplicate_insert(self):
        steps = list(btree([("insert", 1), ("insert", 1)]))
        assert "duplicate" in _ops(steps)
        assert steps[-1].snapshot["nodes"][steps[-1].snapshot["root"]]["keys"] == [1]

    def test_root_split_grows_height(self):
        steps = list(btree([("insert", k) for k in range(1, 8)]))
        snap = steps[-1].snapshot
        assert _keys_in_order(snap["nodes"], snap["root"]) == list(range(1, 8))
        assert len(_leaf_depths(snap["nodes"], snap["root"])) == 1


# ── Skip list ────────────────────────────────────────────────────────

def _level_values(snapshot, level):
    nodes, out = snapshot["nodes"], []
    x = nodes[0]["forward"][level]
    while x is not None:
        out.append(nodes[x]["value"])
        x = nodes[x]["forward"][level]
    return out


class TestSkipList:
    def test_fixed_levels_final_list(self):
        steps = list(skip_list(levels=[2, 1]))
        final = steps[-1].snapshot
        assert _level_values(final, 0) == [3, 6, 7, 8, 9, 10, 12]
        assert _level_values(final, 1) == [3, 6, 8, 9]
        assert _level_values(final, 2) == [3]

    def test_every_level_is_sorted(self):
        steps = list(skip_list(seed=11))
        final = steps[-1].snapshot
        for lvl in range(final["max_level"]):
            values = _level_values(final, lvl)
            assert values == sorted(values)

    def test_search_outcomes(self):
        steps = list(skip_list(levels=[1, 1]))
        outcomes = [s.operation for s in steps if s.operation in ("found", "not_found")]
        # search 9, search 8 (after insert), search 5
        assert outcomes == ["found", "found", "not_found"]

    def test_search_drops_levels(self):
        steps = list(skip_list(operations=[("search", 9)]))
        assert "level_down" in _ops(steps)
        assert steps[-2].operation == "found"

    def test_same_seed_same_trace(self):
        a = [s.to_dict() for s in skip_list(seed=3)]
        b = [s.to_dict() for s in skip_list(seed=3)]
        assert a == b

    def test_random_levels_are_capped(self):
        gen = random_levels(seed=0, max_level=3)
        assert all(1 <= next(gen) <= 3 for _ in range(200))

    def test_duplicate_insert(self):
        existing = INITIAL_NODES[0][0]
        steps = list(skip_list(operations=[("insert", existing)]))
        assert "duplicate" in _ops(steps)
        assert len(steps[-1].snapshot["nodes"]) == len(INITIAL_NODES) + 1


# ── Trie ─────────────────────────────────────────────────────────────

class TestTrie:
    def setup_method(self):
        self.steps = list(trie())

    def test_search_results(self):
        searches = [
            (s.variables["word"], s.operation)
            for s in self.steps
            if s.operation in ("found", "not_found") and "word" in s.variables
        ]
        assert searches == [("car", "found"), ("cab", "not_found")]

    def test_prefix_listing(self):
        listing = next(s for s in self.steps if "words" in s.highlights)
        assert listing.highlights["words"] == ["car", "card", "care"]

    def test_shared_prefixes_share_nodes(self):
        # root + c,a,t + r + d + e + d,o,g
        assert len(self.steps[-1].snapshot["nodes"]) == 10
        assert self.steps[-1].metrics["nodes_created"] == 9

    def test_prefix_is_not_a_word(self):
        steps = list(trie([("insert", "card"), ("search", "car")]))
        assert steps[-2].operation == "not_found"

    @pytest.mark.parametrize("prefix", ["x", "cart"])
    def test_missing_prefix(self, prefix):
        steps = list(trie([("insert", "car"), ("starts_with", prefix)]))
        assert steps[-2].operation == "not_found"
        assert steps[-2].highlights["words"] == []


# ── Segment tree ─────────────────────────────────────────────────────

def _sums_consistent(snapshot):
    arr = snapshot["array"]
    return all(node["sum"] == sum(arr[node["lo"]:node["hi"] + 1]) for node in snapshot["tree"])


class TestSegmentTree:
    """Default array [1, 3, 5, 7, 9, 11] with four queries and one update."""

    def setup_method(self):
        self.steps = list(segment_tree())

    def test_query_results(self):
        assert [s.highlights["result"] for s in self.steps if s.operation == "result"] == [24, 9, 25, 37]

    def test_build_emits_one_step_per_node(self):
        builds = [s for s in self.steps if s.operation == "build"]
        assert len(builds) == 2 * len(INITIAL_ARRAY) - 1
        assert builds[-1].highlights["node"] == 1
        assert builds[-1].snapshot["tree"][0]["sum"] == sum(INITIAL_ARRAY)

    def test_children_built_before_parents(self):
        built = []
        for step in self.steps:
            if step.operation == "build":
                for child in step.highlights.get("children", []):
                    assert child in built
                built.append(step.highlights["node"])

    def test_sums_hold_whenever_an_operation_finishes(self):
        for step in self.steps:
            if step.operation in ("query", "result", "update", "done"):
                assert _sums_consistent(step.snapshot)

    def test_query_classifies_nodes(self):
        first = self.steps.index(next(s for s in self.steps if s.operation == "query"))
        end = self.steps.index(next(s for s in self.steps if s.operation == "result"))
        visits = [(s.operation, s.highlights["node"]) for s in self.steps[first + 1:end]]
        assert visits == [
            ("partial_overlap", 1), ("partial_overlap", 2), ("partial_overlap", 4),
            ("no_overlap", 8), ("full_overlap", 9), ("full_overlap", 5),
            ("partial_overlap", 3), ("full_overlap", 6), ("no_overlap", 7),
        ]

    def test_whole_range_answers_at_the_root(self):
        last_query = [i for i, s in enumerate(self.steps) if s.operation == "query"][-1]
        assert self.steps[last_query + 1].operation == "full_overlap"
        assert self.steps[last_query + 2].operation == "result"

    def test_update_walks_down_then_up(self):
        start = next(i for i, s in enumerate(self.steps) if s.operation == "update")
        ops = [(s.operation, s.highlights.get("node")) for s in self.steps[start + 1:start + 6]]
        assert ops == [
            ("descend", 1), ("descend", 2), ("set_leaf", 5),
            ("recompute", 2), ("recompute", 1),
        ]
        assert self.steps[start + 5].snapshot["array"] == [1, 3, 6, 7, 9, 11]

    @pytest.mark.parametrize("operation", [("query", 3, 1), ("query", 0, 6), ("update", -1, 4), ("update", 6, 4)])
    def test_out_of_bounds(self, operation):
        steps = list(segment_tree([1, 2, 3, 4, 5, 6], [operation]))
        assert _ops(steps)[-2:] == ["out_of_bounds", "done"]

    def test_empty_array(self):
        steps = list(segment_tree([], [("query", 0, 0)]))
        assert _ops(steps) == ["init", "out_of_bounds", "done"]

    def test_single_element(self):
        steps = list(segment_tree([4], [("update", 0, 9), ("query", 0, 0)]))
        assert steps[-1].snapshot["tree"] == [{"id": 1, "lo": 0, "hi": 0, "sum": 9}]
        assert steps[-2].highlights["result"] == 9

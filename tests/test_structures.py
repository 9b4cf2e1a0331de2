"""Tests for the hashing and linear-structure tracers."""

import pytest

from algorithms.array_deque import array_deque
from algorithms.bloom_filter import ADD_ELEMENTS, CHECK_ELEMENTS, SIZE, bit_positions, bloom_filter
from algorithms.hash_map import hash_code, hash_map
from algorithms.hash_table import KEYS as HT_KEYS, LOAD_FACTOR_THRESHOLD, hash_table, slot_of
from algorithms.linked_hash_map import linked_hash_map
from algorithms.linked_list import linked_list
from algorithms.lru_cache import lru_cache
from algorithms.union_find import union_find


def _ops(steps):
    return [s.operation for s in steps]


# ── HashMap ──────────────────────────────────────────────────────────

class TestHashMap:
    def setup_method(self):
        self.steps = list(hash_map())

    def test_entries_live_in_their_bucket(self):
        final = self.steps[-1].snapshot
        for index, chain in enumerate(final["buckets"]):
            for entry in chain:
                assert entry["hash"] == hash_code(entry["key"])
                assert entry["hash"] % final["capacity"] == index

    def test_size_counts_distinct_keys(self):
        assert self.steps[-1].snapshot["size"] == 5

    def test_update_replaces_value(self):
        final = self.steps[-1].snapshot
        entries = {e["key"]: e["value"] for chain in final["buckets"] for e in chain}
        assert entries["Alice"] == 26
        assert "update" in _ops(self.steps)

    def test_get_outcomes(self):
        found = [s.variables["result"] for s in self.steps if s.operation == "found"]
        assert found == [30]
        assert [s.variables["key"] for s in self.steps if s.operation == "not_found"] == ["Frank"]

    def test_collision_counter_matches_flags(self):
        flagged = [s for s in self.steps if s.operation == "put" and s.highlights["collision"]]
        assert self.steps[-1].metrics["collisions"] == len(flagged)

    def test_forced_collision_chains(self):
        steps = list(hash_map([("put", "a", 1), ("put", "b", 2)], buckets=1))
        puts = [s for s in steps if s.operation == "put"]
        assert [p.highlights["collision"] for p in puts] == [False, True]
        assert [e["key"] for e in steps[-1].snapshot["buckets"][0]] == ["a", "b"]

    def test_hash_code_is_non_negative(self):
        assert hash_code("a" * 200) >= 0


# ── Bloom filter ─────────────────────────────────────────────────────

class TestBloomFilter:
    def setup_method(self):
        self.steps = list(bloom_filter())

    def _results(self):
        return {s.highlights["element"]: s.highlights["result"] for s in self.steps if s.operation == "result"}

    def test_bits_are_the_union_of_positions(self):
        expected = {p for e in ADD_ELEMENTS for p in bit_positions(e, SIZE)}
        bits = self.steps[-1].snapshot["bits"]
        assert {i for i, b in enumerate(bits) if b} == expected

    def test_no_false_negatives(self):
        results = self._results()
        for element in CHECK_ELEMENTS:
            if element in ADD_ELEMENTS:
                assert results[element] == "probably_yes"

    def test_results_match_bit_state(self):
        set_bits = {p for e in ADD_ELEMENTS for p in bit_positions(e, SIZE)}
        results = self._results()
        for element in CHECK_ELEMENTS:
            if element in ADD_ELEMENTS:
                continue
            all_set = set(bit_positions(element, SIZE)) <= set_bits
            assert results[element] == ("false_positive" if all_set else "definitely_not")

    def test_one_bit_filter_reports_false_positive(self):
        steps = list(bloom_filter(["a"], ["zzz"], size=1))
        assert steps[-1].metrics["false_positives"] == 1
        result = next(s for s in steps if s.operation == "result")
        assert result.highlights["result"] == "false_positive"

    def test_check_stops_at_first_zero(self):
        steps = list(bloom_filter([], ["x"]))
        assert _ops(steps) == ["init", "check", "check_bit", "result", "done"]


# ── LRU cache ────────────────────────────────────────────────────────

class TestLRUCache:
    def setup_method(self):
        self.steps = list(lru_cache())

    def test_final_recency_order(self):
        assert self.steps[-1].snapshot["entries"] == [[5, "E"], [3, "C"], [4, "D"]]

    def test_evicts_least_recently_used(self):
        assert [s.highlights["key"] for s in self.steps if s.operation == "evict"] == [1, 2]

    def test_counters(self):
        assert self.steps[-1].metrics == {"hits": 2, "misses": 1, "evictions": 2}

    def test_get_refreshes_recency(self):
        hit = next(s for s in self.steps if s.operation == "hit")
        assert hit.snapshot["entries"][0] == [2, "B"]

    def test_update_does_not_evict(self):
        steps = list(lru_cache([("put", 1, "A"), ("put", 1, "Z")], capacity=1))
        assert _ops(steps) == ["init", "put", "update", "done"]
        assert steps[-1].snapshot["entries"] == [[1, "Z"]]

    @pytest.mark.parametrize("capacity", [0, -2])
    def test_non_positive_capacity_holds_one_entry(self, capacity):
        steps = list(lru_cache([("put", 1, "A"), ("put", 2, "B"), ("get", 1, None)], capacity=capacity))
        assert _ops(steps) == ["init", "put", "evict", "put", "miss", "done"]
        assert steps[0].snapshot["capacity"] == 1
        assert steps[-1].snapshot["entries"] == [[2, "B"]]


# ── Union-Find ───────────────────────────────────────────────────────

class TestUnionFind:
    def setup_method(self):
        self.steps = list(union_find())

    def test_connected_answers(self):
        assert [s.highlights["result"] for s in self.steps if s.operation == "connected"] == [True, False, True]

    def test_everything_joins_one_set(self):
        parent = self.steps[-1].snapshot["parent"]

        def root(x):
            while parent[x] != x:
                x = parent[x]
            return x

        assert {root(x) for x in range(8)} == {0}

    def test_union_by_rank(self):
        assert self.steps[-1].snapshot["rank"][0] == 3
        assert self.steps[-1].metrics["unions"] == 7

    def test_path_compression(self):
        compressions = [s for s in self.steps if s.operation == "compress"]
        assert [c.highlights["nodes"] for c in compressions] == [[3], [7, 6]]
        assert self.steps[-1].metrics["compressions"] == 3

    def test_union_of_same_set(self):
        steps = list(union_find([("union", 0, 1), ("union", 1, 0)], size=2))
        assert "same_set" in _ops(steps)


# ── Linked list ──────────────────────────────────────────────────────

class TestLinkedList:
    def setup_method(self):
        self.steps = list(linked_list())

    def test_final_list(self):
        assert self.steps[-1].snapshot == {"values": [10, 20, 30], "size": 3}

    def test_get_results(self):
        assert [s.variables["result"] for s in self.steps if s.operation == "get"] == [20, 20]

    def test_removals(self):
        assert [s.variables["removed"] for s in self.steps if s.operation.startswith("remove")] == [5, 40]

    def test_get_walks_from_head(self):
        assert self.steps[-1].metrics["hops"] == 5

    @pytest.mark.parametrize("op", ["remove_first", "remove_last"])
    def test_remove_from_empty(self, op):
        assert _ops(list(linked_list([(op, None)]))) == ["init", "empty", "done"]

    def test_get_out_of_bounds(self):
        assert _ops(list(linked_list([("get", 0)]))) == ["init", "out_of_bounds", "done"]


# ── ArrayDeque ───────────────────────────────────────────────────────

def _deque_contents(snapshot):
    cap, head = snapshot["capacity"], snapshot["head"]
    return [snapshot["array"][(head + k) % cap] for k in range(snapshot["size"])]


class TestArrayDeque:
    def setup_method(self):
        self.steps = list(array_deque())

    def test_final_contents(self):
        final = self.steps[-1].snapshot
        assert _deque_contents(final) == [0, 5, 10, 20, 40, 50, 60]
        assert final["capacity"] == 8
        assert self.steps[-1].metrics == {"resizes": 1}

    def test_grows_before_the_last_free_slot_is_used(self):
        i = _ops(self.steps).index("resize")
        assert self.steps[i - 1].snapshot["size"] == 3
        assert self.steps[i].snapshot["array"] == [5, 10, 20, None, None, None, None, None]
        assert self.steps[i].snapshot["head"] == 0
        assert self.steps[i + 1].operation == "add_last"

    def test_head_wraps_around(self):
        first = next(s for s in self.steps if s.operation == "add_first" and s.snapshot["capacity"] == 8)
        assert first.highlights["index"] == 7

    def test_one_slot_always_free(self):
        for step in self.steps:
            assert step.snapshot["size"] < step.snapshot["capacity"]
            assert step.snapshot["array"].count(None) == step.snapshot["capacity"] - step.snapshot["size"]

    def test_removes_return_the_ends(self):
        removed = {s.operation: s.highlights["value"] for s in self.steps if s.operation.startswith("remove")}
        assert removed == {"remove_first": 1, "remove_last": 30}

    def test_empty_removes(self):
        steps = list(array_deque([("remove_first", None), ("remove_last", None)]))
        assert _ops(steps) == ["init", "empty", "empty", "done"]

    def test_capacity_floor(self):
        steps = list(array_deque([("add_last", 1)], initial_capacity=0))
        assert _ops(steps) == ["init", "resize", "add_last", "done"]
        assert steps[-1].snapshot["capacity"] == 2


# ── Hash table (linear probing) ──────────────────────────────────────

def _reachable(slots, key):
    i = slot_of(key, len(slots))
    while slots[i] is not None:
        if slots[i] == key:
            return True
        i = (i + 1) % len(slots)
    return False


class TestHashTable:
    def setup_method(self):
        self.steps = list(hash_table())

    def test_every_key_reachable_from_its_home_slot(self):
        slots = self.steps[-1].snapshot["slots"]
        assert sorted(k for k in slots if k is not None) == sorted(HT_KEYS)
        for key in HT_KEYS:
            assert _reachable(slots, key)

    def test_rehashes_once_past_the_threshold(self):
        final = self.steps[-1]
        assert final.metrics["rehashes"] == 1
        assert final.snapshot["capacity"] == 15
        rehash = next(s for s in self.steps if s.operation == "rehash")
        assert rehash.snapshot["count"] == 5 and rehash.snapshot["capacity"] == 7

    def test_rehash_moves_every_key(self):
        i = _ops(self.steps).index("rehash")
        moves = [s for s in self.steps[i:] if s.operation == "move"]
        assert len(moves) == 5
        assert moves[-1].snapshot["count"] == 5

    def test_load_factor_bounded_after_each_insert(self):
        for step in self.steps:
            if step.operation in ("move", "done") or (step.operation == "hash" and step.snapshot["count"]):
                assert step.snapshot["load_factor"] <= LOAD_FACTOR_THRESHOLD

    def test_lookups(self):
        assert [s.operation for s in self.steps if s.operation in ("found", "not_found")] == ["found", "not_found"]

    def test_collisions_match_counter(self):
        assert self.steps[-1].metrics["collisions"] == _ops(self.steps).count("collision")

    def test_collision_wraps_past_the_end(self):
        # "a", "h" and "o" all hash to slot 6 of 7
        steps = list(hash_table(["a", "h"], lookups=["h", "o"]))
        assert _ops(steps) == [
            "init",
            "hash", "place",
            "hash", "collision", "place",
            "hash", "collision", "found",
            "hash", "collision", "collision", "not_found",
            "done",
        ]
        assert steps[-1].snapshot["slots"][0] == "h"
        assert steps[-1].metrics["collisions"] == 4

    def test_duplicate_insert(self):
        steps = list(hash_table(["a", "a"], lookups=[]))
        assert _ops(steps) == ["init", "hash", "place", "hash", "duplicate", "done"]
        assert steps[-1].snapshot["count"] == 1

    def test_tiny_table_keeps_growing(self):
        steps = list(hash_table(["x", "y", "z"], lookups=["z"], initial_size=1))
        final = steps[-1].snapshot
        assert final["capacity"] == 7
        assert steps[-1].metrics["rehashes"] == 2
        assert _ops(steps)[-2] == "found"


# ── LinkedHashMap ────────────────────────────────────────────────────

class TestLinkedHashMap:
    def test_access_order(self):
        steps = list(linked_hash_map())
        assert steps[-1].snapshot["order"] == ["C", "D", "E", "B", "A"]
        assert steps[-1].metrics == {"hits": 2, "misses": 1, "moves": 3}

    def test_insertion_order(self):
        steps = list(linked_hash_map(access_order=False))
        assert steps[-1].snapshot["order"] == ["A", "B", "C", "D", "E"]
        assert "access" not in _ops(steps)
        assert _ops(steps).count("hit") == 2

    def test_get_moves_entry_to_the_tail(self):
        steps = list(linked_hash_map())
        access = next(s for s in steps if s.operation == "access")
        assert access.snapshot["order"] == ["B", "C", "D", "A"]

    def test_update_keeps_a_single_entry(self):
        final = list(linked_hash_map())[-1].snapshot
        entries = [e for bucket in final["buckets"] for e in bucket]
        assert sorted(e["key"] for e in entries) == ["A", "B", "C", "D", "E"]
        assert next(e for e in entries if e["key"] == "A")["value"] == 15

    def test_entries_live_in_their_bucket(self):
        final = list(linked_hash_map())[-1].snapshot
        for index, bucket in enumerate(final["buckets"]):
            for entry in bucket:
                assert hash_code(entry["key"]) % len(final["buckets"]) == index

    def test_link_names_the_previous_tail(self):
        links = [s for s in linked_hash_map() if s.operation == "link"]
        assert [s.variables["prev"] for s in links] == [None, "A", "B", "C", "A"]

"""Tests for heap sort and the min-heap priority queue."""

import pytest

from algorithms.heap_sort import INITIAL_ARRAY, heap_sort
from algorithms.priority_queue import priority_queue


def _is_max_heap(arr, size):
    return all(arr[(i - 1) // 2] >= arr[i] for i in range(1, size))


def _is_min_heap(arr):
    return all(arr[(i - 1) // 2] <= arr[i] for i in range(1, len(arr)))


class TestHeapSort:
    def test_sorts_default_array(self):
        steps = list(heap_sort())
        assert steps[-1].snapshot["array"] == sorted(INITIAL_ARRAY)

    @pytest.mark.parametrize("array", [[1], [2, 1], [5, 5, 5], [9, -3, 0, 7, 7, 2]])
    def test_sorts_small_inputs(self, array):
        assert list(heap_sort(array))[-1].snapshot["array"] == sorted(array)

    def test_empty_input(self):
        steps = list(heap_sort([]))
        assert steps[-1].operation == "done"
        assert steps[-1].snapshot["array"] == []

    def test_max_heap_after_build_phase(self):
        steps = list(heap_sort())
        built = [s for s in steps if s.operation == "build_heap"][-1]
        assert _is_max_heap(built.snapshot["array"], built.snapshot["heap_size"])

    def test_heap_property_inside_the_heap_bound(self):
        """At each extract the live heap prefix is a valid max-heap."""
        steps = list(heap_sort())
        extracts = [s for s in steps if s.operation == "extract"][::2]
        for step in extracts:
            assert _is_max_heap(step.snapshot["array"], step.snapshot["heap_size"])

    def test_two_extract_steps_per_position(self):
        steps = list(heap_sort())
        assert len([s for s in steps if s.operation == "extract"]) == 2 * (len(INITIAL_ARRAY) - 1)

    def test_swap_counter_matches_swap_and_extract_steps(self):
        steps = list(heap_sort())
        swaps = len([s for s in steps if s.operation == "swap"])
        extracts = len([s for s in steps if s.operation == "extract"]) // 2
        assert steps[-1].metrics["swaps"] == swaps + extracts

    def test_comparison_counter_matches_compare_steps(self):
        steps = list(heap_sort())
        assert steps[-1].metrics["comparisons"] == len([s for s in steps if s.operation == "compare"])


class TestPriorityQueue:
    def test_final_heap(self):
        steps = list(priority_queue())
        assert steps[-1].snapshot["heap"] == [15, 30, 70, 50, 40]

    def test_polls_return_minimums(self):
        steps = list(priority_queue())
        assert [s.highlights["polled"] for s in steps if s.operation == "poll"] == [10, 20]

    def test_settled_steps_hold_the_heap_invariant(self):
        steps = list(priority_queue())
        settled = [s for s in steps if s.highlights.get("phase") == "settled"]
        assert settled
        for step in settled:
            assert _is_min_heap(step.snapshot["heap"])

    def test_every_offer_ends_settled(self):
        steps = list(priority_queue())
        for i, step in enumerate(steps):
            if step.operation == "offer":
                following = next(s for s in steps[i + 1:] if s.highlights.get("phase") == "settled")
                assert following.operation == "sift_up"

    def test_poll_on_empty_queue(self):
        steps = list(priority_queue([("poll", None)]))
        assert [s.operation for s in steps] == ["init", "empty", "done"]

    def test_poll_last_element(self):
        steps = list(priority_queue([("offer", 4), ("poll", None)]))
        assert steps[-1].snapshot["heap"] == []
        assert [s.highlights["polled"] for s in steps if s.operation == "poll"] == [4]

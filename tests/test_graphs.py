"""Tests for the graph substrate and the A*, BFS, DFS, Dijkstra, topological sort and binary search tracers."""

from collections import deque

import pytest

from algorithms.astar import COLS, GOAL, ROWS, START, WALLS, astar
from algorithms.bfs import EDGES as BFS_EDGES, bfs
from algorithms.binary_search import binary_search
from algorithms.dijkstra import dijkstra
from algorithms.dfs import dfs
from algorithms.topological_sort import EDGES, NODES, topological_sort
from graph import Graph, cell_id


def _ops(steps):
    return [s.operation for s in steps]


def _bfs_distance(rows, cols, start, goal, walls):
    walls = set(map(tuple, walls))
    dist = {tuple(start): 0}
    queue = deque([tuple(start)])
    while queue:
        r, c = queue.popleft()
        if (r, c) == tuple(goal):
            return dist[(r, c)]
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nxt = (r + dr, c + dc)
            if 0 <= nxt[0] < rows and 0 <= nxt[1] < cols and nxt not in walls and nxt not in dist:
                dist[nxt] = dist[(r, c)] + 1
                queue.append(nxt)
    return None


# ── Graph ────────────────────────────────────────────────────────────

class TestGraph:
    def test_from_edges_keeps_node_order(self):
        g = Graph.from_edges(["b", "a"], [("a", "c", 2)])
        assert g.node_ids() == ["b", "a", "c"]
        assert g.get_edge_between("a", "c").weight == 2
        assert g.get_edge_between("c", "a") is None

    def test_in_degrees(self):
        g = Graph.from_edges(NODES, EDGES)
        assert g.in_degrees() == {"A": 0, "B": 0, "C": 1, "D": 2, "E": 2, "F": 1}

    def test_grid_neighbour_order(self):
        g = Graph.grid(3, 3)
        assert [nbr for nbr, _ in g.neighbours(cell_id(1, 1))] == ["0,1", "2,1", "1,0", "1,2"]
        assert g.get_node("2,1").x == 1 and g.get_node("2,1").y == 2

    def test_undirected_edges_link_both_ways(self):
        g = Graph.from_edges(["x", "y"], [("x", "y", 3)], directed=False)
        assert [nbr for nbr, _ in g.neighbours("y")] == ["x"]
        assert g.get_edge_between("y", "x") is g.get_edge_between("x", "y")
        assert not g.directed


# ── A* ───────────────────────────────────────────────────────────────

class TestAStar:
    """Default 8x12 grid plus small hand-built grids."""

    def setup_method(self):
        self.steps = list(astar())

    def test_finds_an_optimal_path(self):
        path = self.steps[-1].snapshot["path"]
        expected = _bfs_distance(ROWS, COLS, START, GOAL, WALLS)
        assert expected == 16
        assert len(path) - 1 == expected
        assert self.steps[-2].operation == "path_found"

    def test_path_is_walkable(self):
        path = self.steps[-1].snapshot["path"]
        walls = {cell_id(r, c) for r, c in WALLS}
        assert path[0] == cell_id(*START) and path[-1] == cell_id(*GOAL)
        for a, b in zip(path, path[1:]):
            (r1, c1), (r2, c2) = map(int, a.split(",")), map(int, b.split(","))
            assert abs(r1 - r2) + abs(c1 - c2) == 1
            assert b not in walls

    def test_scores_are_consistent(self):
        for step in self.steps:
            for score in step.snapshot["scores"].values():
                assert score["f"] == score["g"] + score["h"]

    def test_no_path(self):
        # goal boxed in
        walls = [(0, 1), (1, 0), (1, 2), (2, 1)]
        steps = list(astar(rows=3, cols=3, start=(0, 0), goal=(1, 1), walls=walls))
        assert _ops(steps)[-2:] == ["no_path", "done"]
        assert steps[-1].snapshot["path"] == []

    def test_start_outside_grid(self):
        with pytest.raises(ValueError):
            next(astar(rows=2, cols=2, start=(5, 5), goal=(0, 0), walls=[]))


# ── Dijkstra ─────────────────────────────────────────────────────────

class TestDijkstra:
    def setup_method(self):
        self.steps = list(dijkstra(target="5"))

    def test_distances(self):
        assert self.steps[-1].snapshot["distances"] == {"0": 0, "1": 3, "2": 2, "3": 7, "4": 6, "5": 9}

    def test_visit_order(self):
        assert [s.highlights["current"] for s in self.steps if s.operation == "visit"] == ["0", "2", "1", "4", "3", "5"]

    def test_stale_entries_are_skipped(self):
        assert len([s for s in self.steps if s.operation == "skip"]) == 2

    def test_path_to_target(self):
        assert self.steps[-1].highlights["path"] == ["0", "2", "4", "5"]

    def test_unreached_distance_is_none(self):
        steps = list(dijkstra(nodes=["a", "b"], edges=[], source="a"))
        assert steps[-1].snapshot["distances"] == {"a": 0, "b": None}
        assert steps[-1].highlights["path"] == []

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            next(dijkstra(source="z"))


# ── Topological sort ─────────────────────────────────────────────────

class TestTopologicalSort:
    def test_order_respects_every_edge(self):
        order = list(topological_sort())[-1].snapshot["order"]
        assert order == ["A", "B", "C", "D", "E", "F"]
        position = {n: i for i, n in enumerate(order)}
        for u, v in EDGES:
            assert position[u] < position[v]

    def test_cycle_detected_before_done(self):
        steps = list(topological_sort(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "B")]))
        assert _ops(steps)[-2:] == ["cycle", "done"]
        assert steps[-2].highlights["nodes"] == ["B", "C"]

    def test_counts_every_edge_once(self):
        steps = list(topological_sort())
        assert steps[-1].metrics["edges_processed"] == len(EDGES)


# ── Binary search ────────────────────────────────────────────────────

class TestBinarySearch:
    def test_default_scenario(self):
        steps = list(binary_search())
        assert _ops(steps) == ["init", "mid", "go_right", "mid", "go_left", "mid", "found", "done"]
        assert steps[-1].highlights["index"] == 5
        assert steps[-1].metrics["comparisons"] == 3

    def test_not_found(self):
        steps = list(binary_search([2, 5, 8], 4))
        assert _ops(steps)[-2:] == ["not_found", "done"]

    def test_unsorted_input_is_sorted_first(self):
        steps = list(binary_search([9, 1, 5], 9))
        assert steps[0].snapshot["array"] == [1, 5, 9]
        assert steps[-2].operation == "found"

    def test_empty_array(self):
        assert _ops(list(binary_search([], 1))) == ["init", "not_found", "done"]


# ── BFS / DFS ────────────────────────────────────────────────────────

class TestBFS:
    """Default 8-node tree-with-a-diamond graph, source 0."""

    def setup_method(self):
        self.steps = list(bfs())

    def test_visits_layer_by_layer(self):
        assert self.steps[-1].snapshot["order"] == ["0", "1", "2", "3", "4", "5", "6", "7"]
        assert [s.highlights["current"] for s in self.steps if s.operation == "visit"] == self.steps[-1].snapshot["order"]

    def test_each_node_enqueued_once(self):
        enqueued = [s.variables["neighbour"] for s in self.steps if s.operation == "enqueue"]
        assert sorted(enqueued) == ["1", "2", "3", "4", "5", "6", "7"]

    def test_every_edge_examined_from_both_ends(self):
        final = self.steps[-1].metrics
        assert final == {"nodes_visited": 8, "edges_examined": 2 * len(BFS_EDGES)}
        assert len([s for s in self.steps if s.operation == "seen"]) == 2 * len(BFS_EDGES) - 7

    def test_target_gives_fewest_hop_path(self):
        steps = list(bfs(target="7"))
        assert _ops(steps)[-2:] == ["found", "done"]
        assert steps[-1].highlights["path"] == ["0", "1", "3", "7"]

    def test_unreachable_target(self):
        steps = list(bfs(nodes=["a", "b", "c"], edges=[("a", "b")], source="a", target="c"))
        assert _ops(steps)[-2:] == ["not_found", "done"]
        assert steps[-1].highlights["path"] == []
        assert steps[-1].snapshot["order"] == ["a", "b"]

    def test_integer_ids_are_normalised(self):
        steps = list(bfs(source=0, target=5))
        assert steps[-1].highlights["path"] == ["0", "2", "5"]

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            next(bfs(source="z"))


class TestDFS:
    def setup_method(self):
        self.steps = list(dfs())

    def test_goes_deep_first(self):
        assert self.steps[-1].snapshot["order"] == ["0", "1", "3", "7", "4", "2", "5", "6"]

    def test_mark_on_pop_skips_the_duplicate(self):
        skips = [s for s in self.steps if s.operation == "skip"]
        assert [s.highlights["current"] for s in skips] == ["4"]

    def test_parent_is_whoever_pushed_the_popped_entry(self):
        parent = self.steps[-1].snapshot["parent"]
        assert parent["4"] == "7"
        assert parent["0"] is None
        for child, par in parent.items():
            if par is not None:
                assert (par, child) in BFS_EDGES or (child, par) in BFS_EDGES

    def test_stack_top_is_last(self):
        first_pushes = [s for s in self.steps if s.operation == "push"][:2]
        assert [s.snapshot["stack"] for s in first_pushes] == [["2"], ["2", "1"]]

    def test_target_path_follows_the_dfs_tree(self):
        steps = list(dfs(target="4"))
        assert _ops(steps)[-2:] == ["found", "done"]
        assert steps[-1].highlights["path"] == ["0", "1", "3", "7", "4"]

    def test_unreachable_target(self):
        steps = list(dfs(nodes=["a", "b"], edges=[], source="a", target="b"))
        assert _ops(steps) == ["init", "visit", "not_found", "done"]

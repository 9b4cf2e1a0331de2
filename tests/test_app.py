"""Tests for the Flask JSON API."""

import pytest

from algorithms import REGISTRY


def _run(client, **body):
    resp = client.post("/api/run", json=body)
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


# ── Registry ─────────────────────────────────────────────────────────

class TestRegistryRoutes:
    def test_lists_every_algorithm(self, client):
        data = client.get("/api/algorithms").get_json()
        assert [a["key"] for a in data["algorithms"]] == list(REGISTRY)

    def test_filter_by_tag(self, client):
        data = client.get("/api/algorithms?tag=sorting").get_json()
        keys = {a["key"] for a in data["algorithms"]}
        assert keys == {"bubble_sort", "selection_sort", "insertion_sort", "quick_sort", "merge_sort", "heap_sort"}

    def test_card_includes_pseudocode(self, client):
        data = client.get("/api/algorithms/dijkstra").get_json()
        assert data["key"] == "dijkstra"
        assert data["pseudocode"]

    def test_unknown_card(self, client):
        resp = client.get("/api/algorithms/bogo_sort")
        assert resp.status_code == 404
        assert "bogo_sort" in resp.get_json()["error"]


# ── Run ──────────────────────────────────────────────────────────────

class TestRun:
    def test_run_returns_first_step(self, client):
        data = _run(client, algorithm="bubble_sort", array=[3, 1, 2])
        assert data["current_step"] == 0
        assert data["step"]["operation"] == "init"
        assert data["total_steps"] == data["metrics"]["total_steps"]
        assert data["params"] == {"array": [3, 1, 2]}
        assert data["pseudocode"]
        assert data["is_playing"] is False

    def test_comma_separated_array(self, client):
        data = _run(client, algorithm="insertion_sort", array="5, 4,3")
        assert data["params"]["array"] == [5, 4, 3]

    def test_start_at_step(self, client):
        data = _run(client, algorithm="heap_sort", step=2)
        assert data["current_step"] == 2

    def test_search_target(self, client):
        data = _run(client, algorithm="binary_search", array=[1, 2, 3], target=3)
        assert data["params"] == {"array": [1, 2, 3], "target": 3}

    def test_graph_target_is_a_node_id(self, client):
        data = _run(client, algorithm="dijkstra", target=5)
        assert data["params"] == {"target": "5"}

    def test_traversal_target(self, client):
        data = _run(client, algorithm="bfs", target=7)
        assert data["params"] == {"target": "7"}
        assert client.get("/api/steps").get_json()["steps"][-1]["highlights"]["path"] == ["0", "1", "3", "7"]

    def test_skip_list_gets_a_seed(self, client):
        data = _run(client, algorithm="skip_list")
        assert isinstance(data["params"]["seed"], int)

    def test_unknown_algorithm(self, client):
        assert client.post("/api/run", json={"algorithm": "nope"}).status_code == 404

    def test_no_algorithm(self, client):
        assert client.post("/api/run", json={}).status_code == 400

    @pytest.mark.parametrize("array", [
        [],
        list(range(21)),
        [1, 1000],
        [1, "two"],
        [True, 2],
        "1, x",
        {"a": 1},
    ])
    def test_bad_array(self, client, array):
        resp = client.post("/api/run", json={"algorithm": "bubble_sort", "array": array})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_param_not_accepted(self, client):
        resp = client.post("/api/run", json={"algorithm": "raft", "array": [1, 2]})
        assert resp.status_code == 400

    def test_invalid_start_step(self, client):
        resp = client.post("/api/run", json={"algorithm": "bubble_sort", "step": 9999})
        assert resp.status_code == 400

    def test_bad_speed(self, client):
        resp = client.post("/api/run", json={"algorithm": "bubble_sort", "speed": "warp"})
        assert resp.status_code == 400

    def test_unknown_graph_node(self, client):
        resp = client.post("/api/run", json={"algorithm": "dijkstra", "target": "z"})
        assert resp.status_code == 200
        assert client.get("/api/steps").get_json()["steps"][-1]["highlights"]["path"] == []


# ── Navigation ───────────────────────────────────────────────────────

class TestNavigation:
    """The cursor lives in the session; the trace is rebuilt per request."""

    def test_step_before_run(self, client):
        resp = client.post("/api/step/next")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Run an algorithm first"

    def test_next_and_prev(self, client):
        _run(client, algorithm="bubble_sort", array=[2, 1])
        data = client.post("/api/step/next").get_json()
        assert data["current_step"] == 1
        assert data["step"]["step_number"] == 1
        data = client.post("/api/step/prev").get_json()
        assert data["current_step"] == 0

    def test_prev_at_start(self, client):
        _run(client, algorithm="bubble_sort")
        resp = client.post("/api/step/prev")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Already at first step"

    def test_next_at_end(self, client):
        total = _run(client, algorithm="bubble_sort", array=[1])["total_steps"]
        client.post("/api/step/goto", json={"index": total - 1})
        resp = client.post("/api/step/next")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Already at last step"

    def test_goto(self, client):
        _run(client, algorithm="raft")
        data = client.post("/api/step/goto", json={"index": 5}).get_json()
        assert data["step"]["operation"] == "become_leader"

    @pytest.mark.parametrize("index", [-1, 10_000, "3"])
    def test_goto_bad_index(self, client, index):
        _run(client, algorithm="raft")
        assert client.post("/api/step/goto", json={"index": index}).status_code == 400

    def test_reset(self, client):
        _run(client, algorithm="raft", step=4)
        data = client.post("/api/step/reset").get_json()
        assert data["current_step"] == 0
        assert data["is_playing"] is False

    def test_play_toggles(self, client):
        _run(client, algorithm="raft")
        assert client.post("/api/step/play").get_json()["is_playing"] is True
        assert client.post("/api/step/play").get_json()["is_playing"] is False

    def test_cursor_survives_between_requests(self, client):
        _run(client, algorithm="trie")
        client.post("/api/step/next")
        client.post("/api/step/next")
        assert client.get("/api/state").get_json()["step"] == 2

    def test_steps_endpoint(self, client):
        data = _run(client, algorithm="lru_cache")
        steps = client.get("/api/steps").get_json()
        assert steps["algorithm"] == "lru_cache"
        assert len(steps["steps"]) == data["total_steps"]

    def test_seeded_run_replays_identically(self, client):
        first = _run(client, algorithm="skip_list")["step"]
        client.post("/api/step/next")
        again = client.post("/api/step/prev").get_json()["step"]
        assert again == first


# ── Config & state ───────────────────────────────────────────────────

class TestConfig:
    def test_speed_preset(self, client):
        data = client.post("/api/config/speed", json={"speed": "fast"}).get_json()
        assert data == {"speed": "fast", "seconds": 0.15}
        assert client.get("/api/state").get_json()["speed"] == "fast"

    def test_speed_seconds(self, client):
        data = client.post("/api/config/speed", json={"speed": 0.01}).get_json()
        assert data["seconds"] == 0.02

    def test_unknown_speed(self, client):
        assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400

    def test_state_fragment(self, client):
        assert client.get("/api/state").get_json() == {"step": 0, "speed": "medium"}
        _run(client, algorithm="merge_sort", array=[4, 2])
        assert client.get("/api/state").get_json() == {
            "step": 0,
            "speed": "medium",
            "algorithm": "merge_sort",
            "array": [4, 2],
        }


# ── Compare ──────────────────────────────────────────────────────────

class TestCompare:
    """Comparison mode runs two sorting algorithms on the same input."""

    def test_compare_two_sorts(self, client):
        resp = client.post("/api/compare", json={"left": "bubble_sort", "right": "merge_sort", "array": [5, 2, 9, 1]})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["left"]["algo_key"] == "bubble_sort"
        assert data["right"]["algo_key"] == "merge_sort"
        assert data["left"]["params"] == {"array": [5, 2, 9, 1]}

    def test_same_algorithm_ties(self, client):
        data = client.post("/api/compare", json={"left": "quick_sort", "right": "quick_sort"}).get_json()
        assert data["winner_steps"] == "tie"

    def test_non_sorting_rejected(self, client):
        resp = client.post("/api/compare", json={"left": "bubble_sort", "right": "trie"})
        assert resp.status_code == 400

    def test_unknown_side(self, client):
        resp = client.post("/api/compare", json={"left": "bubble_sort", "right": "nope"})
        assert resp.status_code == 404


# ── Request bodies ───────────────────────────────────────────────────

class TestRequestBody:
    @pytest.mark.parametrize("url", ["/api/run", "/api/step/goto", "/api/config/speed", "/api/compare"])
    @pytest.mark.parametrize("body", [[1, 2, 3], "bubble_sort", 7])
    def test_non_object_body_is_rejected(self, client, url, body):
        resp = client.post(url, json=body)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Request body must be a JSON object"

    def test_missing_body_reads_as_empty(self, client):
        resp = client.post("/api/run", data="not json", content_type="text/plain")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "No algorithm selected"

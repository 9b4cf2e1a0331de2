"""
main.py — Algorithm Step Visualizer Flask App
===============================================
JSON API over the step generators and the playback engine.

Routes:
  GET  /api/algorithms          – registry listing
  GET  /api/algorithms/<key>    – one card incl. pseudocode
  POST /api/run                 – run an algorithm, cursor to 0 (or "step")
  GET  /api/steps               – full trace + metrics
  POST /api/step/next           – advance one step
  POST /api/step/prev           – rewind one step
  POST /api/step/goto           – jump to step N
  POST /api/step/reset          – back to step 0, not playing
  POST /api/step/play           – toggle play/pause
  POST /api/config/speed        – set speed preset
  GET  /api/state               – share-state fragment
  POST /api/compare             – run two sorting algorithms on one array

State management:
  Each user's Flask session holds only what is needed to rebuild the run:
    • algorithm       – registry key
    • params          – generator keyword arguments (array, seed, target)
    • current_step    – playback cursor
    • is_playing
    • speed
  The trace itself is regenerated on every request; generators are
  deterministic for a given set of params.

Configuration:
  Defaults below, overridable with FLASK_-prefixed environment variables
  (FLASK_MAX_ARRAY_LENGTH=30, FLASK_PORT=8000, …).
"""

import logging
import secrets

from flask import Flask, jsonify, request, session

from algorithms import get_algorithm, list_algorithms
from engine import MIN_SPEED, SPEED_PRESETS, Recorder, Stepper, StepperState, compare

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.from_mapping(
    SECRET_KEY=secrets.token_hex(32),
    DEFAULT_SPEED="medium",
    MAX_ARRAY_LENGTH=20,
    MAX_ARRAY_VALUE=999,
    HOST="0.0.0.0",
    PORT=5000,
    DEBUG=False,
)
app.config.from_prefixed_env()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class UnknownAlgorithm(ValueError):
    """Raised for a registry key that does not exist (→ 404)."""


@app.errorhandler(UnknownAlgorithm)
def handle_unknown_algorithm(exc):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 404


@app.errorhandler(ValueError)
def handle_bad_input(exc):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(RuntimeError)
def handle_bad_state(exc):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_state():
    """Current session state with defaults filled in."""
    return {
        "algorithm":    session.get("algorithm"),
        "params":       session.get("params", {}),
        "current_step": session.get("current_step", 0),
        "is_playing":   session.get("is_playing", False),
        "speed":        session.get("speed", app.config["DEFAULT_SPEED"]),
    }


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def json_body():
    """The request body as a dict; an absent or unparsable body is empty."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def require_algorithm(key):
    info = get_algorithm(key) if isinstance(key, str) else None
    if info is None:
        raise UnknownAlgorithm(f"Unknown algorithm: {key}")
    return info


def parse_array(raw):
    """Accept a JSON list or a comma-separated string of integers."""
    if isinstance(raw, str):
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise ValueError(f"Array must contain integers only: {raw!r}") from None
    elif isinstance(raw, list):
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in raw):
            raise ValueError("Array must contain integers only")
        values = list(raw)
    else:
        raise ValueError("Array must be a list of integers or a comma-separated string")

    if not values:
        raise ValueError("Array must not be empty")
    limit = app.config["MAX_ARRAY_LENGTH"]
    if len(values) > limit:
        raise ValueError(f"Array is too long ({len(values)} > {limit})")
    bound = app.config["MAX_ARRAY_VALUE"]
    if any(abs(v) > bound for v in values):
        raise ValueError(f"Array values must lie within ±{bound}")
    return values


def parse_int(name, raw):
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{name} must be an integer")
    return raw


def build_params(info, body):
    """Pick generator params out of a request body and validate them."""
    params = {}
    for name in ("array", "seed", "target"):
        if body.get(name) is None:
            continue
        if name not in info.params:
            raise ValueError(f"{info.key} does not accept parameter: {name}")
        if name == "array":
            params["array"] = parse_array(body["array"])
        elif name == "seed":
            params["seed"] = parse_int("seed", body["seed"])
        elif "array" in info.params:
            # searching over an int array
            params["target"] = parse_int("target", body["target"])
        else:
            params["target"] = str(body["target"])
    # a skip list run must be replayable from the session alone
    if "seed" in info.params and "seed" not in params:
        params["seed"] = secrets.randbelow(2 ** 31)
    return params


def parse_speed(raw):
    if isinstance(raw, str) and raw in SPEED_PRESETS:
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw > 0:
        return float(raw)
    raise ValueError(f"Unknown speed {raw!r}; expected one of {', '.join(SPEED_PRESETS)} or seconds")


def record(key, params):
    rec = Recorder()
    rec.start(key, **params)
    rec.run_to_completion()
    return rec


def session_stepper():
    """Regenerate the session's trace and position a Stepper on its cursor."""
    state = get_state()
    if not state["algorithm"]:
        raise RuntimeError("Run an algorithm first")
    info = require_algorithm(state["algorithm"])
    rec = record(info.key, state["params"])
    stepper: Stepper = rec.stepper
    stepper.set_speed(state["speed"])
    stepper.goto(min(state["current_step"], stepper.total_steps - 1))
    if state["is_playing"]:
        stepper.state = StepperState.PLAYING
    return info, rec, stepper


def step_payload(stepper):
    return {
        "step":         stepper.current_step.to_dict(),
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps,
        "is_playing":   stepper.is_playing,
    }


def save_cursor(stepper):
    set_state(current_step=stepper.current_idx, is_playing=stepper.is_playing)


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    tag = request.args.get("tag")
    algos = [a for a in list_algorithms() if tag is None or tag in a.tags]
    return jsonify({"algorithms": [a.to_dict() for a in algos]})


@app.route("/api/algorithms/<key>")
def api_algorithm(key):
    return jsonify(require_algorithm(key).to_dict(with_pseudocode=True))


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    body = json_body()
    key = body.get("algorithm") or get_state()["algorithm"]
    if not key:
        raise ValueError("No algorithm selected")
    info = require_algorithm(key)
    params = build_params(info, body)
    speed = parse_speed(body["speed"]) if "speed" in body else get_state()["speed"]

    rec = record(info.key, params)
    stepper = rec.stepper

    start_at = body.get("step", 0)
    if not stepper.goto(parse_int("step", start_at)):
        raise ValueError(f"Invalid step index {start_at} (trace has {stepper.total_steps} steps)")

    set_state(algorithm=info.key, params=params, speed=speed)
    save_cursor(stepper)
    logger.info("Run %s with %s: %d steps", info.key, params, stepper.total_steps)

    payload = step_payload(stepper)
    payload.update({
        "algorithm":  info.key,
        "params":     params,
        "pseudocode": info.pseudocode,
        "metrics":    rec.export()["metrics"],
    })
    return jsonify(payload)


@app.route("/api/steps")
def api_steps():
    info, rec, stepper = session_stepper()
    exported = rec.export()
    return jsonify({
        "algorithm":    info.key,
        "current_step": stepper.current_idx,
        "steps":        exported["steps"],
        "metrics":      exported["metrics"],
    })


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    _, _, stepper = session_stepper()
    if not stepper.step_forward():
        return jsonify({"error": "Already at last step"}), 400
    save_cursor(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    _, _, stepper = session_stepper()
    if not stepper.step_back():
        return jsonify({"error": "Already at first step"}), 400
    save_cursor(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    body = json_body()
    idx = parse_int("index", body.get("index", 0))
    _, _, stepper = session_stepper()
    if not stepper.goto(idx):
        return jsonify({"error": "Invalid step index"}), 400
    save_cursor(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/reset", methods=["POST"])
def api_step_reset():
    _, _, stepper = session_stepper()
    stepper.reset()
    save_cursor(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    _, _, stepper = session_stepper()
    stepper.toggle_play()
    save_cursor(stepper)
    return jsonify(step_payload(stepper))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    body = json_body()
    speed = parse_speed(body.get("speed", app.config["DEFAULT_SPEED"]))
    set_state(speed=speed)
    seconds = SPEED_PRESETS[speed] if isinstance(speed, str) else max(MIN_SPEED, speed)
    return jsonify({"speed": speed, "seconds": seconds})


# ---------------------------------------------------------------------------
# API: Share state
# ---------------------------------------------------------------------------
@app.route("/api/state")
def api_state():
    state = get_state()
    fragment = {"step": state["current_step"], "speed": state["speed"]}
    if state["algorithm"]:
        fragment["algorithm"] = state["algorithm"]
    if "array" in state["params"]:
        fragment["array"] = state["params"]["array"]
    return jsonify(fragment)


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    body = json_body()
    left, right = require_algorithm(body.get("left")), require_algorithm(body.get("right"))
    for info in (left, right):
        if not info.is_sorting:
            raise ValueError(f"{info.key} is not a sorting algorithm")

    params = {}
    if body.get("array") is not None:
        params["array"] = parse_array(body["array"])

    result = compare(record(left.key, params), record(right.key, params))
    logger.info(
        "Compared %s vs %s: comparisons→%s swaps→%s",
        left.key, right.key, result.winner_comparisons, result.winner_swaps,
    )
    return jsonify(result.to_dict())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  Algorithm Step Visualizer")
    print("  Starting Flask server...")
    print(f"  Open http://localhost:{app.config['PORT']}/api/algorithms")
    print("=" * 60)
    app.run(debug=app.config["DEBUG"], host=app.config["HOST"], port=app.config["PORT"])

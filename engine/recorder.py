"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete run (all Steps), then computes the metrics card the
analytics panel and Comparison Mode need.

Usage:
    rec = Recorder()
    rec.start("quick_sort", array=[5, 3, 8, 1])
    rec.run_to_completion()          # exhausts the generator
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # JSON-ready snapshot for save/replay

Comparison Mode:
    Hold two Recorders (one per algorithm), run both to completion on the
    SAME input, then call compare(rec1, rec2) → ComparisonResult.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Step
from engine.stepper import Stepper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:          str   = ""
    algo_label:        str   = ""
    params:            Dict[str, Any] = field(default_factory=dict)
    total_steps:       int   = 0          # number of Steps yielded
    comparisons:       int   = 0
    swaps:             int   = 0
    final_operation:   str   = ""
    final_description: str   = ""
    wall_time_ms:      float = 0.0        # wall-clock time to run to completion


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: label of the cheaper run, or "tie"
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_steps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : A Stepper loaded with the trace, ready for playback.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo] = None
        self._params:    Dict[str, Any]     = {}
        self._generator                     = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, **params: Any) -> None:
        """Validate the key and parameters and build the generator."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")
        unknown = sorted(set(params) - set(info.params))
        if unknown:
            raise ValueError(f"{algo_key} does not accept parameter(s): {', '.join(unknown)}")

        self._algo_info = info
        self._params    = dict(params)
        self._generator = info.fn(**params)
        self.steps      = []
        self.metrics    = None
        self.stepper    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self._generator is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.steps = list(self._generator)
        wall_ms = (time.monotonic() - started) * 1000
        self._generator = None

        self.stepper = Stepper()
        self.stepper.load(self.steps)

        self.metrics = self._compute_metrics(wall_ms)
        logger.debug(
            "%s finished: %d steps in %.2f ms",
            self.metrics.algo_key, self.metrics.total_steps, self.metrics.wall_time_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   self._params,
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None
        counters = last.metrics if last else {}

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            params=dict(self._params),
            total_steps=len(self.steps),
            comparisons=counters.get("comparisons", 0),
            swaps=counters.get("swaps", 0),
            final_operation=last.operation if last else "",
            final_description=last.description if last else "",
            wall_time_ms=round(wall_ms, 2),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps      =winner(l.swaps, r.swaps),
        winner_steps      =winner(l.total_steps, r.total_steps),
    )

"""
engine/
-------
Playback & recording layer over finished step traces.

    from engine import Stepper, Recorder, compare
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS, MIN_SPEED
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "MIN_SPEED",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]

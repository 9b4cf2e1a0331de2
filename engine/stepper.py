"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the only object a front end drives during playback.
It holds a finished trace (every Step of a run) and exposes a
play / pause / next / prev / goto / speed API over it.

State machine:
    STOPPED →  load()          →  PAUSED
    PAUSED  →  play()          →  PLAYING
    PLAYING →  pause()         →  PAUSED
    PLAYING →  (last step)     →  PAUSED
    any     →  reset()         →  STOPPED   (cursor back to 0)

Auto-play keeps exactly one pending deadline.  tick() advances one step
once the deadline has passed and schedules the next; pause() and reset()
cancel it.  The clock is injectable so tests can drive time by hand.

Thread safety:
  Not thread-safe.  Call every method from the thread that owns the
  host loop.
"""

import time
from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from algorithms.step import Step


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    STOPPED = "stopped"
    PAUSED  = "paused"
    PLAYING = "playing"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_SPEED = 0.02


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The loaded trace.
        current_idx : Index into `steps` that is currently displayed.
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Step) fired every time the cursor moves.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Step], None]] = None,
        clock:   Callable[[], float] = time.monotonic,
    ):
        self.steps:       List[Step]    = []
        self.current_idx: int          = 0
        self.state:       StepperState = StepperState.STOPPED
        self.speed:       float        = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Step], None]] = on_step

        self._clock = clock
        # the single pending auto-advance deadline (None = nothing scheduled)
        self._deadline: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Iterable[Step]) -> None:
        """Take a trace (list or generator), show step 0, and pause."""
        buffered = list(steps)
        if not buffered:
            raise ValueError("Cannot load an empty trace.")
        self._cancel()
        self.steps = buffered
        self.state = StepperState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Cursor back to 0, auto-play cancelled, state STOPPED."""
        self._cancel()
        self.state = StepperState.STOPPED
        if self.steps:
            self._goto(0)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  Returns False (cursor unchanged) at the end."""
        if not self.steps or self.is_at_end:
            return False
        self._goto(self.current_idx + 1)
        return True

    def step_back(self) -> bool:
        """Rewind one step.  Returns False (cursor unchanged) at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto(self, idx: int) -> bool:
        """Jump to an arbitrary index.  Out-of-range indices are rejected."""
        if not 0 <= idx < len(self.steps):
            return False
        self._goto(idx)
        return True

    def jump_to_end(self) -> None:
        self._cancel()
        if self.steps:
            self._goto(len(self.steps) - 1)
            self.state = StepperState.PAUSED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> bool:
        """Start auto-play.  At the last step this replays from 0."""
        if not self.steps:
            return False
        if self.is_at_end:
            self._goto(0)
        self.state = StepperState.PLAYING
        self._schedule()
        return True

    def pause(self) -> None:
        self._cancel()
        if self.steps:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and the pending
        deadline has passed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING or self._deadline is None:
            return False
        if self._clock() < self._deadline:
            return False
        self._deadline = None
        self.step_forward()
        if self.is_at_end:
            self.state = StepperState.PAUSED
        else:
            self._schedule()
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: Union[str, float]) -> None:
        """Accept a preset name or a number of seconds."""
        if isinstance(preset, str):
            if preset not in SPEED_PRESETS:
                raise ValueError(
                    f"Unknown speed preset {preset!r}; expected one of {', '.join(SPEED_PRESETS)}"
                )
            self.set_speed_value(SPEED_PRESETS[preset])
        else:
            self.set_speed_value(preset)

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_SPEED, float(seconds))
        # a running countdown picks up the new interval
        if self._deadline is not None:
            self._schedule()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_at_end(self) -> bool:
        return bool(self.steps) and self.current_idx == len(self.steps) - 1

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    @property
    def has_pending_tick(self) -> bool:
        return self._deadline is not None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        self._deadline = self._clock() + self.speed

    def _cancel(self) -> None:
        self._deadline = None

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.steps[idx])

    def _notify(self, step: Step) -> None:
        if self.on_step:
            self.on_step(step)

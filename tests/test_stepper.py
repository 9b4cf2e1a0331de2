"""Tests for the playback Stepper, driven by a hand-advanced clock."""

import pytest

from algorithms.step import Step
from engine.stepper import MIN_SPEED, SPEED_PRESETS, Stepper, StepperState


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def _trace(n=5):
    return [Step(step_number=i, operation="done" if i == n - 1 else "op", is_final=i == n - 1) for i in range(n)]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stepper(clock):
    s = Stepper(clock=clock)
    s.load(_trace())
    return s


# ── Loading ──────────────────────────────────────────────────────────

class TestLoad:
    def test_new_stepper_is_stopped(self):
        s = Stepper()
        assert s.state == StepperState.STOPPED
        assert s.current_step is None
        assert s.total_steps == 0

    def test_load_shows_first_step_paused(self, stepper):
        assert stepper.state == StepperState.PAUSED
        assert stepper.current_idx == 0
        assert stepper.total_steps == 5

    def test_load_accepts_a_generator(self):
        s = Stepper()
        s.load(step for step in _trace(3))
        assert s.total_steps == 3

    def test_empty_trace_rejected(self):
        with pytest.raises(ValueError):
            Stepper().load([])

    def test_on_step_fires_on_every_move(self):
        seen = []
        s = Stepper(on_step=lambda step: seen.append(step.step_number))
        s.load(_trace(3))
        s.step_forward()
        s.step_back()
        s.goto(2)
        assert seen == [0, 1, 0, 2]


# ── Navigation ───────────────────────────────────────────────────────

class TestNavigation:
    def test_forward_and_back(self, stepper):
        assert stepper.step_forward()
        assert stepper.current_idx == 1
        assert stepper.step_back()
        assert stepper.current_idx == 0

    def test_back_at_start_is_a_no_op(self, stepper):
        assert not stepper.step_back()
        assert stepper.current_idx == 0

    def test_forward_at_end_is_a_no_op(self, stepper):
        stepper.jump_to_end()
        assert stepper.is_at_end
        assert not stepper.step_forward()
        assert stepper.current_idx == 4

    @pytest.mark.parametrize("idx", [-1, 5, 100])
    def test_goto_out_of_range(self, stepper, idx):
        assert not stepper.goto(idx)
        assert stepper.current_idx == 0

    def test_goto(self, stepper):
        assert stepper.goto(3)
        assert stepper.current_step.step_number == 3

    def test_reset(self, stepper):
        stepper.goto(3)
        stepper.play()
        stepper.reset()
        assert stepper.state == StepperState.STOPPED
        assert stepper.current_idx == 0
        assert not stepper.has_pending_tick


# ── Auto-play ────────────────────────────────────────────────────────

class TestPlayback:
    """tick() keeps exactly one pending deadline while playing."""

    def test_tick_waits_for_the_deadline(self, stepper, clock):
        stepper.set_speed(0.5)
        stepper.play()
        clock.advance(0.25)
        assert not stepper.tick()
        clock.advance(0.25)
        assert stepper.tick()
        assert stepper.current_idx == 1

    def test_one_step_per_tick(self, stepper, clock):
        stepper.play()
        clock.advance(10)
        assert stepper.tick()
        assert stepper.current_idx == 1
        # the next deadline is scheduled from the current time
        assert not stepper.tick()

    def test_plays_to_the_end_then_pauses(self, stepper, clock):
        stepper.play()
        for _ in range(4):
            clock.advance(stepper.speed)
            stepper.tick()
        assert stepper.is_at_end
        assert stepper.state == StepperState.PAUSED
        assert not stepper.has_pending_tick

    def test_pause_cancels_the_pending_tick(self, stepper, clock):
        stepper.play()
        stepper.pause()
        assert not stepper.has_pending_tick
        clock.advance(10)
        assert not stepper.tick()
        assert stepper.current_idx == 0

    def test_play_at_end_replays_from_start(self, stepper):
        stepper.jump_to_end()
        stepper.play()
        assert stepper.current_idx == 0
        assert stepper.is_playing

    def test_toggle(self, stepper):
        stepper.toggle_play()
        assert stepper.is_playing
        stepper.toggle_play()
        assert stepper.state == StepperState.PAUSED

    def test_play_without_trace(self):
        assert not Stepper().play()


# ── Speed ────────────────────────────────────────────────────────────

class TestSpeed:
    @pytest.mark.parametrize("name", sorted(SPEED_PRESETS))
    def test_presets(self, stepper, name):
        stepper.set_speed(name)
        assert stepper.speed == SPEED_PRESETS[name]

    def test_unknown_preset(self, stepper):
        with pytest.raises(ValueError):
            stepper.set_speed("ludicrous")

    def test_speed_has_a_floor(self, stepper):
        stepper.set_speed(0)
        assert stepper.speed == MIN_SPEED

    def test_speed_change_reschedules(self, stepper, clock):
        stepper.set_speed("slow")
        stepper.play()
        stepper.set_speed("turbo")
        clock.advance(SPEED_PRESETS["turbo"])
        assert stepper.tick()

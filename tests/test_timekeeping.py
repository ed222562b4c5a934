from __future__ import annotations

import pytest

from relativity_lab.core.timekeeping import DilationClocks


def test_moving_clock_runs_slow() -> None:
    clocks = DilationClocks(step=0.05, velocity=0.6)
    clocks.tick()
    clocks.tick()
    assert clocks.stationary_time == pytest.approx(0.1)
    assert clocks.moving_time == pytest.approx(0.08)


def test_paused_clocks_do_not_advance() -> None:
    clocks = DilationClocks(velocity=0.5)
    assert clocks.toggle() is False
    clocks.tick()
    assert clocks.stationary_time == 0.0
    assert clocks.toggle() is True


def test_reset_zeroes_and_pauses() -> None:
    clocks = DilationClocks(velocity=0.5)
    clocks.tick()
    clocks.reset()
    assert (clocks.stationary_time, clocks.moving_time) == (0.0, 0.0)
    assert clocks.playing is False


def test_new_velocity_restarts_clocks() -> None:
    clocks = DilationClocks(velocity=0.5, playing=False)
    clocks.stationary_time = 3.0
    clocks.set_velocity(0.8)
    assert clocks.velocity == 0.8
    assert clocks.stationary_time == 0.0
    assert clocks.playing is True
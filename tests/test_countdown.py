"""Tests for the countdown timer."""
import pytest

from custom_components.rainbird_local.countdown import CountdownTimer
from custom_components.rainbird_local.models import RuntimeState

from .common import FakeClock


@pytest.fixture
def published():
    return []


@pytest.fixture
def timer(hass, clock, published, call_later):
    return CountdownTimer(hass, RuntimeState(), published.append, clock=clock)


def test_start_ticks_immediately(timer, published, call_later):
    timer.state.end_time = 1000.0 + 3661
    timer.start()
    assert published == ["01:01:01"]
    assert timer.running
    assert call_later.call_count == 1


def test_reschedules_on_second_boundary(hass, published, call_later):
    clock = FakeClock(1000.25)
    timer = CountdownTimer(hass, RuntimeState(end_time=1100.0), published.append, clock=clock)
    timer.start()
    delay = call_later.call_args.args[1]
    assert delay == pytest.approx(0.75)
    assert call_later.call_args.args[2] == timer.tick


def test_start_is_idempotent(timer, published, call_later):
    timer.state.end_time = 1060.0
    timer.start()
    timer.start()
    assert call_later.call_count == 1
    assert published == ["00:01:00"]


def test_tick_counts_down(timer, clock, published, call_later):
    timer.state.end_time = 1060.0
    timer.start()
    clock.now = 1001.0
    timer.tick(None)
    assert published == ["00:01:00", "00:00:59"]
    assert call_later.call_count == 2


def test_tick_past_end_stops_itself(timer, clock, published, call_later):
    timer.state.end_time = 1002.0
    timer.start()
    clock.now = 1002.0
    timer.tick(None)
    assert published[-1] == "-"
    assert not timer.running
    assert call_later.call_count == 1


def test_tick_without_end_time(timer, published, call_later):
    timer.start()
    assert published == ["-"]
    assert not timer.running
    call_later.assert_not_called()


def test_stop_cancels_pending_tick(timer, call_later):
    timer.state.end_time = 1060.0
    timer.start()
    unsub = timer._unsub
    timer.stop()
    timer.stop()
    unsub.assert_called_once()
    assert not timer.running


def test_late_tick_after_stop_is_ignored(timer, clock, published):
    timer.state.end_time = 1060.0
    timer.start()
    timer.stop()
    clock.now = 1001.0
    timer.tick(None)
    assert published == ["00:01:00"]


def test_restart_after_stop(timer, clock, published, call_later):
    timer.state.end_time = 1060.0
    timer.start()
    timer.stop()
    timer.state.end_time = 1120.0
    timer.start()
    assert published == ["00:01:00", "00:02:00"]
    assert call_later.call_count == 2

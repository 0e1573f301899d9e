"""Tests for long-press detection and the exit gesture."""

import logging
from unittest.mock import Mock

import pytest

from weatherdialog.core import ButtonRegistry, ExitGestureTracker, GestureDetector
from weatherdialog.models import Floor


@pytest.fixture
def registry():
    return ButtonRegistry()


@pytest.fixture
def on_long_press():
    return Mock()


@pytest.fixture
def detector(registry, scheduler, on_long_press):
    return GestureDetector(
        registry,
        scheduler,
        {1: (1, 2), 2: (3, 4), 3: (5, 6)},
        3000,
        on_long_press,
    )


def hold(registry, detector, *buttons, current_floor=None):
    armed = False
    for button in buttons:
        registry.press(button)
        armed = detector.on_press(button, current_floor)
    return armed


@pytest.mark.unit
class TestGestureDetector:
    """One timer per floor while its pair is held."""

    def test_pair_lookup(self, detector):
        assert detector.pair_of(1) == Floor.FIRST
        assert detector.pair_of(4) == Floor.SECOND
        assert detector.pair_of(6) == Floor.THIRD
        assert detector.pair_of(0) is None

    def test_fires_after_threshold(self, registry, detector, scheduler, on_long_press):
        assert hold(registry, detector, 3, 4)
        assert detector.is_pending(Floor.SECOND)

        scheduler.advance(2999)
        on_long_press.assert_not_called()

        scheduler.advance(1)
        on_long_press.assert_called_once_with(Floor.SECOND)
        assert not detector.is_pending(Floor.SECOND)

    def test_one_button_does_not_arm(self, registry, detector):
        assert not hold(registry, detector, 1)
        assert not detector.is_pending(Floor.FIRST)

    def test_current_floor_does_not_arm(self, registry, detector):
        assert not hold(registry, detector, 1, 2, current_floor=Floor.FIRST)
        assert not detector.is_pending(Floor.FIRST)

    def test_release_cancels(self, registry, detector, scheduler, on_long_press, caplog):
        hold(registry, detector, 1, 2)
        scheduler.advance(1000)

        registry.release(2)
        with caplog.at_level(logging.INFO):
            assert detector.on_release(2) == Floor.FIRST
        assert "released before 3 seconds" in caplog.text

        scheduler.advance(5000)
        on_long_press.assert_not_called()

    def test_release_without_timer(self, detector):
        assert detector.on_release(5) is None
        assert detector.on_release(0) is None

    def test_repress_restarts_timer(self, registry, detector, scheduler, on_long_press):
        hold(registry, detector, 1, 2)
        scheduler.advance(2000)
        # re-pressing an already held button re-arms from now
        hold(registry, detector, 2)

        scheduler.advance(1500)
        on_long_press.assert_not_called()
        scheduler.advance(1500)
        on_long_press.assert_called_once_with(Floor.FIRST)

    def test_stale_fire_is_dropped(self, registry, detector, scheduler, on_long_press):
        hold(registry, detector, 5, 6)
        # released behind the detector's back
        registry.release(5)

        scheduler.advance(3000)
        on_long_press.assert_not_called()

    def test_floors_are_independent(self, registry, detector, scheduler, on_long_press):
        hold(registry, detector, 1, 2)
        scheduler.advance(1000)
        hold(registry, detector, 3, 4)

        scheduler.advance(2000)
        on_long_press.assert_called_once_with(Floor.FIRST)
        scheduler.advance(1000)
        assert on_long_press.call_count == 2
        on_long_press.assert_called_with(Floor.SECOND)

    def test_cancel_all(self, registry, detector, scheduler, on_long_press):
        hold(registry, detector, 1, 2, 3, 4)
        detector.cancel_all()
        scheduler.advance(5000)
        on_long_press.assert_not_called()


@pytest.mark.unit
class TestExitGestureTracker:
    """Four presses of the exit button within three seconds."""

    def test_completes_on_fourth_press(self):
        tracker = ExitGestureTracker()
        for i, t in enumerate([0, 500, 1000, 1500], start=1):
            assert tracker.press(t) == i
        assert tracker.completed
        assert tracker.release()

    def test_not_complete_before_fourth(self):
        tracker = ExitGestureTracker()
        tracker.press(0)
        tracker.press(100)
        tracker.press(200)
        assert not tracker.release()

    def test_window_edge_still_counts(self):
        tracker = ExitGestureTracker()
        tracker.press(0)
        assert tracker.press(3000) == 2

    def test_slow_press_restarts(self, caplog):
        tracker = ExitGestureTracker()
        tracker.press(0)
        tracker.press(1000)
        with caplog.at_level(logging.WARNING):
            assert tracker.press(3001) == 1
        assert "Too slow" in caplog.text
        assert tracker.sequence.window_start == 3001

    def test_reset(self):
        tracker = ExitGestureTracker(required_presses=2, window_ms=500)
        tracker.press(0)
        tracker.press(10)
        assert tracker.completed
        tracker.reset()
        assert not tracker.completed
        assert tracker.sequence.window_start is None

    def test_custom_settings(self):
        tracker = ExitGestureTracker(required_presses=2, window_ms=500)
        tracker.press(0)
        assert tracker.press(600) == 1
        assert tracker.press(1000) == 2
        assert tracker.completed

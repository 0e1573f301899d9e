"""Tests for LED mapping, the per-mode store, the stepper and the strip."""

from unittest.mock import Mock

import pytest

from weatherdialog.core import LedMapper, LocalLedStepper, ModeLedStore
from weatherdialog.devices import LedDriver, LedStrip
from weatherdialog.exceptions import InvalidLedIndexError
from weatherdialog.models import LED_OFF, LED_ON, BlinkMode, Color, Floor, ModeKey
from weatherdialog.protocols import StripObserver


@pytest.fixture
def stepper(strip):
    return LocalLedStepper(strip, LedMapper(), ModeLedStore())


@pytest.mark.unit
class TestLedMapper:
    """Window slots to physical LEDs."""

    @pytest.mark.parametrize(
        "floor, local, physical",
        [
            (Floor.FIRST, 0, 0),
            (Floor.FIRST, 9, 9),
            (Floor.SECOND, 0, 10),
            (Floor.SECOND, 5, 15),
            (Floor.THIRD, 9, 29),
            (None, 3, 3),
        ],
    )
    def test_to_physical(self, floor, local, physical):
        assert LedMapper().to_physical(floor, local) == physical

    @pytest.mark.parametrize("local", [-1, 10])
    def test_out_of_window(self, local):
        with pytest.raises(InvalidLedIndexError, match="Must be 0-9"):
            LedMapper().to_physical(Floor.FIRST, local)

    def test_physical_range(self):
        assert list(LedMapper().physical_range(Floor.THIRD)) == list(range(20, 30))


@pytest.mark.unit
class TestModeLedStore:
    """Saved windows and counters."""

    def test_defaults(self):
        store = ModeLedStore()
        assert store.counts() == {mode: 0 for mode in (ModeKey.RAIN, ModeKey.WIND, ModeKey.HOUR, ModeKey.POLLUTION)}
        assert store.snapshot(ModeKey.HOUR) == [False] * 10
        assert not store.is_initialized(ModeKey.RAIN)

    def test_adjust_count_clamps(self):
        store = ModeLedStore()
        assert store.adjust_count(ModeKey.WIND, -1) == 0
        assert store.adjust_count(ModeKey.WIND, 15) == 10

    def test_snapshot_is_a_copy(self):
        store = ModeLedStore()
        pattern = [True] + [False] * 9
        store.save(ModeKey.RAIN, pattern)
        pattern[1] = True

        snap = store.snapshot(ModeKey.RAIN)
        assert snap == [True] + [False] * 9
        snap[2] = True
        assert store.snapshot(ModeKey.RAIN)[2] is False

    def test_reset(self):
        store = ModeLedStore()
        store.adjust_count(ModeKey.RAIN, 3)
        store.mark_initialized(ModeKey.RAIN)
        store.reset()
        assert store.counts()[ModeKey.RAIN] == 0
        assert not store.is_initialized(ModeKey.RAIN)

    def test_summary_has_no_leds(self):
        with pytest.raises(KeyError):
            ModeLedStore().state(ModeKey.SUMMARY)


@pytest.mark.unit
class TestLocalLedStepper:
    """The +/- stepper on the active window."""

    def test_increment_fills_from_the_start(self, stepper, strip):
        assert stepper.increment(ModeKey.RAIN, Floor.SECOND) == 0
        assert stepper.increment(ModeKey.RAIN, Floor.SECOND) == 1
        assert strip.lit == [10, 11]
        assert strip.color_at(10) == LED_ON

    def test_increment_full_window(self, stepper):
        for _ in range(10):
            stepper.increment(ModeKey.RAIN, Floor.FIRST)
        assert stepper.increment(ModeKey.RAIN, Floor.FIRST) is None
        assert stepper.window == [True] * 10

    def test_decrement_takes_last_lit(self, stepper, strip):
        for _ in range(3):
            stepper.increment(ModeKey.HOUR, Floor.THIRD)
        assert stepper.decrement(ModeKey.HOUR, Floor.THIRD) == 2
        assert strip.lit == [20, 21]

    def test_decrement_empty_window(self, stepper):
        assert stepper.decrement(ModeKey.HOUR, Floor.THIRD) is None

    def test_save_and_restore_on_another_floor(self, stepper, strip):
        stepper.increment(ModeKey.WIND, Floor.FIRST)
        stepper.increment(ModeKey.WIND, Floor.FIRST)
        stepper.save(ModeKey.WIND)
        stepper.blank_floor(Floor.FIRST)
        stepper.clear()
        assert strip.lit == []

        stepper.restore(ModeKey.WIND, Floor.THIRD)
        assert strip.lit == [20, 21]
        assert stepper.window[:3] == [True, True, False]

    def test_render_local_invalid_slot_is_skipped(self, stepper, strip, caplog):
        stepper.render_local(Floor.FIRST, 12, LED_ON)
        assert strip.lit == []
        assert "Invalid local LED index: 12" in caplog.text

    def test_blank_floor_leaves_other_floors(self, strip, stepper):
        strip.all_set_color("red")
        stepper.blank_floor(Floor.SECOND)
        assert strip.lit == list(range(10)) + list(range(20, 30))


@pytest.mark.unit
class TestLedStrip:
    """In-memory strip, observers and downstream drivers."""

    def test_is_led_driver(self, strip):
        assert isinstance(strip, LedDriver)
        assert strip.size == 30

    def test_render(self, strip):
        red = Color.from_name("red")
        strip.render(4, red, BlinkMode.PULSE)
        assert strip.color_at(4) == red
        assert strip.blink_at(4) == BlinkMode.PULSE
        assert strip.is_lit(4)

    @pytest.mark.parametrize("index", [-1, 30])
    def test_render_out_of_range(self, strip, index):
        with pytest.raises(InvalidLedIndexError):
            strip.render(index, LED_ON)

    def test_all_set_color_and_off(self, strip):
        strip.all_set_color("blue", BlinkMode.BLINK)
        assert len(strip.lit) == 30
        assert strip.blink_at(29) == BlinkMode.BLINK

        strip.all_off()
        assert strip.lit == []
        assert strip.blink_at(29) == BlinkMode.STEADY

    def test_unknown_color_name(self, strip):
        with pytest.raises(ValueError, match="Unknown color"):
            strip.all_set_color("mauve")

    def test_observers_see_each_led(self, strip):
        observer = Mock(spec=StripObserver)
        strip.register_observer(observer)

        strip.render(7, LED_ON)
        observer.on_led_changed.assert_called_once_with(7, LED_ON, BlinkMode.STEADY)

        strip.all_off()
        assert observer.on_led_changed.call_count == 31

    def test_driver_mirrors_calls(self, strip):
        driver = Mock(spec=LedDriver)
        strip.add_driver(driver)
        # replays current contents on attach
        assert driver.render.call_count == 30

        strip.render(3, LED_ON)
        driver.render.assert_called_with(3, LED_ON, BlinkMode.STEADY)
        strip.all_set_color("pink", BlinkMode.PULSE)
        driver.all_set_color.assert_called_once_with("pink", BlinkMode.PULSE)

        strip.remove_driver(driver)
        strip.all_off()
        driver.all_off.assert_not_called()

    def test_failing_driver_is_isolated(self, strip, caplog):
        bad = Mock(spec=LedDriver)
        bad.render.side_effect = RuntimeError("unplugged")
        good = Mock(spec=LedDriver)
        strip.add_driver(bad)
        strip.add_driver(good)
        good.render.reset_mock()

        strip.render(0, LED_ON)

        good.render.assert_called_once_with(0, LED_ON, BlinkMode.STEADY)
        assert strip.color_at(0) == LED_ON
        assert "unplugged" in caplog.text

    def test_off_color_is_not_lit(self, strip):
        strip.render(0, LED_OFF)
        assert not strip.is_lit(0)

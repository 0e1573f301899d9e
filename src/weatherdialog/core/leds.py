"""Logical LED windows, per-mode saved patterns and the +/- stepper.

The strip has 30 LEDs split into three floors of ten. The dialog only ever
reasons about the ten LEDs of the active floor (the *window*); LedMapper
translates window slots to physical indices.
"""

import logging

from weatherdialog.devices.protocols import LedDriver
from weatherdialog.exceptions import InvalidLedIndexError
from weatherdialog.models import (
    LED_MODES,
    LED_OFF,
    LED_ON,
    LEDS_PER_FLOOR,
    MAX_COUNT,
    Color,
    Floor,
    ModeKey,
    ModeLedState,
)

logger = logging.getLogger(__name__)


class LedMapper:
    """Maps window slots 0-9 to physical LEDs of a floor."""

    def __init__(self, leds_per_floor: int = LEDS_PER_FLOOR):
        self._size = leds_per_floor

    def physical_range(self, floor: Floor | None) -> range:
        """Physical indices of a floor. No floor means floor 1."""
        start = ((floor or Floor.FIRST) - 1) * self._size
        return range(start, start + self._size)

    def to_physical(self, floor: Floor | None, local_index: int) -> int:
        """
        Raises:
            InvalidLedIndexError: If ``local_index`` is outside the window
        """
        if not 0 <= local_index < self._size:
            raise InvalidLedIndexError(local_index, self._size)
        return self.physical_range(floor)[local_index]


class ModeLedStore:
    """Saved window and counter of each LED mode."""

    def __init__(self):
        self._states: dict[ModeKey, ModeLedState] = {}
        self.reset()

    def reset(self) -> None:
        self._states = {mode: ModeLedState() for mode in LED_MODES}

    def state(self, mode: ModeKey) -> ModeLedState:
        return self._states[mode]

    def adjust_count(self, mode: ModeKey, delta: int) -> int:
        """Move a counter by ``delta``, clamped to 0-10. Returns the new count."""
        state = self._states[mode]
        state.count = max(0, min(MAX_COUNT, state.count + delta))
        return state.count

    def save(self, mode: ModeKey, pattern: list[bool]) -> None:
        self._states[mode].pattern = list(pattern)

    def snapshot(self, mode: ModeKey) -> list[bool]:
        """Copy of the saved pattern."""
        return list(self._states[mode].pattern)

    def mark_initialized(self, mode: ModeKey) -> None:
        self._states[mode].initialized = True

    def is_initialized(self, mode: ModeKey) -> bool:
        return self._states[mode].initialized

    def counts(self) -> dict[ModeKey, int]:
        return {mode: state.count for mode, state in self._states.items()}


class LocalLedStepper:
    """
    The active window and its +/- stepper.

    ``increment`` lights the first dark slot and ``decrement`` darkens the
    last lit one, so the lit slots always form a prefix when only the
    stepper touches them.
    """

    def __init__(self, driver: LedDriver, mapper: LedMapper, store: ModeLedStore):
        self._driver = driver
        self._mapper = mapper
        self._store = store
        self._window = [False] * LEDS_PER_FLOOR

    @property
    def window(self) -> list[bool]:
        return list(self._window)

    def increment(self, mode: ModeKey, floor: Floor | None) -> int | None:
        """
        Light the first dark slot.

        Returns:
            The slot lit, or None when the window is full
        """
        try:
            slot = self._window.index(False)
        except ValueError:
            return None
        self._window[slot] = True
        self.render_local(floor, slot, LED_ON)
        count = self._store.adjust_count(mode, +1)
        logger.info(f"LED Stepper +: local LED {slot} on ({mode.value} count {count}/{MAX_COUNT})")
        return slot

    def decrement(self, mode: ModeKey, floor: Floor | None) -> int | None:
        """
        Darken the last lit slot.

        Returns:
            The slot darkened, or None when the window is empty
        """
        lit = [i for i, on in enumerate(self._window) if on]
        if not lit:
            return None
        slot = lit[-1]
        self._window[slot] = False
        self.render_local(floor, slot, LED_OFF)
        count = self._store.adjust_count(mode, -1)
        logger.info(f"LED Stepper -: local LED {slot} off ({mode.value} count {count}/{MAX_COUNT})")
        return slot

    def render_local(self, floor: Floor | None, local_index: int, color: Color) -> None:
        """Render one window slot; invalid slots are logged and skipped."""
        try:
            physical = self._mapper.to_physical(floor, local_index)
        except InvalidLedIndexError as e:
            logger.warning(e.user_message)
            return
        logger.debug(f"Local LED {local_index} -> physical LED {physical} (floor {floor})")
        self._driver.render(physical, color)

    def blank_floor(self, floor: Floor | None) -> None:
        """Turn off every physical LED of a floor."""
        for physical in self._mapper.physical_range(floor):
            self._driver.render(physical, LED_OFF)

    def save(self, mode: ModeKey) -> None:
        """Snapshot the window into ``mode``."""
        self._store.save(mode, self._window)

    def restore(self, mode: ModeKey, floor: Floor | None) -> None:
        """Make ``mode``'s snapshot the window and draw it on ``floor``."""
        self._window = self._store.snapshot(mode)
        for slot, on in enumerate(self._window):
            self.render_local(floor, slot, LED_ON if on else LED_OFF)

    def clear(self) -> None:
        self._window = [False] * LEDS_PER_FLOOR

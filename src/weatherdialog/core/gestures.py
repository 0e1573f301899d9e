"""Long-press detection on the three floor button pairs."""

import logging
from collections.abc import Callable

from weatherdialog.models import Floor

from .buttons import ButtonRegistry
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class GestureDetector:
    """
    Arms one timer per floor while both buttons of its pair are held.

    A floor can only be armed when it differs from the active floor, so
    holding the pair you are already standing on never fires. When the
    threshold elapses both buttons are checked again; a fire whose pair has
    since been released is dropped without reaching ``on_long_press``.
    """

    def __init__(
        self,
        registry: ButtonRegistry,
        scheduler: Scheduler,
        floor_pairs: dict[int, tuple[int, int]],
        threshold_ms: float,
        on_long_press: Callable[[Floor], None],
    ):
        """
        Args:
            registry: Shared button state
            scheduler: Timer facility
            floor_pairs: Floor number -> its two buttons
            threshold_ms: How long both buttons must stay held
            on_long_press: Called with the floor once a hold completes
        """
        self._registry = registry
        self._scheduler = scheduler
        self._pairs = {Floor(floor): tuple(pair) for floor, pair in floor_pairs.items()}
        self._threshold_ms = threshold_ms
        self._on_long_press = on_long_press
        self._timers: dict[Floor, TimerHandle] = {}

    @property
    def threshold_ms(self) -> float:
        return self._threshold_ms

    def pair_of(self, button_id: int) -> Floor | None:
        """Floor whose pair contains ``button_id``, if any."""
        for floor, pair in self._pairs.items():
            if button_id in pair:
                return floor
        return None

    def both_pressed(self, floor: Floor) -> bool:
        return self._registry.all_pressed(*self._pairs[floor])

    def is_pending(self, floor: Floor) -> bool:
        return floor in self._timers

    def on_press(self, button_id: int, current_floor: Floor | None) -> bool:
        """
        Arm (or re-arm) the timer of the pressed button's floor.

        Returns:
            True if a timer was armed
        """
        floor = self.pair_of(button_id)
        if floor is None or floor == current_floor:
            return False
        if not self.both_pressed(floor):
            return False

        existing = self._timers.pop(floor, None)
        if existing is not None:
            existing.cancel()

        self._timers[floor] = self._scheduler.call_later(
            self._threshold_ms, lambda: self._fire(floor)
        )
        logger.debug(f"Floor {floor.value} armed ({self._threshold_ms}ms)")
        return True

    def on_release(self, button_id: int) -> Floor | None:
        """
        Cancel the pending timer of the released button's floor.

        Returns:
            The floor whose timer was cancelled, or None
        """
        floor = self.pair_of(button_id)
        if floor is None:
            return None
        handle = self._timers.pop(floor, None)
        if handle is None:
            return None
        handle.cancel()
        logger.info(
            f"Floor {floor.value} timer cancelled - button {button_id} released "
            f"before {self._threshold_ms / 1000:g} seconds"
        )
        return floor

    def cancel_all(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    def _fire(self, floor: Floor) -> None:
        self._timers.pop(floor, None)
        if not self.both_pressed(floor):
            logger.debug(f"Floor {floor.value} timer fired but pair no longer held, ignoring")
            return
        logger.info(f"Floor {floor.value} long-pressed ({self._threshold_ms}ms threshold reached)")
        self._on_long_press(floor)

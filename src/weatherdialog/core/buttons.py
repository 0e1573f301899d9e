"""Press/release state of the ten panel buttons."""

import logging

from weatherdialog.exceptions import InvalidButtonError
from weatherdialog.models import BUTTON_COUNT

logger = logging.getLogger(__name__)


class ButtonRegistry:
    """Tracks which of the buttons 0-9 are currently held down."""

    def __init__(self, size: int = BUTTON_COUNT):
        self._size = size
        self._pressed = [False] * size

    def _check(self, button_id: int) -> int:
        if not isinstance(button_id, int) or isinstance(button_id, bool):
            raise InvalidButtonError(button_id)
        if not 0 <= button_id < self._size:
            raise InvalidButtonError(button_id)
        return button_id

    def press(self, button_id: int) -> None:
        self._pressed[self._check(button_id)] = True

    def release(self, button_id: int) -> None:
        self._pressed[self._check(button_id)] = False

    def is_pressed(self, button_id: int) -> bool:
        return self._pressed[self._check(button_id)]

    def all_pressed(self, *button_ids: int) -> bool:
        """True when every given button is held."""
        return all(self.is_pressed(b) for b in button_ids)

    @property
    def pressed(self) -> list[int]:
        """Ids of the buttons currently held, ascending."""
        return [i for i, down in enumerate(self._pressed) if down]

    def reset(self) -> None:
        self._pressed = [False] * self._size

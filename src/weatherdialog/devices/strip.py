"""In-memory model of the 30-LED strip."""

import logging

from weatherdialog.exceptions import InvalidLedIndexError
from weatherdialog.model_manager import ObserverManager
from weatherdialog.models import STRIP_LENGTH, BlinkMode, Color
from weatherdialog.protocols import StripObserver

from .protocols import LedDriver

logger = logging.getLogger(__name__)


class LedStrip:
    """
    Source of truth for what the strip shows.

    Implements LedDriver itself and mirrors every call to the downstream
    drivers (e.g. a MIDI Launchpad). A failing downstream driver is logged
    and does not stop the others or the in-memory state.
    """

    def __init__(self, size: int = STRIP_LENGTH):
        self._size = size
        self._colors: list[Color] = [Color.off()] * size
        self._blink: list[BlinkMode] = [BlinkMode.STEADY] * size
        self._drivers: list[LedDriver] = []
        self._observers = ObserverManager[StripObserver](observer_type_name="strip")

    @property
    def size(self) -> int:
        return self._size

    def add_driver(self, driver: LedDriver) -> None:
        """Mirror this strip onto ``driver``, starting with the current contents."""
        if driver in self._drivers:
            return
        self._drivers.append(driver)
        for index in range(self._size):
            self._forward("render", index, self._colors[index], self._blink[index])

    def remove_driver(self, driver: LedDriver) -> None:
        if driver in self._drivers:
            self._drivers.remove(driver)

    def register_observer(self, observer: StripObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: StripObserver) -> None:
        self._observers.unregister(observer)

    # =================================================================
    # LedDriver
    # =================================================================

    def render(self, index: int, color: Color, blink: BlinkMode = BlinkMode.STEADY) -> None:
        if not 0 <= index < self._size:
            raise InvalidLedIndexError(index, self._size)
        self._set(index, color, blink)
        self._forward("render", index, color, blink)

    def all_off(self) -> None:
        for index in range(self._size):
            self._set(index, Color.off(), BlinkMode.STEADY)
        self._forward("all_off")

    def all_set_color(self, name: str, blink: BlinkMode = BlinkMode.STEADY) -> None:
        """
        Raises:
            ValueError: If ``name`` is not a known colour
        """
        color = Color.from_name(name)
        for index in range(self._size):
            self._set(index, color, blink)
        self._forward("all_set_color", name, blink)

    # =================================================================
    # Queries
    # =================================================================

    def color_at(self, index: int) -> Color:
        return self._colors[index]

    def blink_at(self, index: int) -> BlinkMode:
        return self._blink[index]

    def is_lit(self, index: int) -> bool:
        return not self._colors[index].is_off

    @property
    def lit(self) -> list[int]:
        """Indices of every LED that is not off."""
        return [i for i, color in enumerate(self._colors) if not color.is_off]

    def _set(self, index: int, color: Color, blink: BlinkMode) -> None:
        self._colors[index] = color
        self._blink[index] = blink
        self._observers.notify("on_led_changed", index, color, blink)

    def _forward(self, method: str, *args) -> None:
        for driver in list(self._drivers):
            try:
                getattr(driver, method)(*args)
            except Exception as e:
                logger.error(f"LED driver {driver} failed on {method}: {e}", exc_info=True)

"""Capability protocols for the dialog's hardware collaborators."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from weatherdialog.models import BlinkMode

if TYPE_CHECKING:
    from weatherdialog.models import ButtonEvent, Color, VoicePreset


ButtonCallback = Callable[["ButtonEvent", int], None]


@runtime_checkable
class LedDriver(Protocol):
    """Protocol for anything that can show the 30-LED strip."""

    def render(self, index: int, color: Color, blink: BlinkMode = BlinkMode.STEADY) -> None:
        """
        Set a single physical LED.

        Args:
            index: Physical LED index (0-29)
            color: 8-bit RGB colour
            blink: Animation mode
        """
        ...

    def all_off(self) -> None:
        """Turn every LED off."""
        ...

    def all_set_color(self, name: str, blink: BlinkMode = BlinkMode.STEADY) -> None:
        """
        Set every LED to a named colour.

        Args:
            name: Colour name (see ``NAMED_COLORS``)
            blink: Animation mode
        """
        ...


@runtime_checkable
class SpeechEngine(Protocol):
    """Protocol for text-to-speech engines."""

    def speak(self, text: str, voice: VoicePreset | None = None) -> None:
        """
        Start speaking ``text``. Returns immediately.

        A new request replaces any speech in progress.
        """
        ...

    def stop(self) -> None:
        """Silence any speech in progress. The finished callback does not run."""
        ...

    @property
    def is_speaking(self) -> bool:
        """True between ``speak`` and the finished callback."""
        ...

    def on_finished(self, callback: Callable[[], None]) -> None:
        """
        Register the callback run each time speech ends.

        Note:
            ``is_speaking`` must already be False when the callback runs.
        """
        ...


@runtime_checkable
class InputSource(Protocol):
    """Protocol for button sources (MIDI pads, UI panels)."""

    def on_button(self, callback: ButtonCallback) -> None:
        """Register the callback receiving (event, button_id)."""
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

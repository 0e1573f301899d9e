"""Launchpad pads as the ten dialog buttons."""

import logging

import mido

from weatherdialog.devices.protocols import ButtonCallback
from weatherdialog.models import ButtonEvent

from .manager import MidiManager

logger = logging.getLogger(__name__)


class MidiButtonInput:
    """
    Turns note on/off messages into button events.

    Only notes listed in ``button_notes`` are reported. The callback runs on
    mido's I/O thread; callers marshal onto their event loop.
    """

    def __init__(self, midi: MidiManager, button_notes: dict[int, int]):
        """
        Args:
            midi: Manager owning the input port
            button_notes: MIDI note -> button id
        """
        self._midi = midi
        self._button_notes = dict(button_notes)
        self._callback: ButtonCallback | None = None

    def on_button(self, callback: ButtonCallback) -> None:
        self._callback = callback

    def start(self) -> None:
        self._midi.on_message(self.handle_message)

    def stop(self) -> None:
        self._midi.on_message(lambda msg: None)

    def parse_message(self, msg: mido.Message) -> tuple[ButtonEvent, int] | None:
        """Map a message to (event, button_id), or None if it is not a button."""
        if msg.type not in ("note_on", "note_off"):
            return None
        button_id = self._button_notes.get(msg.note)
        if button_id is None:
            return None
        if msg.type == "note_on" and msg.velocity > 0:
            return ButtonEvent.PRESSED, button_id
        return ButtonEvent.RELEASED, button_id

    def handle_message(self, msg: mido.Message) -> None:
        parsed = self.parse_message(msg)
        if parsed is None:
            return
        event, button_id = parsed
        logger.debug(f"Button {button_id} {event.value} (note {msg.note})")
        if self._callback:
            self._callback(event, button_id)

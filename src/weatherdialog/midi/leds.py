"""The 30-LED strip drawn on Launchpad pads."""

import logging

from weatherdialog.models import STRIP_LENGTH, BlinkMode, Color
from weatherdialog.protocols import DeviceEvent

from .manager import MidiManager
from .sysex import LaunchpadSysEx

logger = logging.getLogger(__name__)


class MidiLedDriver:
    """
    LedDriver sending SysEx to a Launchpad in programmer mode.

    Keeps the last frame so a replugged device is redrawn as soon as its
    output port comes back.
    """

    def __init__(self, midi: MidiManager, led_notes: list[int], model: str = "mini_mk3"):
        self._midi = midi
        self._notes = list(led_notes)
        self.sysex = LaunchpadSysEx(model)
        self._frame: list[tuple[Color, BlinkMode]] = [(Color.off(), BlinkMode.STEADY)] * STRIP_LENGTH

    def render(self, index: int, color: Color, blink: BlinkMode = BlinkMode.STEADY) -> None:
        self._frame[index] = (color, blink)
        self._send([self.sysex.color_spec(self._notes[index], color, blink)])

    def all_off(self) -> None:
        self._fill(Color.off(), BlinkMode.STEADY)

    def all_set_color(self, name: str, blink: BlinkMode = BlinkMode.STEADY) -> None:
        self._fill(Color.from_name(name), blink)

    def redraw(self) -> None:
        """Send the whole frame."""
        self._send(
            [self.sysex.color_spec(note, color, blink) for note, (color, blink) in zip(self._notes, self._frame)]
        )

    def on_device_event(self, event: DeviceEvent, port_name: str) -> None:
        if event == DeviceEvent.CONTROLLER_CONNECTED:
            if self._midi.send(self.sysex.programmer_mode(enable=True)):
                logger.info(f"Entered programmer mode on {port_name}")
            self.redraw()

    def shutdown(self) -> None:
        """Clear the pads and leave programmer mode."""
        self._fill(Color.off(), BlinkMode.STEADY)
        if self._midi.send(self.sysex.programmer_mode(enable=False)):
            logger.info("Exited programmer mode")

    def _fill(self, color: Color, blink: BlinkMode) -> None:
        self._frame = [(color, blink)] * STRIP_LENGTH
        self.redraw()

    def _send(self, specs: list[tuple[int, ...]]) -> None:
        if not self._midi.send(self.sysex.led_lighting(specs)):
            logger.debug(f"LED update dropped ({len(specs)} LEDs), no MIDI output connected")

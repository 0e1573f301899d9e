"""MIDI hardware: Launchpad pads as buttons and as the LED strip."""

from .buttons import MidiButtonInput
from .leds import MidiLedDriver
from .manager import MidiManager
from .sysex import LaunchpadSysEx, LightingMode

__all__ = [
    "LaunchpadSysEx",
    "LightingMode",
    "MidiButtonInput",
    "MidiLedDriver",
    "MidiManager",
]

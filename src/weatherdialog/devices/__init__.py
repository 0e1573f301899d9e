"""Hardware-facing collaborators of the dialog controller."""

from .protocols import ButtonCallback, InputSource, LedDriver, SpeechEngine
from .strip import LedStrip

__all__ = [
    "ButtonCallback",
    "InputSource",
    "LedDriver",
    "LedStrip",
    "SpeechEngine",
]

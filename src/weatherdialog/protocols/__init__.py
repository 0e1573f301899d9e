"""Protocol definitions for the dialog's observer interfaces."""

from .events import DeviceEvent, DialogEvent
from .observers import DeviceObserver, DialogObserver, StripObserver

__all__ = [
    "DeviceEvent",
    "DeviceObserver",
    "DialogEvent",
    "DialogObserver",
    "StripObserver",
]

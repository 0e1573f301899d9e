"""Core dialog logic: button state, gestures, LED windows and the controller."""

from .buttons import ButtonRegistry
from .dialog import DialogController
from .exit_gesture import ExitGestureTracker
from .gestures import GestureDetector
from .leds import LedMapper, LocalLedStepper, ModeLedStore
from .scheduler import LoopScheduler, Scheduler, TimerHandle, VirtualScheduler

__all__ = [
    "ButtonRegistry",
    "DialogController",
    "ExitGestureTracker",
    "GestureDetector",
    "LedMapper",
    "LocalLedStepper",
    "LoopScheduler",
    "ModeLedStore",
    "Scheduler",
    "TimerHandle",
    "VirtualScheduler",
]

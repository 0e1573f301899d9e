"""Domain events for observer pattern.

This module defines events that can occur within the application:
- Dialog events: State machine progress and rejected input
- Device events: MIDI controller hot-plug
"""

from enum import Enum


class DialogEvent(Enum):
    """Events from the dialog controller."""

    STATE_ENTERED = "state_entered"          # Entry action about to run (state=)
    FLOOR_CHANGED = "floor_changed"          # Floor committed (floor=, previous=)
    COUNT_CHANGED = "count_changed"          # Stepper moved (mode=, count=)
    GESTURE_ARMED = "gesture_armed"          # Long-press timer started (floor=)
    GESTURE_CANCELLED = "gesture_cancelled"  # Long-press timer dropped (floor=)
    EXIT_PROGRESS = "exit_progress"          # Exit button press counted (presses=)
    INPUT_REJECTED = "input_rejected"        # Guard refused an event (reason=)
    SPEECH_REQUESTED = "speech_requested"    # Text handed to the speech engine (text=)


class DeviceEvent(Enum):
    """Events from MIDI hardware."""

    CONTROLLER_CONNECTED = "controller_connected"
    CONTROLLER_DISCONNECTED = "controller_disconnected"

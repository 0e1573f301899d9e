"""Enumerations for the weather dialog."""

from enum import Enum, IntEnum


class DialogState(str, Enum):
    """States of the guided dialog, in the order a visitor meets them."""

    INITIALISATION = "initialisation"
    WAITING_FOR_GROUND = "waiting-for-ground"
    WELCOME = "welcome"
    CHOOSE_RAIN = "choose-rain"
    CHOOSE_WIND = "choose-wind"
    CHOOSE_HOUR = "choose-hour"
    CHOOSE_POLLUTION = "choose-pollution"
    SUMMARY = "summary"
    FINAL = "final"

    @property
    def mode(self) -> "ModeKey | None":
        """Mode owned by this state, if any."""
        return STATE_MODES.get(self)


class ModeKey(str, Enum):
    """Dialog modes. Only the first four own an LED pattern and counter."""

    RAIN = "rain"
    WIND = "wind"
    HOUR = "hour"
    POLLUTION = "pollution"
    SUMMARY = "summary"
    FINAL = "final"


class SessionStatus(str, Enum):
    """
    Session status of the dialog controller.

    One tagged value instead of independent started/awaiting/continue flags,
    so that e.g. "not started but awaiting input" cannot be represented.
    """

    IDLE = "idle"                                     # start() not called yet
    AWAITING_INPUT = "awaiting-input"                 # accepting button events
    AWAITING_CONTINUATION = "awaiting-continuation"   # resumes when speech ends
    FINISHED = "finished"                             # terminal state reached


class Floor(IntEnum):
    """A floor is selected by holding one of three button pairs."""

    FIRST = 1
    SECOND = 2
    THIRD = 3


class ButtonEvent(str, Enum):
    """Raw input events from a button source."""

    PRESSED = "pressed"
    RELEASED = "released"


class BlinkMode(IntEnum):
    """LED animation modes understood by LED drivers."""

    STEADY = 0
    BLINK = 1
    PULSE = 2


CHOOSE_STATES = (
    DialogState.CHOOSE_RAIN,
    DialogState.CHOOSE_WIND,
    DialogState.CHOOSE_HOUR,
    DialogState.CHOOSE_POLLUTION,
)

LED_MODES = (ModeKey.RAIN, ModeKey.WIND, ModeKey.HOUR, ModeKey.POLLUTION)

STATE_MODES = {
    DialogState.CHOOSE_RAIN: ModeKey.RAIN,
    DialogState.CHOOSE_WIND: ModeKey.WIND,
    DialogState.CHOOSE_HOUR: ModeKey.HOUR,
    DialogState.CHOOSE_POLLUTION: ModeKey.POLLUTION,
    DialogState.SUMMARY: ModeKey.SUMMARY,
    DialogState.FINAL: ModeKey.FINAL,
}

# Fixed cycle followed on every floor switch
NEXT_STATE = {
    DialogState.CHOOSE_RAIN: DialogState.CHOOSE_WIND,
    DialogState.CHOOSE_WIND: DialogState.CHOOSE_HOUR,
    DialogState.CHOOSE_HOUR: DialogState.CHOOSE_POLLUTION,
    DialogState.CHOOSE_POLLUTION: DialogState.SUMMARY,
}

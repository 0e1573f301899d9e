"""Data models for the weather dialog."""

from .color import LED_OFF, LED_ON, NAMED_COLORS, Color
from .config import (
    BUTTON_COUNT,
    DEFAULT_CONFIG_PATH,
    FLOOR_COUNT,
    STRIP_LENGTH,
    AppConfig,
    DialogConfig,
    MidiConfig,
    SpeechConfig,
    VoicePreset,
)
from .enums import (
    CHOOSE_STATES,
    LED_MODES,
    NEXT_STATE,
    BlinkMode,
    ButtonEvent,
    DialogState,
    Floor,
    ModeKey,
    SessionStatus,
)
from .session import (
    LEDS_PER_FLOOR,
    MAX_COUNT,
    DialogSession,
    ExitSequence,
    GroundState,
    ModeLedState,
)

__all__ = [
    "BUTTON_COUNT",
    "CHOOSE_STATES",
    "DEFAULT_CONFIG_PATH",
    "FLOOR_COUNT",
    "LEDS_PER_FLOOR",
    "LED_MODES",
    "LED_OFF",
    "LED_ON",
    "MAX_COUNT",
    "NAMED_COLORS",
    "NEXT_STATE",
    "STRIP_LENGTH",
    # Config
    "AppConfig",
    # Enums
    "BlinkMode",
    "ButtonEvent",
    # Models
    "Color",
    "DialogConfig",
    "DialogSession",
    "DialogState",
    "ExitSequence",
    "Floor",
    "GroundState",
    "MidiConfig",
    "ModeKey",
    "ModeLedState",
    "SessionStatus",
    "SpeechConfig",
    "VoicePreset",
]

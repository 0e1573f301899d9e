"""Application configuration model."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from weatherdialog.model_manager.persistence import PydanticPersistence

from .session import LEDS_PER_FLOOR

BUTTON_COUNT = 10
FLOOR_COUNT = 3
STRIP_LENGTH = LEDS_PER_FLOOR * FLOOR_COUNT

DEFAULT_CONFIG_PATH = Path.home() / ".weatherdialog" / "config.json"


def _default_led_notes() -> list[int]:
    # Launchpad programmer-mode grid, bottom row first (note 11 is bottom-left)
    grid = [11 + row * 10 + col for row in range(8) for col in range(8)]
    return grid[:STRIP_LENGTH]


def _default_button_notes() -> dict[int, int]:
    # Top row of the grid plus two pads below it
    notes = [81, 82, 83, 84, 85, 86, 87, 88, 71, 72]
    return {note: button for button, note in enumerate(notes)}


def _check_button(button: int) -> int:
    if not 0 <= button < BUTTON_COUNT:
        raise ValueError(f"Button id {button} out of range (0-{BUTTON_COUNT - 1})")
    return button


class DialogConfig(BaseModel):
    """Gesture and dialog timing settings."""

    long_press_threshold_ms: int = Field(
        default=3000, gt=0, description="How long both buttons of a pair must be held (ms)"
    )
    floor_pairs: dict[int, tuple[int, int]] = Field(
        default_factory=lambda: {1: (1, 2), 2: (3, 4), 3: (5, 6)},
        description="Floor number -> the two buttons that select it",
    )
    stepper_buttons: dict[int, tuple[int, int]] = Field(
        default_factory=lambda: {1: (5, 6), 2: (1, 2), 3: (3, 4)},
        description="Floor number -> (minus, plus) stepper buttons while that floor is active",
    )
    debug_aliases: dict[int, int] = Field(
        default_factory=lambda: {7: 1, 8: 2, 9: 3},
        description="Button -> floor whose long-press it simulates",
    )
    exit_button: int = Field(default=0, description="Button used for the exit gesture")
    exit_press_count: int = Field(default=4, gt=0, description="Presses needed to leave the summary")
    exit_window_ms: int = Field(default=3000, gt=0, description="Window for the exit presses (ms)")

    @field_validator("exit_button")
    @classmethod
    def validate_exit_button(cls, v: int) -> int:
        """Ensure the exit button exists."""
        return _check_button(v)

    @field_validator("floor_pairs")
    @classmethod
    def validate_floor_pairs(cls, v: dict[int, tuple[int, int]]) -> dict[int, tuple[int, int]]:
        """Ensure the pairs partition six distinct buttons over floors 1-3."""
        if sorted(v) != list(range(1, FLOOR_COUNT + 1)):
            raise ValueError(f"floor_pairs must define floors 1-{FLOOR_COUNT}, got {sorted(v)}")
        members = [_check_button(b) for pair in v.values() for b in pair]
        if len(set(members)) != len(members):
            raise ValueError("floor_pairs must not share buttons")
        return v

    @field_validator("stepper_buttons")
    @classmethod
    def validate_stepper_buttons(cls, v: dict[int, tuple[int, int]]) -> dict[int, tuple[int, int]]:
        """Ensure every floor has two distinct stepper buttons."""
        if sorted(v) != list(range(1, FLOOR_COUNT + 1)):
            raise ValueError(f"stepper_buttons must define floors 1-{FLOOR_COUNT}, got {sorted(v)}")
        for floor, (minus, plus) in v.items():
            _check_button(minus)
            _check_button(plus)
            if minus == plus:
                raise ValueError(f"Floor {floor} uses button {minus} for both + and -")
        return v

    @field_validator("debug_aliases")
    @classmethod
    def validate_debug_aliases(cls, v: dict[int, int]) -> dict[int, int]:
        """Ensure aliases point at real floors."""
        for button, floor in v.items():
            _check_button(button)
            if not 1 <= floor <= FLOOR_COUNT:
                raise ValueError(f"Debug alias {button} targets unknown floor {floor}")
        return v

    @model_validator(mode="after")
    def validate_button_roles(self) -> "DialogConfig":
        """Debug aliases and the exit button must not double as floor buttons."""
        pair_members = {b for pair in self.floor_pairs.values() for b in pair}
        if self.exit_button in pair_members:
            raise ValueError(f"Exit button {self.exit_button} is already part of a floor pair")
        for button in self.debug_aliases:
            if button in pair_members or button == self.exit_button:
                raise ValueError(f"Debug alias button {button} is already used")
        return self


class VoicePreset(BaseModel):
    """Voice used for narration."""

    voice: str = Field(default="en", description="espeak voice name")
    rate: int = Field(default=160, gt=0, description="Words per minute")
    pitch: int = Field(default=50, ge=0, le=99, description="Pitch (0-99)")


class SpeechConfig(BaseModel):
    """Speech engine settings."""

    engine: Literal["espeak", "simulated"] = Field(
        default="simulated", description="Speech engine to use"
    )
    voice: VoicePreset = Field(default_factory=VoicePreset, description="Narration voice")
    espeak_command: str = Field(default="espeak", description="espeak executable")
    simulated_words_per_minute: int = Field(
        default=180, gt=0, description="Reading speed of the simulated engine"
    )


class MidiConfig(BaseModel):
    """MIDI hardware settings (Launchpad buttons and LEDs)."""

    enabled: bool = Field(default=True, description="Connect to MIDI hardware")
    port_filter: str = Field(default="Launchpad", description="Substring matched against port names")
    launchpad_model: Literal["x", "mini_mk3", "pro_mk3"] = Field(
        default="mini_mk3", description="Launchpad model, selects the SysEx header"
    )
    poll_interval: float = Field(
        default=2.0, gt=0, description="How often to check for MIDI device changes (seconds)"
    )
    button_notes: dict[int, int] = Field(
        default_factory=_default_button_notes, description="MIDI note -> button id"
    )
    led_notes: list[int] = Field(
        default_factory=_default_led_notes, description="MIDI note of each physical LED, in strip order"
    )

    @field_validator("button_notes")
    @classmethod
    def validate_button_notes(cls, v: dict[int, int]) -> dict[int, int]:
        """Ensure notes map to valid buttons."""
        for button in v.values():
            _check_button(button)
        return v

    @field_validator("led_notes")
    @classmethod
    def validate_led_notes(cls, v: list[int]) -> list[int]:
        """Ensure there is one note per physical LED."""
        if len(v) != STRIP_LENGTH:
            raise ValueError(f"led_notes must list {STRIP_LENGTH} notes, got {len(v)}")
        if len(set(v)) != len(v):
            raise ValueError("led_notes must not repeat notes")
        return v


class AppConfig(BaseModel):
    """Application configuration and settings."""

    dialog: DialogConfig = Field(default_factory=DialogConfig, description="Dialog settings")
    speech: SpeechConfig = Field(default_factory=SpeechConfig, description="Speech settings")
    midi: MidiConfig = Field(default_factory=MidiConfig, description="MIDI settings")

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.weatherdialog/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)

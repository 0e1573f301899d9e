"""In-memory session models owned by the dialog controller."""

from pydantic import BaseModel, Field, field_validator

from .enums import DialogState, Floor, SessionStatus

LEDS_PER_FLOOR = 10
MAX_COUNT = 10


def _empty_pattern() -> list[bool]:
    return [False] * LEDS_PER_FLOOR


class DialogSession(BaseModel):
    """
    Status and state bookkeeping for one dialog session.

    ``current_state`` records the last state whose entry action ran (for display
    and audit), ``target_state`` is the state the next dispatch will enter.
    """

    status: SessionStatus = Field(default=SessionStatus.IDLE, description="Session status")
    current_state: DialogState | str | None = Field(default=None, description="Last entered state")
    target_state: DialogState | str | None = Field(default=None, description="State to enter next")

    @property
    def started(self) -> bool:
        """Check if start() has been called."""
        return self.status != SessionStatus.IDLE

    @property
    def awaiting_input(self) -> bool:
        """Check if button events are currently accepted."""
        return self.status == SessionStatus.AWAITING_INPUT

    @property
    def continue_after_speech(self) -> bool:
        """Check if the dialog resumes once speech finishes."""
        return self.status == SessionStatus.AWAITING_CONTINUATION


class GroundState(BaseModel):
    """Which floor is active and which floor last completed a long-press."""

    current_floor: Floor | None = Field(default=None, description="Active floor")
    last_floor: Floor | None = Field(default=None, description="Last committed floor")

    def commit(self, floor: Floor) -> None:
        """Make a floor both current and last committed."""
        self.current_floor = floor
        self.last_floor = floor


class ModeLedState(BaseModel):
    """Saved LED window and counter of one mode."""

    count: int = Field(default=0, ge=0, le=MAX_COUNT, description="Lit LED counter (0-10)")
    pattern: list[bool] = Field(default_factory=_empty_pattern, description="Saved 10-slot window")
    initialized: bool = Field(default=False, description="Whether the mode has been entered")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: list[bool]) -> list[bool]:
        """Ensure the pattern covers exactly one floor."""
        if len(v) != LEDS_PER_FLOOR:
            raise ValueError(f"LED pattern must have {LEDS_PER_FLOOR} slots, got {len(v)}")
        return v


class ExitSequence(BaseModel):
    """Progress of the exit gesture."""

    press_count: int = Field(default=0, ge=0, description="Presses in the current window")
    window_start: float | None = Field(default=None, description="First press time (ms)")

    def reset(self) -> None:
        """Forget any partial gesture."""
        self.press_count = 0
        self.window_start = None

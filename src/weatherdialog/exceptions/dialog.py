"""Dialog controller exceptions.

None of these ever escape the controller: they are raised at the point of
failure and turned into a warning by the public entry points.
"""

from typing import Any

from .base import WeatherDialogError


class DialogError(WeatherDialogError):
    """Base class for non-fatal dialog failures."""

    def __init__(self, user_message: str, technical_message: str | None = None):
        super().__init__(user_message, technical_message=technical_message, recoverable=True)


class GuardViolation(DialogError):
    """A preliminary dispatch or input check failed."""

    NOT_STARTED = "not started yet, call start() first"
    NOT_AWAITING_INPUT = "user input is not allowed at this time"
    SPEAKING = "speaking, please wait until speech is finished"
    NO_TARGET = "target state is empty"

    def __init__(self, reason: str):
        """
        Args:
            reason: One of the class-level reason strings
        """
        super().__init__(reason, technical_message=f"Guard violation: {reason}")
        self.reason = reason


class UnknownStateError(DialogError):
    """The target state has no entry action."""

    def __init__(self, state: Any):
        super().__init__(
            f'State "{state}" has no entry action',
            technical_message=f"Unknown dialog state: {state!r}",
        )
        self.state = state


class InvalidLedIndexError(DialogError):
    """A logical LED index outside 0-9 was requested."""

    def __init__(self, index: int, size: int = 10):
        super().__init__(
            f"Invalid local LED index: {index}. Must be 0-{size - 1}.",
        )
        self.index = index


class InvalidButtonError(DialogError):
    """A button id outside the panel was received."""

    def __init__(self, button_id: Any):
        super().__init__(f"Unknown button: {button_id!r}")
        self.button_id = button_id

"""Speech engine exceptions."""

from .base import WeatherDialogError


class SpeechEngineError(WeatherDialogError):
    """The speech engine could not produce audio."""

    def __init__(self, command: str, original_error: str):
        """
        Args:
            command: Executable that failed
            original_error: Error reported by the OS or the process
        """
        super().__init__(
            user_message=f"Speech engine '{command}' is not available",
            technical_message=f"Failed to run {command}: {original_error}",
            recoverable=True,
            recovery_hint=(
                f"Install {command} (e.g. 'apt install espeak') or set "
                "speech.engine to \"simulated\" in your configuration"
            ),
        )
        self.command = command
        self.original_error = original_error

"""Speech through the espeak command-line synthesizer."""

import asyncio
import logging
import subprocess
from collections.abc import Callable

from weatherdialog.exceptions import SpeechEngineError
from weatherdialog.models import VoicePreset

logger = logging.getLogger(__name__)


class EspeakSpeechEngine:
    """
    Runs one ``espeak`` process per utterance on the current event loop.

    A new ``speak`` terminates the process still talking; only the latest
    utterance reports completion. If espeak cannot be started the error is
    logged and the utterance finishes immediately so the dialog never waits
    on a voice that will not come.
    """

    def __init__(self, command: str = "espeak", voice: VoicePreset | None = None):
        self._command = command
        self._default_voice = voice or VoicePreset()
        self._callbacks: list[Callable[[], None]] = []
        self._process: asyncio.subprocess.Process | None = None
        self._task: asyncio.Task | None = None
        self._generation = 0
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    def on_finished(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def build_command(self, text: str, voice: VoicePreset | None = None) -> list[str]:
        voice = voice or self._default_voice
        return [
            self._command,
            "-v", voice.voice,
            "-s", str(voice.rate),
            "-p", str(voice.pitch),
            text,
        ]

    def speak(self, text: str, voice: VoicePreset | None = None) -> None:
        """Start speaking. Must be called from the event loop thread."""
        self._interrupt()
        self._generation += 1
        self._speaking = True
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(self.build_command(text, voice), self._generation))

    def stop(self) -> None:
        """Silence the current utterance without reporting it finished."""
        self._generation += 1
        self._interrupt()
        self._speaking = False

    def _interrupt(self) -> None:
        if self._process is not None and self._process.returncode is None:
            logger.debug("Interrupting current speech")
            try:
                self._process.terminate()
            except ProcessLookupError:
                pass
        self._process = None

    async def _run(self, argv: list[str], generation: int) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *argv, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE
            )
            if generation != self._generation:
                process.terminate()
                await process.wait()
                return
            self._process = process
            _, stderr = await process.communicate()
            if process.returncode and generation == self._generation:
                logger.warning(
                    f"{self._command} exited with {process.returncode}: "
                    f"{stderr.decode(errors='replace').strip()}"
                )
        except OSError as e:
            error = SpeechEngineError(self._command, str(e))
            logger.error(error.technical_message)
            logger.error(error.recovery_hint)
        finally:
            if generation == self._generation:
                self._process = None
                self._speaking = False
                for callback in list(self._callbacks):
                    callback()

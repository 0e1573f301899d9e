"""Speech engine that only pretends to talk."""

import logging
from collections.abc import Callable

from weatherdialog.core.scheduler import Scheduler, TimerHandle
from weatherdialog.models import VoicePreset

logger = logging.getLogger(__name__)


class SimulatedSpeechEngine:
    """
    Logs the text and finishes after the time it would take to read it.

    Used by the simulator when no espeak binary is around, and handy on a
    VirtualScheduler for offline runs.
    """

    def __init__(self, scheduler: Scheduler, words_per_minute: int = 180):
        self._scheduler = scheduler
        self._ms_per_word = 60_000 / words_per_minute
        self._handle: TimerHandle | None = None
        self._callbacks: list[Callable[[], None]] = []
        self.last_text: str | None = None

    @property
    def is_speaking(self) -> bool:
        return self._handle is not None

    def on_finished(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def duration_ms(self, text: str) -> float:
        return max(len(text.split()), 1) * self._ms_per_word

    def speak(self, text: str, voice: VoicePreset | None = None) -> None:
        if self._handle is not None:
            logger.debug("Interrupting current speech")
            self._handle.cancel()
        self.last_text = text
        duration = self.duration_ms(text)
        logger.info(f"[{voice.voice if voice else 'default'}] {text} ({duration / 1000:.1f}s)")
        self._handle = self._scheduler.call_later(duration, self._finish)

    def stop(self) -> None:
        """Drop the current speech without reporting it finished."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _finish(self) -> None:
        self._handle = None
        for callback in list(self._callbacks):
            callback()

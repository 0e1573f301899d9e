"""Pytest fixtures for tests."""

from collections.abc import Callable
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from weatherdialog.core import DialogController, VirtualScheduler
from weatherdialog.devices import LedStrip
from weatherdialog.models import ButtonEvent, DialogConfig, DialogState, Floor, VoicePreset


class FakeSpeechEngine:
    """Speech engine that talks until the test calls ``finish()``."""

    def __init__(self):
        self.spoken: list[str] = []
        self.voices: list[VoicePreset | None] = []
        self._speaking = False
        self.stops = 0
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    def on_finished(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def speak(self, text: str, voice: VoicePreset | None = None) -> None:
        self.spoken.append(text)
        self.voices.append(voice)
        self._speaking = True

    def stop(self) -> None:
        self.stops += 1
        self._speaking = False

    def finish(self) -> None:
        self._speaking = False
        for callback in list(self._callbacks):
            callback()

    @property
    def last(self) -> str | None:
        return self.spoken[-1] if self.spoken else None


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def scheduler():
    """Deterministic clock starting at 0ms."""
    return VirtualScheduler()


@pytest.fixture
def strip():
    """In-memory 30-LED strip."""
    return LedStrip()


@pytest.fixture
def speech():
    """Speech engine driven by the test."""
    return FakeSpeechEngine()


@pytest.fixture
def dialog_config():
    """Default gesture settings (3s long-press, button 0 x4 in 3s to exit)."""
    return DialogConfig()


@pytest.fixture
def controller(strip, speech, scheduler, dialog_config):
    """Controller that has not been started."""
    return DialogController(strip, speech, scheduler, config=dialog_config)


class DialogDriver:
    """Small vocabulary for walking a controller through the dialog."""

    def __init__(self, controller: DialogController, scheduler: VirtualScheduler, speech: FakeSpeechEngine):
        self.controller = controller
        self.scheduler = scheduler
        self.speech = speech

    def press(self, *buttons: int) -> None:
        for button in buttons:
            self.controller.dispatch(ButtonEvent.PRESSED, button)

    def release(self, *buttons: int) -> None:
        for button in buttons:
            self.controller.dispatch(ButtonEvent.RELEASED, button)

    def tap(self, button: int, times: int = 1) -> None:
        for _ in range(times):
            self.press(button)
            self.release(button)

    def hold_floor(self, floor: int, ms: float | None = None) -> None:
        """Hold a floor's pair for the threshold (or ``ms``) and let go."""
        pair = self.controller.config.floor_pairs[floor]
        self.press(*pair)
        self.scheduler.advance(self.controller.config.long_press_threshold_ms if ms is None else ms)
        self.release(*pair)

    def finish_speech(self) -> None:
        self.speech.finish()

    def reach(self, state: DialogState) -> None:
        """Walk the default route (floors 1, 2, 3, 1, 2) until ``state`` is entered."""
        route = [
            (DialogState.WAITING_FOR_GROUND, None),
            (DialogState.CHOOSE_RAIN, Floor.FIRST),
            (DialogState.CHOOSE_WIND, Floor.SECOND),
            (DialogState.CHOOSE_HOUR, Floor.THIRD),
            (DialogState.CHOOSE_POLLUTION, Floor.FIRST),
            (DialogState.SUMMARY, Floor.SECOND),
        ]
        self.controller.start()
        for reached, floor in route:
            if floor is not None:
                self.hold_floor(floor)
                if reached == DialogState.CHOOSE_RAIN:
                    # welcome speech, then choose-rain is entered
                    self.finish_speech()
                self.finish_speech()
            if self.controller.state == state:
                return
        raise AssertionError(f"{state} is not on the default route")


@pytest.fixture
def driver(controller, scheduler, speech):
    """Helper to walk the controller through the dialog."""
    return DialogDriver(controller, scheduler, speech)

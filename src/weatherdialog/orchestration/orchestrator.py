"""
Composition root: builds the dialog and its collaborators from AppConfig.

The dialog can run headless (Launchpad hardware only) or behind the Textual
simulator; in both cases everything lives on one asyncio event loop.
"""

import asyncio
import logging

from weatherdialog.core import DialogController, LoopScheduler, Scheduler
from weatherdialog.devices import LedStrip, SpeechEngine
from weatherdialog.exceptions import ErrorContext
from weatherdialog.midi import MidiButtonInput, MidiLedDriver, MidiManager
from weatherdialog.models import AppConfig, ButtonEvent
from weatherdialog.speech import create_speech_engine
from weatherdialog.ui_shared import UIAdapter

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Owns the dialog controller and everything it talks to.

    Architecture:
        Orchestrator (this class)
        ├── scheduler, strip, speech engine
        ├── controller (DialogController)
        ├── MIDI: manager, button input, LED driver (optional)
        └── UIs: simulator, ...
    """

    def __init__(self, config: AppConfig, headless: bool = False):
        """
        Args:
            config: Application configuration
            headless: If True, run without a UI until interrupted
        """
        self.config = config
        self.headless = headless

        self.strip = LedStrip()
        self.scheduler: Scheduler | None = None
        self.speech: SpeechEngine | None = None
        self.controller: DialogController | None = None

        self.midi: MidiManager | None = None
        self.midi_buttons: MidiButtonInput | None = None
        self.midi_leds: MidiLedDriver | None = None

        self._uis: list[UIAdapter] = []
        self._stop_event: asyncio.Event | None = None

    def register_ui(self, ui: UIAdapter) -> None:
        """Register a UI. Call before ``run()``."""
        if ui not in self._uis:
            self._uis.append(ui)
            logger.info(f"Registered UI: {ui.__class__.__name__}")

    def initialize(self, scheduler: Scheduler | None = None) -> None:
        """
        Build the controller and its collaborators.

        Must run on the event loop that will drive the dialog (the Textual
        app's loop, or the loop of ``asyncio.run`` in headless mode) unless
        an explicit scheduler is given.

        Args:
            scheduler: Overrides the loop-backed scheduler (tests)
        """
        logger.info("Initializing Orchestrator")
        self.scheduler = scheduler or LoopScheduler(asyncio.get_running_loop())
        self.speech = create_speech_engine(self.config.speech, self.scheduler)
        self.controller = DialogController(
            self.strip,
            self.speech,
            self.scheduler,
            config=self.config.dialog,
            voice=self.config.speech.voice,
        )

        if self.config.midi.enabled:
            self._start_midi()

        for ui in self._uis:
            if hasattr(ui, "register_with_controller"):
                ui.register_with_controller(self)

        logger.info("Orchestrator initialized")

    def run(self) -> None:
        """Run the registered UIs, or the headless loop."""
        if self.headless:
            try:
                asyncio.run(self._run_headless())
            except KeyboardInterrupt:
                logger.info("Headless run interrupted")
            return

        if not self._uis:
            logger.warning("No UIs registered and not headless - nothing to run")
            return

        for ui in self._uis:
            logger.info(f"Initializing UI: {ui.__class__.__name__}")
            ui.initialize()

        for ui in self._uis:
            logger.info(f"Running UI: {ui.__class__.__name__}")
            ui.run()

    def stop(self) -> None:
        """End a headless run."""
        if self._stop_event is not None:
            self._stop_event.set()

    async def _run_headless(self) -> None:
        self._stop_event = asyncio.Event()
        self.initialize()
        self.controller.start()
        logger.info("Dialog running headless, press Ctrl+C to stop")
        await self._stop_event.wait()

    def shutdown(self) -> None:
        logger.info("Shutting down Orchestrator")

        for ui in self._uis:
            logger.info(f"Shutting down UI: {ui.__class__.__name__}")
            try:
                ui.shutdown()
            except Exception as e:
                logger.error(f"Error shutting down UI {ui.__class__.__name__}: {e}")

        if self.speech is not None and hasattr(self.speech, "stop"):
            self.speech.stop()

        self._stop_midi()

    # =================================================================
    # Input
    # =================================================================

    def submit_button(self, event: ButtonEvent, button_id: int) -> None:
        """
        Hand a button event to the controller from any thread.

        MIDI input arrives on mido's I/O thread; the event is queued onto the
        loop so the controller only ever runs on one thread.
        """
        if self.scheduler is None or self.controller is None:
            logger.warning(f"Button {button_id} {event.value} before initialization, dropped")
            return
        self.scheduler.call_soon_threadsafe(self.controller.dispatch, event, button_id)

    # =================================================================
    # MIDI
    # =================================================================

    def _start_midi(self) -> bool:
        midi_config = self.config.midi
        with ErrorContext("start MIDI", logger, re_raise=False) as ctx:
            self.midi = MidiManager(midi_config.port_filter, midi_config.poll_interval)

            self.midi_leds = MidiLedDriver(self.midi, midi_config.led_notes, midi_config.launchpad_model)
            self.midi.register_observer(self.midi_leds)
            self.strip.add_driver(self.midi_leds)

            self.midi_buttons = MidiButtonInput(self.midi, midi_config.button_notes)
            self.midi_buttons.on_button(self.submit_button)
            self.midi_buttons.start()

            self.midi.start()
            logger.info("MIDI started")

        if ctx.error:
            logger.warning(f"MIDI not available: {ctx.error}")
            self._stop_midi()
            return False
        return True

    def _stop_midi(self) -> None:
        if self.midi_leds is not None:
            self.midi_leds.shutdown()
            self.strip.remove_driver(self.midi_leds)
            self.midi_leds = None
        if self.midi_buttons is not None:
            self.midi_buttons.stop()
            self.midi_buttons = None
        if self.midi is not None:
            self.midi.stop()
            self.midi = None
            logger.info("MIDI stopped")

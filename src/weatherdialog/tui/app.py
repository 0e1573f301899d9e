"""Textual simulator for the weather dialog."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, RichLog

from weatherdialog.models import BUTTON_COUNT, BlinkMode, ButtonEvent, Color
from weatherdialog.protocols import DeviceEvent, DialogEvent

from .widgets import ButtonPanel, LedStripWidget, PanelButton, StateBar

if TYPE_CHECKING:
    from weatherdialog.orchestration import Orchestrator

logger = logging.getLogger(__name__)


def describe_event(event: DialogEvent, payload: dict[str, Any]) -> str | None:
    """Log-panel line for a dialog event, or None for events not worth a line."""
    if event == DialogEvent.STATE_ENTERED:
        state = payload.get("state")
        return f"[b]→ {getattr(state, 'value', state)}[/b]"
    if event == DialogEvent.FLOOR_CHANGED:
        return f"Floor {int(payload['floor'])} selected"
    if event == DialogEvent.COUNT_CHANGED:
        return f"{payload['mode'].value.capitalize()} count: {payload['count']}/10"
    if event == DialogEvent.GESTURE_ARMED:
        return f"Holding floor {int(payload['floor'])}..."
    if event == DialogEvent.GESTURE_CANCELLED:
        return f"Floor {int(payload['floor'])} released too early"
    if event == DialogEvent.EXIT_PROGRESS:
        return f"Exit press {payload['presses']}/{payload['required']}"
    if event == DialogEvent.INPUT_REJECTED:
        return f"[yellow]Input rejected: {payload['reason']}[/yellow]"
    if event == DialogEvent.SPEECH_REQUESTED:
        return f"[i]🔊 {payload['text']}[/i]"
    return None


class DialogSimulator(App):
    """
    On-screen stand-in for the installation.

    Implements UIAdapter via structural subtyping (no explicit inheritance
    to avoid metaclass conflicts between App and Protocol), and observes the
    controller, the LED strip and the MIDI manager.

    Buttons latch: click a button (or press its digit key) to hold it down,
    click again to release it. Holding a pair for three seconds selects a floor.
    """

    TITLE = "Weather Dialog"

    CSS = """
    #log {
        height: 1fr;
        border: round $primary;
    }
    """

    BINDINGS = [
        Binding("s", "start_dialog", "Start", show=True),
        Binding("f1", "tester(1)", "Yellow", show=True),
        Binding("f2", "tester(2)", "Green blink", show=True),
        Binding("f3", "tester(3)", "Pink pulse", show=True),
        Binding("f4", "tester(4)", "RGB", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ] + [
        Binding(str(button_id), f"toggle_button({button_id})", f"Button {button_id}", show=False)
        for button_id in range(BUTTON_COUNT)
    ]

    def __init__(self, orchestrator: "Orchestrator"):
        """
        Args:
            orchestrator: Orchestrator instance (not yet initialized)
        """
        super().__init__()
        self.orchestrator = orchestrator
        self._initialized = False
        self._startup_error: Optional[Exception] = None

    # =================================================================
    # UIAdapter Protocol Implementation
    # =================================================================

    def initialize(self) -> None:
        if self._initialized:
            logger.warning("Simulator already initialized")
            return
        self._initialized = True

    def register_with_controller(self, orchestrator: "Orchestrator") -> None:
        """Subscribe to the controller, strip and MIDI manager."""
        orchestrator.controller.register_observer(self)
        orchestrator.strip.register_observer(self)
        if orchestrator.midi:
            orchestrator.midi.register_observer(self)

    def run(self) -> None:
        """
        Run the Textual app (blocks until it exits).

        Raises:
            Exception: The error that prevented startup, if any
        """
        if not self._initialized:
            raise RuntimeError("Simulator must be initialized before running")
        super().run()
        if self._startup_error:
            raise self._startup_error

    def shutdown(self) -> None:
        logger.info("Shutting down simulator")
        if self.orchestrator.controller:
            self.orchestrator.controller.unregister_observer(self)
        self.orchestrator.strip.unregister_observer(self)
        if self.orchestrator.midi:
            self.orchestrator.midi.unregister_observer(self)

    # =================================================================
    # Textual Lifecycle
    # =================================================================

    def compose(self) -> ComposeResult:
        yield Header()
        yield LedStripWidget()
        yield ButtonPanel()
        yield StateBar()
        yield RichLog(id="log", markup=True, wrap=True)
        yield Footer()

    def on_mount(self) -> None:
        # Textual's loop is running now, so the controller can be built on it
        try:
            self.orchestrator.initialize()
        except Exception as e:
            logger.error(f"Failed to initialize orchestrator: {e}")
            self._startup_error = e
            self.exit(1)
            return

        self.set_interval(0.25, self.refresh_state)
        self.refresh_state()
        self.log_line("Press [b]s[/b] to start, then hold a button pair (1+2, 3+4 or 5+6)")

    @property
    def controller(self):
        return self.orchestrator.controller

    def log_line(self, text: str) -> None:
        self.query_one("#log", RichLog).write(text)

    def refresh_state(self) -> None:
        controller = self.controller
        if controller is None:
            return
        self.query_one(StateBar).update_state(
            controller.state,
            controller.status,
            controller.current_floor,
            controller.counts,
            controller.speaking,
        )

    # =================================================================
    # Observers
    # =================================================================

    def on_dialog_event(self, event: DialogEvent, **kwargs: Any) -> None:
        line = describe_event(event, kwargs)
        if line:
            self.log_line(line)
        self.refresh_state()

    def on_led_changed(self, index: int, color: Color, blink: BlinkMode) -> None:
        self.query_one(LedStripWidget).set_led(index, color, blink)

    def on_device_event(self, event: DeviceEvent, port_name: str) -> None:
        # MIDI monitor thread
        self.call_from_thread(self._device_changed, event, port_name)

    def _device_changed(self, event: DeviceEvent, port_name: str) -> None:
        connected = event == DeviceEvent.CONTROLLER_CONNECTED
        self.query_one(StateBar).set_midi_device(port_name if connected else None)
        self.notify(
            f"MIDI {'connected' if connected else 'disconnected'}: {port_name}",
            severity="information" if connected else "warning",
        )

    # =================================================================
    # Actions
    # =================================================================

    def action_start_dialog(self) -> None:
        panel = self.query_one(ButtonPanel)
        for button_id in range(BUTTON_COUNT):
            panel.set_held(button_id, False)
        self.log_line("[b]Dialog started[/b]")
        self.controller.start()

    def action_tester(self, demo: int) -> None:
        self.controller.run_tester(demo)

    def action_toggle_button(self, button_id: int) -> None:
        panel = self.query_one(ButtonPanel)
        held = panel.is_held(button_id)
        panel.set_held(button_id, not held)
        event = ButtonEvent.RELEASED if held else ButtonEvent.PRESSED
        self.controller.dispatch(event, button_id)

    def on_panel_button_toggled(self, message: PanelButton.Toggled) -> None:
        self.action_toggle_button(message.button_id)

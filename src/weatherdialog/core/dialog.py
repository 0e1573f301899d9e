"""The gesture-driven dialog controller.

Visitors walk through a fixed sequence of states by holding button pairs
("floors"):

    initialisation -> waiting-for-ground -> welcome -> choose-rain
        -> choose-wind -> choose-hour -> choose-pollution -> summary -> final

Each choose-* state owns an LED counter that the visitor moves with the
+/- buttons of the floor they are standing on. Switching to another floor
saves the current mode and opens the next one; the summary is left with a
quick multi-press of the exit button.
"""

import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from weatherdialog.devices.protocols import LedDriver, SpeechEngine
from weatherdialog.exceptions import GuardViolation, UnknownStateError, handle_errors
from weatherdialog.model_manager import ObserverManager
from weatherdialog.models import (
    CHOOSE_STATES,
    LED_MODES,
    NEXT_STATE,
    BlinkMode,
    ButtonEvent,
    Color,
    DialogConfig,
    DialogSession,
    DialogState,
    Floor,
    GroundState,
    ModeKey,
    SessionStatus,
    VoicePreset,
)
from weatherdialog.protocols import DialogEvent, DialogObserver

from .buttons import ButtonRegistry
from .exit_gesture import ExitGestureTracker
from .gestures import GestureDetector
from .leds import LedMapper, LocalLedStepper, ModeLedStore
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)
speech_logger = logging.getLogger("weatherdialog.speech")

# Hand-picked colours of the fourth tester demo, on LEDs 0-4
TESTER_RGB = (
    Color(r=255, g=100, b=100),
    Color(r=0, g=100, b=170),
    Color(r=0, g=0, b=170),
    Color(r=150, g=170, b=70),
    Color(r=200, g=160, b=0),
)


class DialogController:
    """
    Runs the dialog state machine.

    All public entry points are safe to call at any time: failures such as
    input arriving while the machine is speaking are logged as warnings and
    the call does nothing.
    """

    def __init__(
        self,
        leds: LedDriver,
        speech: SpeechEngine,
        scheduler: Scheduler,
        config: DialogConfig | None = None,
        voice: VoicePreset | None = None,
    ):
        """
        Args:
            leds: Where LED changes go (usually a LedStrip)
            speech: Speech engine; its finished callback is claimed here
            scheduler: Timer facility shared with the speech engine
            config: Gesture and timing settings
            voice: Voice passed along with every utterance
        """
        self.config = config or DialogConfig()
        self._leds = leds
        self._speech = speech
        self._scheduler = scheduler
        self._voice = voice

        self.session = DialogSession()
        self.ground = GroundState()
        self.buttons = ButtonRegistry()
        self.gestures = GestureDetector(
            self.buttons,
            scheduler,
            self.config.floor_pairs,
            self.config.long_press_threshold_ms,
            self._on_long_press,
        )
        self.mapper = LedMapper()
        self.modes = ModeLedStore()
        self.stepper = LocalLedStepper(leds, self.mapper, self.modes)
        self.exit_gesture = ExitGestureTracker(
            self.config.exit_press_count, self.config.exit_window_ms
        )

        self._advance_handle: TimerHandle | None = None
        self._observers = ObserverManager[DialogObserver](observer_type_name="dialog")

        self._entry_actions: dict[DialogState, Callable[[], None]] = {
            DialogState.INITIALISATION: self._enter_initialisation,
            DialogState.WAITING_FOR_GROUND: self._enter_waiting_for_ground,
            DialogState.WELCOME: self._enter_welcome,
            DialogState.SUMMARY: self._enter_summary,
            DialogState.FINAL: self._enter_final,
        }
        for state in CHOOSE_STATES:
            self._entry_actions[state] = partial(self._enter_choose, state)

        speech.on_finished(self.on_speech_finished)

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: DialogObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: DialogObserver) -> None:
        self._observers.unregister(observer)

    def _notify(self, event: DialogEvent, **kwargs: Any) -> None:
        self._observers.notify("on_dialog_event", event, **kwargs)

    # =================================================================
    # Read-only views
    # =================================================================

    @property
    def state(self) -> DialogState | str | None:
        """Last state whose entry action ran."""
        return self.session.current_state

    @property
    def target_state(self) -> DialogState | str | None:
        return self.session.target_state

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def current_floor(self) -> Floor | None:
        return self.ground.current_floor

    @property
    def speaking(self) -> bool:
        return self._speech.is_speaking

    @property
    def counts(self) -> dict[ModeKey, int]:
        return self.modes.counts()

    # =================================================================
    # Public entry points
    # =================================================================

    @handle_errors(operation_name="start dialog", re_raise=False, log_level=logging.WARNING)
    def start(self) -> None:
        """Reset every piece of session state and enter initialisation."""
        self._cancel_advance()
        self._speech.stop()
        self.gestures.cancel_all()
        self.buttons.reset()
        self.modes.reset()
        self.stepper.clear()
        self.exit_gesture.reset()
        self.ground = GroundState()
        self._leds.all_off()

        self.session = DialogSession(
            status=SessionStatus.AWAITING_INPUT,
            target_state=DialogState.INITIALISATION,
        )
        logger.info("Dialog started: long-press a button pair (1&2, 3&4 or 5&6) to begin")
        self._run_state_machine()

    @handle_errors(operation_name="dispatch", re_raise=False, log_level=logging.WARNING)
    def dispatch(self, event: ButtonEvent | str | None = None, button_id: int | None = None) -> None:
        """
        Feed an input event, or run the state machine when ``event`` is None.

        Args:
            event: Button press or release
            button_id: Button the event belongs to (0-9)
        """
        if event is None:
            self._run_state_machine()
            return

        event = ButtonEvent(event)
        if event == ButtonEvent.PRESSED:
            self._handle_press(button_id)
        else:
            self._handle_release(button_id)

    @handle_errors(operation_name="advance", re_raise=False, log_level=logging.WARNING)
    def advance(self, delay_ms: float = 0) -> None:
        """Run the state machine now, or once after ``delay_ms``."""
        if delay_ms > 0:
            self._cancel_advance()
            self._advance_handle = self._scheduler.call_later(delay_ms, self._delayed_advance)
        else:
            self.dispatch()

    @handle_errors(operation_name="handle speech end", re_raise=False, log_level=logging.WARNING)
    def on_speech_finished(self) -> None:
        speech_logger.info("speech ended")
        if self.session.continue_after_speech:
            self.session.status = SessionStatus.AWAITING_INPUT
            self.advance(0)

    @handle_errors(operation_name="run tester", re_raise=False, log_level=logging.WARNING)
    def run_tester(self, demo: int) -> None:
        """
        Light test patterns regardless of the dialog state.

        Args:
            demo: 1 yellow, 2 blinking green, 3 pulsing pink, 4 five RGB LEDs
        """
        if demo == 1:
            self._leds.all_set_color("yellow")
        elif demo == 2:
            self._leds.all_set_color("green", BlinkMode.BLINK)
        elif demo == 3:
            self._leds.all_set_color("pink", BlinkMode.PULSE)
        elif demo == 4:
            for index, color in enumerate(TESTER_RGB):
                self._leds.render(index, color)
        else:
            logger.warning(f"No action defined for tester button {demo}")

    # =================================================================
    # State machine
    # =================================================================

    def _run_state_machine(self) -> None:
        self._check_guards(require_target=True)

        target = self.session.target_state
        self.session.current_state = target
        self._notify(DialogEvent.STATE_ENTERED, state=target)

        try:
            action = self._entry_actions[DialogState(target)]
        except ValueError:
            raise UnknownStateError(target) from None
        logger.debug(f"Entering {target}")
        action()

    def _check_guards(self, require_target: bool = False) -> None:
        """
        Raises:
            GuardViolation: On the first failing guard
        """
        if not self.session.started:
            reason = GuardViolation.NOT_STARTED
        elif not self.session.awaiting_input:
            reason = GuardViolation.NOT_AWAITING_INPUT
        elif self._speech.is_speaking:
            reason = GuardViolation.SPEAKING
        elif require_target and not self.session.target_state:
            reason = GuardViolation.NO_TARGET
        else:
            return
        self._notify(DialogEvent.INPUT_REJECTED, reason=reason)
        raise GuardViolation(reason)

    def _delayed_advance(self) -> None:
        self._advance_handle = None
        self.dispatch()

    def _cancel_advance(self) -> None:
        if self._advance_handle is not None:
            self._advance_handle.cancel()
            self._advance_handle = None

    def _say(self, text: str) -> None:
        speech_logger.info(f"Speaking: {text}")
        self._notify(DialogEvent.SPEECH_REQUESTED, text=text)
        self._speech.speak(text, self._voice)

    # -----------------------------------------------------------------
    # Entry actions
    # -----------------------------------------------------------------

    def _enter_initialisation(self) -> None:
        self._leds.all_off()
        self.session.target_state = DialogState.WAITING_FOR_GROUND
        self.session.status = SessionStatus.AWAITING_INPUT
        logger.info("Initialisation done")
        self._run_state_machine()

    def _enter_waiting_for_ground(self) -> None:
        logger.info("Waiting for long press on button pairs (1&2, 3&4 or 5&6)...")
        self.session.status = SessionStatus.AWAITING_INPUT

    def _enter_welcome(self) -> None:
        logger.info(f"Welcome! Floor {self.ground.current_floor} long-pressed")
        # Continuation must be armed before speaking: engines may finish synchronously
        self.session.target_state = DialogState.CHOOSE_RAIN
        self.session.status = SessionStatus.AWAITING_CONTINUATION
        self._say("Welcome! Let's choose the rain.")

    def _enter_choose(self, state: DialogState) -> None:
        mode = state.mode
        floor = self.ground.current_floor
        logger.info(f"Choose {mode.value} mode on floor {floor}")

        if not self.modes.is_initialized(mode):
            self.stepper.blank_floor(floor)
            self.modes.mark_initialized(mode)

        self.session.status = SessionStatus.AWAITING_INPUT
        self._say(f"{mode.value.capitalize()} mode on floor {floor}.")

    def _enter_summary(self) -> None:
        counts = self.modes.counts()
        logger.info("Summary of selections:")
        for mode in LED_MODES:
            logger.info(f"  {mode.value.capitalize()} count: {counts[mode]}/10")
        logger.info(
            f"Press button {self.config.exit_button} {self.config.exit_press_count} times "
            f"within {self.config.exit_window_ms / 1000:g} seconds to continue"
        )

        self.exit_gesture.reset()
        self.session.status = SessionStatus.AWAITING_INPUT
        spoken = ", ".join(f"{mode.value} {counts[mode]}" for mode in LED_MODES)
        self._say(f"Summary complete. {spoken.capitalize()}. Press button zero four times to finish.")

    def _enter_final(self) -> None:
        logger.info("Congratulations! The dialog is complete")
        self.session.status = SessionStatus.FINISHED
        self._say("Congratulations! You have reached the end!")
        self._leds.all_set_color("green", BlinkMode.BLINK)

    # =================================================================
    # Input path
    # =================================================================

    def _handle_press(self, button_id: int) -> None:
        self.buttons.press(button_id)
        self._check_guards()

        target = self.session.target_state
        cfg = self.config

        if button_id in cfg.debug_aliases:
            floor = Floor(cfg.debug_aliases[button_id])
            logger.info(f"DEBUG: button {button_id} pressed - simulating floor {floor.value} long-press")
            self._commit_floor(floor)
            return

        if target == DialogState.SUMMARY and button_id == cfg.exit_button:
            presses = self.exit_gesture.press(self._scheduler.now())
            self._notify(
                DialogEvent.EXIT_PROGRESS, presses=presses, required=self.exit_gesture.required_presses
            )
            return

        floor = self.gestures.pair_of(button_id)
        if floor is not None:
            if self.gestures.on_press(button_id, self.ground.current_floor):
                self._notify(DialogEvent.GESTURE_ARMED, floor=floor)
            if self.ground.current_floor is None:
                return

        if self.ground.current_floor is None or target not in CHOOSE_STATES:
            return

        minus, plus = cfg.stepper_buttons[self.ground.current_floor]
        mode = DialogState(target).mode
        if button_id == plus:
            slot = self.stepper.increment(mode, self.ground.current_floor)
        elif button_id == minus:
            slot = self.stepper.decrement(mode, self.ground.current_floor)
        else:
            return
        if slot is not None:
            self._notify(DialogEvent.COUNT_CHANGED, mode=mode, count=self.modes.state(mode).count)

    def _handle_release(self, button_id: int) -> None:
        self.buttons.release(button_id)
        if not self.session.started:
            return

        if self.session.target_state == DialogState.SUMMARY and button_id == self.config.exit_button:
            if self.exit_gesture.release():
                self.session.target_state = DialogState.FINAL
                self.advance()
            return

        floor = self.gestures.on_release(button_id)
        if floor is not None:
            self._notify(DialogEvent.GESTURE_CANCELLED, floor=floor)

    # =================================================================
    # Long-press commit
    # =================================================================

    @handle_errors(operation_name="commit long-press", re_raise=False, log_level=logging.WARNING)
    def _on_long_press(self, floor: Floor) -> None:
        self._commit_floor(floor)

    def _commit_floor(self, floor: Floor) -> None:
        if not self.session.awaiting_input:
            reason = GuardViolation.NOT_AWAITING_INPUT
        elif self._speech.is_speaking:
            reason = GuardViolation.SPEAKING
        else:
            reason = None
        if reason is not None:
            logger.info(f"Floor {floor.value} long-press discarded: {reason}")
            self._notify(DialogEvent.INPUT_REJECTED, reason=reason)
            return

        target = self.session.target_state

        if target == DialogState.WAITING_FOR_GROUND:
            self.ground.commit(floor)
            self._notify(DialogEvent.FLOOR_CHANGED, floor=floor, previous=None)
            self.session.target_state = DialogState.WELCOME
            self._run_state_machine()
            return

        if target not in CHOOSE_STATES:
            logger.debug(f"Floor {floor.value} long-press ignored in {target}")
            return

        if floor == self.ground.last_floor:
            logger.info(f"Same floor {floor.value} long-pressed again - ignoring")
            return

        target = DialogState(target)
        previous = self.ground.current_floor
        logger.info(f"Floor switch: {previous} -> {floor.value}")

        self.stepper.save(target.mode)
        self.stepper.blank_floor(previous)
        self.ground.commit(floor)

        next_state = NEXT_STATE[target]
        self.session.target_state = next_state
        self._notify(DialogEvent.FLOOR_CHANGED, floor=floor, previous=previous)

        if next_state != DialogState.SUMMARY:
            self.stepper.restore(next_state.mode, floor)

        self._run_state_machine()

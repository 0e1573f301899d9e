"""Status bar widget showing the dialog state."""

from textual.widgets import Static

from weatherdialog.models import LED_MODES, DialogState, Floor, ModeKey, SessionStatus


class StateBar(Static):
    """
    One-line summary of the dialog.

    Shows state, active floor, the four counters, and whether the machine
    is speaking or MIDI hardware is connected.
    """

    DEFAULT_CSS = """
    StateBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StateBar.speaking {
        background: $warning 40%;
    }

    StateBar.finished {
        background: $success;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._state: DialogState | str | None = None
        self._status = SessionStatus.IDLE
        self._floor: Floor | None = None
        self._counts: dict[ModeKey, int] = {}
        self._speaking = False
        self._midi_device: str | None = None

    def update_state(
        self,
        state: DialogState | str | None,
        status: SessionStatus,
        floor: Floor | None,
        counts: dict[ModeKey, int],
        speaking: bool,
    ) -> None:
        self._state = state
        self._status = status
        self._floor = floor
        self._counts = counts
        self._speaking = speaking
        self._update_display()

    def set_midi_device(self, name: str | None) -> None:
        self._midi_device = name
        self._update_display()

    @property
    def text(self) -> str:
        state = getattr(self._state, "value", self._state) or "not started"
        floor = f"floor {int(self._floor)}" if self._floor else "no floor"
        counts = " ".join(f"{mode.value[0].upper()}{self._counts.get(mode, 0)}" for mode in LED_MODES)
        parts = [f"◆ {state}", floor, counts]
        if self._speaking:
            parts.append("🔊 speaking")
        parts.append(f"🎹 {self._midi_device}" if self._midi_device else "🎹 No MIDI")
        return " | ".join(parts)

    def _update_display(self) -> None:
        self.set_class(self._speaking, "speaking")
        self.set_class(self._status == SessionStatus.FINISHED, "finished")
        self.update(self.text)

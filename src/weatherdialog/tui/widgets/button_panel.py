"""The ten dialog buttons, clickable to hold and release."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Static

from weatherdialog.models import BUTTON_COUNT

# What each button does with the default configuration
BUTTON_HINTS = {
    0: "exit",
    1: "F1", 2: "F1",
    3: "F2", 4: "F2",
    5: "F3", 6: "F3",
    7: "dbg1", 8: "dbg2", 9: "dbg3",
}


class PanelButton(Static):
    """A latching stand-in for a physical button."""

    DEFAULT_CSS = """
    PanelButton {
        width: 8;
        height: 3;
        border: round $primary;
        content-align: center middle;
    }

    PanelButton.held {
        background: $success 60%;
        border: double $success;
    }
    """

    class Toggled(Message):
        """Posted when the button is clicked."""

        def __init__(self, button_id: int) -> None:
            super().__init__()
            self.button_id = button_id

    def __init__(self, button_id: int) -> None:
        super().__init__(f"{button_id} {BUTTON_HINTS.get(button_id, '')}", id=f"button-{button_id}")
        self.button_id = button_id

    @property
    def held(self) -> bool:
        return self.has_class("held")

    def on_click(self) -> None:
        self.post_message(self.Toggled(self.button_id))


class ButtonPanel(Horizontal):
    """
    Row of ten PanelButtons.

    The panel only tracks what is drawn as held; the app decides what a
    toggle means and calls ``set_held`` back.
    """

    DEFAULT_CSS = """
    ButtonPanel {
        height: 3;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        for button_id in range(BUTTON_COUNT):
            yield PanelButton(button_id)

    def button(self, button_id: int) -> PanelButton:
        return self.query_one(f"#button-{button_id}", PanelButton)

    def set_held(self, button_id: int, held: bool) -> None:
        self.button(button_id).set_class(held, "held")

    def is_held(self, button_id: int) -> bool:
        return self.button(button_id).held

"""Widget mirroring the 30-LED strip as three floors of ten."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from weatherdialog.models import FLOOR_COUNT, LEDS_PER_FLOOR, BlinkMode, Color


class LedCell(Static):
    """One LED (presentation only)."""

    DEFAULT_CSS = """
    LedCell {
        width: 5;
        height: 3;
        border: round $surface-lighten-2;
        content-align: center middle;
    }

    LedCell.blink {
        text-style: bold reverse;
        border: double $warning;
    }

    LedCell.pulse {
        text-style: italic;
        border: heavy $accent;
    }
    """

    def __init__(self, index: int) -> None:
        super().__init__(str(index), id=f"led-{index}")
        self.index = index
        self.color = Color.off()
        self.blink = BlinkMode.STEADY

    def set_state(self, color: Color, blink: BlinkMode) -> None:
        self.color = color
        self.blink = blink
        self.styles.background = None if color.is_off else color.to_hex()
        self.set_class(blink == BlinkMode.BLINK, "blink")
        self.set_class(blink == BlinkMode.PULSE, "pulse")


class LedStripWidget(Vertical):
    """The strip, top row is floor 3 so floors stack like the building."""

    DEFAULT_CSS = """
    LedStripWidget {
        height: auto;
        padding: 0 1;
    }

    LedStripWidget .floor-row {
        height: 3;
    }

    LedStripWidget .floor-label {
        width: 9;
        height: 3;
        content-align: left middle;
    }
    """

    def compose(self) -> ComposeResult:
        for floor in reversed(range(1, FLOOR_COUNT + 1)):
            with Horizontal(classes="floor-row"):
                yield Static(f"Floor {floor}", classes="floor-label")
                start = (floor - 1) * LEDS_PER_FLOOR
                for index in range(start, start + LEDS_PER_FLOOR):
                    yield LedCell(index)

    def set_led(self, index: int, color: Color, blink: BlinkMode) -> None:
        self.query_one(f"#led-{index}", LedCell).set_state(color, blink)

    def cell(self, index: int) -> LedCell:
        return self.query_one(f"#led-{index}", LedCell)

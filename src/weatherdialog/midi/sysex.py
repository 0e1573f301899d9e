"""
SysEx messages for Novation Launchpad LEDs (programmer mode).

Every message is::

    [0xF0] [0x00 0x20 0x29 0x02 <model>] [command] [data...] [0xF7]
            └──── Novation header ─────┘

mido adds the 0xF0/0xF7 framing. Commands used here:

- **0x03**: LED lighting, followed by one or more colour specs
- **0x0E**: Programmer mode on/off

Colour specs start with a lighting type:

- STATIC (0): ``[0, note, palette]``
- FLASHING (1): ``[1, note, palette_b, palette_a]``
- PULSING (2): ``[2, note, palette]``
- RGB (3): ``[3, note, r, g, b]`` with 7-bit channels
"""

from enum import Enum

import mido

from weatherdialog.models import BlinkMode, Color

HEADERS = {
    "x": [0x00, 0x20, 0x29, 0x02, 0x0C],
    "mini_mk3": [0x00, 0x20, 0x29, 0x02, 0x0D],
    "pro_mk3": [0x00, 0x20, 0x29, 0x02, 0x0E],
}

LED_LIGHTING = 0x03
PROGRAMMER_MODE = 0x0E

# Palette entries closest to the named colours
PALETTE = {
    "black": 0,
    "white": 3,
    "red": 5,
    "yellow": 13,
    "green": 21,
    "blue": 45,
    "pink": 53,
}


class LightingMode(Enum):
    """LED lighting modes."""

    STATIC = 0
    FLASHING = 1
    PULSING = 2
    RGB = 3


def nearest_palette_index(color: Color) -> int:
    """Palette index of the named colour nearest to ``color``."""
    best_name = min(
        PALETTE,
        key=lambda name: sum(
            (a - b) ** 2 for a, b in zip(Color.from_name(name).to_rgb_tuple(), color.to_rgb_tuple())
        ),
    )
    return PALETTE[best_name]


class LaunchpadSysEx:
    """Builds SysEx messages for one Launchpad model."""

    def __init__(self, model: str = "mini_mk3"):
        self.header = HEADERS[model]

    def programmer_mode(self, enable: bool) -> mido.Message:
        return mido.Message("sysex", data=[*self.header, PROGRAMMER_MODE, 1 if enable else 0])

    def led_lighting(self, specs: list[tuple[int, ...]]) -> mido.Message:
        """
        Args:
            specs: Colour specs, each (lighting_type, note, *data_bytes)
        """
        data = [*self.header, LED_LIGHTING]
        for spec in specs:
            data.extend(spec)
        return mido.Message("sysex", data=data)

    @staticmethod
    def color_spec(note: int, color: Color, blink: BlinkMode = BlinkMode.STEADY) -> tuple[int, ...]:
        """Colour spec for one LED. Animated modes fall back to the palette."""
        if blink == BlinkMode.BLINK:
            return (LightingMode.FLASHING.value, note, 0, nearest_palette_index(color))
        if blink == BlinkMode.PULSE:
            return (LightingMode.PULSING.value, note, nearest_palette_index(color))
        return (LightingMode.RGB.value, note, *color.to_7bit())

"""Color model for LED control."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    Uses standard 8-bit RGB (0-255) as the application's color representation.
    Device-specific conversions (e.g., 7-bit for MIDI SysEx) are handled
    by the drivers.

    The model is frozen so colors can be compared and used as dict keys.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """
        Look up a named color.

        Args:
            name: Color name, case-insensitive (see NAMED_COLORS)

        Returns:
            The matching color

        Raises:
            ValueError: If the name is unknown
        """
        try:
            return NAMED_COLORS[name.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown color '{name}'. Known colors: {', '.join(sorted(NAMED_COLORS))}"
            ) from None

    @property
    def is_off(self) -> bool:
        """Check if all channels are zero."""
        return self.r == 0 and self.g == 0 and self.b == 0

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_7bit(self) -> tuple[int, int, int]:
        """Convert to 7-bit RGB for MIDI SysEx messages.

        Example:
            >>> Color(r=255, g=128, b=0).to_7bit()
            (127, 64, 0)
        """
        return (self.r >> 1, self.g >> 1, self.b >> 1)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


NAMED_COLORS: dict[str, Color] = {
    "black": Color(r=0, g=0, b=0),
    "white": Color(r=255, g=255, b=255),
    "yellow": Color(r=255, g=220, b=0),
    "green": Color(r=0, g=200, b=60),
    "pink": Color(r=255, g=105, b=180),
    "red": Color(r=255, g=0, b=0),
    "blue": Color(r=0, g=80, b=255),
}

# Stepper LEDs are white when set and black when cleared
LED_ON = NAMED_COLORS["white"]
LED_OFF = NAMED_COLORS["black"]

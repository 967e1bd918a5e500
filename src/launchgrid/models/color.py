"""Color model for LED control."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """7-bit RGB color as accepted by the Launchpad.

    SysEx lighting messages carry each channel as a MIDI data byte, so the
    device range is 0-127. Use ``from_8bit`` to convert standard 8-bit RGB.

    The model is frozen so colors can be shared and hashed.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=127, description="Red (0-127)")
    g: int = Field(ge=0, le=127, description="Green (0-127)")
    b: int = Field(ge=0, le=127, description="Blue (0-127)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_8bit(cls, r: int, g: int, b: int) -> "Color":
        """Create a device color from 8-bit RGB (0-255).

        Downsamples using right bit shift.

        Example:
            >>> Color.from_8bit(255, 128, 0)
            Color(r=127, g=64, b=0)
        """
        return cls(r=r >> 1, g=g >> 1, b=b >> 1)

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string, scaled back to 8-bit (e.g., '#FE0000')."""
        return f"#{self.r << 1:02X}{self.g << 1:02X}{self.b << 1:02X}"

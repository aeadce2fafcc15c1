"""RGB color value type.

Colors are stored as unclamped floats so intermediate results (sums of
light contributions, HDR intensities) are not lost. Clamping only happens
when converting to 8-bit channels for output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from raycore.core.tuples import EPSILON, float_equal


def _channel_to_u8(value: float) -> int:
    # Round half away from zero, then clamp into the byte range
    scaled = math.floor(value * 255.0 + 0.5)
    return max(0, min(255, scaled))


@dataclass(frozen=True)
class Color:
    """A linear RGB color.

    Attributes:
        red: Red channel, nominally in [0, 1].
        green: Green channel, nominally in [0, 1].
        blue: Blue channel, nominally in [0, 1].
    """

    red: float
    green: float
    blue: float

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def red_color(cls) -> Color:
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def green_color(cls) -> Color:
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def blue_color(cls) -> Color:
        return cls(0.0, 0.0, 1.0)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def to_u8(self) -> tuple[int, int, int]:
        """Convert to 8-bit channels (0.5 maps to 128, values clamp to [0, 255])."""
        return (
            _channel_to_u8(self.red),
            _channel_to_u8(self.green),
            _channel_to_u8(self.blue),
        )

    def approx_eq(self, other: Color, epsilon: float = EPSILON) -> bool:
        return (
            float_equal(self.red, other.red, epsilon)
            and float_equal(self.green, other.green, epsilon)
            and float_equal(self.blue, other.blue, epsilon)
        )

    def __add__(self, other: object) -> Color:
        if isinstance(other, Color):
            return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)
        return NotImplemented

    def __sub__(self, other: object) -> Color:
        if isinstance(other, Color):
            return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)
        return NotImplemented

    def __mul__(self, other: object) -> Color:
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        if isinstance(other, (int, float)):
            return Color(self.red * other, self.green * other, self.blue * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Color:
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented

"""Pixel buffer for rendered images.

The canvas stores linear RGB floats in a float64 NumPy array of shape
(height, width, 3), indexed by (x, y) with y growing downward. A color read
back with ``pixel_at`` equals the one written. Reads and
writes outside the buffer raise ``IndexOutOfRange`` so callers can clamp or
skip instead of crashing.

Example:
    >>> canvas = Canvas(20, 10)
    >>> canvas.write_pixel(10, 5, Color.red_color())
    >>> canvas.pixel_at(10, 5)
    Color(red=1.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raycore.core.color import Color
from raycore.core.errors import IndexOutOfRange


class Canvas:
    """A fixed-size grid of colors.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
    """

    def __init__(self, width: int, height: int, initial: Color | None = None) -> None:
        """Create a canvas filled with one color.

        Args:
            width: Width in pixels (positive).
            height: Height in pixels (positive).
            initial: Fill color. Defaults to black.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)
        if initial is not None:
            self.fill(initial)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexOutOfRange(x, y, self._width, self._height)

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the color of one pixel.

        Raises:
            IndexOutOfRange: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_tuple()

    def pixel_at(self, x: int, y: int) -> Color:
        """Get the color of one pixel.

        Raises:
            IndexOutOfRange: If (x, y) is outside the canvas.
        """
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def fill(self, color: Color) -> None:
        self._pixels[:, :] = color.to_tuple()

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the buffer with shape (height, width, 3)."""
        return self._pixels.copy()

    def write_array(self, image: npt.ArrayLike) -> None:
        """Replace the whole buffer with an array of shape (height, width, 3).

        Raises:
            ValueError: If the array shape does not match the canvas.
        """
        arr = np.asarray(image, dtype=np.float64)
        if arr.shape != self._pixels.shape:
            raise ValueError(f"Image shape {arr.shape} does not match canvas {self._pixels.shape}")
        self._pixels[...] = arr

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"

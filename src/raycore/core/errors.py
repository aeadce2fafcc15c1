"""Exception types raised by the intersection engine.

All failures are deterministic and reported synchronously. Each error also
derives from the closest builtin exception so callers that only know about
``ValueError`` or ``IndexError`` still catch them.
"""


class RaycoreError(Exception):
    """Base class for all raycore errors."""


class NonInvertibleTransform(RaycoreError, ValueError):
    """An affine transform has no inverse.

    Raised when the transform is assigned to a primitive, never later during
    intersection math.
    """


class DegenerateRay(RaycoreError, ValueError):
    """A ray direction has zero length, so no intersection parameter exists."""


class IndexOutOfRange(RaycoreError, IndexError):
    """A pixel coordinate lies outside the canvas bounds.

    Attributes:
        x: The requested column.
        y: The requested row.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
    """

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Pixel ({x}, {y}) is outside the {width}x{height} canvas"
        )

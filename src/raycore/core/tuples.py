"""Point and vector value types for ray tracing geometry.

Points and direction vectors are kept as distinct types because affine
transforms treat them differently: a point picks up translation, a vector
does not. In homogeneous coordinates a point has ``w = 1`` and a vector
has ``w = 0``.

Example:
    >>> p = Point3(0.0, 0.0, -5.0)
    >>> v = Vector3(0.0, 0.0, 1.0)
    >>> p + v * 4.0
    Point3(x=0.0, y=0.0, z=-1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Tolerance for comparing floating point geometry
EPSILON = 1e-5


def float_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare two floats within an absolute margin."""
    return abs(a - b) < epsilon


@dataclass(frozen=True)
class Point3:
    """A position in 3D space (homogeneous ``w = 1``).

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    @classmethod
    def origin(cls) -> Point3:
        """Return the point (0, 0, 0)."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values: npt.ArrayLike) -> Point3:
        """Build a point from the first three entries of an array."""
        arr = np.asarray(values, dtype=np.float64)
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @property
    def w(self) -> float:
        return 1.0

    def is_point(self) -> bool:
        return True

    def is_vector(self) -> bool:
        return False

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return the homogeneous 4-component representation."""
        return np.array([self.x, self.y, self.z, 1.0], dtype=np.float64)

    def approx_eq(self, other: Point3, epsilon: float = EPSILON) -> bool:
        return (
            float_equal(self.x, other.x, epsilon)
            and float_equal(self.y, other.y, epsilon)
            and float_equal(self.z, other.z, epsilon)
        )

    def __add__(self, other: object) -> Point3:
        if isinstance(other, Vector3):
            return Point3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object):
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented


@dataclass(frozen=True)
class Vector3:
    """A direction or displacement in 3D space (homogeneous ``w = 0``).

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, values: npt.ArrayLike) -> Vector3:
        """Build a vector from the first three entries of an array."""
        arr = np.asarray(values, dtype=np.float64)
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @property
    def w(self) -> float:
        return 0.0

    def is_point(self) -> bool:
        return False

    def is_vector(self) -> bool:
        return True

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return the homogeneous 4-component representation."""
        return np.array([self.x, self.y, self.z, 0.0], dtype=np.float64)

    def approx_eq(self, other: Vector3, epsilon: float = EPSILON) -> bool:
        return (
            float_equal(self.x, other.x, epsilon)
            and float_equal(self.y, other.y, epsilon)
            and float_equal(self.z, other.z, epsilon)
        )

    def dot(self, other: Vector3) -> float:
        """Compute the dot product of two vectors."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Compute the cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector3:
        """Return a unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.magnitude()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector3(self.x / length, self.y / length, self.z / length)

    def __add__(self, other: object):
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Point3):
            return Point3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar: float) -> Vector3:
        if isinstance(scalar, (int, float)):
            return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        if isinstance(scalar, (int, float)):
            return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)
        return NotImplemented

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

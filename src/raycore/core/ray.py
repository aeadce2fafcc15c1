"""Ray data structure for world-space and object-space queries.

This module provides the immutable Ray value used by every intersection
query. A ray is transformed into a primitive's object space by applying the
primitive's inverse transform; the origin is transformed as a point and the
direction as a vector, so only the origin picks up translation.

Example:
    >>> ray = Ray(Point3(0.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
    >>> ray.position(5.0)  # Point 5 units along the ray
    Point3(x=0.0, y=0.0, z=0.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from raycore.core.transform import AffineTransform
from raycore.core.tuples import EPSILON, Point3, Vector3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; callers normalize when t must measure distance.
    """

    origin: Point3
    direction: Vector3

    def __post_init__(self) -> None:
        if not isinstance(self.origin, Point3):
            raise TypeError(f"Ray origin must be a Point3, got {type(self.origin).__name__}")
        if not isinstance(self.direction, Vector3):
            raise TypeError(f"Ray direction must be a Vector3, got {type(self.direction).__name__}")

    def position(self, t: float) -> Point3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Negative values lie behind the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def transform(self, affine: AffineTransform) -> Ray:
        """Return a new ray with the transform applied.

        Args:
            affine: The transform to apply.

        Returns:
            A ray whose origin is transformed as a point and whose direction
            is transformed as a vector.
        """
        return Ray(affine.transform_point(self.origin), affine.transform_vector(self.direction))

    def approx_eq(self, other: Ray, epsilon: float = EPSILON) -> bool:
        return self.origin.approx_eq(other.origin, epsilon) and self.direction.approx_eq(
            other.direction, epsilon
        )

"""Core module.

This module contains the fundamental building blocks for ray queries:

Components:
    tuples: Point3 and Vector3 value types and float comparison
    color: RGB color value type
    transform: 4x4 affine transforms with inverse and transpose
    ray: Ray data structure with parametric position and transformation
    intersection: Intersection records and the sorted collection
    errors: Exception taxonomy
    integrator: Data-parallel batch ray casting with Taichi

Points and vectors are distinct types so that transforms can treat them
correctly: points pick up translation, direction vectors do not.
"""

from .color import Color
from .errors import DegenerateRay, IndexOutOfRange, NonInvertibleTransform, RaycoreError
from .intersection import Intersection, Intersections
from .ray import Ray
from .transform import AffineTransform
from .tuples import EPSILON, Point3, Vector3, float_equal

# Note: integrator is NOT imported here to avoid circular imports.
# Import directly from raycore.core.integrator when needed.

__all__ = [
    "Point3",
    "Vector3",
    "EPSILON",
    "float_equal",
    "Color",
    "AffineTransform",
    "Ray",
    "Intersection",
    "Intersections",
    "RaycoreError",
    "NonInvertibleTransform",
    "DegenerateRay",
    "IndexOutOfRange",
]

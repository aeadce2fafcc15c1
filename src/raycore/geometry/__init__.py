"""Geometry module for shape primitives.

This module provides the sphere primitive and its intersection algorithm:

Components:
    sphere: Unit sphere placed by an affine transform, with ray intersection
        in object space and inverse-transpose surface normals

Ray-object intersection follows the pattern:
    intersections = sphere.intersect(world_ray)
    hit = intersections.hit()
    normal = sphere.normal_at(world_ray.position(hit.t))
"""

from .sphere import Sphere

__all__ = [
    "Sphere",
]

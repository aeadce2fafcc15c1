"""Sphere primitive with object-space ray intersection.

Every sphere is the canonical unit sphere centered at the object-space
origin. Position, size and orientation in the world come exclusively from the
sphere's affine transform. An intersection query transforms the world-space
ray by the inverse transform and solves the fixed unit-sphere quadratic there:

    |O + tD|^2 = 1

which expands to a*t^2 + b*t + c = 0 with

    a = dot(D, D)
    b = 2 * dot(D, O - origin)
    c = dot(O - origin, O - origin) - 1

Both roots are reported regardless of sign; ordering and hit selection are
the job of the ``Intersections`` collection.

Surface normals are computed in object space (the radius vector) and mapped
back to world space with the inverse-transpose of the transform, which keeps
them perpendicular to the surface under non-uniform scaling.

Example:
    >>> sphere = Sphere(0, transform=AffineTransform.scaling(2.0, 2.0, 2.0))
    >>> ray = Ray(Point3(0.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
    >>> sphere.intersect(ray).ts()
    [3.0, 7.0]
"""

from __future__ import annotations

import math

from raycore.core.errors import DegenerateRay
from raycore.core.intersection import Intersection, Intersections
from raycore.core.ray import Ray
from raycore.core.transform import AffineTransform
from raycore.core.tuples import Point3, Vector3
from raycore.materials.material import Material


class Sphere:
    """A unit sphere placed in the world by an affine transform.

    Attributes:
        object_id: Identity tagged onto every intersection this sphere emits.
        transform: Object-to-world transform (always invertible).
        inverse_transform: Cached world-to-object transform.
        material: Surface material, opaque to intersection.
    """

    def __init__(
        self,
        object_id: int,
        transform: AffineTransform | None = None,
        material: Material | None = None,
    ) -> None:
        """Create a sphere.

        Args:
            object_id: Identity for this sphere, typically allocated by a Scene.
            transform: Object-to-world transform. Defaults to identity.
            material: Surface material. Defaults to ``Material()``.

        Raises:
            NonInvertibleTransform: If the transform is singular.
        """
        self._object_id = object_id
        self.set_transform(transform if transform is not None else AffineTransform.identity())
        self._material = material if material is not None else Material()

    @property
    def object_id(self) -> int:
        return self._object_id

    @property
    def transform(self) -> AffineTransform:
        return self._transform

    @property
    def inverse_transform(self) -> AffineTransform:
        return self._inverse

    @property
    def material(self) -> Material:
        return self._material

    def set_transform(self, transform: AffineTransform) -> None:
        """Replace the object-to-world transform.

        The inverse and the normal matrix are computed here so that a singular
        transform is rejected immediately and the sphere keeps its previous
        transform.

        Raises:
            NonInvertibleTransform: If the transform is singular.
        """
        inverse = transform.inverse()
        self._transform = transform
        self._inverse = inverse
        self._normal_matrix = inverse.transpose()

    def set_material(self, material: Material) -> None:
        self._material = material

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with the sphere.

        Args:
            ray: The ray in world space.

        Returns:
            A sorted collection holding both roots (equal for a tangent ray),
            or an empty collection if the ray misses.

        Raises:
            DegenerateRay: If the ray direction has zero length.
        """
        if ray.direction == Vector3.zero():
            raise DegenerateRay(f"Ray direction {ray.direction} has zero length")
        local_ray = ray.transform(self._inverse)
        direction = local_ray.direction
        oc = local_ray.origin - Point3.origin()

        a = direction.dot(direction)
        if a == 0.0:
            # Underflow of a tiny direction through a huge inverse scale
            raise DegenerateRay(f"Ray direction {ray.direction} vanishes in object space")
        b = 2.0 * direction.dot(oc)
        c = oc.dot(oc) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return Intersections.empty()

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return Intersections([Intersection(t1, self._object_id), Intersection(t2, self._object_id)])

    def normal_at(self, world_point: Point3) -> Vector3:
        """Compute the unit surface normal at a world-space point.

        Args:
            world_point: A point on the sphere surface in world space.

        Returns:
            The outward unit normal in world space.
        """
        object_point = self._inverse.transform_point(world_point)
        object_normal = object_point - Point3.origin()
        world_normal = self._normal_matrix.transform_vector(object_normal)
        return world_normal.normalize()

    def __repr__(self) -> str:
        return f"Sphere(object_id={self._object_id}, transform={self._transform!r}, material={self._material!r})"

"""Scene container coordinating spheres, identities and lights.

The Scene owns the identity allocator for its primitives, keeps them in
insertion order, and answers world-space ray queries by aggregating the
intersections of every sphere into one sorted collection before hit selection.

The Scene maintains:
- A dense identity space for its spheres (never reused, even after clear())
- Lookup from identity back to the sphere, for resolving hits
- Point lights for a downstream shading stage

Example:
    >>> scene = Scene()
    >>> sphere = scene.add_sphere(AffineTransform.translation(0.0, 0.0, 5.0))
    >>> result = scene.hit(Ray(Point3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0)))
    >>> result.intersection.t, result.sphere is sphere
    (4.0, True)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from raycore.core.errors import NonInvertibleTransform
from raycore.core.intersection import Intersection, Intersections
from raycore.core.ray import Ray
from raycore.core.transform import AffineTransform
from raycore.core.tuples import Point3, Vector3
from raycore.geometry.sphere import Sphere
from raycore.materials.material import Material
from raycore.scene.identity import IdentityAllocator
from raycore.scene.light import PointLight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneHit:
    """The visible surface point along a ray.

    Attributes:
        intersection: The selected intersection (smallest non-negative t).
        sphere: The sphere that produced it.
        point: World-space position of the hit.
        normal: Unit world-space surface normal at the hit.
    """

    intersection: Intersection
    sphere: Sphere
    point: Point3
    normal: Vector3


class Scene:
    """A collection of spheres and lights sharing one identity space."""

    def __init__(self, allocator: IdentityAllocator | None = None) -> None:
        self._allocator = allocator if allocator is not None else IdentityAllocator()
        self._spheres: dict[int, Sphere] = {}
        self._lights: list[PointLight] = []

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        transform: AffineTransform | None = None,
        material: Material | None = None,
    ) -> Sphere:
        """Create a sphere with a fresh identity and add it to the scene.

        Args:
            transform: Object-to-world transform. Defaults to identity.
            material: Surface material. Defaults to ``Material()``.

        Returns:
            The new sphere.

        Raises:
            NonInvertibleTransform: If the transform is singular. No identity
                is consumed in that case.
        """
        if transform is not None and not transform.is_invertible():
            raise NonInvertibleTransform("Cannot add a sphere with a singular transform")
        sphere = Sphere(self._allocator.allocate(), transform=transform, material=material)
        self._spheres[sphere.object_id] = sphere
        logger.debug("Added sphere %d to scene (%d total)", sphere.object_id, len(self._spheres))
        return sphere

    def get(self, object_id: int) -> Sphere:
        """Resolve an identity to its sphere.

        Raises:
            KeyError: If no sphere in this scene has the identity.
        """
        try:
            return self._spheres[object_id]
        except KeyError:
            raise KeyError(f"No sphere with object_id {object_id} in scene") from None

    @property
    def spheres(self) -> list[Sphere]:
        """Spheres in insertion order."""
        return list(self._spheres.values())

    def __len__(self) -> int:
        return len(self._spheres)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._spheres

    # =========================================================================
    # Light Management
    # =========================================================================

    def add_light(self, light: PointLight) -> None:
        self._lights.append(light)
        logger.debug("Added point light at %s", light.position)

    @property
    def lights(self) -> list[PointLight]:
        return list(self._lights)

    def clear(self) -> None:
        """Remove all spheres and lights.

        Identities already handed out are not reused afterwards.
        """
        self._spheres.clear()
        self._lights.clear()
        logger.debug("Cleared scene")

    # =========================================================================
    # Ray Queries
    # =========================================================================

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a ray with every sphere in the scene.

        Args:
            ray: The world-space ray.

        Returns:
            All intersections across all spheres, sorted ascending by t.
            Equal t values keep scene insertion order.

        Raises:
            DegenerateRay: If the ray direction has zero length.
        """
        result = Intersections.empty()
        result.aggregate(*(sphere.intersect(ray) for sphere in self._spheres.values()))
        return result

    def hit(self, ray: Ray) -> SceneHit | None:
        """Find the visible surface along a ray.

        Args:
            ray: The world-space ray.

        Returns:
            The hit with its sphere, world point and normal, or None if no
            sphere lies in front of the ray origin.
        """
        intersection = self.intersect(ray).hit()
        if intersection is None:
            return None
        sphere = self._spheres[intersection.object_id]
        point = ray.position(intersection.t)
        return SceneHit(
            intersection=intersection,
            sphere=sphere,
            point=point,
            normal=sphere.normal_at(point),
        )

    def __repr__(self) -> str:
        return f"Scene(spheres={len(self._spheres)}, lights={len(self._lights)})"

"""Unit tests for sphere intersection and normals.

Tests cover:
- Ray hitting the unit sphere at two points, a tangent, and a miss
- Ray starting inside the sphere and sphere behind the ray
- Intersecting scaled and translated spheres
- Surface normals on untransformed and transformed spheres
- Error handling for degenerate rays and singular transforms
"""

import math

import numpy as np
import pytest

from raycore.core.errors import DegenerateRay, NonInvertibleTransform
from raycore.core.intersection import Intersections
from raycore.core.ray import Ray
from raycore.core.transform import AffineTransform
from raycore.core.tuples import Point3, Vector3
from raycore.geometry.sphere import Sphere
from raycore.materials.material import Material

SQRT3_OVER_3 = math.sqrt(3.0) / 3.0


def _ray(origin, direction=(0.0, 0.0, 1.0)):
    return Ray(Point3(*origin), Vector3(*direction))


class TestSphereBasics:
    """Tests for sphere construction and state."""

    def test_default_transform_is_identity(self, unit_sphere):
        """Test a new sphere has the identity transform."""
        assert unit_sphere.transform == AffineTransform.identity()
        assert unit_sphere.inverse_transform == AffineTransform.identity()

    def test_default_material(self, unit_sphere):
        """Test a new sphere has the default material."""
        assert unit_sphere.material == Material()

    def test_set_transform(self, unit_sphere):
        """Test changing the transform updates the cached inverse."""
        t = AffineTransform.translation(2.0, 3.0, 4.0)
        unit_sphere.set_transform(t)
        assert unit_sphere.transform == t
        assert unit_sphere.inverse_transform == t.inverse()

    def test_set_material(self, unit_sphere):
        """Test assigning a material."""
        m = Material(ambient=1.0)
        unit_sphere.set_material(m)
        assert unit_sphere.material is m

    def test_singular_transform_rejected_at_construction(self):
        """Test a sphere cannot be built with a non-invertible transform."""
        with pytest.raises(NonInvertibleTransform):
            Sphere(0, transform=AffineTransform.scaling(1.0, 0.0, 1.0))

    def test_singular_transform_rejected_on_assignment(self, unit_sphere):
        """Test set_transform rejects a singular transform and keeps the old one."""
        original = AffineTransform.translation(1.0, 0.0, 0.0)
        unit_sphere.set_transform(original)
        with pytest.raises(NonInvertibleTransform):
            unit_sphere.set_transform(AffineTransform.scaling(0.0, 0.0, 0.0))
        assert unit_sphere.transform == original


class TestSphereIntersection:
    """Tests for ray-sphere intersection on the unit sphere."""

    def test_two_points(self, unit_sphere):
        """Test a ray through the center hits at t=4 and t=6."""
        xs = unit_sphere.intersect(_ray((0.0, 0.0, -5.0)))
        assert len(xs) == 2
        assert xs.ts() == pytest.approx([4.0, 6.0])

    def test_tangent_keeps_duplicate(self, unit_sphere):
        """Test a tangent ray yields the same t twice."""
        xs = unit_sphere.intersect(_ray((0.0, 1.0, -5.0)))
        assert len(xs) == 2
        assert xs.ts() == pytest.approx([5.0, 5.0])

    def test_miss(self, unit_sphere):
        """Test a ray passing above the sphere yields an empty collection."""
        xs = unit_sphere.intersect(_ray((0.0, 2.0, -5.0)))
        assert isinstance(xs, Intersections)
        assert len(xs) == 0
        assert xs.hit() is None

    def test_origin_inside_sphere(self, unit_sphere):
        """Test a ray from the center hits behind and in front."""
        xs = unit_sphere.intersect(_ray((0.0, 0.0, 0.0)))
        assert xs.ts() == pytest.approx([-1.0, 1.0])

    def test_sphere_behind_ray(self, unit_sphere):
        """Test both roots are negative when the sphere is behind."""
        xs = unit_sphere.intersect(_ray((0.0, 0.0, 5.0)))
        assert xs.ts() == pytest.approx([-6.0, -4.0])
        assert xs.hit() is None

    def test_intersections_tagged_with_object_id(self):
        """Test every intersection carries the sphere identity."""
        sphere = Sphere(42)
        xs = sphere.intersect(_ray((0.0, 0.0, -5.0)))
        assert [x.object_id for x in xs] == [42, 42]

    def test_unnormalized_direction(self, unit_sphere):
        """Test t is measured in units of the given direction."""
        xs = unit_sphere.intersect(_ray((0.0, 0.0, -5.0), (0.0, 0.0, 2.0)))
        assert xs.ts() == pytest.approx([2.0, 3.0])

    def test_zero_direction_raises(self, unit_sphere):
        """Test a zero-length direction is an explicit error."""
        with pytest.raises(DegenerateRay):
            unit_sphere.intersect(_ray((0.0, 0.0, -5.0), (0.0, 0.0, 0.0)))


class TestTransformedIntersection:
    """Tests for intersecting transformed spheres."""

    def test_scaled_sphere(self):
        """Test a sphere scaled by 2 is hit at t=3 and t=7."""
        sphere = Sphere(0, transform=AffineTransform.scaling(2.0, 2.0, 2.0))
        xs = sphere.intersect(_ray((0.0, 0.0, -5.0)))
        assert xs.ts() == pytest.approx([3.0, 7.0])

    def test_translated_sphere(self):
        """Test a sphere moved out of the ray's path is missed."""
        sphere = Sphere(0, transform=AffineTransform.translation(5.0, 0.0, 0.0))
        assert len(sphere.intersect(_ray((0.0, 0.0, -5.0)))) == 0

    def test_ray_is_not_modified(self):
        """Test intersecting does not change the world-space ray."""
        sphere = Sphere(0, transform=AffineTransform.scaling(2.0, 2.0, 2.0))
        ray = _ray((0.0, 0.0, -5.0))
        sphere.intersect(ray)
        assert ray == _ray((0.0, 0.0, -5.0))

    def test_non_uniform_scale(self):
        """Test a sphere squashed along z is hit at its flattened surface."""
        sphere = Sphere(0, transform=AffineTransform.scaling(1.0, 1.0, 0.5))
        xs = sphere.intersect(_ray((0.0, 0.0, -5.0)))
        assert xs.ts() == pytest.approx([4.5, 5.5])

    def test_very_large_sphere(self):
        """Test a sphere scaled by 1e7 is hit at its far-away surface."""
        sphere = Sphere(0, transform=AffineTransform.scaling(1e7, 1e7, 1e7))
        xs = sphere.intersect(_ray((0.0, 0.0, -5e7)))
        assert xs.ts() == pytest.approx([4e7, 6e7])

    def test_very_small_sphere(self):
        """Test a sphere scaled by 1e-5 is still a valid target."""
        sphere = Sphere(0, transform=AffineTransform.scaling(1e-5, 1e-5, 1e-5))
        xs = sphere.intersect(_ray((0.0, 0.0, -5e-5)))
        assert xs.ts() == pytest.approx([4e-5, 6e-5])

    def test_very_short_direction(self, unit_sphere):
        """Test a short but non-zero direction scales t instead of raising."""
        xs = unit_sphere.intersect(_ray((0.0, 0.0, -5.0), (0.0, 0.0, 1e-7)))
        assert xs.ts() == pytest.approx([4e7, 6e7])


class TestSphereNormals:
    """Tests for surface normals."""

    @pytest.mark.parametrize(
        "point,expected",
        [
            (Point3(1.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)),
            (Point3(0.0, 1.0, 0.0), Vector3(0.0, 1.0, 0.0)),
            (Point3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, 1.0)),
            (
                Point3(SQRT3_OVER_3, SQRT3_OVER_3, SQRT3_OVER_3),
                Vector3(SQRT3_OVER_3, SQRT3_OVER_3, SQRT3_OVER_3),
            ),
        ],
    )
    def test_normal_on_unit_sphere(self, unit_sphere, point, expected):
        """Test the normal on the unit sphere is the radius vector."""
        assert unit_sphere.normal_at(point).approx_eq(expected)

    def test_normal_is_normalized(self, unit_sphere):
        """Test the normal has unit length."""
        n = unit_sphere.normal_at(Point3(SQRT3_OVER_3, SQRT3_OVER_3, SQRT3_OVER_3))
        assert n.approx_eq(n.normalize())

    def test_normal_on_translated_sphere(self):
        """Test translation does not tilt the normal."""
        sphere = Sphere(0, transform=AffineTransform.translation(0.0, 1.0, 0.0))
        n = sphere.normal_at(Point3(0.0, 1.70711, -0.70711))
        assert n.approx_eq(Vector3(0.0, 0.70711, -0.70711))

    def test_normal_on_transformed_sphere(self):
        """Test the inverse-transpose mapping under scale and rotation."""
        t = AffineTransform.scaling(1.0, 0.5, 1.0) @ AffineTransform.rotation_z(math.pi / 5)
        sphere = Sphere(0, transform=t)
        half_sqrt2 = math.sqrt(2.0) / 2.0
        n = sphere.normal_at(Point3(0.0, half_sqrt2, -half_sqrt2))
        assert n.approx_eq(Vector3(0.0, 0.97014, -0.24254))

    def test_normals_stay_perpendicular_under_composite_transform(self):
        """Test normals are unit length and orthogonal to surface tangents.

        Uses non-uniform scale, rotation, shear and translation together; a
        forward-transformed normal would fail the orthogonality check.
        """
        t = (
            AffineTransform.scaling(3.0, 0.5, 1.5)
            .then(AffineTransform.rotation_x(0.4))
            .then(AffineTransform.rotation_y(-1.1))
            .then(AffineTransform.shearing(0.3, 0.0, 0.0, 0.2, 0.0, 0.0))
            .then(AffineTransform.translation(2.0, -1.0, 6.0))
        )
        sphere = Sphere(0, transform=t)

        for theta in np.linspace(0.2, math.pi - 0.2, 5):
            for phi in np.linspace(0.0, 2.0 * math.pi, 7, endpoint=False):
                local = Vector3(
                    math.sin(theta) * math.cos(phi),
                    math.sin(theta) * math.sin(phi),
                    math.cos(theta),
                )
                # Two tangents to the unit sphere at this point
                tangent_theta = Vector3(
                    math.cos(theta) * math.cos(phi),
                    math.cos(theta) * math.sin(phi),
                    -math.sin(theta),
                )
                tangent_phi = Vector3(-math.sin(phi), math.cos(phi), 0.0)

                world_point = t.transform_point(Point3.origin() + local)
                normal = sphere.normal_at(world_point)

                assert normal.magnitude() == pytest.approx(1.0, abs=1e-9)
                assert normal.dot(t.transform_vector(tangent_theta)) == pytest.approx(0.0, abs=1e-9)
                assert normal.dot(t.transform_vector(tangent_phi)) == pytest.approx(0.0, abs=1e-9)

    def test_normal_at_hit_point_faces_ray(self):
        """Test the normal at the visible hit points back toward the ray origin."""
        sphere = Sphere(0, transform=AffineTransform.scaling(2.0, 1.0, 0.5))
        ray = _ray((0.3, 0.2, -5.0))
        hit = sphere.intersect(ray).hit()
        assert hit is not None
        normal = sphere.normal_at(ray.position(hit.t))
        assert normal.dot(ray.direction) < 0.0

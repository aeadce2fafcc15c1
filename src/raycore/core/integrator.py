"""Data-parallel batch ray casting against a scene of spheres.

This module launches one Taichi kernel over a batch of world-space rays. The
outermost kernel loop is parallelized, one iteration per ray, so each ray is
solved independently against every sphere with no shared mutable state.

The per-ray result matches the scalar path ``scene.intersect(ray).hit()``:
each sphere's ray is moved into object space with the sphere's cached
inverse transform, the unit-sphere quadratic is solved there, and the
smallest non-negative root across all spheres is kept. Ties keep the sphere
that comes first in scene order.

Sphere inverse transforms and ray buffers are passed to the kernel as NumPy
arrays, so no global field state is kept between launches.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycore.core.integrator import WallProjection, render_silhouette
    >>> scene = Scene()
    >>> scene.add_sphere(material=Material(color=Color.red_color()))
    >>> canvas = Canvas(100, 100, Color(0.2, 0.2, 0.2))
    >>> render_silhouette(scene, canvas, WallProjection())
"""

import logging
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycore.core.color import Color
from raycore.core.errors import DegenerateRay
from raycore.core.tuples import Point3
from raycore.preview.canvas import Canvas
from raycore.scene.world import Scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Casting Constants
# =============================================================================

# Just under the f32 maximum, so any finite hit the scalar path finds is kept
T_MAX = 3.0e38

# Sphere index written for rays that hit nothing
NO_HIT = -1


# =============================================================================
# Taichi Kernels
# =============================================================================


@ti.func
def _nearest_nonnegative_root(origin: vec3, direction: vec3) -> ti.f32:
    """Solve the unit-sphere quadratic in object space.

    Args:
        origin: Ray origin in object space.
        direction: Ray direction in object space (non-zero).

    Returns:
        The smallest root with t >= 0, or -1.0 if the ray misses or the
        sphere lies entirely behind the origin.
    """
    a = tm.dot(direction, direction)
    b = 2.0 * tm.dot(direction, origin)
    c = tm.dot(origin, origin) - 1.0
    discriminant = b * b - 4.0 * a * c

    result = -1.0
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        # a > 0, so t1 <= t2
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        if t1 >= 0.0:
            result = t1
        elif t2 >= 0.0:
            result = t2
    return result


@ti.kernel
def _closest_hit_kernel(
    origins: ti.types.ndarray(dtype=ti.f32, ndim=2),
    directions: ti.types.ndarray(dtype=ti.f32, ndim=2),
    inverses: ti.types.ndarray(dtype=ti.f32, ndim=3),
    num_spheres: ti.i32,
    t_out: ti.types.ndarray(dtype=ti.f32, ndim=1),
    index_out: ti.types.ndarray(dtype=ti.i32, ndim=1),
):
    for i in range(origins.shape[0]):
        o = vec3(origins[i, 0], origins[i, 1], origins[i, 2])
        d = vec3(directions[i, 0], directions[i, 1], directions[i, 2])

        closest_t = T_MAX
        closest_index = NO_HIT
        for s in range(num_spheres):
            # Points pick up the translation column, vectors do not
            local_o = vec3(0.0, 0.0, 0.0)
            local_d = vec3(0.0, 0.0, 0.0)
            for r in ti.static(range(3)):
                local_o[r] = (
                    inverses[s, r, 0] * o[0]
                    + inverses[s, r, 1] * o[1]
                    + inverses[s, r, 2] * o[2]
                    + inverses[s, r, 3]
                )
                local_d[r] = inverses[s, r, 0] * d[0] + inverses[s, r, 1] * d[1] + inverses[s, r, 2] * d[2]

            t = _nearest_nonnegative_root(local_o, local_d)
            if t >= 0.0 and t < closest_t:
                closest_t = t
                closest_index = s

        t_out[i] = closest_t
        index_out[i] = closest_index


# =============================================================================
# Batch Casting (Python-side)
# =============================================================================


@dataclass
class BatchHits:
    """Closest hits for a batch of rays.

    Attributes:
        t: Ray parameter of the visible hit per ray, NaN where nothing was hit.
        object_ids: Identity of the hit sphere per ray, -1 where nothing was hit.
    """

    t: npt.NDArray[np.float64]
    object_ids: npt.NDArray[np.int64]

    @property
    def hit_mask(self) -> npt.NDArray[np.bool_]:
        return self.object_ids != NO_HIT

    def __len__(self) -> int:
        return len(self.t)


def _as_ray_array(values: npt.ArrayLike, name: str) -> npt.NDArray[np.float64]:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {arr.shape}")
    return arr


def cast_rays(scene: Scene, origins: npt.ArrayLike, directions: npt.ArrayLike) -> BatchHits:
    """Find the visible hit for every ray in a batch.

    Taichi must be initialized (``ti.init``) before calling this.

    Args:
        scene: The scene to cast against.
        origins: World-space ray origins, shape (N, 3).
        directions: World-space ray directions, shape (N, 3).

    Returns:
        The closest non-negative hit per ray.

    Raises:
        ValueError: If the arrays are malformed or their lengths differ.
        DegenerateRay: If any direction has zero length.
    """
    origins_arr = _as_ray_array(origins, "origins")
    directions_arr = _as_ray_array(directions, "directions")
    if origins_arr.shape != directions_arr.shape:
        raise ValueError(
            f"origins and directions must have the same shape: {origins_arr.shape} vs {directions_arr.shape}"
        )

    degenerate = np.flatnonzero(np.all(directions_arr == 0.0, axis=1))
    if degenerate.size:
        raise DegenerateRay(f"{degenerate.size} ray(s) have a zero-length direction (first at index {degenerate[0]})")

    num_rays = origins_arr.shape[0]
    spheres = scene.spheres
    t = np.full(num_rays, np.nan, dtype=np.float64)
    object_ids = np.full(num_rays, NO_HIT, dtype=np.int64)
    if num_rays == 0 or not spheres:
        return BatchHits(t=t, object_ids=object_ids)

    inverses = np.ascontiguousarray(
        np.stack([sphere.inverse_transform.matrix for sphere in spheres]), dtype=np.float32
    )
    t_out = np.empty(num_rays, dtype=np.float32)
    index_out = np.empty(num_rays, dtype=np.int32)

    _closest_hit_kernel(
        np.ascontiguousarray(origins_arr, dtype=np.float32),
        np.ascontiguousarray(directions_arr, dtype=np.float32),
        inverses,
        len(spheres),
        t_out,
        index_out,
    )

    hit = index_out != NO_HIT
    ids = np.array([sphere.object_id for sphere in spheres], dtype=np.int64)
    t[hit] = t_out[hit]
    object_ids[hit] = ids[index_out[hit]]
    logger.debug("Cast %d rays against %d spheres, %d hits", num_rays, len(spheres), int(hit.sum()))
    return BatchHits(t=t, object_ids=object_ids)


# =============================================================================
# Wall Projection Rendering
# =============================================================================


@dataclass
class WallProjection:
    """Rays cast from one eye point toward a square wall behind the scene.

    Attributes:
        ray_origin: Eye position all rays start from.
        wall_z: Z coordinate of the wall plane.
        wall_size: Edge length of the square wall in world units, centered
            on the z axis.
    """

    ray_origin: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, -5.0))
    wall_z: float = 10.0
    wall_size: float = 7.0


def make_wall_rays(
    projection: WallProjection,
    width: int,
    height: int,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Build one normalized ray per pixel toward the wall.

    Pixel (x, y) targets the wall point ``(-half + x * sx, half - y * sy, wall_z)``
    so that y grows downward on the canvas.

    Returns:
        Origins and directions, each of shape (height * width, 3) in
        row-major pixel order.
    """
    half = projection.wall_size / 2.0
    xs = -half + (projection.wall_size / width) * np.arange(width, dtype=np.float64)
    ys = half - (projection.wall_size / height) * np.arange(height, dtype=np.float64)
    grid_x, grid_y = np.meshgrid(xs, ys)

    eye = np.array([projection.ray_origin.x, projection.ray_origin.y, projection.ray_origin.z])
    targets = np.stack([grid_x, grid_y, np.full_like(grid_x, projection.wall_z)], axis=-1).reshape(-1, 3)
    directions = targets - eye
    directions /= np.linalg.norm(directions, axis=1, keepdims=True)
    origins = np.broadcast_to(eye, directions.shape).copy()
    return origins, directions


def render_silhouette(
    scene: Scene,
    canvas: Canvas,
    projection: WallProjection,
    background: Color | None = None,
) -> BatchHits:
    """Paint every pixel whose ray hits a sphere with that sphere's color.

    Pixels that miss keep their current canvas color unless ``background``
    is given, in which case they are set to it.

    Args:
        scene: The scene to render.
        canvas: The canvas to paint into.
        projection: Eye point and wall placement.
        background: Optional color for pixels that miss.

    Returns:
        The hits, in row-major pixel order.
    """
    origins, directions = make_wall_rays(projection, canvas.width, canvas.height)
    hits = cast_rays(scene, origins, directions)

    image = canvas.to_numpy().reshape(-1, 3)
    if background is not None:
        image[:] = background.to_tuple()
    for sphere in scene.spheres:
        image[hits.object_ids == sphere.object_id] = sphere.material.color.to_tuple()
    canvas.write_array(image.reshape(canvas.height, canvas.width, 3))

    logger.info(
        "Rendered %dx%d silhouette: %d of %d pixels hit",
        canvas.width,
        canvas.height,
        int(hits.hit_mask.sum()),
        len(hits),
    )
    return hits

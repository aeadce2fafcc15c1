"""Ray-sphere intersection engine with affine-transformed primitives.

This package provides the geometric core of a small ray tracer, with support for:
- Rays transformed between world and object space
- Unit spheres placed by arbitrary invertible affine transforms
- Sorted intersection collections with visible-hit selection
- Inverse-transpose surface normals
- Data-parallel batch ray casting using Taichi

Subpackages:
    core: Points, vectors, colors, affine transforms, rays, errors and the batch caster
    geometry: The sphere primitive and its intersector
    materials: Surface material parameters
    scene: Intersection records, identity allocation, lights and the scene container
    preview: Canvas buffer and image export
"""

__version__ = "0.1.0"

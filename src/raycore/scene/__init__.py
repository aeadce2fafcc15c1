"""Scene module for scene management and ray-scene queries.

This module handles scene representation and world-space ray queries:

Components:
    identity: Thread-safe identity allocator owned by each scene
    light: Point light description for shading collaborators
    world: Scene container aggregating sphere intersections

The scene module manages:
    - Identity assignment for primitives (dense, never reused)
    - Resolving intersection identities back to spheres
    - Aggregating all candidate intersections before hit selection
"""

from .identity import IdentityAllocator
from .light import PointLight
from .world import Scene, SceneHit

__all__ = [
    "IdentityAllocator",
    "PointLight",
    "Scene",
    "SceneHit",
]

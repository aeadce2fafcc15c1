"""Materials module for surface appearance parameters.

Components:
    material: Phong-style material (color, ambient, diffuse, specular, shininess)

Materials are opaque to the intersection engine; they ride along on each
primitive so that a shading stage can read them after a hit is selected.
"""

from .material import (
    DEFAULT_AMBIENT,
    DEFAULT_DIFFUSE,
    DEFAULT_SHININESS,
    DEFAULT_SPECULAR,
    Material,
)

__all__ = [
    "Material",
    "DEFAULT_AMBIENT",
    "DEFAULT_DIFFUSE",
    "DEFAULT_SPECULAR",
    "DEFAULT_SHININESS",
]

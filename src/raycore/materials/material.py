"""Phong-style surface material parameters.

Materials are opaque to the intersection core: a sphere carries one so that a
shading collaborator can look it up after a hit. Construction raises
``ValueError`` for negative coefficients or a non-positive shininess.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from raycore.core.color import Color

DEFAULT_AMBIENT = 0.1
DEFAULT_DIFFUSE = 0.9
DEFAULT_SPECULAR = 0.9
DEFAULT_SHININESS = 200.0


@dataclass(frozen=True)
class Material:
    """Surface appearance of a primitive.

    Attributes:
        color: Base surface color.
        ambient: Ambient reflection coefficient (>= 0).
        diffuse: Diffuse reflection coefficient (>= 0).
        specular: Specular reflection coefficient (>= 0).
        shininess: Specular exponent (> 0).
    """

    color: Color = field(default_factory=Color.white)
    ambient: float = DEFAULT_AMBIENT
    diffuse: float = DEFAULT_DIFFUSE
    specular: float = DEFAULT_SPECULAR
    shininess: float = DEFAULT_SHININESS

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")

"""Point light source description."""

from __future__ import annotations

from dataclasses import dataclass, field

from raycore.core.color import Color
from raycore.core.tuples import Point3


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting equally in all directions.

    Attributes:
        position: World-space location of the light.
        intensity: Emitted color and brightness.
    """

    position: Point3
    intensity: Color = field(default_factory=Color.white)

"""
Surface material for Phong shading with reflection and refraction.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .errors import ValidationError
from .patterns import Pattern
from .tuples import Color

VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417

_NON_NEGATIVE = ('ambient', 'diffuse', 'specular', 'shininess')
_UNIT_INTERVAL = ('reflective', 'transparency')


@dataclass
class Material:
    """Optical properties of a surface.

    Every numeric property is range-checked on construction and on assignment.

    Attributes:
        color: Base color, ignored when a pattern is set
        ambient: Fraction of light reflected regardless of direction
        diffuse: Fraction of light scattered from matte surfaces
        specular: Strength of the specular highlight
        shininess: Specular exponent; larger values give smaller highlights
        reflective: 0 for matte, 1 for a perfect mirror
        transparency: 0 for opaque, 1 for fully transparent
        refractive_index: Index of refraction (>= 1)
        pattern: Optional pattern that overrides the base color
    """
    color: Color = field(default_factory=lambda: Color(1, 1, 1))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM
    pattern: Optional[Pattern] = None

    def __setattr__(self, name: str, value) -> None:
        # Runs for the generated __init__ as well as later assignments
        if name in _NON_NEGATIVE and value < 0:
            raise ValidationError(f"{name} must be non-negative, got {value}")
        if name in _UNIT_INTERVAL and not 0.0 <= value <= 1.0:
            raise ValidationError(f"{name} must be in [0, 1], got {value}")
        if name == 'refractive_index' and value < 1.0:
            raise ValidationError(f"refractive_index must be >= 1, got {value}")
        super().__setattr__(name, value)

"""
Light sources and local (Phong) illumination.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .materials import Material
from .tuples import Color, Tuple, BLACK

if TYPE_CHECKING:
    from .shapes import Shape


@dataclass
class PointLight:
    """A point light source.

    Point lights emit light equally in all directions from a single point,
    with no falloff. They produce hard shadows.
    """
    position: Tuple
    intensity: Color


def lighting(
    material: Material,
    shape: Shape,
    light: PointLight,
    point: Tuple,
    eyev: Tuple,
    normalv: Tuple,
    in_shadow: bool = False
) -> Color:
    """Compute the Phong color of a point lit by a single light.

    Args:
        material: Material of the surface
        shape: Shape being shaded (used to place the material's pattern)
        light: The light illuminating the point
        point: Point on the surface in world space
        eyev: Unit vector from the point toward the eye
        normalv: Unit surface normal at the point
        in_shadow: Whether the light is occluded; only ambient is returned if so

    Returns:
        ambient + diffuse + specular contribution
    """
    if material.pattern is not None:
        base = material.pattern.pattern_at_shape(shape, point)
    else:
        base = material.color

    effective_color = base * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    lightv = (light.position - point).normalize()
    light_dot_normal = lightv.dot(normalv)

    # Light is on the other side of the surface
    if light_dot_normal < 0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_dot_eye = (-lightv).reflect(normalv).dot(eyev)
    if reflect_dot_eye <= 0:
        specular = BLACK
    else:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular

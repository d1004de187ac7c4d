"""
The scene: shapes and lights, and the recursive color resolution over them.

Implements:
- Scene-wide intersection and hit selection
- Hard shadows from the first light
- Reflection and refraction bounded by a remaining-depth counter
- Fresnel blending (Schlick) for surfaces both reflective and transparent
"""

from __future__ import annotations
from typing import Optional
import math

from .errors import ValidationError
from .intersections import Computation, Intersection, hit, prepare_computations, schlick
from .lights import PointLight, lighting
from .materials import Material
from .ray import Ray
from .shapes import Shape, Sphere
from .transformations import scaling
from .tuples import BLACK, Color, Tuple, point

DEFAULT_REMAINING = 4


class World:
    """A collection of shapes and point lights.

    The world is read-only while rendering; only the first light is used for
    shading and shadows.
    """

    def __init__(
        self,
        objects: Optional[list[Shape]] = None,
        lights: Optional[list[PointLight]] = None
    ):
        self.objects: list[Shape] = objects if objects is not None else []
        self.lights: list[PointLight] = lights if lights is not None else []

    def add(self, shape: Shape) -> None:
        """Add a shape to the world."""
        self.objects.append(shape)

    def add_light(self, light: PointLight) -> None:
        """Add a light to the world."""
        self.lights.append(light)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect the ray with every shape and return all roots sorted by t."""
        xs: list[Intersection] = []
        for shape in self.objects:
            xs.extend(shape.intersect(ray))
        xs.sort(key=lambda i: i.t)
        return xs

    def is_shadowed(self, position: Tuple) -> bool:
        """Check whether any shape lies between the point and the first light.

        Raises:
            ValidationError: If the world has no lights
        """
        if not self.lights:
            raise ValidationError("Cannot test shadows in a world without lights")

        to_light = self.lights[0].position - position
        distance = to_light.magnitude()
        shadow_ray = Ray(position, to_light.normalize())

        h = hit(self.intersect(shadow_ray))
        return h is not None and h.t < distance

    def shade_hit(self, comps: Computation, remaining: int = DEFAULT_REMAINING) -> Color:
        """Compute the color at a prepared hit, including reflection and refraction."""
        material = comps.shape.material

        if self.lights:
            surface = lighting(
                material,
                comps.shape,
                self.lights[0],
                comps.over_point,
                comps.eyev,
                comps.normalv,
                self.is_shadowed(comps.over_point),
            )
        else:
            surface = BLACK

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)

        if material.reflective > 0 and material.transparency > 0:
            reflectance = schlick(comps)
            return surface + reflected * reflectance + refracted * (1 - reflectance)
        return surface + reflected + refracted

    def reflected_color(self, comps: Computation, remaining: int = DEFAULT_REMAINING) -> Color:
        """Color seen along the reflection vector, scaled by the material's reflectivity."""
        reflective = comps.shape.material.reflective
        if remaining <= 0 or reflective == 0:
            return BLACK

        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, comps: Computation, remaining: int = DEFAULT_REMAINING) -> Color:
        """Color seen through the surface, bent by Snell's law and scaled by transparency."""
        transparency = comps.shape.material.transparency
        if remaining <= 0 or transparency == 0:
            return BLACK

        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eyev.dot(comps.normalv)
        sin2_t = n_ratio ** 2 * (1 - cos_i ** 2)

        # Total internal reflection
        if sin2_t > 1:
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)

        return self.color_at(refract_ray, remaining - 1) * transparency

    def color_at(self, ray: Ray, remaining: int = DEFAULT_REMAINING) -> Color:
        """Resolve the color seen along a ray; black if nothing is hit."""
        xs = self.intersect(ray)
        h = hit(xs)
        if h is None:
            return BLACK

        comps = prepare_computations(h, ray, xs)
        return self.shade_hit(comps, remaining)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"World(objects={len(self.objects)}, lights={len(self.lights)})"


def default_world() -> World:
    """Create the reference scene: one white light and two concentric spheres."""
    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))

    outer = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))

    return World([outer, inner], [light])

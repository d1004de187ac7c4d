"""
Ray-surface intersections, hit selection, and per-hit shading state.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence
import math

from .ray import Ray
from .tuples import EPSILON, Tuple

if TYPE_CHECKING:
    from .shapes import Shape


class Intersection:
    """A root `t` along a ray and the shape it belongs to.

    Two intersections are equal when they have the same `t` and refer to the
    very same shape object.
    """

    __slots__ = ('t', 'shape')

    def __init__(self, t: float, shape: Shape):
        self.t = t
        self.shape = shape

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.shape is other.shape

    def __hash__(self) -> int:
        return hash((self.t, id(self.shape)))

    def __repr__(self) -> str:
        return f"Intersection(t={self.t:.5f}, shape={type(self.shape).__name__})"


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections into a list sorted by t."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Optional[Intersection]:
    """Return the visible intersection: the smallest non-negative t.

    Intersections behind the ray origin (t < 0) are never visible. Returns
    None when no intersection qualifies.
    """
    visible = [i for i in xs if i.t >= 0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)


@dataclass
class Computation:
    """Geometric state at a hit, precomputed once for shading.

    Attributes:
        t: Ray parameter of the hit
        shape: The shape that was hit
        point: Hit point in world space
        eyev: Unit vector from the point back toward the ray origin
        normalv: Surface normal, flipped to face the eye when the hit is inside
        inside: True if the ray started inside the shape
        over_point: point nudged along the normal, origin for shadow and reflection rays
        under_point: point nudged against the normal, origin for refraction rays
        reflectv: Ray direction reflected about the normal
        n1: Refractive index of the medium being exited
        n2: Refractive index of the medium being entered
    """
    t: float
    shape: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool
    over_point: Tuple
    under_point: Tuple
    reflectv: Tuple
    n1: float = 1.0
    n2: float = 1.0


def _refractive_indices(hit: Intersection, xs: Sequence[Intersection]) -> tuple[float, float]:
    """Find n1 and n2 by tracking which shapes the ray is inside along xs.

    Assumes transparent shapes are either nested or disjoint; overlapping
    volumes produce unreliable indices.
    """
    containers: list[Shape] = []
    n1 = n2 = 1.0

    for i in xs:
        is_hit = i == hit
        if is_hit:
            n1 = containers[-1].material.refractive_index if containers else 1.0

        for index, shape in enumerate(containers):
            if shape is i.shape:
                del containers[index]
                break
        else:
            containers.append(i.shape)

        if is_hit:
            n2 = containers[-1].material.refractive_index if containers else 1.0
            break

    return n1, n2


def prepare_computations(
    hit: Intersection,
    ray: Ray,
    xs: Optional[Sequence[Intersection]] = None
) -> Computation:
    """Precompute the shading state for a hit.

    Args:
        hit: The intersection being shaded
        ray: The ray that produced it
        xs: All intersections of the ray with the scene, sorted by t. Needed
            to determine refractive indices across nested transparent shapes.
            If omitted or missing the hit, the hit alone is used.

    Returns:
        Computation for the hit
    """
    point = ray.position(hit.t)
    eyev = -ray.direction
    normalv = hit.shape.normal_at(point)

    inside = normalv.dot(eyev) < 0
    if inside:
        normalv = -normalv

    if xs is None or hit not in xs:
        xs = [hit]
    n1, n2 = _refractive_indices(hit, xs)

    return Computation(
        t=hit.t,
        shape=hit.shape,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=point + normalv * EPSILON,
        under_point=point - normalv * EPSILON,
        reflectv=ray.direction.reflect(normalv),
        n1=n1,
        n2=n2,
    )


def schlick(comps: Computation) -> float:
    """Approximate the Fresnel reflectance at a hit using Schlick's formula.

    Returns:
        Fraction of light reflected, in [0, 1]
    """
    cos = comps.eyev.dot(comps.normalv)

    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        # Total internal reflection
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1 - r0) * (1 - cos) ** 5

"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations

from .matrix import Matrix
from .tuples import Tuple


class Ray:
    """A ray with origin and direction.

    The parametric form is: P(t) = origin + t * direction
    where t >= 0 represents points in front of the origin.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Tuple, direction: Tuple):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (not normalized automatically)
        """
        self.origin = origin
        self.direction = direction

    def position(self, t: float) -> Tuple:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction multiplied by matrix."""
        return Ray(matrix @ self.origin, matrix @ self.direction)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"

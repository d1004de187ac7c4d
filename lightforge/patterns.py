"""
Procedural color patterns.

Implements:
- Stripes along x
- Linear gradient along x
- 3D checkers
- Concentric rings in the xz-plane
- Radial gradient in the xz-plane

Patterns are evaluated in their own coordinate space, reached from world
space through the decorated shape's transform and then the pattern's own.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import math

from .matrix import IDENTITY, Matrix
from .tuples import Color, Tuple, BLACK, WHITE

if TYPE_CHECKING:
    from .shapes import Shape


class Pattern(ABC):
    """Abstract base class for patterns."""

    def __init__(self, transform: Matrix = IDENTITY):
        self.transform = transform

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        # Raises SingularMatrixError before the pattern is modified
        self._inverse = value.inverse()
        self._transform = value

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    @abstractmethod
    def pattern_at(self, point: Tuple) -> Color:
        """Get the pattern color at a point in pattern space.

        Args:
            point: Point already transformed into pattern space

        Returns:
            Color at this location
        """
        pass

    def pattern_at_shape(self, shape: Shape, world_point: Tuple) -> Color:
        """Sample the pattern for a world-space point on the given shape."""
        object_point = shape.world_to_object(world_point)
        pattern_point = self._inverse @ object_point
        return self.pattern_at(pattern_point)


class TwoColorPattern(Pattern):
    """Base for patterns that alternate or blend between two colors."""

    def __init__(self, a: Color = WHITE, b: Color = BLACK, transform: Matrix = IDENTITY):
        super().__init__(transform)
        self.a = a
        self.b = b

    def _blend(self, fraction: float) -> Color:
        return self.a + (self.b - self.a) * fraction

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a}, b={self.b})"


class StripePattern(TwoColorPattern):
    """Alternating stripes of `a` and `b`, one unit wide, along x."""

    def pattern_at(self, point: Tuple) -> Color:
        if math.floor(point.x % 2.0) == 0:
            return self.a
        return self.b


class GradientPattern(TwoColorPattern):
    """Linear blend from `a` to `b` repeating every unit along x."""

    def pattern_at(self, point: Tuple) -> Color:
        return self._blend(point.x - math.floor(point.x))


class CheckersPattern(TwoColorPattern):
    """Alternating cubes of `a` and `b`."""

    def pattern_at(self, point: Tuple) -> Color:
        total = abs(point.x) + abs(point.y) + abs(point.z)
        if math.floor(total % 2.0) == 0:
            return self.a
        return self.b


class RingPattern(TwoColorPattern):
    """Concentric rings around the y axis."""

    def pattern_at(self, point: Tuple) -> Color:
        distance = math.sqrt(point.x ** 2 + point.z ** 2)
        if math.floor(distance % 2.0) == 0:
            return self.a
        return self.b


class RadialGradientPattern(TwoColorPattern):
    """Gradient from `a` to `b` that restarts with every unit of distance from the y axis."""

    def pattern_at(self, point: Tuple) -> Color:
        distance = math.sqrt(point.x ** 2 + point.z ** 2) % 2.0
        return self._blend(distance - math.floor(distance))


class TestPattern(Pattern):
    """Returns the pattern-space point itself as a color."""

    __test__ = False

    def pattern_at(self, point: Tuple) -> Color:
        return Color(point.x, point.y, point.z)

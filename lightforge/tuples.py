"""
Tuple and Color classes for 3D math operations.

This is the fundamental building block of the ray tracer:
- Points in 3D space (w = 1)
- Direction vectors (w = 0)
- RGB color values (unclamped until encoding)
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np

from .errors import ValidationError

EPSILON = 1e-4


class Tuple:
    """A homogeneous 4-component tuple used for both points and vectors.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Tuple:
        """Create Tuple from numpy array."""
        t = cls.__new__(cls)
        t._data = np.asarray(arr, dtype=np.float64)
        return t

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    def is_point(self) -> bool:
        return self._data[3] == 1.0

    def is_vector(self) -> bool:
        return self._data[3] == 0.0

    def __repr__(self) -> str:
        kind = 'point' if self.is_point() else 'vector' if self.is_vector() else 'Tuple'
        return f"{kind}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data))

    def __neg__(self) -> Tuple:
        return Tuple.from_array(-self._data)

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple.from_array(self._data + other._data)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple.from_array(self._data - other._data)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple.from_array(self._data * scalar)

    def __rmul__(self, scalar: float) -> Tuple:
        return Tuple.from_array(scalar * self._data)

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple.from_array(self._data / scalar)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def _require_vector(self, operation: str) -> None:
        if self._data[3] != 0.0:
            raise ValidationError(f"{operation} requires a vector, got {self!r}")

    def as_vector(self) -> Tuple:
        """Return a copy with the homogeneous component forced to 0."""
        data = self._data.copy()
        data[3] = 0.0
        return Tuple.from_array(data)

    def magnitude(self) -> float:
        """Return the magnitude (length) of the vector."""
        self._require_vector('magnitude')
        return float(np.linalg.norm(self._data))

    def normalize(self) -> Tuple:
        """Return a unit vector in the same direction."""
        length = self.magnitude()
        if length == 0:
            return vector(0, 0, 0)
        return Tuple.from_array(self._data / length)

    def dot(self, other: Tuple) -> float:
        """Compute dot product with another vector."""
        self._require_vector('dot')
        other._require_vector('dot')
        return float(np.dot(self._data, other._data))

    def cross(self, other: Tuple) -> Tuple:
        """Compute cross product with another vector."""
        self._require_vector('cross')
        other._require_vector('cross')
        return Tuple.from_array(np.append(np.cross(self._data[:3], other._data[:3]), 0.0))

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


class Color:
    """An RGB color. Components are not clamped until output encoding."""

    __slots__ = ('_data',)

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        self._data = np.array([r, g, b], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Color:
        """Create Color from numpy array."""
        c = cls.__new__(cls)
        c._data = np.asarray(arr, dtype=np.float64)
        return c

    @property
    def r(self) -> float:
        return float(self._data[0])

    @property
    def g(self) -> float:
        return float(self._data[1])

    @property
    def b(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"Color({self.r:.5f}, {self.g:.5f}, {self.b:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data))

    def __add__(self, other: Color) -> Color:
        return Color.from_array(self._data + other._data)

    def __sub__(self, other: Color) -> Color:
        return Color.from_array(self._data - other._data)

    def __mul__(self, other: Union[Color, float]) -> Color:
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        return Color.from_array(self._data * other)

    def __rmul__(self, other: float) -> Color:
        return Color.from_array(other * self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0)."""
    return Tuple(x, y, z, 0.0)


def approx_equal(a, b, epsilon: float = EPSILON) -> bool:
    """Compare two floats, tuples, colors or matrices within epsilon.

    Every component must differ by less than epsilon. Objects of different
    kinds or shapes are never equal.
    """
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        if math.isinf(a) or math.isinf(b):
            return a == b
        return abs(a - b) < epsilon
    if type(a) is not type(b):
        return False
    left = a.to_array()
    right = b.to_array()
    if left.shape != right.shape:
        return False
    return bool(np.all(np.abs(left - right) < epsilon))


BLACK = Color(0, 0, 0)
WHITE = Color(1, 1, 1)

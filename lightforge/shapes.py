"""
Geometric shapes for the ray tracer.

Each shape lives in its own local coordinate frame (a unit sphere at the
origin, the xz-plane, the [-1, 1] cube and so on) and is placed in the world
by its transform. Subclasses implement `local_intersect` and
`local_normal_at`; the base class handles moving rays, points and normals
between world and local space.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
import math

from .errors import ConfigurationError, ValidationError
from .intersections import Intersection
from .materials import Material
from .matrix import IDENTITY, Matrix
from .ray import Ray
from .tuples import EPSILON, Tuple, vector


class Shape(ABC):
    """Abstract base class for all objects that can be hit by rays.

    Shapes are compared by identity: two intersections refer to the same
    surface only if they hold the same shape object.
    """

    def __init__(self, transform: Matrix = IDENTITY, material: Optional[Material] = None):
        """Create a shape.

        Args:
            transform: Object-to-world transform (must be invertible)
            material: Material for shading (a default Material if None)
        """
        self.transform = transform
        self.material = material if material is not None else Material()
        self.parent: Optional[Group] = None

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        # Raises SingularMatrixError before the shape is modified
        inverse = value.inverse()
        self._transform = value
        self._inverse = inverse
        self._inverse_transpose = inverse.transpose()

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this shape.

        Returns:
            Intersections in the shape's natural root order (not necessarily sorted)
        """
        return self.local_intersect(ray.transform(self._inverse))

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Return the unit surface normal at a world-space point."""
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal_at(local_point)
        return self.normal_to_world(local_normal)

    def world_to_object(self, world_point: Tuple) -> Tuple:
        """Convert a world-space point into this shape's local space, through any parent groups."""
        if self.parent is not None:
            world_point = self.parent.world_to_object(world_point)
        return self._inverse @ world_point

    def normal_to_world(self, normal: Tuple) -> Tuple:
        """Convert a local-space normal into a unit world-space normal."""
        # The inverse transpose keeps normals perpendicular under non-uniform scaling
        normal = (self._inverse_transpose @ normal).as_vector().normalize()
        if self.parent is not None:
            normal = self.parent.normal_to_world(normal)
        return normal

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray already transformed into local space."""
        pass

    @abstractmethod
    def local_normal_at(self, point: Tuple) -> Tuple:
        """Return the (possibly unnormalized) normal at a local-space point."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transform={self.transform})"


class Sphere(Shape):
    """A unit sphere centered at the local origin."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Solve |O + tD|^2 = 1 for t.

        Expanding gives the quadratic at^2 + bt + c = 0 with
        a = D.D, b = 2 D.O, c = O.O - 1 (O taken as a vector from the origin).
        """
        sphere_to_ray = ray.origin - Tuple(0, 0, 0, 1)
        a = ray.direction.dot(ray.direction)
        b = 2 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        t1 = (-b - sqrtd) / (2 * a)
        t2 = (-b + sqrtd) / (2 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, point: Tuple) -> Tuple:
        return vector(point.x, point.y, point.z)


def glass_sphere() -> Sphere:
    """Create a unit sphere with a fully transparent glass material."""
    return Sphere(material=Material(transparency=1.0, refractive_index=1.5))


class Plane(Shape):
    """An infinite plane: the local xz-plane with normal +y."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        # Ray is parallel to (or within) the plane
        if abs(ray.direction.y) < EPSILON:
            return []

        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, point: Tuple) -> Tuple:
        return vector(0, 1, 0)


def _check_axis(origin: float, direction: float) -> tuple[float, float]:
    """Return the (tmin, tmax) where a ray crosses the slab [-1, 1] on one axis."""
    tmin_numerator = -1 - origin
    tmax_numerator = 1 - origin

    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        # Parallel to the slab: unbounded if the origin lies within it (faces included)
        tmin = -math.inf if tmin_numerator <= 0 else math.inf
        tmax = math.inf if tmax_numerator >= 0 else -math.inf

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


class Cube(Shape):
    """An axis-aligned cube spanning [-1, 1] on every local axis."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Test ray-cube intersection using the slab method."""
        xtmin, xtmax = _check_axis(ray.origin.x, ray.direction.x)
        ytmin, ytmax = _check_axis(ray.origin.y, ray.direction.y)
        ztmin, ztmax = _check_axis(ray.origin.z, ray.direction.z)

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)

        if tmin > tmax:
            return []
        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, point: Tuple) -> Tuple:
        ax, ay, az = abs(point.x), abs(point.y), abs(point.z)
        max_c = max(ax, ay, az)

        if max_c == ax:
            return vector(point.x, 0, 0)
        if max_c == ay:
            return vector(0, point.y, 0)
        return vector(0, 0, point.z)


class _Revolved(Shape):
    """Common handling for y-axis shapes truncated to minimum < y < maximum."""

    def __init__(
        self,
        transform: Matrix = IDENTITY,
        material: Optional[Material] = None,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False
    ):
        """Create a shape of revolution around the local y axis.

        Args:
            transform: Object-to-world transform
            material: Material for shading
            minimum: Lower y bound (exclusive)
            maximum: Upper y bound (exclusive)
            closed: Whether to include end caps at the bounds

        Raises:
            ConfigurationError: If minimum > maximum, or if closed with an infinite bound
        """
        if minimum > maximum:
            raise ConfigurationError(
                f"{type(self).__name__} minimum ({minimum}) must not exceed maximum ({maximum})"
            )
        if closed and not (math.isfinite(minimum) and math.isfinite(maximum)):
            raise ConfigurationError(
                f"Closed {type(self).__name__} needs finite bounds, got [{minimum}, {maximum}]"
            )
        super().__init__(transform, material)
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed

    @abstractmethod
    def _cap_radius(self, y: float) -> float:
        pass

    def _within_cap(self, ray: Ray, t: float, y: float) -> bool:
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        radius = self._cap_radius(y)
        return x * x + z * z <= radius * radius

    def _intersect_caps(self, ray: Ray, xs: list[Intersection]) -> None:
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return

        for cap_y in (self.minimum, self.maximum):
            # A cap at infinity is never hit
            if not math.isfinite(cap_y):
                continue
            t = (cap_y - ray.origin.y) / ray.direction.y
            if self._within_cap(ray, t, cap_y):
                xs.append(Intersection(t, self))

    def _append_if_in_bounds(self, ray: Ray, t: float, xs: list[Intersection]) -> None:
        y = ray.origin.y + t * ray.direction.y
        if self.minimum < y < self.maximum:
            xs.append(Intersection(t, self))

    def _cap_normal(self, point: Tuple, dist: float) -> Optional[Tuple]:
        if dist < self._cap_radius(self.maximum) ** 2 and point.y >= self.maximum - EPSILON:
            return vector(0, 1, 0)
        if dist < self._cap_radius(self.minimum) ** 2 and point.y <= self.minimum + EPSILON:
            return vector(0, -1, 0)
        return None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(minimum={self.minimum}, maximum={self.maximum}, "
            f"closed={self.closed})"
        )


class Cylinder(_Revolved):
    """A cylinder of radius 1 around the local y axis."""

    def _cap_radius(self, y: float) -> float:
        return 1.0

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xs: list[Intersection] = []
        dx, dz = ray.direction.x, ray.direction.z
        ox, oz = ray.origin.x, ray.origin.z

        a = dx * dx + dz * dz

        # Parallel to the y axis: only the caps can be hit
        if abs(a) >= EPSILON:
            b = 2 * ox * dx + 2 * oz * dz
            c = ox * ox + oz * oz - 1
            discriminant = b * b - 4 * a * c
            if discriminant < 0:
                return []

            sqrtd = math.sqrt(discriminant)
            t0 = (-b - sqrtd) / (2 * a)
            t1 = (-b + sqrtd) / (2 * a)
            if t0 > t1:
                t0, t1 = t1, t0

            self._append_if_in_bounds(ray, t0, xs)
            self._append_if_in_bounds(ray, t1, xs)

        self._intersect_caps(ray, xs)
        return xs

    def local_normal_at(self, point: Tuple) -> Tuple:
        dist = point.x ** 2 + point.z ** 2
        cap = self._cap_normal(point, dist)
        if cap is not None:
            return cap
        return vector(point.x, 0, point.z)


class Cone(_Revolved):
    """A double-napped cone x^2 + z^2 = y^2 with its apex at the local origin."""

    def _cap_radius(self, y: float) -> float:
        return abs(y)

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xs: list[Intersection] = []
        dx, dy, dz = ray.direction.x, ray.direction.y, ray.direction.z
        ox, oy, oz = ray.origin.x, ray.origin.y, ray.origin.z

        a = dx * dx - dy * dy + dz * dz
        b = 2 * ox * dx - 2 * oy * dy + 2 * oz * dz
        c = ox * ox - oy * oy + oz * oz

        if abs(a) < EPSILON:
            # Ray parallel to one half of the cone: at most one wall hit
            if abs(b) >= EPSILON:
                self._append_if_in_bounds(ray, -c / (2 * b), xs)
        else:
            discriminant = b * b - 4 * a * c
            # Tolerate rounding on rays grazing the surface or passing through the apex
            if discriminant > -EPSILON:
                sqrtd = math.sqrt(max(discriminant, 0.0))
                t0 = (-b - sqrtd) / (2 * a)
                t1 = (-b + sqrtd) / (2 * a)
                if t0 > t1:
                    t0, t1 = t1, t0

                self._append_if_in_bounds(ray, t0, xs)
                self._append_if_in_bounds(ray, t1, xs)

        self._intersect_caps(ray, xs)
        return xs

    def local_normal_at(self, point: Tuple) -> Tuple:
        dist = point.x ** 2 + point.z ** 2
        cap = self._cap_normal(point, dist)
        if cap is not None:
            return cap

        y = math.sqrt(dist)
        if point.y > 0:
            y = -y
        return vector(point.x, y, point.z)


class Group(Shape):
    """A collection of shapes sharing a common transform."""

    def __init__(
        self,
        transform: Matrix = IDENTITY,
        material: Optional[Material] = None,
        children: Optional[list[Shape]] = None
    ):
        super().__init__(transform, material)
        self.children: list[Shape] = []
        for child in children or []:
            self.add_child(child)

    def add_child(self, shape: Shape) -> None:
        """Add a shape to the group and make the group its parent."""
        if shape is self:
            raise ValidationError("A group cannot contain itself")
        shape.parent = self
        self.children.append(shape)

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Concatenate the intersections of every child with the local ray."""
        xs: list[Intersection] = []
        for child in self.children:
            xs.extend(child.intersect(ray))
        return xs

    def local_normal_at(self, point: Tuple) -> Tuple:
        raise ValidationError("Groups have no surface; normals come from their children")

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)

    def __repr__(self) -> str:
        return f"Group(children={len(self.children)}, transform={self.transform})"


class TestShape(Shape):
    """A shape that records the local ray it receives and is never hit."""

    __test__ = False

    def __init__(self, transform: Matrix = IDENTITY, material: Optional[Material] = None):
        super().__init__(transform, material)
        self.saved_ray: Optional[Ray] = None

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        self.saved_ray = ray
        return []

    def local_normal_at(self, point: Tuple) -> Tuple:
        return vector(point.x, point.y, point.z)

"""Tests for geometric shapes."""

import pytest
import math

from lightforge.errors import ConfigurationError, SingularMatrixError, ValidationError
from lightforge.intersections import intersections
from lightforge.materials import Material
from lightforge.matrix import IDENTITY
from lightforge.ray import Ray
from lightforge.shapes import Sphere, Plane, Cube, Cylinder, Cone, Group, TestShape, glass_sphere
from lightforge.transformations import rotation_y, rotation_z, scaling, translation
from lightforge.tuples import point, vector, approx_equal, EPSILON
from lightforge.world import World

SQRT3_3 = math.sqrt(3) / 3


class TestShapeBase:
    """Test behavior shared by every shape."""

    def test_default_transform(self):
        s = TestShape()
        assert s.transform == IDENTITY

    def test_assigning_transform(self):
        s = TestShape()
        s.transform = translation(2, 3, 4)
        assert s.transform == translation(2, 3, 4)

    def test_default_material(self):
        s = TestShape()
        assert s.material == Material()

    def test_assigning_material(self):
        s = TestShape()
        m = Material(ambient=1)
        s.material = m
        assert s.material is m

    def test_no_parent_by_default(self):
        assert TestShape().parent is None

    def test_singular_transform_raises(self):
        s = TestShape(transform=translation(1, 0, 0))
        with pytest.raises(SingularMatrixError):
            s.transform = scaling(0, 1, 1)
        # Shape is left unchanged
        assert s.transform == translation(1, 0, 0)

    def test_intersect_scaled_shape(self):
        s = TestShape(transform=scaling(2, 2, 2))
        s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert s.saved_ray.origin == point(0, 0, -2.5)
        assert s.saved_ray.direction == vector(0, 0, 0.5)

    def test_intersect_translated_shape(self):
        s = TestShape(transform=translation(5, 0, 0))
        s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert s.saved_ray.origin == point(-5, 0, -5)
        assert s.saved_ray.direction == vector(0, 0, 1)

    def test_normal_on_translated_shape(self):
        s = TestShape(transform=translation(0, 1, 0))
        n = s.normal_at(point(0, 1.70711, -0.70711))
        assert approx_equal(n, vector(0, 0.70711, -0.70711))

    def test_normal_on_transformed_shape(self):
        s = TestShape(transform=scaling(1, 0.5, 1) @ rotation_z(math.pi / 5))
        n = s.normal_at(point(0, math.sqrt(2) / 2, -math.sqrt(2) / 2))
        assert approx_equal(n, vector(0, 0.97014, -0.24254))


class TestSphere:
    """Test Sphere class."""

    def test_hit_through_center(self):
        s = Sphere()
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert len(xs) == 2
        assert xs[0].t == 4.0
        assert xs[1].t == 6.0

    def test_tangent(self):
        xs = Sphere().intersect(Ray(point(0, 1, -5), vector(0, 0, 1)))
        assert len(xs) == 2
        assert xs[0].t == 5.0
        assert xs[1].t == 5.0

    def test_miss(self):
        xs = Sphere().intersect(Ray(point(0, 2, -5), vector(0, 0, 1)))
        assert xs == []

    def test_ray_inside(self):
        xs = Sphere().intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))
        assert [i.t for i in xs] == [-1.0, 1.0]

    def test_sphere_behind_ray(self):
        xs = Sphere().intersect(Ray(point(0, 0, 5), vector(0, 0, 1)))
        assert [i.t for i in xs] == [-6.0, -4.0]

    def test_intersect_sets_shape(self):
        s = Sphere()
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert xs[0].shape is s
        assert xs[1].shape is s

    def test_scaled_sphere(self):
        s = Sphere(transform=scaling(2, 2, 2))
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert len(xs) == 2
        assert abs(xs[0].t - 3.0) < 1e-6
        assert abs(xs[1].t - 7.0) < 1e-6

    def test_translated_sphere(self):
        s = Sphere(transform=translation(5, 0, 0))
        assert s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1))) == []

    @pytest.mark.parametrize("p, expected", [
        (point(1, 0, 0), vector(1, 0, 0)),
        (point(0, 1, 0), vector(0, 1, 0)),
        (point(0, 0, 1), vector(0, 0, 1)),
        (point(SQRT3_3, SQRT3_3, SQRT3_3), vector(SQRT3_3, SQRT3_3, SQRT3_3)),
    ])
    def test_normal(self, p, expected):
        assert approx_equal(Sphere().normal_at(p), expected)

    def test_normal_is_normalized(self):
        n = Sphere().normal_at(point(SQRT3_3, SQRT3_3, SQRT3_3))
        assert approx_equal(n, n.normalize())

    def test_normal_on_translated_sphere(self):
        s = Sphere(transform=translation(0, 1, 0))
        n = s.normal_at(point(0, 1.70711, -0.70711))
        assert approx_equal(n, vector(0, 0.70711, -0.70711))

    def test_normal_on_transformed_sphere(self):
        s = Sphere(transform=scaling(1, 0.5, 1) @ rotation_z(math.pi / 5))
        n = s.normal_at(point(0, math.sqrt(2) / 2, -math.sqrt(2) / 2))
        assert approx_equal(n, vector(0, 0.97014, -0.24254))

    def test_glass_sphere(self):
        s = glass_sphere()
        assert s.transform == IDENTITY
        assert s.material.transparency == 1.0
        assert s.material.refractive_index == 1.5


class TestPlane:
    """Test Plane class."""

    def test_normal_is_constant(self):
        p = Plane()
        assert p.local_normal_at(point(0, 0, 0)) == vector(0, 1, 0)
        assert p.local_normal_at(point(10, 0, -10)) == vector(0, 1, 0)
        assert p.local_normal_at(point(-5, 0, 150)) == vector(0, 1, 0)

    def test_parallel_ray(self):
        assert Plane().local_intersect(Ray(point(0, 10, 0), vector(0, 0, 1))) == []

    def test_coplanar_ray(self):
        assert Plane().local_intersect(Ray(point(0, 0, 0), vector(0, 0, 1))) == []

    def test_ray_from_above(self):
        p = Plane()
        xs = p.local_intersect(Ray(point(0, 1, 0), vector(0, -1, 0)))
        assert len(xs) == 1
        assert xs[0].t == 1.0
        assert xs[0].shape is p

    def test_ray_from_below(self):
        p = Plane()
        xs = p.local_intersect(Ray(point(0, -1, 0), vector(0, 1, 0)))
        assert len(xs) == 1
        assert xs[0].t == 1.0


class TestCube:
    """Test Cube class."""

    @pytest.mark.parametrize("origin, direction, t1, t2", [
        (point(5, 0.5, 0), vector(-1, 0, 0), 4, 6),
        (point(-5, 0.5, 0), vector(1, 0, 0), 4, 6),
        (point(0.5, 5, 0), vector(0, -1, 0), 4, 6),
        (point(0.5, -5, 0), vector(0, 1, 0), 4, 6),
        (point(0.5, 0, 5), vector(0, 0, -1), 4, 6),
        (point(0.5, 0, -5), vector(0, 0, 1), 4, 6),
        (point(0, 0.5, 0), vector(0, 0, 1), -1, 1),
    ])
    def test_ray_hits_cube(self, origin, direction, t1, t2):
        xs = Cube().local_intersect(Ray(origin, direction))
        assert len(xs) == 2
        assert xs[0].t == t1
        assert xs[1].t == t2

    @pytest.mark.parametrize("origin, direction", [
        (point(-2, 0, 0), vector(0.2673, 0.5345, 0.8018)),
        (point(0, -2, 0), vector(0.8018, 0.2673, 0.5345)),
        (point(0, 0, -2), vector(0.5345, 0.8018, 0.2673)),
        (point(2, 0, 2), vector(0, 0, -1)),
        (point(0, 2, 2), vector(0, -1, 0)),
        (point(2, 2, 0), vector(-1, 0, 0)),
    ])
    def test_ray_misses_cube(self, origin, direction):
        assert Cube().local_intersect(Ray(origin, direction)) == []

    @pytest.mark.parametrize("p, expected", [
        (point(1, 0.5, -0.8), vector(1, 0, 0)),
        (point(-1, -0.2, 0.9), vector(-1, 0, 0)),
        (point(-0.4, 1, -0.1), vector(0, 1, 0)),
        (point(0.3, -1, -0.7), vector(0, -1, 0)),
        (point(-0.6, 0.3, 1), vector(0, 0, 1)),
        (point(0.4, 0.4, -1), vector(0, 0, -1)),
        (point(1, 1, 1), vector(1, 0, 0)),
        (point(-1, -1, -1), vector(-1, 0, 0)),
    ])
    def test_normal(self, p, expected):
        assert Cube().local_normal_at(p) == expected

    @pytest.mark.parametrize("origin, direction, t1, t2", [
        (point(1, 0, -5), vector(0, 0, 1), 4, 6),
        (point(-1, 0, -5), vector(0, 0, 1), 4, 6),
        (point(0.5, 1, -5), vector(0, 0, 1), 4, 6),
        (point(1, -1, 5), vector(0, 0, -1), 4, 6),
    ])
    def test_ray_along_face(self, origin, direction, t1, t2):
        xs = Cube().local_intersect(Ray(origin, direction))
        assert [i.t for i in xs] == [t1, t2]

    def test_ray_along_face_in_world(self):
        w = World([Cube()])
        xs = w.intersect(Ray(point(1, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == [4, 6]
        assert not any(math.isnan(i.t) for i in xs)


class TestCylinder:
    """Test Cylinder class."""

    def test_defaults(self):
        cyl = Cylinder()
        assert cyl.minimum == -math.inf
        assert cyl.maximum == math.inf
        assert cyl.closed is False

    def test_minimum_above_maximum_raises(self):
        with pytest.raises(ConfigurationError, match="minimum"):
            Cylinder(minimum=2, maximum=1)

    @pytest.mark.parametrize("kwargs", [
        {'closed': True},
        {'minimum': 0, 'closed': True},
        {'maximum': 0, 'closed': True},
    ])
    def test_closed_with_infinite_bound_raises(self, kwargs):
        with pytest.raises(ConfigurationError, match="finite"):
            Cylinder(**kwargs)

    def test_infinite_bound_caps_never_hit(self):
        cyl = Cylinder(minimum=0)
        cyl.closed = True
        xs = cyl.local_intersect(Ray(point(0, 5, 0), vector(0, -1, 0)))
        assert [i.t for i in xs] == [5]

    @pytest.mark.parametrize("origin, direction", [
        (point(1, 0, 0), vector(0, 1, 0)),
        (point(0, 0, 0), vector(0, 1, 0)),
        (point(0, 0, -5), vector(1, 1, 1)),
    ])
    def test_ray_misses(self, origin, direction):
        ray = Ray(origin, direction.normalize())
        assert Cylinder().local_intersect(ray) == []

    @pytest.mark.parametrize("origin, direction, t0, t1", [
        (point(1, 0, -5), vector(0, 0, 1), 5, 5),
        (point(0, 0, -5), vector(0, 0, 1), 4, 6),
        (point(0.5, 0, -5), vector(0.1, 1, 1), 6.80798, 7.08872),
    ])
    def test_ray_hits(self, origin, direction, t0, t1):
        ray = Ray(origin, direction.normalize())
        xs = Cylinder().local_intersect(ray)
        assert len(xs) == 2
        assert approx_equal(xs[0].t, t0)
        assert approx_equal(xs[1].t, t1)

    @pytest.mark.parametrize("p, expected", [
        (point(1, 0, 0), vector(1, 0, 0)),
        (point(0, 5, -1), vector(0, 0, -1)),
        (point(0, -2, 1), vector(0, 0, 1)),
        (point(-1, 1, 0), vector(-1, 0, 0)),
    ])
    def test_normal(self, p, expected):
        assert Cylinder().local_normal_at(p) == expected

    @pytest.mark.parametrize("origin, direction, count", [
        (point(0, 1.5, 0), vector(0.1, 1, 0), 0),
        (point(0, 3, -5), vector(0, 0, 1), 0),
        (point(0, 0, -5), vector(0, 0, 1), 0),
        (point(0, 2, -5), vector(0, 0, 1), 0),
        (point(0, 1, -5), vector(0, 0, 1), 0),
        (point(0, 1.5, -2), vector(0, 0, 1), 2),
    ])
    def test_truncated(self, origin, direction, count):
        cyl = Cylinder(minimum=1, maximum=2)
        xs = cyl.local_intersect(Ray(origin, direction.normalize()))
        assert len(xs) == count

    @pytest.mark.parametrize("origin, direction, count", [
        (point(0, 3, 0), vector(0, -1, 0), 2),
        (point(0, 3, -2), vector(0, -1, 2), 2),
        (point(0, 0, -2), vector(0, 1, 2), 2),
    ])
    def test_capped(self, origin, direction, count):
        cyl = Cylinder(minimum=1, maximum=2, closed=True)
        xs = cyl.local_intersect(Ray(origin, direction.normalize()))
        assert len(xs) == count

    @pytest.mark.parametrize("p, expected", [
        (point(0, 1, 0), vector(0, -1, 0)),
        (point(0.5, 1, 0), vector(0, -1, 0)),
        (point(0, 1, 0.5), vector(0, -1, 0)),
        (point(0, 2, 0), vector(0, 1, 0)),
        (point(0.5, 2, 0), vector(0, 1, 0)),
        (point(0, 2, 0.5), vector(0, 1, 0)),
    ])
    def test_cap_normal(self, p, expected):
        cyl = Cylinder(minimum=1, maximum=2, closed=True)
        assert cyl.local_normal_at(p) == expected


class TestCone:
    """Test Cone class."""

    @pytest.mark.parametrize("origin, direction, t0, t1", [
        (point(0, 0, -5), vector(0, 0, 1), 5, 5),
        (point(0, 0, -5), vector(1, 1, 1), 8.66025, 8.66025),
        (point(1, 1, -5), vector(-0.5, -1, 1), 4.55006, 49.44994),
    ])
    def test_ray_hits(self, origin, direction, t0, t1):
        ray = Ray(origin, direction.normalize())
        xs = Cone().local_intersect(ray)
        assert len(xs) == 2
        assert approx_equal(xs[0].t, t0)
        assert approx_equal(xs[1].t, t1)

    def test_ray_along_axis_through_apex(self):
        xs = Cone().local_intersect(Ray(point(0, -5, 0), vector(0, 1, 0)))
        assert len(xs) == 2
        assert xs[0].t == 5
        assert xs[1].t == 5

    def test_normal_at_apex_is_finite(self):
        n = Cone().normal_at(point(0, 0, 0))
        assert not any(math.isnan(c) for c in n.to_array())

    def test_ray_parallel_to_one_half(self):
        ray = Ray(point(0, 0, -1), vector(0, 1, 1).normalize())
        xs = Cone().local_intersect(ray)
        assert len(xs) == 1
        assert approx_equal(xs[0].t, 0.35355)

    @pytest.mark.parametrize("origin, direction, count", [
        (point(0, 0, -5), vector(0, 1, 0), 0),
        (point(0, 0, -0.25), vector(0, 1, 1), 2),
        (point(0, 0, -0.25), vector(0, 1, 0), 4),
    ])
    def test_caps(self, origin, direction, count):
        cone = Cone(minimum=-0.5, maximum=0.5, closed=True)
        xs = cone.local_intersect(Ray(origin, direction.normalize()))
        assert len(xs) == count

    @pytest.mark.parametrize("p, expected", [
        (point(0, 0, 0), vector(0, 0, 0)),
        (point(1, 1, 1), vector(1, -math.sqrt(2), 1)),
        (point(-1, -1, 0), vector(-1, 1, 0)),
    ])
    def test_normal(self, p, expected):
        assert Cone().local_normal_at(p) == expected

    def test_minimum_above_maximum_raises(self):
        with pytest.raises(ConfigurationError):
            Cone(minimum=0.5, maximum=-0.5)

    def test_closed_with_infinite_bounds_raises(self):
        with pytest.raises(ConfigurationError, match="finite"):
            Cone(closed=True)

    def test_ray_inside_open_cone_has_finite_hits(self):
        cone = Cone()
        ray = Ray(point(0, 1, 0), vector(0.1, 1, 0.1).normalize())
        xs = cone.local_intersect(ray)
        assert len(xs) == 2
        assert all(math.isfinite(i.t) for i in xs)


class TestGroup:
    """Test Group class."""

    def test_empty_group(self):
        g = Group()
        assert g.transform == IDENTITY
        assert len(g) == 0

    def test_add_child(self):
        g = Group()
        s = TestShape()
        g.add_child(s)
        assert len(g) == 1
        assert s in list(g)
        assert s.parent is g

    def test_children_argument(self):
        a, b = Sphere(), Cube()
        g = Group(children=[a, b])
        assert g.children == [a, b]
        assert a.parent is g and b.parent is g

    def test_cannot_contain_itself(self):
        g = Group()
        with pytest.raises(ValidationError):
            g.add_child(g)

    def test_intersect_empty_group(self):
        xs = Group().local_intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))
        assert xs == []

    def test_intersect_nonempty_group(self):
        g = Group()
        s1 = Sphere()
        s2 = Sphere(transform=translation(0, 0, -3))
        s3 = Sphere(transform=translation(5, 0, 0))
        for s in (s1, s2, s3):
            g.add_child(s)

        xs = intersections(*g.local_intersect(Ray(point(0, 0, -5), vector(0, 0, 1))))
        assert len(xs) == 4
        assert xs[0].shape is s2
        assert xs[1].shape is s2
        assert xs[2].shape is s1
        assert xs[3].shape is s1

    def test_intersect_transformed_group(self):
        g = Group(transform=scaling(2, 2, 2))
        g.add_child(Sphere(transform=translation(5, 0, 0)))
        xs = g.intersect(Ray(point(10, 0, -10), vector(0, 0, 1)))
        assert len(xs) == 2

    def test_world_to_object_through_parents(self):
        g1 = Group(transform=rotation_y(math.pi / 2))
        g2 = Group(transform=scaling(2, 2, 2))
        g1.add_child(g2)
        s = Sphere(transform=translation(5, 0, 0))
        g2.add_child(s)
        assert approx_equal(s.world_to_object(point(-2, 0, -10)), point(0, 0, -1))

    def test_normal_to_world_through_parents(self):
        g1 = Group(transform=rotation_y(math.pi / 2))
        g2 = Group(transform=scaling(1, 2, 3))
        g1.add_child(g2)
        s = Sphere(transform=translation(5, 0, 0))
        g2.add_child(s)
        n = s.normal_to_world(vector(SQRT3_3, SQRT3_3, SQRT3_3))
        assert approx_equal(n, vector(0.2857, 0.4286, -0.8571))

    def test_normal_on_child(self):
        g1 = Group(transform=rotation_y(math.pi / 2))
        g2 = Group(transform=scaling(1, 2, 3))
        g1.add_child(g2)
        s = Sphere(transform=translation(5, 0, 0))
        g2.add_child(s)
        n = s.normal_at(point(1.7321, 1.1547, -5.5774))
        assert approx_equal(n, vector(0.2857, 0.4286, -0.8571))

    def test_group_has_no_normal(self):
        with pytest.raises(ValidationError):
            Group().normal_at(point(0, 0, 0))

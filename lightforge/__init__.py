"""
LightForge - A Python Whitted-style Ray Tracer

Renders scenes of transformed primitives under point lights with:
- Phong local illumination and hard shadows
- Recursive reflection and refraction with Fresnel (Schlick) blending
- Spheres, planes, cubes, cylinders, cones and groups
- Procedural patterns (stripes, gradients, checkers, rings)
- Multi-threaded tile rendering
- PPM and Pillow image output
"""

__version__ = "0.1.0"
__author__ = "LightForge Team"

from .errors import LightForgeError, ValidationError, ConfigurationError, SingularMatrixError
from .tuples import Tuple, Color, point, vector, approx_equal, EPSILON, BLACK, WHITE
from .matrix import Matrix, IDENTITY
from .transformations import translation, scaling, rotation_x, rotation_y, rotation_z, shearing, view_transform
from .ray import Ray
from .patterns import (
    Pattern, StripePattern, GradientPattern, CheckersPattern,
    RingPattern, RadialGradientPattern, TestPattern
)
from .materials import Material
from .lights import PointLight, lighting
from .intersections import Intersection, Computation, intersections, hit, prepare_computations, schlick
from .shapes import Shape, Sphere, Plane, Cube, Cylinder, Cone, Group, TestShape, glass_sphere
from .world import World, default_world, DEFAULT_REMAINING
from .camera import Camera
from .canvas import Canvas
from .renderer import Renderer, RenderSettings, render

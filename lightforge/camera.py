"""
Camera module for generating primary rays.

The camera sits at the origin of its own space looking toward -z, with the
image plane one unit away. Its transform (usually from `view_transform`)
orients the world relative to the camera.
"""

from __future__ import annotations
import math

from .errors import ValidationError
from .matrix import IDENTITY, Matrix
from .ray import Ray
from .tuples import point


class Camera:
    """A pinhole camera with a configurable field of view."""

    def __init__(self, hsize: int, vsize: int, field_of_view: float, transform: Matrix = IDENTITY):
        """Create a camera.

        Args:
            hsize: Horizontal size of the image in pixels
            vsize: Vertical size of the image in pixels
            field_of_view: Angle the camera can see, in radians
            transform: World-to-camera transform
        """
        if hsize <= 0 or vsize <= 0:
            raise ValidationError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0 < field_of_view < math.pi:
            raise ValidationError(f"Field of view must be in (0, pi), got {field_of_view}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform

        half_view = math.tan(field_of_view / 2)
        aspect = hsize / vsize
        if aspect >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2 / hsize

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        self._inverse = value.inverse()
        self._transform = value

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Generate the ray from the camera through the center of a pixel.

        Args:
            px: Pixel column (0 = left)
            py: Pixel row (0 = top)

        Returns:
            World-space ray with a normalized direction
        """
        # Offset from the edge of the canvas to the pixel's center
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        pixel = self._inverse @ point(world_x, world_y, -1)
        origin = self._inverse @ point(0, 0, 0)
        direction = (pixel - origin).normalize()

        return Ray(origin, direction)

    def __repr__(self) -> str:
        return f"Camera({self.hsize}x{self.vsize}, fov={self.field_of_view:.4f})"

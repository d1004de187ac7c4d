"""
Builders for the 4x4 affine transforms used to place shapes, patterns and cameras.

All rotations take angles in radians. Transforms compose right to left:
`translation(...) @ scaling(...)` scales first, then translates.
"""

from __future__ import annotations
import math

from .matrix import Matrix
from .tuples import Tuple


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [1, 0, 0, x],
        [0, 1, 0, y],
        [0, 0, 1, z],
        [0, 0, 0, 1],
    ])


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [x, 0, 0, 0],
        [0, y, 0, 0],
        [0, 0, z, 0],
        [0, 0, 0, 1],
    ])


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [1, 0, 0, 0],
        [0, c, -s, 0],
        [0, s, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, 0, s, 0],
        [0, 1, 0, 0],
        [-s, 0, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, -s, 0, 0],
        [s, c, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ])


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each axis in proportion to the other two.

    `xy` moves x in proportion to y, `xz` moves x in proportion to z, and so on.
    """
    return Matrix([
        [1, xy, xz, 0],
        [yx, 1, yz, 0],
        [zx, zy, 1, 0],
        [0, 0, 0, 1],
    ])


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Build the world-to-camera transform for an eye looking at a target.

    Args:
        from_point: Eye position in world space
        to_point: Point the eye looks at
        up: Approximate up direction (need not be normalized or orthogonal)

    Returns:
        Matrix that orients the world relative to the eye
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)

    orientation = Matrix([
        [left.x, left.y, left.z, 0],
        [true_up.x, true_up.y, true_up.z, 0],
        [-forward.x, -forward.y, -forward.z, 0],
        [0, 0, 0, 1],
    ])
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)

"""
Geometry Primitives

Points, rectangles and the small 2D affine toolkit shared by every scene
generator. Angles are in radians throughout.
"""

from typing import Tuple
from dataclasses import dataclass
import math


Matrix = Tuple[Tuple[float, float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class Point:
    """A point on the canvas"""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    def distance(self, other: 'Point') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def midpoint(self, other: 'Point') -> 'Point':
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def lerp(self, other: 'Point', k: float) -> 'Point':
        return Point(self.x + (other.x - self.x) * k, self.y + (other.y - self.y) * k)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle, used both as canvas and as placement cell.

    Width and height are never negative.
    """
    x: float
    y: float
    w: float
    h: float

    def __post_init__(self):
        if self.w < 0 or self.h < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.w}x{self.h}")

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def area(self) -> float:
        return self.w * self.h

    def overlaps(self, other: 'Rect') -> bool:
        return overlap(self, other)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.w, self.h


def overlap(a: Rect, b: Rect) -> bool:
    """
    Standard AABB test: rectangles overlap iff both axis projections do.
    Touching edges count as overlapping.
    """
    return not (a.x > b.right or b.x > a.right or a.y > b.bottom or b.y > a.bottom)


def validate_canvas(width: float, height: float) -> None:
    """Raise ValueError unless the canvas has finite positive dimensions"""
    for name, value in (('width', width), ('height', height)):
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
            raise ValueError(f"Canvas {name} must be a finite positive number, got {value!r}")


def polar(radius: float, theta: float) -> Point:
    """Offset of length radius in direction theta"""
    return Point(radius * math.cos(theta), radius * math.sin(theta))


def rotate(theta: float) -> Matrix:
    """Rotation matrix; positive angles turn counter-clockwise on a y-down canvas"""
    c, s = math.cos(theta), math.sin(theta)
    return ((c, s, 0.0), (-s, c, 0.0))


def translate(dx: float, dy: float) -> Matrix:
    return ((1.0, 0.0, dx), (0.0, 1.0, dy))


def apply(point: Point, *matrices: Matrix) -> Point:
    """
    Apply matrices to a point in order.

    Later matrices act on the result of earlier ones, so
    ``apply(p, rotate(t), translate(dx, dy))`` rotates first.
    """
    x, y = point.x, point.y
    for row_x, row_y in matrices:
        x, y = (row_x[0] * x + row_x[1] * y + row_x[2],
                row_y[0] * x + row_y[1] * y + row_y[2])
    return Point(x, y)

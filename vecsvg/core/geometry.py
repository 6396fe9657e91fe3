"""
VecSVG Geometry Module

Defines the 2D primitives used throughout the exporter: Point, BoundingBox
and Matrix (a 2x3 affine transform).
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional
import math


@dataclass
class Point:
    """A 2D point."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def length(self) -> float:
        """Distance from the origin."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x)**2 + (self.y - other.y)**2)

    def rotate(self, angle: float, center: 'Point' = None) -> 'Point':
        """Rotate point around center by angle (radians)."""
        if center is None:
            center = Point(0, 0)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        dx = self.x - center.x
        dy = self.y - center.y
        return Point(
            center.x + dx * cos_a - dy * sin_a,
            center.y + dx * sin_a + dy * cos_a
        )


@dataclass
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Optional['BoundingBox']:
        """Smallest box containing all points, or None for no points."""
        points = list(points)
        if not points:
            return None
        return cls(
            min_x=min(p.x for p in points),
            min_y=min(p.y for p in points),
            max_x=max(p.x for p in points),
            max_y=max(p.y for p in points)
        )

    @property
    def x(self) -> float:
        return self.min_x

    @property
    def y(self) -> float:
        return self.min_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def corners(self) -> List[Point]:
        """The four corners, clockwise from the top-left."""
        return [
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        ]

    def expanded(self, margin: float) -> 'BoundingBox':
        """Grow the box by margin on every side."""
        return BoundingBox(
            self.min_x - margin, self.min_y - margin,
            self.max_x + margin, self.max_y + margin
        )

    def union(self, other: 'BoundingBox') -> 'BoundingBox':
        """Smallest box containing both boxes."""
        return BoundingBox(
            min(self.min_x, other.min_x), min(self.min_y, other.min_y),
            max(self.max_x, other.max_x), max(self.max_y, other.max_y)
        )


@dataclass(frozen=True)
class Matrix:
    """
    A 2D affine transform.

    Stored as [a, b, c, d, e, f] representing [[a, c, e], [b, d, f], [0, 0, 1]],
    the same layout SVG uses for matrix(a b c d e f).
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> 'Matrix':
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> 'Matrix':
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def rotation(cls, angle: float) -> 'Matrix':
        """Rotation by angle (radians), clockwise on a y-down canvas."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return cls(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

    @classmethod
    def scaling(cls, sx: float, sy: float = None) -> 'Matrix':
        if sy is None:
            sy = sx
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @classmethod
    def skewing_x(cls, angle: float) -> 'Matrix':
        return cls(1.0, 0.0, math.tan(angle), 1.0, 0.0, 0.0)

    def as_list(self) -> List[float]:
        return [self.a, self.b, self.c, self.d, self.e, self.f]

    def multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Compose two transforms: self * other.

        The result applies other first, then self.
        """
        a1, b1, c1, d1, e1, f1 = self.as_list()
        a2, b2, c2, d2, e2, f2 = other.as_list()
        return Matrix(
            a1 * a2 + c1 * b2,       # a
            b1 * a2 + d1 * b2,       # b
            a1 * c2 + c1 * d2,       # c
            b1 * c2 + d1 * d2,       # d
            a1 * e2 + c1 * f2 + e1,  # e
            b1 * e2 + d1 * f2 + f1   # f
        )

    def __matmul__(self, other: 'Matrix') -> 'Matrix':
        return self.multiply(other)

    def apply(self, point: Point) -> Point:
        """Transform a point."""
        return Point(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f
        )

    def apply_linear(self, point: Point) -> Point:
        """Transform a vector, ignoring the translation."""
        return Point(
            self.a * point.x + self.c * point.y,
            self.b * point.x + self.d * point.y
        )

    def translate(self, tx: float, ty: float) -> 'Matrix':
        return self.multiply(Matrix.translation(tx, ty))

    def rotate(self, angle: float) -> 'Matrix':
        return self.multiply(Matrix.rotation(angle))

    def scale(self, sx: float, sy: float = None) -> 'Matrix':
        return self.multiply(Matrix.scaling(sx, sy))

    def skew_x(self, angle: float) -> 'Matrix':
        return self.multiply(Matrix.skewing_x(angle))

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def translation_part(self) -> Point:
        return Point(self.e, self.f)

    def inverted(self) -> 'Matrix':
        """
        Inverse transform.

        A singular matrix has no inverse; its linear part collapses to zero
        and only the translation is undone.
        """
        det = self.determinant
        if det == 0:
            return Matrix(0.0, 0.0, 0.0, 0.0, -self.e, -self.f)
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        e = -(a * self.e + c * self.f)
        f = -(b * self.e + d * self.f)
        return Matrix(a, b, c, d, e, f)

    def is_identity(self, tolerance: float = 1e-9) -> bool:
        return all(
            abs(value - expected) <= tolerance
            for value, expected in zip(self.as_list(), Matrix().as_list())
        )

    def almost_equals(self, other: 'Matrix', tolerance: float = 1e-9) -> bool:
        return all(
            abs(x - y) <= tolerance
            for x, y in zip(self.as_list(), other.as_list())
        )

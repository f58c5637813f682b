"""
Planar geometry primitives

Immutable 2D point/vector used by every path segment, plus the
line-line intersection needed to place tangent arc centers.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Translation2d:
    """A 2D point or vector (inches)."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_tuple(cls, point: Tuple[float, float]) -> 'Translation2d':
        return cls(float(point[0]), float(point[1]))

    @classmethod
    def between(cls, a: 'Translation2d', b: 'Translation2d') -> 'Translation2d':
        """Vector pointing from a to b."""
        return cls(b.x - a.x, b.y - a.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def translate_by(self, other: 'Translation2d') -> 'Translation2d':
        return Translation2d(self.x + other.x, self.y + other.y)

    def __add__(self, other: 'Translation2d') -> 'Translation2d':
        return self.translate_by(other)

    def __sub__(self, other: 'Translation2d') -> 'Translation2d':
        return Translation2d(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> 'Translation2d':
        return Translation2d(self.x * factor, self.y * factor)

    def inverse(self) -> 'Translation2d':
        return Translation2d(-self.x, -self.y)

    def normal(self) -> 'Translation2d':
        """Left-hand perpendicular (rotated +90 degrees)."""
        return Translation2d(-self.y, self.x)

    def rotate_by(self, radians: float) -> 'Translation2d':
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        return Translation2d(self.x * cos_a - self.y * sin_a,
                             self.x * sin_a + self.y * cos_a)

    def distance(self, other: 'Translation2d') -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def dot(self, other: 'Translation2d') -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Translation2d') -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def is_close(self, other: 'Translation2d', tolerance: float = 1e-9) -> bool:
        return self.distance(other) <= tolerance

    @staticmethod
    def angle_between(a: 'Translation2d', b: 'Translation2d') -> float:
        """
        Unsigned angle between two vectors in [0, pi].

        Returns 0.0 when either vector has zero length.
        """
        denom = a.norm() * b.norm()
        if denom == 0.0:
            return 0.0
        cos_angle = max(-1.0, min(1.0, a.dot(b) / denom))
        return math.acos(cos_angle)

    def __str__(self) -> str:
        return f'({self.x:.3f}, {self.y:.3f})'


def intersect_rays(p1: Translation2d, d1: Translation2d,
                   p2: Translation2d, d2: Translation2d,
                   epsilon: float = 1e-9) -> Optional[Translation2d]:
    """
    Intersect the infinite lines p1 + t*d1 and p2 + s*d2.

    Args:
        p1, d1: Point on and direction of the first line
        p2, d2: Point on and direction of the second line
        epsilon: Cross-product magnitude below which lines are parallel

    Returns:
        Intersection point, or None for parallel (or degenerate) lines
    """
    denom = d1.cross(d2)
    if abs(denom) <= epsilon:
        return None
    t = (p2 - p1).cross(d2) / denom
    return p1 + d1.scale(t)

from __future__ import annotations

import math
import numpy

from splinegen.util import EPSILON, epsilon_equals


class Translation2d:
    """A shift in the (x, y) plane. Immutable value type."""

    __slots__ = ('_x', '_y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self._x = float(x)
        self._y = float(y)

    @staticmethod
    def identity() -> 'Translation2d':
        return Translation2d(0.0, 0.0)

    @staticmethod
    def infinity() -> 'Translation2d':
        """Sentinel for "no such point", e.g. intersection of parallel lines."""
        return Translation2d(math.inf, math.inf)

    @staticmethod
    def delta(start: 'Translation2d', end: 'Translation2d') -> 'Translation2d':
        """Translation leading from start to end."""
        return Translation2d(end._x - start._x, end._y - start._y)

    @staticmethod
    def from_polar(direction, magnitude: float) -> 'Translation2d':
        return Translation2d(direction.cos * magnitude, direction.sin * magnitude)

    @staticmethod
    def from_array(arr) -> 'Translation2d':
        arr = numpy.asarray(arr, dtype=float).reshape(2)
        return Translation2d(arr[0], arr[1])

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def translation(self) -> 'Translation2d':
        return self

    def norm(self) -> float:
        """Euclidean length, sqrt(x^2 + y^2)."""
        return math.hypot(self._x, self._y)

    def norm2(self) -> float:
        return self._x * self._x + self._y * self._y

    def translate_by(self, other: 'Translation2d') -> 'Translation2d':
        return Translation2d(self._x + other._x, self._y + other._y)

    def rotate_by(self, rotation) -> 'Translation2d':
        """Apply the rotation matrix of rotation to this vector."""
        c = rotation.cos
        s = rotation.sin
        return Translation2d(self._x * c - self._y * s, self._x * s + self._y * c)

    def direction(self):
        """Heading of this vector. A zero vector yields the identity rotation."""
        from splinegen.geombase.rotation2 import Rotation2d
        return Rotation2d(self._x, self._y, normalize=True)

    def inverse(self) -> 'Translation2d':
        return Translation2d(-self._x, -self._y)

    def scale(self, s: float) -> 'Translation2d':
        return Translation2d(self._x * s, self._y * s)

    def interpolate(self, other: 'Translation2d', x: float) -> 'Translation2d':
        if x <= 0:
            return self
        elif x >= 1:
            return other
        return self.extrapolate(other, x)

    def extrapolate(self, other: 'Translation2d', x: float) -> 'Translation2d':
        return Translation2d(x * (other._x - self._x) + self._x,
                             x * (other._y - self._y) + self._y)

    def distance(self, other: 'Translation2d') -> float:
        return math.hypot(other._x - self._x, other._y - self._y)

    def epsilon_equals(self, other: 'Translation2d', epsilon: float = EPSILON) -> bool:
        return epsilon_equals(self._x, other._x, epsilon) and epsilon_equals(self._y, other._y, epsilon)

    def is_finite(self) -> bool:
        return math.isfinite(self._x) and math.isfinite(self._y)

    def as_array(self) -> numpy.ndarray:
        return numpy.array([self._x, self._y])

    @staticmethod
    def dot(a: 'Translation2d', b: 'Translation2d') -> float:
        return a._x * b._x + a._y * b._y

    @staticmethod
    def cross(a: 'Translation2d', b: 'Translation2d') -> float:
        """2D cross product returning scalar: a.x*b.y - a.y*b.x"""
        return a._x * b._y - a._y * b._x

    @staticmethod
    def get_angle(a: 'Translation2d', b: 'Translation2d'):
        """Unsigned angle between two vectors. Identity if either is zero."""
        from splinegen.geombase.rotation2 import Rotation2d
        denom = a.norm() * b.norm()
        if denom == 0.0:
            return Rotation2d.identity()
        cos_angle = Translation2d.dot(a, b) / denom
        if math.isnan(cos_angle):
            return Rotation2d.identity()
        return Rotation2d.from_radians(math.acos(min(1.0, max(cos_angle, -1.0))))

    def __add__(self, other: 'Translation2d') -> 'Translation2d':
        return self.translate_by(other)

    def __sub__(self, other: 'Translation2d') -> 'Translation2d':
        return Translation2d(self._x - other._x, self._y - other._y)

    def __neg__(self) -> 'Translation2d':
        return self.inverse()

    def __mul__(self, s: float) -> 'Translation2d':
        return self.scale(s)

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Translation2d):
            return NotImplemented
        return self.distance(other) < EPSILON

    def __iter__(self):
        yield self._x
        yield self._y

    def __repr__(self):
        return f"Translation2d(x={self._x}, y={self._y})"

    def __str__(self):
        return f"({self._x:.3f},{self._y:.3f})"

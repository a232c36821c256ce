from __future__ import annotations

import math

from splinegen.geombase.translation2 import Translation2d
from splinegen.util import EPSILON, epsilon_equals, rad2deg, deg2rad


class Rotation2d:
    """
    A rotation in the plane represented as a point on the unit circle (cos, sin).

    The angle itself is never stored: radians and degrees are derived with atan2,
    so there is no wraparound and composition stays numerically stable.
    """

    __slots__ = ('_cos', '_sin')

    def __init__(self, x: float = 1.0, y: float = 0.0, normalize: bool = False):
        """
        Args:
            x: Cosine of the angle (or x of any direction vector if normalize)
            y: Sine of the angle (or y of any direction vector if normalize)
            normalize: Rescale (x, y) onto the unit circle. A zero vector
                becomes the identity rotation.
        """
        if normalize:
            # Repeated products accumulate rounding error, rescaling resets it.
            magnitude = math.hypot(x, y)
            if magnitude > EPSILON:
                self._cos = x / magnitude
                self._sin = y / magnitude
            else:
                self._cos = 1.0
                self._sin = 0.0
        else:
            self._cos = float(x)
            self._sin = float(y)

    @staticmethod
    def identity() -> 'Rotation2d':
        return Rotation2d(1.0, 0.0)

    @staticmethod
    def from_radians(angle: float) -> 'Rotation2d':
        return Rotation2d(math.cos(angle), math.sin(angle))

    @staticmethod
    def from_degrees(angle: float) -> 'Rotation2d':
        return Rotation2d.from_radians(deg2rad(angle))

    @staticmethod
    def from_translation(direction: Translation2d, normalize: bool = True) -> 'Rotation2d':
        return Rotation2d(direction.x, direction.y, normalize)

    @property
    def cos(self) -> float:
        return self._cos

    @property
    def sin(self) -> float:
        return self._sin

    @property
    def rotation(self) -> 'Rotation2d':
        return self

    def tan(self) -> float:
        if abs(self._cos) < EPSILON:
            return math.inf if self._sin >= 0.0 else -math.inf
        return self._sin / self._cos

    @property
    def radians(self) -> float:
        return math.atan2(self._sin, self._cos)

    @property
    def degrees(self) -> float:
        return rad2deg(self.radians)

    def rotate_by(self, other: 'Rotation2d') -> 'Rotation2d':
        """Angle addition: this rotation followed by other."""
        return Rotation2d(
            self._cos * other._cos - self._sin * other._sin,
            self._cos * other._sin + self._sin * other._cos,
            normalize=True)

    def normal(self) -> 'Rotation2d':
        """This rotation turned by +90 degrees."""
        return Rotation2d(-self._sin, self._cos)

    def inverse(self) -> 'Rotation2d':
        return Rotation2d(self._cos, -self._sin)

    def is_parallel(self, other: 'Rotation2d', epsilon: float = EPSILON) -> bool:
        return epsilon_equals(Translation2d.cross(self.to_translation(), other.to_translation()), 0.0, epsilon)

    def to_translation(self) -> Translation2d:
        return Translation2d(self._cos, self._sin)

    def nearest_pole(self) -> 'Rotation2d':
        """The axis direction (0, 90, 180 or 270 degrees) closest to this rotation."""
        if abs(self._cos) > abs(self._sin):
            return Rotation2d(math.copysign(1.0, self._cos), 0.0)
        return Rotation2d(0.0, math.copysign(1.0, self._sin))

    def interpolate(self, other: 'Rotation2d', x: float) -> 'Rotation2d':
        if x <= 0:
            return self
        elif x >= 1:
            return other
        angle_diff = self.inverse().rotate_by(other).radians
        return self.rotate_by(Rotation2d.from_radians(angle_diff * x))

    def distance(self, other: 'Rotation2d') -> float:
        """Signed angle in radians from this rotation to other."""
        return self.inverse().rotate_by(other).radians

    def epsilon_equals(self, other: 'Rotation2d', epsilon: float = EPSILON) -> bool:
        return abs(self.distance(other)) < epsilon

    def __eq__(self, other):
        if not isinstance(other, Rotation2d):
            return NotImplemented
        return self.epsilon_equals(other)

    def __repr__(self):
        return f"Rotation2d(cos={self._cos}, sin={self._sin})"

    def __str__(self):
        return f"({self.degrees:.3f} deg)"

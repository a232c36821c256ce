from __future__ import annotations

import math
import numpy

from splinegen.geombase.rotation2 import Rotation2d
from splinegen.geombase.translation2 import Translation2d
from splinegen.geombase.twist2 import Twist2d
from splinegen.util import EPSILON, epsilon_equals

# Below this angle exp/log switch to Taylor series to avoid 0/0.
SMALL_ANGLE_EPS = 1e-9


class Pose2d:
    """
    A 2D pose (rigid transform): translation followed by rotation.

    Poses form the group SE(2) under transform_by, with identity() as the
    neutral element and inverse() as the inverse. exp and log connect the
    group with its algebra of twists (see Sophus se2.hpp for the formulas).
    """

    __slots__ = ('_translation', '_rotation')

    def __init__(self, translation: Translation2d = None, rotation: Rotation2d = None):
        if translation is None:
            translation = Translation2d()
        if rotation is None:
            rotation = Rotation2d()
        self._translation = translation
        self._rotation = rotation

    @staticmethod
    def identity() -> 'Pose2d':
        return Pose2d(Translation2d(), Rotation2d())

    @staticmethod
    def from_xy(x: float, y: float, rotation: Rotation2d = None) -> 'Pose2d':
        return Pose2d(Translation2d(x, y), rotation)

    @staticmethod
    def from_degrees(x: float, y: float, heading_degrees: float) -> 'Pose2d':
        return Pose2d(Translation2d(x, y), Rotation2d.from_degrees(heading_degrees))

    @staticmethod
    def from_translation(translation: Translation2d) -> 'Pose2d':
        return Pose2d(translation, Rotation2d())

    @staticmethod
    def from_rotation(rotation: Rotation2d) -> 'Pose2d':
        return Pose2d(Translation2d(), rotation)

    @property
    def translation(self) -> Translation2d:
        return self._translation

    @property
    def rotation(self) -> Rotation2d:
        return self._rotation

    @property
    def pose(self) -> 'Pose2d':
        return self

    @property
    def x(self) -> float:
        return self._translation.x

    @property
    def y(self) -> float:
        return self._translation.y

    def transform_by(self, other: 'Pose2d') -> 'Pose2d':
        """
        Compose this pose with another one: translate by other.translation
        expressed in this frame, then rotate by other.rotation.

        Not commutative.
        """
        return Pose2d(
            self._translation.translate_by(other._translation.rotate_by(self._rotation)),
            self._rotation.rotate_by(other._rotation))

    def __mul__(self, other: 'Pose2d') -> 'Pose2d':
        if not isinstance(other, Pose2d):
            raise TypeError("Can only multiply Pose2d with Pose2d")
        return self.transform_by(other)

    def __matmul__(self, other: 'Pose2d') -> 'Pose2d':
        """Compose this pose with another pose using @ operator."""
        return self * other

    def inverse(self) -> 'Pose2d':
        """The transform that undoes this one."""
        rotation_inverted = self._rotation.inverse()
        return Pose2d(self._translation.inverse().rotate_by(rotation_inverted), rotation_inverted)

    def normal(self) -> 'Pose2d':
        return Pose2d(self._translation, self._rotation.normal())

    def mirror(self) -> 'Pose2d':
        """Reflection across the x axis."""
        return Pose2d(Translation2d(self._translation.x, -self._translation.y), self._rotation.inverse())

    @staticmethod
    def exp(delta: Twist2d) -> 'Pose2d':
        """Pose reached by following a constant-curvature twist for unit time."""
        sin_theta = math.sin(delta.dtheta)
        cos_theta = math.cos(delta.dtheta)
        if abs(delta.dtheta) < SMALL_ANGLE_EPS:
            s = 1.0 - 1.0 / 6.0 * delta.dtheta * delta.dtheta
            c = 0.5 * delta.dtheta
        else:
            s = sin_theta / delta.dtheta
            c = (1.0 - cos_theta) / delta.dtheta
        return Pose2d(
            Translation2d(delta.dx * s - delta.dy * c, delta.dx * c + delta.dy * s),
            Rotation2d(cos_theta, sin_theta))

    @staticmethod
    def log(transform: 'Pose2d') -> Twist2d:
        """Inverse of exp: the constant-curvature twist that produces transform."""
        dtheta = transform.rotation.radians
        half_dtheta = 0.5 * dtheta
        cos_minus_one = transform.rotation.cos - 1.0
        if abs(cos_minus_one) < SMALL_ANGLE_EPS:
            halftheta_by_tan_of_halfdtheta = 1.0 - 1.0 / 12.0 * dtheta * dtheta
        else:
            halftheta_by_tan_of_halfdtheta = -(half_dtheta * transform.rotation.sin) / cos_minus_one
        translation_part = transform.translation.rotate_by(
            Rotation2d(halftheta_by_tan_of_halfdtheta, -half_dtheta))
        return Twist2d(translation_part.x, translation_part.y, dtheta)

    def relative_to(self, other: 'Pose2d') -> 'Pose2d':
        """This pose expressed in the frame of other."""
        return other.inverse().transform_by(self)

    def twist_to(self, other: 'Pose2d') -> Twist2d:
        """Twist leading from this pose to other, in this pose's frame."""
        return Pose2d.log(self.inverse().transform_by(other))

    def interpolate(self, other: 'Pose2d', x: float) -> 'Pose2d':
        """Interpolation along the constant-curvature arc between two poses."""
        if x <= 0:
            return self
        elif x >= 1:
            return other
        twist = self.twist_to(other)
        return self.transform_by(Pose2d.exp(twist.scaled(x)))

    def distance(self, other: 'Pose2d') -> float:
        return self.twist_to(other).norm()

    def is_colinear(self, other: 'Pose2d') -> bool:
        """True if other lies straight ahead (or behind) with the same heading."""
        if not self._rotation.is_parallel(other._rotation):
            return False
        twist = self.twist_to(other)
        return epsilon_equals(twist.dy, 0.0) and epsilon_equals(twist.dtheta, 0.0)

    def intersection(self, other: 'Pose2d') -> Translation2d:
        """
        Point where the heading lines of the two poses cross.

        Returns Translation2d.infinity() if the lines are parallel.
        """
        if self._rotation.is_parallel(other._rotation):
            return Translation2d.infinity()
        # Solve against the line with the larger |cos| so its tangent stays finite.
        if abs(self._rotation.cos) < abs(other._rotation.cos):
            return Pose2d._intersection(self, other)
        return Pose2d._intersection(other, self)

    @staticmethod
    def _intersection(a: 'Pose2d', b: 'Pose2d') -> Translation2d:
        a_r = a.rotation
        a_t = a.translation
        b_t = b.translation
        tan_b = b.rotation.tan()
        with numpy.errstate(divide='ignore', invalid='ignore'):
            t = numpy.float64((a_t.x - b_t.x) * tan_b + b_t.y - a_t.y) / numpy.float64(a_r.sin - a_r.cos * tan_b)
        if not math.isfinite(t):
            return Translation2d.infinity()
        return a_t.translate_by(a_r.to_translation().scale(float(t)))

    def epsilon_equals(self, other: 'Pose2d', epsilon: float = EPSILON) -> bool:
        return (self._translation.epsilon_equals(other._translation, epsilon)
                and self._rotation.is_parallel(other._rotation, epsilon))

    def as_matrix(self) -> numpy.ndarray:
        """Get the 3x3 homogeneous transformation matrix of the pose."""
        c = self._rotation.cos
        s = self._rotation.sin
        return numpy.array([
            [c, -s, self._translation.x],
            [s,  c, self._translation.y],
            [0.0, 0.0, 1.0],
        ])

    def __eq__(self, other):
        if not isinstance(other, Pose2d):
            return NotImplemented
        return self.epsilon_equals(other)

    def __repr__(self):
        return f"Pose2d(translation={self._translation!r}, rotation={self._rotation!r})"

    def __str__(self):
        return f"T:{self._translation}, R:{self._rotation}"

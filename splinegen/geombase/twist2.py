from __future__ import annotations

import math

from splinegen.util import EPSILON, rad2deg


class Twist2d:
    """
    An element of the se(2) Lie algebra: a movement along an arc of constant
    curvature, (dx, dy, dtheta).

    A twist can describe a difference between two poses, a velocity, an
    acceleration. It is scaled and added, but never composed like a pose.
    """

    __slots__ = ('_dx', '_dy', '_dtheta')

    def __init__(self, dx: float = 0.0, dy: float = 0.0, dtheta: float = 0.0):
        self._dx = float(dx)
        self._dy = float(dy)
        self._dtheta = float(dtheta)  # radians

    @staticmethod
    def identity() -> 'Twist2d':
        return Twist2d(0.0, 0.0, 0.0)

    @property
    def dx(self) -> float:
        return self._dx

    @property
    def dy(self) -> float:
        return self._dy

    @property
    def dtheta(self) -> float:
        return self._dtheta

    def scaled(self, scale: float) -> 'Twist2d':
        return Twist2d(self._dx * scale, self._dy * scale, self._dtheta * scale)

    def norm(self) -> float:
        if self._dy == 0.0:
            return abs(self._dx)
        return math.hypot(self._dx, self._dy)

    def curvature(self) -> float:
        """
        dtheta per unit of travelled distance.

        Zero for a zero twist, signed infinity for a turn in place.
        """
        norm = self.norm()
        if abs(self._dtheta) < EPSILON and norm < EPSILON:
            return 0.0
        if norm == 0.0:
            return math.copysign(math.inf, self._dtheta)
        return self._dtheta / norm

    def __add__(self, other: 'Twist2d') -> 'Twist2d':
        return Twist2d(self._dx + other._dx, self._dy + other._dy, self._dtheta + other._dtheta)

    def __mul__(self, scale: float) -> 'Twist2d':
        return self.scaled(scale)

    __rmul__ = __mul__

    def __repr__(self):
        return f"Twist2d(dx={self._dx}, dy={self._dy}, dtheta={self._dtheta})"

    def __str__(self):
        return f"({self._dx:.3f},{self._dy:.3f},{rad2deg(self._dtheta):.3f} deg)"

"""
Quintic Hermite spline between two poses.

Each axis is a polynomial a*t^5 + b*t^4 + c*t^3 + d*t^2 + e*t + f that
matches position, tangent and second derivative at both ends. Tangents are
fixed by the end poses, second derivatives are the free shape parameters
tuned by the curvature optimizer.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy

from splinegen.geombase import Pose2d, Rotation2d, Translation2d
from splinegen.spline.base import Spline

# Tangent length relative to the distance between the end points.
TANGENT_SCALE = 1.2


class HermiteBoundary(NamedTuple):
    """Boundary conditions of one axis: positions, tangents, second derivatives."""

    p0: float
    p1: float
    d0: float
    d1: float
    dd0: float = 0.0
    dd1: float = 0.0

    def coefficients(self) -> numpy.ndarray:
        """Polynomial coefficients [a, b, c, d, e, f], highest power first."""
        p0, p1, d0, d1, dd0, dd1 = self
        return numpy.array([
            -6 * p0 - 3 * d0 - 0.5 * dd0 + 0.5 * dd1 - 3 * d1 + 6 * p1,
            15 * p0 + 8 * d0 + 1.5 * dd0 - dd1 + 7 * d1 - 15 * p1,
            -10 * p0 - 6 * d0 - 1.5 * dd0 + 0.5 * dd1 - 4 * d1 + 10 * p1,
            0.5 * dd0,
            d0,
            p0,
        ])


class QuinticHermiteSpline(Spline):
    """
    Quintic Hermite segment. Immutable: changing the second derivatives
    produces a new spline, the position and tangent conditions never change.
    """

    __slots__ = ('_bx', '_by', '_cx', '_cy', '_dcx', '_dcy', '_ddcx', '_ddcy', '_dddcx', '_dddcy')

    def __init__(self, p0: Pose2d, p1: Pose2d):
        """
        Args:
            p0: The starting pose of the spline
            p1: The ending pose of the spline
        """
        scale = TANGENT_SCALE * p0.translation.distance(p1.translation)
        self._set_boundaries(
            HermiteBoundary(
                p0.translation.x, p1.translation.x,
                p0.rotation.cos * scale, p1.rotation.cos * scale),
            HermiteBoundary(
                p0.translation.y, p1.translation.y,
                p0.rotation.sin * scale, p1.rotation.sin * scale))

    @classmethod
    def from_boundaries(cls, bx: HermiteBoundary, by: HermiteBoundary) -> 'QuinticHermiteSpline':
        spline = cls.__new__(cls)
        spline._set_boundaries(HermiteBoundary(*bx), HermiteBoundary(*by))
        return spline

    @classmethod
    def from_parameters(cls,
                        x0: float, x1: float, dx0: float, dx1: float, ddx0: float, ddx1: float,
                        y0: float, y1: float, dy0: float, dy1: float, ddy0: float, ddy1: float,
                        ) -> 'QuinticHermiteSpline':
        return cls.from_boundaries(
            HermiteBoundary(x0, x1, dx0, dx1, ddx0, ddx1),
            HermiteBoundary(y0, y1, dy0, dy1, ddy0, ddy1))

    def _set_boundaries(self, bx: HermiteBoundary, by: HermiteBoundary):
        self._bx = bx
        self._by = by
        self._cx = bx.coefficients()
        self._cy = by.coefficients()
        self._dcx = numpy.polyder(self._cx)
        self._dcy = numpy.polyder(self._cy)
        self._ddcx = numpy.polyder(self._dcx)
        self._ddcy = numpy.polyder(self._dcy)
        self._dddcx = numpy.polyder(self._ddcx)
        self._dddcy = numpy.polyder(self._ddcy)

    @property
    def boundary_x(self) -> HermiteBoundary:
        return self._bx

    @property
    def boundary_y(self) -> HermiteBoundary:
        return self._by

    @property
    def ddx0(self) -> float:
        return self._bx.dd0

    @property
    def ddx1(self) -> float:
        return self._bx.dd1

    @property
    def ddy0(self) -> float:
        return self._by.dd0

    @property
    def ddy1(self) -> float:
        return self._by.dd1

    def coefficients(self) -> tuple[numpy.ndarray, numpy.ndarray]:
        """Copies of the x and y coefficient arrays, highest power first."""
        return self._cx.copy(), self._cy.copy()

    def with_second_derivatives(self, ddx0: float = None, ddy0: float = None,
                                ddx1: float = None, ddy1: float = None) -> 'QuinticHermiteSpline':
        """New spline with the given end second derivatives, others kept."""
        bx = self._bx._replace(
            dd0=self._bx.dd0 if ddx0 is None else ddx0,
            dd1=self._bx.dd1 if ddx1 is None else ddx1)
        by = self._by._replace(
            dd0=self._by.dd0 if ddy0 is None else ddy0,
            dd1=self._by.dd1 if ddy1 is None else ddy1)
        return QuinticHermiteSpline.from_boundaries(bx, by)

    def offset_second_derivatives(self, start=(0.0, 0.0), end=(0.0, 0.0)) -> 'QuinticHermiteSpline':
        """New spline with (ddx, ddy) offsets added at the start and at the end."""
        return self.with_second_derivatives(
            ddx0=self._bx.dd0 + start[0], ddy0=self._by.dd0 + start[1],
            ddx1=self._bx.dd1 + end[0], ddy1=self._by.dd1 + end[1])

    @property
    def start_pose(self) -> Pose2d:
        return Pose2d(
            Translation2d(self._bx.p0, self._by.p0),
            Rotation2d(self._bx.d0, self._by.d0, normalize=True))

    @property
    def end_pose(self) -> Pose2d:
        return Pose2d(
            Translation2d(self._bx.p1, self._by.p1),
            Rotation2d(self._bx.d1, self._by.d1, normalize=True))

    def get_point(self, t: float) -> Translation2d:
        return Translation2d(numpy.polyval(self._cx, t), numpy.polyval(self._cy, t))

    def _derivatives(self, t: float):
        return (float(numpy.polyval(self._dcx, t)), float(numpy.polyval(self._dcy, t)),
                float(numpy.polyval(self._ddcx, t)), float(numpy.polyval(self._ddcy, t)))

    def get_velocity(self, t: float) -> float:
        return math.hypot(numpy.polyval(self._dcx, t), numpy.polyval(self._dcy, t))

    def get_heading(self, t: float) -> Rotation2d:
        return Rotation2d(float(numpy.polyval(self._dcx, t)), float(numpy.polyval(self._dcy, t)), normalize=True)

    def get_curvature(self, t: float) -> float:
        dx, dy, ddx, ddy = self._derivatives(t)
        dx2dy2 = dx * dx + dy * dy
        return (dx * ddy - ddx * dy) / (dx2dy2 * math.sqrt(dx2dy2))

    def get_dcurvature(self, t: float) -> float:
        dx, dy, ddx, ddy = self._derivatives(t)
        dddx = float(numpy.polyval(self._dddcx, t))
        dddy = float(numpy.polyval(self._dddcy, t))
        dx2dy2 = dx * dx + dy * dy
        num = (dx * dddy - dddx * dy) * dx2dy2 - 3 * (dx * ddy - ddx * dy) * (dx * ddx + dy * ddy)
        return num / (dx2dy2 * dx2dy2 * math.sqrt(dx2dy2))

    def dcurvature2(self, t) -> numpy.ndarray:
        """Squared curvature derivative, vectorized over t. Non-finite where the velocity vanishes."""
        t = numpy.asarray(t, dtype=float)
        dx = numpy.polyval(self._dcx, t)
        dy = numpy.polyval(self._dcy, t)
        ddx = numpy.polyval(self._ddcx, t)
        ddy = numpy.polyval(self._ddcy, t)
        dddx = numpy.polyval(self._dddcx, t)
        dddy = numpy.polyval(self._dddcy, t)
        dx2dy2 = dx * dx + dy * dy
        num = (dx * dddy - dddx * dy) * dx2dy2 - 3 * (dx * ddy - ddx * dy) * (dx * ddx + dy * ddy)
        with numpy.errstate(divide='ignore', invalid='ignore'):
            return num * num / dx2dy2 ** 5

    def sum_dcurvature2(self, samples: int = 100) -> float:
        """Riemann sum of dcurvature^2 over t in [0, 1)."""
        dt = 1.0 / samples
        t = numpy.arange(samples) * dt
        return float(numpy.sum(self.dcurvature2(t)) * dt)

    def __repr__(self):
        return f"QuinticHermiteSpline(start={self.start_pose}, end={self.end_pose})"

"""Base interface of parametric planar splines, t in [0, 1]."""

from __future__ import annotations

from abc import ABC, abstractmethod

from splinegen.geombase import Pose2d, Pose2dWithCurvature, Rotation2d, Translation2d


class Spline(ABC):
    """
    Base class for all splines.

    Subclasses must implement the point/heading/curvature evaluators,
    poses are assembled here.
    """

    @abstractmethod
    def get_point(self, t: float) -> Translation2d:
        ...

    @abstractmethod
    def get_heading(self, t: float) -> Rotation2d:
        ...

    @abstractmethod
    def get_curvature(self, t: float) -> float:
        ...

    @abstractmethod
    def get_dcurvature(self, t: float) -> float:
        """Derivative of curvature with respect to t."""
        ...

    @abstractmethod
    def get_velocity(self, t: float) -> float:
        """ds/dt"""
        ...

    def get_pose2d(self, t: float) -> Pose2d:
        return Pose2d(self.get_point(t), self.get_heading(t))

    def get_pose2d_with_curvature(self, t: float) -> Pose2dWithCurvature:
        return Pose2dWithCurvature(
            self.get_pose2d(t),
            self.get_curvature(t),
            self.get_dcurvature(t) / self.get_velocity(t))

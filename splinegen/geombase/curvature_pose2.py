from __future__ import annotations

from splinegen.geombase.pose2 import Pose2d
from splinegen.geombase.rotation2 import Rotation2d
from splinegen.geombase.translation2 import Translation2d
from splinegen.util import EPSILON, epsilon_equals, interpolate


class Pose2dWithCurvature:
    """A pose on a path together with the path curvature and its derivative by arc length."""

    __slots__ = ('_pose', '_curvature', '_dcurvature_ds')

    def __init__(self, pose: Pose2d = None, curvature: float = 0.0, dcurvature_ds: float = 0.0):
        self._pose = pose if pose is not None else Pose2d()
        self._curvature = float(curvature)
        self._dcurvature_ds = float(dcurvature_ds)

    @staticmethod
    def identity() -> 'Pose2dWithCurvature':
        return Pose2dWithCurvature(Pose2d.identity(), 0.0, 0.0)

    @staticmethod
    def from_parts(translation: Translation2d, rotation: Rotation2d,
                   curvature: float = 0.0, dcurvature_ds: float = 0.0) -> 'Pose2dWithCurvature':
        return Pose2dWithCurvature(Pose2d(translation, rotation), curvature, dcurvature_ds)

    @property
    def pose(self) -> Pose2d:
        return self._pose

    @property
    def translation(self) -> Translation2d:
        return self._pose.translation

    @property
    def rotation(self) -> Rotation2d:
        return self._pose.rotation

    @property
    def curvature(self) -> float:
        return self._curvature

    @property
    def dcurvature_ds(self) -> float:
        return self._dcurvature_ds

    def transform_by(self, transform: Pose2d) -> 'Pose2dWithCurvature':
        return Pose2dWithCurvature(self._pose.transform_by(transform), self._curvature, self._dcurvature_ds)

    def mirror(self) -> 'Pose2dWithCurvature':
        return Pose2dWithCurvature(self._pose.mirror(), -self._curvature, -self._dcurvature_ds)

    def interpolate(self, other: 'Pose2dWithCurvature', x: float) -> 'Pose2dWithCurvature':
        return Pose2dWithCurvature(
            self._pose.interpolate(other._pose, x),
            interpolate(self._curvature, other._curvature, x),
            interpolate(self._dcurvature_ds, other._dcurvature_ds, x))

    def distance(self, other: 'Pose2dWithCurvature') -> float:
        return self._pose.distance(other._pose)

    def epsilon_equals(self, other: 'Pose2dWithCurvature', epsilon: float = EPSILON) -> bool:
        return (self._pose.epsilon_equals(other._pose, epsilon)
                and epsilon_equals(self._curvature, other._curvature, epsilon)
                and epsilon_equals(self._dcurvature_ds, other._dcurvature_ds, epsilon))

    def to_dict(self) -> dict:
        """Serialize to the {"x", "y", "rotation", "curvature"} point record."""
        return {
            "x": self.translation.x,
            "y": self.translation.y,
            "rotation": self.rotation.radians,
            "curvature": self._curvature,
        }

    def __eq__(self, other):
        if not isinstance(other, Pose2dWithCurvature):
            return NotImplemented
        return self.epsilon_equals(other)

    def __repr__(self):
        return (f"Pose2dWithCurvature(pose={self._pose!r}, curvature={self._curvature}, "
                f"dcurvature_ds={self._dcurvature_ds})")

    def __str__(self):
        return f"{self._pose}, curvature: {self._curvature:.3f}, dcurvature_ds: {self._dcurvature_ds:.3f}"

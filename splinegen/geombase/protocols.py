"""
Capability protocols for planar geometry values.

Each concrete value type (Translation2d, Rotation2d, Pose2d,
Pose2dWithCurvature) implements the capabilities it has directly,
there is no common base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from splinegen.geombase.pose2 import Pose2d
    from splinegen.geombase.rotation2 import Rotation2d
    from splinegen.geombase.translation2 import Translation2d

T = TypeVar("T")


@runtime_checkable
class HasTranslation(Protocol):
    """Anything with a position in the plane."""

    @property
    def translation(self) -> "Translation2d":
        ...


@runtime_checkable
class HasRotation(Protocol):
    """Anything with a heading."""

    @property
    def rotation(self) -> "Rotation2d":
        ...


@runtime_checkable
class HasPose(HasTranslation, HasRotation, Protocol):
    """Position and heading together, transformable as a rigid body."""

    @property
    def pose(self) -> "Pose2d":
        ...

    def transform_by(self, other: "Pose2d"):
        ...

    def mirror(self):
        ...


@runtime_checkable
class HasCurvature(Protocol):
    """Curvature and its derivative with respect to arc length."""

    @property
    def curvature(self) -> float:
        ...

    @property
    def dcurvature_ds(self) -> float:
        ...


@runtime_checkable
class Interpolable(Protocol[T]):
    """
    Values that can be blended.

    interpolate(other, x) returns self for x <= 0 and other for x >= 1.
    """

    def interpolate(self, other: T, x: float) -> T:
        ...

    def distance(self, other: T) -> float:
        ...

"""
Базовые геометрические классы (Geometric Base).

Planar rigid-body geometry:
- Translation2d - vector in the plane
- Rotation2d - heading as a point on the unit circle
- Twist2d - element of the se(2) algebra
- Pose2d - rigid transform (SE(2)) with exp/log maps
- Pose2dWithCurvature - pose on a path with curvature annotation
"""

from .translation2 import Translation2d
from .rotation2 import Rotation2d
from .twist2 import Twist2d
from .pose2 import Pose2d
from .curvature_pose2 import Pose2dWithCurvature
from .protocols import HasTranslation, HasRotation, HasPose, HasCurvature, Interpolable

__all__ = [
    'Translation2d',
    'Rotation2d',
    'Twist2d',
    'Pose2d',
    'Pose2dWithCurvature',
    'HasTranslation',
    'HasRotation',
    'HasPose',
    'HasCurvature',
    'Interpolable',
]

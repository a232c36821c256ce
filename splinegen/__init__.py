"""
splinegen - smooth curvature-bounded paths through planar waypoints.

Основные модули:
- geombase - SE(2) geometry (Translation2d, Rotation2d, Twist2d, Pose2d)
- spline - quintic Hermite splines, curvature optimizer, adaptive sampler
- trajectory - waypoints to sampled trajectory
"""

from .geombase import Pose2d, Pose2dWithCurvature, Rotation2d, Translation2d, Twist2d
from .settings import OptimizerSettings, SamplingSettings, TrajectorySettings
from .trajectory import (
    TrajectoryResult,
    TrajectoryStatus,
    calc_splines,
    compute_trajectory,
    compute_trajectory_from_poses,
    compute_trajectory_from_string,
)
from .waypoints import Waypoint, WaypointParseError, parse_waypoints

__version__ = '0.1.0'

__all__ = [
    # Geombase
    'Translation2d',
    'Rotation2d',
    'Twist2d',
    'Pose2d',
    'Pose2dWithCurvature',
    # Settings
    'SamplingSettings',
    'OptimizerSettings',
    'TrajectorySettings',
    # Waypoints
    'Waypoint',
    'WaypointParseError',
    'parse_waypoints',
    # Trajectory
    'TrajectoryResult',
    'TrajectoryStatus',
    'calc_splines',
    'compute_trajectory',
    'compute_trajectory_from_poses',
    'compute_trajectory_from_string',
]

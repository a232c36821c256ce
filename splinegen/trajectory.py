"""
Trajectory computation: waypoints -> splines -> optimized chain -> samples.

All entry points funnel into compute_trajectory_from_poses and return a
TrajectoryResult that tells a successful run apart from too few waypoints,
a malformed waypoint string and a numerical failure.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from splinegen import log
from splinegen.geombase import Pose2d, Pose2dWithCurvature
from splinegen.settings import TrajectorySettings
from splinegen.spline.generator import parameterize_with_settings
from splinegen.spline.optimizer import OptimizationError, OptimizationResult, optimize_splines
from splinegen.spline.quintic import QuinticHermiteSpline
from splinegen.util import EPSILON
from splinegen.waypoints import Waypoint, WaypointParseError, parse_waypoints

# Response of the string entry point when fewer than two waypoints are given.
INSUFFICIENT_INPUT_RESPONSE = "no"
MIN_WAYPOINTS = 2


class TrajectoryStatus(Enum):
    OK = "ok"
    INSUFFICIENT_INPUT = "insufficient_input"
    PARSE_ERROR = "parse_error"
    COMPUTATION_ERROR = "computation_error"


class DegenerateSegmentError(ArithmeticError):
    """Two consecutive waypoints coincide, the segment between them has no direction."""


@dataclass
class TrajectoryResult:
    """Tagged outcome of a trajectory computation."""

    status: TrajectoryStatus
    points: List[Pose2dWithCurvature] = field(default_factory=list)
    message: str = ""
    error: Optional[BaseException] = None
    optimization: Optional[OptimizationResult] = None

    @property
    def ok(self) -> bool:
        return self.status == TrajectoryStatus.OK

    def to_dict(self) -> dict:
        """{"points": [{"x", "y", "rotation", "curvature"}, ...]}"""
        return {"points": [p.to_dict() for p in self.points]}

    def to_json(self, indent: int = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def legacy_response(self, indent: int = None) -> str:
        """
        Response of the string entry point: the JSON document on success,
        "no" for too few waypoints. Other failures raise their error.
        """
        if self.status == TrajectoryStatus.OK:
            return self.to_json(indent)
        if self.status == TrajectoryStatus.INSUFFICIENT_INPUT:
            return INSUFFICIENT_INPUT_RESPONSE
        if self.error is not None:
            raise self.error
        raise RuntimeError(self.message)


def build_splines(poses: Sequence[Pose2d]) -> List[QuinticHermiteSpline]:
    """One quintic spline per pair of adjacent poses."""
    splines = []
    for i in range(len(poses) - 1):
        if poses[i].translation.distance(poses[i + 1].translation) < EPSILON:
            raise DegenerateSegmentError(
                f"waypoints {i} and {i + 1} coincide at {poses[i].translation}")
        splines.append(QuinticHermiteSpline(poses[i], poses[i + 1]))
    return splines


def compute_trajectory_from_poses(poses: Sequence[Pose2d],
                                  settings: TrajectorySettings = None) -> TrajectoryResult:
    """Smooth, sampled path through the given poses."""
    if settings is None:
        settings = TrajectorySettings()
    poses = list(poses)
    if len(poses) < MIN_WAYPOINTS:
        return TrajectoryResult(
            status=TrajectoryStatus.INSUFFICIENT_INPUT,
            message=f"at least {MIN_WAYPOINTS} waypoints are required, got {len(poses)}")

    try:
        splines = build_splines(poses)
        optimization = None
        if settings.optimize:
            optimization = optimize_splines(splines, settings.optimizer)
            splines = optimization.splines
        points = parameterize_with_settings(splines, settings.sampling)
    except (DegenerateSegmentError, OptimizationError, ZeroDivisionError) as e:
        log.error(e, "[Trajectory] computation failed")
        return TrajectoryResult(status=TrajectoryStatus.COMPUTATION_ERROR, message=str(e), error=e)

    log.debug(f"[Trajectory] {len(poses)} waypoints -> {len(points)} samples")
    return TrajectoryResult(status=TrajectoryStatus.OK, points=points, optimization=optimization)


WaypointLike = Union[Waypoint, Tuple[float, float, float]]


def compute_trajectory(waypoints: Sequence[WaypointLike],
                       settings: TrajectorySettings = None) -> TrajectoryResult:
    """Smooth, sampled path through (x, y, heading_degrees) waypoints."""
    poses = []
    for w in waypoints:
        if not isinstance(w, Waypoint):
            w = Waypoint(*w)
        poses.append(w.to_pose())
    return compute_trajectory_from_poses(poses, settings)


def compute_trajectory_from_string(message: str,
                                   settings: TrajectorySettings = None,
                                   url_decode: bool = True) -> TrajectoryResult:
    """Same as compute_trajectory for a "x,y,heading;..." message."""
    try:
        waypoints = parse_waypoints(message, url_decode=url_decode)
    except WaypointParseError as e:
        log.warn(f"[Trajectory] {e}")
        return TrajectoryResult(status=TrajectoryStatus.PARSE_ERROR, message=str(e), error=e)
    return compute_trajectory(waypoints, settings)


def calc_splines(message: str, settings: TrajectorySettings = None) -> str:
    """
    String in, string out: JSON points document, or "no" for fewer than two
    waypoints. Raises WaypointParseError on a malformed message.
    """
    return compute_trajectory_from_string(message, settings).legacy_response()

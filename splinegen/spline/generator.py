"""
Adaptive sampling of splines into curvature-annotated poses.

An interval [t0, t1] is bisected until the twist between its end poses,
measured in the frame of the t0 pose, fits the (dx, dy, dtheta) bounds.
"""

from __future__ import annotations

from typing import List, Sequence

from splinegen import log
from splinegen.geombase import Pose2d, Pose2dWithCurvature, Translation2d
from splinegen.settings import SamplingSettings
from splinegen.spline.base import Spline

MAX_DX = 2.0
MAX_DY = 0.05
MAX_DTHETA = 0.1  # radians
MAX_DEPTH = 20


def segment_twist(spline: Spline, t0: float, t1: float):
    """Twist from the pose at t0 to the pose at t1, in the t0 frame."""
    p0 = spline.get_point(t0)
    p1 = spline.get_point(t1)
    r0 = spline.get_heading(t0)
    r1 = spline.get_heading(t1)
    r0_inv = r0.inverse()
    transformation = Pose2d(Translation2d.delta(p0, p1).rotate_by(r0_inv), r1.rotate_by(r0_inv))
    return Pose2d.log(transformation)


def _segment_arc(spline: Spline, rv: List[Pose2dWithCurvature], t0: float, t1: float,
                 max_dx: float, max_dy: float, max_dtheta: float, depth: int, max_depth: int):
    twist = segment_twist(spline, t0, t1)
    if abs(twist.dy) > max_dy or abs(twist.dx) > max_dx or abs(twist.dtheta) > max_dtheta:
        if depth < max_depth:
            mid = (t0 + t1) / 2
            _segment_arc(spline, rv, t0, mid, max_dx, max_dy, max_dtheta, depth + 1, max_depth)
            _segment_arc(spline, rv, mid, t1, max_dx, max_dy, max_dtheta, depth + 1, max_depth)
            return
        log.warn(f"[SplineGenerator] depth limit {max_depth} reached on t=[{t0:.9f}, {t1:.9f}], "
                 f"accepting twist {twist}")
    rv.append(spline.get_pose2d_with_curvature(t1))


def parameterize_spline(spline: Spline,
                        max_dx: float = MAX_DX,
                        max_dy: float = MAX_DY,
                        max_dtheta: float = MAX_DTHETA,
                        t0: float = 0.0,
                        t1: float = 1.0,
                        max_depth: int = MAX_DEPTH) -> List[Pose2dWithCurvature]:
    """
    Convert a spline into a list of poses whose consecutive twists
    stay within (max_dx, max_dy, max_dtheta).

    Args:
        spline: The spline to parameterize
        t0: Starting parameter of the sampled part
        t1: Ending parameter of the sampled part
        max_depth: Bisection depth limit; at the limit a sample is accepted
            even if it violates the bounds

    Returns:
        Poses at t0, ..., t1 approximating the spline
    """
    rv = [spline.get_pose2d_with_curvature(t0)]
    if t1 > t0:
        _segment_arc(spline, rv, t0, t1, max_dx, max_dy, max_dtheta, 0, max_depth)
    return rv


def parameterize_splines(splines: Sequence[Spline],
                         max_dx: float = MAX_DX,
                         max_dy: float = MAX_DY,
                         max_dtheta: float = MAX_DTHETA,
                         max_depth: int = MAX_DEPTH) -> List[Pose2dWithCurvature]:
    """
    Parameterize a chain of splines.

    The first sample of every spline after the first one duplicates the last
    sample of its predecessor and is dropped.
    """
    rv: List[Pose2dWithCurvature] = []
    for i, spline in enumerate(splines):
        samples = parameterize_spline(spline, max_dx, max_dy, max_dtheta, max_depth=max_depth)
        rv.extend(samples if i == 0 else samples[1:])
    return rv


def parameterize_with_settings(splines: Sequence[Spline],
                               settings: SamplingSettings = None) -> List[Pose2dWithCurvature]:
    if settings is None:
        settings = SamplingSettings()
    return parameterize_splines(splines, settings.max_dx, settings.max_dy,
                                settings.max_dtheta, settings.max_depth)

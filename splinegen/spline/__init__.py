"""
Splines through planar poses.

- QuinticHermiteSpline - segment between two poses
- optimize_splines - curvature smoothing of a spline chain
- parameterize_spline(s) - adaptive sampling into curvature-annotated poses
"""

from splinegen.spline.base import Spline
from splinegen.spline.quintic import QuinticHermiteSpline, HermiteBoundary
from splinegen.spline.optimizer import (
    ControlPoint,
    OptimizationError,
    OptimizationResult,
    optimize_splines,
    run_optimization_iteration,
    sum_dcurvature2,
)
from splinegen.spline.generator import (
    parameterize_spline,
    parameterize_splines,
    parameterize_with_settings,
)

__all__ = [
    "Spline",
    "QuinticHermiteSpline",
    "HermiteBoundary",
    "ControlPoint",
    "OptimizationError",
    "OptimizationResult",
    "optimize_splines",
    "run_optimization_iteration",
    "sum_dcurvature2",
    "parameterize_spline",
    "parameterize_splines",
    "parameterize_with_settings",
]

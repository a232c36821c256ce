"""
Curvature smoothing of a chain of quintic splines.

The free parameters are the second derivatives (ddx, ddy) at every interior
junction. Each junction value is shared by the end of the left spline and
the start of the right spline. The objective is the sum over all splines of
the integral of dcurvature^2, minimized by gradient descent with
finite-difference gradients and a parabolic line search.

Everything here works on values: the input splines are never modified,
each iteration builds a new chain from the base chain and an array of
junction offsets.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from splinegen import log
from splinegen.settings import OptimizerSettings
from splinegen.spline.quintic import QuinticHermiteSpline


class OptimizationError(ArithmeticError):
    """The objective or its gradient became non-finite."""


@dataclass(frozen=True)
class ControlPoint:
    """Second derivative pair at a junction (or a gradient/step in that space)."""

    ddx: float = 0.0
    ddy: float = 0.0

    def __add__(self, other: "ControlPoint") -> "ControlPoint":
        return ControlPoint(self.ddx + other.ddx, self.ddy + other.ddy)

    def __mul__(self, scale: float) -> "ControlPoint":
        return ControlPoint(self.ddx * scale, self.ddy * scale)

    __rmul__ = __mul__

    def norm2(self) -> float:
        return self.ddx * self.ddx + self.ddy * self.ddy

    def as_tuple(self) -> Tuple[float, float]:
        return (self.ddx, self.ddy)


@dataclass
class OptimizationResult:
    """Outcome of optimize_splines."""

    splines: List[QuinticHermiteSpline]
    initial_cost: float
    cost: float
    iterations: int = 0
    converged: bool = False
    history: List[float] = field(default_factory=list)
    """Objective value before the first iteration and after each one."""


def sum_dcurvature2(splines: Sequence[QuinticHermiteSpline], samples: int = 100) -> float:
    """Integral of dcurvature^2 over a chain of splines."""
    return sum(s.sum_dcurvature2(samples) for s in splines)


def junction_control_points(splines: Sequence[QuinticHermiteSpline]) -> List[ControlPoint]:
    """Current (ddx, ddy) at every interior junction, read from the left spline end."""
    return [ControlPoint(splines[i].ddx1, splines[i].ddy1) for i in range(len(splines) - 1)]


def active_junctions(splines: Sequence[QuinticHermiteSpline]) -> List[bool]:
    """
    Junctions worth optimizing.

    A junction between colinear neighbours is skipped: a straight run is
    already curvature optimal.
    """
    mask = []
    for i in range(len(splines) - 1):
        colinear = (splines[i].start_pose.is_colinear(splines[i + 1].start_pose)
                    or splines[i].end_pose.is_colinear(splines[i + 1].end_pose))
        mask.append(not colinear)
    return mask


def apply_offsets(splines: Sequence[QuinticHermiteSpline],
                  offsets: Sequence[ControlPoint]) -> List[QuinticHermiteSpline]:
    """
    New chain with offsets[i] added to the second derivatives at junction i.

    The offset moves the end of splines[i] and the start of splines[i + 1] together.
    """
    result = []
    last = len(splines) - 1
    for i, spline in enumerate(splines):
        start = offsets[i - 1] if i > 0 else None
        end = offsets[i] if i < last else None
        if (start is None or start.norm2() == 0.0) and (end is None or end.norm2() == 0.0):
            result.append(spline)
            continue
        result.append(spline.offset_second_derivatives(
            start=start.as_tuple() if start is not None else (0.0, 0.0),
            end=end.as_tuple() if end is not None else (0.0, 0.0)))
    return result


def fit_parabola(p1: Tuple[float, float], p2: Tuple[float, float], p3: Tuple[float, float]) -> float:
    """
    Fit a parabola through three (x, y) points.

    Returns:
        x coordinate of the vertex, nan for collinear points.
    """
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    a = x3 * (y2 - y1) + x2 * (y1 - y3) + x1 * (y3 - y2)
    b = x3 * x3 * (y1 - y2) + x2 * x2 * (y3 - y1) + x1 * x1 * (y2 - y3)
    if a == 0.0:
        return math.nan
    return -b / (2 * a)


def _check_finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise OptimizationError(f"{what} is not finite ({value})")
    return value


def _gradient(splines: List[QuinticHermiteSpline],
              active: List[bool],
              settings: OptimizerSettings) -> List[ControlPoint]:
    """
    Forward-difference gradient of the objective at every active junction.

    Only the two splines adjoining a junction depend on it, so the probe
    compares their partial sum instead of the whole chain.
    """
    eps = settings.epsilon
    samples = settings.samples
    costs = [s.sum_dcurvature2(samples) for s in splines]
    gradient = []
    for i, is_active in enumerate(active):
        if not is_active:
            gradient.append(ControlPoint())
            continue
        left, right = splines[i], splines[i + 1]
        base = costs[i] + costs[i + 1]

        probe_x = (left.offset_second_derivatives(end=(eps, 0.0)).sum_dcurvature2(samples)
                   + right.offset_second_derivatives(start=(eps, 0.0)).sum_dcurvature2(samples))
        probe_y = (left.offset_second_derivatives(end=(0.0, eps)).sum_dcurvature2(samples)
                   + right.offset_second_derivatives(start=(0.0, eps)).sum_dcurvature2(samples))

        point = ControlPoint(
            _check_finite((probe_x - base) / eps, f"gradient ddx at junction {i}"),
            _check_finite((probe_y - base) / eps, f"gradient ddy at junction {i}"))
        gradient.append(point)
    return gradient


def run_optimization_iteration(splines: Sequence[QuinticHermiteSpline],
                               settings: OptimizerSettings = None,
                               active: Sequence[bool] = None,
                               ) -> Tuple[List[QuinticHermiteSpline], float]:
    """
    One gradient step with a parabolic line search.

    Returns:
        (new chain, objective of the new chain). The chain is returned as is
        when there is nothing to optimize.
    """
    if settings is None:
        settings = OptimizerSettings()
    splines = list(splines)
    samples = settings.samples
    current = _check_finite(sum_dcurvature2(splines, samples), "objective")

    # can't optimize anything with less than 2 splines
    if len(splines) <= 1:
        return splines, current
    if active is None:
        active = active_junctions(splines)
    active = list(active)
    if not any(active):
        return splines, current

    gradient = _gradient(splines, active, settings)
    magnitude = math.sqrt(sum(g.norm2() for g in gradient))
    if magnitude == 0.0:
        return splines, current

    # Unit step along the negative gradient, scaled to the step size.
    step = settings.step_size
    direction = [g * (-step / magnitude) for g in gradient]

    def chain_at(x: float) -> List[QuinticHermiteSpline]:
        return apply_offsets(splines, [d * (x / step) for d in direction])

    candidates = {0.0: (splines, current)}
    for x in (-step, step):
        chain = chain_at(x)
        candidates[x] = (chain, _check_finite(sum_dcurvature2(chain, samples), "objective"))

    vertex = fit_parabola(
        (-step, candidates[-step][1]),
        (0.0, current),
        (step, candidates[step][1]))
    if math.isfinite(vertex):
        chain = chain_at(vertex)
        cost = sum_dcurvature2(chain, samples)
        if math.isfinite(cost):
            candidates[vertex] = (chain, cost)

    best_x = min(candidates, key=lambda x: candidates[x][1])
    log.debug(f"[SplineOptimizer] step {best_x:+.4f} (vertex {vertex:+.4f}), "
              f"objective {current:.6g} -> {candidates[best_x][1]:.6g}")
    return candidates[best_x]


def optimize_splines(splines: Sequence[QuinticHermiteSpline],
                     settings: OptimizerSettings = None) -> OptimizationResult:
    """
    Find second derivatives at the junctions that minimize the sum of
    dcurvature^2 over the chain.

    Stops when one iteration improves the objective by less than
    settings.min_delta, or after settings.max_iterations iterations.
    The input chain is not modified.
    """
    if settings is None:
        settings = OptimizerSettings()
    chain = list(splines)
    prev = _check_finite(sum_dcurvature2(chain, settings.samples), "objective")
    result = OptimizationResult(splines=chain, initial_cost=prev, cost=prev, history=[prev])

    active = active_junctions(chain)
    if len(chain) <= 1 or not any(active):
        result.converged = True
        return result

    count = 0
    while count < settings.max_iterations:
        chain, current = run_optimization_iteration(chain, settings, active)
        count += 1
        result.splines = chain
        result.cost = current
        result.history.append(current)
        if prev - current < settings.min_delta:
            result.converged = True
            break
        prev = current

    result.iterations = count
    log.debug(f"[SplineOptimizer] {len(chain)} splines, {count} iterations, "
              f"objective {result.initial_cost:.6g} -> {result.cost:.6g}")
    return result


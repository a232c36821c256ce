import math

import numpy as np
import pytest

from splinegen.geombase import Pose2d, Rotation2d
from splinegen.spline import HermiteBoundary, QuinticHermiteSpline, Spline
from splinegen.spline.quintic import TANGENT_SCALE


def second_derivative(coeffs, t):
    return np.polyval(np.polyder(coeffs, 2), t)


@pytest.fixture
def curved():
    return QuinticHermiteSpline(Pose2d.from_degrees(0.0, 0.0, 0.0), Pose2d.from_degrees(10.0, 5.0, 45.0))


@pytest.fixture
def straight():
    return QuinticHermiteSpline(Pose2d.from_degrees(0.0, 0.0, 0.0), Pose2d.from_degrees(10.0, 0.0, 0.0))


def test_is_spline(curved):
    assert isinstance(curved, Spline)


def test_end_points(curved):
    start = curved.get_point(0.0)
    end = curved.get_point(1.0)
    assert start.x == pytest.approx(0.0, abs=1e-9)
    assert start.y == pytest.approx(0.0, abs=1e-9)
    assert end.x == pytest.approx(10.0, abs=1e-9)
    assert end.y == pytest.approx(5.0, abs=1e-9)


def test_end_headings(curved):
    assert curved.get_heading(0.0).is_parallel(Rotation2d.from_degrees(0.0), 1e-9)
    assert curved.get_heading(1.0).is_parallel(Rotation2d.from_degrees(45.0), 1e-9)
    assert curved.get_heading(1.0).degrees == pytest.approx(45.0)


def test_tangent_length(curved):
    distance = math.hypot(10.0, 5.0)
    assert curved.get_velocity(0.0) == pytest.approx(TANGENT_SCALE * distance)
    assert curved.get_velocity(1.0) == pytest.approx(TANGENT_SCALE * distance)


def test_start_end_pose(curved):
    assert curved.start_pose == Pose2d.from_degrees(0.0, 0.0, 0.0)
    assert curved.end_pose.translation.x == pytest.approx(10.0)
    assert curved.end_pose.rotation.degrees == pytest.approx(45.0)


def test_straight_spline_has_no_curvature(straight):
    for t in np.linspace(0.0, 1.0, 11):
        assert straight.get_point(t).y == 0.0
        assert straight.get_curvature(t) == 0.0
        assert straight.get_dcurvature(t) == 0.0
    assert straight.sum_dcurvature2() == 0.0


def test_left_turn_has_positive_curvature():
    spline = QuinticHermiteSpline(Pose2d.from_degrees(0.0, 0.0, 0.0), Pose2d.from_degrees(10.0, 10.0, 90.0))
    assert spline.get_curvature(0.5) > 0.0
    mirrored = QuinticHermiteSpline(Pose2d.from_degrees(0.0, 0.0, 0.0), Pose2d.from_degrees(10.0, -10.0, -90.0))
    assert mirrored.get_curvature(0.5) == pytest.approx(-spline.get_curvature(0.5))


def test_second_derivative_boundaries(curved):
    changed = curved.with_second_derivatives(ddx0=3.0, ddy1=-2.0)
    cx, cy = changed.coefficients()
    assert second_derivative(cx, 0.0) == pytest.approx(3.0)
    assert second_derivative(cx, 1.0) == pytest.approx(0.0, abs=1e-9)
    assert second_derivative(cy, 0.0) == pytest.approx(0.0, abs=1e-9)
    assert second_derivative(cy, 1.0) == pytest.approx(-2.0)
    assert changed.ddx0 == 3.0
    assert changed.ddy1 == -2.0


def test_with_second_derivatives_keeps_positions_and_tangents(curved):
    changed = curved.with_second_derivatives(ddx0=3.0, ddy0=1.0, ddx1=-4.0, ddy1=2.0)
    for name in ("p0", "p1", "d0", "d1"):
        assert getattr(changed.boundary_x, name) == getattr(curved.boundary_x, name)
        assert getattr(changed.boundary_y, name) == getattr(curved.boundary_y, name)
    assert changed.get_point(1.0).x == pytest.approx(10.0, abs=1e-9)
    assert changed.get_heading(1.0).degrees == pytest.approx(45.0)


def test_with_second_derivatives_does_not_mutate(curved):
    curved.with_second_derivatives(ddx0=3.0, ddy0=1.0)
    assert curved.ddx0 == 0.0
    assert curved.ddy0 == 0.0


def test_offset_second_derivatives(curved):
    base = curved.with_second_derivatives(ddx0=1.0, ddy0=1.0, ddx1=1.0, ddy1=1.0)
    moved = base.offset_second_derivatives(start=(0.5, -0.5), end=(2.0, 0.0))
    assert (moved.ddx0, moved.ddy0, moved.ddx1, moved.ddy1) == (1.5, 0.5, 3.0, 1.0)


def test_from_parameters_matches_constructor(curved):
    bx, by = curved.boundary_x, curved.boundary_y
    rebuilt = QuinticHermiteSpline.from_parameters(*bx, *by)
    cx, cy = rebuilt.coefficients()
    np.testing.assert_allclose(cx, curved.coefficients()[0])
    np.testing.assert_allclose(cy, curved.coefficients()[1])


def test_hermite_boundary_coefficients():
    coeffs = HermiteBoundary(1.0, 4.0, 2.0, -1.0, 0.5, 3.0).coefficients()
    assert np.polyval(coeffs, 0.0) == pytest.approx(1.0)
    assert np.polyval(coeffs, 1.0) == pytest.approx(4.0)
    assert np.polyval(np.polyder(coeffs), 0.0) == pytest.approx(2.0)
    assert np.polyval(np.polyder(coeffs), 1.0) == pytest.approx(-1.0)
    assert second_derivative(coeffs, 0.0) == pytest.approx(0.5)
    assert second_derivative(coeffs, 1.0) == pytest.approx(3.0)


def test_coefficients_are_copies(curved):
    cx, _ = curved.coefficients()
    cx[:] = 0.0
    assert curved.get_point(1.0).x == pytest.approx(10.0, abs=1e-9)


def test_dcurvature_matches_finite_difference(curved):
    h = 1e-6
    for t in (0.2, 0.5, 0.8):
        numeric = (curved.get_curvature(t + h) - curved.get_curvature(t - h)) / (2 * h)
        assert curved.get_dcurvature(t) == pytest.approx(numeric, rel=1e-4, abs=1e-9)


def test_dcurvature2_vectorized(curved):
    t = np.array([0.0, 0.25, 0.5, 0.75])
    expected = [curved.get_dcurvature(v) ** 2 for v in t]
    np.testing.assert_allclose(curved.dcurvature2(t), expected, rtol=1e-9, atol=1e-15)


def test_sum_dcurvature2(curved):
    expected = sum(curved.get_dcurvature(i / 100.0) ** 2 for i in range(100)) / 100.0
    assert curved.sum_dcurvature2() == pytest.approx(expected, rel=1e-9)
    assert curved.sum_dcurvature2(samples=10) == pytest.approx(
        sum(curved.get_dcurvature(i / 10.0) ** 2 for i in range(10)) / 10.0, rel=1e-9)


def test_pose_with_curvature(curved):
    p = curved.get_pose2d_with_curvature(0.3)
    assert p.translation == curved.get_point(0.3)
    assert p.curvature == pytest.approx(curved.get_curvature(0.3))
    assert p.dcurvature_ds == pytest.approx(curved.get_dcurvature(0.3) / curved.get_velocity(0.3))


def test_degenerate_spline_is_not_finite():
    spline = QuinticHermiteSpline(Pose2d.from_degrees(1.0, 1.0, 0.0), Pose2d.from_degrees(1.0, 1.0, 90.0))
    assert spline.get_velocity(0.5) == 0.0
    assert not math.isfinite(spline.sum_dcurvature2())
    with pytest.raises(ZeroDivisionError):
        spline.get_curvature(0.5)

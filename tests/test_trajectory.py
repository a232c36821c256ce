import json
import math

import pytest

from splinegen import (
    Pose2d,
    TrajectorySettings,
    TrajectoryStatus,
    Waypoint,
    WaypointParseError,
    calc_splines,
    compute_trajectory,
    compute_trajectory_from_poses,
    compute_trajectory_from_string,
)
from splinegen.settings import SamplingSettings
from splinegen.trajectory import DegenerateSegmentError, build_splines

TOLERANCE = 1e-9


def test_straight_line():
    result = compute_trajectory([(0, 0, 0), (120, 0, 0)])
    assert result.ok
    points = result.points
    assert points[0].translation.x == pytest.approx(0.0, abs=TOLERANCE)
    assert points[-1].translation.x == pytest.approx(120.0, abs=TOLERANCE)
    for p in points:
        assert abs(p.translation.y) < TOLERANCE
        assert abs(p.curvature) < TOLERANCE
    xs = [p.translation.x for p in points]
    for a, b in zip(xs[:-1], xs[1:]):
        assert b > a


def test_right_angle_turn():
    result = compute_trajectory([(0, 0, 0), (60, 0, 0), (60, 60, 90)])
    assert result.ok
    points = result.points
    assert points[0].rotation.radians == pytest.approx(0.0, abs=TOLERANCE)
    assert points[-1].rotation.radians == pytest.approx(math.pi / 2)
    assert points[-1].translation.x == pytest.approx(60.0, abs=TOLERANCE)
    assert points[-1].translation.y == pytest.approx(60.0, abs=TOLERANCE)
    assert max(abs(p.curvature) for p in points) > 1e-3
    assert result.optimization.cost <= result.optimization.initial_cost
    for a, b in zip(points[:-1], points[1:]):
        assert a.translation.distance(b.translation) > 0.0


def test_winding_path_is_optimized():
    result = compute_trajectory([(0, 0, 0), (60, 30, 45), (120, 0, -45), (150, 40, 90)])
    assert result.ok
    assert result.optimization.iterations >= 1
    assert result.optimization.cost <= result.optimization.initial_cost


def test_optimizer_can_be_disabled():
    settings = TrajectorySettings(optimize=False)
    result = compute_trajectory([(0, 0, 0), (60, 30, 45), (120, 0, -45)], settings)
    assert result.ok
    assert result.optimization is None


def test_sampling_settings_are_used():
    waypoints = [(0, 0, 0), (60, 60, 90)]
    coarse = compute_trajectory(waypoints, TrajectorySettings(sampling=SamplingSettings(max_dx=10.0, max_dy=1.0,
                                                                                       max_dtheta=0.5)))
    default = compute_trajectory(waypoints)
    assert len(coarse.points) < len(default.points)


@pytest.mark.parametrize("waypoints", [[], [(5, 5, 0)]])
def test_insufficient_input(waypoints):
    result = compute_trajectory(waypoints)
    assert result.status == TrajectoryStatus.INSUFFICIENT_INPUT
    assert not result.ok
    assert result.points == []
    assert result.legacy_response() == "no"


def test_calc_splines_insufficient_input():
    assert calc_splines("5,5,0") == "no"
    assert calc_splines("") == "no"
    assert calc_splines("5,5,0;") == "no"


def test_calc_splines_json():
    document = json.loads(calc_splines("0,0,0;120,0,0"))
    assert list(document) == ["points"]
    assert len(document["points"]) >= 61
    for point in document["points"]:
        assert set(point) == {"x", "y", "rotation", "curvature"}
    assert document["points"][0]["x"] == pytest.approx(0.0, abs=TOLERANCE)
    assert document["points"][-1]["x"] == pytest.approx(120.0, abs=TOLERANCE)


def test_calc_splines_nan_headings():
    document = json.loads(calc_splines("0,0,NaN;120,0,NaN"))
    for point in document["points"]:
        assert abs(point["y"]) < TOLERANCE
        assert abs(point["rotation"]) < TOLERANCE


def test_calc_splines_url_encoded():
    plain = calc_splines("0,0,0;60,0,0;60,60,90")
    encoded = calc_splines("0%2C0%2C0%3B60%2C0%2C0%3B60%2C60%2C90")
    assert plain == encoded


def test_parse_error():
    result = compute_trajectory_from_string("0,0,0;a,0,0")
    assert result.status == TrajectoryStatus.PARSE_ERROR
    assert isinstance(result.error, WaypointParseError)
    assert result.error.index == 1
    with pytest.raises(WaypointParseError):
        calc_splines("0,0,0;a,0,0")


def test_coincident_waypoints():
    result = compute_trajectory([(0, 0, 0), (0, 0, 90)])
    assert result.status == TrajectoryStatus.COMPUTATION_ERROR
    assert isinstance(result.error, DegenerateSegmentError)
    with pytest.raises(DegenerateSegmentError):
        result.legacy_response()
    with pytest.raises(DegenerateSegmentError):
        build_splines([Pose2d.identity(), Pose2d.identity()])


def test_entry_points_agree():
    waypoints = [Waypoint(0, 0, 0), Waypoint(60, 0, 0), Waypoint(60, 60, 90)]
    from_waypoints = compute_trajectory(waypoints)
    from_poses = compute_trajectory_from_poses([w.to_pose() for w in waypoints])
    from_string = compute_trajectory_from_string("0,0,0;60,0,0;60,60,90")
    assert len(from_waypoints.points) == len(from_poses.points) == len(from_string.points)
    assert from_waypoints.to_json() == from_poses.to_json() == from_string.to_json()


def test_to_json_indent():
    result = compute_trajectory([(0, 0, 0), (10, 0, 0)])
    assert "\n" in result.to_json(indent=2)
    assert json.loads(result.to_json()) == result.to_dict()

import json

import pytest

from splinegen.settings import OptimizerSettings, SamplingSettings, TrajectorySettings


def test_defaults():
    settings = TrajectorySettings()
    assert settings.sampling.max_dx == 2.0
    assert settings.sampling.max_dy == 0.05
    assert settings.sampling.max_dtheta == 0.1
    assert settings.sampling.max_depth == 20
    assert settings.optimizer.epsilon == 1e-5
    assert settings.optimizer.step_size == 1.0
    assert settings.optimizer.min_delta == 0.001
    assert settings.optimizer.samples == 100
    assert settings.optimizer.max_iterations == 100
    assert settings.optimize is True


def test_dict_round_trip():
    settings = TrajectorySettings(
        sampling=SamplingSettings(max_dx=1.0, max_dy=0.01, max_dtheta=0.05, max_depth=12),
        optimizer=OptimizerSettings(epsilon=1e-6, max_iterations=10),
        optimize=False,
    )
    assert TrajectorySettings.from_dict(settings.to_dict()) == settings


def test_partial_dict_uses_defaults():
    settings = TrajectorySettings.from_dict({"sampling": {"max_dx": 4.0}})
    assert settings.sampling.max_dx == 4.0
    assert settings.sampling.max_dy == 0.05
    assert settings.optimizer == OptimizerSettings()
    assert settings.optimize is True


def test_save_load(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings = TrajectorySettings(sampling=SamplingSettings(max_dx=3.0))
    settings.save(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["sampling"]["max_dx"] == 3.0
    assert TrajectorySettings.load(path) == settings
    assert TrajectorySettings.load(str(path)) == settings


@pytest.mark.parametrize("kwargs", [
    {"max_dx": 0.0},
    {"max_dy": -1.0},
    {"max_dtheta": 0.0},
    {"max_depth": 0},
])
def test_invalid_sampling_settings(kwargs):
    with pytest.raises(ValueError):
        SamplingSettings(**kwargs)


@pytest.mark.parametrize("kwargs", [
    {"epsilon": 0.0},
    {"step_size": -1.0},
    {"min_delta": 0.0},
    {"samples": 0},
    {"max_iterations": 0},
])
def test_invalid_optimizer_settings(kwargs):
    with pytest.raises(ValueError):
        OptimizerSettings(**kwargs)


def test_invalid_values_in_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"sampling": {"max_dx": -2.0}}), encoding="utf-8")
    with pytest.raises(ValueError):
        TrajectorySettings.load(path)

"""
Trajectory generation settings.

Sampling bounds of the adaptive parameterizer and parameters of the
curvature optimizer. Settings can be stored as JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Union

from splinegen import log


def _require_positive(owner: str, **values):
    for name, value in values.items():
        if not value > 0:
            raise ValueError(f"{owner}.{name} must be positive, got {value!r}")


@dataclass
class SamplingSettings:
    """
    Error bounds for the adaptive parameterizer.

    A pair of consecutive samples is accepted when the twist between them
    stays within all three bounds.
    """

    max_dx: float = 2.0
    """Maximal advance along the heading between samples (length units)."""

    max_dy: float = 0.05
    """Maximal lateral deviation between samples (length units)."""

    max_dtheta: float = 0.1
    """Maximal heading change between samples (radians)."""

    max_depth: int = 20
    """Bisection depth after which a sample is accepted regardless of the bounds."""

    def __post_init__(self):
        _require_positive("SamplingSettings", max_dx=self.max_dx, max_dy=self.max_dy,
                          max_dtheta=self.max_dtheta, max_depth=self.max_depth)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "SamplingSettings":
        """Deserialize from dictionary."""
        return SamplingSettings(
            max_dx=data.get("max_dx", 2.0),
            max_dy=data.get("max_dy", 0.05),
            max_dtheta=data.get("max_dtheta", 0.1),
            max_depth=data.get("max_depth", 20),
        )


@dataclass
class OptimizerSettings:
    """Parameters of the junction second-derivative optimizer."""

    epsilon: float = 1e-5
    """Finite-difference perturbation."""

    step_size: float = 1.0
    """Length the gradient is normalized to before the line search."""

    min_delta: float = 0.001
    """Stop when an iteration improves the objective by less than this."""

    samples: int = 100
    """Riemann sum samples per spline."""

    max_iterations: int = 100

    def __post_init__(self):
        _require_positive("OptimizerSettings", epsilon=self.epsilon, step_size=self.step_size,
                          min_delta=self.min_delta, samples=self.samples,
                          max_iterations=self.max_iterations)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "OptimizerSettings":
        """Deserialize from dictionary."""
        return OptimizerSettings(
            epsilon=data.get("epsilon", 1e-5),
            step_size=data.get("step_size", 1.0),
            min_delta=data.get("min_delta", 0.001),
            samples=data.get("samples", 100),
            max_iterations=data.get("max_iterations", 100),
        )


@dataclass
class TrajectorySettings:
    """All settings of a trajectory computation."""

    sampling: SamplingSettings = field(default_factory=SamplingSettings)
    optimizer: OptimizerSettings = field(default_factory=OptimizerSettings)
    optimize: bool = True
    """Run the curvature optimizer before sampling."""

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "sampling": self.sampling.to_dict(),
            "optimizer": self.optimizer.to_dict(),
            "optimize": self.optimize,
        }

    @staticmethod
    def from_dict(data: dict) -> "TrajectorySettings":
        """Deserialize from dictionary."""
        return TrajectorySettings(
            sampling=SamplingSettings.from_dict(data.get("sampling", {})),
            optimizer=OptimizerSettings.from_dict(data.get("optimizer", {})),
            optimize=bool(data.get("optimize", True)),
        )

    @staticmethod
    def load(path: Union[str, Path]) -> "TrajectorySettings":
        """Load settings from a JSON file."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        log.debug(f"[TrajectorySettings] Loaded settings from {path}")
        return TrajectorySettings.from_dict(data)

    def save(self, path: Union[str, Path]) -> None:
        """Save settings to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        log.debug(f"[TrajectorySettings] Saved settings to {path}")

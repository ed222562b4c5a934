"""Preset velocities and event scenarios for the spacetime diagram."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class VelocityPreset:
    key: str
    name: str
    velocity: float


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    velocity: float
    events: tuple[tuple[float, float], ...]
    description: str

    def events_array(self) -> np.ndarray:
        """Scenario events as ``(x, ct)`` rows in stationary-frame units."""

        return np.array(self.events, dtype=float).reshape(-1, 2)


VELOCITY_PRESETS: tuple[VelocityPreset, ...] = (
    VelocityPreset(key="rest", name="0", velocity=0.0),
    VelocityPreset(key="half", name="0.5c", velocity=0.5),
    VelocityPreset(key="fast", name="0.8c", velocity=0.8),
    VelocityPreset(key="faster", name="0.9c", velocity=0.9),
    VelocityPreset(key="ultra", name="0.99c", velocity=0.99),
)

SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="simultaneity",
        name="Relativity of simultaneity",
        velocity=0.5,
        events=((2.0, 1.0), (-2.0, 1.0), (0.0, 0.0)),
        description="A and B share ct = 1 in the stationary frame but not in the moving one.",
    ),
    Scenario(
        key="causality",
        name="Light cone and causality",
        velocity=0.6,
        events=((0.0, 0.0), (0.5, 1.5), (1.8, 0.6)),
        description="A lies inside the light cone (timelike), B outside (spacelike).",
    ),
    Scenario(
        key="order_reversal",
        name="Time-order reversal",
        velocity=0.8,
        events=((1.5, 0.3), (-1.5, -0.3), (0.0, 0.0)),
        description="Spacelike separated events swap their time order in the moving frame.",
    ),
)

VELOCITY_PRESETS_BY_KEY: dict[str, VelocityPreset] = {preset.key: preset for preset in VELOCITY_PRESETS}
SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
SCENARIO_DISPLAY_ORDER: list[str] = [scenario.key for scenario in SCENARIO_DEFINITIONS]


__all__ = [
    "SCENARIO_DEFINITIONS",
    "SCENARIO_DISPLAY_ORDER",
    "SCENARIOS",
    "VELOCITY_PRESETS",
    "VELOCITY_PRESETS_BY_KEY",
    "Scenario",
    "VelocityPreset",
]

"""The time-dilation clock pair."""
from __future__ import annotations

from dataclasses import dataclass

from .config import PHYSICS_CFG
from .kinematics import lorentz_factor


@dataclass
class DilationClocks:
    """A stationary clock and a clock moving at ``velocity``.

    Each tick advances the stationary clock by ``step`` and the moving clock
    by ``step / gamma``.
    """

    step: float = PHYSICS_CFG.clock_step
    velocity: float = 0.0
    stationary_time: float = 0.0
    moving_time: float = 0.0
    playing: bool = True

    def tick(self) -> None:
        if not self.playing:
            return
        self.stationary_time += self.step
        self.moving_time += self.step / lorentz_factor(self.velocity)

    def set_velocity(self, v: float) -> None:
        """Restart both clocks so the new rate is visible from zero."""

        self.velocity = v
        self.stationary_time = 0.0
        self.moving_time = 0.0
        self.playing = True

    def toggle(self) -> bool:
        self.playing = not self.playing
        return self.playing

    def reset(self) -> None:
        self.stationary_time = 0.0
        self.moving_time = 0.0
        self.playing = False


__all__ = ["DilationClocks"]

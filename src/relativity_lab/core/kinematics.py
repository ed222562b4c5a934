"""Special relativity helpers used by every demonstration.

All velocities are fractions of the speed of light (natural units, c = 1).
None of these functions raise on out-of-range input: light speed and beyond
map to saturated values so that the display never shows ``nan``.
"""
from __future__ import annotations

import colorsys
import logging
import math

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def safe_parse_float(value: object, default: float = 0.0) -> float:
    """Parse *value* as a float, returning *default* for anything unusable."""

    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(parsed):
        return default
    return parsed


def parse_velocity(value: object, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Parse slider text into a velocity inside ``[-max_velocity, max_velocity]``."""

    parsed = safe_parse_float(value, cfg.default_velocity)
    return clamp(parsed, -cfg.max_velocity, cfg.max_velocity)


def lorentz_factor(v: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Return ``1/sqrt(1 - v**2)``, or ``inf`` at and beyond light speed."""

    if math.isnan(v):
        return 1.0
    if abs(v) >= 1.0:
        logger.debug("Velocity %.6g reaches light speed, gamma saturated", v)
        return math.inf
    denominator = math.sqrt(1.0 - v * v)
    if denominator < cfg.gamma_denominator_floor:
        logger.debug("Velocity %.12g hits the precision limit, gamma saturated", v)
        return math.inf
    return 1.0 / denominator


def saturate_velocity(v: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Largest usable velocity for ``v``: NaN maps to rest, light speed to ``±max_velocity``."""

    if math.isnan(v):
        return 0.0
    if math.isinf(lorentz_factor(v, cfg)):
        return math.copysign(cfg.max_velocity, v)
    return v


def lorentz_transform(t, x, v: float, cfg: PhysicsCfg = PHYSICS_CFG):
    """Boost the event ``(t, x)`` into a frame moving at ``v``.

    Works for scalars and numpy arrays alike. The inverse transform is the
    same call with ``-v``. Velocities at or beyond light speed boost with
    ``max_velocity`` instead.
    """

    v = saturate_velocity(v, cfg)
    gamma = lorentz_factor(v, cfg)
    t_prime = gamma * (t - v * x)
    x_prime = gamma * (x - v * t)
    return t_prime, x_prime


def transform_events(coords: np.ndarray, v: float, cfg: PhysicsCfg = PHYSICS_CFG) -> np.ndarray:
    """Boost an ``(n, 2)`` array of ``(x, ct)`` rows, returning ``(x', ct')`` rows."""

    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    ct_prime, x_prime = lorentz_transform(coords[:, 1], coords[:, 0], v, cfg)
    return np.column_stack((x_prime, ct_prime))


def relativistic_velocity_addition(v1: float, v2: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Compose two collinear velocities, saturating at ``±1``."""

    total = v1 + v2
    denominator = 1.0 + v1 * v2
    if abs(denominator) < cfg.addition_epsilon:
        return float(np.sign(total))
    return clamp(total / denominator, -1.0, 1.0)


def doppler_factor(v: float) -> float:
    """Observed over emitted frequency for a source approaching at ``v``."""

    if v >= 1.0:
        return math.inf
    if v <= -1.0:
        return 0.0
    return math.sqrt((1.0 + v) / (1.0 - v))


def proper_time(coordinate_time: float, v: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Time elapsed on a clock moving at ``v`` while *coordinate_time* passes."""

    return coordinate_time / lorentz_factor(v, cfg)


def contracted_length(proper_length: float, v: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    return proper_length / lorentz_factor(v, cfg)


def doppler_tint(v: float) -> tuple[int, int, int]:
    """Approximate colour of a white source seen at velocity ``v``.

    Approaching sources shift to blue, receding ones to red.
    """

    if v == 0.0 or math.isnan(v):
        return (255, 255, 255)
    speed = min(abs(v), 1.0)
    hue = 0.6 if v > 0.0 else 0.0
    lightness = 0.8 - 0.3 * speed
    r, g, b = colorsys.hls_to_rgb(hue, lightness, 1.0)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def format_velocity(v: float, si_units: bool = False, cfg: PhysicsCfg = PHYSICS_CFG) -> str:
    if si_units:
        return f"{v * cfg.speed_of_light_si:.2e} m/s"
    return f"{v:.3f}c"


def format_gamma(gamma: float) -> str:
    if math.isinf(gamma):
        return "∞"
    return f"{gamma:.2f}"


__all__ = [
    "clamp",
    "contracted_length",
    "doppler_factor",
    "doppler_tint",
    "format_gamma",
    "format_velocity",
    "lorentz_factor",
    "lorentz_transform",
    "parse_velocity",
    "proper_time",
    "relativistic_velocity_addition",
    "safe_parse_float",
    "saturate_velocity",
    "transform_events",
]

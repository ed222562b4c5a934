from __future__ import annotations

import math

import numpy as np
import pytest

from relativity_lab.core.kinematics import (
    contracted_length,
    doppler_factor,
    doppler_tint,
    format_gamma,
    format_velocity,
    lorentz_factor,
    lorentz_transform,
    parse_velocity,
    proper_time,
    relativistic_velocity_addition,
    safe_parse_float,
    saturate_velocity,
    transform_events,
)


def test_lorentz_factor_known_values() -> None:
    assert lorentz_factor(0.0) == 1.0
    assert lorentz_factor(0.6) == pytest.approx(1.25)
    assert lorentz_factor(0.8) == pytest.approx(5.0 / 3.0)


@pytest.mark.parametrize("v", [0.1, 0.5, 0.9, 0.999])
def test_lorentz_factor_is_symmetric_and_at_least_one(v: float) -> None:
    assert lorentz_factor(v) >= 1.0
    assert lorentz_factor(-v) == lorentz_factor(v)


def test_lorentz_factor_saturates_at_light_speed() -> None:
    assert math.isinf(lorentz_factor(1.0))
    assert math.isinf(lorentz_factor(-1.0))
    assert math.isinf(lorentz_factor(1.5))
    assert math.isinf(lorentz_factor(1.0 - 1e-20))


def test_lorentz_factor_treats_nan_as_rest() -> None:
    assert lorentz_factor(float("nan")) == 1.0


def test_transform_there_and_back_recovers_event() -> None:
    t = np.array([0.0, 1.0, -2.5, 3.0])
    x = np.array([0.0, 2.0, 1.5, -4.0])
    t_prime, x_prime = lorentz_transform(t, x, 0.7)
    t_back, x_back = lorentz_transform(t_prime, x_prime, -0.7)
    np.testing.assert_allclose(t_back, t, atol=1e-9)
    np.testing.assert_allclose(x_back, x, atol=1e-9)


def test_transform_preserves_interval() -> None:
    t_prime, x_prime = lorentz_transform(2.0, 1.0, 0.5)
    assert t_prime**2 - x_prime**2 == pytest.approx(2.0**2 - 1.0**2)


def test_transform_events_returns_space_then_time_columns() -> None:
    boosted = transform_events(np.array([[1.0, 0.0]]), 0.6)
    assert boosted.shape == (1, 2)
    assert boosted[0, 0] == pytest.approx(1.25)
    assert boosted[0, 1] == pytest.approx(-0.75)


def test_velocity_addition() -> None:
    assert relativistic_velocity_addition(0.5, 0.5) == pytest.approx(0.8)
    assert relativistic_velocity_addition(0.3, 0.0) == 0.3
    assert relativistic_velocity_addition(0.0, -0.4) == -0.4
    assert relativistic_velocity_addition(0.999, 0.999) <= 1.0
    assert relativistic_velocity_addition(1.0, 0.5) == pytest.approx(1.0)


def test_velocity_addition_opposite_light_speeds_does_not_divide_by_zero() -> None:
    assert relativistic_velocity_addition(1.0, -1.0) == 0.0


def test_parse_velocity_clamps_and_defaults() -> None:
    assert parse_velocity("0.25") == 0.25
    assert parse_velocity("2") == 0.999
    assert parse_velocity(-7) == -0.999
    assert parse_velocity("not a number") == 0.0
    assert parse_velocity("nan") == 0.0
    assert safe_parse_float(None, 3.0) == 3.0


def test_demonstration_helpers() -> None:
    assert contracted_length(100.0, 0.6) == pytest.approx(80.0)
    assert proper_time(10.0, 0.6) == pytest.approx(8.0)
    assert proper_time(10.0, 1.0) == 0.0
    assert doppler_factor(0.0) == 1.0
    assert doppler_factor(0.6) == pytest.approx(2.0)
    assert doppler_factor(-0.6) == pytest.approx(0.5)
    assert math.isinf(doppler_factor(1.0))
    assert doppler_factor(-1.0) == 0.0


def test_doppler_tint_shifts_blue_when_approaching_and_red_when_receding() -> None:
    assert doppler_tint(0.0) == (255, 255, 255)
    r, _, b = doppler_tint(0.8)
    assert b > r
    r, _, b = doppler_tint(-0.8)
    assert r > b


def test_formatting() -> None:
    assert format_velocity(0.5) == "0.500c"
    assert format_velocity(0.5, si_units=True) == "1.50e+08 m/s"
    assert format_gamma(1.25) == "1.25"
    assert format_gamma(math.inf) == "∞"


def test_saturate_velocity() -> None:
    assert saturate_velocity(0.4) == 0.4
    assert saturate_velocity(1.0) == 0.999
    assert saturate_velocity(-3.0) == -0.999
    assert saturate_velocity(float("nan")) == 0.0


@pytest.mark.parametrize("v", [1.0, -1.0, 2.5, float("nan")])
def test_transform_never_returns_nan(v: float) -> None:
    t_prime, x_prime = lorentz_transform(0.0, 0.0, v)
    assert (t_prime, x_prime) == (0.0, 0.0)
    boosted = transform_events(np.array([[1.0, 2.0], [-0.5, 0.0]]), v)
    assert np.isfinite(boosted).all()


def test_light_speed_transform_matches_saturated_velocity() -> None:
    assert lorentz_transform(1.0, 0.5, 1.0) == lorentz_transform(1.0, 0.5, 0.999)

"""Configuration dataclasses for the relativity visualizer."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhysicsCfg:
    speed_of_light_si: float = 299_792_458.0
    max_velocity: float = 0.999
    gamma_denominator_floor: float = 1e-9
    addition_epsilon: float = 1e-9
    vertical_slope_epsilon: float = 1e-12
    default_velocity: float = 0.0
    velocity_nudge: float = 0.01
    clock_step: float = 0.05
    proper_length: float = 100.0
    twin_earth_years: float = 10.0


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1280
    height: int = 800
    panel_width: int = 380
    min_canvas_size: tuple[int, int] = (200, 200)
    fps: int = 60
    scale_divisor: float = 5.0
    grid_half_count: int = 4
    extend_line_factor: float = 2.0
    label_offset_units: float = 3.5
    label_fit_fraction: float = 0.85
    primary_label_margin: int = 20
    label_font_size: int = 16
    event_marker_radius: float = 5.0
    rest_marker_radius: float = 5.0
    rest_object_position: float = 1.0
    background_color: tuple[int, int, int] = (40, 40, 60)
    light_cone_color: tuple[int, int, int, int] = (255, 255, 0, 150)
    light_cone_fill_color: tuple[int, int, int, int] = (255, 255, 0, 50)
    light_cone_width: float = 2.0
    axis_width: float = 1.5
    grid_width: float = 0.5
    sheared_grid_width: float = 0.7
    stationary_axis_color: tuple[int, int, int, int] = (200, 200, 200, 255)
    stationary_grid_color: tuple[int, int, int, int] = (100, 100, 100, 255)
    stationary_simultaneity_color: tuple[int, int, int, int] = (100, 100, 100, 100)
    stationary_position_color: tuple[int, int, int, int] = (150, 100, 50, 100)
    moving_axis_color: tuple[int, int, int, int] = (100, 150, 255, 255)
    moving_grid_color: tuple[int, int, int, int] = (50, 150, 200, 100)
    moving_simultaneity_color: tuple[int, int, int, int] = (50, 180, 50, 100)
    moving_position_color: tuple[int, int, int, int] = (255, 165, 0, 100)
    observer_worldline_color: tuple[int, int, int, int] = (70, 180, 255, 255)
    observer_worldline_width: float = 3.0
    rest_worldline_color: tuple[int, int, int, int] = (0, 200, 0, 200)
    rest_worldline_width: float = 2.0
    event_marker_color: tuple[int, int, int, int] = (255, 0, 255, 255)
    event_line_color: tuple[int, int, int, int] = (192, 132, 252, 150)
    event_line_width: float = 1.5
    label_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    panel_color: tuple[int, int, int] = (34, 37, 46)
    panel_border_color: tuple[int, int, int] = (55, 58, 68)
    text_color: tuple[int, int, int] = (220, 225, 235)
    muted_text_color: tuple[int, int, int] = (100, 105, 115)
    value_color: tuple[int, int, int] = (241, 196, 15)
    slider_track_color: tuple[int, int, int] = (50, 54, 66)
    slider_fill_color: tuple[int, int, int] = (74, 144, 217)
    slider_knob_color: tuple[int, int, int] = (200, 210, 225)
    button_color: tuple[int, int, int, int] = (55, 58, 68, 255)
    button_hover_color: tuple[int, int, int, int] = (50, 54, 66, 255)
    button_border_color: tuple[int, int, int, int] = (100, 105, 115, 255)
    button_radius: int = 6
    ruler_proper_color: tuple[int, int, int] = (200, 200, 200)
    ruler_contracted_color: tuple[int, int, int] = (139, 92, 246)
    font_names: tuple[str, ...] = ("DejaVu Sans", "consolas", "arial")


PHYSICS_CFG = PhysicsCfg()
RENDER_CFG = RenderCfg()


__all__ = ["PHYSICS_CFG", "RENDER_CFG", "PhysicsCfg", "RenderCfg"]

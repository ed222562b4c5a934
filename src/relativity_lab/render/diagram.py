"""Minkowski diagram construction.

The renderer turns a :class:`FrameModel` into an ordered list of draw
commands expressed in diagram pixels: the origin sits at the canvas centre
and ``ct`` points up. Backends only translate and flip.

Sheared lines are built without dividing by the velocity. Lines of constant
time are written ``ct = s*x + K`` and sampled along ``x``; lines of constant
position are written ``x = s*ct + K`` and sampled along ``ct``. ``s`` is the
shear velocity (``v`` when the stationary frame is drawn orthogonal, ``-v``
otherwise), so ``v == 0`` gives exactly axis aligned lines.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from relativity_lab.core.config import PHYSICS_CFG, RENDER_CFG, PhysicsCfg, RenderCfg
from relativity_lab.core.kinematics import lorentz_factor, saturate_velocity, transform_events
from relativity_lab.core.model import Frame, FrameModel

from .geometry import CanvasGeometry

Point = tuple[float, float]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class LineCommand:
    start: Point
    end: Point
    color: RGBA
    width: float
    role: str


@dataclass(frozen=True)
class PolygonCommand:
    points: tuple[Point, ...]
    color: RGBA
    role: str


@dataclass(frozen=True)
class CircleCommand:
    center: Point
    radius: float
    color: RGBA
    role: str


@dataclass(frozen=True)
class LabelCommand:
    text: str
    position: Point
    angle: float
    color: RGBA
    size: int
    role: str


DrawCommand = Union[LineCommand, PolygonCommand, CircleCommand, LabelCommand]


@dataclass(frozen=True)
class AxisSlopes:
    """Slopes of the sheared axis pair in the canvas ``(x, ct)`` plane.

    ``time_slope`` is ``None`` when the sheared time axis is vertical.
    """

    shear_velocity: float
    space_slope: float
    time_slope: float | None


@dataclass(frozen=True)
class DiagramScene:
    velocity: float
    draw_velocity: float
    gamma: float
    frame: Frame
    slopes: AxisSlopes
    size: tuple[int, int]
    commands: tuple[DrawCommand, ...]

    def by_role(self, role: str) -> list[DrawCommand]:
        return [command for command in self.commands if command.role == role]


@dataclass(frozen=True)
class _FramePalette:
    primary_axis: RGBA
    primary_grid: RGBA
    primary_labels: tuple[str, str]
    primary_label_color: RGBA
    secondary_axis: RGBA
    simultaneity: RGBA
    constant_position: RGBA
    secondary_labels: tuple[str, str]
    secondary_label_color: RGBA


def drawing_velocity(v: float, cfg: PhysicsCfg = PHYSICS_CFG) -> float:
    """Velocity actually used for geometry; saturated values draw as maximal shear."""

    return saturate_velocity(v, cfg)


def axis_slopes(v: float, frame: Frame, cfg: PhysicsCfg = PHYSICS_CFG) -> AxisSlopes:
    shear = (v if frame is Frame.STATIONARY else -v) + 0.0
    if abs(shear) < cfg.vertical_slope_epsilon:
        return AxisSlopes(shear_velocity=0.0, space_slope=0.0, time_slope=None)
    return AxisSlopes(shear_velocity=shear, space_slope=shear, time_slope=1.0 / shear)


def _space_like(s: float, intercept: float, extent: float) -> tuple[Point, Point]:
    """Endpoints of ``y = s*x + intercept`` for ``x`` in ``[-extent, extent]``."""

    return (-extent, -s * extent + intercept), (extent, s * extent + intercept)


def _time_like(s: float, intercept: float, extent: float) -> tuple[Point, Point]:
    """Endpoints of ``x = s*y + intercept`` for ``y`` in ``[-extent, extent]``."""

    return (-s * extent + intercept, -extent), (s * extent + intercept, extent)


def _label_angle(slope: float | None) -> float:
    if slope is None:
        return 90.0
    return math.degrees(math.atan(slope))


class SpacetimeDiagramRenderer:
    """Pure projection from frame state to draw commands."""

    def __init__(
        self,
        *,
        physics_cfg: PhysicsCfg = PHYSICS_CFG,
        render_cfg: RenderCfg = RENDER_CFG,
    ) -> None:
        self._physics = physics_cfg
        self._cfg = render_cfg

    def _palette(self, frame: Frame, si_units: bool) -> _FramePalette:
        cfg = self._cfg
        suffix = " (m)" if si_units else ""
        stationary = (f"ct{suffix}", f"x{suffix}")
        moving = (f"ct'{suffix}", f"x'{suffix}")
        if frame is Frame.STATIONARY:
            return _FramePalette(
                primary_axis=cfg.stationary_axis_color,
                primary_grid=cfg.stationary_grid_color,
                primary_labels=stationary,
                primary_label_color=cfg.label_color,
                secondary_axis=cfg.moving_axis_color,
                simultaneity=cfg.moving_simultaneity_color,
                constant_position=cfg.moving_position_color,
                secondary_labels=moving,
                secondary_label_color=cfg.moving_axis_color,
            )
        return _FramePalette(
            primary_axis=cfg.moving_axis_color,
            primary_grid=cfg.moving_grid_color,
            primary_labels=moving,
            primary_label_color=cfg.moving_axis_color,
            secondary_axis=cfg.stationary_axis_color,
            simultaneity=cfg.stationary_simultaneity_color,
            constant_position=cfg.stationary_position_color,
            secondary_labels=stationary,
            secondary_label_color=cfg.label_color,
        )

    def render(
        self,
        model: FrameModel,
        geometry: CanvasGeometry,
        *,
        si_units: bool = False,
    ) -> DiagramScene:
        cfg = self._cfg
        frame = model.active_frame
        gamma = lorentz_factor(model.velocity, self._physics)
        v = drawing_velocity(model.velocity, self._physics)
        draw_gamma = lorentz_factor(v, self._physics)
        slopes = axis_slopes(v, frame, self._physics)
        shear = slopes.shear_velocity
        palette = self._palette(frame, si_units)

        scale = geometry.scale_factor
        hw = geometry.half_width
        hh = geometry.half_height
        extent = max(hw, hh) * cfg.extend_line_factor
        grid_range = range(-cfg.grid_half_count, cfg.grid_half_count + 1)
        commands: list[DrawCommand] = []

        def line(points: tuple[Point, Point], color: RGBA, width: float, role: str) -> None:
            commands.append(LineCommand(points[0], points[1], color, width, role))

        # Light cone, identical in every frame.
        line(((-extent, -extent), (extent, extent)), cfg.light_cone_color, cfg.light_cone_width, "light_cone")
        line(((-extent, extent), (extent, -extent)), cfg.light_cone_color, cfg.light_cone_width, "light_cone")
        commands.append(
            PolygonCommand(((0.0, 0.0), (-extent, extent), (extent, extent)), cfg.light_cone_fill_color, "light_cone")
        )
        commands.append(
            PolygonCommand(((0.0, 0.0), (-extent, -extent), (extent, -extent)), cfg.light_cone_fill_color, "light_cone")
        )

        line(((-hw, 0.0), (hw, 0.0)), palette.primary_axis, cfg.axis_width, "primary_axis")
        line(((0.0, -hh), (0.0, hh)), palette.primary_axis, cfg.axis_width, "primary_axis")

        for n in grid_range:
            offset = n * scale
            line(((offset, -hh), (offset, hh)), palette.primary_grid, cfg.grid_width, "primary_grid")
            line(((-hw, offset), (hw, offset)), palette.primary_grid, cfg.grid_width, "primary_grid")

        line(_space_like(shear, 0.0, extent), palette.secondary_axis, cfg.axis_width, "secondary_axis")
        line(_time_like(shear, 0.0, extent), palette.secondary_axis, cfg.axis_width, "secondary_axis")

        # The moving observer sits at x' = 0: sheared when the stationary frame is orthogonal.
        observer_shear = v + 0.0 if frame is Frame.STATIONARY else 0.0
        line(
            _time_like(observer_shear, 0.0, extent),
            cfg.observer_worldline_color,
            cfg.observer_worldline_width,
            "observer_worldline",
        )

        # Object at rest at x = rest_object_position in the stationary frame.
        # Seen from the moving frame it crosses ct' = 0 at x' = x/gamma.
        rest_x = cfg.rest_object_position * scale
        if frame is Frame.STATIONARY:
            rest_shear, rest_intercept = 0.0, rest_x
        else:
            rest_shear, rest_intercept = shear, rest_x / draw_gamma
        line(
            _time_like(rest_shear, rest_intercept, extent),
            cfg.rest_worldline_color,
            cfg.rest_worldline_width,
            "rest_worldline",
        )
        commands.append(
            CircleCommand((rest_intercept, 0.0), cfg.rest_marker_radius, cfg.rest_worldline_color, "rest_worldline")
        )

        # Constant time in the sheared frame; the intercept on the orthogonal
        # time axis is K = (n / gamma) * scale.
        for n in grid_range:
            intercept = (n / draw_gamma) * scale
            line(_space_like(shear, intercept, extent), palette.simultaneity, cfg.sheared_grid_width, "simultaneity")

        # Constant position in the sheared frame. Crossing the orthogonal space
        # axis at (n / gamma) * scale is the same line as a time-axis intercept
        # of -(n / (v * gamma)) * scale, without the division by v.
        for n in grid_range:
            intercept = (n / draw_gamma) * scale
            line(
                _time_like(shear, intercept, extent),
                palette.constant_position,
                cfg.sheared_grid_width,
                "constant_position",
            )

        events = model.events_array()
        if len(events):
            boosted = transform_events(events, v, self._physics)
            for (x, ct), (_, ct_prime) in zip(events, boosted):
                commands.append(
                    CircleCommand(
                        (float(x) * scale, float(ct) * scale),
                        cfg.event_marker_radius,
                        cfg.event_marker_color,
                        "event_marker",
                    )
                )
                if frame is Frame.STATIONARY:
                    event_line = _space_like(0.0, float(ct) * scale, extent)
                else:
                    # ct' is constant along ct = v*x + ct'/gamma.
                    event_line = _space_like(v, float(ct_prime) / draw_gamma * scale, extent)
                line(event_line, cfg.event_line_color, cfg.event_line_width, "event_simultaneity")

        commands.extend(self._labels(palette, slopes, geometry))

        return DiagramScene(
            velocity=model.velocity,
            draw_velocity=v,
            gamma=gamma,
            frame=frame,
            slopes=slopes,
            size=geometry.size,
            commands=tuple(commands),
        )

    def _labels(
        self,
        palette: _FramePalette,
        slopes: AxisSlopes,
        geometry: CanvasGeometry,
    ) -> list[LabelCommand]:
        cfg = self._cfg
        margin = cfg.primary_label_margin
        time_label, space_label = palette.primary_labels
        labels = [
            LabelCommand(
                time_label,
                (0.0, geometry.half_height - margin),
                0.0,
                palette.primary_label_color,
                cfg.label_font_size,
                "primary_label",
            ),
            LabelCommand(
                space_label,
                (geometry.half_width - margin, 0.0),
                0.0,
                palette.primary_label_color,
                cfg.label_font_size,
                "primary_label",
            ),
        ]

        # Never further out than the nearest canvas edge allows.
        radius = min(
            cfg.label_offset_units * geometry.scale_factor,
            cfg.label_fit_fraction * min(geometry.half_width, geometry.half_height),
        )
        sec_time, sec_space = palette.secondary_labels

        space_angle = _label_angle(slopes.space_slope)
        space_rad = math.radians(space_angle)
        labels.append(
            LabelCommand(
                sec_space,
                (radius * math.cos(space_rad), radius * math.sin(space_rad)),
                space_angle,
                palette.secondary_label_color,
                cfg.label_font_size,
                "secondary_label",
            )
        )

        # Placed on the upper half of the time axis, text kept upright.
        time_direction = math.atan2(1.0, slopes.shear_velocity)
        labels.append(
            LabelCommand(
                sec_time,
                (radius * math.cos(time_direction), radius * math.sin(time_direction)),
                _label_angle(slopes.time_slope),
                palette.secondary_label_color,
                cfg.label_font_size,
                "secondary_label",
            )
        )
        return labels


__all__ = [
    "AxisSlopes",
    "CircleCommand",
    "DiagramScene",
    "DrawCommand",
    "LabelCommand",
    "LineCommand",
    "PolygonCommand",
    "SpacetimeDiagramRenderer",
    "axis_slopes",
    "drawing_velocity",
]

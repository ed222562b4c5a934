"""Static export of the diagram through matplotlib."""
from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.patches import Circle, Polygon

from relativity_lab.core.config import RENDER_CFG, RenderCfg
from relativity_lab.core.kinematics import format_gamma, format_velocity

from .diagram import (
    CircleCommand,
    DiagramScene,
    LabelCommand,
    LineCommand,
    PolygonCommand,
)

EXPORT_DPI = 100


def _rgba(color: tuple[int, ...]) -> tuple[float, float, float, float]:
    r, g, b = color[:3]
    a = color[3] if len(color) > 3 else 255
    return r / 255.0, g / 255.0, b / 255.0, a / 255.0


def draw_scene_on_axes(ax: Axes, scene: DiagramScene, *, render_cfg: RenderCfg = RENDER_CFG) -> None:
    """Replay draw commands on ``ax``; one diagram pixel maps to one data unit."""

    width, height = scene.size
    hw, hh = width / 2.0, height / 2.0
    ax.set_facecolor(_rgba(render_cfg.background_color))
    ax.set_xlim(-hw, hw)
    ax.set_ylim(-hh, hh)
    ax.set_aspect("equal")
    ax.set_axis_off()

    for zorder, command in enumerate(scene.commands, start=1):
        if isinstance(command, LineCommand):
            (x1, y1), (x2, y2) = command.start, command.end
            ax.plot(
                [x1, x2],
                [y1, y2],
                color=_rgba(command.color),
                linewidth=command.width,
                solid_capstyle="butt",
                zorder=zorder,
            )
        elif isinstance(command, PolygonCommand):
            ax.add_patch(
                Polygon(command.points, closed=True, facecolor=_rgba(command.color), edgecolor="none", zorder=zorder)
            )
        elif isinstance(command, CircleCommand):
            ax.add_patch(Circle(command.center, command.radius, facecolor=_rgba(command.color), zorder=zorder))
        elif isinstance(command, LabelCommand):
            ax.text(
                command.position[0],
                command.position[1],
                command.text,
                color=_rgba(command.color),
                fontsize=command.size * 0.75,
                rotation=command.angle,
                rotation_mode="anchor",
                ha="center",
                va="center",
                zorder=zorder,
            )
        else:
            raise TypeError(f"Unsupported draw command: {command!r}")


def export_scene(
    scene: DiagramScene,
    out_path: str | Path,
    *,
    si_units: bool = False,
    render_cfg: RenderCfg = RENDER_CFG,
) -> Path:
    """Write ``scene`` to an image file sized like the on-screen canvas."""

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    width, height = scene.size
    fig = plt.figure(figsize=(width / EXPORT_DPI, height / EXPORT_DPI), dpi=EXPORT_DPI)
    try:
        fig.patch.set_facecolor(_rgba(render_cfg.background_color))
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        draw_scene_on_axes(ax, scene, render_cfg=render_cfg)
        caption = (
            f"v = {format_velocity(scene.velocity, si_units)}   "
            f"γ = {format_gamma(scene.gamma)}   frame: {scene.frame.value}"
        )
        ax.text(
            0.01,
            0.01,
            caption,
            transform=ax.transAxes,
            color=_rgba(render_cfg.text_color),
            fontsize=9,
            ha="left",
            va="bottom",
        )
        fig.savefig(out_path, dpi=EXPORT_DPI, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    return out_path


__all__ = ["draw_scene_on_axes", "export_scene"]

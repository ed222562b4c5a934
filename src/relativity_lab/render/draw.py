from __future__ import annotations

from typing import Callable

import pygame

from .assets import get_text_surface
from .diagram import (
    CircleCommand,
    DiagramScene,
    DrawCommand,
    LabelCommand,
    LineCommand,
    PolygonCommand,
)
from .geometry import CanvasGeometry

FontGetter = Callable[[int], pygame.font.Font]


def _line_width(width: float) -> int:
    return max(1, int(round(width)))


def _to_canvas(geometry: CanvasGeometry, point: tuple[float, float]) -> tuple[int, int]:
    cx, cy = geometry.to_canvas(*point)
    return int(round(cx)), int(round(cy))


def _draw_line(surface: pygame.Surface, command: LineCommand, geometry: CanvasGeometry) -> None:
    start = _to_canvas(geometry, command.start)
    end = _to_canvas(geometry, command.end)
    width = _line_width(command.width)
    if width <= 1:
        pygame.draw.aaline(surface, command.color, start, end)
    else:
        pygame.draw.line(surface, command.color, start, end, width)


def _draw_polygon(surface: pygame.Surface, command: PolygonCommand, geometry: CanvasGeometry) -> None:
    points = [_to_canvas(geometry, point) for point in command.points]
    pygame.draw.polygon(surface, command.color, points)


def _draw_circle(surface: pygame.Surface, command: CircleCommand, geometry: CanvasGeometry) -> None:
    center = _to_canvas(geometry, command.center)
    pygame.draw.circle(surface, command.color, center, max(1, int(round(command.radius))))


def _draw_label(
    surface: pygame.Surface,
    command: LabelCommand,
    geometry: CanvasGeometry,
    font_getter: FontGetter,
) -> None:
    font = font_getter(command.size)
    text_surf = get_text_surface(font, command.text, command.color[:3])
    if command.color[3] < 255:
        text_surf = text_surf.copy()
        text_surf.set_alpha(command.color[3])
    if command.angle:
        text_surf = pygame.transform.rotate(text_surf, command.angle)
    rect = text_surf.get_rect(center=_to_canvas(geometry, command.position))
    surface.blit(text_surf, rect)


def draw_command(
    surface: pygame.Surface,
    command: DrawCommand,
    geometry: CanvasGeometry,
    font_getter: FontGetter,
) -> None:
    if isinstance(command, LineCommand):
        _draw_line(surface, command, geometry)
    elif isinstance(command, PolygonCommand):
        _draw_polygon(surface, command, geometry)
    elif isinstance(command, CircleCommand):
        _draw_circle(surface, command, geometry)
    elif isinstance(command, LabelCommand):
        _draw_label(surface, command, geometry, font_getter)
    else:
        raise TypeError(f"Unsupported draw command: {command!r}")


def draw_scene(
    surface: pygame.Surface,
    scene: DiagramScene,
    geometry: CanvasGeometry,
    *,
    background: tuple[int, int, int],
    font_getter: FontGetter,
) -> None:
    """Full redraw of the diagram onto a canvas-sized surface."""

    surface.fill(background)
    layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    for command in scene.commands:
        translucent = not isinstance(command, LabelCommand) and command.color[3] < 255
        if not translucent:
            draw_command(surface, command, geometry, font_getter)
            continue
        layer.fill((0, 0, 0, 0))
        draw_command(layer, command, geometry, font_getter)
        surface.blit(layer, (0, 0))


def draw_ruler(
    surface: pygame.Surface,
    rect: pygame.Rect,
    fraction: float,
    *,
    color: tuple[int, int, int],
    tick_color: tuple[int, int, int],
    ticks: int = 10,
) -> None:
    """Horizontal ruler filling ``fraction`` of ``rect`` from the left."""

    fraction = max(0.0, min(1.0, fraction))
    width = int(round(rect.width * fraction))
    if width <= 0:
        return
    bar = pygame.Rect(rect.x, rect.y, width, rect.height)
    pygame.draw.rect(surface, color, bar, border_radius=3)
    for i in range(1, ticks):
        tx = rect.x + int(round(width * i / ticks))
        pygame.draw.line(surface, tick_color, (tx, rect.y), (tx, rect.y + rect.height // 2), 1)


def draw_swatch(
    surface: pygame.Surface,
    center: tuple[int, int],
    radius: int,
    color: tuple[int, int, int],
    *,
    outline: tuple[int, int, int],
) -> None:
    if radius <= 0:
        return
    pygame.draw.circle(surface, color, center, radius)
    pygame.draw.circle(surface, outline, center, radius, 1)


__all__ = ["draw_command", "draw_ruler", "draw_scene", "draw_swatch"]

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0


@dataclass(frozen=True)
class SliderStyle:
    track_color: tuple[int, int, int]
    fill_color: tuple[int, int, int]
    knob_color: tuple[int, int, int]
    label_color: tuple[int, int, int]
    value_color: tuple[int, int, int]


class Button:
    """Simple rectangular button with hover feedback and callbacks."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        text_getter: Callable[[], str] | None = None,
        *,
        style: ButtonVisualStyle | None = None,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self._text = text
        self._callback = callback
        self._text_getter = text_getter
        self._style = style

    def get_text(self) -> str:
        if self._text_getter is not None:
            return self._text_getter()
        return self._text

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        mouse_pos: tuple[int, int] | None = None,
    ) -> None:
        if self._style is None:
            raise ValueError("Button style must be provided")
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        style = self._style
        hovered = self.rect.collidepoint(mouse_pos)
        color = style.hover_color if hovered else style.base_color
        pygame.draw.rect(surface, color, self.rect, border_radius=style.radius)
        if style.border_color is not None and style.border_width > 0:
            pygame.draw.rect(
                surface,
                style.border_color,
                self.rect,
                style.border_width,
                border_radius=style.radius,
            )
        text_surf = get_text_surface(font, self.get_text(), style.text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self._callback()
                return True
        return False


class Slider:
    """Horizontal slider reporting its value as text on change."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        label: str,
        lo: float,
        hi: float,
        value: float,
        on_change: Callable[[str], None],
        *,
        step: float | None = None,
        value_getter: Callable[[], str] | None = None,
        style: SliderStyle,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.label = label
        self.lo, self.hi = lo, hi
        self.value = value
        self.step = step
        self.dragging = False
        self._on_change = on_change
        self._value_getter = value_getter
        self._style = style

    def set_value(self, value: float) -> None:
        """Move the knob without notifying."""

        self.value = max(self.lo, min(self.hi, value))

    def _set_from_pixel(self, mx: int) -> None:
        fraction = max(0.0, min(1.0, (mx - self.rect.x) / max(1, self.rect.w)))
        value = self.lo + fraction * (self.hi - self.lo)
        if self.step:
            value = round(value / self.step) * self.step
        value = max(self.lo, min(self.hi, value))
        if value != self.value:
            self.value = value
            self._on_change(f"{value:.6f}")

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 12).collidepoint(event.pos):
                self.dragging = True
                self._set_from_pixel(event.pos[0])
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            was_dragging = self.dragging
            self.dragging = False
            return was_dragging
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self._set_from_pixel(event.pos[0])
            return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        style = self._style
        label = get_text_surface(font, self.label, style.label_color)
        surface.blit(label, (self.rect.x, self.rect.y - label.get_height() - 4))
        pygame.draw.rect(surface, style.track_color, self.rect, border_radius=4)
        fraction = (self.value - self.lo) / (self.hi - self.lo)
        knob_x = self.rect.x + int(fraction * self.rect.w)
        fill = pygame.Rect(self.rect.x, self.rect.y, knob_x - self.rect.x, self.rect.h)
        pygame.draw.rect(surface, style.fill_color, fill, border_radius=4)
        pygame.draw.circle(surface, style.knob_color, (knob_x, self.rect.centery), self.rect.h // 2 + 3)
        pygame.draw.circle(surface, style.fill_color, (knob_x, self.rect.centery), self.rect.h // 2 + 3, 2)
        text = self._value_getter() if self._value_getter is not None else f"{self.value:.3f}"
        value_surf = get_text_surface(font, text, style.value_color)
        value_rect = value_surf.get_rect(topright=(self.rect.right, self.rect.y - value_surf.get_height() - 4))
        surface.blit(value_surf, value_rect)


class RadioGroup:
    """Mutually exclusive options drawn side by side."""

    def __init__(
        self,
        origin: tuple[int, int],
        options: Sequence[tuple[str, str]],
        selected: str,
        on_select: Callable[[str], None],
        *,
        item_width: int = 130,
        style: ButtonVisualStyle,
    ) -> None:
        self._options = list(options)
        self.selected = selected
        self._on_select = on_select
        self._style = style
        x, y = origin
        self._rects = [pygame.Rect(x + i * item_width, y, item_width - 8, 30) for i in range(len(self._options))]

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        for rect, (value, _) in zip(self._rects, self._options):
            if rect.collidepoint(event.pos):
                if value != self.selected:
                    self.selected = value
                    self._on_select(value)
                return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        style = self._style
        for rect, (value, text) in zip(self._rects, self._options):
            active = value == self.selected
            color = style.hover_color if active else style.base_color
            pygame.draw.rect(surface, color, rect, border_radius=style.radius)
            if style.border_color is not None:
                pygame.draw.rect(surface, style.border_color, rect, 1, border_radius=style.radius)
            dot_center = (rect.x + 14, rect.centery)
            pygame.draw.circle(surface, style.text_color, dot_center, 6, 1)
            if active:
                pygame.draw.circle(surface, style.text_color, dot_center, 3)
            text_surf = get_text_surface(font, text, style.text_color)
            surface.blit(text_surf, text_surf.get_rect(midleft=(rect.x + 26, rect.centery)))


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
    min_width: int = 0,
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    width = max(min_width, max(font.size(text)[0] for text, _ in lines) + padding_x * 2)
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(
        panel_surface,
        background_color,
        panel_surface.get_rect(),
        border_radius=12,
    )
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        text_surf = get_text_surface(font, text, color)
        panel_surface.blit(text_surf, (padding_x, padding_y + idx * line_height))
    return panel_surface

from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


class FontLibrary:
    """Cache of fonts keyed by size and weight for one family preference list."""

    def __init__(self, preferred_names: Iterable[str]) -> None:
        self._names = tuple(preferred_names)
        self._cache: dict[tuple[int, bool], pygame.font.Font] = {}

    def get(self, size: int, *, bold: bool = False) -> pygame.font.Font:
        key = (size, bold)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        font = load_font(self._names, size, bold=bold)
        self._cache[key] = font
        return font

    def __call__(self, size: int) -> pygame.font.Font:
        return self.get(size)


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color.

    Callers must copy the surface before changing its alpha.
    """

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        try:
            match = pygame.font.match_font(name, bold=bold)
        except (OSError, ValueError):
            match = None
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)

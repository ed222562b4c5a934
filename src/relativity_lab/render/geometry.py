from __future__ import annotations

from dataclasses import dataclass

from relativity_lab.core.config import RENDER_CFG, RenderCfg


@dataclass
class CanvasState:
    width: int
    height: int
    origin_x: float
    origin_y: float
    scale_factor: float


class CanvasGeometry:
    """Pixel/unit mapping for the diagram canvas.

    Diagram coordinates are pixels measured from the origin with ``ct``
    pointing up; canvas coordinates are pixels from the top-left corner of
    the canvas. ``offset`` is the canvas position inside the window.
    """

    def __init__(
        self,
        size: tuple[int, int],
        *,
        offset: tuple[int, int] = (0, 0),
        cfg: RenderCfg = RENDER_CFG,
    ) -> None:
        self._cfg = cfg
        self._offset = offset
        self._state = self._compute(size)

    def _compute(self, size: tuple[int, int]) -> CanvasState:
        width, height = int(size[0]), int(size[1])
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {size!r}")
        return CanvasState(
            width=width,
            height=height,
            origin_x=width / 2.0,
            origin_y=height / 2.0,
            scale_factor=min(width, height) / self._cfg.scale_divisor,
        )

    def resize(self, size: tuple[int, int], offset: tuple[int, int] | None = None) -> None:
        self._state = self._compute(size)
        if offset is not None:
            self._offset = offset

    @property
    def size(self) -> tuple[int, int]:
        return self._state.width, self._state.height

    @property
    def offset(self) -> tuple[int, int]:
        return self._offset

    @property
    def origin(self) -> tuple[float, float]:
        return self._state.origin_x, self._state.origin_y

    @property
    def scale_factor(self) -> float:
        return self._state.scale_factor

    @property
    def half_width(self) -> float:
        return self._state.width / 2.0

    @property
    def half_height(self) -> float:
        return self._state.height / 2.0

    def window_to_canvas(self, wx: float, wy: float) -> tuple[float, float]:
        return wx - self._offset[0], wy - self._offset[1]

    def contains(self, px: float, py: float) -> bool:
        """True when the canvas pixel lies strictly inside the canvas."""

        return 0 < px < self._state.width and 0 < py < self._state.height

    def unproject(self, px: float, py: float) -> tuple[float, float]:
        """Canvas pixel to stationary-frame units ``(x, ct)``."""

        state = self._state
        x = (px - state.origin_x) / state.scale_factor
        ct = -(py - state.origin_y) / state.scale_factor
        return x, ct

    def to_canvas(self, x: float, y: float) -> tuple[float, float]:
        """Diagram pixels (origin centred, y up) to canvas pixels."""

        return self._state.origin_x + x, self._state.origin_y - y

    def to_window(self, x: float, y: float) -> tuple[int, int]:
        cx, cy = self.to_canvas(x, y)
        return int(round(cx + self._offset[0])), int(round(cy + self._offset[1]))

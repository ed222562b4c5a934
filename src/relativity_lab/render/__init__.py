"""Rendering helpers for the relativity visualizer."""

from .geometry import CanvasGeometry
from .assets import (
    FontLibrary,
    get_text_surface,
    load_font,
)
from .diagram import (
    AxisSlopes,
    CircleCommand,
    DiagramScene,
    LabelCommand,
    LineCommand,
    PolygonCommand,
    SpacetimeDiagramRenderer,
    axis_slopes,
    drawing_velocity,
)
from .draw import (
    draw_command,
    draw_ruler,
    draw_scene,
    draw_swatch,
)
from .ui import (
    Button,
    ButtonVisualStyle,
    RadioGroup,
    Slider,
    SliderStyle,
    build_text_panel,
)

__all__ = [
    "AxisSlopes",
    "Button",
    "ButtonVisualStyle",
    "CanvasGeometry",
    "CircleCommand",
    "DiagramScene",
    "FontLibrary",
    "LabelCommand",
    "LineCommand",
    "PolygonCommand",
    "RadioGroup",
    "Slider",
    "SliderStyle",
    "SpacetimeDiagramRenderer",
    "axis_slopes",
    "build_text_panel",
    "draw_command",
    "draw_ruler",
    "draw_scene",
    "draw_swatch",
    "drawing_velocity",
    "get_text_surface",
    "load_font",
]

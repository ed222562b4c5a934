from __future__ import annotations

import dataclasses
from pathlib import Path

import matplotlib.pyplot as plt
import pytest

from relativity_lab.core.model import Frame, FrameModel
from relativity_lab.render.diagram import SpacetimeDiagramRenderer
from relativity_lab.render.figure import draw_scene_on_axes, export_scene
from relativity_lab.render.geometry import CanvasGeometry


def make_scene(frame: Frame = Frame.STATIONARY):
    model = FrameModel(velocity=0.6, active_frame=frame)
    model.add_event(1.0, 0.5)
    return SpacetimeDiagramRenderer().render(model, CanvasGeometry((400, 300)))


def test_export_writes_png(tmp_path: Path) -> None:
    out = export_scene(make_scene(Frame.MOVING), tmp_path / "nested" / "diagram.png", si_units=True)
    assert out == tmp_path / "nested" / "diagram.png"
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_axes_use_diagram_pixels() -> None:
    fig, ax = plt.subplots()
    try:
        draw_scene_on_axes(ax, make_scene())
        assert ax.get_xlim() == (-200.0, 200.0)
        assert ax.get_ylim() == (-150.0, 150.0)
        assert len(ax.texts) == 4
    finally:
        plt.close(fig)


def test_unknown_command_is_rejected() -> None:
    scene = dataclasses.replace(make_scene(), commands=("circle",))
    fig, ax = plt.subplots()
    try:
        with pytest.raises(TypeError):
            draw_scene_on_axes(ax, scene)
    finally:
        plt.close(fig)

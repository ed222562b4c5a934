from __future__ import annotations

import pytest

from relativity_lab.render.geometry import CanvasGeometry


def test_scale_is_a_fifth_of_the_short_side() -> None:
    geometry = CanvasGeometry((800, 600))
    assert geometry.scale_factor == pytest.approx(120.0)
    assert geometry.origin == (400.0, 300.0)
    assert geometry.half_width == 400.0
    assert geometry.half_height == 300.0


def test_canvas_centre_unprojects_to_origin() -> None:
    geometry = CanvasGeometry((800, 600))
    assert geometry.unproject(400, 300) == (0.0, 0.0)


def test_unproject_flips_time_axis() -> None:
    geometry = CanvasGeometry((800, 600))
    x, ct = geometry.unproject(520, 180)
    assert x == pytest.approx(1.0)
    assert ct == pytest.approx(1.0)


def test_contains_excludes_edges() -> None:
    geometry = CanvasGeometry((800, 600))
    assert geometry.contains(1, 1)
    assert not geometry.contains(0, 100)
    assert not geometry.contains(800, 100)
    assert not geometry.contains(100, 600)
    assert not geometry.contains(-3, 100)


def test_window_offset_is_removed_before_projection() -> None:
    geometry = CanvasGeometry((400, 400), offset=(100, 50))
    assert geometry.window_to_canvas(300, 250) == (200, 200)
    assert geometry.to_window(0.0, 0.0) == (300, 250)
    assert geometry.to_canvas(10.0, 20.0) == (210.0, 180.0)


def test_resize_updates_scale() -> None:
    geometry = CanvasGeometry((800, 600))
    geometry.resize((1000, 1000))
    assert geometry.size == (1000, 1000)
    assert geometry.scale_factor == pytest.approx(200.0)


@pytest.mark.parametrize("size", [(0, 100), (100, -1)])
def test_non_positive_size_is_rejected(size: tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        CanvasGeometry(size)

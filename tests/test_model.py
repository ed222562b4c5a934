from __future__ import annotations

import pytest

from relativity_lab.core.model import Frame, FrameModel, SpacetimeEvent


def test_frame_parse_accepts_values_and_members() -> None:
    assert Frame.parse("stationary") is Frame.STATIONARY
    assert Frame.parse(" Moving ") is Frame.MOVING
    assert Frame.parse(Frame.MOVING) is Frame.MOVING


def test_frame_parse_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        Frame.parse("sideways")


def test_frame_other_is_involutive() -> None:
    for frame in Frame:
        assert frame.other is not frame
        assert frame.other.other is frame


def test_model_defaults() -> None:
    model = FrameModel()
    assert model.velocity == 0.0
    assert model.active_frame is Frame.STATIONARY
    assert model.event_count == 0
    assert model.events_array().shape == (0, 2)


def test_events_keep_insertion_order() -> None:
    model = FrameModel()
    first = model.add_event(1, 2)
    model.add_event(-0.5, 0.25)
    assert first == SpacetimeEvent(1.0, 2.0)
    assert model.events[0] == first
    assert [event.x for event in model.iter_events()] == [1.0, -0.5]
    assert model.events_array().tolist() == [[1.0, 2.0], [-0.5, 0.25]]


def test_clear_events_reports_removed_count() -> None:
    model = FrameModel()
    model.add_event(0, 0)
    model.add_event(1, 1)
    assert model.clear_events() == 2
    assert model.event_count == 0
    assert model.clear_events() == 0


def test_velocity_is_stored_as_given() -> None:
    model = FrameModel()
    model.set_velocity(1.2)
    assert model.velocity == 1.2
    model.set_active_frame("moving")
    assert model.active_frame is Frame.MOVING

from __future__ import annotations

from pathlib import Path

from relativity_lab.analyze_session import (
    load_interactions,
    main,
    model_from_state,
    resolve_session_dir,
    summarize,
)
from relativity_lab.core.controller import InteractionController, SessionRecorder
from relativity_lab.core.logging_utils import SessionLogger
from relativity_lab.core.model import Frame, FrameModel
from relativity_lab.render.geometry import CanvasGeometry


def record_session(root: Path) -> Path:
    model = FrameModel()
    controller = InteractionController(model, CanvasGeometry((400, 300)))
    with SessionLogger(root, "sample") as session:
        controller.add_listener(SessionRecorder(session))
        controller.handle_velocity_input("0.4")
        controller.handle_pointer_click(260, 90)
        controller.handle_frame_selected("moving")
        controller.handle_velocity_input("-0.2")
        session.write_meta(
            {
                "canvas_size": [400, 300],
                "final_state": {
                    "velocity": model.velocity,
                    "frame": model.active_frame.value,
                    "si_units": False,
                    "events": [[event.x, event.ct] for event in model.iter_events()],
                },
            }
        )
    return session.session_dir


def test_load_and_summarize(tmp_path: Path) -> None:
    session_dir = record_session(tmp_path)
    rows = load_interactions(session_dir / "interactions.csv")
    assert [row["kind"] for row in rows] == ["velocity", "event_added", "frame", "velocity"]
    assert rows[0]["x"] is None
    assert rows[1]["x"] is not None

    summary = summarize(rows)
    assert summary["changes"] == 4
    assert summary["events_placed"] == 1
    assert summary["velocity_min"] == -0.2
    assert summary["velocity_max"] == 0.4


def test_summarize_empty_session() -> None:
    summary = summarize([])
    assert summary["changes"] == 0
    assert summary["velocity_min"] == 0.0


def test_model_from_state_restores_events() -> None:
    model = model_from_state({"velocity": 0.3, "frame": "moving", "events": [[1.0, 2.0]]})
    assert model.velocity == 0.3
    assert model.active_frame is Frame.MOVING
    assert model.events_array().tolist() == [[1.0, 2.0]]


def test_resolve_uses_last_session_marker(tmp_path: Path) -> None:
    session_dir = record_session(tmp_path)
    assert resolve_session_dir(None, tmp_path) == session_dir
    assert resolve_session_dir("sample", tmp_path) == session_dir
    assert resolve_session_dir(None, tmp_path / "empty") is None


def test_main_writes_figures(tmp_path: Path, capsys) -> None:
    session_dir = record_session(tmp_path)
    main([str(session_dir)])
    assert (session_dir / "figs" / "velocity_history.png").exists()
    assert (session_dir / "figs" / "final_diagram.png").exists()
    assert "Events placed: 1" in capsys.readouterr().out

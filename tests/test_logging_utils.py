from __future__ import annotations

import json
import logging
from pathlib import Path

from relativity_lab.core.logging_utils import PACKAGE_LOGGER, SessionLogger, setup_logging


def test_session_logger_creates_layout(tmp_path: Path) -> None:
    session = SessionLogger(tmp_path, "demo")
    session.write_meta({"canvas_size": [800, 600]})
    session.close()

    assert session.session_dir == tmp_path / "demo"
    assert (tmp_path / "last_session.txt").read_text(encoding="utf-8") == "demo"
    header = session.interactions_path.read_text(encoding="utf-8").splitlines()[0]
    assert header == "t,kind,velocity,frame,x,ct,events"
    assert json.loads(session.meta_path.read_text(encoding="utf-8")) == {"canvas_size": [800, 600]}


def test_session_ids_do_not_collide(tmp_path: Path) -> None:
    with SessionLogger(tmp_path, "demo"):
        pass
    with SessionLogger(tmp_path, "demo") as second:
        assert second.session_id == "demo_1"
    assert (tmp_path / "last_session.txt").read_text(encoding="utf-8") == "demo_1"


def test_rows_are_buffered_until_threshold(tmp_path: Path) -> None:
    session = SessionLogger(tmp_path, "buf", flush_threshold=2)
    session.log_row([0.5, "velocity", 0.25, "stationary", None, None, True])
    assert "stationary" not in session.interactions_path.read_text(encoding="utf-8")
    session.log_row([1.0, "frame", 0.25, "moving", None, None, 0])
    lines = session.interactions_path.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ["0.5,velocity,0.25,stationary,,,1", "1,frame,0.25,moving,,,0"]
    session.close()
    session.close()


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_configures_package_logger(tmp_path: Path) -> None:
    log_file = tmp_path / "lab.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    try:
        assert logger.name == PACKAGE_LOGGER
        assert len(logger.handlers) == 2
        logging.getLogger("relativity_lab.core.kinematics").warning("boost")
    finally:
        _drop_handlers(logger)
    assert "boost" in log_file.read_text(encoding="utf-8")


def test_setup_logging_replaces_previous_handlers() -> None:
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)
    try:
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        _drop_handlers(logger)


def test_update_meta_keeps_earlier_keys(tmp_path: Path) -> None:
    with SessionLogger(tmp_path, "meta") as session:
        session.write_meta({"started": "10:00", "initial_state": {"velocity": 0.0}, "canvas_size": [900, 800]})
        merged = session.update_meta({"canvas_size": [700, 600], "final_state": {"velocity": 0.5}})

    on_disk = json.loads(session.meta_path.read_text(encoding="utf-8"))
    assert on_disk == merged
    assert on_disk["started"] == "10:00"
    assert on_disk["initial_state"] == {"velocity": 0.0}
    assert on_disk["canvas_size"] == [700, 600]
    assert on_disk["final_state"] == {"velocity": 0.5}


def test_update_meta_without_existing_file(tmp_path: Path) -> None:
    with SessionLogger(tmp_path, "fresh") as session:
        assert session.update_meta({"finished": "11:00"}) == {"finished": "11:00"}

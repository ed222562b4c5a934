"""Logging helpers scoped to the relativity visualizer package."""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

PACKAGE_LOGGER = "relativity_lab"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger with a console handler and an optional file."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate output when called more than once.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger


class SessionLogger:
    """Buffered recorder of user interactions, one CSV row per state change."""

    INTERACTIONS_HEADER = ["t", "kind", "velocity", "frame", "x", "ct", "events"]

    def __init__(
        self,
        root_dir: str | Path = "data/sessions",
        session_id: Optional[str] = None,
        *,
        flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        def make_candidate(suffix: Optional[int] = None) -> str:
            base = session_id or f"{timestamp}_session"
            if suffix is None:
                return base
            if session_id:
                return f"{session_id}_{suffix}"
            return f"{base}_{suffix:02d}"

        candidate_id = make_candidate()
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = make_candidate(suffix)
            suffix += 1

        self.session_id = candidate_id
        self.session_dir = self.root_dir / self.session_id
        self.session_dir.mkdir(parents=True, exist_ok=False)

        self.interactions_path = self.session_dir / "interactions.csv"
        self.meta_path = self.session_dir / "meta.json"

        self._file = self.interactions_path.open("w", newline="", encoding="utf-8")
        self._file.write(",".join(self.INTERACTIONS_HEADER) + "\n")
        self._buffer: list[str] = []
        self._threshold = max(1, flush_threshold)
        self._closed = False

        last_session_marker = self.root_dir / "last_session.txt"
        last_session_marker.write_text(self.session_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def update_meta(self, values: dict) -> dict:
        """Merge *values* into the existing meta.json and return the result."""

        meta: dict = {}
        if self.meta_path.exists():
            with self.meta_path.open("r", encoding="utf-8") as fh:
                meta = json.load(fh)
        meta.update(values)
        self.write_meta(meta)
        return meta

    def log_row(self, values: Sequence[object]) -> None:
        self._buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._buffer) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._buffer:
            self._file.write("\n".join(self._buffer) + "\n")
            self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        if self._closed:
            return
        self.flush()
        self._file.close()
        self._closed = True

    @staticmethod
    def _format_value(value: object) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "SessionLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["PACKAGE_LOGGER", "SessionLogger", "setup_logging"]

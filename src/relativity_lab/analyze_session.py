"""Analyze a recorded session and generate figures."""
from __future__ import annotations

import argparse
import csv
import json
from collections import Counter
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from relativity_lab.core.model import FrameModel
from relativity_lab.render.diagram import SpacetimeDiagramRenderer
from relativity_lab.render.figure import export_scene
from relativity_lab.render.geometry import CanvasGeometry

INTERACTIONS_FILENAME = "interactions.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
DEFAULT_SESSIONS_DIR = Path("data") / "sessions"


def load_interactions(path: Path) -> List[dict]:
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        rows: List[dict] = []
        for row in reader:
            if not row or not row.get("kind"):
                continue
            rows.append(
                {
                    "t": float(row["t"]),
                    "kind": row["kind"],
                    "velocity": float(row["velocity"]),
                    "frame": row["frame"],
                    "x": float(row["x"]) if row.get("x") else None,
                    "ct": float(row["ct"]) if row.get("ct") else None,
                    "events": int(float(row["events"])),
                }
            )
    return rows


def summarize(rows: List[dict]) -> Dict[str, object]:
    counts = Counter(row["kind"] for row in rows)
    velocities = np.array([row["velocity"] for row in rows], dtype=float)
    return {
        "changes": len(rows),
        "by_kind": dict(sorted(counts.items())),
        "events_placed": counts.get("event_added", 0),
        "velocity_min": float(velocities.min()) if velocities.size else 0.0,
        "velocity_max": float(velocities.max()) if velocities.size else 0.0,
    }


def ensure_fig_dir(session_dir: Path) -> Path:
    fig_dir = session_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def plot_velocity_history(fig_dir: Path, rows: List[dict]) -> Path:
    t = np.array([row["t"] for row in rows], dtype=float)
    v = np.array([row["velocity"] for row in rows], dtype=float)
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.step(t, v, where="post", color="#4a90d9")
    event_t = [row["t"] for row in rows if row["kind"] == "event_added"]
    event_v = [row["velocity"] for row in rows if row["kind"] == "event_added"]
    if event_t:
        ax.scatter(event_t, event_v, color="#ff00ff", s=16, zorder=3, label="event placed")
        ax.legend(loc="upper left")
    ax.set_xlabel("Session time (s)")
    ax.set_ylabel("v / c")
    ax.set_ylim(-1.0, 1.0)
    ax.axhline(0.0, color="0.7", linewidth=0.8)
    ax.set_title("Velocity during session")
    fig.tight_layout()
    out_path = fig_dir / "velocity_history.png"
    fig.savefig(out_path, dpi=120)
    plt.close(fig)
    return out_path


def model_from_state(state: dict) -> FrameModel:
    model = FrameModel()
    model.set_velocity(float(state.get("velocity", 0.0)))
    model.set_active_frame(state.get("frame", "stationary"))
    for x, ct in state.get("events", []):
        model.add_event(float(x), float(ct))
    return model


def plot_final_diagram(fig_dir: Path, meta: dict) -> Path | None:
    state = meta.get("final_state")
    if not state:
        return None
    width, height = meta.get("canvas_size", (800, 800))
    geometry = CanvasGeometry((int(width), int(height)))
    scene = SpacetimeDiagramRenderer().render(
        model_from_state(state),
        geometry,
        si_units=bool(state.get("si_units", False)),
    )
    return export_scene(scene, fig_dir / "final_diagram.png", si_units=bool(state.get("si_units", False)))


def print_summary(session_dir: Path, summary: Dict[str, object]) -> None:
    print(f"Session: {session_dir}")
    print(f" State changes: {summary['changes']}")
    by_kind = summary["by_kind"]
    if by_kind:
        print(" By kind: " + ", ".join(f"{kind}: {count}" for kind, count in by_kind.items()))  # type: ignore[union-attr]
    print(f" Events placed: {summary['events_placed']}")
    print(f" Velocity range: {summary['velocity_min']:.3f}c .. {summary['velocity_max']:.3f}c")


def resolve_session_dir(arg: str | None, base_dir: Path = DEFAULT_SESSIONS_DIR) -> Path | None:
    if arg:
        path = Path(arg)
        if path.is_dir():
            return path
        return base_dir / arg
    marker = base_dir / "last_session.txt"
    if not marker.exists():
        return None
    return base_dir / marker.read_text(encoding="utf-8").strip()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded session and write figures.")
    parser.add_argument("session_dir", nargs="?", help="Path or id of a session directory")
    parser.add_argument("--sessions-root", default=str(DEFAULT_SESSIONS_DIR), help="Root of recorded sessions")
    args = parser.parse_args(argv)

    session_dir = resolve_session_dir(args.session_dir, Path(args.sessions_root))
    if session_dir is None:
        parser.error("No session given and last_session.txt is missing.")
    if not session_dir.is_dir():
        parser.error(f"Session directory not found: {session_dir}")

    interactions_path = session_dir / INTERACTIONS_FILENAME
    meta_path = session_dir / META_FILENAME
    if not interactions_path.exists() or not meta_path.exists():
        parser.error("Session directory lacks interactions.csv or meta.json.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)
    rows = load_interactions(interactions_path)

    fig_dir = ensure_fig_dir(session_dir)
    if rows:
        plot_velocity_history(fig_dir, rows)
    plot_final_diagram(fig_dir, meta)
    print_summary(session_dir, summarize(rows))


if __name__ == "__main__":
    main()

"""Translate user input into Frame Model updates and redraw requests.

Every mutation ends with one notification to the registered listeners, after
the model has been updated. The app registers a listener that redraws the
diagram; the session recorder is another listener.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from relativity_lab.data.scenarios import SCENARIOS, VELOCITY_PRESETS_BY_KEY

from .config import PHYSICS_CFG, PhysicsCfg
from .kinematics import parse_velocity
from .model import Frame, FrameModel, SpacetimeEvent

if TYPE_CHECKING:  # pragma: no cover
    from relativity_lab.render.geometry import CanvasGeometry

    from .logging_utils import SessionLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChange:
    kind: str
    velocity: float
    frame: Frame
    event_count: int
    si_units: bool = False
    event: SpacetimeEvent | None = None


Listener = Callable[[StateChange], None]


class InteractionController:
    """Single writer of the Frame Model."""

    def __init__(
        self,
        model: FrameModel,
        geometry: CanvasGeometry,
        *,
        si_units: bool = False,
        physics_cfg: PhysicsCfg = PHYSICS_CFG,
    ) -> None:
        self.model = model
        self.geometry = geometry
        self.si_units = si_units
        self._cfg = physics_cfg
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self, kind: str, event: SpacetimeEvent | None = None) -> StateChange:
        change = StateChange(
            kind=kind,
            velocity=self.model.velocity,
            frame=self.model.active_frame,
            event_count=self.model.event_count,
            si_units=self.si_units,
            event=event,
        )
        for listener in list(self._listeners):
            listener(change)
        return change

    def handle_pointer_click(self, wx: float, wy: float) -> SpacetimeEvent | None:
        """Place an event at a window pixel; clicks outside the canvas are ignored."""

        px, py = self.geometry.window_to_canvas(wx, wy)
        if not self.geometry.contains(px, py):
            logger.debug("Ignoring click outside canvas at (%s, %s)", px, py)
            return None
        x, ct = self.geometry.unproject(px, py)
        event = self.model.add_event(x, ct)
        logger.info("Event added at x=%.3f ct=%.3f", event.x, event.ct)
        self._notify("event_added", event)
        return event

    def handle_velocity_input(self, raw: object) -> float:
        v = parse_velocity(raw, self._cfg)
        self.model.set_velocity(v)
        self._notify("velocity")
        return v

    def nudge_velocity(self, steps: int) -> float:
        return self.handle_velocity_input(self.model.velocity + steps * self._cfg.velocity_nudge)

    def handle_frame_selected(self, value: Frame | str) -> Frame:
        frame = Frame.parse(value)
        self.model.set_active_frame(frame)
        logger.info("Active frame: %s", frame.value)
        self._notify("frame")
        return frame

    def toggle_frame(self) -> Frame:
        return self.handle_frame_selected(self.model.active_frame.other)

    def handle_clear_events(self) -> int:
        removed = self.model.clear_events()
        logger.info("Cleared %d events", removed)
        self._notify("events_cleared")
        return removed

    def handle_resize(self, size: tuple[int, int], offset: tuple[int, int] | None = None) -> None:
        self.geometry.resize(size, offset)
        self._notify("resize")

    def set_si_units(self, enabled: bool) -> None:
        self.si_units = bool(enabled)
        self._notify("units")

    def apply_preset(self, key: str) -> float:
        try:
            preset = VELOCITY_PRESETS_BY_KEY[key]
        except KeyError:
            raise ValueError(f"Unknown velocity preset: {key!r}") from None
        return self.handle_velocity_input(preset.velocity)

    def load_scenario(self, key: str) -> None:
        """Replace the placed events and velocity with a predefined scenario."""

        try:
            scenario = SCENARIOS[key]
        except KeyError:
            raise ValueError(f"Unknown scenario: {key!r}") from None
        self.model.clear_events()
        self.model.set_velocity(parse_velocity(scenario.velocity, self._cfg))
        for x, ct in scenario.events_array():
            self.model.add_event(float(x), float(ct))
        logger.info("Loaded scenario %s", scenario.name)
        self._notify("scenario")


class SessionRecorder:
    """Listener writing each state change to a :class:`SessionLogger`."""

    def __init__(self, session: SessionLogger, clock: Callable[[], float] = time.perf_counter) -> None:
        self._session = session
        self._clock = clock
        self._start = clock()

    def __call__(self, change: StateChange) -> None:
        x = change.event.x if change.event is not None else None
        ct = change.event.ct if change.event is not None else None
        self._session.log_row(
            [
                self._clock() - self._start,
                change.kind,
                change.velocity,
                change.frame.value,
                x,
                ct,
                change.event_count,
            ]
        )


__all__ = ["InteractionController", "Listener", "SessionRecorder", "StateChange"]

"""Data models for the spacetime diagram state."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

import numpy as np


class Frame(str, Enum):
    """Reference frame drawn with orthogonal axes."""

    STATIONARY = "stationary"
    MOVING = "moving"

    @classmethod
    def parse(cls, value: "Frame | str") -> "Frame":
        if isinstance(value, Frame):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown frame: {value!r}") from None

    @property
    def other(self) -> "Frame":
        return Frame.MOVING if self is Frame.STATIONARY else Frame.STATIONARY


@dataclass(frozen=True)
class SpacetimeEvent:
    """User placed event in stationary-frame units (space position, time times c)."""

    x: float
    ct: float


@dataclass
class FrameModel:
    """Velocity, active frame and placed events shared by the diagram.

    The model never triggers rendering; callers request redraws after
    mutating it. Velocities are stored exactly as given.
    """

    velocity: float = 0.0
    active_frame: Frame = Frame.STATIONARY
    _events: list[SpacetimeEvent] = field(default_factory=list, repr=False)

    def set_velocity(self, v: float) -> None:
        self.velocity = float(v)

    def set_active_frame(self, frame: Frame | str) -> None:
        self.active_frame = Frame.parse(frame)

    def add_event(self, x: float, ct: float) -> SpacetimeEvent:
        event = SpacetimeEvent(float(x), float(ct))
        self._events.append(event)
        return event

    def clear_events(self) -> int:
        removed = len(self._events)
        self._events.clear()
        return removed

    @property
    def events(self) -> tuple[SpacetimeEvent, ...]:
        return tuple(self._events)

    def iter_events(self) -> Iterator[SpacetimeEvent]:
        return iter(self.events)

    def events_array(self) -> np.ndarray:
        """Events as an ``(n, 2)`` array of ``(x, ct)`` rows."""

        if not self._events:
            return np.zeros((0, 2), dtype=float)
        return np.array([(event.x, event.ct) for event in self._events], dtype=float)

    @property
    def event_count(self) -> int:
        return len(self._events)


__all__ = ["Frame", "FrameModel", "SpacetimeEvent"]

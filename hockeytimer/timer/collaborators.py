"""Contracts for the engine's two outbound collaborators.

AlertDispatcher
    Receives discrete alert events (a shift boundary, the end of the
    session).  Fire-and-forget: nothing is returned and a failing handler
    is logged here instead of reaching the engine.

LiveStatePublisher
    Mirrors the latest snapshot to an out-of-process display.  At most one
    mirrored session is active; ``end()`` may be called any number of times.

Concrete implementations override the underscore hooks only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)


class AlertEvent(Enum):
    INTERVAL_ELAPSED = "interval_elapsed"
    SESSION_ENDED = "session_ended"


@dataclass(frozen=True)
class LiveSnapshot:
    """What the live display surface gets to see."""

    remaining_seconds: int
    shifts_completed: int
    total_shifts: int
    total_duration: int
    interval_length: int

    @property
    def current_shift(self) -> int:
        """1-based shift being played, capped at ``total_shifts``."""
        if self.total_shifts <= 0:
            return 0
        return min(self.shifts_completed + 1, self.total_shifts)

    @property
    def progress(self) -> float:
        """0.0 → 1.0 through the whole session."""
        if self.total_duration <= 0:
            return 0.0
        elapsed = self.total_duration - self.remaining_seconds
        return max(0.0, min(1.0, elapsed / self.total_duration))

    def as_payload(self) -> dict[str, int]:
        return {
            "remainingSeconds": self.remaining_seconds,
            "shiftsCompleted": self.shifts_completed,
            "totalShifts": self.total_shifts,
        }


class AlertDispatcher:
    """Base alert dispatcher.  The default implementation does nothing."""

    def dispatch(self, event: AlertEvent, snapshot: LiveSnapshot) -> None:
        try:
            self._handle(event, snapshot)
        except Exception:
            log.exception("Alert %s could not be delivered", event.value)

    def _handle(self, event: AlertEvent, snapshot: LiveSnapshot) -> None:
        pass


class LiveStatePublisher:
    """Base live-state publisher.  The default implementation only tracks
    whether a mirrored session is active."""

    def __init__(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def publish(self, snapshot: LiveSnapshot) -> None:
        self._active = True
        try:
            self._publish(snapshot)
        except Exception:
            log.exception("Live snapshot could not be published")

    def end(self) -> None:
        if not self._active:
            return
        self._active = False
        try:
            self._end()
        except Exception:
            log.exception("Live display could not be ended")

    def _publish(self, snapshot: LiveSnapshot) -> None:
        pass

    def _end(self) -> None:
        pass

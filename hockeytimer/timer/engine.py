"""Shift timer state machine for Hockey Timer.

Phases
------
IDLE      Nothing on the clock — the next start begins a fresh session.
RUNNING   Counting down towards ``session_end_timestamp``.
PAUSED    Time left on the clock, not counting.

Transitions
-----------
IDLE → RUNNING      (start: fresh session, first alert fires immediately)
RUNNING → PAUSED    (pause)
PAUSED → RUNNING    (start: resume, no alert)
RUNNING → IDLE      (tick reaches the end timestamp)
Any → IDLE          (reset)

Remaining time is never decremented.  Every tick recomputes it from the
absolute end timestamp, so a tick that arrives late (or a single tick after
the app spent ten minutes suspended) lands on the right state: all the
crossed shift boundaries are folded into one transition with one alert.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .clock import SYSTEM_CLOCK
from .collaborators import (
    AlertDispatcher,
    AlertEvent,
    LiveSnapshot,
    LiveStatePublisher,
)

log = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_TOTAL_DURATION = 15 * 60
DEFAULT_INTERVAL_LENGTH = 60
TICK_INTERVAL_MS = 1000


# ── errors / value types ──────────────────────────────────────────────────


class InvalidConfig(ValueError):
    """Raised by ``start()`` for a non-positive duration or interval."""


class TimerPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class SessionConfig:
    """Durations for one run, in seconds."""

    total_duration: int = DEFAULT_TOTAL_DURATION
    interval_length: int = DEFAULT_INTERVAL_LENGTH

    @property
    def total_shifts(self) -> int:
        if self.interval_length <= 0:
            return 0
        return self.total_duration // self.interval_length

    def validate(self) -> None:
        if self.total_duration <= 0:
            raise InvalidConfig(
                f"total duration must be positive, got {self.total_duration}"
            )
        if self.interval_length <= 0:
            raise InvalidConfig(
                f"interval length must be positive, got {self.interval_length}"
            )


@dataclass(frozen=True)
class SessionState:
    remaining_seconds: int = 0
    shifts_completed: int = 0
    is_running: bool = False
    session_end_timestamp: float | None = None

    @property
    def phase(self) -> TimerPhase:
        if self.is_running:
            return TimerPhase.RUNNING
        if self.remaining_seconds > 0:
            return TimerPhase.PAUSED
        return TimerPhase.IDLE


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-driven countdown with shift tracking.

    The engine owns the session state; the UI only reads it and sends
    ``start`` / ``pause`` / ``reset``.  Alerts and the live display are
    handed off to the collaborators passed in, which never block and never
    raise back into the engine.

    All calls are expected on the GUI thread (the same thread the internal
    ``QTimer`` fires on), so there is no locking.

    Signals
    -------
    state_changed(state: SessionState)
        Emitted after every mutation.
    remaining_changed(remaining_seconds: int)
        Emitted after every tick that leaves the session running.
    """

    state_changed = pyqtSignal(object)
    remaining_changed = pyqtSignal(int)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock=None,
        alerts: AlertDispatcher | None = None,
        publisher: LiveStatePublisher | None = None,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._clock = SYSTEM_CLOCK if clock is None else clock
        self._alerts = AlertDispatcher() if alerts is None else alerts
        self._publisher = LiveStatePublisher() if publisher is None else publisher

        # ── session state ─────────────────────────────────────────────
        self._config: SessionConfig = SessionConfig()
        self._remaining: int = 0
        self._shifts: int = 0
        self._running: bool = False
        self._end_timestamp: float | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_timeout)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> SessionConfig:
        """Config of the current (or most recent) session."""
        return self._config

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def shifts_completed(self) -> int:
        return self._shifts

    @property
    def total_shifts(self) -> int:
        return self._config.total_shifts

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def phase(self) -> TimerPhase:
        return self.current_state().phase

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the session; 0.0 when idle."""
        if self._remaining <= 0:
            return 0.0
        return self.snapshot().progress

    def current_state(self) -> SessionState:
        return SessionState(
            remaining_seconds=self._remaining,
            shifts_completed=self._shifts,
            is_running=self._running,
            session_end_timestamp=self._end_timestamp,
        )

    def snapshot(self) -> LiveSnapshot:
        return self._snapshot(self._remaining, self._shifts)

    def _snapshot(self, remaining: int, shifts: int) -> LiveSnapshot:
        return LiveSnapshot(
            remaining_seconds=remaining,
            shifts_completed=shifts,
            total_shifts=self._config.total_shifts,
            total_duration=self._config.total_duration,
            interval_length=self._config.interval_length,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, config: SessionConfig, now: float | None = None) -> None:
        """Start a fresh session, or resume a paused one.

        A fresh start fires the first shift alert straight away.  A resume
        keeps the config the session was started with.
        """
        config.validate()
        if self._running:
            return
        now = self._now(now)

        if self._remaining == 0:
            self._config = config
            self._remaining = config.total_duration
            self._shifts = 0
            self._end_timestamp = now + self._remaining
            self._running = True
            log.debug(
                "Session started: %ds total, %ds shifts",
                config.total_duration, config.interval_length,
            )
            self._alerts.dispatch(AlertEvent.INTERVAL_ELAPSED, self.snapshot())
        else:
            if config != self._config:
                log.debug("Resuming with the original session config %s", self._config)
            self._end_timestamp = now + self._remaining
            self._running = True
            log.debug("Session resumed with %ds left", self._remaining)

        self._publisher.publish(self.snapshot())
        self._qt_timer.start()
        self.state_changed.emit(self.current_state())

    def pause(self, now: float | None = None) -> None:
        """Freeze the clock.  Time elapsed up to *now* still counts."""
        if not self._running:
            return
        self.tick(now)
        if not self._running:
            return  # that tick finished the session
        self._qt_timer.stop()
        self._running = False
        self._end_timestamp = None
        log.debug("Session paused with %ds left", self._remaining)
        self.state_changed.emit(self.current_state())

    def reset(self) -> None:
        """Back to the zero state.  Safe to call at any time."""
        self._qt_timer.stop()
        self._remaining = 0
        self._shifts = 0
        self._running = False
        self._end_timestamp = None
        self._publisher.end()
        self.state_changed.emit(self.current_state())

    def tick(self, now: float | None = None) -> None:
        """Recompute the session from the end timestamp.

        Safe to call at any rate: what changes the state is how much real
        time has passed, not how many times this was called.
        """
        if not self._running:
            return
        now = self._now(now)

        new_remaining = max(0, math.floor(self._end_timestamp - now))
        # A wall clock stepping backwards must not put time back on the clock.
        new_remaining = min(new_remaining, self._remaining)

        if new_remaining <= 0:
            final = self._snapshot(0, self._config.total_shifts)
            log.debug("Session finished after %d shifts", final.shifts_completed)
            self.reset()
            self._alerts.dispatch(AlertEvent.SESSION_ENDED, final)
            return

        elapsed = self._config.total_duration - new_remaining
        new_shifts = elapsed // self._config.interval_length
        if new_shifts > self._shifts:
            # One alert per call, however many boundaries were crossed.
            self._alerts.dispatch(
                AlertEvent.INTERVAL_ELAPSED,
                self._snapshot(new_remaining, new_shifts),
            )
            if new_shifts - self._shifts > 1:
                log.debug(
                    "Folded %d missed shift boundaries", new_shifts - self._shifts
                )
            self._shifts = new_shifts
        self._remaining = new_remaining

        self._publisher.publish(self.snapshot())
        self.remaining_changed.emit(self._remaining)
        self.state_changed.emit(self.current_state())

    def recover(self, now: float | None = None) -> None:
        """Catch up after the host process was suspended."""
        if self._running:
            log.debug("Recovering running session")
        self.tick(now)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _now(self, now: float | None) -> float:
        return self._clock.now() if now is None else now

    def _on_timeout(self) -> None:
        self.tick()

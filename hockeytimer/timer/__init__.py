"""Timer package."""

from .clock import SystemClock, SYSTEM_CLOCK
from .collaborators import (
    AlertDispatcher,
    AlertEvent,
    LiveSnapshot,
    LiveStatePublisher,
)
from .engine import (
    TimerEngine,
    TimerPhase,
    SessionConfig,
    SessionState,
    InvalidConfig,
    DEFAULT_TOTAL_DURATION,
    DEFAULT_INTERVAL_LENGTH,
)

__all__ = [
    "SystemClock",
    "SYSTEM_CLOCK",
    "AlertDispatcher",
    "AlertEvent",
    "LiveSnapshot",
    "LiveStatePublisher",
    "TimerEngine",
    "TimerPhase",
    "SessionConfig",
    "SessionState",
    "InvalidConfig",
    "DEFAULT_TOTAL_DURATION",
    "DEFAULT_INTERVAL_LENGTH",
]

"""Shared test helpers for Hockey Timer."""

from hockeytimer.timer.collaborators import (
    AlertDispatcher,
    AlertEvent,
    LiveStatePublisher,
)


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, start: float = 0.0):
        self.t = start

    def now(self) -> float:
        return self.t

    def advance(self, seconds: float) -> float:
        self.t += seconds
        return self.t


class RecordingAlerts(AlertDispatcher):
    def __init__(self):
        self.events: list = []

    def _handle(self, event, snapshot):
        self.events.append((event, snapshot))

    def count(self, event: AlertEvent) -> int:
        return sum(1 for e, _ in self.events if e is event)

    def clear(self):
        self.events.clear()


class RecordingPublisher(LiveStatePublisher):
    def __init__(self):
        super().__init__()
        self.published: list = []
        self.ended = 0

    def _publish(self, snapshot):
        self.published.append(snapshot)

    def _end(self):
        self.ended += 1

    @property
    def last(self):
        return self.published[-1] if self.published else None

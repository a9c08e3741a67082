"""Shared pytest fixtures for Hockey Timer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from hockeytimer.timer.engine import TimerEngine

from helpers import FakeClock, RecordingAlerts, RecordingPublisher


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def app_support_dir(tmp_path, monkeypatch):
    """Keep settings and cached sounds out of the real home directory."""
    support = tmp_path / "support"
    monkeypatch.setattr("hockeytimer.settings.APP_SUPPORT_DIR", support)
    monkeypatch.setattr("hockeytimer.settings.SETTINGS_PATH", support / "settings.json")
    monkeypatch.setattr("hockeytimer.audio.sounds.SOUNDS_DIR", support / "sounds")
    yield support


@pytest.fixture
def clock():
    return FakeClock(1_000_000.0)


@pytest.fixture
def alerts():
    return RecordingAlerts()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def engine(qapp, clock, alerts, publisher):
    """Fresh TimerEngine on a fake clock with recording collaborators."""
    return TimerEngine(parent=None, clock=clock, alerts=alerts, publisher=publisher)

"""Tests for the live snapshot payload and the tray publisher."""

from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QSystemTrayIcon

from hockeytimer.live.tray import (
    IDLE_TOOLTIP, TrayPublisher, make_tray_icon, tooltip_for,
)
from hockeytimer.timer.collaborators import LiveSnapshot, LiveStatePublisher
from hockeytimer.timer.engine import SessionConfig, TimerEngine


def _snap(remaining=540, shifts=6, total=15, duration=900, interval=60):
    return LiveSnapshot(
        remaining_seconds=remaining, shifts_completed=shifts,
        total_shifts=total, total_duration=duration, interval_length=interval,
    )


# ═══════════════════════════════════════════════════════════════════════
#  SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════


class TestLiveSnapshot:
    def test_payload_keys(self):
        assert _snap().as_payload() == {
            "remainingSeconds": 540,
            "shiftsCompleted": 6,
            "totalShifts": 15,
        }

    def test_current_shift_is_one_based(self):
        assert _snap(shifts=0).current_shift == 1
        assert _snap(shifts=6).current_shift == 7

    def test_current_shift_capped(self):
        assert _snap(remaining=0, shifts=15).current_shift == 15

    def test_progress(self):
        assert _snap(remaining=900).progress == 0.0
        assert _snap(remaining=450).progress == pytest.approx(0.5)
        assert _snap(remaining=0).progress == 1.0

    def test_snapshot_is_frozen(self):
        with pytest.raises(AttributeError):
            _snap().remaining_seconds = 1


# ═══════════════════════════════════════════════════════════════════════
#  BASE PUBLISHER
# ═══════════════════════════════════════════════════════════════════════


class TestBasePublisher:
    def test_end_is_idempotent(self):
        pub = LiveStatePublisher()
        pub.end()
        pub.publish(_snap())
        assert pub.active is True
        pub.end()
        pub.end()
        assert pub.active is False


# ═══════════════════════════════════════════════════════════════════════
#  TRAY
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTrayPublisher:
    def test_starts_idle(self):
        tray = QSystemTrayIcon()
        pub = TrayPublisher(tray)
        assert tray.toolTip() == IDLE_TOOLTIP
        assert pub.active is False
        assert pub.last_snapshot is None

    def test_publish_updates_tooltip(self):
        tray = QSystemTrayIcon()
        pub = TrayPublisher(tray)
        pub.publish(_snap())
        assert tray.toolTip() == "Hockey Timer — Shift 7 of 15 · 9:00"
        assert pub.last_snapshot == _snap()

    def test_end_restores_idle(self):
        tray = QSystemTrayIcon()
        pub = TrayPublisher(tray)
        pub.publish(_snap())
        pub.end()
        assert tray.toolTip() == IDLE_TOOLTIP
        assert pub.last_snapshot is None

    def test_end_twice_is_safe(self):
        tray = QSystemTrayIcon()
        pub = TrayPublisher(tray)
        pub.publish(_snap())
        pub.end()
        pub.end()
        assert tray.toolTip() == IDLE_TOOLTIP

    def test_end_without_session_is_safe(self):
        pub = TrayPublisher(QSystemTrayIcon())
        pub.end()
        assert pub.active is False

    @pytest.mark.parametrize("progress", [None, 0.0, 0.3, 1.0])
    def test_icon_renders(self, progress):
        assert not make_tray_icon(progress).isNull()

    def test_tooltip_format(self):
        assert tooltip_for(_snap(remaining=67, shifts=0)) == (
            "Hockey Timer — Shift 1 of 15 · 1:07"
        )

    def test_mirrors_engine_session(self, clock):
        tray = QSystemTrayIcon()
        pub = TrayPublisher(tray)
        engine = TimerEngine(clock=clock, publisher=pub)
        engine.start(SessionConfig(900, 60))
        clock.advance(130)
        engine.tick()
        assert tray.toolTip() == "Hockey Timer — Shift 3 of 15 · 12:50"
        engine.reset()
        assert tray.toolTip() == IDLE_TOOLTIP

"""Main timer display widget.

Layout (top → bottom):
    - Big M:SS clock
    - "Shifts: done/total" line
    - Round start / pause button
    - Footer: settings shortcut (``60s / 15m``) and Reset
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
)

from ..timer.engine import SessionConfig, SessionState, TimerEngine, TimerPhase
from .styles import format_clock, start_button_style


BUTTON_LABELS: dict[TimerPhase, str] = {
    TimerPhase.IDLE:    "▶",
    TimerPhase.PAUSED:  "▶",
    TimerPhase.RUNNING: "❚❚",
}


class TimerWidget(QWidget):
    """The single screen of the app."""

    settings_requested = pyqtSignal()

    def __init__(
        self,
        engine: TimerEngine,
        config_provider: Callable[[], SessionConfig],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("timerRoot")
        self._engine = engine
        self._config_provider = config_provider
        self._build_ui()
        self._connect_signals()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(40, 100, 40, 40)
        layout.setSpacing(10)

        self._clock_label = QLabel("0:00", self)
        self._clock_label.setObjectName("clockLabel")
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        self._shift_label = QLabel("Shifts: 0/0", self)
        self._shift_label.setObjectName("shiftLabel")
        self._shift_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._shift_label)

        layout.addStretch()

        btn_row = QHBoxLayout()
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._start_pause_btn = QPushButton(self)
        self._start_pause_btn.setFixedSize(180, 180)
        btn_row.addWidget(self._start_pause_btn)
        layout.addLayout(btn_row)

        layout.addStretch()

        footer = QHBoxLayout()
        self._settings_btn = QPushButton(self)
        self._settings_btn.setObjectName("footerButton")
        self._reset_btn = QPushButton("↺ Reset", self)
        self._reset_btn.setObjectName("footerButton")
        footer.addWidget(self._settings_btn)
        footer.addStretch()
        footer.addWidget(self._reset_btn)
        layout.addLayout(footer)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._settings_btn.clicked.connect(self.settings_requested.emit)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start(self._config_provider())

    def _on_state_changed(self, state: SessionState) -> None:
        self.refresh()

    # ── display ───────────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Redraw from the engine state (and settings, when idle)."""
        state = self._engine.current_state()
        phase = state.phase
        if phase == TimerPhase.IDLE:
            total_shifts = self._config_provider().total_shifts
        else:
            total_shifts = self._engine.total_shifts

        self._clock_label.setText(format_clock(state.remaining_seconds))
        self._shift_label.setText(
            f"Shifts: {state.shifts_completed}/{total_shifts}"
        )
        self._start_pause_btn.setText(BUTTON_LABELS[phase])
        self._start_pause_btn.setStyleSheet(start_button_style(phase))
        self._refresh_settings_label()

    def _refresh_settings_label(self) -> None:
        config = self._config_provider()
        self._settings_btn.setText(
            f"⚙ {config.interval_length}s / {config.total_duration // 60}m"
        )

    # ── read-only accessors (used by the app's status line and tests) ────

    @property
    def clock_text(self) -> str:
        return self._clock_label.text()

    @property
    def shift_text(self) -> str:
        return self._shift_label.text()

    @property
    def button_text(self) -> str:
        return self._start_pause_btn.text()

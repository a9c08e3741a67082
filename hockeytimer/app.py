"""Main application window for Hockey Timer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QGuiApplication, QKeySequence
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QMenu, QSystemTrayIcon,
)

from .audio.alerts import SoundAlertDispatcher
from .audio.sounds import SoundManager
from .live.tray import TrayPublisher
from .settings import Settings, load_settings
from .timer.engine import SessionConfig, SessionState, TimerEngine, TimerPhase
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

log = logging.getLogger(__name__)


class HockeyTimerApp(QMainWindow):
    """Main application window."""

    def __init__(self, *, clock=None, sound_manager: SoundManager | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Hockey Timer")
        self.setMinimumSize(420, 720)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = load_settings()

        # ── audio ─────────────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(
            parent=self,
            volume=self._settings.beep_volume,
            selected=self._settings.selected_sound,
        )
        self._alerts = SoundAlertDispatcher(
            self._sound_manager, haptic=self._bounce,
        )

        # ── live display (tray / menu bar) ────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._publisher = TrayPublisher(self._tray_icon)
        self._build_tray_menu()
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(
            parent=self,
            clock=clock,
            alerts=self._alerts,
            publisher=self._publisher,
        )
        self._timer_engine.state_changed.connect(self._on_state_changed)

        # ── UI ────────────────────────────────────────────────────────
        self._timer_widget = TimerWidget(
            self._timer_engine, self.session_config, parent=self,
        )
        self._timer_widget.settings_requested.connect(self._open_settings)
        self.setCentralWidget(self._timer_widget)
        self._apply_appearance()
        self._setup_shortcuts()

        # ── suspension recovery ───────────────────────────────────────
        app = QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state)

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def settings(self) -> Settings:
        return self._settings

    def session_config(self) -> SessionConfig:
        return self._settings.session_config()

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        """Create the right-click context menu for the tray icon."""
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(self.toggle_start_pause)

        reset_action = menu.addAction("Reset")
        reset_action.triggered.connect(lambda: self._timer_engine.reset())

        menu.addSeparator()

        show_action = menu.addAction("Show Hockey Timer")
        show_action.triggered.connect(self._show_window)

        menu.addSeparator()

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)
        self._tray_icon.activated.connect(self._on_tray_activated)

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self._timer_engine.reset()
        self._tray_icon.hide()
        QApplication.instance().quit()

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def toggle_start_pause(self) -> None:
        if self._timer_engine.is_running:
            self._timer_engine.pause()
        else:
            self._timer_engine.start(self.session_config())

    def _setup_shortcuts(self) -> None:
        toggle = QAction("Start/Pause", self)
        toggle.setShortcut(QKeySequence(Qt.Key.Key_Space))
        toggle.triggered.connect(self.toggle_start_pause)
        self.addAction(toggle)

        reset = QAction("Reset", self)
        reset.setShortcut(QKeySequence("R"))
        reset.triggered.connect(lambda: self._timer_engine.reset())
        self.addAction(reset)

    def _bounce(self) -> None:
        """Desktop stand-in for a vibration: bounce the dock icon."""
        QApplication.alert(self, 1000)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: SessionState) -> None:
        labels = {
            TimerPhase.IDLE: "Start",
            TimerPhase.PAUSED: "Resume",
            TimerPhase.RUNNING: "Pause",
        }
        self._tray_start_action.setText(labels[state.phase])

    def _on_application_state(self, app_state: Qt.ApplicationState) -> None:
        if app_state == Qt.ApplicationState.ApplicationActive:
            self._timer_engine.recover()

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        dlg = SettingsDialog(
            self._settings, self, sound_preview_callback=self._preview_sound,
        )
        dlg.exec()
        self._apply_settings()

    def _preview_sound(self, name: str, volume: float) -> None:
        self._sound_manager.set_volume(volume)
        self._sound_manager.play(name)

    def _apply_settings(self) -> None:
        self._settings.normalize()
        self._sound_manager.set_volume(self._settings.beep_volume)
        self._sound_manager.set_selected(self._settings.selected_sound)
        self._apply_appearance()
        self._timer_widget.refresh()

    def _apply_appearance(self) -> None:
        self.setStyleSheet(build_stylesheet(self._settings.background_color_key))

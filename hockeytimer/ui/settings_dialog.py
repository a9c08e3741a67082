"""Settings dialog for Hockey Timer.

A modal dialog with the timer lengths, background colour, and alert sound.
Changes are saved immediately to disk; the app re-reads them when the dialog
closes.  A running session keeps the lengths it was started with.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QComboBox, QPushButton,
    QFrame, QWidget,
)

from ..settings import (
    Settings, save_settings, SOUND_NAMES,
    TOTAL_TIME_RANGE, TOTAL_TIME_STEP, INTERVAL_RANGE, INTERVAL_STEP,
)
from .styles import BACKGROUND_COLORS


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: callable | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._settings = settings
        self._sound_preview = sound_preview_callback
        self._populating = True

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Timer section ────────────────────────────────────────────
        root.addWidget(self._section_label("Timer"))
        timer_form = QFormLayout()
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._interval_spin = QSpinBox()
        self._interval_spin.setRange(*INTERVAL_RANGE)
        self._interval_spin.setSingleStep(INTERVAL_STEP)
        self._interval_spin.setSuffix(" sec")
        self._interval_spin.setKeyboardTracking(False)
        self._interval_spin.valueChanged.connect(self._on_timer_changed)
        timer_form.addRow("Interval:", self._interval_spin)

        self._total_spin = QSpinBox()
        self._total_spin.setRange(
            TOTAL_TIME_RANGE[0] // 60, TOTAL_TIME_RANGE[1] // 60,
        )
        self._total_spin.setSingleStep(TOTAL_TIME_STEP // 60)
        self._total_spin.setSuffix(" min")
        self._total_spin.setKeyboardTracking(False)
        self._total_spin.valueChanged.connect(self._on_timer_changed)
        timer_form.addRow("Total:", self._total_spin)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Appearance section ───────────────────────────────────────
        root.addWidget(self._section_label("Appearance"))
        look_form = QFormLayout()
        self._color_combo = QComboBox()
        for key, (label, _hex) in BACKGROUND_COLORS.items():
            self._color_combo.addItem(label, key)
        self._color_combo.currentIndexChanged.connect(self._on_color_changed)
        look_form.addRow("Background:", self._color_combo)
        root.addLayout(look_form)

        root.addWidget(self._separator())

        # ── Sound section ────────────────────────────────────────────
        root.addWidget(self._section_label("Sound"))
        snd_form = QFormLayout()
        snd_form.setHorizontalSpacing(20)
        snd_form.setVerticalSpacing(10)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setSingleStep(10)
        self._vol_slider.setPageStep(10)
        self._vol_label = QLabel("100%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        self._sound_combo = QComboBox()
        for name in SOUND_NAMES:
            self._sound_combo.addItem(name, name)
        self._sound_combo.currentIndexChanged.connect(self._on_sound_changed)
        snd_form.addRow("Sound:", self._sound_combo)

        test_btn = QPushButton("🔊 Test sound")
        test_btn.clicked.connect(self._on_test_sound)
        snd_form.addRow("", test_btn)

        root.addLayout(snd_form)

        # ── done button ──────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        done_btn = QPushButton("Done")
        done_btn.clicked.connect(self.accept)
        btn_row.addWidget(done_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        self._populating = True
        s = self._settings
        self._interval_spin.setValue(s.interval)
        self._total_spin.setValue(s.total_time // 60)
        self._color_combo.setCurrentIndex(
            max(0, self._color_combo.findData(s.background_color_key))
        )
        volume = round(s.beep_volume * 100)
        self._vol_slider.setValue(volume)
        self._vol_label.setText(f"{volume}%")
        self._sound_combo.setCurrentIndex(
            max(0, self._sound_combo.findData(s.selected_sound))
        )
        self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS (save immediately)
    # ══════════════════════════════════════════════════════════════════

    # Widgets fire change signals while being built and populated; those
    # must not write back into the settings.

    def _on_timer_changed(self) -> None:
        if self._populating:
            return
        self._settings.interval = self._interval_spin.value()
        self._settings.total_time = self._total_spin.value() * 60
        self._save()
        self._populate()  # show the value after snapping to the step grid

    def _on_color_changed(self, index: int) -> None:
        if self._populating:
            return
        self._settings.background_color_key = self._color_combo.itemData(index)
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.beep_volume = value / 100.0
        self._save()

    def _on_sound_changed(self, index: int) -> None:
        if self._populating:
            return
        self._settings.selected_sound = self._sound_combo.itemData(index)
        self._save()

    def _on_test_sound(self) -> None:
        if self._sound_preview:
            self._sound_preview(self._settings.selected_sound, self._settings.beep_volume)

    def _save(self) -> None:
        save_settings(self._settings.normalize())

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings

"""Mirror of the running session in the system tray / macOS menu bar.

This is the desktop stand-in for the lock-screen live activity: the tray
icon fills up as the session goes on and the tooltip reads
``Hockey Timer — Shift 3 of 15 · 12:00``.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QSystemTrayIcon

from ..timer.collaborators import LiveSnapshot, LiveStatePublisher
from ..ui.styles import format_clock

log = logging.getLogger(__name__)

IDLE_TOOLTIP = "Hockey Timer — Ready"


def make_tray_icon(progress: float | None) -> QIcon:
    """Generate a 32×32 monochrome template icon for the menu bar.

    - ``None``: thin circle outline (nothing mirrored)
    - 0.0..1.0: outline plus a pie filled to *progress*
    """
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)  # template image: macOS tints automatically

    r = size // 2 - 4
    rect = QRectF(4, 4, r * 2, r * 2)
    p.setPen(QPen(colour, 4))
    p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(rect)

    if progress is not None and progress > 0:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        span = int(max(0.0, min(1.0, progress)) * 360 * 16)
        # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
        p.drawPie(rect, 90 * 16, -span)

    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


def tooltip_for(snapshot: LiveSnapshot) -> str:
    return (
        f"Hockey Timer — Shift {snapshot.current_shift} of "
        f"{snapshot.total_shifts} · {format_clock(snapshot.remaining_seconds)}"
    )


class TrayPublisher(LiveStatePublisher):
    """Publishes snapshots onto an existing ``QSystemTrayIcon``."""

    def __init__(self, tray_icon: QSystemTrayIcon) -> None:
        super().__init__()
        self._tray_icon = tray_icon
        self._last: LiveSnapshot | None = None
        self._show_idle()

    @property
    def last_snapshot(self) -> LiveSnapshot | None:
        return self._last

    def _publish(self, snapshot: LiveSnapshot) -> None:
        self._last = snapshot
        self._tray_icon.setToolTip(tooltip_for(snapshot))
        self._tray_icon.setIcon(make_tray_icon(snapshot.progress))

    def _end(self) -> None:
        log.debug("Ending tray mirror")
        self._last = None
        self._show_idle()

    def _show_idle(self) -> None:
        self._tray_icon.setToolTip(IDLE_TOOLTIP)
        self._tray_icon.setIcon(make_tray_icon(None))

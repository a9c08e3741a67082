"""QSS stylesheet, background colours, and phase colours for Hockey Timer."""

from __future__ import annotations

from PyQt6.QtGui import QColor

from ..timer.engine import TimerPhase

# ── background colours (key → label, hex) ────────────────────────────────

BACKGROUND_COLORS: dict[str, tuple[str, str]] = {
    "black":     ("Black",       "#000000"),
    "darkBlue":  ("Dark Blue",   "#1766E6"),
    "navy":      ("Navy",        "#1A1A33"),
    "darkGreen": ("Dark Green",  "#34C759"),
    "white":     ("White",       "#FFFFFF"),
    "ivory":     ("Ivory",       "#FFFFFA"),
    "lightGrey": ("Light Grey",  "#8E8E93"),
    "offWhite":  ("Off-White",   "#FAFAFF"),
    "cream":     ("Cream",       "#FFFAEB"),
}

DEFAULT_BACKGROUND = "white"

# ── phase colours (start/pause button + ring) ────────────────────────────

PHASE_COLORS: dict[TimerPhase, str] = {
    TimerPhase.IDLE:    "#34C759",   # green "play"
    TimerPhase.PAUSED:  "#34C759",
    TimerPhase.RUNNING: "#FF9500",   # orange "pause"
}


def format_clock(seconds: int) -> str:
    """``M:SS``, e.g. ``15:00`` or ``0:07``."""
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m}:{s:02d}"


def background_hex(key: str) -> str:
    return BACKGROUND_COLORS.get(key, BACKGROUND_COLORS[DEFAULT_BACKGROUND])[1]


def is_dark(hex_color: str) -> bool:
    """True when light text reads better on *hex_color*."""
    c = QColor(hex_color)
    luma = 0.299 * c.redF() + 0.587 * c.greenF() + 0.114 * c.blueF()
    return luma < 0.5


def text_colors(background_key: str) -> tuple[str, str]:
    """(primary, muted) text colours for the given background."""
    if is_dark(background_hex(background_key)):
        return "#FFFFFF", "rgba(255, 255, 255, 0.7)"
    return "#000000", "rgba(0, 0, 0, 0.7)"


def build_stylesheet(background_key: str) -> str:
    """Return the application stylesheet for a background colour."""
    bg = background_hex(background_key)
    text, muted = text_colors(background_key)
    return f"""
        QMainWindow, QWidget#timerRoot {{
            background-color: {bg};
        }}
        QLabel#clockLabel {{
            color: {text};
            font-family: "Menlo", "DejaVu Sans Mono", monospace;
            font-size: 100px;
            font-weight: 700;
        }}
        QLabel#shiftLabel {{
            color: {text};
            font-size: 22px;
        }}
        QPushButton#footerButton {{
            color: {muted};
            background: transparent;
            border: none;
            font-size: 13px;
        }}
        QPushButton#footerButton:hover {{
            color: {text};
        }}
    """


def start_button_style(phase: TimerPhase) -> str:
    colour = PHASE_COLORS[phase]
    return f"""
        QPushButton {{
            background-color: {colour};
            color: white;
            border: none;
            border-radius: 90px;
            font-size: 40px;
            font-weight: 700;
        }}
        QPushButton:pressed {{
            background-color: {QColor(colour).darker(120).name()};
        }}
    """

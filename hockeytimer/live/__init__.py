"""Live display publishers."""

from .tray import TrayPublisher, make_tray_icon, tooltip_for

__all__ = ["TrayPublisher", "make_tray_icon", "tooltip_for"]

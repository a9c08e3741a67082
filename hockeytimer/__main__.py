"""Allow running Hockey Timer as a module: python -m hockeytimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import HockeyTimerApp
from .logger import configure_logging


def main() -> None:
    log = configure_logging(level=logging.INFO)
    log.info("=== Hockey Timer starting ===")

    app = QApplication(sys.argv)
    app.setApplicationName("Hockey Timer")
    app.setOrganizationName("HockeyTimer")

    window = HockeyTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

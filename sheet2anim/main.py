"""Entry point for the Sheet2Anim GUI application."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from .cli import configure_logging
from .gui.main_window import MainWindow


def run() -> int:
    """Start the Qt event loop."""

    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Sheet2Anim")

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(run())

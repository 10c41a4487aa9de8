#!/usr/bin/env python
"""Playledger application entry point.

This module initializes the Qt application with qasync event loop integration,
loads the lounge data from the REST backend and launches the main window.

Usage:
    python main.py [BASE_URL]
"""

import asyncio
import logging
import sys

import qasync
from PySide6.QtWidgets import QApplication

from playledger.app import ApplicationContext
from playledger.state.persistence import SettingsStore
from playledger.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    """Run the application with qasync event loop."""
    app = QApplication(sys.argv)
    app.setApplicationName("Playledger")
    app.setOrganizationName("Playledger")

    settings_store = SettingsStore()

    # Priority 1: command line argument overrides the configured backend URL
    base_url = sys.argv[1] if len(sys.argv) > 1 else None

    context = ApplicationContext(settings_store, base_url=base_url)
    configure_logging(context.settings.logging.level)

    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    app_close_event = asyncio.Event()
    app.aboutToQuit.connect(app_close_event.set)

    with loop:
        window = MainWindow(context)
        window.show()

        try:
            # A failed first load is reported by the view; the table starts
            # empty and the user can refresh once the backend is reachable.
            outcome = loop.run_until_complete(context.initialize())
            if not outcome.ok:
                logger.warning(outcome.message)

            loop.run_until_complete(app_close_event.wait())
        except KeyboardInterrupt:
            logger.info("Shutting down...")
        finally:
            loop.run_until_complete(context.close())


if __name__ == "__main__":
    run()

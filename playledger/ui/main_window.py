"""Main application window."""

from typing import TYPE_CHECKING

import qasync
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QMainWindow, QStatusBar

from playledger.ui.views.transactions_view import TransactionsView

if TYPE_CHECKING:
    from playledger.app import ApplicationContext


class MainWindow(QMainWindow):
    """Main application window hosting the transactions view."""

    def __init__(self, context: "ApplicationContext"):
        """Initialize main window.

        Args:
            context: Application context providing dependencies
        """
        super().__init__()
        self._ctx = context
        self._state = context.state

        self.setWindowTitle(f"Playledger - {context.client.base_url}")
        self.setMinimumSize(800, 500)
        ui_state = context.settings.ui_state
        self.resize(ui_state.window_width, ui_state.window_height)

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.transactions_view = TransactionsView(self._ctx)
        self.setCentralWidget(self.transactions_view)

        self.status_bar = QStatusBar()
        self.status_bar.setObjectName("status_bar")
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Ready")

        self.refresh_shortcut = QShortcut(QKeySequence("F5"), self)

    def _connect_signals(self) -> None:
        """Connect signals to slots."""
        self.transactions_view.status_message.connect(
            lambda text: self.status_bar.showMessage(text, 5000)
        )
        self._state.is_loading.subscribe(self._on_loading_changed)
        self._state.transactions.subscribe(self._on_transactions_changed)
        self.refresh_shortcut.activated.connect(self._on_refresh)

    def _on_loading_changed(self, loading: bool) -> None:
        if loading:
            self.status_bar.showMessage("Loading...")

    def _on_transactions_changed(self, transactions: list) -> None:
        count = len(transactions)
        self.status_bar.showMessage(f"{count} transaction{'s' if count != 1 else ''}")

    @qasync.asyncSlot()
    async def _on_refresh(self) -> None:
        await self._ctx.cache.refresh()

    def closeEvent(self, event) -> None:
        """Remember the window size."""
        self._ctx.settings.ui_state.window_width = min(max(self.width(), 600), 4000)
        self._ctx.settings.ui_state.window_height = min(max(self.height(), 400), 3000)
        self._ctx.save_settings()
        super().closeEvent(event)

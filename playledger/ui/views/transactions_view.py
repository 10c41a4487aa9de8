"""Transactions view: form plus table of the cached transactions."""

from typing import TYPE_CHECKING, Callable, Optional

import qasync
from PySide6.QtCore import QModelIndex, Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from playledger.domain.models import Transaction
from playledger.services.outcome import Outcome, OutcomeKind
from playledger.ui.components.transaction_form import TransactionFormWidget
from playledger.ui.models.transaction_model import TransactionTableModel

if TYPE_CHECKING:
    from playledger.app import ApplicationContext

# Receives outcomes that need the user's attention
Notifier = Callable[[Outcome], None]


class TransactionsView(QWidget):
    """Main transactions screen.

    Shows the transaction form on the left and the transaction table on
    the right. All state lives in the ApplicationContext; this widget only
    forwards user actions to the services and renders the results.
    """

    # Short status text for the main window status bar
    status_message = Signal(str)

    def __init__(
        self,
        context: "ApplicationContext",
        parent=None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize the view.

        Args:
            context: Application context providing state and services
            parent: Parent widget
            notifier: Outcome presenter. Defaults to message boxes.
        """
        super().__init__(parent)
        self._context = context
        self._state = context.state
        self._notify = notifier or self._show_message_box

        self._setup_ui()
        self._connect_signals()

        # Delete confirmation is a UI concern; hand the dispatcher our dialog
        self._context.crud.set_confirm(self._confirm_delete)

        self._on_collections_changed()
        self._on_loading_changed(self._state.is_loading.value)

    def _setup_ui(self) -> None:
        """Set up the view UI."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        self.form_widget = TransactionFormWidget(self._state, self._context.form)
        self.form_widget.setMaximumWidth(420)
        layout.addWidget(self.form_widget)

        right = QVBoxLayout()

        header = QLabel("Transactions")
        header.setObjectName("view_header")
        right.addWidget(header)

        actions = QHBoxLayout()
        self.edit_btn = QPushButton("Edit")
        self.delete_btn = QPushButton("Delete")
        self.refresh_btn = QPushButton("Refresh")
        actions.addWidget(self.edit_btn)
        actions.addWidget(self.delete_btn)
        actions.addStretch(1)
        actions.addWidget(self.refresh_btn)
        right.addLayout(actions)

        # Page 0: loading label, page 1: table
        self.stack = QStackedWidget()
        self.loading_label = QLabel("Loading...")
        self.loading_label.setAlignment(Qt.AlignCenter)
        self.stack.addWidget(self.loading_label)

        self.model = TransactionTableModel()
        self.table = QTableView()
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.stack.addWidget(self.table)

        right.addWidget(self.stack, 1)
        layout.addLayout(right, 1)

    def _connect_signals(self) -> None:
        """Connect state and widget signals."""
        self._state.transactions.subscribe(lambda _: self._on_collections_changed())
        self._state.members.subscribe(lambda _: self._on_collections_changed())
        self._state.games.subscribe(lambda _: self._on_collections_changed())
        self._state.is_loading.subscribe(self._on_loading_changed)
        self._state.last_outcome.subscribe(self._on_outcome)

        self.form_widget.submit_requested.connect(self._on_submit)
        self.form_widget.cancel_requested.connect(self._on_cancel)
        self.edit_btn.clicked.connect(self._on_edit_clicked)
        self.delete_btn.clicked.connect(self._on_delete_clicked)
        self.refresh_btn.clicked.connect(self._on_refresh)
        self.table.doubleClicked.connect(self._on_row_double_clicked)

    # ----- rendering -----

    def _on_collections_changed(self) -> None:
        """Re-render the table from the cache."""
        self.model.set_lookups(self._state.members.value, self._state.games.value)
        self.model.set_transactions(self._state.transactions.value)

        self.table.clearSpans()
        if self.model.is_placeholder():
            self.table.setSpan(0, 0, 1, self.model.columnCount())

        has_rows = not self.model.is_placeholder()
        self.edit_btn.setEnabled(has_rows)
        self.delete_btn.setEnabled(has_rows)

    def _on_loading_changed(self, loading: bool) -> None:
        self.stack.setCurrentIndex(0 if loading else 1)
        self.refresh_btn.setEnabled(not loading)

    def _on_outcome(self, outcome: Optional[Outcome]) -> None:
        if outcome is None:
            return
        if outcome.kind in (OutcomeKind.LOADED, OutcomeKind.DELETED, OutcomeKind.CANCELLED):
            if outcome.message:
                self.status_message.emit(outcome.message)
            return
        self._notify(outcome)

    def _show_message_box(self, outcome: Outcome) -> None:
        """Default notifier: blocking message box."""
        if outcome.ok:
            QMessageBox.information(self, "Transactions", outcome.message)
        else:
            QMessageBox.critical(self, "Error", outcome.message)

    # ----- selection -----

    def selected_transaction(self) -> Optional[Transaction]:
        """Transaction in the selected row, if any."""
        rows = self.table.selectionModel().selectedRows()
        if not rows:
            return None
        return self.model.transaction_at(rows[0].row())

    def _on_row_double_clicked(self, index: QModelIndex) -> None:
        transaction = self.model.transaction_at(index.row())
        if transaction is not None:
            self._context.form.start_edit(transaction)

    def _on_edit_clicked(self) -> None:
        transaction = self.selected_transaction()
        if transaction is not None:
            self._context.form.start_edit(transaction)

    def _on_cancel(self) -> None:
        self._context.form.cancel()

    # ----- async actions -----

    @qasync.asyncSlot()
    async def _on_submit(self) -> None:
        """Submit the form (create or update)."""
        await self._context.crud.submit()

    @qasync.asyncSlot()
    async def _on_delete_clicked(self) -> None:
        """Delete the selected transaction after confirmation."""
        transaction = self.selected_transaction()
        if transaction is None:
            return
        await self._context.crud.delete(transaction.transaction_id)

    @qasync.asyncSlot()
    async def _on_refresh(self) -> None:
        await self._context.cache.refresh()

    def _confirm_delete(self, transaction_id: int) -> bool:
        """Ask the user to confirm a delete."""
        reply = QMessageBox.question(
            self,
            "Confirm Delete",
            f"Delete transaction #{transaction_id}?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        return reply == QMessageBox.Yes

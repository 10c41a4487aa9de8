"""Transaction table model for Qt Model/View."""

from typing import Any, Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from playledger.domain.models import Game, Member, Transaction
from playledger.services.form_state import format_number
from playledger.services.lookup import format_display_timestamp, game_name, member_name


class TransactionTableModel(QAbstractTableModel):
    """Table model for displaying transactions.

    Rows keep the order the server returned. An empty list is shown as a
    single "No transactions" row rather than an empty table.
    """

    # Column indices
    COL_ID = 0
    COL_MEMBER = 1
    COL_GAME = 2
    COL_PLAY_HRS = 3
    COL_COST = 4
    COL_DATE = 5

    COLUMN_NAMES = [
        "ID",
        "Member",
        "Game",
        "Play Hrs",
        "Cost",
        "Date",
    ]

    PLACEHOLDER_TEXT = "No transactions"

    def __init__(
        self,
        transactions: Optional[list[Transaction]] = None,
        members: Optional[list[Member]] = None,
        games: Optional[list[Game]] = None,
    ):
        """Initialize the model.

        Args:
            transactions: Initial list of transactions
            members: Members used to resolve member names
            games: Games used to resolve game names
        """
        super().__init__()
        self._transactions = transactions or []
        self._members = members or []
        self._games = games or []

    def is_placeholder(self) -> bool:
        """True when the model shows the "no data" row."""
        return not self._transactions

    def set_transactions(self, transactions: list[Transaction]) -> None:
        """Replace the displayed transactions."""
        self.beginResetModel()
        self._transactions = list(transactions)
        self.endResetModel()

    def set_lookups(self, members: list[Member], games: list[Game]) -> None:
        """Replace the collections used for name lookups."""
        self.beginResetModel()
        self._members = list(members)
        self._games = list(games)
        self.endResetModel()

    def transaction_at(self, row: int) -> Optional[Transaction]:
        """Get the transaction shown in `row`, if any."""
        if 0 <= row < len(self._transactions):
            return self._transactions[row]
        return None

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        """Return number of rows (at least one, for the placeholder)."""
        if parent.isValid():
            return 0
        return max(len(self._transactions), 1)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        """Return number of columns."""
        if parent.isValid():
            return 0
        return len(self.COLUMN_NAMES)

    def headerData(
        self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole
    ) -> Any:
        """Return header labels."""
        if role == Qt.DisplayRole and orientation == Qt.Horizontal:
            if 0 <= section < len(self.COLUMN_NAMES):
                return self.COLUMN_NAMES[section]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        """Placeholder row cannot be selected."""
        if self.is_placeholder():
            return Qt.ItemIsEnabled
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        """Return data for the given index and role."""
        if not index.isValid():
            return None

        if self.is_placeholder():
            return self._placeholder_data(index, role)

        transaction = self.transaction_at(index.row())
        if transaction is None:
            return None

        col = index.column()
        if role == Qt.DisplayRole:
            return self._get_display_data(transaction, col)
        elif role == Qt.TextAlignmentRole:
            return self._get_alignment(col)
        elif role == Qt.BackgroundRole:
            # Zebra striping
            return QColor(241, 241, 241) if index.row() % 2 == 0 else None
        elif role == Qt.UserRole:
            return transaction

        return None

    def _placeholder_data(self, index: QModelIndex, role: int) -> Any:
        if role == Qt.DisplayRole and index.row() == 0 and index.column() == 0:
            return self.PLACEHOLDER_TEXT
        if role == Qt.TextAlignmentRole:
            return Qt.AlignCenter
        return None

    def _get_display_data(self, transaction: Transaction, col: int) -> Any:
        """Get display data for a specific column."""
        if col == self.COL_ID:
            return str(transaction.transaction_id)
        elif col == self.COL_MEMBER:
            return member_name(transaction.member_id, self._members)
        elif col == self.COL_GAME:
            return game_name(transaction.game_id, self._games)
        elif col == self.COL_PLAY_HRS:
            return format_number(transaction.play_time_hrs)
        elif col == self.COL_COST:
            return format_number(transaction.cost)
        elif col == self.COL_DATE:
            return format_display_timestamp(transaction.transaction_date)
        return None

    def _get_alignment(self, col: int) -> Qt.AlignmentFlag:
        """Get text alignment for a column."""
        if col in (self.COL_PLAY_HRS, self.COL_COST):
            return Qt.AlignRight | Qt.AlignVCenter
        return Qt.AlignCenter

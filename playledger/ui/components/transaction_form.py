"""Transaction form widget (create and edit)."""

from PySide6.QtCore import QDate, QDateTime, QTime, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDateTimeEdit,
    QDoubleSpinBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from playledger.domain.models import Game, Member
from playledger.services.form_state import (
    FormStateMachine,
    TransactionForm,
    decode_editing_timestamp,
    encode_editing_timestamp,
    format_number,
)
from playledger.services.lookup import option_label
from playledger.state.app_state import AppState

# Shown as a blank date; the form holds "" while the input sits here
BLANK_DATETIME = QDateTime(QDate(2000, 1, 1), QTime(0, 0))


def _spin_value(text: str) -> float:
    """Value for a spin box showing form text (0 for blank or invalid)."""
    try:
        return float(text) if text.strip() else 0.0
    except ValueError:
        return 0.0


def _editing_datetime(text: str) -> QDateTime:
    """QDateTime for form text in editing format (blank if unset or invalid)."""
    try:
        value = decode_editing_timestamp(text)
    except ValueError:
        return BLANK_DATETIME
    return QDateTime(
        QDate(value.year, value.month, value.day), QTime(value.hour, value.minute)
    )


class TransactionFormWidget(QWidget):
    """Form bound to the shared transaction form state.

    Every edit and selection is written straight into the
    FormStateMachine; the widget repaints itself from AppState.form so a
    reset or an edit-select from elsewhere shows up immediately.
    """

    submit_requested = Signal()
    cancel_requested = Signal()

    def __init__(self, state: AppState, form_machine: FormStateMachine, parent=None):
        """Initialize the form.

        Args:
            state: Application state (form, members and games)
            form_machine: Form state machine receiving field changes
            parent: Parent widget
        """
        super().__init__(parent)
        self._state = state
        self._form = form_machine
        self._syncing = False

        self._setup_ui()
        self._connect_signals()

        self._populate_members(state.members.value)
        self._populate_games(state.games.value)
        self._sync_from_form(state.form.value)

    def _setup_ui(self) -> None:
        """Set up the form UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)

        self.header = QLabel("New Transaction")
        self.header.setObjectName("form_header")
        layout.addWidget(self.header)

        card = QFrame()
        card.setObjectName("form_card")
        fields = QFormLayout(card)

        self.member_input = QComboBox()
        fields.addRow("Member:", self.member_input)

        self.game_input = QComboBox()
        fields.addRow("Game:", self.game_input)

        self.hours_input = QDoubleSpinBox()
        self.hours_input.setRange(0.0, 9999.0)
        self.hours_input.setDecimals(2)
        self.hours_input.setSingleStep(0.1)
        fields.addRow("Play Hours:", self.hours_input)

        self.cost_input = QDoubleSpinBox()
        self.cost_input.setRange(0.0, 999999.99)
        self.cost_input.setDecimals(2)
        self.cost_input.setSingleStep(0.01)
        fields.addRow("Cost:", self.cost_input)

        self.date_input = QDateTimeEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("yyyy-MM-dd'T'HH:mm")
        self.date_input.setMinimumDateTime(BLANK_DATETIME)
        self.date_input.setSpecialValueText(" ")
        self.date_input.setDateTime(BLANK_DATETIME)
        fields.addRow("Date & Time:", self.date_input)

        layout.addWidget(card)

        buttons = QHBoxLayout()
        self.submit_btn = QPushButton("Add Transaction")
        self.submit_btn.setObjectName("submit_button")
        buttons.addWidget(self.submit_btn)

        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setObjectName("cancel_button")
        buttons.addWidget(self.cancel_btn)
        buttons.addStretch(1)
        layout.addLayout(buttons)
        layout.addStretch(1)

    def _connect_signals(self) -> None:
        """Wire widgets to the form state and back."""
        self.member_input.currentIndexChanged.connect(
            lambda _: self._on_field_edited("member_id", self.member_input.currentData() or "")
        )
        self.game_input.currentIndexChanged.connect(
            lambda _: self._on_field_edited("game_id", self.game_input.currentData() or "")
        )
        self.hours_input.valueChanged.connect(
            lambda value: self._on_field_edited("play_time_hrs", format_number(value))
        )
        self.cost_input.valueChanged.connect(
            lambda value: self._on_field_edited("cost", format_number(value))
        )
        self.date_input.dateTimeChanged.connect(self._on_date_edited)

        self.submit_btn.clicked.connect(self.submit_requested.emit)
        self.cancel_btn.clicked.connect(self.cancel_requested.emit)

        self._state.form.subscribe(self._sync_from_form)
        self._state.members.subscribe(self._populate_members)
        self._state.games.subscribe(self._populate_games)

    def _on_field_edited(self, name: str, value: str) -> None:
        if self._syncing:
            return
        self._form.set_field(name, value)

    def _on_date_edited(self, value: QDateTime) -> None:
        if value == BLANK_DATETIME:
            self._on_field_edited("transaction_date", "")
        else:
            self._on_field_edited("transaction_date", encode_editing_timestamp(value.toPython()))

    def _populate_members(self, members: list[Member]) -> None:
        self._populate_combo(self.member_input, "Select member", members)
        self._select_data(self.member_input, self._state.form.value.member_id)

    def _populate_games(self, games: list[Game]) -> None:
        self._populate_combo(self.game_input, "Select game", games)
        self._select_data(self.game_input, self._state.form.value.game_id)

    def _populate_combo(self, combo: QComboBox, prompt: str, entries) -> None:
        self._syncing = True
        try:
            combo.clear()
            combo.addItem(prompt, "")
            for entry in entries:
                combo.addItem(option_label(entry), str(entry.id))
        finally:
            self._syncing = False

    def _select_data(self, combo: QComboBox, value: str) -> None:
        """Select the combo entry whose data is `value` (prompt if none)."""
        self._syncing = True
        try:
            index = combo.findData(value) if value else 0
            combo.setCurrentIndex(max(index, 0))
        finally:
            self._syncing = False

    def _sync_from_form(self, form: TransactionForm) -> None:
        """Repaint every input from a form snapshot."""
        self._select_data(self.member_input, form.member_id)
        self._select_data(self.game_input, form.game_id)

        self._syncing = True
        try:
            for spin, text in (
                (self.hours_input, form.play_time_hrs),
                (self.cost_input, form.cost),
            ):
                value = _spin_value(text)
                if spin.value() != value:
                    spin.setValue(value)

            shown = _editing_datetime(form.transaction_date)
            if self.date_input.dateTime() != shown:
                self.date_input.setDateTime(shown)
        finally:
            self._syncing = False

        self._update_mode(form)

    def _update_mode(self, form: TransactionForm) -> None:
        """Reflect create vs edit mode in the header and buttons."""
        if form.is_editing:
            self.header.setText(f"Edit Transaction #{form.transaction_id}")
            self.submit_btn.setText("Update Transaction")
        else:
            self.header.setText("New Transaction")
            self.submit_btn.setText("Add Transaction")
        self.cancel_btn.setVisible(form.is_editing)

    def current_form(self) -> TransactionForm:
        """Form snapshot currently shown."""
        return self._state.form.value

"""Editable transaction form shared by create and edit.

There is exactly one form. Its mode is never stored: a form with a
transaction id is editing that transaction, a form without one creates a
new transaction. All editable values are kept as text and only become
numbers when the form is submitted (see crud.build_payload).
"""

import logging
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from playledger.domain.models import Transaction

if TYPE_CHECKING:
    from playledger.state.app_state import AppState

logger = logging.getLogger(__name__)

# Format used by the date/time input: minute precision, no timezone
EDITING_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"


def encode_editing_timestamp(value: Optional[datetime]) -> str:
    """Encode a canonical timestamp for the editing surface.

    Aware values are converted to local time first, then the timezone is
    dropped. Seconds and below are truncated.

    Args:
        value: Timestamp from the server, or None

    Returns:
        Text like "2024-01-01T10:00", or "" for None
    """
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.replace(second=0, microsecond=0).isoformat(timespec="minutes")


def decode_editing_timestamp(text: str) -> datetime:
    """Parse text produced by encode_editing_timestamp.

    Raises:
        ValueError: If the text is not in YYYY-MM-DDTHH:MM form
    """
    return datetime.strptime(text, EDITING_TIMESTAMP_FORMAT)


def format_number(value: Union[int, float]) -> str:
    """Stringify a number for editing ("10" rather than "10.0")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class TransactionForm:
    """Snapshot of the transaction form.

    Attributes:
        transaction_id: Id of the transaction being edited; None in create mode
        member_id: Selected member id as text ("" = nothing selected)
        game_id: Selected game id as text ("" = nothing selected)
        play_time_hrs: Play duration in hours, as typed
        cost: Cost, as typed
        transaction_date: Date and time in YYYY-MM-DDTHH:MM form
    """

    transaction_id: Optional[int] = None
    member_id: str = ""
    game_id: str = ""
    play_time_hrs: str = ""
    cost: str = ""
    transaction_date: str = ""

    @property
    def is_editing(self) -> bool:
        return self.transaction_id is not None

    @classmethod
    def empty(cls) -> "TransactionForm":
        """Form in create mode with every field blank."""
        return cls()

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionForm":
        """Form in edit mode seeded from an existing transaction."""
        return cls(
            transaction_id=transaction.transaction_id,
            member_id=str(transaction.member_id),
            game_id=str(transaction.game_id),
            play_time_hrs=format_number(transaction.play_time_hrs),
            cost=format_number(transaction.cost),
            transaction_date=encode_editing_timestamp(transaction.transaction_date),
        )

    def with_field(self, name: str, value) -> "TransactionForm":
        """Return a copy with exactly one field changed.

        Raises:
            KeyError: If `name` is not a form field
        """
        if name not in FIELD_NAMES:
            raise KeyError(f"Unknown form field: {name}")
        return replace(self, **{name: value})


FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in fields(TransactionForm))


class FormStateMachine:
    """Owns the single transaction form held in AppState.

    Example:
        >>> machine = FormStateMachine(state)
        >>> machine.start_edit(transaction)
        >>> machine.is_editing()
        True
        >>> machine.start_create()
        >>> machine.is_editing()
        False
    """

    def __init__(self, state: "AppState"):
        self._state = state

    @property
    def form(self) -> TransactionForm:
        """Current form snapshot."""
        return self._state.form.value

    def is_editing(self) -> bool:
        return self.form.is_editing

    def start_create(self) -> None:
        """Reset to an empty form in create mode."""
        self._state.form.set(TransactionForm.empty())

    def start_edit(self, transaction: Transaction) -> None:
        """Load `transaction` into the form for editing."""
        logger.debug(f"Editing transaction {transaction.transaction_id}")
        self._state.form.set(TransactionForm.from_transaction(transaction))

    def set_field(self, name: str, value) -> None:
        """Update one field, leaving the others untouched."""
        self._state.form.set(self.form.with_field(name, value))

    def cancel(self) -> None:
        """Abandon the current edit."""
        self.start_create()

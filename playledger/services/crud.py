"""Create, update and delete dispatch for transactions.

Writes are never applied locally. After every successful write the three
collections are reloaded from the server, so the cache only ever holds
server truth. On failure nothing local changes: the form keeps what the
user typed and the cache keeps what it had.
"""

import inspect
import logging
import math
from typing import Awaitable, Callable, Optional, Union

from playledger.data.errors import (
    ErrorKind,
    MissingFieldsError,
    PayloadError,
)
from playledger.data.repository import TransactionRepository
from playledger.domain.models import TransactionPayload
from playledger.services.collection_cache import RemoteCollectionCache
from playledger.services.form_state import FormStateMachine, TransactionForm
from playledger.services.outcome import Outcome, OutcomeKind

logger = logging.getLogger(__name__)

# Yes/no gate shown before a delete; may be sync or async
ConfirmDelete = Callable[[int], Union[bool, Awaitable[bool]]]

# Human-readable names for the required fields, in form order
REQUIRED_FIELDS = {
    "member_id": "member",
    "game_id": "game",
    "transaction_date": "date",
}


def _coerce_number(field: str, text: str) -> float:
    """Convert form text to a finite number. Blank text counts as zero."""
    stripped = text.strip()
    if not stripped:
        return 0.0
    try:
        number = float(stripped)
    except ValueError:
        raise PayloadError(field, text) from None
    if not math.isfinite(number):
        raise PayloadError(field, text)
    return number


def _coerce_reference(field: str, text: str) -> int:
    """Convert a selected id to int ("7" and "7.0" both give 7)."""
    number = _coerce_number(field, text)
    if not number.is_integer():
        raise PayloadError(field, text)
    return int(number)


def missing_fields(form: TransactionForm) -> list[str]:
    """Names of required fields that are blank in `form`."""
    return [
        label
        for name, label in REQUIRED_FIELDS.items()
        if not str(getattr(form, name)).strip()
    ]


def build_payload(form: TransactionForm) -> TransactionPayload:
    """Coerce a submitted form into a request payload.

    References become ints, duration and cost become floats, and the
    timestamp is passed through exactly as typed.

    Args:
        form: Form snapshot to submit

    Returns:
        Payload ready for the write endpoints

    Raises:
        MissingFieldsError: If member, game or date is blank
        PayloadError: If a numeric field does not hold a number

    Example:
        >>> build_payload(TransactionForm(member_id="2", game_id="7",
        ...     play_time_hrs="1.5", cost="12.50",
        ...     transaction_date="2024-01-01T10:00")).cost
        12.5
    """
    missing = missing_fields(form)
    if missing:
        raise MissingFieldsError(missing)

    return TransactionPayload(
        member_id=_coerce_reference("memberId", form.member_id),
        game_id=_coerce_reference("gameId", form.game_id),
        play_time_hrs=_coerce_number("playTimeHrs", form.play_time_hrs),
        cost=_coerce_number("cost", form.cost),
        transaction_date=form.transaction_date,
    )


class CrudDispatcher:
    """Routes form submissions and deletes to the backend.

    Repeated submits are not de-duplicated; two quick submits of the same
    create form send two create requests.

    Example:
        >>> crud = CrudDispatcher(trans_repo, cache, form_machine, confirm=ask_user)
        >>> outcome = await crud.submit()
        >>> outcome.kind
        <OutcomeKind.CREATED: 'created'>
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        cache: RemoteCollectionCache,
        form_machine: FormStateMachine,
        confirm: Optional[ConfirmDelete] = None,
    ):
        """Initialize dispatcher.

        Args:
            transaction_repo: Repository receiving the writes
            cache: Cache refreshed after each successful write
            form_machine: Form reset after a successful save
            confirm: Default delete confirmation gate
        """
        self._transaction_repo = transaction_repo
        self._cache = cache
        self._form = form_machine
        self._confirm = confirm

    def set_confirm(self, confirm: Optional[ConfirmDelete]) -> None:
        """Install the default delete confirmation gate."""
        self._confirm = confirm

    async def submit(self, form: Optional[TransactionForm] = None) -> Outcome:
        """Create or update a transaction from a form.

        Args:
            form: Form to submit. Defaults to the current form.

        Returns:
            CREATED or UPDATED outcome (with the follow-up refresh attached),
            or a FAILED outcome with ErrorKind.SAVE
        """
        form = form if form is not None else self._form.form

        try:
            payload = build_payload(form)
            if form.is_editing:
                logger.info(f"Updating transaction {form.transaction_id}")
                await self._transaction_repo.update(form.transaction_id, payload)
                kind = OutcomeKind.UPDATED
                message = "Transaction updated successfully!"
            else:
                logger.info("Creating transaction")
                await self._transaction_repo.create(payload)
                kind = OutcomeKind.CREATED
                message = "Transaction added successfully!"
        except Exception as e:
            logger.error(f"Save failed: {e}")
            outcome = Outcome.failure(ErrorKind.SAVE, e)
            self._cache.publish(outcome)
            return outcome

        self._form.start_create()
        refreshed = await self._cache.refresh()
        outcome = Outcome.success(kind, message, follow_up=refreshed)
        self._cache.publish(outcome)
        return outcome

    async def delete(
        self, transaction_id: int, confirm: Optional[ConfirmDelete] = None
    ) -> Outcome:
        """Delete a transaction after explicit confirmation.

        The form is left alone, even if it is editing the deleted record.

        Args:
            transaction_id: Id of the transaction to delete
            confirm: Gate for this call. Defaults to the dispatcher's gate;
                     with no gate at all, the delete is refused.

        Returns:
            DELETED, CANCELLED, or FAILED (ErrorKind.DELETE)
        """
        gate = confirm or self._confirm
        if gate is None:
            logger.warning(f"Delete of {transaction_id} refused: no confirmation gate")
            return Outcome.success(OutcomeKind.CANCELLED)

        answer = gate(transaction_id)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            logger.info(f"Delete of transaction {transaction_id} cancelled")
            return Outcome.success(OutcomeKind.CANCELLED)

        try:
            logger.info(f"Deleting transaction {transaction_id}")
            await self._transaction_repo.delete(transaction_id)
        except Exception as e:
            logger.error(f"Delete failed: {e}")
            outcome = Outcome.failure(ErrorKind.DELETE, e)
            self._cache.publish(outcome)
            return outcome

        refreshed = await self._cache.refresh()
        outcome = Outcome.success(
            OutcomeKind.DELETED, "Transaction deleted.", follow_up=refreshed
        )
        self._cache.publish(outcome)
        return outcome

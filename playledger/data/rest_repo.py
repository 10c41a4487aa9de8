"""REST repository implementations over the ApiClient transport."""

import logging
from typing import Any, Optional

from playledger.data.api_client import ApiClient
from playledger.data.envelopes import (
    GAME_SHAPES,
    MEMBER_SHAPES,
    TRANSACTION_SHAPES,
    unwrap,
)
from playledger.data.repository import (
    GameRepository,
    MemberRepository,
    TransactionRepository,
)
from playledger.domain.models import Game, Member, Transaction, TransactionPayload

logger = logging.getLogger(__name__)


def _echoed_transaction(body: Any) -> Optional[Transaction]:
    """Decode the record a write endpoint echoed back, if any.

    Accepts either the bare record or a `{data: record}` envelope. The
    write has already succeeded at this point, so an unrecognised echo is
    only logged; the list reload that follows is the source of truth.
    """
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        body = body["data"]
    if not isinstance(body, dict) or "transactionId" not in body:
        return None
    try:
        return Transaction.from_wire(body)
    except ValueError as e:
        logger.warning(f"Ignoring malformed echoed transaction: {e}")
        return None


class RestTransactionRepository(TransactionRepository):
    """Transaction repository backed by `/transactions`."""

    PATH = "/transactions"

    def __init__(self, client: ApiClient):
        """Initialize repository.

        Args:
            client: Shared HTTP transport
        """
        self._client = client

    async def get_all(self) -> list[Transaction]:
        body = await self._client.get(self.PATH)
        return [Transaction.from_wire(record) for record in unwrap(body, TRANSACTION_SHAPES)]

    async def create(self, payload: TransactionPayload) -> Optional[Transaction]:
        body = await self._client.post(self.PATH, payload.to_wire())
        return _echoed_transaction(body)

    async def update(
        self, transaction_id: int, payload: TransactionPayload
    ) -> Optional[Transaction]:
        body = await self._client.put(f"{self.PATH}/{transaction_id}", payload.to_wire())
        return _echoed_transaction(body)

    async def delete(self, transaction_id: int) -> None:
        await self._client.delete(f"{self.PATH}/{transaction_id}")


class RestMemberRepository(MemberRepository):
    """Member repository backed by `/members`."""

    PATH = "/members"

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_all(self) -> list[Member]:
        body = await self._client.get(self.PATH)
        return [Member.from_wire(record) for record in unwrap(body, MEMBER_SHAPES)]


class RestGameRepository(GameRepository):
    """Game repository backed by `/games`."""

    PATH = "/games"

    def __init__(self, client: ApiClient):
        self._client = client

    async def get_all(self) -> list[Game]:
        body = await self._client.get(self.PATH)
        return [Game.from_wire(record) for record in unwrap(body, GAME_SHAPES)]

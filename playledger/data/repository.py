"""Abstract repository interfaces for data access.

The repository pattern keeps the controller services independent of how
records reach the client. The only production backend is the REST API
(see rest_repo), but tests and alternative transports plug in here.
"""

from abc import ABC, abstractmethod
from typing import Optional

from playledger.domain.models import Game, Member, Transaction, TransactionPayload


class TransactionRepository(ABC):
    """Abstract interface for transaction storage."""

    @abstractmethod
    async def get_all(self) -> list[Transaction]:
        """Get all transactions.

        Returns:
            Transactions in the order the backend returned them
        """
        ...

    @abstractmethod
    async def create(self, payload: TransactionPayload) -> Optional[Transaction]:
        """Create a transaction.

        Args:
            payload: Coerced request body

        Returns:
            The created record if the backend echoed one, else None
        """
        ...

    @abstractmethod
    async def update(
        self, transaction_id: int, payload: TransactionPayload
    ) -> Optional[Transaction]:
        """Replace the transaction addressed by `transaction_id`.

        Args:
            transaction_id: Identifier of the record to update
            payload: Coerced request body

        Returns:
            The updated record if the backend echoed one, else None
        """
        ...

    @abstractmethod
    async def delete(self, transaction_id: int) -> None:
        """Delete a transaction.

        Args:
            transaction_id: Identifier of the record to delete
        """
        ...


class MemberRepository(ABC):
    """Abstract interface for member lookups (read-only)."""

    @abstractmethod
    async def get_all(self) -> list[Member]:
        """Get all members."""
        ...


class GameRepository(ABC):
    """Abstract interface for game lookups (read-only)."""

    @abstractmethod
    async def get_all(self) -> list[Game]:
        """Get all games."""
        ...

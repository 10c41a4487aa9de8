"""Cache of the three remote collections.

Transactions, members and games are always reloaded together and replaced
wholesale. A refresh either commits all three collections or none of them.
"""

import asyncio
import logging

from playledger.data.errors import ErrorKind
from playledger.data.repository import (
    GameRepository,
    MemberRepository,
    TransactionRepository,
)
from playledger.domain.models import Game, Member, Transaction
from playledger.services.outcome import Outcome, OutcomeKind
from playledger.state.app_state import AppState

logger = logging.getLogger(__name__)


class RemoteCollectionCache:
    """Loads transactions, members and games into AppState.

    Example:
        >>> cache = RemoteCollectionCache(trans_repo, member_repo, game_repo, state)
        >>> outcome = await cache.refresh()
        >>> len(cache.transactions)
        3
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        member_repo: MemberRepository,
        game_repo: GameRepository,
        state: AppState,
    ):
        """Initialize the cache.

        Args:
            transaction_repo: Source of transactions
            member_repo: Source of members
            game_repo: Source of games
            state: Application state receiving the collections
        """
        self._transaction_repo = transaction_repo
        self._member_repo = member_repo
        self._game_repo = game_repo
        self._state = state

    @property
    def transactions(self) -> list[Transaction]:
        return self._state.transactions.value

    @property
    def members(self) -> list[Member]:
        return self._state.members.value

    @property
    def games(self) -> list[Game]:
        return self._state.games.value

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading.value

    def publish(self, outcome: Outcome) -> None:
        """Publish an outcome on the shared state for the UI."""
        self._state.publish(outcome)

    async def refresh(self) -> Outcome:
        """Reload all three collections from the backend.

        The three reads run concurrently. If any of them fails, the
        previously cached collections are left exactly as they were.
        The loading flag is cleared before returning in every case.

        Returns:
            LOADED outcome on success, FAILED (ErrorKind.LOAD) otherwise
        """
        self._state.set_loading(True)
        logger.info("Refreshing transactions, members and games")
        try:
            # Wait for all three reads to settle before deciding anything
            results = await asyncio.gather(
                self._transaction_repo.get_all(),
                self._member_repo.get_all(),
                self._game_repo.get_all(),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            transactions, members, games = results
        except Exception as e:
            logger.error(f"Refresh failed, keeping previous cache: {e}")
            outcome = Outcome.failure(ErrorKind.LOAD, e)
        else:
            self._state.transactions.set(list(transactions))
            self._state.members.set(list(members))
            self._state.games.set(list(games))
            logger.info(
                f"Loaded {len(transactions)} transactions, "
                f"{len(members)} members, {len(games)} games"
            )
            outcome = Outcome.success(OutcomeKind.LOADED)
        finally:
            self._state.set_loading(False)

        self._state.publish(outcome)
        return outcome

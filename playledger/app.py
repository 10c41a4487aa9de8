"""Application context and dependency injection.

The ApplicationContext wires together all application components
and provides them to the UI layer.
"""

import logging
from typing import Optional

import httpx

from playledger.data.api_client import ApiClient
from playledger.data.factory import create_repositories
from playledger.data.repository import (
    GameRepository,
    MemberRepository,
    TransactionRepository,
)
from playledger.domain.settings import AppSettings
from playledger.services.collection_cache import RemoteCollectionCache
from playledger.services.crud import CrudDispatcher
from playledger.services.form_state import FormStateMachine
from playledger.services.outcome import Outcome
from playledger.state.app_state import AppState
from playledger.state.persistence import SettingsStore

logger = logging.getLogger(__name__)


class ApplicationContext:
    """Application context providing dependency injection.

    The context owns the only process-wide state (AppState) and the
    services operating on it. Nothing is kept in module globals.

    Example:
        >>> ctx = ApplicationContext()
        >>> await ctx.initialize()
        >>> ctx.cache.transactions
        [Transaction(transaction_id=1, ...)]
        >>> await ctx.close()
    """

    def __init__(
        self,
        settings_store: Optional[SettingsStore] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize application context.

        Args:
            settings_store: Settings location. Defaults to ~/.playledger_settings.json
            base_url: Backend URL overriding the configured one for this run
            transport: Optional httpx transport (used by tests)
        """
        self.settings_store = settings_store or SettingsStore()
        self.settings: AppSettings = self.settings_store.load()
        # Command-line override applies to this run only and is never saved
        self.base_url = base_url or self.settings.api.base_url

        # State
        self.state = AppState()

        # Transport and repositories
        self.client = ApiClient(
            self.base_url,
            timeout=self.settings.api.timeout_seconds,
            transport=transport,
        )
        self.transaction_repo: TransactionRepository
        self.member_repo: MemberRepository
        self.game_repo: GameRepository
        (
            self.transaction_repo,
            self.member_repo,
            self.game_repo,
        ) = create_repositories(self.client)

        # Services
        self.cache = RemoteCollectionCache(
            self.transaction_repo, self.member_repo, self.game_repo, self.state
        )
        self.form = FormStateMachine(self.state)
        self.crud = CrudDispatcher(self.transaction_repo, self.cache, self.form)

    async def initialize(self) -> Outcome:
        """Load the initial collections.

        Returns:
            Outcome of the first refresh
        """
        logger.info(f"Connecting to {self.client.base_url}")
        return await self.cache.refresh()

    async def close(self) -> None:
        """Close resources (HTTP connection pool)."""
        await self.client.close()

    def save_settings(self) -> None:
        """Save current settings to disk."""
        self.settings_store.save(self.settings)

"""Factory for creating repository instances."""

from typing import Tuple

from playledger.data.api_client import ApiClient
from playledger.data.repository import (
    GameRepository,
    MemberRepository,
    TransactionRepository,
)
from playledger.data.rest_repo import (
    RestGameRepository,
    RestMemberRepository,
    RestTransactionRepository,
)


def create_repositories(
    client: ApiClient,
) -> Tuple[TransactionRepository, MemberRepository, GameRepository]:
    """Create the repositories for a backend.

    Args:
        client: HTTP transport shared by all repositories

    Returns:
        Tuple of (TransactionRepository, MemberRepository, GameRepository)

    Example:
        >>> client = ApiClient("http://localhost:8080/api")
        >>> trans_repo, member_repo, game_repo = create_repositories(client)
    """
    return (
        RestTransactionRepository(client),
        RestMemberRepository(client),
        RestGameRepository(client),
    )

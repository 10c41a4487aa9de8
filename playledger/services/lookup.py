"""Display-name lookups for foreign keys.

Transactions only carry member and game ids. These helpers turn an id into
the label shown in tables and selection lists, falling back to the id itself
when the referenced entity is not (or not yet) in the cache.
"""

from datetime import datetime
from typing import Iterable, Optional, Protocol

from playledger.domain.models import Game, Member


class NamedEntity(Protocol):
    """Anything with an id and a display name (Member, Game)."""

    @property
    def id(self) -> int: ...

    @property
    def display_name(self) -> str: ...


def resolve_display_name(ref: object, entries: Iterable[NamedEntity]) -> str:
    """Get the display name of the first entry whose id matches `ref`.

    Args:
        ref: Foreign key value
        entries: Cached collection to search

    Returns:
        The entry's display name, or `str(ref)` if nothing matches or the
        matching entry has no name

    Example:
        >>> resolve_display_name(2, [Member(member_id=2, name="Ana")])
        'Ana'
        >>> resolve_display_name(9, [Member(member_id=2, name="Ana")])
        '9'
    """
    for entry in entries:
        if entry.id == ref:
            return entry.display_name or str(ref)
    return str(ref)


def member_name(member_id: object, members: Iterable[Member]) -> str:
    """Display name for a member reference."""
    return resolve_display_name(member_id, members)


def game_name(game_id: object, games: Iterable[Game]) -> str:
    """Display name for a game reference."""
    return resolve_display_name(game_id, games)


def option_label(entity: NamedEntity) -> str:
    """Label for a selection list entry, e.g. "Ana (ID:2)"."""
    return f"{entity.display_name or entity.id} (ID:{entity.id})"


def format_display_timestamp(value: Optional[datetime]) -> str:
    """Format a transaction date for table display in local time."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S")

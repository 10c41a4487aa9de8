"""Domain models for the Playledger game-lounge client.

All models are immutable (frozen dataclasses). Cached collections are only ever
replaced wholesale after a reload from the server, never patched in place.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)


def _require(data: dict[str, Any], key: str) -> Any:
    """Get a required key from a wire record.

    Raises:
        ValueError: If the key is missing or null
    """
    value = data.get(key)
    if value is None:
        raise ValueError(f"Record is missing required field '{key}': {data!r}")
    return value


def _as_int(value: Any, key: str) -> int:
    """Convert a wire identifier to int (accepts "7" and 7.0)."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field '{key}' is not numeric: {value!r}") from None
    if not number.is_integer():
        raise ValueError(f"Field '{key}' is not an integer: {value!r}")
    return int(number)


def _as_float(value: Any, key: str) -> float:
    """Convert a wire number to float, treating null as zero."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field '{key}' is not numeric: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Field '{key}' is not finite: {value!r}")
    return number


def parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    """Parse a canonical ISO 8601 timestamp from the server.

    Args:
        raw: Timestamp text, e.g. "2024-01-01T10:00:00.000Z"

    Returns:
        Parsed datetime (aware if the text carries an offset), or None
        if the value is empty or unparseable
    """
    if not raw:
        return None
    try:
        return isoparse(str(raw))
    except (ValueError, OverflowError):
        logger.warning(f"Unparseable transaction date: {raw!r}")
        return None


@dataclass(frozen=True, slots=True)
class Member:
    """Lounge member (read-only from the client's point of view)."""

    member_id: int
    name: str

    @property
    def id(self) -> int:
        return self.member_id

    @property
    def display_name(self) -> str:
        return self.name

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "Member":
        """Build a member from a `{memberId, name}` record."""
        return cls(
            member_id=_as_int(_require(data, "memberId"), "memberId"),
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True, slots=True)
class Game:
    """Game available in the lounge (read-only from the client's point of view)."""

    game_id: int
    game_name: str

    @property
    def id(self) -> int:
        return self.game_id

    @property
    def display_name(self) -> str:
        return self.game_name

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "Game":
        """Build a game from a `{gameId, gameName}` record."""
        return cls(
            game_id=_as_int(_require(data, "gameId"), "gameId"),
            game_name=str(data.get("gameName") or ""),
        )


@dataclass(frozen=True, slots=True)
class Transaction:
    """Immutable play transaction as returned by the server.

    A transaction records that a member played a game for some hours at
    some cost. Member and game references are foreign keys; the server
    owns referential integrity.
    """

    transaction_id: int
    member_id: int
    game_id: int
    play_time_hrs: float
    cost: float
    transaction_date: Optional[datetime] = None
    raw_date: str = ""  # Canonical text as received from the server

    @property
    def id(self) -> int:
        return self.transaction_id

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "Transaction":
        """Build a transaction from a server record.

        Args:
            data: Record with keys transactionId, memberId, gameId,
                  playTimeHrs, cost, transactionDate

        Returns:
            New Transaction instance

        Raises:
            ValueError: If a required field is missing or not numeric
        """
        raw_date = data.get("transactionDate") or ""
        return cls(
            transaction_id=_as_int(_require(data, "transactionId"), "transactionId"),
            member_id=_as_int(_require(data, "memberId"), "memberId"),
            game_id=_as_int(_require(data, "gameId"), "gameId"),
            play_time_hrs=_as_float(data.get("playTimeHrs"), "playTimeHrs"),
            cost=_as_float(data.get("cost"), "cost"),
            transaction_date=parse_timestamp(raw_date),
            raw_date=str(raw_date),
        )


@dataclass(frozen=True, slots=True)
class TransactionPayload:
    """Body of a create or update request.

    Numeric fields are real numbers here; the text-to-number coercion
    happens once, when the form is submitted.
    """

    member_id: int
    game_id: int
    play_time_hrs: float
    cost: float
    transaction_date: str

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the write endpoints."""
        return {
            "memberId": self.member_id,
            "gameId": self.game_id,
            "playTimeHrs": self.play_time_hrs,
            "cost": self.cost,
            "transactionDate": self.transaction_date,
        }

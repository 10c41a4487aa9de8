"""Structured results of controller operations.

The services never pop up dialogs themselves. Each operation returns an
Outcome and the presentation layer decides how to show it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playledger.data.errors import ErrorKind, error_detail


class OutcomeKind(Enum):
    """What a controller operation ended up doing."""

    LOADED = "loaded"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    CANCELLED = "cancelled"  # User declined a confirmation
    FAILED = "failed"


# Prefixes for user-facing failure messages
FAILURE_PREFIXES = {
    ErrorKind.LOAD: "Error loading transactions",
    ErrorKind.SAVE: "Save failed",
    ErrorKind.DELETE: "Delete failed",
}


@dataclass(frozen=True)
class Outcome:
    """Result of a refresh, submit or delete."""

    kind: OutcomeKind
    message: str = ""
    error_kind: Optional[ErrorKind] = None
    error: Optional[BaseException] = None
    follow_up: Optional["Outcome"] = None  # e.g. the refresh after a save

    @property
    def ok(self) -> bool:
        """True unless the operation failed."""
        return self.kind != OutcomeKind.FAILED

    @classmethod
    def success(
        cls,
        kind: OutcomeKind,
        message: str = "",
        follow_up: Optional["Outcome"] = None,
    ) -> "Outcome":
        return cls(kind=kind, message=message, follow_up=follow_up)

    @classmethod
    def failure(cls, error_kind: ErrorKind, error: BaseException) -> "Outcome":
        """Build a failed outcome with the user-facing message.

        Example:
            >>> Outcome.failure(ErrorKind.SAVE, ValueError("bad cost")).message
            'Save failed: bad cost'
        """
        return cls(
            kind=OutcomeKind.FAILED,
            message=f"{FAILURE_PREFIXES[error_kind]}: {error_detail(error)}",
            error_kind=error_kind,
            error=error,
        )

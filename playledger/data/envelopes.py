"""Decoding of list-response envelopes.

The backend is not consistent about how it wraps collections. Each
collection declares the shapes it accepts, tried in order; the first
shape that matches wins and anything else decodes to an empty list.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True, slots=True)
class EnvelopeShape:
    """One accepted envelope shape.

    Attributes:
        key: Dict key holding the list, or None for a bare JSON list
    """

    key: Optional[str]

    def extract(self, body: Any) -> Optional[list[Any]]:
        """Return the wrapped list if `body` has this shape, else None."""
        if self.key is None:
            return body if isinstance(body, list) else None
        if isinstance(body, dict):
            value = body.get(self.key)
            if isinstance(value, list):
                return value
        return None


DATA = EnvelopeShape("data")
TRANSACTIONS = EnvelopeShape("transactions")
BARE_LIST = EnvelopeShape(None)

TRANSACTION_SHAPES: tuple[EnvelopeShape, ...] = (DATA, TRANSACTIONS, BARE_LIST)
MEMBER_SHAPES: tuple[EnvelopeShape, ...] = (DATA, BARE_LIST)
GAME_SHAPES: tuple[EnvelopeShape, ...] = (DATA, BARE_LIST)


def unwrap(body: Any, shapes: Sequence[EnvelopeShape]) -> list[Any]:
    """Extract the record list from a response body.

    Args:
        body: Decoded JSON response
        shapes: Accepted shapes in priority order

    Returns:
        Records from the first matching shape, or an empty list

    Example:
        >>> unwrap({"transactions": [{"transactionId": 1}]}, TRANSACTION_SHAPES)
        [{'transactionId': 1}]
        >>> unwrap({"unexpected": True}, TRANSACTION_SHAPES)
        []
    """
    for shape in shapes:
        records = shape.extract(body)
        if records is not None:
            return records
    return []

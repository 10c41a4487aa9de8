"""Error types and user-facing error descriptions.

Every failure in the controller is surfaced, never retried. The message
shown to the user prefers what the server said, then what the transport
said, then whatever the raw error stringifies to.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Which controller operation a failure came from."""

    LOAD = "load"  # Any of the three collection reads failed
    SAVE = "save"  # Create/update failed, or the form was not submittable
    DELETE = "delete"  # Delete request failed


class ApiError(Exception):
    """Raised by the HTTP transport for failed requests.

    Attributes:
        message: Transport-level description of the failure
        status_code: HTTP status, or None if no response was received
        server_message: The `message` field of the server's JSON body, if any
        payload: Decoded response body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = server_message
        self.payload = payload


class PayloadError(ValueError):
    """Raised when form text cannot be coerced into a request payload."""

    def __init__(self, field: str, value: str):
        super().__init__(f"{field} must be a number, got {value!r}")
        self.field = field
        self.value = value


class MissingFieldsError(ValueError):
    """Raised when required form fields are empty at submit time."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Required fields missing: {', '.join(missing)}")
        self.missing = missing


def error_detail(error: BaseException) -> str:
    """Describe an error for the user.

    Args:
        error: The exception to describe

    Returns:
        The server-supplied message if there is one, else the error's own
        message, else the raw error representation
    """
    server_message = getattr(error, "server_message", None)
    if server_message:
        return str(server_message)

    message = str(error)
    if message:
        return message

    return repr(error)

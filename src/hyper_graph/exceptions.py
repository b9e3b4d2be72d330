"""Custom exception hierarchy for the Graph API client."""
from __future__ import annotations

from typing import Any


class HyperGraphError(RuntimeError):
    """Base error for Graph API failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class GraphAPIError(HyperGraphError):
    """Raised when a response payload carries an ``error`` object."""

    def __init__(self, error_type: str | None, message: str, **kwargs: Any) -> None:
        text = f"{error_type} - {message}" if error_type is not None else message
        super().__init__(text, **kwargs)
        self.error_type = error_type
        self.message = message


class RequestError(HyperGraphError):
    """Raised when an HTTP request cannot be fulfilled."""


class UnexpectedResponseError(HyperGraphError):
    """Raised when the API returns a body that cannot be parsed."""


class AuthenticationError(HyperGraphError):
    """Raised when an authorization code cannot be exchanged for a token."""

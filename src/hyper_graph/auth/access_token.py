"""OAuth access token authentication."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any

from .base import AuthStrategy

ACCESS_TOKEN_PARAM = "access_token"


@dataclass(slots=True)
class AccessTokenAuth(AuthStrategy):
    """Send an already issued access token as a request parameter."""

    token: str

    def apply(self, options: MutableMapping[str, Any]) -> None:
        # an access_token the caller passed explicitly is kept
        options.setdefault(ACCESS_TOKEN_PARAM, self.token)

    def update_token(self, token: str) -> None:
        self.token = token

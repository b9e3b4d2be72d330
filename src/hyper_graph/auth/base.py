"""Base abstractions for auth strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any


class AuthStrategy(ABC):
    """Interface each credential source must implement."""

    @abstractmethod
    def apply(self, options: MutableMapping[str, Any]) -> None:
        """Mutate outgoing request options in-place with the credential."""

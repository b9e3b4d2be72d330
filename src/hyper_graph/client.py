"""Graph API client bound to a credential."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

from . import api
from .auth.access_token import AccessTokenAuth
from .auth.base import AuthStrategy
from .config import DEFAULT_CONFIG, GraphConfig

logger = logging.getLogger(__name__)


class HyperGraph:
    """Call the Graph API on behalf of one access token.

    Every operation copies the caller's options, lets the auth strategy add its
    credential, and delegates to the stateless functions in :mod:`hyper_graph.api`.
    Without a token only public data is reachable.
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        config: GraphConfig | None = None,
        session: requests.Session | None = None,
        auth_strategy: AuthStrategy | None = None,
    ) -> None:
        if auth_strategy is None and access_token is not None:
            auth_strategy = AccessTokenAuth(access_token)
        self.config = config or DEFAULT_CONFIG
        self._session = session
        self._auth = auth_strategy

    # Public API --------------------------------------------------------------
    def fetch(self, path: str, options: Mapping[str, Any] | None = None) -> Any:
        return api.fetch(path, self._prepare_options(options), **self._transport())

    def submit(self, path: str, options: Mapping[str, Any] | None = None) -> Any:
        return api.submit(path, self._prepare_options(options), **self._transport())

    def remove(self, path: str, options: Mapping[str, Any] | None = None) -> Any:
        return api.remove(path, self._prepare_options(options), **self._transport())

    def search(self, query: str, options: Mapping[str, Any] | None = None) -> Any:
        return api.search(query, self._prepare_options(options), **self._transport())

    # Internal helpers -------------------------------------------------------
    def _prepare_options(self, options: Mapping[str, Any] | None) -> dict[str, Any]:
        prepared: dict[str, Any] = dict(options or {})
        if self._auth is not None:
            self._auth.apply(prepared)
        else:
            logger.debug("No credential bound; calling the Graph API anonymously")
        return prepared

    def _transport(self) -> dict[str, Any]:
        return {"config": self.config, "session": self._session}

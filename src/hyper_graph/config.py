"""Configuration helpers for the Graph API client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

GRAPH_API_HOST = "graph.facebook.com"
HTTPS_PORT = 443
USER_AGENT = "hyper-graph-python"


@dataclass(slots=True, frozen=True)
class GraphConfig:
    """Typed configuration shared by every Graph API call."""

    host: str = GRAPH_API_HOST
    port: int = HTTPS_PORT
    verify_ssl: bool | str = True
    timeout: float | None = None
    default_headers: Mapping[str, str] | None = None

    @property
    def base_url(self) -> str:
        if self.port == HTTPS_PORT:
            return f"https://{self.host}"
        return f"https://{self.host}:{self.port}"

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers


DEFAULT_CONFIG = GraphConfig()

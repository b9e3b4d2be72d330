"""High-level Graph API client entrypoints."""
from .api import build_authorization_url, exchange_authorization_code, fetch, remove, search, submit
from .client import HyperGraph
from .config import GraphConfig
from .exceptions import GraphAPIError, HyperGraphError
from .normalize import normalize, unwrap_envelope

__all__ = [
    "GraphAPIError",
    "GraphConfig",
    "HyperGraph",
    "HyperGraphError",
    "build_authorization_url",
    "exchange_authorization_code",
    "fetch",
    "normalize",
    "remove",
    "search",
    "submit",
    "unwrap_envelope",
]

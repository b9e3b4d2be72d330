"""Stateless Graph API operations.

Each function performs at most one HTTPS round trip against the host named by
its :class:`GraphConfig`. Callers may pass a ``session`` (anything exposing
``requests.Session.request``); otherwise a session is opened for the single
call and closed again.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .config import DEFAULT_CONFIG, GraphConfig
from .exceptions import AuthenticationError, RequestError
from .http import HttpResponse, build_query, parse_json
from .http import request as http_request
from .normalize import normalize, unwrap_envelope

logger = logging.getLogger(__name__)

ACCESS_TOKEN_PATH = "/oauth/access_token"
AUTHORIZE_PATH = "/oauth/authorize"
SEARCH_PATH = "search"
TRUE_BODY = "true"

_TOKEN_SEPARATORS = re.compile(r"[=&]")


def fetch(
    path: str,
    options: Mapping[str, Any] | None = None,
    *,
    config: GraphConfig | None = None,
    session: requests.Session | None = None,
) -> Any:
    """GET an object or connection from the graph and normalize it."""

    request_path = _object_path(path)
    query = build_query(options)
    if query:
        request_path = f"{request_path}?{query}"
    response = _send("GET", request_path, config=config, session=session)
    return normalize(unwrap_envelope(parse_json(response)))


def submit(
    path: str,
    options: Mapping[str, Any] | None = None,
    *,
    config: GraphConfig | None = None,
    session: requests.Session | None = None,
) -> Any:
    """POST form-encoded options to the graph.

    The API answers some writes with the bare text ``true``; that is returned
    as ``True`` without JSON decoding.
    """

    response = _send(
        "POST",
        _object_path(path),
        data=build_query(options),
        config=config,
        session=session,
    )
    if response.text == TRUE_BODY:
        return True
    return normalize(unwrap_envelope(parse_json(response)))


def remove(
    path: str,
    options: Mapping[str, Any] | None = None,
    *,
    config: GraphConfig | None = None,
    session: requests.Session | None = None,
) -> Any:
    """Delete an object through a POST carrying ``method=delete``."""

    return submit(path, {**(options or {}), "method": "delete"}, config=config, session=session)


def search(
    query: str,
    options: Mapping[str, Any] | None = None,
    *,
    config: GraphConfig | None = None,
    session: requests.Session | None = None,
) -> Any:
    return fetch(SEARCH_PATH, {**(options or {}), "q": query}, config=config, session=session)


def exchange_authorization_code(
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    code: str,
    *,
    config: GraphConfig | None = None,
    session: requests.Session | None = None,
) -> str:
    """Trade an OAuth ``code`` for an access token.

    The token endpoint answers with ``access_token=...&expires=...``; the value
    after the first ``=`` is the token. A JSON body is only expected when the
    exchange failed, in which case its ``error`` object is raised.
    """

    query = build_query(
        {
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": redirect_uri,
            "code": code,
        }
    )
    response = _send("GET", f"{ACCESS_TOKEN_PATH}?{query}", config=config, session=session)
    body = response.text
    if body.lstrip().startswith("{"):
        payload = normalize(parse_json(response))
        token = payload.get("access_token")
        if token:
            return token
    else:
        tokens = _TOKEN_SEPARATORS.split(body)
        if len(tokens) > 1 and tokens[1]:
            return tokens[1]
    raise AuthenticationError(
        "Token exchange response did not include an access token",
        status_code=response.status_code,
        details=body,
    )


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    options: Mapping[str, Any] | None = None,
    *,
    config: GraphConfig | None = None,
) -> str:
    """Return the URL users are redirected to in order to grant access."""

    config = config or DEFAULT_CONFIG
    merged = {**(options or {}), "client_id": client_id, "redirect_uri": redirect_uri}
    return f"{config.base_url}{AUTHORIZE_PATH}?{build_query(merged)}"


# Internal helpers -------------------------------------------------------
def _object_path(path: Any) -> str:
    return f"/{str(path).lstrip('/')}"


def _send(
    method: str,
    request_path: str,
    *,
    config: GraphConfig | None,
    session: requests.Session | None,
    data: str | None = None,
) -> HttpResponse:
    config = config or DEFAULT_CONFIG
    _suppress_insecure_warning_if_needed(config)
    url = config.url_for(request_path)
    # the query string carries credentials, so only the path is logged
    logger.info("Graph API request %s %s", method, request_path.split("?", 1)[0])
    try:
        if session is not None:
            return _perform(session, method, url, config=config, data=data)
        with requests.Session() as call_session:
            return _perform(call_session, method, url, config=config, data=data)
    except requests.RequestException as exc:
        reason = str(exc).strip() or exc.__class__.__name__
        raise RequestError(
            f"Failed to communicate with Graph API: {reason}", details=reason
        ) from exc


def _perform(
    session: requests.Session,
    method: str,
    url: str,
    *,
    config: GraphConfig,
    data: str | None,
) -> HttpResponse:
    response = http_request(
        session,
        method,
        url,
        data=data,
        headers=config.resolved_headers(),
        timeout=config.timeout,
        verify=config.verify_ssl,
    )
    logger.debug(
        "Graph API response %s for %s %s", response.status_code, method, url.split("?", 1)[0]
    )
    return response


def _suppress_insecure_warning_if_needed(config: GraphConfig) -> None:
    if isinstance(config.verify_ssl, bool) and not config.verify_ssl:
        urllib3.disable_warnings(InsecureRequestWarning)


__all__ = [
    "build_authorization_url",
    "exchange_authorization_code",
    "fetch",
    "remove",
    "search",
    "submit",
]

"""HTTP utilities for Graph API access."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from requests import Response, Session

from .exceptions import UnexpectedResponseError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(slots=True)
class HttpResponse:
    """Raw response body plus the metadata callers may want for errors."""

    status_code: int
    text: str
    headers: Mapping[str, str]


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(options: Mapping[Any, Any] | None) -> str:
    """Join ``key=value`` pairs sorted by the full pair text.

    Values are not percent-encoded; callers pass them already encoded when
    they need to.
    """

    if not options:
        return ""
    pairs = sorted(f"{key}={_stringify(value)}" for key, value in options.items())
    return "&".join(pairs)


def parse_json(response: HttpResponse) -> Any:
    """Parse JSON with helpful error context."""

    try:
        return json.loads(response.text)
    except ValueError as exc:
        raise UnexpectedResponseError(
            f"Graph API response was not valid JSON: {response.text[:200]!r}",
            status_code=response.status_code,
            details=response.text,
        ) from exc


def request(
    session: Session,
    method: str,
    url: str,
    *,
    data: str | None = None,
    headers: Mapping[str, str] | None = None,
    timeout: float | None = None,
    verify: bool | str = True,
) -> HttpResponse:
    """Send a single request and hand back the undecoded body.

    Status codes are not inspected here; the payload decides whether a call
    failed.
    """

    out_headers = dict(headers or {})
    if data is not None:
        out_headers.setdefault("Content-Type", FORM_CONTENT_TYPE)
    response: Response = session.request(
        method=method,
        url=url,
        data=data,
        headers=out_headers,
        timeout=timeout,
        verify=verify,
    )
    return HttpResponse(
        status_code=response.status_code,
        text=response.text,
        headers=response.headers,
    )

"""Normalization of decoded Graph API payloads.

Every mapping in a response is rebuilt as a :class:`GraphNode`:

* an ``error`` key aborts the whole pass with :class:`GraphAPIError`;
* ``id`` values holding a plain decimal integer string become ``int``;
* keys ending in ``_time`` are parsed into ``datetime`` values;
* anything else is envelope-unwrapped (``{"data": ...}``) and normalized
  recursively.

The recursion returns :class:`Normalized` results instead of raising, so the
first error found short-circuits every enclosing level and no partially
normalized structure ever escapes. :func:`normalize` turns that result back
into a plain value or a raised error.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from dateutil.parser import isoparse

from .exceptions import GraphAPIError

ENVELOPE_KEY = "data"
ERROR_KEY = "error"
ID_KEY = "id"
TIME_SUFFIX = "_time"


class KeyKind(enum.Enum):
    ERROR = "error"
    ID = "id"
    TIME = "time"
    NESTED = "nested"


def classify_key(key: str) -> KeyKind:
    """Pick the normalization branch for a single mapping key."""

    if key == ERROR_KEY:
        return KeyKind.ERROR
    if key == ID_KEY:
        return KeyKind.ID
    if key.endswith(TIME_SUFFIX):
        return KeyKind.TIME
    return KeyKind.NESTED


class GraphNode(dict):
    """Normalized mapping whose keys can also be read as attributes."""

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | {k for k in self if k.isidentifier()})


@dataclass(slots=True, frozen=True)
class Normalized:
    """Outcome of a normalization pass: a value or the error that stopped it."""

    value: Any = None
    error: GraphAPIError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


def unwrap_envelope(value: Any) -> Any:
    """Return the payload under ``data`` when ``value`` is such an envelope."""

    if isinstance(value, Mapping) and ENVELOPE_KEY in value:
        return value[ENVELOPE_KEY]
    return value


def normalize(value: Any) -> Any:
    """Normalize a decoded payload, raising :class:`GraphAPIError` on errors."""

    return try_normalize(value).unwrap()


def try_normalize(value: Any) -> Normalized:
    if isinstance(value, Mapping):
        return _normalize_mapping(value)
    if _is_array(value):
        return _normalize_array(value)
    return Normalized(value)


def _normalize_mapping(mapping: Mapping[Any, Any]) -> Normalized:
    node = GraphNode()
    for raw_key, value in mapping.items():
        key = str(raw_key)
        kind = classify_key(key)
        if kind is KeyKind.ERROR:
            return Normalized(error=_error_from_payload(value))
        if kind is KeyKind.ID:
            node[key] = _coerce_id(value)
        elif kind is KeyKind.TIME:
            node[key] = isoparse(value)
        else:
            result = try_normalize(unwrap_envelope(value))
            if not result.ok:
                return result
            node[key] = result.value
    return Normalized(node)


def _normalize_array(items: Sequence[Any]) -> Normalized:
    normalized: list[Any] = []
    for item in items:
        result = try_normalize(unwrap_envelope(item))
        if not result.ok:
            return result
        normalized.append(result.value)
    return Normalized(normalized)


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _coerce_id(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        number = int(value)
    except ValueError:
        return value
    # "007", "+7" and " 7" all parse but are not the canonical spelling
    return number if str(number) == value else value


def _error_from_payload(payload: Any) -> GraphAPIError:
    if isinstance(payload, Mapping):
        return GraphAPIError(payload.get("type"), str(payload.get("message")), details=payload)
    return GraphAPIError(None, str(payload), details=payload)


__all__ = [
    "GraphNode",
    "KeyKind",
    "Normalized",
    "classify_key",
    "normalize",
    "try_normalize",
    "unwrap_envelope",
]

"""Query string encoding for list filters.

Filters travel as ``key=v1,v2&key2=v3``: array members are percent-encoded
one by one and joined with a literal comma, so a comma inside a value is
sent as ``%2C`` while the separator stays readable by the server.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any
from urllib.parse import quote, unquote

# Same unreserved set as JavaScript's encodeURIComponent.
_SAFE_CHARS = "-_.!~*'()"


def _encode(value: Any) -> str:
    """Percent-encode a single scalar."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_SAFE_CHARS)


def build_query_string(params: Mapping[str, Any]) -> str:
    """Serialize a flat filter mapping into a query string.

    Args:
        params: Mapping of field name to a scalar, a sequence of scalars,
            or None. None values and empty sequences are skipped.

    Returns:
        Query string without the leading ``?`` (empty for an empty mapping)
    """
    pairs: list[str] = []

    for key, item in params.items():
        if item is None:
            continue
        if isinstance(item, Sequence) and not isinstance(item, (str, bytes)):
            # An empty list places no constraint
            if not item:
                continue
            value = ",".join(_encode(v) for v in item)
        else:
            value = _encode(item)
        pairs.append(f"{_encode(key)}={value}")

    return "&".join(pairs)


def parse_query_string(query: str) -> dict[str, list[str]]:
    """Parse a query string produced by :func:`build_query_string`.

    Args:
        query: Query string, with or without a leading ``?``

    Returns:
        Mapping of key to decoded values (scalars become one-element lists)
    """
    result: dict[str, list[str]] = {}
    query = query.lstrip("?")
    if not query:
        return result

    for pair in query.split("&"):
        key, _, raw = pair.partition("=")
        result[unquote(key)] = [unquote(v) for v in raw.split(",")]

    return result

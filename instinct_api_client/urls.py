"""URL and query-string helpers shared by every request."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode


def merge_query(
    defaults: Optional[Mapping[str, Any]],
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Return a new mapping of ``defaults`` updated with ``overrides``.

    Caller-supplied values always win on a key collision.  Neither
    input is modified.

    >>> merge_query({"limit": 100}, {"limit": 5})
    {'limit': 5}
    """
    merged: Dict[str, Any] = dict(defaults or {})
    if overrides:
        merged.update(overrides)
    return merged


def _flatten(key: str, value: Any, pairs: List[Tuple[str, Any]]) -> None:
    if value is None:
        return
    if isinstance(value, bool):
        pairs.append((key, "1" if value else "0"))
    elif isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten(f"{key}[{sub_key}]", sub_value, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{key}[{index}]", item, pairs)
    else:
        pairs.append((key, value))


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Percent-encode ``params`` as ``key=value`` pairs joined by ``&``.

    Follows the form-style query encoding the partner API is served
    with: ``None`` values are dropped, booleans become ``1``/``0``,
    sequences use indexed keys (``id[0]=a&id[1]=b``) and mappings use
    named ones (``filter[status]=paid``).
    """
    if not params:
        return ""
    pairs: List[Tuple[str, Any]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


def build_url(base_url: str, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Join ``base_url`` and ``path`` and append the encoded query string.

    Exactly one trailing slash is removed from the base and exactly one
    leading slash from the path before they are joined with ``/``.

    >>> build_url("https://host/v1/", "/visits")
    'https://host/v1/visits'
    >>> build_url("https://host/v1/", "visits", {"limit": 5})
    'https://host/v1/visits?limit=5'
    """
    base = base_url[:-1] if base_url.endswith("/") else base_url
    rel = path[1:] if path.startswith("/") else path
    url = f"{base}/{rel}"
    query = encode_query(params)
    if query:
        url = f"{url}?{query}"
    return url


def quote_segment(value: Any) -> str:
    """Percent-encode a path parameter as a single URL path segment."""
    return quote(str(value), safe="")

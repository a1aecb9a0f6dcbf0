"""Payload serialization and URL helpers."""

from __future__ import annotations

import typing as t
import urllib.parse as parser
from collections.abc import Mapping

from aiohttp import hdrs

from .types import CONTENT_TYPE_FORM_URLENCODED, CONTENT_TYPE_JSON

if t.TYPE_CHECKING:
    from yarl import URL

# Characters encodeURIComponent leaves alone on top of quote()'s own set
_SAFE = "!~*'()"


def query_param(key: object, value: object) -> str:
    """Join a percent-encoded key and value with ``=``.

    >>> query_param("a", "b c")
    'a=b%20c'
    """
    return f"{parser.quote(str(key), safe=_SAFE)}={parser.quote(str(value), safe=_SAFE)}"


def serialize(payload: str | Mapping[str, t.Any] | None) -> str:
    """Convert a payload into a query string.

    Strings are returned as they are; mappings become ``&``-joined
    ``key=value`` pairs in insertion order.

    Raises:
        TypeError: If the payload is neither a string nor a mapping.

    """
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    if not isinstance(payload, Mapping):
        msg = f"Cannot serialize payload of type {type(payload).__name__}"
        raise TypeError(msg)
    return "&".join(query_param(key, value) for key, value in payload.items())


def build_url(url: str | URL, params: str) -> str:
    """Append query params to a URL.

    Uses ``&`` when the URL already has a query string, ``?`` otherwise.
    ``params`` must not be empty.
    """
    url = str(url)
    join_with = "&" if "?" in url else "?"
    return url + join_with + params


def default_content_type(method: str) -> str:
    """Return the Content-Type used when a request does not set one."""
    if method == hdrs.METH_POST:
        return CONTENT_TYPE_FORM_URLENCODED
    return CONTENT_TYPE_JSON

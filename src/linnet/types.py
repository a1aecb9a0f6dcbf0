"""Request types and constants for linnet.

This module provides the request options dataclass, the transport ready
states and the content-type constants shared by the other modules.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from aiohttp import hdrs

if TYPE_CHECKING:
    from collections.abc import Mapping

# HTTP method type - reuses aiohttp's method string constants
# Users can use aiohttp.hdrs.METH_GET, aiohttp.hdrs.METH_POST, etc. or plain strings
HttpMethod = str

CONTENT_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"
CONTENT_TYPE_JSON = "application/json"

DEFAULT_TIMEOUT_MS = 60_000


class ReadyState(enum.IntEnum):
    """Phases of a transport exchange.

    Attributes:
        UNSENT: Created or aborted, not opened.
        OPENED: Opened, headers may be set and the request sent.
        HEADERS_RECEIVED: Status line and response headers are available.
        LOADING: The response body is being read.
        DONE: The exchange is over, successfully or not.

    """

    UNSENT = 0
    OPENED = 1
    HEADERS_RECEIVED = 2
    LOADING = 3
    DONE = 4


@dataclass
class RequestOptions:
    """Per-request configuration options.

    Attributes:
        url: The URL to make the request to.
        method: HTTP method to use (defaults to GET).
        headers: Headers to merge over the client's default headers.
        data: Payload, either a preformatted string or a flat mapping that
            is URL-encoded. For GET it is appended to the URL.
        timeout: Request timeout in seconds. None uses the client default.

    """

    url: str = ""
    method: HttpMethod = hdrs.METH_GET
    headers: dict[str, str] = field(default_factory=dict)
    data: str | Mapping[str, Any] | None = None
    timeout: float | None = None

    @classmethod
    def coerce(cls, options: RequestOptions | Mapping[str, Any]) -> RequestOptions:
        """Build options from a plain mapping, or return them unchanged.

        Raises:
            TypeError: If the mapping carries keys that are not options.

        """
        if isinstance(options, cls):
            return options
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            msg = f"Unknown request options: {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        return cls(**{k: v for k, v in options.items() if v is not None})

"""Per-request configuration bound to its own transport."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aiohttp import hdrs

from .serialize import build_url, default_content_type, serialize
from .transport import Transport

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from .types import RequestOptions


class Connection:
    """Everything one request needs: method, headers, payload, URL and transport.

    For GET requests the serialized payload is moved into the URL's query
    string at construction, so a GET connection never carries a payload.

    Attributes:
        method: Upper-cased HTTP method.
        headers: Request headers, merged over any default headers.
        payload: Serialized body, None for GET.
        url: Target URL, including the folded payload for GET.

    """

    def __init__(
        self,
        options: RequestOptions,
        *,
        default_headers: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the connection from request options.

        Args:
            options: The request options.
            default_headers: Headers that the request's own headers override.
            logger: Logger handed to the transport.

        """
        self._transport = Transport(logger=logger)

        self.method = (options.method or hdrs.METH_GET).upper()
        self.headers = self._merge_headers(default_headers, options.headers)
        self.payload: str | None = serialize(options.data)
        self.url = str(options.url)

        if self.method == hdrs.METH_GET:
            if self.payload:
                self.url = build_url(self.url, self.payload)
            self.payload = None

    @property
    def transport(self) -> Transport:
        """The transport owned by this connection."""
        return self._transport

    @staticmethod
    def _merge_headers(
        default_headers: Mapping[str, str] | None,
        request_headers: Mapping[str, str] | None,
    ) -> dict[str, str]:
        merged = dict(default_headers or {})
        if request_headers:
            merged.update(request_headers)
        return merged

    def set_headers(self) -> None:
        """Apply the headers to the transport.

        A Content-Type given under any casing replaces the method default and
        is sent as ``Content-Type``; every other header is sent as given.
        """
        transport = self._transport
        content_type = None

        for key, value in self.headers.items():
            if key.lower() == hdrs.CONTENT_TYPE.lower():
                content_type = value
            else:
                transport.set_request_header(key, value)

        transport.set_request_header(
            hdrs.CONTENT_TYPE,
            content_type or default_content_type(self.method),
        )

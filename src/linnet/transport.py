"""A single HTTP exchange driven through ready-state changes.

``Transport`` runs one request on aiohttp and reports its progress the way an
XMLHttpRequest does: it is opened, configured with headers, sent, and then
advances through ``ReadyState`` values, calling ``on_ready_state_change`` at
each step. Network failures do not raise; they end in ``DONE`` with a zero
status.
"""

from __future__ import annotations

import asyncio
import logging
import typing as t

import aiohttp
from multidict import CIMultiDict, CIMultiDictProxy
from yarl import URL

from .errors import TransportStateError
from .types import ReadyState

_logger = logging.getLogger("linnet")


class Transport:
    """One request/response exchange over its own aiohttp session.

    Attributes:
        ready_state: Current phase of the exchange.
        status: HTTP status code, 0 before headers arrive or after a failure.
        status_text: HTTP reason phrase.
        response_text: Decoded response body.
        response_headers: Response headers, empty until received.
        response_url: Final URL after redirects, empty until received.
        on_ready_state_change: Called without arguments on every state change
            after ``open``.

    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize an unopened transport.

        Args:
            logger: Logger for exchange diagnostics. If None, uses module logger.

        """
        self.ready_state = ReadyState.UNSENT
        self.status = 0
        self.status_text = ""
        self.response_text = ""
        self.response_headers: CIMultiDictProxy[str] = CIMultiDictProxy(CIMultiDict())
        self.response_url = ""
        self.on_ready_state_change: t.Callable[[], t.Any] | None = None
        self._method = ""
        self._url = ""
        self._request_headers: CIMultiDict[str] = CIMultiDict()
        self._task: asyncio.Task[None] | None = None
        self._logger = logger or _logger

    def __repr__(self) -> str:
        """Return the method, URL and state of the exchange."""
        return f"<Transport {self._method} {self._url} {self.ready_state.name} status={self.status}>"

    @property
    def method(self) -> str:
        """The method given to ``open``."""
        return self._method

    @property
    def url(self) -> str:
        """The URL given to ``open``."""
        return self._url

    @property
    def request_headers(self) -> CIMultiDictProxy[str]:
        """The headers that will be sent, as a read-only view."""
        return CIMultiDictProxy(self._request_headers)

    @property
    def sent(self) -> bool:
        """Whether ``send`` has been called since the last ``open``."""
        return self._task is not None

    def open(self, method: str, url: str) -> None:
        """Prepare the transport for a new request.

        Args:
            method: HTTP method.
            url: Target URL. Already percent-encoded text is sent unchanged.

        """
        self.abort()
        self._method = method
        self._url = url
        self._request_headers = CIMultiDict()
        self.ready_state = ReadyState.OPENED

    def set_request_header(self, name: str, value: str) -> None:
        """Add a request header.

        Raises:
            TransportStateError: If the transport is not opened or already sent.

        """
        self._check_unsent("set_request_header")
        self._request_headers.add(name, str(value))

    def send(self, body: str | None = None) -> None:
        """Start the exchange and return without waiting for it.

        Must be called from inside a running event loop.

        Args:
            body: Request body, None for no body.

        Raises:
            TransportStateError: If the transport is not opened or already sent.
            RuntimeError: If there is no running event loop.

        """
        self._check_unsent("send")
        loop = asyncio.get_running_loop()
        self._logger.debug("Sending request: %s %s", self._method, self._url)
        self._task = loop.create_task(self._perform(body or None))

    def abort(self) -> None:
        """Cancel the exchange and return to ``UNSENT`` without notifying."""
        if self._task is not None and not self._task.done():
            self._logger.debug("Aborting request: %s %s", self._method, self._url)
            self._task.cancel()
        self._task = None
        self.ready_state = ReadyState.UNSENT
        self._clear_response()

    def _clear_response(self) -> None:
        self.status = 0
        self.status_text = ""
        self.response_text = ""
        self.response_headers = CIMultiDictProxy(CIMultiDict())
        self.response_url = ""

    def _check_unsent(self, operation: str) -> None:
        if self.ready_state != ReadyState.OPENED or self.sent:
            msg = f"Cannot {operation} in state {self.ready_state.name}"
            raise TransportStateError(msg, url=self._url or None)

    def _set_ready_state(self, state: ReadyState) -> None:
        self.ready_state = state
        if self.on_ready_state_change is not None:
            self.on_ready_state_change()

    async def _perform(self, body: str | None) -> None:
        try:
            async with (
                aiohttp.ClientSession() as session,
                session.request(
                    self._method,
                    URL(self._url, encoded=True),
                    headers=self._request_headers,
                    data=body,
                ) as response,
            ):
                self.status = response.status
                self.status_text = response.reason or ""
                self.response_headers = response.headers
                self.response_url = str(response.url)
                self._set_ready_state(ReadyState.HEADERS_RECEIVED)
                self._set_ready_state(ReadyState.LOADING)
                self.response_text = await response.text(errors="replace")
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            self._logger.warning("Request error: %s %s -> %s", self._method, self._url, e)
            self._clear_response()
        except Exception as e:
            self._logger.warning("Unexpected error: %s %s -> %s", self._method, self._url, e)
            self._clear_response()
        self._set_ready_state(ReadyState.DONE)

"""Request orchestration: connection, transport, timeout and deferred."""

from __future__ import annotations

import asyncio
import functools
import logging
import typing as t

from .config import ClientConfig
from .connection import Connection
from .deferred import Deferred
from .errors import ErrorCode
from .types import ReadyState, RequestOptions

if t.TYPE_CHECKING:
    from collections.abc import Mapping

# Module-level logger for structured logging
_logger = logging.getLogger("linnet")

HTTP_NOT_MODIFIED = 304


def is_error_status(status: int) -> bool:
    """Return True unless the status is 2xx or 304 Not Modified."""
    return not status or (not 200 <= status < 300 and status != HTTP_NOT_MODIFIED)  # noqa: PLR2004


class Client:
    """Issues requests and settles a ``Deferred`` with each outcome.

    Every outcome, including failures and timeouts, is delivered as the
    handler arguments ``(error, body, transport)``: ``error`` is a bool for
    completed exchanges and ``ErrorCode.ETIMEOUT`` when the timeout fired.

    Attributes:
        config: Configuration object containing timeout, default headers and logger.

    """

    def __init__(self, config: ClientConfig | None = None) -> None:
        """Initialize the client.

        Args:
            config: Configuration for the client. If None, uses default
                   configuration with a 60 second timeout.

        """
        self.config = config or ClientConfig()
        self._logger = self.config.logger or _logger

    def _get_timeout(self, request_timeout: float | None) -> float | None:
        return request_timeout if request_timeout is not None else self.config.timeout

    def request(self, options: RequestOptions | Mapping[str, t.Any]) -> Deferred:
        """Start a request and return its deferred without waiting.

        Args:
            options: Request options, or a mapping with the same keys.

        Returns:
            Deferred: Settled once with ``(error, body, transport)``.

        Raises:
            RuntimeError: If called outside of a running event loop.

        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            msg = "request() must be called from a running event loop"
            raise RuntimeError(msg) from e

        options = RequestOptions.coerce(options)
        deferred = Deferred()
        connection = Connection(
            options,
            default_headers=self.config.default_headers,
            logger=self._logger,
        )
        transport = connection.transport

        self._logger.debug("Starting request: %s %s", connection.method, connection.url)
        transport.open(connection.method, connection.url)
        connection.set_headers()

        timer = None
        timeout = self._get_timeout(options.timeout)
        if timeout is not None:
            timer = loop.call_later(
                timeout,
                functools.partial(self._on_timeout, connection, deferred),
            )

        transport.on_ready_state_change = functools.partial(
            self._on_ready_state_change,
            connection,
            timer,
            deferred,
        )
        transport.send(connection.payload)

        return deferred

    def _on_ready_state_change(
        self,
        connection: Connection,
        timer: asyncio.TimerHandle | None,
        deferred: Deferred,
    ) -> None:
        transport = connection.transport
        if transport.ready_state != ReadyState.DONE:
            return
        if timer is not None:
            timer.cancel()

        error = is_error_status(transport.status)
        if error:
            self._logger.warning(
                "Request failed: %s %s -> %d",
                connection.method,
                connection.url,
                transport.status,
            )
        else:
            self._logger.debug(
                "Request completed: %s %s -> %d",
                connection.method,
                connection.url,
                transport.status,
            )
        deferred.exec(error, transport.response_text, transport)

    def _on_timeout(self, connection: Connection, deferred: Deferred) -> None:
        transport = connection.transport
        self._logger.warning("Request timeout: %s %s", connection.method, connection.url)
        transport.abort()
        deferred.exec(ErrorCode.ETIMEOUT, "", transport)


def request(
    options: RequestOptions | Mapping[str, t.Any],
    config: ClientConfig | None = None,
) -> Deferred:
    """Start a request with a one-off client. See ``Client.request``."""
    return Client(config).request(options)

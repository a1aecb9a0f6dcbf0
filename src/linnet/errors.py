"""Error codes and exception hierarchy for linnet.

Request outcomes are never raised: they settle the request's deferred with
an error flag or an ``ErrorCode``. The exceptions here report misuse of the
library itself.
"""

from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    """Codes delivered as the first settlement argument on failure."""

    ETIMEOUT = 101


class LinnetError(Exception):
    """Base exception for all linnet errors.

    Attributes:
        message: Human-readable error description.
        url: The URL of the request involved, if any.

    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Initialize LinnetError.

        Args:
            message: Human-readable error description.
            url: The URL of the request involved, if any.

        """
        super().__init__(message)
        self.message = message
        self.url = url

    def __str__(self) -> str:
        """Return a string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        return " | ".join(parts)


class TransportStateError(LinnetError):
    """A transport operation was called in a state that does not allow it.

    This includes setting headers before ``open`` and sending twice.
    """

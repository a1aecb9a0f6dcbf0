"""Configuration settings for linnet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .types import DEFAULT_TIMEOUT_MS

if TYPE_CHECKING:
    import logging


@dataclass
class ClientConfig:
    """Configuration for a linnet client.

    Attributes:
        timeout: Default request timeout in seconds. None means no timeout.
        default_headers: Default headers to include with every request.
        logger: Logger instance for structured logging. If None, uses module logger.

    """

    timeout: float | None = DEFAULT_TIMEOUT_MS / 1000
    default_headers: dict[str, str] = field(default_factory=dict)
    logger: logging.Logger | None = None

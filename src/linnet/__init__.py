"""A light weight asynchronous HTTP client with deferred callbacks."""

from .client import Client, is_error_status, request
from .config import ClientConfig
from .connection import Connection
from .deferred import Deferred, Thenable, is_thenable
from .errors import ErrorCode, LinnetError, TransportStateError
from .serialize import build_url, query_param, serialize
from .transport import Transport
from .types import HttpMethod, ReadyState, RequestOptions

__all__ = [
    "Client",
    "ClientConfig",
    "Connection",
    "Deferred",
    "ErrorCode",
    "HttpMethod",
    "LinnetError",
    "ReadyState",
    "RequestOptions",
    "Thenable",
    "Transport",
    "TransportStateError",
    "build_url",
    "is_error_status",
    "is_thenable",
    "query_param",
    "request",
    "serialize",
]
__version__ = "0.1.0"

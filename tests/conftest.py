"""Common test fixtures for the linnet project."""

import socket
import threading
import typing as t

import pytest
from pytest_httpserver import HTTPServer
from werkzeug import Request, Response

from linnet import Client, ClientConfig


@pytest.fixture
def client() -> Client:
    """Test fixture providing a Client with a short timeout."""
    return Client(ClientConfig(timeout=5))


@pytest.fixture
def fast_timeout_client() -> Client:
    """Test fixture providing a Client that gives up after 50 milliseconds."""
    return Client(ClientConfig(timeout=0.05))


@pytest.fixture
def url(httpserver: HTTPServer) -> str:
    """Test fixture providing a single URL."""
    httpserver.expect_request("/page").respond_with_data("test response")
    return httpserver.url_for("/page")


@pytest.fixture
def slow_url(httpserver: HTTPServer) -> t.Generator[str, None, None]:
    """Test fixture providing a URL that only answers once the test is over.

    The test server handles one request at a time, so the handler is
    released at teardown to keep it from stalling later tests.
    """
    release = threading.Event()

    def handler(_: Request) -> Response:
        release.wait(timeout=5)
        return Response("late response")

    httpserver.expect_request("/slow").respond_with_handler(handler)
    yield httpserver.url_for("/slow")
    release.set()


@pytest.fixture
def stalled_url(httpserver: HTTPServer) -> t.Generator[str, None, None]:
    """Test fixture providing a URL that sends headers and part of the body, then stalls."""
    release = threading.Event()

    def handler(_: Request) -> Response:
        def body() -> t.Iterator[bytes]:
            yield b"partial"
            release.wait(timeout=5)
            yield b" rest"

        return Response(body(), headers={"X-Partial": "yes"}, direct_passthrough=True)

    httpserver.expect_request("/stalled").respond_with_handler(handler)
    yield httpserver.url_for("/stalled")
    release.set()


@pytest.fixture
def unused_url() -> str:
    """Test fixture providing a URL nothing listens on."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/closed"


@pytest.fixture
def calls() -> list[tuple[str, tuple[t.Any, ...]]]:
    """Test fixture collecting (handler name, arguments) pairs in call order."""
    return []

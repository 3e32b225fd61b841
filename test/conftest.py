"""
Pytest configuration and fixtures for the logger tests.

Loggers built by ``make_logger`` print into a ``Capture`` sink, always report
ANSI support and read a fixed clock, so output is deterministic.
"""

import logging
import typing

import httpx
import pytest

from colored_httpx_logger import ColoredLogger
from formatutils import Capture


logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s][%(name)s][%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


FIXED_NOW_MS = 1_700_000_000_000


@pytest.fixture
def capture() -> Capture:
    return Capture()


@pytest.fixture
def make_logger(capture: Capture) -> typing.Callable[..., ColoredLogger]:
    """Factory for loggers writing into ``capture``."""

    def factory(**kwargs) -> ColoredLogger:
        kwargs.setdefault("sink", capture)
        kwargs.setdefault("supports_ansi", lambda: True)
        kwargs.setdefault("clock", lambda: FIXED_NOW_MS)
        return ColoredLogger(**kwargs)

    return factory


def posts_handler(request: httpx.Request) -> httpx.Response:
    """Fake API used by the end-to-end tests."""
    if request.url.path == "/posts/1":
        return httpx.Response(200, json={"id": 1, "title": "hello"})
    if request.url.path == "/image":
        return httpx.Response(
            200,
            content=bytes(range(30)),
            headers={"content-type": "application/octet-stream"},
        )
    if request.url.path == "/refused":
        raise httpx.ConnectError("connection refused")
    return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def mock_transport() -> httpx.MockTransport:
    return httpx.MockTransport(posts_handler)

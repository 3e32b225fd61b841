import logging
import typing

import httpx

if typing.TYPE_CHECKING:
    from colored_httpx_logger.logger import ColoredLogger

logger = logging.getLogger(__name__)


def attach_request(error: httpx.TransportError, request: httpx.Request) -> None:
    # httpx only attaches the request once the error leaves the transport
    try:
        error.request
    except RuntimeError:
        error.request = request


class LoggingTransport(httpx.BaseTransport):
    """
    Wraps another transport and logs the errors it raises.

    Transport errors (timeouts, refused connections, protocol errors) never
    reach a response hook, so they are handed to the logger here and then
    re-raised unchanged.
    """

    def __init__(self, transport: httpx.BaseTransport, colored_logger: "ColoredLogger"):
        self.transport = transport
        self.colored_logger = colored_logger

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        try:
            return self.transport.handle_request(request)
        except httpx.TransportError as e:
            attach_request(e, request)
            logger.debug(f"Transport error for {request.method} {request.url}: {e!r}")
            self.colored_logger.on_error(e)
            raise

    def close(self) -> None:
        self.transport.close()


class AsyncLoggingTransport(httpx.AsyncBaseTransport):
    """Async counterpart of ``LoggingTransport``."""

    def __init__(
        self, transport: httpx.AsyncBaseTransport, colored_logger: "ColoredLogger"
    ):
        self.transport = transport
        self.colored_logger = colored_logger

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        try:
            return await self.transport.handle_async_request(request)
        except httpx.TransportError as e:
            attach_request(e, request)
            logger.debug(f"Transport error for {request.method} {request.url}: {e!r}")
            self.colored_logger.on_error(e)
            raise

    async def aclose(self) -> None:
        await self.transport.aclose()

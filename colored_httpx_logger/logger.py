import logging
import sys
import time
import typing

import httpx

from colored_httpx_logger import payload
from colored_httpx_logger.colors import Color, resolve
from colored_httpx_logger.config import LoggerConfig
from colored_httpx_logger.model import FilterArgs, FormData, Shape, classify
from colored_httpx_logger.printer import BlockPrinter, Sink, stringify
from colored_httpx_logger.renderer import StructuredRenderer
from colored_httpx_logger.transport import AsyncLoggingTransport, LoggingTransport

logger = logging.getLogger(__name__)

TIMESTAMP_KEY = "colored_httpx_logger.timestamp"

# Requests sent with these methods are not expected to carry a body
NO_BODY_METHODS = frozenset({"GET", "HEAD"})

Filter = typing.Callable[[typing.Optional[httpx.Request], FilterArgs], bool]


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def stdout_supports_ansi() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def request_of(error: httpx.HTTPError) -> typing.Optional[httpx.Request]:
    try:
        return error.request
    except RuntimeError:
        # The exception was raised before httpx attached a request to it
        return None


class ColoredLogger:
    """
    Pretty-prints httpx requests, responses and errors as colored boxes.

    Wire it into a client with ``event_hooks()`` / ``async_event_hooks()``, or
    build a ready client with ``client()`` / ``async_client()``. Rendering never
    changes the request or response seen by the caller.

    Args:
        config: Output settings. When omitted, ``config_fields`` are used to
            build one.
        sink: Receives every printed line.
        supports_ansi: Asked on every color lookup whether the sink understands
            ANSI escape codes.
        filter: Return False to skip logging a single event.
        clock: Current time in milliseconds since the epoch.
    """

    def __init__(
        self,
        config: typing.Optional[LoggerConfig] = None,
        *,
        sink: Sink = print,
        supports_ansi: typing.Callable[[], bool] = stdout_supports_ansi,
        filter: typing.Optional[Filter] = None,
        clock: typing.Callable[[], int] = now_ms,
        **config_fields: typing.Any,
    ):
        if config is None:
            config = LoggerConfig(**config_fields)
        elif config_fields:
            config = config.updated(**config_fields)
        self.config = config
        self.sink = sink
        self.supports_ansi = supports_ansi
        self.filter = filter
        self.clock = clock
        self.printer = BlockPrinter(sink, config.max_width)
        self.renderer = StructuredRenderer(self.printer, config)

    def color(self, color: Color) -> str:
        return resolve(color, self.supports_ansi())

    def should_log(
        self, request: typing.Optional[httpx.Request], args: FilterArgs
    ) -> bool:
        if not self.config.enabled:
            return False
        if self.filter is not None and not self.filter(request, args):
            logger.debug(
                f"Filter skipped logging of {'response' if args.is_response else 'request'}"
                f" for {request.url if request is not None else 'unknown request'}"
            )
            return False
        return True

    def elapsed_ms(self, request: typing.Optional[httpx.Request]) -> int:
        if request is None:
            return 0
        mark = request.extensions.get(TIMESTAMP_KEY)
        if not isinstance(mark, int) or isinstance(mark, bool):
            return 0
        return self.clock() - mark

    def on_request(self, request: httpx.Request) -> None:
        extras = dict(request.extensions)
        request.extensions[TIMESTAMP_KEY] = self.clock()

        data = payload.request_payload(request)
        if not self.should_log(request, FilterArgs(is_response=False, data=data)):
            return

        if self.config.show_request:
            self.printer.print_boxed(
                self.color(self.config.request_color),
                header=f"Request ║ {request.method} ",
                text=str(request.url),
            )

        if self.config.show_request_headers:
            header_color = self.color(self.config.header_color)
            self.printer.print_table(
                header_color, query_parameters(request), header="Query Parameters"
            )
            self.printer.print_table(
                header_color, request_headers(request), header="Headers"
            )
            self.printer.print_table(header_color, extras, header="Extras")

        if self.config.show_request_body and request.method not in NO_BODY_METHODS:
            self.print_request_body(data)

    def print_request_body(self, data: typing.Any) -> None:
        if data is None:
            return
        body_color = self.color(self.config.body_color)
        if isinstance(data, FormData):
            self.printer.print_table(
                body_color, data.as_mapping(), header=f"Form data | {data.boundary}"
            )
        elif classify(data) is Shape.MAPPING:
            self.printer.print_table(body_color, data, header="Body")
        else:
            self.printer.print_block(body_color, stringify(data))

    def on_response(self, response: httpx.Response) -> None:
        request = response.request
        data = payload.response_payload(response)
        if not self.should_log(request, FilterArgs(is_response=True, data=data)):
            return

        elapsed = self.elapsed_ms(request)
        self.printer.print_boxed(
            self.color(self.config.response_status_color),
            header=(
                f"Response ║ {request.method} ║ Status: {response.status_code}"
                f" {response.reason_phrase} ║ Time: {elapsed} ms"
            ),
            text=str(request.url),
        )

        if self.config.show_response_headers:
            self.printer.print_table(
                self.color(self.config.response_header_color),
                response_headers(response),
                header="Headers",
            )

        if self.config.show_response_body:
            color = self.color(self.config.response_color)
            self.printer.emit(color)
            self.printer.emit(f"{color}╔ Body")
            self.printer.emit(f"{color}║")
            self.renderer.render_body(color, data)
            self.printer.emit(f"{color}║")
            self.printer.print_line(color, "╚")
            self.printer.emit(self.color(Color.RESET))

    def on_error(self, error: httpx.HTTPError) -> None:
        request = request_of(error)
        response = getattr(error, "response", None)
        data = payload.response_payload(response) if response is not None else None
        if not self.should_log(request, FilterArgs(is_response=True, data=data)):
            return

        self.printer.emit(self.color(Color.RESET))
        if self.config.show_errors:
            color = self.color(self.config.error_color)
            if isinstance(error, httpx.HTTPStatusError):
                self.printer.print_boxed(
                    color,
                    header=(
                        f"HTTPError ║ Status: {error.response.status_code}"
                        f" {error.response.reason_phrase}"
                        f" ║ Time: {self.elapsed_ms(request)} ms"
                    ),
                    text=str(error.request.url),
                )
                if data is not None:
                    self.printer.emit(f"{color}╔ {type(error).__name__}")
                    self.renderer.render_body(color, data)
                self.printer.print_line(color, "╚")
                self.printer.emit("")
            else:
                self.printer.print_boxed(
                    color,
                    header=f"HTTPError ║ {type(error).__name__}",
                    text=str(error),
                )
        self.printer.emit(self.color(Color.RESET))

    def needs_body(self, response: httpx.Response) -> bool:
        """Whether printing this response requires reading its body first."""
        if not self.config.enabled:
            return False
        if self.filter is not None:
            return True
        if response.is_error:
            return self.config.show_errors
        return self.config.show_response_body

    def dispatch_response(self, response: httpx.Response) -> None:
        """Route a response to ``on_response`` or, for 4xx/5xx, ``on_error``."""
        if not self.config.enabled:
            return
        if not response.is_error:
            self.on_response(response)
            return
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.on_error(e)

    def request_hook(self, request: httpx.Request) -> None:
        self.on_request(request)

    def response_hook(self, response: httpx.Response) -> None:
        if self.needs_body(response):
            response.read()
        self.dispatch_response(response)

    async def async_request_hook(self, request: httpx.Request) -> None:
        self.on_request(request)

    async def async_response_hook(self, response: httpx.Response) -> None:
        if self.needs_body(response):
            await response.aread()
        self.dispatch_response(response)

    def event_hooks(self) -> typing.Dict[str, typing.List[typing.Callable]]:
        return {"request": [self.request_hook], "response": [self.response_hook]}

    def async_event_hooks(self) -> typing.Dict[str, typing.List[typing.Callable]]:
        return {
            "request": [self.async_request_hook],
            "response": [self.async_response_hook],
        }

    def install(self, client: typing.Union[httpx.Client, httpx.AsyncClient]) -> None:
        """Add this logger's hooks to an existing client."""
        hooks = (
            self.async_event_hooks()
            if isinstance(client, httpx.AsyncClient)
            else self.event_hooks()
        )
        current = client.event_hooks
        client.event_hooks = {
            "request": current["request"] + hooks["request"],
            "response": current["response"] + hooks["response"],
        }

    def client(self, **kwargs: typing.Any) -> httpx.Client:
        """Build an ``httpx.Client`` that logs requests, responses and transport errors."""
        inner = kwargs.pop("transport", None) or httpx.HTTPTransport()
        client = httpx.Client(transport=LoggingTransport(inner, self), **kwargs)
        self.install(client)
        return client

    def async_client(self, **kwargs: typing.Any) -> httpx.AsyncClient:
        """Build an ``httpx.AsyncClient`` that logs requests, responses and transport errors."""
        inner = kwargs.pop("transport", None) or httpx.AsyncHTTPTransport()
        client = httpx.AsyncClient(
            transport=AsyncLoggingTransport(inner, self), **kwargs
        )
        self.install(client)
        return client


def query_parameters(request: httpx.Request) -> typing.Dict[str, typing.Any]:
    params: typing.Dict[str, typing.Any] = {}
    for key in request.url.params.keys():
        values = request.url.params.get_list(key)
        params[key] = values[0] if len(values) == 1 else values
    return params


def request_headers(request: httpx.Request) -> typing.Dict[str, typing.Any]:
    headers: typing.Dict[str, typing.Any] = dict(request.headers.items())
    content_type = request.headers.get("content-type")
    if content_type is not None:
        headers["contentType"] = content_type
    timeout = request.extensions.get("timeout") or {}
    for name in ("connect", "read", "write", "pool"):
        if timeout.get(name) is not None:
            headers[f"{name}Timeout"] = str(timeout[name])
    return headers


def response_headers(response: httpx.Response) -> typing.Dict[str, str]:
    return {
        key: ", ".join(response.headers.get_list(key))
        for key in response.headers.keys()
    }

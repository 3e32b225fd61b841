import math
import re
import typing

from colored_httpx_logger.model import Shape, classify

Sink = typing.Callable[[str], None]

NEWLINES = re.compile(r"[\r\n]+")


def quote(text: str) -> str:
    return '"' + NEWLINES.sub(" ", text) + '"'


def stringify(value: typing.Any, nested: bool = False) -> str:
    """One-line text form of a payload value.

    Strings are left as they are at the top level and quoted when they sit
    inside a map or list.
    """
    shape = classify(value)
    if shape is Shape.MAPPING:
        if not value:
            return "{}"
        entries = ", ".join(
            f"{quote(str(k))}: {stringify(v, nested=True)}" for k, v in value.items()
        )
        return "{ " + entries + " }"
    if shape is Shape.SEQUENCE:
        return "[" + ", ".join(stringify(v, nested=True) for v in value) + "]"
    if shape is Shape.BYTES:
        return "[" + ", ".join(str(b) for b in bytes(value)) + "]"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return quote(value) if nested else value
    return str(value)


class BlockPrinter:
    """
    Writes box-drawn lines to a sink.

    Every method takes the already resolved color code as its first argument
    and prefixes each emitted line with it.
    """

    def __init__(self, sink: Sink, max_width: int):
        self.sink = sink
        self.max_width = max_width

    def emit(self, line: str) -> None:
        self.sink(line)

    def print_line(self, color: str, prefix: str = "", suffix: str = "╝") -> None:
        self.emit(f"{color}{prefix}{'═' * self.max_width}{suffix}")

    def print_boxed(self, color: str, header: str, text: str) -> None:
        self.emit(f"{color}╔╣ {header}")
        self.emit(f"{color}║  {text}")
        self.print_line(color, "╚")

    def print_kv(self, color: str, key: str, value: typing.Any) -> None:
        prefix = f"╟ {key}: "
        message = stringify(value)
        if len(prefix) + len(message) > self.max_width:
            self.emit(f"{color}{prefix}")
            self.print_block(color, message)
        else:
            self.emit(f"{color}{prefix}{message}")

    def print_block(self, color: str, text: str) -> None:
        """Print ``text`` in slices of exactly ``max_width`` characters.

        Slicing ignores word boundaries so that columns stay aligned.
        """
        lines = math.ceil(len(text) / self.max_width)
        for i in range(lines):
            start = i * self.max_width
            self.emit(f"{color}║ {text[start:start + self.max_width]}")

    def print_table(
        self,
        color: str,
        mapping: typing.Optional[typing.Mapping[typing.Any, typing.Any]],
        header: str,
    ) -> None:
        if not mapping:
            return
        self.emit(f"{color}╔ {header} ")
        for key, value in mapping.items():
            self.print_kv(color, str(key), value)
        self.print_line(color, "╚")

"""
Recursive layout of structured bodies.

Maps, lists and byte strings are printed one entry per line, indented by
nesting depth and prefixed by the box border. With ``compact`` enabled, small
flat maps and short lists are printed inline instead.
"""

import dataclasses
import enum
import typing

from colored_httpx_logger.config import LoggerConfig
from colored_httpx_logger.model import Shape, classify
from colored_httpx_logger.printer import BlockPrinter, quote, stringify


class Enclosing(enum.Enum):
    ROOT = "root"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


@dataclasses.dataclass(frozen=True)
class RenderContext:
    """Where a map is being printed: its depth and what contains it."""

    depth: int
    enclosing: Enclosing = Enclosing.ROOT
    is_last: bool = True


class StructuredRenderer:
    def __init__(self, printer: BlockPrinter, config: LoggerConfig):
        self.printer = printer
        self.config = config

    def indent(self, depth: int) -> str:
        return self.config.tab_step * depth

    def line(self, color: str, depth: int, text: str) -> None:
        self.printer.emit(f"{color}║{self.indent(depth)}{text}")

    def can_flatten_map(self, data: typing.Mapping) -> bool:
        nested = (Shape.MAPPING, Shape.SEQUENCE, Shape.BYTES)
        if any(classify(value) in nested for value in data.values()):
            return False
        return len(stringify(data)) < self.config.max_width

    def can_flatten_sequence(self, data: typing.Sequence) -> bool:
        return (
            len(data) < self.config.flatten_list_limit
            and len(stringify(data)) < self.config.max_width
        )

    def render_body(self, color: str, value: typing.Any) -> None:
        """Print a whole response body, whatever its shape."""
        if value is None:
            return
        root = RenderContext(depth=self.config.initial_tab)
        shape = classify(value)
        if shape is Shape.MAPPING:
            if self.config.compact and self.can_flatten_map(value):
                self.line(color, root.depth, stringify(value))
            else:
                self.render_map(color, value, root)
        elif shape is Shape.BYTES:
            self.line(color, root.depth, "[")
            self.render_bytes(color, value, root.depth)
            self.line(color, root.depth, "]")
        elif shape is Shape.SEQUENCE:
            self.line(color, root.depth, "[")
            self.render_sequence(color, value, root.depth)
            self.line(color, root.depth, "]")
        else:
            self.printer.print_block(color, stringify(value))

    def render_map(
        self, color: str, data: typing.Mapping, context: RenderContext
    ) -> None:
        # A map nested under a key already printed its opening brace after the key
        if context.enclosing is not Enclosing.MAPPING:
            self.line(color, context.depth, "{")

        depth = context.depth + 1
        entries = list(data.items())
        for index, (key, value) in enumerate(entries):
            is_last = index == len(entries) - 1
            comma = "" if is_last else ","
            key_text = quote(str(key))
            shape = classify(value)

            if shape is Shape.MAPPING:
                if self.config.compact and self.can_flatten_map(value):
                    self.line(color, depth, f" {key_text}: {stringify(value)}{comma}")
                else:
                    self.line(color, depth, f" {key_text}: {{")
                    self.render_map(
                        color, value, RenderContext(depth, Enclosing.MAPPING, is_last)
                    )
            elif shape in (Shape.SEQUENCE, Shape.BYTES):
                if self.config.compact and self.can_flatten_sequence(value):
                    self.line(color, depth, f" {key_text}: {stringify(value)}{comma}")
                else:
                    self.line(color, depth, f" {key_text}: [")
                    if shape is Shape.BYTES:
                        self.render_bytes(color, value, depth)
                    else:
                        self.render_sequence(color, value, depth)
                    self.line(color, depth, f" ]{comma}")
            else:
                self.render_scalar_entry(color, key_text, value, depth, comma)

        closing = "," if context.enclosing is not Enclosing.ROOT and not context.is_last else ""
        self.line(color, context.depth, "}" + closing)

    def render_scalar_entry(
        self, color: str, key_text: str, value: typing.Any, depth: int, comma: str
    ) -> None:
        message = stringify(value, nested=True).replace("\n", "")
        indent_width = len(self.indent(depth))
        if indent_width + len(message) <= self.config.max_width:
            self.line(color, depth, f" {key_text}: {message}{comma}")
            return

        width = max(1, self.config.max_width - indent_width)
        pieces = [message[i : i + width] for i in range(0, len(message), width)]
        for index, piece in enumerate(pieces):
            label = f"{key_text}:" if index == 0 else ""
            tail = comma if index == len(pieces) - 1 else ""
            self.line(color, depth, f" {label} {piece}{tail}")

    def render_sequence(
        self, color: str, items: typing.Sequence, depth: int
    ) -> None:
        for index, element in enumerate(items):
            is_last = index == len(items) - 1
            comma = "" if is_last else ","
            shape = classify(element)

            if shape is Shape.MAPPING:
                if self.config.compact and self.can_flatten_map(element):
                    self.line(color, depth, f"  {stringify(element)}{comma}")
                else:
                    self.render_map(
                        color,
                        element,
                        RenderContext(depth + 1, Enclosing.SEQUENCE, is_last),
                    )
            elif shape in (Shape.SEQUENCE, Shape.BYTES) and not (
                self.config.compact and self.can_flatten_sequence(element)
            ):
                self.line(color, depth + 1, " [")
                if shape is Shape.BYTES:
                    self.render_bytes(color, element, depth + 1)
                else:
                    self.render_sequence(color, element, depth + 1)
                self.line(color, depth + 1, f" ]{comma}")
            else:
                self.line(color, depth + 2, f" {stringify(element, nested=True)}{comma}")

    def render_bytes(self, color: str, data: bytes, depth: int) -> None:
        data = bytes(data)
        size = self.config.chunk_size
        for start in range(0, len(data), size):
            chunk = data[start : start + size]
            self.line(color, depth, " " + ", ".join(str(b) for b in chunk))

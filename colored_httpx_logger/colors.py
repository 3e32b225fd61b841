import enum


class Color(str, enum.Enum):
    """Logical colors that a section of the log can be printed in."""

    RED = "red"
    BLACK = "black"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    RESET = "reset"


ANSI_CODES = {
    Color.BLACK: "\x1b[30m",
    Color.RED: "\x1b[31m",
    Color.GREEN: "\x1b[32m",
    Color.YELLOW: "\x1b[33m",
    Color.BLUE: "\x1b[34m",
    Color.MAGENTA: "\x1b[35m",
    Color.CYAN: "\x1b[36m",
    Color.WHITE: "\x1b[37m",
    Color.RESET: "\x1b[0m",
}

# Used when the sink is not a terminal. IDE debug consoles still render these,
# so the codes are intentionally the same as ANSI_CODES except that black falls
# back to the terminal default.
DEBUG_CONSOLE_CODES = {
    Color.BLACK: "\033[0m",
    Color.RED: "\033[31m",
    Color.GREEN: "\033[32m",
    Color.YELLOW: "\033[33m",
    Color.BLUE: "\033[34m",
    Color.MAGENTA: "\033[35m",
    Color.CYAN: "\033[36m",
    Color.WHITE: "\033[37m",
    Color.RESET: "\033[0m",
}


def resolve(color: Color, supports_ansi: bool) -> str:
    """Return the escape sequence that switches the sink to ``color``.

    Anything that is not a known color resolves to reset.
    """
    table = ANSI_CODES if supports_ansi else DEBUG_CONSOLE_CODES
    try:
        return table[Color(color)]
    except ValueError:
        return table[Color.RESET]

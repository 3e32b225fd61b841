import logging
import typing

LOGGING_FORMAT = "[%(asctime)s.%(msecs)03d][%(name)-20s][%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format=LOGGING_FORMAT,
        datefmt=DATE_FORMAT,
    )


def log_sink(
    target: logging.Logger, level: int = logging.INFO
) -> typing.Callable[[str], None]:
    """
    Build a sink that sends every printed line through a logger.

    Args:
        target: The logger instance to use for output.
        level: The level each line is logged at.
    """

    def sink(line: str) -> None:
        target.log(level, line)

    return sink

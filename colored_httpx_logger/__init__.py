from colored_httpx_logger.colors import Color, resolve
from colored_httpx_logger.config import LoggerConfig
from colored_httpx_logger.logger import ColoredLogger, TIMESTAMP_KEY
from colored_httpx_logger.logging_config import configure_logging, log_sink
from colored_httpx_logger.model import FilterArgs, FormData, Shape, classify
from colored_httpx_logger.transport import AsyncLoggingTransport, LoggingTransport

__all__ = [
    "AsyncLoggingTransport",
    "Color",
    "ColoredLogger",
    "FilterArgs",
    "FormData",
    "LoggerConfig",
    "LoggingTransport",
    "Shape",
    "TIMESTAMP_KEY",
    "classify",
    "configure_logging",
    "log_sink",
    "resolve",
]

"""
Logging configuration for ollama-sdk.
Initializes loguru and intercepts standard library logging.

The package disables its own loguru namespace on import; call
``setup_logging()`` to see its output.
"""

import logging
import sys

from loguru import logger

from ollama_sdk.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """
    Routes standard library log records (httpx, httpcore) into loguru.
    See: https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None) -> None:
    """
    Configures loguru to write SDK and transport logs to stderr.

    Args:
        level: Minimum level. Defaults to ``settings.LOG_LEVEL``.
    """
    level = (level or settings.LOG_LEVEL).upper()

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True)
    logger.enable("ollama_sdk")

    for name in ["httpx", "httpcore"]:
        _logger = logging.getLogger(name)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False

    logger.debug(f"Logging initialized at {level}")

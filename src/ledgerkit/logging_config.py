"""Logging setup shared by the API server, the tool server and the CLI.

Usage:
    from ledgerkit.logging_config import setup_logging
    setup_logging("api")
"""

import logging
import sys
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that are chatty at INFO
NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "uvicorn.access",
    "httpx",
]


def setup_logging(
    process_name: str,
    level: int | str = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Configure the root logger with a single stream handler.

    Args:
        process_name: Name of the running surface ("api", "mcp", "cli")
        level: Log level for the handler
        stream: Output stream; defaults to stderr so stdout stays free for
            protocol traffic and command output

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop handlers from earlier calls so repeated setup does not duplicate output
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.debug("Logging initialized for %s at %s", process_name, logging.getLevelName(level))
    return root_logger

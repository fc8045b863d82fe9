from __future__ import annotations

import sys
from typing import Any

from loguru import logger

LOG_FORMAT = "{time:HH:mm:ss} | {level: <7} | {name}:{function} - {message}"


def configure_logging(level: str = "INFO", sink: Any = None, log_file: str | None = None) -> None:
    """Install the engine's loguru sinks, replacing any existing ones.

    *sink* defaults to stderr so stdout stays free for CLI output and the
    MCP stdio transport.
    """
    logger.remove()
    logger.add(sink if sink is not None else sys.stderr, level=level.upper(), format=LOG_FORMAT)
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            format=LOG_FORMAT,
            rotation="1 day",
            retention="14 days",
        )

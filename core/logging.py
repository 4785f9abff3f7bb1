"""
Logging for Timezone Bot.

``setup_logging()`` is called once by the entry point. Modules only ask for a
named logger; the helpers below give timezone changes and failures a
consistent ``key=value`` shape so they can be grepped out of the console log.
"""
import logging
import sys
from typing import Any, Optional

import config

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("discord", "discord.http", "discord.gateway", "uvicorn.access")


class ConsoleHandler(logging.StreamHandler):
    """stdout handler installed by ``setup_logging``."""

    def __init__(self):
        super().__init__(sys.stdout)


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Send log records to stdout.

    Args:
        level: Level name, defaults to ``config.LOG_LEVEL``
        fmt: Record format, defaults to ``config.LOG_FORMAT``
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO))

    if not any(isinstance(h, ConsoleHandler) for h in root_logger.handlers):
        handler = ConsoleHandler()
        handler.setFormatter(logging.Formatter(fmt or config.LOG_FORMAT))
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


def format_context(**context: Any) -> str:
    """Render context as ``key=value`` pairs, skipping empty values."""
    return " ".join(f"{key}={value}" for key, value in context.items() if value is not None)


def log_timezone_change(user_id: int, guild_id: int, timezone: str, rename: str) -> None:
    """Record a successful ``!settimezone`` and what happened to the nickname."""
    get_logger("users").info(
        "Timezone set | "
        + format_context(user_id=user_id, guild_id=guild_id, timezone=timezone, rename=rename)
    )


def log_error(message: str, exc: Optional[BaseException] = None, **context: Any) -> None:
    """
    Log a failure with its context and, when given, the traceback.

    Args:
        message: What was being attempted
        exc: The exception that was raised
        **context: Identifiers that help locate the failure (user_id, kind, ...)
    """
    details = format_context(**context)
    get_logger("errors").error(f"{message} | {details}" if details else message, exc_info=exc)

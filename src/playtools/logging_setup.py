"""
Logging configuration for PLAYTOOLS.

The interactive menu owns the whole terminal, so it only ever logs to a file.
Non-interactive commands log to stderr through rich.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "asyncio")


def setup_logging(
    interactive: bool,
    log_file: Optional[str] = None,
    level: str = "INFO",
    verbose: bool = False,
) -> logging.Logger:
    """Configure the ``playtools`` logger and return it.

    Args:
        interactive: True when the full-screen menu is about to run
        log_file: Optional path for a rotating log file
        level: Level for the log file handler
        verbose: Show DEBUG messages on stderr for non-interactive commands
    """
    logger = logging.getLogger("playtools")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, encoding="utf-8", maxBytes=2_000_000, backupCount=3)
        file_handler.setLevel(logging.DEBUG if verbose else level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if not interactive:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger

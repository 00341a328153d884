"""
Logging setup for the ideathread CLI, using loguru.

Library modules log through ``loguru.logger`` and never configure it. Only
the CLI entry point calls ``setup_logging`` (or ``setup_logging_from_config``).
"""

import os
import sys

from loguru import logger

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Send ideathread log records to stderr and, optionally, a rotating file.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, filter="ideathread")

    if log_file:
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)


def setup_logging_from_config(config, verbose: bool = False) -> None:
    """Configure logging from ``logging.*`` config keys.

    A relative ``logging.file`` is placed under ``paths.log_dir``.
    ``verbose`` forces DEBUG.
    """
    level = "DEBUG" if verbose else str(config.get("logging.level", "WARNING"))
    log_file = config.get("logging.file") or None
    if log_file:
        log_file = os.path.expanduser(log_file)
        if not os.path.isabs(log_file):
            log_dir = os.path.expanduser(config.get("paths.log_dir", "."))
            os.makedirs(log_dir, exist_ok=True)
            log_file = os.path.join(log_dir, log_file)
    setup_logging(level=level, log_file=log_file)

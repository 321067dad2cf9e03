"""
Logging Configuration

Configures logging for the catalog tool.
Output goes to stderr so stdout stays clean for catalog listings and CSV exports.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Configure the `storefront` package logger.

    Args:
        verbose: If True, set level to DEBUG (also lets urllib3 connection logs through)
        quiet: If True, set level to WARNING
        log_file: Optional path; when given, records are also appended there

    Returns:
        The configured package logger
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger("storefront")
    logger.setLevel(level)

    # Calling twice must not duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s " + LOG_FORMAT))
        logger.addHandler(file_handler)

    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger

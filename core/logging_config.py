"""Logging setup for composer-report."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the 'core' and 'apps' loggers.

    Diagnostics go to stderr so they never mix with the progress line.
    Without verbose only warnings and errors are shown.

    Args:
        verbose: Enable DEBUG output

    Returns:
        The configured 'core' logger
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=False,
    )
    handler.setLevel(level)

    for name in ("core", "apps"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False

    return logging.getLogger("core")

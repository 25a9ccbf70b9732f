"""Logging setup for codetally.

Library modules log through get_logger(); only the CLI installs a handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Route codetally logs to stderr through a rich handler.

    Args:
        verbose: Show DEBUG records (per-file measures, parser choice)
        quiet: Show ERROR records only

    Returns:
        The ``codetally`` logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_path=verbose,
    )
    # force replaces handlers left by an earlier invocation in the same process
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True
    )

    logger = logging.getLogger("codetally")
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, namespaced under ``codetally``."""
    if not name.startswith("codetally"):
        name = f"codetally.{name}"
    return logging.getLogger(name)

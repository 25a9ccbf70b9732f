"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from codetally.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [
        (False, False, logging.WARNING),
        (True, False, logging.DEBUG),
        (False, True, logging.ERROR),
        (True, True, logging.ERROR),
    ],
)
def test_levels(verbose, quiet, expected):
    logger = setup_logging(verbose=verbose, quiet=quiet)
    assert logger.name == "codetally"
    assert logger.level == expected


def test_single_rich_handler_after_repeated_setup():
    setup_logging()
    setup_logging()
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)


def test_get_logger_namespaces_modules():
    assert get_logger("scanner").name == "codetally.scanner"
    assert get_logger("codetally.scanner").name == "codetally.scanner"

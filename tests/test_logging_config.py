"""Tests for logging setup."""

import logging

from prodmatrix.logging_config import setup_logging


def _restore(root: logging.Logger, handlers: list, level: int):
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_levels():
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        setup_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

        setup_logging("info")
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
    finally:
        _restore(root, *saved)


def test_setup_logging_unknown_level_falls_back():
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        setup_logging("CHATTY")
        assert root.level == logging.WARNING
    finally:
        _restore(root, *saved)

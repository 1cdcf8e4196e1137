"""
Logging helpers.

Module loggers are children of the top-level package logger, which owns the
single stdout handler and the configured level.
"""

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _package_logger(name: str) -> logging.Logger:
    root = logging.getLogger(name.split(".")[0])
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        if root.level == logging.NOTSET:
            root.setLevel(logging.INFO)
    return root


def configure_logging(level: str = "INFO", name: str = "issue_tracker") -> None:
    """Apply the configured level to the package logger."""
    _package_logger(name).setLevel(getattr(logging, level.upper(), logging.INFO))


def setup_logger(name: str) -> logging.Logger:
    """Get a module logger writing to stdout."""
    _package_logger(name)
    return logging.getLogger(name)

"""Logging configuration for flactagger."""

from __future__ import annotations

from tqdm.contrib.logging import logging_redirect_tqdm

import contextlib
import logging


PACKAGE_LOGGER = "flactagger"


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the flactagger package logger."""
    if verbose:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(message)s"
    elif quiet:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.INFO
        fmt = "%(message)s"

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    package_logger.setLevel(level)
    package_logger.addHandler(handler)


@contextlib.contextmanager
def progress_logging():
    """Route flactagger log records through tqdm while a progress bar is shown.

    Console handlers of the package logger are swapped for one that writes
    with ``tqdm.write``, so metaflac debug lines land above the bar instead
    of inside it. The original handlers are restored on exit.
    """
    with logging_redirect_tqdm(loggers=[logging.getLogger(PACKAGE_LOGGER)]):
        yield

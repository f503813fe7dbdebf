"""Diagnostic output for the security exit.

The exit runs inside a host process that owns stdout, so every diagnostic
goes to **stderr** through the standard :mod:`logging` package. Modules log
to ``logging.getLogger(__name__)``; this module installs a single
:class:`rich.logging.RichHandler` on the ``mqjwtexit`` package logger.

* **Colour control** -- respects ``NO_COLOR`` and ``TERM=dumb``.
* **Debug switch** -- :func:`enable_debug` is what the ``DEBUG`` exit data
  option turns on.

Hosts that configure logging themselves can skip :func:`setup_logging`
entirely; records then propagate to their handlers as usual.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "mqjwtexit"

_handler: Optional[RichHandler] = None


def setup_logging(level: int | str = logging.INFO, no_color: bool = False) -> logging.Logger:
    """Install the stderr handler on the package logger.

    Calling this more than once only adjusts the level; the handler is
    installed a single time.

    Args:
        level: Logging level name or number for the package logger.
        no_color: Disable Rich markup and colour regardless of environment.

    Returns:
        The ``mqjwtexit`` package logger.
    """
    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    if _handler is None:
        console = Console(
            file=sys.stderr,
            no_color=no_color or _should_disable_color(),
            stderr=True,
        )
        _handler = RichHandler(
            console=console,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(_handler)
    return logger


def enable_debug() -> logging.Logger:
    """Switch the package logger to DEBUG, installing the handler if needed."""
    return setup_logging(logging.DEBUG)


def reset_logging() -> None:
    """Remove the installed handler and restore the package logger defaults.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False

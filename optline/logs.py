"""
Optline logging setup for scripts built on the registry.

configure() installs one rich handler on a named logger (the engine logger
"optline" by default) and picks the level from the usual preset values:
quiet → ERROR, verbosity 0 → INFO, verbosity 1 or more → DEBUG.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import *

ENGINE = "optline"


def level(verbosity=0, quiet=False):
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbosity > 0 else logging.INFO


def configure(verbosity=0, quiet=False, colorful=False, *, name=ENGINE):
    """
    Set up the logger called 'name' and return it.

    A handler installed by an earlier call is replaced, so calling this once
    per run after the options are parsed is enough.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level(verbosity, quiet))

    for handler in [handler for handler in logger.handlers if getattr(handler, "_optline", False)]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True, no_color=not colorful, highlight=colorful),
        show_time=False,
        show_path=verbosity > 1,
        markup=False,
    )
    handler._optline = True
    logger.addHandler(handler)
    return logger


def trace(*, name=ENGINE):
    """
    Switch the engine logger to DEBUG so every scanned token is reported.
    """
    logger = logging.getLogger(name)
    if not any(getattr(handler, "_optline", False) for handler in logger.handlers):
        return configure(1, name=name)
    logger.setLevel(logging.DEBUG)
    return logger


__all__ = (
    "configure",
    "level",
    "trace",
)

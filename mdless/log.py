"""Minimal logging helpers for mdless."""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger under the ``mdless.`` namespace.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        logging.Logger: Logger named ``mdless.<name>``.

    Examples:
        get_logger("render").name  # "mdless.render"
    """
    if not (name == "mdless" or name.startswith("mdless.")):
        name = f"mdless.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool) -> None:
    """Send mdless debug records to stderr when `verbose` is set."""
    logger = logging.getLogger("mdless")
    if not verbose or logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

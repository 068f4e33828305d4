"""
Logger factory for the engine.

Every module asks for a child of the ``sightline`` logger so that a host
can silence or raise the whole engine with one call.
"""

import logging

from rich.logging import RichHandler

ROOT_NAME = "sightline"

_configured = False


def create_logger(name: str) -> logging.Logger:
    """Return the engine logger for a module."""
    return logging.getLogger(f"{ROOT_NAME}.{name}")


def configure_logging(level=None) -> logging.Logger:
    """Attach a rich console handler to the engine root logger.

    The level defaults to the configured log_level. Calling this more than
    once only updates the level.
    """
    global _configured

    if level is None:
        from config import CONFIG

        level = CONFIG.log_level

    root = logging.getLogger(ROOT_NAME)
    root.setLevel(level)
    if not _configured:
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
        _configured = True
    return root

"""
Logging configuration for the ``finance_coach`` package.

Library modules only call ``get_logger("finance_coach.<module>")``. Handlers are
attached once, by whatever host application calls ``configure_logging``.
"""
import logging
import sys

from .config import LOG_LEVEL

_PKG_LOGGER_NAME = 'finance_coach'
_CONFIGURED = False


def _parse_level(level):
    if isinstance(level, int):
        return level
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(level=None, fmt=None, stream=sys.stderr):
    """Attach a single StreamHandler to the package root logger (once)."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or '%(asctime)s %(name)s %(levelname)s %(message)s'))
    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name):
    """Return a logger, keeping the package silent until configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)

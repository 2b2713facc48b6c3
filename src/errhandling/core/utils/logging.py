"""Logging utilities for errhandling (thin wrappers).

The library never configures the root logger. ``configure_logging`` only
attaches a handler to the ``errhandling`` logger, for applications that want
to see boundary trips and terminations without setting up logging themselves.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

LIBRARY_LOGGER = "errhandling"
_HANDLER_NAME = "errhandling-console"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger by name (no prefixing).

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Attach a console handler to the library logger.

    Repeated calls only update the level.

    Args:
        level: Level name or constant. Defaults to ``logging.level`` from the
            active configuration.

    Returns:
        The configured library logger.
    """
    if level is None:
        from errhandling.core.config import get_config

        level = get_config().logging.level

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(_to_level(level))
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger


def set_component_level(component: str, level: Union[str, int]) -> None:
    """Set log level for a specific component.

    Accepts either string levels (e.g., "INFO") or numeric constants.
    Components are given relative to the package, e.g. ``"core.propagation"``.
    """
    name = component if component.startswith(LIBRARY_LOGGER) else f"{LIBRARY_LOGGER}.{component}"
    logging.getLogger(name).setLevel(_to_level(level))

"""Termination of a unit of work.

``must`` failures and signals raised with no boundary to catch them end the
current unit of work. The failure is raised as :class:`Unrecoverable`, which
derives from ``BaseException`` so that ordinary ``except Exception`` blocks
and boundaries let it through.
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn

from errhandling.core.chain import ChainedError
from errhandling.core.config import ConfigError, TerminationConfig, get_config

logger = logging.getLogger(__name__)


class Unrecoverable(BaseException):
    """The current unit of work cannot continue.

    Attributes:
        error: The chain that caused the termination.
        reason: Short description of why the work was terminated.
    """

    def __init__(self, error: ChainedError, reason: str) -> None:
        self.error = error
        self.reason = reason
        super().__init__(f"{reason}: {error}")


def terminate(error: Any, reason: str) -> NoReturn:
    """Terminate the current unit of work.

    Args:
        error: The failure; promoted to a chain if needed.
        reason: Why the work is terminated.

    Raises:
        SystemExit: When ``termination.exit_code`` is configured.
        Unrecoverable: Otherwise.
    """
    chain = ChainedError.from_error(error)
    try:
        settings = get_config().termination
    except ConfigError as e:
        logger.warning("Using default termination settings: %s", e)
        settings = TerminationConfig()

    if settings.log_report:
        logger.critical("%s\n%s", reason, chain.full_report())

    failure = Unrecoverable(chain, reason)
    if settings.exit_code is not None:
        raise SystemExit(settings.exit_code) from failure
    raise failure


__all__ = ["Unrecoverable", "terminate"]

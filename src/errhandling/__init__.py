"""
errhandling: structured error chains and non-local error propagation
====================================================================

Two pieces that work together:

- Immutable error chains (``ChainedError``) that keep the full causal history
  of a failure and render it as ``a -> b -> c`` or as a full report with the
  root cause.
- Propagation signals and boundaries: a deeply nested call can short-circuit
  to a single recovery point with ``propagate``/``ensure_no_error`` without
  every intermediate caller checking errors.

Examples:
    from errhandling import boundary, ensure_no_error, with_cause

    @boundary
    def load_profile(user_id):
        user = ensure_no_error(*fetch_user(user_id), "could not fetch user")
        prefs = ensure_no_error(*fetch_prefs(user), "could not fetch preferences")
        return (user, prefs), None

    profile, err = load_profile(42)
    if err is not None:
        print(err.full_report())
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Optional

from errhandling.core import (
    Boundary,
    BoundaryState,
    ChainedError,
    ConfigurationError,
    ErrhandlingError,
    ErrorOnly,
    Failure,
    ForeignError,
    Outcome,
    PrintableError,
    PropagationSignal,
    Slot,
    Success,
    UnrecognizedSignalError,
    Unrecoverable,
    ValueErrorPair,
    boundary,
    construct,
    decorate,
    ensure_no_error,
    must,
    on_error,
    on_success,
    propagate,
    propagate_error,
    terminate,
    with_cause,
)
from errhandling.core.config import ConfigError, ErrhandlingConfig, load_config, set_config
from errhandling.core.utils.logging import configure_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version detection
try:
    __version__ = importlib.metadata.version("errhandling")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"


def init(
    config_path: Optional[str] = None,
    env_prefix: str = "ERRHANDLING",
    console_logging: bool = False,
) -> ErrhandlingConfig:
    """Load and activate the library configuration.

    Optional: without a call to ``init`` the configuration is loaded lazily
    from the default locations on first use.

    Args:
        config_path: Optional path to a YAML configuration file.
        env_prefix: Prefix of environment variable overrides.
        console_logging: Attach a console handler to the ``errhandling``
            logger at the configured level.

    Returns:
        The active configuration.
    """
    config = load_config(config_path, env_prefix=env_prefix)
    set_config(config)
    if console_logging:
        configure_logging(config.logging.level)
    return config


__all__ = [
    "init",
    "Boundary",
    "BoundaryState",
    "ChainedError",
    "ConfigError",
    "ConfigurationError",
    "ErrhandlingConfig",
    "ErrhandlingError",
    "ErrorOnly",
    "Failure",
    "ForeignError",
    "Outcome",
    "PrintableError",
    "PropagationSignal",
    "Slot",
    "Success",
    "UnrecognizedSignalError",
    "Unrecoverable",
    "ValueErrorPair",
    "boundary",
    "construct",
    "decorate",
    "ensure_no_error",
    "must",
    "on_error",
    "on_success",
    "propagate",
    "propagate_error",
    "terminate",
    "with_cause",
    "__version__",
]

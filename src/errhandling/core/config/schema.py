"""Configuration schema module.

This module defines the data structures used to configure errhandling.
The schemas are designed to be minimal but extensible through Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Logging level of the ``errhandling`` logger
            (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: str = "WARNING"

    # Allow arbitrary extension
    model_config = {"extra": "allow"}

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        normalized = str(value).upper()
        if normalized not in _LEVELS:
            raise ValueError(f"level must be one of {', '.join(_LEVELS)}, got {value!r}")
        return normalized


class TerminationConfig(BaseModel):
    """How a unit of work is terminated by ``must`` or an unhandled signal.

    Attributes:
        exit_code: When set, termination raises SystemExit with this code
            instead of Unrecoverable.
        log_report: Log the full error report at CRITICAL before terminating.
    """

    exit_code: Optional[int] = None
    log_report: bool = True

    model_config = {"extra": "allow"}


class ErrhandlingConfig(BaseModel):
    """Root configuration.

    Attributes:
        logging: Logging configuration
        termination: Termination behavior
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    termination: TerminationConfig = Field(default_factory=TerminationConfig)

    # Allow arbitrary extension
    model_config = {"extra": "allow"}

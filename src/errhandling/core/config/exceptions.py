"""Configuration exception module.

This module defines exception types specific to the configuration system.
"""

from errhandling.core.exceptions import ErrhandlingError


class ConfigError(ErrhandlingError):
    """Exception raised for configuration errors.

    This includes errors such as:
    - Invalid configuration format
    - Configuration validation failures
    - File access errors
    """
    pass

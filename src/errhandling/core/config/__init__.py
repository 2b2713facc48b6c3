"""errhandling configuration system.

Configuration is loaded from a YAML file and ``ERRHANDLING_*`` environment
variables, with ``${VAR}`` substitution and Pydantic validation.

Example usage:
```python
from errhandling.core.config import get_config, load_config

config = load_config("errhandling.yaml")
config.termination.exit_code  # None unless configured

# The active configuration is loaded lazily on first access
level = get_config().logging.level
```

Example file:
```yaml
logging:
  level: DEBUG
termination:
  exit_code: 70
  log_report: true
```
"""

from .schema import ErrhandlingConfig, LoggingConfig, TerminationConfig
from .loader import get_config, load_config, reset_config, set_config
from .exceptions import ConfigError

__all__ = [
    'ErrhandlingConfig',
    'LoggingConfig',
    'TerminationConfig',
    'load_config',
    'get_config',
    'set_config',
    'reset_config',
    'ConfigError'
]

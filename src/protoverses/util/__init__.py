__all__ = [
    "AccretionError",
    "ConfigError",
    "DEFAULT_PARAMS",
    "RandomSource",
    "resolve_params",
    "setup_logging",
]

from .config import DEFAULT_PARAMS, resolve_params
from .errors import AccretionError, ConfigError
from .log import setup_logging
from .rng import RandomSource

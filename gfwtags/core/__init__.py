"""Core types: configuration, exit codes, results."""

from .config import Config, ConfigError, load_config, resolve_token
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "resolve_token",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

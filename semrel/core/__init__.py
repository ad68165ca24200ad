"""Core types: results, exit codes and configuration."""

from .config import Config, ConfigError, load_config, load_config_or_default, resolve_editor
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "resolve_editor",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

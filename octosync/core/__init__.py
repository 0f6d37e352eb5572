"""Core types: results, exit codes, configuration."""

from .config import (
    Config,
    ConfigurationError,
    GitHubConfig,
    SyncConfig,
    get_github_token,
    load_config,
    org_name,
)
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigurationError",
    "GitHubConfig",
    "SyncConfig",
    "get_github_token",
    "load_config",
    "org_name",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

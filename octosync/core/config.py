"""Run configuration.

Everything a sync run reads is resolved once at startup into a frozen
``SyncConfig`` and passed explicitly to the services:

- the organization name (CLI argument or working directory name)
- the GitHub access token (environment variable)
- optional overrides from an ``octosync.toml`` file
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_API_URL",
    "DEFAULT_PER_PAGE",
    "GITHUB_TOKEN_ENV",
    "Config",
    "ConfigurationError",
    "GitHubConfig",
    "SyncConfig",
    "find_config",
    "get_github_token",
    "load_config",
    "org_name",
]

GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 50
DEFAULT_TIMEOUT = 30.0
CONFIG_FILENAME = "octosync.toml"


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """Missing token or unusable config file. Fatal before any remote call."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Remote API settings."""

    api_url: str = DEFAULT_API_URL
    per_page: int = DEFAULT_PER_PAGE
    token_env: str = GITHUB_TOKEN_ENV
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True, slots=True)
class Config:
    """Contents of an ``octosync.toml`` file."""

    github: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        github: StrDict = get_table(data, "github") or {}
        per_page = get_int(github, "per_page")
        if per_page is not None and not 1 <= per_page <= 100:
            raise ValueError(f"github.per_page must be between 1 and 100, got {per_page}")
        timeout = get_float(github, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"github.timeout must be a positive number of seconds, got {timeout}")

        return cls(
            github=GitHubConfig(
                api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
                per_page=per_page or DEFAULT_PER_PAGE,
                token_env=get_str(github, "token_env") or GITHUB_TOKEN_ENV,
                timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            )
        )


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Everything one reconciliation run needs, resolved at startup."""

    org: str
    token: str
    root: Path
    debug: bool = False
    github: GitHubConfig = field(default_factory=GitHubConfig)


def org_name(arg: str | None, cwd: Path | None = None) -> str:
    """Return the organization to sync.

    An explicit argument wins; otherwise the base name of the working
    directory is used, so running inside ``~/src/my-org`` syncs ``my-org``.
    """
    if arg:
        return arg
    base = cwd if cwd is not None else Path.cwd()
    return base.name


def get_github_token(
    env: Mapping[str, str] | None = None,
    var: str = GITHUB_TOKEN_ENV,
) -> Result[str, ConfigurationError]:
    """Read the pre-issued access token from the environment."""
    source = os.environ if env is None else env
    value = source.get(var, "")
    if value:
        return Ok(value)
    return Err(
        ConfigurationError(
            message=f"You must set the {var} variable with a Github access token",
            hint="Create a token at https://github.com/settings/tokens",
        )
    )


def _parse_toml(path: Path) -> Result[StrDict, ConfigurationError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigurationError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigurationError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigurationError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigurationError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigurationError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigurationError]:
    """Load and validate an ``octosync.toml`` file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigurationError(f"Invalid config structure: {e}", path=path))


def find_config(root: Path) -> Path | None:
    """Return ``<root>/octosync.toml`` if it exists."""
    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from octosync.cli._helpers import exit_on_error
from octosync.core.config import (
    Config,
    SyncConfig,
    find_config,
    get_github_token,
    load_config,
    org_name,
)
from octosync.core.errors import ErrorCode
from octosync.github.http import RealHttpClient
from octosync.github.repos import GitHubRepositoriesService, RepositoriesService
from octosync.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: SyncConfig
    console: ConsoleProtocol
    service: RepositoriesService


def build_context(
    *,
    org: str | None,
    debug: bool,
    config_path: Path | None = None,
) -> CLIContext:
    """Resolve the run configuration once; exit on configuration errors."""
    console = RichConsole(debug=debug)
    try:
        root = Path.cwd()
    except OSError as e:
        console.error(f"cannot read the working directory: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    org_resolved = org_name(org, root)
    if not org_resolved:
        console.error("cannot derive an organization name from the working directory")
        console.print("hint: pass ORG_NAME explicitly", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    path = config_path or find_config(root)
    file_config = Config()
    if path is not None:
        file_config = exit_on_error(load_config(path), console, ErrorCode.ENV_ERROR)
        console.debug(f"loaded config from {path}")

    github = file_config.github
    token = exit_on_error(
        get_github_token(var=github.token_env), console, ErrorCode.ENV_ERROR
    )

    config = SyncConfig(
        org=org_resolved,
        token=token,
        root=root,
        debug=debug,
        github=github,
    )
    http = RealHttpClient(token, timeout=github.timeout)
    return CLIContext(
        config=config,
        console=console,
        service=GitHubRepositoriesService(http, api_url=github.api_url),
    )

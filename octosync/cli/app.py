from __future__ import annotations

from pathlib import Path

import typer

from octosync import __version__
from octosync.cli._helpers import exit_on_error
from octosync.cli.context import build_context
from octosync.core.errors import ErrorCode
from octosync.output.console import Style
from octosync.sync.reconcile import Reconciler, summarize


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def sync(
    org: str | None = typer.Argument(
        None,
        metavar="[ORG_NAME]",
        help="Name of github org to sync. Defaults to name of current working directory.",
        show_default=False,
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to an octosync.toml file (default: ./octosync.toml if present).",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Report whether each repository of a GitHub org would be cloned or fetched."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    ctx = build_context(org=org, debug=debug, config_path=config)
    reconciler = Reconciler(
        service=ctx.service,
        console=ctx.console,
        root=ctx.config.root,
        per_page=ctx.config.github.per_page,
    )
    decisions = exit_on_error(
        reconciler.reconcile(ctx.config.org), ctx.console, ErrorCode.NETWORK_ERROR
    )

    counts = summarize(decisions)
    ctx.console.print(
        f"{len(decisions)} repositories: {counts['clone']} to clone, "
        f"{counts['fetch']} to fetch, {counts['error']} with errors",
        Style.INFO,
    )


def main() -> None:
    app()

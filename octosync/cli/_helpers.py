"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TypeVar

import typer

from octosync.core.errors import ErrorCode
from octosync.core.result import Ok, Result
from octosync.output.console import ConsoleProtocol, Style

T = TypeVar("T")
E = TypeVar("E")


def exit_on_error[T, E](
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode,
) -> T:
    """Return the Ok value, or print the error and exit with ``error_code``.

    Error objects are expected to carry ``message`` and an optional ``hint``.
    """
    if isinstance(result, Ok):
        return result.value

    error = result.error
    message: str = getattr(error, "message", str(error))
    hint: str | None = getattr(error, "hint", None)
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(error_code))

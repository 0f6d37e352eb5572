"""Result type for explicit error handling.

Operations that can fail return ``Ok(value)`` or ``Err(error)`` instead of
raising, so callers decide at each seam whether a failure is fatal (a remote
listing error) or local to one item (a filesystem error for one repository).

Usage:
    match list_repositories(org, service):
        case Ok(repos):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding ``value``."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding ``error``."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Apply ``f`` to the error, e.g. to wrap a transport error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]

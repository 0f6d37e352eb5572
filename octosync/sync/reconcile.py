"""Decide the sync action for every repository of an organization.

Nothing is cloned or fetched here: the output is a list of
``SyncDecision`` that a separate executor can act on.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from octosync.core.config import DEFAULT_PER_PAGE
from octosync.core.result import Err, Ok, Result
from octosync.github.repos import (
    RemoteAPIError,
    RepositoriesService,
    RepositoryDescriptor,
    list_repositories,
)
from octosync.output.console import ConsoleProtocol, Style
from octosync.sync.state import (
    ClonedAsGitRepo,
    ConflictingPath,
    LocalSyncState,
    NotPresent,
    inspect,
)

__all__ = [
    "ActionError",
    "Clone",
    "Fetch",
    "Reconciler",
    "SyncAction",
    "SyncDecision",
    "action_for",
    "summarize",
]


@dataclass(frozen=True, slots=True)
class Clone:
    def __str__(self) -> str:
        return "clone"


@dataclass(frozen=True, slots=True)
class Fetch:
    def __str__(self) -> str:
        return "fetch"


@dataclass(frozen=True, slots=True)
class ActionError:
    """The repository needs manual attention before it can be synced."""

    reason: str

    def __str__(self) -> str:
        return "error"


type SyncAction = Clone | Fetch | ActionError


@dataclass(frozen=True, slots=True)
class SyncDecision:
    repository: RepositoryDescriptor
    action: SyncAction


def action_for(state: LocalSyncState) -> SyncAction:
    match state:
        case NotPresent():
            return Clone()
        case ClonedAsGitRepo():
            return Fetch()
        case ConflictingPath(reason=reason):
            return ActionError(reason)


def summarize(decisions: list[SyncDecision]) -> dict[str, int]:
    """Count decisions per action kind ("clone", "fetch", "error")."""
    counts = Counter(str(d.action) for d in decisions)
    return {kind: counts.get(kind, 0) for kind in ("clone", "fetch", "error")}


class Reconciler:
    """Pair each remote repository with the action its local state calls for.

    A listing failure fails the whole run. A filesystem error while
    inspecting one repository only turns that repository's action into an
    ``ActionError``; the others are still evaluated.
    """

    def __init__(
        self,
        *,
        service: RepositoriesService,
        console: ConsoleProtocol,
        root: Path,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self._service = service
        self._console = console
        self._root = root
        self._per_page = per_page

    def reconcile(self, org: str) -> Result[list[SyncDecision], RemoteAPIError]:
        self._console.print(f"Looking up repos for org '{org}'")
        repos_result = list_repositories(org, self._service, per_page=self._per_page)
        if isinstance(repos_result, Err):
            return repos_result

        repos = repos_result.value
        self._console.debug(f"{len(repos)} repositories listed, local root {self._root}")

        decisions: list[SyncDecision] = []
        for repo in repos:
            decision = self._decide(repo)
            self._report(decision)
            decisions.append(decision)
        return Ok(decisions)

    def _decide(self, repo: RepositoryDescriptor) -> SyncDecision:
        state = inspect(repo.name, self._root)
        if isinstance(state, Err):
            return SyncDecision(repo, ActionError(state.error.message))
        self._console.debug(f"{repo.name}: {type(state.value).__name__}")
        return SyncDecision(repo, action_for(state.value))

    def _report(self, decision: SyncDecision) -> None:
        self._console.print(decision.repository.name)
        match decision.action:
            case Clone():
                self._console.print("  would clone", Style.DIM)
            case Fetch():
                self._console.print("  would fetch", Style.DIM)
            case ActionError(reason=reason):
                self._console.print(f"  error: {reason}", Style.WARNING)

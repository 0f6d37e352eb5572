"""Tests for octosync.sync.reconcile."""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from octosync.core.result import Err, Ok, Result
from octosync.github.repos import (
    ListOptions,
    RemoteAPIError,
    RepositoryDescriptor,
    RepositoryPage,
)
from octosync.output.console import MockConsole, Style
from octosync.sync.reconcile import (
    ActionError,
    Clone,
    Fetch,
    Reconciler,
    SyncDecision,
    action_for,
    summarize,
)
from octosync.sync.state import (
    ClonedAsGitRepo,
    ConflictingPath,
    FilesystemError,
    LocalSyncState,
    NotPresent,
)


class StubService:
    def __init__(self, result: Result[RepositoryPage, RemoteAPIError]) -> None:
        self._result = result
        self.options: list[ListOptions] = []

    def list_by_org(
        self, org: str, options: ListOptions
    ) -> Result[RepositoryPage, RemoteAPIError]:
        self.options.append(options)
        return self._result


def _service(*names: str) -> StubService:
    return StubService(
        Ok(RepositoryPage(repositories=tuple(RepositoryDescriptor(name=n) for n in names)))
    )


def test_action_table(tmp_path: Path) -> None:
    assert action_for(NotPresent(tmp_path)) == Clone()
    assert action_for(ClonedAsGitRepo(tmp_path)) == Fetch()
    assert action_for(ConflictingPath(tmp_path, "why")) == ActionError("why")


def test_end_to_end(tmp_path: Path) -> None:
    (tmp_path / "a" / ".git").mkdir(parents=True)
    console = MockConsole()
    reconciler = Reconciler(service=_service("a", "b"), console=console, root=tmp_path)

    result = reconciler.reconcile("acme")

    assert result == Ok(
        [
            SyncDecision(RepositoryDescriptor(name="a"), Fetch()),
            SyncDecision(RepositoryDescriptor(name="b"), Clone()),
        ]
    )
    assert console.messages == [
        "Looking up repos for org 'acme'",
        "a",
        "  would fetch",
        "b",
        "  would clone",
    ]


def test_conflict_is_reported_as_error_action(tmp_path: Path) -> None:
    (tmp_path / "a").mkdir()
    console = MockConsole()
    reconciler = Reconciler(service=_service("a"), console=console, root=tmp_path)

    result = reconciler.reconcile("acme")

    assert isinstance(result, Ok)
    action = result.value[0].action
    assert isinstance(action, ActionError)
    assert "not a git repository" in action.reason
    assert console.count(Style.WARNING) == 1


def test_filesystem_error_is_isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import octosync.sync.reconcile as reconcile_mod

    def fake_inspect(name: str, root: Path | None = None) -> Result[LocalSyncState, FilesystemError]:
        if name == "locked":
            return Err(FilesystemError(path=tmp_path / name, message="permission denied"))
        return Ok(NotPresent(tmp_path / name))

    monkeypatch.setattr(reconcile_mod, "inspect", fake_inspect)
    reconciler = Reconciler(
        service=_service("locked", "free"), console=MockConsole(), root=tmp_path
    )

    result = reconciler.reconcile("acme")

    assert isinstance(result, Ok)
    assert [d.action for d in result.value] == [ActionError("permission denied"), Clone()]


def test_unreadable_repo_dir_only_affects_that_repo(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    original_stat = Path.stat

    def fake_stat(self: Path, *args: object, **kwargs: object) -> object:
        if self.name == "locked":
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return original_stat(self, *args, **kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(Path, "stat", fake_stat)
    console = MockConsole()
    reconciler = Reconciler(service=_service("locked", "free"), console=console, root=tmp_path)

    result = reconciler.reconcile("acme")

    assert isinstance(result, Ok)
    locked, free = result.value
    assert isinstance(locked.action, ActionError)
    assert "Permission denied" in locked.action.reason
    assert free.action == Clone()
    assert console.count(Style.WARNING) == 1


def test_remote_error_is_forwarded(tmp_path: Path) -> None:
    error = RemoteAPIError(org="acme", status=401, message="Bad credentials")
    console = MockConsole()
    reconciler = Reconciler(service=StubService(Err(error)), console=console, root=tmp_path)

    result = reconciler.reconcile("acme")

    assert result == Err(error)
    assert console.messages == ["Looking up repos for org 'acme'"]


def test_page_size_is_forwarded(tmp_path: Path) -> None:
    service = _service()
    Reconciler(service=service, console=MockConsole(), root=tmp_path, per_page=100).reconcile("")

    assert service.options == [ListOptions(per_page=100, page=1)]


def test_debug_output(tmp_path: Path) -> None:
    console = MockConsole(debug_enabled=True)
    Reconciler(service=_service("a"), console=console, root=tmp_path).reconcile("acme")

    assert console.find("debug: a: NotPresent")


def test_summarize() -> None:
    repo = RepositoryDescriptor(name="x")
    decisions = [
        SyncDecision(repo, Clone()),
        SyncDecision(repo, Clone()),
        SyncDecision(repo, ActionError("bad")),
    ]
    assert summarize(decisions) == {"clone": 2, "fetch": 0, "error": 1}
    assert summarize([]) == {"clone": 0, "fetch": 0, "error": 0}

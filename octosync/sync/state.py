"""Local sync state of a repository.

The state of ``<name>`` is read from two stats:

    stat <name>/.git
      directory        -> ClonedAsGitRepo
      anything else    -> ConflictingPath
      missing          -> stat <name>
                            exists  -> ConflictingPath
                            missing -> NotPresent

Any other OS error (permission denied, I/O error) is a ``FilesystemError``.
A path that exists without being a git working copy is reported as a
conflict so a clone never lands on top of it.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path

from octosync.core.result import Err, Ok, Result

__all__ = [
    "ClonedAsGitRepo",
    "ConflictingPath",
    "FilesystemError",
    "LocalSyncState",
    "NotPresent",
    "inspect",
]


@dataclass(frozen=True, slots=True)
class FilesystemError:
    """Inspection failed for a reason other than a missing path."""

    path: Path
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class NotPresent:
    path: Path


@dataclass(frozen=True, slots=True)
class ClonedAsGitRepo:
    path: Path


@dataclass(frozen=True, slots=True)
class ConflictingPath:
    path: Path
    reason: str


type LocalSyncState = NotPresent | ClonedAsGitRepo | ConflictingPath


def _stat(path: Path) -> Result[int | None, FilesystemError]:
    """Return the st_mode of ``path``, or None if it does not exist."""
    try:
        return Ok(path.stat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        # NotADirectoryError: a parent component is a regular file.
        return Ok(None)
    except OSError as e:
        return Err(FilesystemError(path=path, message=f"cannot inspect {path}: {e.strerror or e}"))


def inspect(name: str, root: Path | None = None) -> Result[LocalSyncState, FilesystemError]:
    """Classify the local copy of repository ``name`` under ``root``."""
    base = root if root is not None else Path(".")
    repo_dir = base / name
    git_dir = repo_dir / ".git"

    git_mode = _stat(git_dir)
    if isinstance(git_mode, Err):
        return git_mode

    match git_mode.value:
        case int(mode) if stat.S_ISDIR(mode):
            return Ok(ClonedAsGitRepo(path=repo_dir))
        case int():
            return Ok(
                ConflictingPath(
                    path=repo_dir,
                    reason=f"git-dir path exists but is not a directory: {name}/.git",
                )
            )
        case None:
            pass

    repo_mode = _stat(repo_dir)
    if isinstance(repo_mode, Err):
        return repo_mode

    match repo_mode.value:
        case None:
            return Ok(NotPresent(path=repo_dir))
        case int():
            return Ok(
                ConflictingPath(
                    path=repo_dir,
                    reason=f"clone directory already exists but is not a git repository: {name}",
                )
            )

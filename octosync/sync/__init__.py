"""Local state inspection and sync decisions."""

from .reconcile import (
    ActionError,
    Clone,
    Fetch,
    Reconciler,
    SyncAction,
    SyncDecision,
    action_for,
    summarize,
)
from .state import (
    ClonedAsGitRepo,
    ConflictingPath,
    FilesystemError,
    LocalSyncState,
    NotPresent,
    inspect,
)

__all__ = [
    "ActionError",
    "Clone",
    "ClonedAsGitRepo",
    "ConflictingPath",
    "Fetch",
    "FilesystemError",
    "LocalSyncState",
    "NotPresent",
    "Reconciler",
    "SyncAction",
    "SyncDecision",
    "action_for",
    "inspect",
    "summarize",
]

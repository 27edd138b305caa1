"""Core sync functionality."""

from .ci import CIOutputError, emit_pull_request_output
from .git import GitError, GitRepository, commit_message
from .operations import SyncAction, SyncOperations, SyncResult, decide_action
from .sources import ReferenceValues

__all__ = [
    "CIOutputError",
    "GitError",
    "GitRepository",
    "ReferenceValues",
    "SyncAction",
    "SyncOperations",
    "SyncResult",
    "commit_message",
    "decide_action",
    "emit_pull_request_output",
]

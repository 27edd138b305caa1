"""Writing the tracked files into a target checkout."""

import shutil
from dataclasses import dataclass
from pathlib import Path

from ..models.config import FileKind, SyncConfig, TrackedFile
from .sources import ReferenceValues


class SyncAction:
    """What to do with a tracked file."""

    SKIP_OPTED_OUT = "skip_opted_out"
    SKIP_SAME_PATH = "skip_same_path"
    WRITE_VERSION = "write_version"
    WRITE_RUBOCOP = "write_rubocop"
    COPY = "copy"


@dataclass
class SyncResult:
    """Result of syncing one tracked file."""

    filepath: str
    operation: str  # "write", "copy" or "skip"
    message: str
    skipped: bool = False


def decide_action(
    tracked: TrackedFile,
    repository_name: str,
    source_path: Path,
    target_path: Path,
    config: SyncConfig,
) -> str:
    """Choose the action for a tracked file without touching the filesystem.

    Source and target are compared as path strings, not resolved files.
    """
    if config.is_opted_out(tracked.path, repository_name):
        return SyncAction.SKIP_OPTED_OUT

    if tracked.kind == FileKind.VERSION:
        return SyncAction.WRITE_VERSION
    if tracked.kind == FileKind.LINT:
        return SyncAction.WRITE_RUBOCOP

    if str(source_path) == str(target_path):
        return SyncAction.SKIP_SAME_PATH
    return SyncAction.COPY


class SyncOperations:
    """Applies the tracked files from a reference tree to a target tree."""

    def __init__(
        self,
        config: SyncConfig,
        target_path: Path,
        reference_path: Path,
        values: ReferenceValues,
    ) -> None:
        """Initialize sync operations.

        Args:
            config: Tracked files and opt-out lists
            target_path: Checkout being updated
            reference_path: Homebrew/brew checkout the files come from
            values: Content derived from the reference tree
        """
        self.config = config
        self.target_path = target_path
        self.reference_path = reference_path
        self.values = values

    @property
    def repository_name(self) -> str:
        """Name used for opt-out lookups (target directory basename)."""
        return self.target_path.name

    def sync_all(self) -> list[SyncResult]:
        """Sync every tracked file in order.

        Stops at the first failure; files already written stay written.
        """
        return [self.sync_file(tracked) for tracked in self.config.files]

    def sync_file(self, tracked: TrackedFile) -> SyncResult:
        """Sync a single tracked file."""
        target = self.target_path / tracked.path
        source = self.reference_path / tracked.path
        target.parent.mkdir(parents=True, exist_ok=True)

        action = decide_action(
            tracked, self.repository_name, source, target, self.config
        )

        if action == SyncAction.SKIP_OPTED_OUT:
            return SyncResult(
                filepath=tracked.path,
                operation="skip",
                message=f"{self.repository_name} keeps its own {tracked.path}",
                skipped=True,
            )

        if action == SyncAction.SKIP_SAME_PATH:
            return SyncResult(
                filepath=tracked.path,
                operation="skip",
                message="Source and target are the same path",
                skipped=True,
            )

        if action == SyncAction.WRITE_VERSION:
            target.write_text(f"{self.values.ruby_version}\n")
            return SyncResult(
                filepath=tracked.path,
                operation="write",
                message=f"Wrote Ruby {self.values.ruby_version}",
            )

        if action == SyncAction.WRITE_RUBOCOP:
            target.unlink(missing_ok=True)
            target.write_text(self.values.rubocop_config)
            return SyncResult(
                filepath=tracked.path,
                operation="write",
                message="Wrote filtered RuboCop config",
            )

        shutil.copyfile(source, target)
        return SyncResult(
            filepath=tracked.path,
            operation="copy",
            message=f"Copied from {source}",
        )

"""Thin wrapper around the git CLI for a target checkout."""

import subprocess
from pathlib import Path

from rich.console import Console

console = Console()

COMMIT_MESSAGE_TEMPLATE = "{name}: update to match main configuration"


class GitError(Exception):
    """Raised when a git command exits non-zero."""

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class GitRepository:
    """Runs git commands against a working tree via ``git -C``."""

    def __init__(self, path: Path | str, verbose: bool = False) -> None:
        """Initialize for a working tree.

        Args:
            path: Target directory, passed to git as given
            verbose: If True, print each git command before running it
        """
        self.path = str(path)
        self.verbose = verbose

    def run(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run ``git -C <path> <args>`` and return the completed process.

        Raises:
            GitError: If git cannot be executed or exits non-zero
        """
        cmd = ["git", "-C", self.path, *args]
        if self.verbose:
            console.print(" ".join(cmd), style="dim", markup=False, highlight=False, soft_wrap=True)

        try:
            completed = subprocess.run(
                cmd,
                check=False,
                text=True,
                capture_output=True,
            )
        except OSError as e:
            raise GitError(f"failed to execute git: {e}") from e

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            message = f"git command failed: {' '.join(cmd)}"
            if stderr:
                message += f"\n{stderr}"
            raise GitError(message, completed.returncode)

        return completed

    def status(self) -> str:
        """Porcelain status output, ignoring dirty submodules."""
        return self.run("status", "--porcelain", "--ignore-submodules=dirty").stdout

    def has_changes(self) -> bool:
        """Check whether the working tree differs from HEAD."""
        return bool(self.status().rstrip("\n"))

    def add_all(self) -> None:
        """Stage every change in the working tree."""
        self.run("add", "--all")

    def staged_paths(self) -> list[str]:
        """Paths with staged changes, one per line of ``diff --name-only``."""
        output = self.run("diff", "--name-only", "--staged").stdout
        return output.splitlines()

    def commit_path(self, path: str) -> str:
        """Commit a single path with the shared update message.

        Returns:
            The commit message used
        """
        message = commit_message(path)
        self.run("commit", path, "--message", message, "--quiet")
        return message


def commit_message(path: str) -> str:
    """Commit message for a changed path, named after its basename."""
    return COMMIT_MESSAGE_TEMPLATE.format(name=Path(path).name)

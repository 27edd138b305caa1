#!/usr/bin/env python3
"""CLI entry point for syncing shared config into a repository."""

import argparse
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.markup import escape

from .core.ci import CIOutputError, emit_pull_request_output
from .core.git import GitError, GitRepository
from .core.operations import SyncOperations
from .core.sources import ReferenceValues
from .models.config import RunEnvironment, SyncConfig

PROG = "shared-config-sync"
USAGE = f"Usage: {PROG} <target_directory_path> <homebrew_repository_path>"

console = Console()
error_console = Console(stderr=True)


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class SyncArgumentParser(argparse.ArgumentParser):
    """Argument parser that leaves reporting bad invocations to main()."""

    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Positionals are optional here so that a bad invocation gets the same
    usage message whether an argument is missing, extra or not a directory.
    """
    parser = SyncArgumentParser(
        prog=PROG,
        description="Sync shared configuration files from Homebrew/brew into a repository",
    )
    parser.add_argument("target_directory", nargs="?", default="", help="Repository to update")
    parser.add_argument("homebrew_repository", nargs="?", default="", help="Homebrew/brew checkout")
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument("--config", type=Path, help="YAML file overriding the opt-out lists")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show per-file results")
    return parser


def cmd_sync(
    target_directory: str,
    homebrew_repository: Path,
    config: SyncConfig,
    environment: RunEnvironment,
    verbose: bool = False,
) -> int:
    """Sync the tracked files and commit each changed one."""
    target_path = Path(target_directory)
    values = ReferenceValues.derive(homebrew_repository, config.header)

    console.print("Detecting changes…")
    ops = SyncOperations(config, target_path, homebrew_repository, values)
    for result in ops.sync_all():
        if verbose:
            style = "yellow" if result.skipped else "green"
            console.print(
                f"  {escape(result.filepath)}: [{style}]{escape(result.message)}[/{style}]",
                soft_wrap=True,
            )

    repo = GitRepository(target_directory, verbose=verbose)
    if not repo.has_changes():
        console.print("No changes detected.")
        return 0

    repo.add_all()
    for modified_path in repo.staged_paths():
        console.print(
            f"Detected changes to {modified_path}.",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        repo.commit_path(modified_path)
    console.print()

    emit_pull_request_output(environment)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        error_console.print(USAGE, markup=False, highlight=False, soft_wrap=True)
        return 1

    target_path = Path(args.target_directory)
    homebrew_path = Path(args.homebrew_repository)
    if (
        not args.target_directory
        or not args.homebrew_repository
        or not target_path.is_dir()
        or not homebrew_path.is_dir()
        or args.extra
    ):
        error_console.print(USAGE, markup=False, highlight=False, soft_wrap=True)
        return 1

    if args.config:
        try:
            config = SyncConfig.load(args.config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            error_console.print(f"[red]Configuration error: {escape(str(e))}")
            return 1
    else:
        config = SyncConfig.default()

    environment = RunEnvironment.load()

    try:
        return cmd_sync(
            args.target_directory,
            homebrew_path,
            config,
            environment,
            verbose=args.verbose,
        )
    except GitError as e:
        error_console.print(f"[red]{escape(str(e))}", highlight=False, soft_wrap=True)
        return e.returncode
    except CIOutputError as e:
        error_console.print(f"[red]{escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

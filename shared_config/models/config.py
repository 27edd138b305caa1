"""Configuration and data models for the shared config sync."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

RUBY_VERSION = ".ruby-version"
RUBOCOP_YML = ".rubocop.yml"
DEPENDABOT_YML = ".github/dependabot.yml"
LOCK_THREADS_YML = ".github/workflows/lock-threads.yml"
STALE_ISSUES_YML = ".github/workflows/stale-issues.yml"

DEFAULT_HEADER = (
    "# This file is synced from `Homebrew/brew` by the `.github` repository, "
    "do not modify it directly."
)


class FileKind:
    """How a tracked file gets its content."""

    VERSION = "version"  # Derived interpreter version pin
    LINT = "lint"  # Derived, filtered RuboCop config
    DEPENDABOT = "dependabot"  # Copied, with its own opt-out list
    COPY = "copy"  # Copied verbatim


@dataclass(frozen=True)
class TrackedFile:
    """A relative path kept in sync with the reference tree."""

    path: str
    kind: str


TRACKED_FILES: tuple[TrackedFile, ...] = (
    TrackedFile(RUBY_VERSION, FileKind.VERSION),
    TrackedFile(RUBOCOP_YML, FileKind.LINT),
    TrackedFile(DEPENDABOT_YML, FileKind.DEPENDABOT),
    TrackedFile(LOCK_THREADS_YML, FileKind.COPY),
    TrackedFile(STALE_ISSUES_YML, FileKind.COPY),
)

DEFAULT_OPT_OUTS: dict[str, frozenset[str]] = {
    RUBY_VERSION: frozenset({
        "mass-bottling-tracker-private",
    }),
    RUBOCOP_YML: frozenset({
        "ci-orchestrator",
        "mass-bottling-tracker-private",
        "orka_api_client",
        "ruby-macho",
    }),
    DEPENDABOT_YML: frozenset({
        "brew",
        "brew-pip-audit",
        "ci-orchestrator",
    }),
}


@dataclass
class SyncConfig:
    """Static configuration for a sync run.

    Holds the tracked files and, per tracked path, the repository names
    that keep their own copy of that file.
    """

    files: tuple[TrackedFile, ...] = TRACKED_FILES
    opt_outs: dict[str, frozenset[str]] = field(
        default_factory=lambda: dict(DEFAULT_OPT_OUTS)
    )
    header: str = DEFAULT_HEADER

    @classmethod
    def default(cls) -> "SyncConfig":
        """Configuration used when no config file is given."""
        return cls()

    def is_opted_out(self, path: str, repository_name: str) -> bool:
        """Check whether a repository is exempt from syncing a path."""
        return repository_name in self.opt_outs.get(path, frozenset())

    @classmethod
    def load(cls, config_path: Path) -> "SyncConfig":
        """Load configuration overrides from a YAML file.

        Paths missing from ``opt_outs`` keep their built-in lists.

        Raises:
            ValueError: If the file does not have the expected shape
        """
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{config_path}: expected a mapping at the top level")

        opt_outs = data.get("opt_outs") or {}
        if not isinstance(opt_outs, dict):
            raise ValueError(f"{config_path}: opt_outs must be a mapping of path to repository names")

        config = cls.default()

        known_paths = {tracked.path for tracked in config.files}
        for path, repositories in opt_outs.items():
            if path not in known_paths:
                raise ValueError(f"Unknown tracked file in opt_outs: {path}")
            repositories = repositories or []
            if not isinstance(repositories, list) or not all(
                isinstance(name, str) for name in repositories
            ):
                raise ValueError(f"opt_outs for {path} must be a list of repository names")
            config.opt_outs[path] = frozenset(repositories)

        header = data.get("header")
        if header is not None and not isinstance(header, str):
            raise ValueError(f"{config_path}: header must be a string")
        if header:
            config.header = header

        return config

    def save(self, config_path: Path) -> None:
        """Save configuration to a YAML file."""
        data: dict[str, Any] = {
            "opt_outs": {
                path: sorted(repositories)
                for path, repositories in self.opt_outs.items()
            },
            "header": self.header,
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


@dataclass
class RunEnvironment:
    """Environment values read once at startup."""

    github_actions: str | None = None
    github_output: str | None = None

    @property
    def in_ci(self) -> bool:
        """True when running under GitHub Actions."""
        return self.github_actions is not None

    @classmethod
    def load(cls) -> "RunEnvironment":
        """Read CI settings from the environment (or a local .env file)."""
        load_dotenv()

        return cls(
            github_actions=os.getenv("GITHUB_ACTIONS"),
            github_output=os.getenv("GITHUB_OUTPUT"),
        )

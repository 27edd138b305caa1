"""Shared fixtures: a fake Homebrew/brew checkout and git target repositories."""

import subprocess
from pathlib import Path

import pytest

RUBOCOP_YML = r"""---
require:
  - ./Homebrew/rubocops.rb
inherit_from: ./Homebrew/.rubocop_todo.yml
inherit_mode:
  merge:
    - Include
AllCops:
  TargetRubyVersion: 3.3
  NewCops: enable
  Exclude:
    - !ruby/regexp /vendor\/bundle/
Cask/Desc:
  Enabled: true
FormulaAudit/Homepage:
  Enabled: true
Homebrew/MoveToExtendOS:
  Enabled: true
Performance/Caller:
  Enabled: true
RSpec/ExampleLength:
  Max: 10
Sorbet/StrictSigil:
  Enabled: true
Style/Documentation:
  Enabled: false
Layout/LineLength:
  Max: 118
  AllowedPatterns:
    - !ruby/regexp /\A\s*#/
Style/HashSyntax:
  EnforcedShorthandSyntax: :either
"""

DEPENDABOT_YML = """version: 2
updates:
  - package-ecosystem: github-actions
    directory: /
    schedule:
      interval: daily
"""

LOCK_THREADS_YML = "name: Lock closed issues and PRs\non: workflow_dispatch\n"
STALE_ISSUES_YML = "name: Manage stale issues\non: workflow_dispatch\n"


def run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run git in a test repository, failing the test on error."""
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        text=True,
        capture_output=True,
        check=True,
    )


def write_reference_tree(root: Path, ruby_version: str = "3.3.6_1") -> Path:
    """Populate a minimal Homebrew/brew layout under root."""
    vendor = root / "Library" / "Homebrew" / "vendor"
    vendor.mkdir(parents=True)
    (vendor / "portable-ruby-version").write_text(f"{ruby_version}\n")
    (root / "Library" / ".rubocop.yml").write_text(RUBOCOP_YML)

    workflows = root / ".github" / "workflows"
    workflows.mkdir(parents=True)
    (root / ".github" / "dependabot.yml").write_text(DEPENDABOT_YML)
    (workflows / "lock-threads.yml").write_text(LOCK_THREADS_YML)
    (workflows / "stale-issues.yml").write_text(STALE_ISSUES_YML)
    return root


def init_target_repo(path: Path) -> Path:
    """Create a git repository with one initial commit."""
    path.mkdir(parents=True)
    run_git(["init", "--quiet"], cwd=path)
    run_git(["config", "user.name", "shared-config"], cwd=path)
    run_git(["config", "user.email", "shared-config@example.com"], cwd=path)
    run_git(["config", "commit.gpgsign", "false"], cwd=path)
    (path / "README.md").write_text("# Target\n")
    run_git(["add", "README.md"], cwd=path)
    run_git(["commit", "--quiet", "-m", "Initial commit"], cwd=path)
    return path


@pytest.fixture
def reference_tree(tmp_path: Path) -> Path:
    return write_reference_tree(tmp_path / "brew-reference")


@pytest.fixture
def target_repo(tmp_path: Path) -> Path:
    return init_target_repo(tmp_path / "some-tap")


@pytest.fixture(autouse=True)
def no_github_actions(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host CI environment out of the tests."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)

"""GitHub Actions output signalling."""

from pathlib import Path

from ..models.config import RunEnvironment

PULL_REQUEST_OUTPUT = "pull_request=true"


class CIOutputError(Exception):
    """Raised when running in CI without somewhere to write outputs."""


def emit_pull_request_output(environment: RunEnvironment) -> bool:
    """Flag to the workflow that a pull request should be opened.

    Returns:
        True if the output line was written
    """
    if not environment.in_ci:
        return False

    if not environment.github_output:
        raise CIOutputError("GITHUB_ACTIONS is set but GITHUB_OUTPUT is not")

    with open(Path(environment.github_output), "a") as f:
        f.write(f"{PULL_REQUEST_OUTPUT}\n")
    return True

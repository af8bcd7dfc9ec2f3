"""Git command runner and backend initialization.

Contains:
- initialize: One-time, idempotent backend setup
- _run_git_command: Run a git command and return its output
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from gitat.git.exceptions import GitError

logger = logging.getLogger(__name__)

_GIT_VERSION: Optional[str] = None


def initialize() -> str:
    """Prepare the git backend for use by this process.

    Checks that git can be executed and caches the version it reports.
    Subsequent calls return the cached version without running git again.

    Returns:
        The git version string (e.g. "2.43.0").

    Raises:
        GitError: If git is not installed or cannot be executed.
    """
    global _GIT_VERSION

    if _GIT_VERSION is None:
        output = _run_git_command(["--version"])
        # "git version 2.43.0" or "git version 2.39.3 (Apple Git-145)"
        fields = output.split()
        _GIT_VERSION = fields[2] if len(fields) >= 3 else "unknown"
        logger.debug("Using git %s", _GIT_VERSION)
    return _GIT_VERSION


def _run_git_command(args: list[str], cwd: Optional[Path] = None) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in. Defaults to the current directory.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("Running: git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

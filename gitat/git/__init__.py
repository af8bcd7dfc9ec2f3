"""Git backend for gitat.

This package provides the narrow repository interface the search needs:
- exceptions: GitError, NotARepositoryError, RevisionNotFoundError,
              ObjectNotFoundError
- runner: initialize, _run_git_command
- objects: Commit, Signature, parse_tag_target
- repository: Repository
- walk: HistoryWalker, CommitSource
"""

# Exceptions
from gitat.git.exceptions import (
    GitError,
    NotARepositoryError,
    ObjectNotFoundError,
    RevisionNotFoundError,
)

# Runner utilities
from gitat.git.runner import (
    _run_git_command,
    initialize,
)

# Object decoding
from gitat.git.objects import (
    Commit,
    Signature,
    parse_tag_target,
)

# Repository access
from gitat.git.repository import Repository

# History traversal
from gitat.git.walk import (
    CommitSource,
    HistoryWalker,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    "ObjectNotFoundError",
    "RevisionNotFoundError",
    # Runner
    "_run_git_command",
    "initialize",
    # Objects
    "Commit",
    "Signature",
    "parse_tag_target",
    # Repository
    "Repository",
    # Walk
    "CommitSource",
    "HistoryWalker",
]

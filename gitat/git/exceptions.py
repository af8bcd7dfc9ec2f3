"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NotARepositoryError: Raised when a path is not inside a git repository
- RevisionNotFoundError: Raised when revision text does not resolve
- ObjectNotFoundError: Raised when an object is missing from the object store
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NotARepositoryError(GitError):
    """Raised when a path is not inside a git repository."""

    pass


class RevisionNotFoundError(GitError):
    """Raised when revision text does not resolve to any object."""

    pass


class ObjectNotFoundError(GitError):
    """Raised when an object id is not present in the repository."""

    pass

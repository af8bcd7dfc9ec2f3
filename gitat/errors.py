"""Error classification and exit statuses for gitat.

Every failure of a search is a SearchError carrying one ErrorKind. The kind
decides the exit status, the message text, and whether --quiet may hide it.

Note that NO_SUCH_REVISION covers two causes: a starting revision that does
not resolve, and a walk that found no matching commit. Both print the same
git-compatible message ("needed a single revision") and exit 1.
"""

from enum import Enum, IntEnum
from typing import Optional, TextIO

from gitat.git.exceptions import GitError, RevisionNotFoundError


class ExitStatus(IntEnum):
    """Process exit codes, in increasing order of severity."""

    SUCCESS = 0
    NON_FATAL = 1
    FATAL = 2
    EXTERNAL_PROGRAM_FAILED = 3
    # Used before a search can run at all
    NOT_A_REPOSITORY = 4


class ErrorKind(Enum):
    """Kinds of search failure."""

    NO_SUCH_REVISION = "no_such_revision"
    INVALID_PATTERN = "invalid_pattern"
    BACKEND = "backend"
    IO = "io"


class SearchError(Exception):
    """A failed search or failure to report its result.

    Attributes:
        kind: What went wrong.
        cause: The underlying exception, if any.
    """

    def __init__(self, kind: ErrorKind, cause: Optional[BaseException] = None):
        super().__init__(kind, cause)
        self.kind = kind
        self.cause = cause

    @classmethod
    def no_such_revision(cls, cause: Optional[BaseException] = None) -> "SearchError":
        return cls(ErrorKind.NO_SUCH_REVISION, cause)

    @classmethod
    def invalid_pattern(cls, cause: Optional[BaseException] = None) -> "SearchError":
        return cls(ErrorKind.INVALID_PATTERN, cause)

    @classmethod
    def io_error(cls, cause: Optional[BaseException] = None) -> "SearchError":
        return cls(ErrorKind.IO, cause)

    @classmethod
    def from_git_error(cls, error: GitError) -> "SearchError":
        """Classify a backend error.

        Unresolvable revisions are non-fatal; everything else the backend
        raises is fatal.
        """
        if isinstance(error, RevisionNotFoundError):
            return cls(ErrorKind.NO_SUCH_REVISION, error)
        return cls(ErrorKind.BACKEND, error)

    @property
    def exit_status(self) -> ExitStatus:
        """Return the exit status for this error."""
        if self.kind is ErrorKind.NO_SUCH_REVISION:
            return ExitStatus.NON_FATAL
        return ExitStatus.FATAL

    @property
    def fatal(self) -> bool:
        """Whether this error is fatal (exit status 2).

        A missing revision is not considered fatal; other errors are.
        """
        return self.exit_status == ExitStatus.FATAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __str__(self) -> str:
        # "fatal:" even for the non-fatal kind, matching git's wording
        if self.kind is ErrorKind.NO_SUCH_REVISION:
            return "fatal: needed a single revision"
        if self.kind is ErrorKind.INVALID_PATTERN:
            if self.cause is not None:
                return f"fatal: invalid regular expression: {self.cause}"
            return "fatal: invalid regular expression"
        if self.kind is ErrorKind.IO:
            if self.cause is not None:
                return f"fatal: I/O error: {self.cause}"
            return "fatal: unknown I/O error"
        if self.cause is not None:
            return f"fatal: {self.cause}"
        return "fatal: an unknown error occurred"


def report_error(error: SearchError, quiet: bool, stream: TextIO) -> int:
    """Write an error to the error stream and return its exit status.

    Nothing is written when the error is non-fatal and quiet mode is on.
    Fatal errors are always written.

    Args:
        error: The error to report.
        quiet: Whether the caller asked for quiet mode.
        stream: Where to write the message (normally stderr).

    Returns:
        The exit status for the error.
    """
    if error.fatal or not quiet:
        stream.write(f"{error}\n")
        stream.flush()
    return int(error.exit_status)

"""Commit search: find the newest ancestor whose message matches.

Contains:
- SearchRequest: What to look for and where to start
- RevisionResolver: What the engine needs from a repository
- SearchEngine: Walks history and returns the first matching commit
"""

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from gitat.errors import SearchError
from gitat.git.exceptions import GitError
from gitat.git.objects import Commit
from gitat.git.walk import HistoryWalker
from gitat.pattern import Matcher, compile_pattern

logger = logging.getLogger(__name__)

DEFAULT_REVISION = "HEAD"


@dataclass(frozen=True)
class SearchRequest:
    """A single search.

    Attributes:
        pattern: Regular expression to look for in commit messages.
        revision: Where the walk starts. Defaults to HEAD.
        summary_only: Match only within the first line of each message.
    """

    pattern: str
    revision: str = DEFAULT_REVISION
    summary_only: bool = False


class RevisionResolver(Protocol):
    """Repository interface used by the search engine."""

    def resolve_revision(self, spec: str) -> str: ...

    def find_commit(self, oid: str) -> Commit: ...


class SearchEngine:
    """Find the most recent commit whose message matches a pattern.

    The pattern compiler and walker are injectable so tests can observe
    how the engine drives them.
    """

    def __init__(
        self,
        repo: RevisionResolver,
        compiler: Callable[[str, bool], Matcher] = compile_pattern,
        walker_factory: Callable[[RevisionResolver], HistoryWalker] = HistoryWalker,
    ):
        self.repo = repo
        self.compiler = compiler
        self.walker_factory = walker_factory

    def search(self, request: SearchRequest) -> str:
        """Run a search and return the id of the first matching commit.

        Commits are tested newest first, and the walk stops at the first
        match. No commit older than the match is ever loaded.

        Args:
            request: The search to run.

        Returns:
            The full hex id of the matching commit.

        Raises:
            SearchError: NO_SUCH_REVISION if the starting revision does not
                resolve or no reachable commit matches; INVALID_PATTERN if the
                pattern does not compile; BACKEND if the repository cannot be
                read.
        """
        matcher = self.compiler(request.pattern, request.summary_only)

        try:
            start = self.repo.resolve_revision(request.revision)
            walker = self.walker_factory(self.repo)
            walker.push(start)

            examined = 0
            for commit in walker.commits():
                examined += 1
                if matcher.matches(commit.message):
                    logger.debug(
                        "Matched %s after examining %d commit(s)", commit.oid, examined
                    )
                    return commit.oid
        except GitError as e:
            raise SearchError.from_git_error(e) from e

        logger.debug("No match among %d commit(s) reachable from %s", examined, request.revision)
        raise SearchError.no_such_revision()

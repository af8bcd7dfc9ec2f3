"""Time-ordered ancestry traversal.

Contains:
- CommitSource: What the walker needs from a repository
- HistoryWalker: Lazy walk over the ancestors of one or more commits
"""

import heapq
import itertools
import logging
from typing import Iterator, Protocol

from gitat.git.objects import Commit

logger = logging.getLogger(__name__)


class CommitSource(Protocol):
    """Anything that can load a commit by id."""

    def find_commit(self, oid: str) -> Commit: ...


class HistoryWalker:
    """Walk commits reachable from the pushed starting points.

    Commits are produced most recent commit time first. Commits with equal
    timestamps come out in the order they were discovered. Every commit is
    produced at most once, however many paths lead to it.

    The walk is lazy: a commit is loaded only when it is reached, so a
    caller that stops early never touches the rest of history. A walker is
    single-use; create a new one for every traversal.
    """

    def __init__(self, repo: CommitSource):
        self._repo = repo
        self._queue: list[tuple[int, int, Commit]] = []
        self._seen: set[str] = set()
        self._counter = itertools.count()
        self._started = False

    def _enqueue(self, oid: str) -> None:
        if oid in self._seen:
            return
        self._seen.add(oid)
        commit = self._repo.find_commit(oid)
        # heapq is a min-heap: negate the time for newest-first
        heapq.heappush(self._queue, (-commit.commit_time, next(self._counter), commit))

    def push(self, oid: str) -> None:
        """Add a starting point for the walk.

        Raises:
            GitError: If the commit cannot be loaded.
            RuntimeError: If iteration has already started.
        """
        if self._started:
            raise RuntimeError("cannot push onto a walk that has already started")
        self._enqueue(oid)

    def __iter__(self) -> Iterator[str]:
        return (commit.oid for commit in self.commits())

    def commits(self) -> Iterator[Commit]:
        """Like iterating the walker, but yield the loaded commits."""
        self._started = True
        while self._queue:
            _, _, commit = heapq.heappop(self._queue)
            yield commit
            # Parents are loaded only when the caller asks for more
            for parent in commit.parents:
                self._enqueue(parent)

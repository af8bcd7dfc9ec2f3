"""Repository access through the git executable.

Contains:
- Repository: Revision resolution and object retrieval for one repository
"""

import logging
import subprocess
from pathlib import Path
from typing import IO, Optional, Union

from gitat.git.exceptions import (
    GitError,
    NotARepositoryError,
    ObjectNotFoundError,
    RevisionNotFoundError,
)
from gitat.git.objects import Commit, parse_tag_target
from gitat.git.runner import _run_git_command

logger = logging.getLogger(__name__)

# Annotated tags may point at other tags; stop following after this many.
_MAX_PEEL_DEPTH = 32


class Repository:
    """A git repository opened by its git directory.

    Objects are read through a single ``git cat-file --batch`` process that
    is started on first use and lives until close() is called. Use the
    repository as a context manager so the process is always cleaned up.
    """

    def __init__(self, git_dir: Union[str, Path]):
        self.git_dir = Path(git_dir)
        self._batch: Optional[subprocess.Popen] = None

    @classmethod
    def discover(cls, path: Union[str, Path] = ".") -> "Repository":
        """Find the repository containing ``path``.

        Args:
            path: Any directory inside the work tree or git directory.

        Returns:
            The opened repository.

        Raises:
            NotARepositoryError: If path is not inside a git repository.
        """
        try:
            git_dir = _run_git_command(["rev-parse", "--absolute-git-dir"], cwd=Path(path))
        except GitError as e:
            raise NotARepositoryError(
                f"could not find repository from '{path}': {e}"
            ) from e
        logger.debug("Discovered repository at %s", git_dir)
        return cls(git_dir)

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Repository({str(self.git_dir)!r})"

    def _git(self, args: list[str]) -> str:
        return _run_git_command([f"--git-dir={self.git_dir}"] + args)

    def resolve_revision(self, spec: str) -> str:
        """Resolve revision text to a full object id.

        Args:
            spec: Any revision expression git understands
                (``HEAD``, ``master~1``, a tag name, an abbreviated hash).

        Returns:
            The full hex object id.

        Raises:
            RevisionNotFoundError: If the text does not resolve to any object.
        """
        # Would be parsed as an option by rev-parse
        if spec.startswith("-"):
            raise RevisionNotFoundError(f"revspec '{spec}' not found")
        try:
            oid = self._git(["rev-parse", "--verify", "--quiet", spec])
        except GitError as e:
            raise RevisionNotFoundError(f"revspec '{spec}' not found") from e
        if not oid:
            raise RevisionNotFoundError(f"revspec '{spec}' not found")
        return oid

    def _batch_process(self) -> subprocess.Popen:
        if self._batch is None or self._batch.poll() is not None:
            try:
                self._batch = subprocess.Popen(
                    ["git", f"--git-dir={self.git_dir}", "cat-file", "--batch"],
                    stdin=subprocess.PIPE,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.DEVNULL,
                )
            except FileNotFoundError:
                raise GitError("Git is not installed or not in PATH.")
        return self._batch

    def read_object(self, name: str) -> tuple[str, bytes]:
        """Read one object from the object store.

        Args:
            name: Object id (or any name ``git cat-file`` accepts).

        Returns:
            Tuple of (object type, raw content).

        Raises:
            ObjectNotFoundError: If no such object exists.
            GitError: If the object store cannot be read.
        """
        proc = self._batch_process()
        stdin: IO[bytes] = proc.stdin  # type: ignore[assignment]
        stdout: IO[bytes] = proc.stdout  # type: ignore[assignment]
        try:
            stdin.write(name.encode("utf-8") + b"\n")
            stdin.flush()
            header = stdout.readline()
        except OSError as e:
            raise GitError(f"failed to read object {name}: {e}") from e

        if not header:
            raise GitError(f"failed to read object {name}: object reader exited")

        fields = header.rstrip(b"\n").split(b" ")
        if len(fields) == 2 and fields[1] in (b"missing", b"ambiguous"):
            raise ObjectNotFoundError(f"object {name} {fields[1].decode()}")
        if len(fields) != 3:
            raise GitError(f"unexpected object header for {name}: {header!r}")

        obj_type = fields[1].decode("ascii")
        size = int(fields[2])
        content = stdout.read(size)
        stdout.read(1)  # trailing newline
        if len(content) != size:
            raise GitError(f"failed to read object {name}: short read")
        return obj_type, content

    def find_commit(self, oid: str) -> Commit:
        """Load and decode the commit with the given id.

        Annotated tags are peeled to the commit they point at.

        Raises:
            ObjectNotFoundError: If the object does not exist.
            GitError: If the object is not a commit or cannot be decoded.
        """
        name = oid
        for _ in range(_MAX_PEEL_DEPTH):
            obj_type, raw = self.read_object(name)
            if obj_type == "commit":
                return Commit.parse(name, raw)
            if obj_type != "tag":
                raise GitError(f"the requested type does not match the type in the ODB: {oid} is a {obj_type}")
            name = parse_tag_target(raw)
        raise GitError(f"too many levels of tags while peeling {oid}")

    def close(self) -> None:
        """Stop the object reader process, if running."""
        proc, self._batch = self._batch, None
        if proc is None:
            return
        if proc.stdin is not None:
            try:
                proc.stdin.close()
            except OSError:
                pass
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
        if proc.stdout is not None:
            proc.stdout.close()

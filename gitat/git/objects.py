"""Decoded git objects.

Contains:
- Commit: A commit decoded from its raw object bytes
- Signature: Author or committer identity with timestamp
- parse_tag_target: Extract the target of an annotated tag object
"""

from dataclasses import dataclass
from typing import Optional

from gitat.git.exceptions import GitError


@dataclass(frozen=True)
class Signature:
    """Author or committer line of a commit."""

    name: str
    email: str
    time: int
    offset: str  # e.g. "+0100"

    @classmethod
    def parse(cls, value: bytes) -> "Signature":
        """Parse a signature value like ``Name <email> 1700000000 +0000``."""
        try:
            ident, time, offset = value.rsplit(b" ", 2)
            name, _, email = ident.partition(b" <")
            return cls(
                name=name.decode("utf-8", errors="replace"),
                email=email.rstrip(b">").decode("utf-8", errors="replace"),
                time=int(time),
                offset=offset.decode("ascii"),
            )
        except (ValueError, UnicodeDecodeError) as e:
            raise GitError(f"Malformed signature: {value!r}") from e


def _parse_headers(raw: bytes) -> tuple[list[tuple[bytes, bytes]], bytes]:
    """Split a raw object into its header fields and message.

    Continuation lines (starting with a space, as used by ``gpgsig`` and
    ``mergetag``) are folded into the preceding header value.
    """
    head, sep, message = raw.partition(b"\n\n")
    if not sep:
        head = raw.rstrip(b"\n")
        message = b""

    headers: list[tuple[bytes, bytes]] = []
    for line in head.split(b"\n"):
        if line.startswith(b" ") and headers:
            key, value = headers[-1]
            headers[-1] = (key, value + b"\n" + line[1:])
            continue
        key, _, value = line.partition(b" ")
        headers.append((key, value))
    return headers, message


@dataclass(frozen=True)
class Commit:
    """A commit loaded from the object store.

    Attributes:
        oid: Full hex object id of the commit.
        tree: Hex id of the root tree.
        parents: Hex ids of the parent commits, in recorded order.
        author: The author signature.
        committer: The committer signature.
        message: Raw message bytes, without leading blank lines.
    """

    oid: str
    tree: str
    parents: tuple[str, ...]
    author: Signature
    committer: Signature
    message: bytes

    @property
    def commit_time(self) -> int:
        """Committer timestamp in seconds since the epoch."""
        return self.committer.time

    @property
    def summary(self) -> bytes:
        """The message up to (not including) the first newline."""
        return self.message.split(b"\n", 1)[0]

    @classmethod
    def parse(cls, oid: str, raw: bytes) -> "Commit":
        """Decode the raw bytes of a commit object.

        Args:
            oid: The object id the bytes were read under.
            raw: The object content as printed by ``git cat-file``.

        Returns:
            The decoded commit.

        Raises:
            GitError: If a required header is missing or malformed.
        """
        headers, message = _parse_headers(raw)

        tree: Optional[str] = None
        parents: list[str] = []
        author: Optional[Signature] = None
        committer: Optional[Signature] = None
        for key, value in headers:
            if key == b"tree":
                tree = value.decode("ascii")
            elif key == b"parent":
                parents.append(value.decode("ascii"))
            elif key == b"author":
                author = Signature.parse(value)
            elif key == b"committer":
                committer = Signature.parse(value)

        if tree is None or author is None or committer is None:
            raise GitError(f"Malformed commit object {oid}")

        return cls(
            oid=oid,
            tree=tree,
            parents=tuple(parents),
            author=author,
            committer=committer,
            message=message.lstrip(b"\n"),
        )


def parse_tag_target(raw: bytes) -> str:
    """Return the object id an annotated tag points at.

    Raises:
        GitError: If the tag has no ``object`` header.
    """
    headers, _ = _parse_headers(raw)
    for key, value in headers:
        if key == b"object":
            return value.decode("ascii")
    raise GitError("Malformed tag object: missing target")

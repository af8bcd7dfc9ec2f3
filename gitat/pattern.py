"""Commit message pattern compilation.

Patterns use Python regular expression syntax. They are compiled as bytes
patterns so they apply directly to raw commit message bytes.
"""

import re
from dataclasses import dataclass

from gitat.errors import SearchError

# Anchor at the start of the message and allow only first-line characters
# before the user pattern begins.
_SUMMARY_PREFIX = rb"\A[^\n]*"

# Global inline flags like (?i) must stay at the very start of the pattern
_LEADING_FLAGS = re.compile(rb"\A(?:\(\?[aiLmsux]+\))*")


@dataclass(frozen=True)
class Matcher:
    """A compiled message pattern.

    Attributes:
        pattern: The pattern as the user gave it.
        summary_only: Whether matches must start in the first line.
        regex: The compiled effective pattern.
    """

    pattern: str
    summary_only: bool
    regex: "re.Pattern[bytes]"

    def matches(self, message: bytes) -> bool:
        """Return True if the message matches."""
        return self.regex.search(message) is not None


def effective_pattern(pattern: str, summary_only: bool) -> bytes:
    """Build the bytes pattern that is actually compiled."""
    raw = pattern.encode("utf-8", errors="surrogateescape")
    if summary_only:
        flags = _LEADING_FLAGS.match(raw).group(0)
        body = raw[len(flags):]
        return flags + _SUMMARY_PREFIX + b"(?:" + body + b")"
    return raw


def compile_pattern(pattern: str, summary_only: bool = False) -> Matcher:
    """Compile a user pattern into a Matcher.

    Args:
        pattern: Regular expression to look for.
        summary_only: Restrict the match to the first line of the message.

    Returns:
        The compiled matcher.

    Raises:
        SearchError: With kind INVALID_PATTERN if the pattern does not compile.
    """
    try:
        regex = re.compile(effective_pattern(pattern, summary_only))
    except (re.error, OverflowError, RecursionError) as e:
        # re reports some malformed patterns (huge repeat counts, very deep
        # nesting) with these instead of re.error
        raise SearchError.invalid_pattern(e) from e
    return Matcher(pattern=pattern, summary_only=summary_only, regex=regex)

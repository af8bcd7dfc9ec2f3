"""Find the most recent commit whose message matches a pattern."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("git-at")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"

"""Presenting a found commit.

Contains:
- Viewer: Callable that shows a commit and returns an exit code
- git_show_viewer: Viewer that runs ``git show`` (or a configured command)
- present: Print the commit id or hand it to a viewer
"""

import logging
import subprocess
from typing import Callable, Optional, Sequence, TextIO

from gitat.errors import ExitStatus, SearchError

logger = logging.getLogger(__name__)

# Takes a commit id, returns the viewer's exit code, or None if it has none
Viewer = Callable[[str], Optional[int]]

DEFAULT_VIEWER_COMMAND = ("git", "show")


def git_show_viewer(command: Sequence[str] = DEFAULT_VIEWER_COMMAND) -> Viewer:
    """Build a viewer that runs ``command`` with the commit id appended.

    The viewer blocks until the process exits. It returns None when the
    process was killed by a signal or could not be started at all.

    Args:
        command: Program and leading arguments, e.g. ("git", "show").

    Returns:
        The viewer callable.
    """
    argv = list(command)

    def view(oid: str) -> Optional[int]:
        logger.debug("Running viewer: %s %s", " ".join(argv), oid)
        try:
            proc = subprocess.Popen(argv + [oid])
        except OSError as e:
            logger.error("Could not start viewer %s: %s", argv[0], e)
            return None
        returncode = proc.wait()
        if returncode < 0:
            logger.debug("Viewer terminated by signal %d", -returncode)
            return None
        return returncode

    return view


def present(oid: str, show: bool, viewer: Viewer, output: TextIO) -> int:
    """Report a successful search.

    Args:
        oid: The matching commit id.
        show: Hand the commit to the viewer instead of printing its id.
        viewer: Viewer to use when show is set.
        output: Stream for the commit id (normally stdout).

    Returns:
        The process exit code.

    Raises:
        SearchError: With kind IO if the id cannot be written.
    """
    if show:
        code = viewer(oid)
        if code is None:
            return int(ExitStatus.EXTERNAL_PROGRAM_FAILED)
        return code

    try:
        output.write(f"{oid}\n")
        output.flush()
    except OSError as e:
        raise SearchError.io_error(e) from e
    return int(ExitStatus.SUCCESS)

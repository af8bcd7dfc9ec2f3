"""Run one search end to end and turn its outcome into an exit code."""

from typing import TextIO

from gitat.errors import SearchError, report_error
from gitat.presenter import Viewer, present
from gitat.search import SearchEngine, SearchRequest


def run_program(
    engine: SearchEngine,
    request: SearchRequest,
    show: bool,
    quiet: bool,
    viewer: Viewer,
    output: TextIO,
    error: TextIO,
) -> int:
    """Search, present the result, and classify any failure.

    Args:
        engine: Search engine bound to a repository.
        request: The search to run.
        show: Show the commit with the viewer instead of printing its id.
        quiet: Suppress the message for non-fatal failures.
        viewer: Viewer used when show is set.
        output: Stream for the commit id.
        error: Stream for diagnostics.

    Returns:
        The process exit code.
    """
    try:
        oid = engine.search(request)
        return present(oid, show, viewer, output)
    except SearchError as e:
        return report_error(e, quiet, error)

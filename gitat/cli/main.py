"""The git-at command."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from gitat import __version__
from gitat.config import ConfigError, load_config
from gitat.errors import ExitStatus
from gitat.git import GitError, NotARepositoryError, Repository, initialize
from gitat.log import setup_logging
from gitat.presenter import git_show_viewer
from gitat.program import run_program
from gitat.search import DEFAULT_REVISION, SearchEngine, SearchRequest

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-at {__version__}")
        raise typer.Exit(0)


def main_command(
    revision: Optional[str] = typer.Argument(
        None,
        help="Revision to start searching from (default: HEAD)",
        show_default=False,
    ),
    pattern: Optional[str] = typer.Argument(
        None,
        help="Regular expression to match against commit messages",
        show_default=False,
    ),
    summary: Optional[bool] = typer.Option(
        None,
        "--summary/--no-summary",
        "-s",
        help="Search only the commit summary",
        show_default=False,
    ),
    show: bool = typer.Option(
        False,
        "--show",
        help="Invoke git show to show the commit",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Exit 1 silently if no commit is found",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debugging information to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Find a commit based on commit message."""
    # A lone positional is the pattern, not the revision
    if pattern is None:
        if revision is None:
            raise typer.BadParameter("Missing argument.", param_hint="'PATTERN'")
        pattern, revision = revision, None

    try:
        config = load_config()
    except ConfigError as e:
        typer.echo(f"fatal: {e}", err=True)
        raise typer.Exit(int(ExitStatus.FATAL))

    setup_logging(logging.DEBUG if verbose else config.log_level)

    try:
        initialize()
    except GitError as e:
        typer.echo(f"fatal: {e}", err=True)
        raise typer.Exit(int(ExitStatus.FATAL))

    try:
        repo = Repository.discover(Path.cwd())
    except NotARepositoryError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(int(ExitStatus.NOT_A_REPOSITORY))

    request = SearchRequest(
        pattern=pattern,
        revision=revision if revision is not None else DEFAULT_REVISION,
        summary_only=config.summary if summary is None else summary,
    )
    logger.debug("Searching with %s", request)

    with repo:
        code = run_program(
            SearchEngine(repo),
            request,
            show=show,
            quiet=quiet,
            viewer=git_show_viewer(config.viewer),
            output=sys.stdout,
            error=sys.stderr,
        )
    raise typer.Exit(code)

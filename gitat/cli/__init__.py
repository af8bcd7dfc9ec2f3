"""CLI entry point for git-at.

Installed as the ``git-at`` script, so it also runs as ``git at``.
"""

import typer

from gitat.cli.main import main_command

app = typer.Typer(
    name="git-at",
    help="git-at: find a commit based on commit message",
    add_completion=False,
)

app.command()(main_command)


def main() -> None:
    """Console script entry point."""
    app()


__all__ = [
    "app",
    "main",
    "main_command",
]

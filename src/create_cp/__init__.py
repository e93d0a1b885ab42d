"""
create-cp - clone a starter template into a new project.

Usage:
    create-cp
    create-cp <project-dir>
    create-cp <project-dir> --template vitesse
"""

from __future__ import annotations

import logging

import typer
from rich.markup import escape

from create_cp.cli.commands import register_init_command
from create_cp.cli.helpers import console, show_banner

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="create-cp",
    help="Create a project from a starter template",
    add_completion=False,
)

register_init_command(app, console=console, show_banner=show_banner)


def main() -> None:
    """Console script entry point.

    Errors nothing else handled (for example a template without a valid
    package.json) end up here as a single red line and exit status 1.
    """
    try:
        app()
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        console.print(f"[red]{escape(str(exc) or type(exc).__name__)}[/red]")
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover
    main()

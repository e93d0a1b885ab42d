"""Init command implementation."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from create_cp.cli.commands.init_help import INIT_COMMAND_DOC
from create_cp.cli.helpers import BannerCommand, configure_logging
from create_cp.core.config import CreateCpConfig, load_config
from create_cp.core.errors import ConfigError, FetchError
from create_cp.core.paths import empty_dir
from create_cp.fetcher import fetch_template
from create_cp.patcher import detect_package_manager, print_next_steps, rewrite_manifest
from create_cp.session import Cancelled, ConsolePrompter, Prompter, ResolverContext, resolve_session
from create_cp.template.catalog import OWNERS, TemplateNode, build_catalog

__all__ = ["register_init_command"]

logger = logging.getLogger(__name__)


def register_init_command(
    app: typer.Typer,
    *,
    console: Console,
    show_banner: Callable[[], None],
    owners: Sequence[TemplateNode] = OWNERS,
    prompter_factory: Callable[[Console], Prompter] = ConsolePrompter,
) -> None:
    """Attach the init command to ``app``."""

    class InitCommand(BannerCommand):
        banner = staticmethod(show_banner)

    @app.command(cls=InitCommand, help=INIT_COMMAND_DOC)
    def init(
        target_dir: Optional[str] = typer.Argument(None, help="Directory to create the project in"),
        template: Optional[str] = typer.Option(
            None, "--template", "-t", help="Template name (skips owner/template selection)"
        ),
        debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    ) -> None:
        configure_logging(debug)
        show_banner()

        try:
            config = load_config()
        except ConfigError as exc:
            console.print(f"[yellow]Warning:[/yellow] {escape(str(exc))}; using defaults")
            config = CreateCpConfig()

        cwd = Path.cwd()
        context = ResolverContext(
            owners=tuple(owners),
            catalog=build_catalog(owners),
            cwd=cwd,
            default_project_name=config.default_project_name,
        )
        resolution = resolve_session(
            context,
            prompter_factory(console),
            target_dir=target_dir,
            template=template,
        )
        if isinstance(resolution, Cancelled):
            console.print(f"[red]✖[/red] {escape(resolution.reason)}")
            raise typer.Exit(0)

        root = resolution.root(cwd)
        if resolution.overwrite:
            logger.debug("Clearing %s", root)
            empty_dir(root)

        try:
            fetch_template(resolution, cwd=cwd, console=console, git=config.git_executable)
        except FetchError as exc:
            logger.debug("Fetch failed: %s (returncode=%s)", exc.message, exc.returncode)
            raise typer.Exit(1)

        rewrite_manifest(root, resolution.package_name)
        manager = detect_package_manager(
            root,
            os.environ.get(config.user_agent_env),
            default=config.default_package_manager,
        )
        print_next_steps(console, root, cwd, manager)

"""Shared console and banner helpers for the CLI."""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.text import Text
from typer.core import TyperCommand

__all__ = ["console", "BANNER", "TAGLINE", "show_banner", "BannerCommand", "configure_logging"]

console = Console()

BANNER = "Create-cp"
TAGLINE = "The quickly build project tools"

# Start and end colours of the banner gradient.
_GRADIENT_START = (94, 231, 223)
_GRADIENT_END = (180, 144, 202)


def _gradient(text: str) -> Text:
    styled = Text()
    visible = [ch for ch in text if not ch.isspace()]
    steps = max(len(visible) - 1, 1)
    index = 0
    for ch in text:
        if ch.isspace():
            styled.append(ch)
            continue
        ratio = index / steps
        r, g, b = (
            round(start + (end - start) * ratio)
            for start, end in zip(_GRADIENT_START, _GRADIENT_END)
        )
        styled.append(ch, style=f"rgb({r},{g},{b})")
        index += 1
    return styled


def show_banner(target: Console | None = None) -> None:
    """Display the gradient banner line."""
    out = target or console
    out.print()
    out.print(Align.left(_gradient(f"{BANNER} —— {TAGLINE}")))
    out.print()


class BannerCommand(TyperCommand):
    """Command class that shows the banner before help."""

    banner = staticmethod(show_banner)

    def format_help(self, ctx, formatter):
        self.banner()
        super().format_help(ctx, formatter)


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG with ``--debug``, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )

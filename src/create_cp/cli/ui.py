"""Reusable UI helpers for create-cp interactions."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Union

import readchar
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from create_cp.core.errors import PromptAborted

Validator = Callable[[str], Union[bool, str]]


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
        return "enter"

    if key in (readchar.key.BACKSPACE, "\x08"):
        return "backspace"

    if key == readchar.key.TAB:
        return "tab"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def _resolve_console(console: Optional[Console]) -> Console:
    return console or Console()


def _cancel(console: Console) -> PromptAborted:
    console.print("\n[yellow]Selection cancelled[/yellow]")
    return PromptAborted("prompt cancelled by user")


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select an option",
    default_key: str | None = None,
    console: Console | None = None,
    labels: Dict[str, str] | None = None,
) -> str:
    """
    Interactive selection using arrow keys with Rich Live display.

    ``options`` maps option keys to a short description. ``labels`` may give
    rich markup for a key (for example a coloured name); the plain key is
    shown in cyan otherwise.
    """
    console = _resolve_console(console)
    labels = labels or {}
    option_keys = list(options.keys())
    if not option_keys:
        raise ValueError("select_with_arrows requires at least one option")
    if default_key and default_key in option_keys:
        selected_index = option_keys.index(default_key)
    else:
        selected_index = 0

    def create_selection_panel():
        """Create the selection panel with current selection highlighted."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, key in enumerate(option_keys):
            label = labels.get(key, f"[cyan]{escape(key)}[/cyan]")
            description = f" [dim]({escape(options[key])})[/dim]" if options[key] else ""
            table.add_row("▶" if i == selected_index else " ", f"{label}{description}")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise _cancel(console) from None
            if key == "up":
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == "down":
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == "enter":
                break
            elif key == "escape":
                raise _cancel(console)

            live.update(create_selection_panel(), refresh=True)

    selected_key = option_keys[selected_index]
    console.print(f"[green]✔[/green] {prompt_text} {labels.get(selected_key, escape(selected_key))}")
    return selected_key


def text_input(
    prompt_text: str,
    *,
    default: str = "",
    on_change: Callable[[str], None] | None = None,
    validate: Validator | None = None,
    console: Console | None = None,
) -> str:
    """Read a line of text, reporting every edit through ``on_change``.

    Enter on an empty buffer submits ``default``; Tab copies it into the
    buffer for editing. ``validate`` returns True or an error message, in
    which case the message is shown and editing continues.
    """
    console = _resolve_console(console)
    buffer = ""
    error: str | None = None

    def render() -> str:
        shown = escape(buffer) if buffer else f"[dim]{escape(default)}[/dim]"
        line = f"[bold cyan]?[/bold cyan] [bold]{prompt_text}[/bold] {shown}"
        if error:
            line += f"\n[red]{escape(error)}[/red]"
        return line

    with Live(render(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                raise _cancel(console) from None

            if key == "escape":
                raise _cancel(console)
            if key == "enter":
                value = buffer or default
                verdict = validate(value) if validate else True
                if verdict is True:
                    break
                error = verdict if isinstance(verdict, str) else "Invalid value"
                live.update(render(), refresh=True)
                continue

            if key == "backspace":
                buffer = buffer[:-1]
            elif key == "tab":
                if not buffer:
                    buffer = default
            elif len(key) == 1 and key.isprintable():
                buffer += key
            else:
                continue

            error = None
            if on_change:
                on_change(buffer)
            live.update(render(), refresh=True)

    console.print(f"[green]✔[/green] {prompt_text} [cyan]{escape(value)}[/cyan]")
    return value


def confirm_with_keys(
    prompt_text: str,
    *,
    default: bool = False,
    console: Console | None = None,
) -> bool:
    """Ask a yes/no question answered with a single key press."""
    console = _resolve_console(console)
    hint = "(Y/n)" if default else "(y/N)"
    console.print(f"[bold cyan]?[/bold cyan] [bold]{prompt_text}[/bold] [dim]{hint}[/dim]", end=" ")

    while True:
        try:
            key = get_key()
        except KeyboardInterrupt:
            raise _cancel(console) from None

        if key == "escape":
            raise _cancel(console)
        if key == "enter":
            answer = default
        elif key.lower() == "y":
            answer = True
        elif key.lower() == "n":
            answer = False
        else:
            continue
        console.print("[cyan]yes[/cyan]" if answer else "[cyan]no[/cyan]")
        return answer


__all__ = [
    "get_key",
    "select_with_arrows",
    "text_input",
    "confirm_with_keys",
]

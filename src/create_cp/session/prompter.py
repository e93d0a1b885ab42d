"""Prompt backends used by the resolver.

The resolver only talks to the :class:`Prompter` protocol. On a terminal
:class:`ConsolePrompter` drives the arrow-key widgets from
:mod:`create_cp.cli.ui`; with redirected stdin it falls back to plain
``typer`` prompts so answers can be piped in.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from create_cp.cli import ui
from create_cp.core.errors import PromptAborted

__all__ = ["Choice", "Prompter", "ConsolePrompter"]


@dataclass(frozen=True)
class Choice:
    """One entry of a selection prompt."""

    key: str
    value: Any
    label: str | None = None
    description: str = ""

    @property
    def markup(self) -> str:
        return self.label or f"[cyan]{escape(self.key)}[/cyan]"


class Prompter(Protocol):
    def text(
        self,
        message: str,
        *,
        default: str = "",
        on_change: Callable[[str], None] | None = None,
        validate: ui.Validator | None = None,
    ) -> str: ...

    def confirm(self, message: str, *, default: bool = False) -> bool: ...

    def select(self, message: str, choices: Sequence[Choice]) -> Any: ...


class ConsolePrompter:
    """Prompter bound to a rich console."""

    def __init__(self, console: Console, interactive: bool | None = None) -> None:
        self.console = console
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    def text(self, message, *, default="", on_change=None, validate=None):
        if self.interactive:
            return ui.text_input(
                message,
                default=default,
                on_change=on_change,
                validate=validate,
                console=self.console,
            )

        while True:
            value = self._ask(message.rstrip().rstrip(":"), default=default or None).strip() or default
            if on_change:
                on_change(value)
            verdict = validate(value) if validate else True
            if verdict is True:
                return value
            self.console.print(f"[red]{escape(verdict if isinstance(verdict, str) else 'Invalid value')}[/red]")

    def confirm(self, message, *, default=False):
        if self.interactive:
            return ui.confirm_with_keys(message, default=default, console=self.console)
        try:
            return typer.confirm(message, default=default)
        except typer.Abort:
            raise PromptAborted(message) from None

    def select(self, message, choices):
        if not choices:
            raise ValueError("select requires at least one choice")
        if self.interactive:
            key = ui.select_with_arrows(
                {choice.key: choice.description for choice in choices},
                message,
                console=self.console,
                labels={choice.key: choice.markup for choice in choices},
            )
            return next(choice.value for choice in choices if choice.key == key)

        self.console.print(f"[bold]{escape(message)}[/bold]")
        for index, choice in enumerate(choices, start=1):
            suffix = f" [dim]({escape(choice.description)})[/dim]" if choice.description else ""
            self.console.print(f"  {index}. {choice.markup}{suffix}")
        while True:
            raw = self._ask("Choice", default="1")
            if raw.strip().isdigit() and 1 <= int(raw) <= len(choices):
                return choices[int(raw) - 1].value
            self.console.print(f"[red]Enter a number between 1 and {len(choices)}[/red]")

    def _ask(self, message: str, default: str | None = None) -> str:
        try:
            return typer.prompt(message, default=default, show_default=default is not None)
        except typer.Abort:
            raise PromptAborted(message) from None

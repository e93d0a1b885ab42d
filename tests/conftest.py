from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from create_cp.core.errors import PromptAborted
from create_cp.session import Choice

ABORT = object()
DEFAULT = object()


class ScriptedPrompter:
    """Prompter that replays canned answers and records every prompt.

    Text answers may be ``DEFAULT`` (accept the default); any answer may be
    ``ABORT`` to simulate Esc/Ctrl+C. Select answers are choice keys.
    """

    def __init__(self, *answers: Any) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str]] = []
        self.errors: list[str] = []
        self.defaults: list[str] = []

    def _next(self, kind: str, message: str) -> Any:
        self.calls.append((kind, message))
        if not self.answers:
            raise AssertionError(f"unexpected {kind} prompt: {message!r}")
        answer = self.answers.pop(0)
        if answer is ABORT:
            raise PromptAborted(message)
        return answer

    def text(self, message, *, default="", on_change=None, validate=None):
        self.defaults.append(default)
        while True:
            answer = self._next("text", message)
            value = default if answer is DEFAULT else answer
            if on_change:
                on_change(value)
            verdict = validate(value) if validate else True
            if verdict is True:
                return value
            self.errors.append(verdict)

    def confirm(self, message, *, default=False):
        return self._next("confirm", message)

    def select(self, message, choices: Sequence[Choice]):
        key = self._next("select", message)
        for choice in choices:
            if choice.key == key:
                return choice.value
        raise AssertionError(f"{key!r} not offered in {[c.key for c in choices]}")

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


@pytest.fixture()
def scripted_prompter() -> Callable[..., ScriptedPrompter]:
    return ScriptedPrompter


@pytest.fixture()
def prompt_answers():
    """Sentinels understood by :class:`ScriptedPrompter`."""
    return {"abort": ABORT, "default": DEFAULT}


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the user's real config and package manager."""
    home = tmp_path / "create-cp-home"
    monkeypatch.setenv("CREATE_CP_HOME", str(home))
    monkeypatch.delenv("npm_config_user_agent", raising=False)
    return home

"""Clone a template repository with the external git client.

The clone runs as an asyncio subprocess while a spinner is refreshed by a
timer task on the same loop. Both the failure path and the SIGINT handler
go through :meth:`CancellationToken.cancel`, which kills the child held in
the token's slot.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import signal
from asyncio.subprocess import PIPE, DEVNULL, Process
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from create_cp.core.errors import FetchAbortedError, FetchFailedError
from create_cp.session.models import ResolvedSession

__all__ = [
    "ABORT_MESSAGE",
    "FAILURE_MESSAGE",
    "SPINNER_TEXT",
    "CancellationToken",
    "build_clone_command",
    "clone_template",
    "fetch_template",
]

logger = logging.getLogger(__name__)

SPINNER_TEXT = "Downloading from remote repo, please wait a moment..."
SUCCESS_MESSAGE = "Downloaded"
FAILURE_MESSAGE = "something wrong"
ABORT_MESSAGE = "Downloading abort"

SPINNER_INTERVAL = 0.08


class CancellationToken:
    """Holds the running clone process and the first termination reason."""

    def __init__(self) -> None:
        self.process: Process | None = None
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self.reason is not None

    def attach(self, process: Process) -> None:
        self.process = process
        if self.cancelled:
            self.terminate()

    def cancel(self, reason: str) -> None:
        if self.reason is None:
            self.reason = reason
        self.terminate()

    def terminate(self) -> None:
        process = self.process
        if process is None or process.returncode is not None:
            return
        logger.debug("Killing clone process %s", process.pid)
        try:
            process.kill()
        except ProcessLookupError:
            pass


def build_clone_command(locator: str, target_dir: str, git: str = "git") -> list[str]:
    """Return the argv that clones ``locator`` into ``target_dir``."""
    return [git, "clone", locator, target_dir]


def _install_interrupt_handler(
    loop: asyncio.AbstractEventLoop, token: CancellationToken
) -> Callable[[], None]:
    """Route SIGINT to ``token``; returns a callable restoring the old handler."""
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel, ABORT_MESSAGE)
        return lambda: loop.remove_signal_handler(signal.SIGINT)
    except (NotImplementedError, RuntimeError):
        # Windows loops do not support add_signal_handler.
        pass

    def _handler(signum, frame):
        loop.call_soon_threadsafe(token.cancel, ABORT_MESSAGE)

    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:
        logger.debug("Not on the main thread; SIGINT will not abort the clone")
        return lambda: None
    return lambda: signal.signal(signal.SIGINT, previous)


async def _tick(live: Live) -> None:
    while True:
        await asyncio.sleep(SPINNER_INTERVAL)
        live.refresh()


async def clone_template(
    command: list[str],
    *,
    cwd: Path,
    console: Console,
    token: CancellationToken | None = None,
) -> None:
    """Run ``command`` under a spinner.

    Raises:
        FetchFailedError: The process could not start or exited non-zero.
        FetchAbortedError: SIGINT arrived while the clone was running.
    """
    token = token or CancellationToken()
    loop = asyncio.get_running_loop()
    restore_handler = _install_interrupt_handler(loop, token)
    logger.debug("Running %s in %s", shlex.join(command), cwd)

    live = Live(
        Spinner("dots", text=SPINNER_TEXT, style="cyan"),
        console=console,
        transient=True,
        auto_refresh=False,
    )
    live.start()
    ticker = asyncio.create_task(_tick(live))
    error: FetchAbortedError | FetchFailedError | None = None
    try:
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(cwd),
                stdin=DEVNULL,
                stdout=DEVNULL,
                stderr=PIPE,
            )
        except OSError as exc:
            logger.debug("Could not start %s: %s", command[0], exc)
            token.cancel(FAILURE_MESSAGE)
            error = FetchFailedError(FAILURE_MESSAGE)
        else:
            token.attach(process)
            _, stderr = await process.communicate()
            if stderr:
                logger.debug("git: %s", stderr.decode(errors="replace").strip())

            if token.reason == ABORT_MESSAGE:
                error = FetchAbortedError(ABORT_MESSAGE, process.returncode)
            elif process.returncode != 0:
                token.cancel(FAILURE_MESSAGE)
                error = FetchFailedError(FAILURE_MESSAGE, process.returncode)
    finally:
        ticker.cancel()
        live.stop()
        restore_handler()

    if error is not None:
        console.print(f"[red]×[/red] {error.message}")
        raise error
    console.print(f"[green]√[/green] {SUCCESS_MESSAGE}")


def fetch_template(
    session: ResolvedSession,
    *,
    cwd: Path,
    console: Console,
    git: str = "git",
    token: CancellationToken | None = None,
) -> Path:
    """Clone the session's template into its target directory and return it."""
    command = build_clone_command(session.template_locator, session.target_dir, git)
    asyncio.run(clone_template(command, cwd=cwd, console=console, token=token))
    return session.root(cwd)

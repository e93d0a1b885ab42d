from __future__ import annotations

import asyncio
import io
import os
import signal
import subprocess
import time
import sys
from pathlib import Path

import pytest
from rich.console import Console

from create_cp.core.errors import FetchAbortedError, FetchFailedError
from create_cp.fetcher import (
    ABORT_MESSAGE,
    CancellationToken,
    build_clone_command,
    clone_template,
    fetch_template,
)
from create_cp.session import ResolvedSession

SLEEPER = [sys.executable, "-c", "import time; time.sleep(30)"]


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


def _output(console: Console) -> str:
    return console.file.getvalue()


def test_build_clone_command() -> None:
    assert build_clone_command("git@github.com:antfu/vitesse.git", "my-app") == [
        "git",
        "clone",
        "git@github.com:antfu/vitesse.git",
        "my-app",
    ]
    assert build_clone_command("url", "dir", git="/usr/bin/git")[0] == "/usr/bin/git"


def test_successful_clone_reports_downloaded(tmp_path: Path, console: Console) -> None:
    command = [sys.executable, "-c", "import os; os.mkdir('out')"]

    asyncio.run(clone_template(command, cwd=tmp_path, console=console))

    assert (tmp_path / "out").is_dir()
    assert "√ Downloaded" in _output(console)


def test_failed_clone_raises_and_reports(tmp_path: Path, console: Console) -> None:
    command = [sys.executable, "-c", "import sys; sys.stderr.write('fatal: nope'); sys.exit(128)"]
    token = CancellationToken()

    with pytest.raises(FetchFailedError) as excinfo:
        asyncio.run(clone_template(command, cwd=tmp_path, console=console, token=token))

    assert excinfo.value.returncode == 128
    assert token.reason == "something wrong"
    assert "× something wrong" in _output(console)


def test_missing_executable_is_a_generic_failure(tmp_path: Path, console: Console) -> None:
    with pytest.raises(FetchFailedError):
        asyncio.run(
            clone_template(["create-cp-no-such-git", "clone"], cwd=tmp_path, console=console)
        )

    assert "× something wrong" in _output(console)


def test_cancel_kills_running_clone(tmp_path: Path, console: Console) -> None:
    token = CancellationToken()

    async def scenario() -> None:
        asyncio.get_running_loop().call_later(0.5, token.cancel, ABORT_MESSAGE)
        await clone_template(SLEEPER, cwd=tmp_path, console=console, token=token)

    with pytest.raises(FetchAbortedError):
        asyncio.run(asyncio.wait_for(scenario(), timeout=20))

    assert token.process is not None
    assert token.process.returncode is not None
    assert "× Downloading abort" in _output(console)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signal delivery")
def test_sigint_aborts_clone(tmp_path: Path, console: Console) -> None:
    token = CancellationToken()

    async def scenario() -> None:
        asyncio.get_running_loop().call_later(0.5, os.kill, os.getpid(), signal.SIGINT)
        await clone_template(SLEEPER, cwd=tmp_path, console=console, token=token)

    with pytest.raises(FetchAbortedError):
        asyncio.run(asyncio.wait_for(scenario(), timeout=20))

    assert token.reason == ABORT_MESSAGE


GROUP_CLONE_SCRIPT = """
import asyncio, io, sys
from pathlib import Path
from rich.console import Console
from create_cp.core.errors import FetchAbortedError
from create_cp.fetcher import clone_template

marker, workdir = sys.argv[1], sys.argv[2]
child = [sys.executable, "-c", "import pathlib, sys, time; pathlib.Path(sys.argv[1]).touch(); time.sleep(30)", marker]
console = Console(file=io.StringIO())
try:
    asyncio.run(clone_template(child, cwd=Path(workdir), console=console))
except FetchAbortedError as exc:
    print(type(exc).__name__, exc.message)
    sys.exit(1)
print("finished")
"""


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX process groups")
def test_ctrl_c_to_process_group_aborts_clone(tmp_path: Path) -> None:
    marker = tmp_path / "child-started"
    proc = subprocess.Popen(
        [sys.executable, "-c", GROUP_CLONE_SCRIPT, str(marker), str(tmp_path)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        start_new_session=True,
    )
    try:
        deadline = time.monotonic() + 20
        while not marker.exists():
            assert proc.poll() is None, proc.communicate()
            assert time.monotonic() < deadline, "clone child never started"
            time.sleep(0.05)

        os.killpg(proc.pid, signal.SIGINT)
        stdout, stderr = proc.communicate(timeout=20)
    finally:
        if proc.poll() is None:
            os.killpg(proc.pid, signal.SIGKILL)
            proc.communicate()

    assert proc.returncode == 1, stderr
    assert stdout.strip() == f"FetchAbortedError {ABORT_MESSAGE}"


def test_cancel_before_spawn_kills_on_attach(tmp_path: Path, console: Console) -> None:
    token = CancellationToken()
    token.cancel(ABORT_MESSAGE)

    with pytest.raises(FetchAbortedError):
        asyncio.run(asyncio.wait_for(clone_template(SLEEPER, cwd=tmp_path, console=console, token=token), 20))


def test_fetch_template_clones_into_session_target(tmp_path: Path, console: Console, monkeypatch) -> None:
    seen: list[tuple[str, str, str]] = []

    def fake_command(locator: str, target_dir: str, git: str = "git") -> list[str]:
        seen.append((locator, target_dir, git))
        return [sys.executable, "-c", "import os, sys; os.mkdir(sys.argv[1])", target_dir]

    monkeypatch.setattr("create_cp.fetcher.build_clone_command", fake_command)
    session = ResolvedSession("my-app", "my-app", "git@github.com:antfu/vitesse.git")

    root = fetch_template(session, cwd=tmp_path, console=console, git="git2")

    assert root == tmp_path / "my-app"
    assert root.is_dir()
    assert seen == [("git@github.com:antfu/vitesse.git", "my-app", "git2")]

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from create_cp.patcher import (
    PackageManagerInfo,
    detect_package_manager,
    next_steps,
    parse_user_agent,
    print_next_steps,
    rewrite_manifest,
)


def _project(tmp_path: Path, *files: str) -> Path:
    root = tmp_path / "my-app"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps({"name": "vitesse", "private": True, "scripts": {"dev": "vite"}}),
        encoding="utf-8",
    )
    for name in files:
        (root / name).write_text("", encoding="utf-8")
    return root


def test_rewrite_manifest_sets_name_and_keeps_other_fields(tmp_path: Path) -> None:
    root = _project(tmp_path)

    assert rewrite_manifest(root, "cool-app") == "cool-app"

    text = (root / "package.json").read_text(encoding="utf-8")
    assert json.loads(text) == {"name": "cool-app", "private": True, "scripts": {"dev": "vite"}}
    assert text.startswith('{\n  "name": "cool-app"')


def test_rewrite_manifest_falls_back_to_directory_name(tmp_path: Path) -> None:
    root = _project(tmp_path)

    rewrite_manifest(root, None)

    assert json.loads((root / "package.json").read_text(encoding="utf-8"))["name"] == "my-app"


def test_rewrite_manifest_propagates_malformed_json(tmp_path: Path) -> None:
    root = tmp_path / "broken"
    root.mkdir()
    (root / "package.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        rewrite_manifest(root, "x")


def test_rewrite_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        rewrite_manifest(tmp_path, "x")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("pnpm/8.6.0 npm/? node/v18.16.0 darwin arm64", PackageManagerInfo("pnpm", "8.6.0")),
        ("yarn/1.22.19 npm/? node/v18.16.0", PackageManagerInfo("yarn", "1.22.19")),
        ("bun", PackageManagerInfo("bun", None)),
        ("", None),
        (None, None),
    ],
)
def test_parse_user_agent(value, expected) -> None:
    assert parse_user_agent(value) == expected


@pytest.mark.parametrize(
    ("lock_files", "expected"),
    [
        (("pnpm-lock.yaml",), "pnpm"),
        (("yarn.lock",), "yarn"),
        (("package-lock.json",), "npm"),
        (("package-lock.json", "yarn.lock", "pnpm-lock.yaml"), "pnpm"),
        (("package-lock.json", "yarn.lock"), "yarn"),
    ],
)
def test_lockfile_wins_in_priority_order(tmp_path: Path, lock_files, expected) -> None:
    root = _project(tmp_path, *lock_files)

    assert detect_package_manager(root, "bun/1.0.0") == expected


def test_user_agent_used_without_lockfile(tmp_path: Path) -> None:
    root = _project(tmp_path)

    assert detect_package_manager(root, "pnpm/8.6.0 npm/? node/v18") == "pnpm"


def test_default_used_without_lockfile_or_user_agent(tmp_path: Path) -> None:
    root = _project(tmp_path)

    assert detect_package_manager(root, None) == "npm"
    assert detect_package_manager(root, None, default="pnpm") == "pnpm"


def test_next_steps_include_cd_when_target_differs(tmp_path: Path) -> None:
    root = tmp_path / "my-app"

    assert next_steps(root, tmp_path, "npm") == ["cd my-app", "npm install", "npm run dev"]


def test_next_steps_for_current_directory_and_yarn(tmp_path: Path) -> None:
    assert next_steps(tmp_path / ".", tmp_path, "yarn") == ["yarn", "yarn dev"]


def test_print_next_steps(tmp_path: Path) -> None:
    console = Console(file=io.StringIO(), force_terminal=False)

    print_next_steps(console, tmp_path / "my-app", tmp_path, "pnpm")

    output = console.file.getvalue()
    assert "Done. Now run:" in output
    assert "  cd my-app" in output
    assert "  pnpm install" in output
    assert "  pnpm run dev" in output

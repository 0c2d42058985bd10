from __future__ import annotations

import shlex
from pathlib import Path

import pytest

from native_launch.config import SandboxConfig
from native_launch.process import build_command_line
from native_launch.sandbox import (
    INSTALL_LOCATION_PLACEHOLDER,
    SANDBOX_TEMPLATE,
    build_sandbox_command,
    render_sandbox_profile,
    sandbox_profile_path,
    write_sandbox_profile,
)


def test_render_binds_install_location() -> None:
    rendered = render_sandbox_profile(Path("/Users/me/Library/Games/My Game"))
    assert INSTALL_LOCATION_PLACEHOLDER not in rendered
    assert '(subpath "/Users/me/Library/Games/My Game")' in rendered


def test_template_contains_placeholder() -> None:
    assert INSTALL_LOCATION_PLACEHOLDER in SANDBOX_TEMPLATE
    assert SANDBOX_TEMPLATE.startswith("(version 1)")


def test_profile_path_lives_in_metadata_dir(tmp_path: Path) -> None:
    assert sandbox_profile_path(tmp_path) == tmp_path / ".itch" / "isolate-app.sb"
    custom = SandboxConfig(metadata_dir_name=".meta", profile_file_name="app.sb")
    assert sandbox_profile_path(tmp_path, custom) == tmp_path / ".meta" / "app.sb"


def test_write_overwrites_previous_profile(tmp_path: Path) -> None:
    profile_path = sandbox_profile_path(tmp_path)
    profile_path.parent.mkdir(parents=True)
    profile_path.write_text("stale profile", encoding="utf-8")

    written = write_sandbox_profile(tmp_path)

    assert written == profile_path
    content = profile_path.read_text(encoding="utf-8")
    assert "stale" not in content
    assert str(tmp_path) in content
    assert [path.name for path in profile_path.parent.iterdir()] == ["isolate-app.sb"]


def test_write_uses_custom_template(tmp_path: Path) -> None:
    template = tmp_path / "custom.sb"
    template.write_text("(allow file-read* (subpath \"@ROOT@\"))\n", encoding="utf-8")
    install_root = tmp_path / "install"
    install_root.mkdir()
    config = SandboxConfig(template_file=template, placeholder="@ROOT@")

    written = write_sandbox_profile(install_root, config)

    assert written.read_text(encoding="utf-8") == f'(allow file-read* (subpath "{install_root}"))\n'


def test_write_propagates_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "install"
    blocker.mkdir()
    (blocker / ".itch").write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        write_sandbox_profile(blocker)


def test_sandbox_command_has_no_trailing_characters() -> None:
    inner = build_command_line("/Games/Game.app/Contents/MacOS/Game", ["--windowed"])
    command = build_sandbox_command(Path("/Games/.itch/isolate-app.sb"), inner)

    assert command == (
        'sandbox-exec -f "/Games/.itch/isolate-app.sb" '
        '"/Games/Game.app/Contents/MacOS/Game" "--windowed"'
    )
    assert shlex.split(command) == [
        "sandbox-exec",
        "-f",
        "/Games/.itch/isolate-app.sb",
        "/Games/Game.app/Contents/MacOS/Game",
        "--windowed",
    ]

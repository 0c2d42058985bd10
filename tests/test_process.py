from __future__ import annotations

import shlex
import sys
from pathlib import Path

import pytest

from native_launch.errors import CRASH_REASON, Crash, SpawnError
from native_launch.process import (
    SUCCESS_MESSAGE,
    build_command_line,
    capture,
    escape_arg,
    run_shell_command,
    spawn,
)


@pytest.mark.parametrize(
    "value",
    [
        "plain",
        "with space",
        'say "hi"',
        '"',
        "it's",
        "/Applications/My Game.app/Contents/MacOS/My Game",
        "C:\\saves\\",
        "\\\\server\\share",
        'trailing \\"',
    ],
)
def test_escape_round_trips_through_shell_tokenizer(value: str) -> None:
    assert shlex.split(escape_arg(value)) == [value]


def test_escape_arg_format() -> None:
    assert escape_arg('a"b') == '"a\\"b"'
    assert escape_arg("C:\\saves\\") == '"C:\\\\saves\\\\"'


def test_build_command_line_quotes_every_part() -> None:
    line = build_command_line("/opt/My Game/run", ["--flag", 'quote"d'])
    assert line == '"/opt/My Game/run" "--flag" "quote\\"d"'
    assert shlex.split(line) == ["/opt/My Game/run", "--flag", 'quote"d']


def test_build_command_line_without_args() -> None:
    assert build_command_line("game") == '"game"'


def test_spawn_forwards_lines_per_stream() -> None:
    script = (
        "import sys\n"
        "for i in range(200):\n"
        "    print(f'out {i}')\n"
        "    print(f'err {i}', file=sys.stderr)\n"
    )
    out: list[str] = []
    err: list[str] = []

    result = spawn(sys.executable, ["-c", script], on_stdout=out.append, on_stderr=err.append)

    assert result.succeeded
    assert out == [f"out {i}" for i in range(200)]
    assert err == [f"err {i}" for i in range(200)]


def test_spawn_reports_exit_code() -> None:
    result = spawn(sys.executable, ["-c", "raise SystemExit(3)"])
    assert result.exit_code == 3
    assert not result.succeeded


def test_spawn_missing_command_raises_spawn_error(tmp_path: Path) -> None:
    with pytest.raises(SpawnError):
        spawn(str(tmp_path / "does-not-exist"))


def test_capture_collects_both_streams() -> None:
    captured = capture(sys.executable, ["-c", "import sys; print('a'); print('b'); print('c', file=sys.stderr)"])
    assert captured.stdout == "a\nb"
    assert captured.stderr == "c"


def test_run_shell_command_logs_tagged_lines(caplog: pytest.LogCaptureFixture, tmp_path: Path) -> None:
    command = build_command_line(sys.executable, ["-c", "import sys; print('hello'); print('oops', file=sys.stderr)"])

    with caplog.at_level("INFO", logger="native_launch.process"):
        message = run_shell_command(tmp_path / "game", command)

    assert message == SUCCESS_MESSAGE
    assert "stdout: hello" in caplog.messages
    assert "stderr: oops" in caplog.messages
    assert f"Working directory: {tmp_path}" in caplog.messages


def test_run_shell_command_uses_executable_directory(tmp_path: Path) -> None:
    marker = tmp_path / "cwd.txt"
    script = "import os, pathlib; pathlib.Path('cwd.txt').write_text(os.getcwd())"
    run_shell_command(tmp_path / "game", build_command_line(sys.executable, ["-c", script]))
    assert Path(marker.read_text()).resolve() == tmp_path.resolve()


def test_run_shell_command_non_zero_exit_is_crash(tmp_path: Path) -> None:
    exe_path = tmp_path / "game"
    command = build_command_line(sys.executable, ["-c", "raise SystemExit(1)"])

    with pytest.raises(Crash) as exc_info:
        run_shell_command(exe_path, command)

    crash = exc_info.value
    assert crash.reason == CRASH_REASON
    assert crash.exit_code == 1
    assert crash.exe_path == str(exe_path)
    assert "process exited with code 1" in crash.message
    assert str(exe_path) in crash.message

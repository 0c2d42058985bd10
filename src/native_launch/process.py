"""Command-line quoting and the spawn primitive shared by every external invocation."""

from __future__ import annotations

import logging
import shlex
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Callable, Sequence

from native_launch.errors import Crash, SpawnError

LOGGER = logging.getLogger(__name__)

SUCCESS_MESSAGE = "child completed successfully"

LineCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Exit status of a finished child process."""

    command: str
    args: tuple[str, ...]
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class CapturedOutput:
    """A finished child process with both output streams collected."""

    result: ProcessResult
    stdout: str
    stderr: str


def escape_arg(arg: str | Path) -> str:
    """Wrap an argument in double quotes, backslash-escaping embedded backslashes and double quotes."""

    escaped = str(arg).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_command_line(target: str | Path, args: Sequence[str | Path] = ()) -> str:
    """Quote the target and each argument individually and join them with spaces."""

    return " ".join(escape_arg(part) for part in (target, *args))


def _drain(stream: IO[str], on_line: LineCallback, errors: list[BaseException]) -> None:
    try:
        with stream:
            for line in iter(stream.readline, ""):
                on_line(line.rstrip("\r\n"))
    except Exception as exc:
        errors.append(exc)


def spawn(
    command: str,
    args: Sequence[str] = (),
    *,
    cwd: Path | None = None,
    on_stdout: LineCallback | None = None,
    on_stderr: LineCallback | None = None,
) -> ProcessResult:
    """Run a child process to completion, forwarding each output line to a callback.

    Both streams are drained on their own threads so a chatty stream never
    blocks the other. There is no timeout: the call returns when the child
    exits.
    """

    argv = [command, *args]
    try:
        process = subprocess.Popen(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise SpawnError(command, exc) from exc

    reader_errors: list[BaseException] = []
    readers = [
        threading.Thread(
            target=_drain,
            args=(process.stdout, on_stdout or (lambda _line: None), reader_errors),
            name="spawn-stdout",
            daemon=True,
        ),
        threading.Thread(
            target=_drain,
            args=(process.stderr, on_stderr or (lambda _line: None), reader_errors),
            name="spawn-stderr",
            daemon=True,
        ),
    ]
    for reader in readers:
        reader.start()
    exit_code = process.wait()
    for reader in readers:
        reader.join()

    if reader_errors:
        raise reader_errors[0]
    return ProcessResult(command=command, args=tuple(args), exit_code=exit_code)


def capture(command: str, args: Sequence[str] = (), *, cwd: Path | None = None) -> CapturedOutput:
    """Run a child process and collect its stdout and stderr as text."""

    out_lines: list[str] = []
    err_lines: list[str] = []
    result = spawn(command, args, cwd=cwd, on_stdout=out_lines.append, on_stderr=err_lines.append)
    return CapturedOutput(result=result, stdout="\n".join(out_lines), stderr="\n".join(err_lines))


def run_shell_command(
    exe_path: Path | str,
    full_command: str,
    *,
    logger: logging.Logger | None = None,
) -> str:
    """Tokenize a quoted command line and run it from the executable's directory.

    Raises ``Crash`` when the child exits non-zero.
    """

    effective_logger = logger or LOGGER
    effective_logger.info("sh %s", full_command)

    cwd = Path(exe_path).parent
    effective_logger.info("Working directory: %s", cwd)

    argv = shlex.split(full_command)
    if not argv:
        raise ValueError("Cannot run an empty command line")
    command, args = argv[0], argv[1:]

    result = spawn(
        command,
        args,
        cwd=cwd,
        on_stdout=lambda line: effective_logger.info("stdout: %s", line),
        on_stderr=lambda line: effective_logger.info("stderr: %s", line),
    )
    if not result.succeeded:
        raise Crash(exe_path, f"process exited with code {result.exit_code}", exit_code=result.exit_code)
    return SUCCESS_MESSAGE

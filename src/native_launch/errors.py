"""Typed launch failures and the single outcome value a launch produces."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

NO_EXECUTABLES_REASON = "game.install.no_executables_found"
BUNDLE_METADATA_REASON = "game.bundle.invalid_metadata"
SPAWN_FAILED_REASON = "process.spawn_failed"
CRASH_REASON = "game.crash"


class LaunchError(Exception):
    """Base class for recognized, reportable launch failures."""

    reason: str = "launch.failed"

    def __init__(self, message: str, *, exe_path: Path | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.exe_path = None if exe_path is None else str(exe_path)


class NoExecutablesFound(LaunchError):
    """Every declared candidate was filtered out before ranking finished."""

    reason = NO_EXECUTABLES_REASON

    def __init__(self, message: str = "After weighing/sorting, no executables left") -> None:
        super().__init__(message)


class BundleMetadataError(LaunchError):
    """An application bundle's metadata could not be converted or read."""

    reason = BUNDLE_METADATA_REASON

    def __init__(self, bundle_path: Path | str, detail: str) -> None:
        super().__init__(f"invalid app bundle {bundle_path}: {detail}", exe_path=bundle_path)
        self.bundle_path = str(bundle_path)
        self.detail = detail


class SpawnError(LaunchError):
    """The operating system refused to start a child process."""

    reason = SPAWN_FAILED_REASON

    def __init__(self, command: str, error: OSError) -> None:
        super().__init__(f"could not start {command}: {error}", exe_path=command)
        self.command = command
        self.error = error


class Crash(LaunchError):
    """The launched program exited with a non-zero code."""

    reason = CRASH_REASON

    def __init__(self, exe_path: Path | str, error: str, *, exit_code: int | None = None) -> None:
        super().__init__(f"{exe_path}: {error}", exe_path=exe_path)
        self.error = error
        self.exit_code = exit_code


@dataclass(frozen=True, slots=True)
class LaunchOutcome:
    """Result of one launch attempt: success, or exactly one categorized failure."""

    succeeded: bool
    message: str
    reason: str | None = None
    exe_path: str | None = None

    @classmethod
    def success(cls, message: str, exe_path: Path | str | None = None) -> "LaunchOutcome":
        return cls(succeeded=True, message=message, exe_path=None if exe_path is None else str(exe_path))

    @classmethod
    def failure(cls, error: LaunchError) -> "LaunchOutcome":
        return cls(succeeded=False, message=error.message, reason=error.reason, exe_path=error.exe_path)

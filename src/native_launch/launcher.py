"""Pick the best executable of an install and launch it with platform-appropriate semantics."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from native_launch.bundle import is_app_bundle, resolve_bundle_executable
from native_launch.candidates.pipeline import rank_install
from native_launch.candidates.ranking import select_best
from native_launch.capabilities import PlatformCapabilities, detect_capabilities
from native_launch.config import AppSettings
from native_launch.errors import LaunchError, LaunchOutcome
from native_launch.install import InstallRecord
from native_launch.logging_utils import LAUNCH_LOGGER_NAME
from native_launch.process import build_command_line, run_shell_command
from native_launch.sandbox import build_sandbox_command, write_sandbox_profile

LOGGER = logging.getLogger(LAUNCH_LOGGER_NAME)

JAR_SUFFIX = ".jar"


def launch_executable(
    target: Path | str,
    args: Sequence[str],
    *,
    record: InstallRecord,
    settings: AppSettings,
    capabilities: PlatformCapabilities,
    working_anchor: Path | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Launch ``target`` with ``args`` and return the confirmation message.

    ``working_anchor`` is the file whose directory becomes the working
    directory; it defaults to ``target`` itself. Bundles run from the
    directory holding the ``.app``, or from ``Contents/MacOS`` when sandboxed.
    """

    effective_logger = logger or LOGGER
    effective_logger.info(
        "launching '%s' on '%s' with args '%s'",
        target,
        capabilities.name,
        " ".join(args),
    )

    if capabilities.app_bundles and is_app_bundle(target):
        full_exec = resolve_bundle_executable(Path(target), settings.bundle, logger=effective_logger)
        effective_logger.info("full exec path: %s", full_exec)
        command_line = build_command_line(full_exec, args)

        if record.isolate_apps and capabilities.sandbox_isolation:
            effective_logger.info("app isolation enabled")
            profile_path = write_sandbox_profile(record.install_root, settings.sandbox, logger=effective_logger)
            sandboxed = build_sandbox_command(profile_path, command_line, settings.sandbox.command)
            return run_shell_command(full_exec, sandboxed, logger=effective_logger)

        effective_logger.info("no app isolation")
        return run_shell_command(Path(target), command_line, logger=effective_logger)

    anchor = working_anchor or Path(target)
    return run_shell_command(anchor, build_command_line(target, args), logger=effective_logger)


def launch_native(
    record: InstallRecord,
    settings: AppSettings,
    *,
    args: Sequence[str] = (),
    capabilities: PlatformCapabilities | None = None,
    logger: logging.Logger | None = None,
) -> LaunchOutcome:
    """Rank the install's executables, launch the best one, and report one outcome.

    Recognized failures come back as a failure outcome. ``OSError`` from
    writing the sandbox profile is raised unchanged.
    """

    effective_logger = logger or LOGGER
    platform_caps = capabilities or detect_capabilities(settings.launch.platform_override)
    effective_logger.info(
        "launch.start title=%s install_root=%s isolate_apps=%s",
        record.title or "-",
        record.install_root,
        record.isolate_apps,
    )

    exe_path: Path | None = None
    try:
        ranked = rank_install(record, settings, logger=effective_logger)
        best = select_best(ranked, logger=effective_logger)

        exe_path = record.install_root / best.path
        target: Path | str = exe_path
        launch_args = list(args)
        if exe_path.suffix.lower() == JAR_SUFFIX:
            effective_logger.info("Launching .jar")
            launch_args = ["-jar", str(exe_path), *launch_args]
            target = settings.launch.java_command

        message = launch_executable(
            target,
            launch_args,
            record=record,
            settings=settings,
            capabilities=platform_caps,
            working_anchor=exe_path,
            logger=effective_logger,
        )
    except LaunchError as exc:
        effective_logger.warning("launch.failed reason=%s exe_path=%s message=%s", exc.reason, exc.exe_path, exc.message)
        return LaunchOutcome.failure(exc)

    effective_logger.info("launch.succeeded exe_path=%s message=%s", exe_path, message)
    return LaunchOutcome.success(message, exe_path)

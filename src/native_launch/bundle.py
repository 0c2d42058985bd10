"""Resolve the real executable inside a macOS ``.app`` bundle."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from native_launch.config import BundleConfig
from native_launch.errors import BundleMetadataError, SpawnError
from native_launch.process import capture

LOGGER = logging.getLogger(__name__)

_BUNDLE_PATTERN = re.compile(r"\.app[\\/]?$", re.IGNORECASE)
EXECUTABLE_KEY = "CFBundleExecutable"


def is_app_bundle(path: Path | str) -> bool:
    return bool(_BUNDLE_PATTERN.search(str(path)))


def info_plist_path(bundle_path: Path, info_plist_name: str = "Info.plist") -> Path:
    return bundle_path / "Contents" / info_plist_name


def read_bundle_metadata(
    bundle_path: Path,
    config: BundleConfig | None = None,
    *,
    logger: logging.Logger | None = None,
) -> dict[str, Any]:
    """Convert the bundle's property list to JSON with the external converter and parse it."""

    effective_logger = logger or LOGGER
    bundle_config = config or BundleConfig()
    plist_path = info_plist_path(bundle_path, bundle_config.info_plist_name)

    try:
        captured = capture(bundle_config.plist_converter, ["-convert", "json", "-o", "-", str(plist_path)])
    except SpawnError as exc:
        raise BundleMetadataError(bundle_path, f"{bundle_config.plist_converter} could not be started: {exc.error}") from exc

    if not captured.result.succeeded:
        effective_logger.warning(
            "bundle.converter_failed converter=%s code=%s stderr=%s",
            bundle_config.plist_converter,
            captured.result.exit_code,
            captured.stderr,
        )
        raise BundleMetadataError(
            bundle_path,
            f"{bundle_config.plist_converter} failed with code {captured.result.exit_code}",
        )

    effective_logger.debug("bundle.metadata_json bundle=%s json=%s", bundle_path, captured.stdout)
    try:
        metadata = json.loads(captured.stdout)
    except json.JSONDecodeError as exc:
        raise BundleMetadataError(bundle_path, "couldn't parse metadata") from exc
    if not isinstance(metadata, dict):
        raise BundleMetadataError(bundle_path, "metadata is not a dictionary")
    return metadata


def resolve_bundle_executable(
    bundle_path: Path,
    config: BundleConfig | None = None,
    *,
    logger: logging.Logger | None = None,
) -> Path:
    """Return ``<bundle>/Contents/MacOS/<CFBundleExecutable>``."""

    effective_logger = logger or LOGGER
    metadata = read_bundle_metadata(bundle_path, config, logger=effective_logger)
    executable = metadata.get(EXECUTABLE_KEY)
    if not isinstance(executable, str) or not executable.strip():
        raise BundleMetadataError(bundle_path, f"missing {EXECUTABLE_KEY}")

    full_exec = bundle_path / "Contents" / "MacOS" / executable
    effective_logger.info("bundle.resolved bundle=%s executable=%s", bundle_path, full_exec)
    return full_exec

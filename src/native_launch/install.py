"""Install records and discovery of launchable files under an install root."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

LOGGER = logging.getLogger(__name__)

LAUNCHABLE_SUFFIXES: frozenset[str] = frozenset(
    {".exe", ".bat", ".sh", ".jar", ".x86", ".x86_64", ".bin", ".so", ".dylib"}
)
BUNDLE_SUFFIX = ".app"


class InstallRecord(BaseModel):
    """An installed application: where it lives and which files may start it."""

    install_root: Path
    executables: list[str] = Field(default_factory=list)
    isolate_apps: bool = False
    title: str | None = None

    def with_discovered_executables(self, logger: logging.Logger | None = None) -> "InstallRecord":
        """Return a copy whose empty executable list is filled by scanning the install root."""

        if self.executables:
            return self
        discovered = discover_executables(self.install_root, logger=logger)
        return self.model_copy(update={"executables": discovered})


def load_install_record(path: Path) -> InstallRecord:
    """Load an install record from a YAML or JSON document."""

    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Install record must be a mapping: {path}")
    record = InstallRecord.model_validate(payload)
    if not record.install_root.is_absolute():
        record = record.model_copy(update={"install_root": (path.parent / record.install_root).resolve()})
    return record


def _is_launchable_file(path: Path) -> bool:
    if path.suffix.lower() in LAUNCHABLE_SUFFIXES:
        return True
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def discover_executables(install_root: Path, logger: logging.Logger | None = None) -> list[str]:
    """Walk an install root and return sorted relative paths that look launchable.

    ``.app`` bundle directories are reported as a whole and not descended
    into. Hidden directories such as the install's metadata folder are
    skipped. Shared libraries are kept here; dropping them is up to scoring.
    """

    effective_logger = logger or LOGGER
    found: list[str] = []
    if not install_root.is_dir():
        effective_logger.warning("discover.install_root_missing install_root=%s", install_root)
        return found

    for dir_path, dir_names, file_names in os.walk(install_root):
        current = Path(dir_path)
        kept_dirs: list[str] = []
        for name in sorted(dir_names):
            if name.startswith("."):
                continue
            if name.lower().endswith(BUNDLE_SUFFIX):
                found.append((current / name).relative_to(install_root).as_posix())
                continue
            kept_dirs.append(name)
        dir_names[:] = kept_dirs

        for name in file_names:
            file_path = current / name
            if _is_launchable_file(file_path):
                found.append(file_path.relative_to(install_root).as_posix())

    found.sort()
    effective_logger.info("discover.executables install_root=%s found=%s", install_root, len(found))
    return found

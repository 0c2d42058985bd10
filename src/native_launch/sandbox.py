"""Sandbox profile rendering for isolated launches on macOS."""

from __future__ import annotations

import logging
from pathlib import Path

from native_launch.config import SandboxConfig
from native_launch.process import escape_arg
from native_launch.utils.paths import write_text_file

LOGGER = logging.getLogger(__name__)

INSTALL_LOCATION_PLACEHOLDER = "{{INSTALL_LOCATION}}"

SANDBOX_TEMPLATE = """(version 1)
(deny default)

(import "system.sb")

(allow process-exec*)
(allow process-fork)
(allow signal (target self))
(allow sysctl-read)
(allow mach-lookup)
(allow ipc-posix-shm)
(allow iokit-open)

(allow file-read-metadata)
(allow file-read*
  (subpath "/System")
  (subpath "/Library")
  (subpath "/usr")
  (subpath "/private/var/db")
  (subpath "/dev"))

(allow network-outbound)
(allow network-inbound (local ip))
(allow system-socket)

(allow file-read* file-write*
  (subpath "{{INSTALL_LOCATION}}")
  (regex #"^/private/var/folders/")
  (regex #"^/private/tmp/"))
"""


def render_sandbox_profile(
    install_root: Path,
    template: str = SANDBOX_TEMPLATE,
    placeholder: str = INSTALL_LOCATION_PLACEHOLDER,
) -> str:
    """Bind the template to an install location."""

    return template.replace(placeholder, str(install_root))


def sandbox_profile_path(install_root: Path, config: SandboxConfig | None = None) -> Path:
    sandbox_config = config or SandboxConfig()
    return install_root / sandbox_config.metadata_dir_name / sandbox_config.profile_file_name


def write_sandbox_profile(
    install_root: Path,
    config: SandboxConfig | None = None,
    *,
    logger: logging.Logger | None = None,
) -> Path:
    """Render and write the profile, replacing whatever a previous launch left.

    Two launches of the same install racing on this file is undefined.
    """

    effective_logger = logger or LOGGER
    sandbox_config = config or SandboxConfig()
    profile_path = sandbox_profile_path(install_root, sandbox_config)
    template = SANDBOX_TEMPLATE
    if sandbox_config.template_file is not None:
        template = sandbox_config.template_file.read_text(encoding="utf-8")
    source = render_sandbox_profile(install_root, template, sandbox_config.placeholder)
    write_text_file(profile_path, source)
    effective_logger.info("sandbox.profile_written path=%s", profile_path)
    return profile_path


def build_sandbox_command(profile_path: Path, inner_command: str, sandbox_command: str = "sandbox-exec") -> str:
    """Wrap an already quoted command line with the sandbox launcher."""

    return f"{sandbox_command} -f {escape_arg(profile_path)} {inner_command}"

"""What the current platform can do when launching native programs."""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlatformCapabilities:
    """Launch features available on a platform."""

    name: str
    app_bundles: bool = False
    sandbox_isolation: bool = False


_KNOWN_CAPABILITIES: dict[str, PlatformCapabilities] = {
    "darwin": PlatformCapabilities(name="darwin", app_bundles=True, sandbox_isolation=True),
}


def detect_capabilities(platform_name: str | None = None) -> PlatformCapabilities:
    """Return capabilities for ``platform_name``, defaulting to the running interpreter's platform."""

    name = (platform_name or sys.platform).strip().lower()
    if name.startswith("linux"):
        name = "linux"
    return _KNOWN_CAPABILITIES.get(name, PlatformCapabilities(name=name))

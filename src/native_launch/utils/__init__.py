"""Shared utility helpers."""

from native_launch.utils.paths import write_text_file

__all__ = [
    "write_text_file",
]

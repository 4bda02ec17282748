"""Text conversion at the AutoItX3 boundary.

AutoItX3 exposes only the wide-character (UTF-16) entry points. Everything
above this module works with plain ``str``.
"""

from __future__ import annotations

import ctypes
from typing import Optional


class WideTextCodec:
    """Marshal ``str`` to and from wide-character arguments and buffers."""

    def encode(self, value: Optional[str]) -> str:
        if value is None:
            return ""
        text = str(value)
        if "\x00" in text:
            raise ValueError("Strings passed to AutoItX3 may not contain NUL characters")
        return text

    def allocate(self, size: int) -> ctypes.Array:
        """Allocate a zeroed wide-character output buffer of ``size`` characters."""
        if size < 2:
            raise ValueError(f"Buffer size must be at least 2, got {size}")
        return ctypes.create_unicode_buffer(size)

    def decode(self, buffer: ctypes.Array) -> str:
        # .value stops at the first NUL written by the native side
        return buffer.value

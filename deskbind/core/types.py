"""
Core data types shared by the deskbind bindings.
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any, NamedTuple


class WindowState(IntFlag):
    """Combined window state flags as reported by the native layer."""

    NONE = 0
    EXISTS = 1
    VISIBLE = 2
    ENABLED = 4
    ACTIVE = 8
    MINIMIZED = 16
    MAXIMIZED = 32


class ShowState(IntEnum):
    """SW_* values accepted when setting a window's show state."""

    HIDE = 0
    MAXIMIZE = 3
    SHOW = 5
    MINIMIZE = 6
    SHOWMINNOACTIVE = 7  # like MINIMIZE, without activation
    SHOWNA = 8  # like SHOW, without activation
    RESTORE = 9
    SHOWDEFAULT = 10


class Rect(NamedTuple):
    """Window position and size."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class NativeResult:
    """A native call's return value paired with the error code it set."""

    value: Any
    error: int = 0

    @property
    def failed(self) -> bool:
        return self.error != 0

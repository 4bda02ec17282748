"""
Core types and interfaces.
"""

from deskbind.core.interfaces import NativeBackend
from deskbind.core.types import NativeResult, Rect, ShowState, WindowState

__all__ = [
    "NativeBackend",
    "NativeResult",
    "Rect",
    "ShowState",
    "WindowState",
]

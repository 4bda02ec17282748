"""
Error types raised by the deskbind bindings.
"""

from .exceptions import (
    DeskBindError,
    WindowNotFoundError,
    UnsupportedOperationError,
    NativeCallError,
    XError,
    ParseError,
)

__all__ = [
    "DeskBindError",
    "WindowNotFoundError",
    "UnsupportedOperationError",
    "NativeCallError",
    "XError",
    "ParseError",
]

"""
Core interfaces for deskbind.
"""

from abc import ABC, abstractmethod
from typing import Any

from deskbind.core.types import NativeResult


class NativeBackend(ABC):
    """Abstract interface to a native automation library.

    Implementations resolve their function table once, up front, and report
    every call's error code alongside its value.
    """

    @abstractmethod
    def call(self, capability: str, *args: Any) -> NativeResult:
        """Invoke a capability and return its value and error code."""
        pass

    @abstractmethod
    def read(self, capability: str, *args: Any) -> NativeResult:
        """Invoke a buffer-filling capability and return the decoded text."""
        pass

    @abstractmethod
    def set_option(self, name: str, value: int) -> int:
        """Set a library-wide option, returning its previous value."""
        pass

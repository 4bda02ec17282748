"""
Exception hierarchy for deskbind.

Every failure reported by a native call or an external tool is surfaced as
one of these errors. Nothing is retried automatically.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class DeskBindError(Exception):
    """Base exception for all deskbind errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None
        }


class WindowNotFoundError(DeskBindError):
    """No window matches the (title, text) identity.

    Raised at construction time and whenever a later operation finds the
    window gone. ``operation`` tells the two apart.
    """

    def __init__(
        self,
        title: str,
        text: str = "",
        operation: str = "construct",
        message: Optional[str] = None,
        **kwargs
    ):
        resolved_message = message or (
            f"Unable to find a window with title '{title}' and text '{text}'!"
        )
        super().__init__(resolved_message, **kwargs)
        self.title = title
        self.text = text
        self.operation = operation
        self.details.update({
            "title": title,
            "text": text,
            "operation": operation
        })


class UnsupportedOperationError(DeskBindError):
    """The operation is not available on this platform or OS version."""

    def __init__(
        self,
        message: str,
        operation: str,
        reason: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.reason = reason
        self.details.update({
            "operation": operation,
            "reason": reason
        })


class NativeCallError(DeskBindError):
    """The native library reported a failure it does not explain."""

    def __init__(
        self,
        message: str,
        capability: str,
        title: Optional[str] = None,
        text: Optional[str] = None,
        possible_causes: Optional[List[str]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.capability = capability
        self.title = title
        self.text = text
        self.possible_causes = possible_causes or []
        self.details.update({
            "capability": capability,
            "title": title,
            "text": text,
            "possible_causes": self.possible_causes
        })


class XError(DeskBindError):
    """An X11 command-line tool failed."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.command = list(command or [])
        self.returncode = returncode
        self.stderr = stderr
        self.details.update({
            "command": self.command,
            "returncode": returncode,
            "stderr": stderr
        })


class ParseError(DeskBindError):
    """An X11 tool produced output that could not be parsed."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        output: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.command = list(command or [])
        self.output = output
        self.details.update({
            "command": self.command,
            "output": output
        })

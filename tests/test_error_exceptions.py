"""
Unit tests for error handling exceptions.
"""

from datetime import datetime

from deskbind.error_handling.exceptions import (
    DeskBindError,
    NativeCallError,
    ParseError,
    UnsupportedOperationError,
    WindowNotFoundError,
    XError,
)


class TestDeskBindError:
    """Test base exception class."""

    def test_basic_creation(self):
        """Test basic error creation."""
        error = DeskBindError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.error_code == "DeskBindError"
        assert error.details == {}
        assert error.cause is None
        assert isinstance(error.timestamp, datetime)

    def test_with_cause(self):
        cause = OSError("dll missing")
        error = DeskBindError("Wrapped error", cause=cause)
        assert error.cause is cause

    def test_to_dict(self):
        """Test conversion to dictionary."""
        error = DeskBindError(
            "Test error",
            error_code="TEST001",
            details={"key": "value"}
        )

        result = error.to_dict()
        assert result["error_type"] == "DeskBindError"
        assert result["error_code"] == "TEST001"
        assert result["message"] == "Test error"
        assert result["details"] == {"key": "value"}
        assert "timestamp" in result
        assert result["cause"] is None


class TestWindowNotFoundError:
    """Test the not-found error."""

    def test_identity_in_message_and_details(self):
        error = WindowNotFoundError("Untitled - Notepad", "Hello", operation="rect")

        assert "Untitled - Notepad" in str(error)
        assert "Hello" in str(error)
        assert error.details == {
            "title": "Untitled - Notepad",
            "text": "Hello",
            "operation": "rect",
        }
        assert isinstance(error, DeskBindError)

    def test_default_operation_is_construct(self):
        assert WindowNotFoundError("Notepad").operation == "construct"

    def test_custom_message(self):
        error = WindowNotFoundError("Notepad", message="gone")
        assert error.message == "gone"


class TestOtherErrors:
    """Test the remaining error kinds."""

    def test_unsupported(self):
        error = UnsupportedOperationError("no", operation="set_trans", reason="old OS")
        assert error.details == {"operation": "set_trans", "reason": "old OS"}

    def test_native_call_error(self):
        error = NativeCallError(
            "statusbar",
            capability="StatusbarGetText",
            title="Notepad",
            possible_causes=["a", "b"],
        )
        assert error.details["capability"] == "StatusbarGetText"
        assert error.details["possible_causes"] == ["a", "b"]
        assert error.details["text"] is None

    def test_xerror(self):
        error = XError("failed", command=["xdotool", "key"], returncode=1, stderr="oops")
        assert error.command == ["xdotool", "key"]
        assert error.to_dict()["details"]["returncode"] == 1

    def test_parse_error_is_not_xerror(self):
        """Parse failures are a separate kind from tool failures."""
        error = ParseError("bad", command=["xdotool"], output="???")
        assert not isinstance(error, XError)
        assert error.output == "???"

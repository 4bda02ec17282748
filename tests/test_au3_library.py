"""
Unit tests for the AutoItX3 call layer and text codec.
"""

import ctypes
import sys
from typing import Any, Callable, Dict, List, Optional

import pytest

from deskbind.au3.codec import WideTextCodec
from deskbind.au3.library import CAPABILITIES, AutoItLibrary, Signature, load_library
from deskbind.error_handling import UnsupportedOperationError


class FakeFunction:
    """A DLL export that records its arguments."""

    def __init__(self, name: str, dll: "FakeDLL") -> None:
        self.name = name
        self.dll = dll
        self.argtypes: Optional[List[Any]] = None
        self.restype: Any = "unset"
        self.calls: List[tuple] = []
        self.behaviour: Optional[Callable[..., Any]] = None

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        self.dll.order.append(self.name)
        if self.name == "AU3_error":
            return self.dll.error_code
        if self.behaviour:
            return self.behaviour(*args)
        return 1


class FakeDLL:
    """Exposes any AU3_* attribute as a FakeFunction."""

    def __init__(self) -> None:
        self.functions: Dict[str, FakeFunction] = {}
        self.order: List[str] = []
        self.error_code = 0

    def __getattr__(self, name: str) -> FakeFunction:
        if not name.startswith("AU3_"):
            raise AttributeError(name)
        return self.functions.setdefault(name, FakeFunction(name, self))


@pytest.fixture
def dll() -> FakeDLL:
    return FakeDLL()


@pytest.fixture
def library(dll) -> AutoItLibrary:
    return AutoItLibrary(dll, buffer_size=64)


class TestSignature:
    """Tests for capability signatures."""

    def test_buffer_detection(self):
        assert Signature("SSPI").has_buffer is True
        assert Signature("SS", "L").has_buffer is False

    def test_ctypes_mapping(self):
        signature = Signature("SSLPI", "L")
        assert signature.argtypes() == [
            ctypes.c_wchar_p,
            ctypes.c_wchar_p,
            ctypes.c_long,
            ctypes.c_wchar_p,
            ctypes.c_int,
        ]
        assert signature.restype() is ctypes.c_long
        assert Signature("SS").restype() is None

    def test_capability_table_is_read_only(self):
        with pytest.raises(TypeError):
            CAPABILITIES["WinExists"] = Signature()  # type: ignore[index]


class TestAutoItLibrary:
    """Tests for binding and invoking native functions."""

    def test_binds_every_capability_up_front(self, library, dll):
        """All functions get their ctypes signature in the constructor."""
        assert set(dll.functions) == {f"AU3_{name}" for name in CAPABILITIES}
        assert dll.functions["AU3_WinExists"].argtypes == [ctypes.c_wchar_p, ctypes.c_wchar_p]
        assert dll.functions["AU3_WinExists"].restype is ctypes.c_long
        assert dll.functions["AU3_WinActivate"].restype is None
        assert dll.order == []

    def test_call_pairs_value_with_error(self, library, dll):
        """Each call reads AU3_error right after the function."""
        dll.error_code = 1
        result = library.call("WinGetState", "Notepad", "")

        assert result.value == 1
        assert result.error == 1
        assert result.failed is True
        assert dll.order == ["AU3_WinGetState", "AU3_error"]

    def test_call_marshals_arguments(self, library, dll):
        library.call("WinMove", "Notepad", None, 1, 2, -1, -1)
        assert dll.functions["AU3_WinMove"].calls == [("Notepad", "", 1, 2, -1, -1)]

    def test_read_inserts_buffer_and_length(self, library, dll):
        """The buffer goes in the P slot and its length minus one in the I slot."""
        def fill(title, text, buffer, size):
            buffer.value = "Untitled - Notepad"
        dll.functions["AU3_WinGetTitle"].behaviour = fill

        result = library.read("WinGetTitle", "Untitled", "")

        assert result.value == "Untitled - Notepad"
        assert result.failed is False
        args = dll.functions["AU3_WinGetTitle"].calls[0]
        assert args[:2] == ("Untitled", "")
        assert args[3] == 63

    def test_read_with_leading_long(self, library, dll):
        """StatusbarGetText takes the part number before the buffer."""
        def fill(title, text, part, buffer, size):
            buffer.value = f"part {part}"
        dll.functions["AU3_StatusbarGetText"].behaviour = fill

        assert library.read("StatusbarGetText", "Notepad", "", 2).value == "part 2"
        args = dll.functions["AU3_StatusbarGetText"].calls[0]
        assert args[2] == 2
        assert args[4] == 63

    def test_fractional_long_rejected(self, library, dll):
        """A 0.5s timeout must not be truncated to 0, which waits forever."""
        with pytest.raises(TypeError, match="expects an integer"):
            library.call("WinWait", "Notepad", "", 0.5)
        assert dll.functions["AU3_WinWait"].calls == []

        library.call("WinWait", "Notepad", "", 2.0)
        assert dll.functions["AU3_WinWait"].calls == [("Notepad", "", 2)]

    def test_read_and_call_are_not_interchangeable(self, library):
        with pytest.raises(TypeError):
            library.call("WinGetText", "Notepad", "")
        with pytest.raises(TypeError):
            library.read("WinExists", "Notepad", "")

    def test_argument_count_checked(self, library):
        with pytest.raises(TypeError, match="Too few"):
            library.call("WinMove", "Notepad", "", 1)
        with pytest.raises(TypeError, match="Too many"):
            library.call("WinExists", "Notepad", "", "extra")

    def test_unknown_capability(self, library):
        with pytest.raises(KeyError, match="Unknown AutoItX3 capability"):
            library.call("WinTeleport", "Notepad")

    def test_set_option(self, library, dll):
        dll.functions["AU3_Opt"].behaviour = lambda name, value: 1
        assert library.set_option("WinTitleMatchMode", 2) == 1
        assert dll.functions["AU3_Opt"].calls == [("WinTitleMatchMode", 2)]


class TestWideTextCodec:
    """Tests for the text codec at the native boundary."""

    def test_encode(self):
        codec = WideTextCodec()
        assert codec.encode("Ünïcödé") == "Ünïcödé"
        assert codec.encode(None) == ""

    def test_encode_rejects_nul(self):
        with pytest.raises(ValueError):
            WideTextCodec().encode("a\x00b")

    def test_buffer_round_trip(self):
        codec = WideTextCodec()
        buffer = codec.allocate(16)
        assert codec.decode(buffer) == ""
        buffer.value = "Edit1"
        assert codec.decode(buffer) == "Edit1"

    def test_allocate_minimum(self):
        with pytest.raises(ValueError):
            WideTextCodec().allocate(1)


def test_load_library_requires_windows(monkeypatch):
    """Loading AutoItX3 elsewhere is an unsupported operation."""
    monkeypatch.setattr(sys, "platform", "linux")
    with pytest.raises(UnsupportedOperationError) as exc_info:
        load_library("AutoItX3.dll")
    assert exc_info.value.operation == "load_library"

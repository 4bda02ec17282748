"""AutoItX3.dll loader and call layer."""

from __future__ import annotations

import ctypes
import logging
import sys
import threading
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional

from deskbind.au3.codec import WideTextCodec
from deskbind.config.settings import get_settings
from deskbind.core.interfaces import NativeBackend
from deskbind.core.types import NativeResult
from deskbind.error_handling import DeskBindError, UnsupportedOperationError

logger = logging.getLogger(__name__)

SYMBOL_PREFIX = "AU3_"

# Default size, in characters, of output buffers handed to the DLL.
BUFFER_SIZE = 8192

# AU3_INTDEFAULT: tells functions such as ControlClick to use their own default.
INTDEFAULT = -2147483647

# Parameter codes: S wide string, L long, P output buffer, I buffer length.
PARAM_TYPES = {
    "S": ctypes.c_wchar_p,
    "L": ctypes.c_long,
    "P": ctypes.c_wchar_p,
    "I": ctypes.c_int,
}
RETURN_TYPES = {
    "L": ctypes.c_long,
    None: None,
}


@dataclass(frozen=True)
class Signature:
    """Native parameter and return codes of one AutoItX3 function."""

    params: str = ""
    returns: Optional[str] = None

    @property
    def has_buffer(self) -> bool:
        return "P" in self.params

    def argtypes(self) -> List[Any]:
        return [PARAM_TYPES[code] for code in self.params]

    def restype(self) -> Any:
        return RETURN_TYPES[self.returns]


CAPABILITIES: Mapping[str, Signature] = MappingProxyType({
    "error": Signature("", "L"),
    "Init": Signature(""),
    "Opt": Signature("SL", "L"),
    # Window queries
    "WinExists": Signature("SS", "L"),
    "WinWait": Signature("SSL", "L"),
    "WinWaitActive": Signature("SSL", "L"),
    "WinWaitClose": Signature("SSL", "L"),
    "WinWaitNotActive": Signature("SSL", "L"),
    "WinActive": Signature("SS", "L"),
    "WinGetState": Signature("SS", "L"),
    "WinGetCaretPosX": Signature("", "L"),
    "WinGetCaretPosY": Signature("", "L"),
    "WinGetPosX": Signature("SS", "L"),
    "WinGetPosY": Signature("SS", "L"),
    "WinGetPosWidth": Signature("SS", "L"),
    "WinGetPosHeight": Signature("SS", "L"),
    "WinGetClientSizeWidth": Signature("SS", "L"),
    "WinGetClientSizeHeight": Signature("SS", "L"),
    "WinGetClassList": Signature("SSPI"),
    "WinGetHandle": Signature("SSPI"),
    "WinGetProcess": Signature("SSPI", "L"),
    "WinGetText": Signature("SSPI"),
    "WinGetTitle": Signature("SSPI"),
    "StatusbarGetText": Signature("SSLPI"),
    # Window mutators
    "WinActivate": Signature("SS"),
    "WinClose": Signature("SS", "L"),
    "WinKill": Signature("SS", "L"),
    "WinMinimizeAll": Signature(""),
    "WinMinimizeAllUndo": Signature(""),
    "WinMenuSelectItem": Signature("SSSSSSSSSS", "L"),
    "WinMove": Signature("SSLLLL", "L"),
    "WinSetOnTop": Signature("SSL", "L"),
    "WinSetState": Signature("SSL", "L"),
    "WinSetTitle": Signature("SSS", "L"),
    "WinSetTrans": Signature("SSL", "L"),
    # Controls
    "ControlGetFocus": Signature("SSPI"),
    "ControlFocus": Signature("SSS", "L"),
    "ControlGetText": Signature("SSSPI"),
    "ControlSetText": Signature("SSSS", "L"),
    "ControlClick": Signature("SSSSLLL", "L"),
})


class AutoItLibrary(NativeBackend):
    """Call layer over a loaded AutoItX3 DLL.

    All functions in ``CAPABILITIES`` are bound in the constructor, so the
    table is complete and read-only before the first call. Each call is
    paired with ``AU3_error()`` under a lock; other code driving the same
    DLL outside this object is not synchronized with it.
    """

    def __init__(
        self,
        dll: Any,
        buffer_size: int = BUFFER_SIZE,
        codec: Optional[WideTextCodec] = None,
    ) -> None:
        self.buffer_size = buffer_size
        self.codec = codec or WideTextCodec()
        self._dll = dll
        self._lock = threading.Lock()
        self._functions: Mapping[str, Callable[..., Any]] = MappingProxyType({
            name: self._bind(name, signature)
            for name, signature in CAPABILITIES.items()
        })

    def call(self, capability: str, *args: Any) -> NativeResult:
        signature = self._signature(capability)
        if signature.has_buffer:
            raise TypeError(f"{capability} fills a buffer; use read() instead")
        native_args = self._marshal(capability, signature, args)
        return self._invoke(capability, native_args)

    def read(self, capability: str, *args: Any) -> NativeResult:
        signature = self._signature(capability)
        if not signature.has_buffer:
            raise TypeError(f"{capability} does not fill a buffer; use call() instead")
        buffer = self.codec.allocate(self.buffer_size)
        native_args = self._marshal(capability, signature, args, buffer)
        result = self._invoke(capability, native_args)
        return NativeResult(value=self.codec.decode(buffer), error=result.error)

    def set_option(self, name: str, value: int) -> int:
        result = self.call("Opt", name, value)
        logger.debug("Set AutoIt option", extra={"option": name, "value": value})
        return result.value

    def _invoke(self, capability: str, native_args: List[Any]) -> NativeResult:
        function = self._functions[capability]
        with self._lock:
            value = function(*native_args)
            error = self._functions["error"]()
        logger.debug(
            "AutoItX3 call",
            extra={"capability": capability, "error": error},
        )
        return NativeResult(value=value, error=int(error or 0))

    def _marshal(
        self,
        capability: str,
        signature: Signature,
        args: tuple,
        buffer: Optional[ctypes.Array] = None,
    ) -> List[Any]:
        supplied = iter(args)
        native_args: List[Any] = []
        previous = ""
        try:
            for code in signature.params:
                if code == "S":
                    native_args.append(self.codec.encode(next(supplied)))
                elif code == "P":
                    native_args.append(buffer)
                elif code == "I" and previous == "P":
                    # Leave room for the terminating NUL.
                    native_args.append(self.buffer_size - 1)
                else:
                    native_args.append(self._long(capability, next(supplied)))
                previous = code
        except StopIteration:
            raise TypeError(f"Too few arguments for {capability}") from None
        leftover = list(supplied)
        if leftover:
            raise TypeError(f"Too many arguments for {capability}: {leftover!r}")
        return native_args

    @staticmethod
    def _long(capability: str, value: Any) -> int:
        # Whole numbers only: a timeout of 0 means wait forever.
        number = int(value)
        if number != value:
            raise TypeError(f"{capability} expects an integer, got {value!r}")
        return number

    def _bind(self, name: str, signature: Signature) -> Callable[..., Any]:
        function = getattr(self._dll, SYMBOL_PREFIX + name)
        function.argtypes = signature.argtypes()
        function.restype = signature.restype()
        return function

    @staticmethod
    def _signature(capability: str) -> Signature:
        try:
            return CAPABILITIES[capability]
        except KeyError:
            raise KeyError(f"Unknown AutoItX3 capability: {capability}") from None


def load_library(
    path: Path,
    buffer_size: int = BUFFER_SIZE,
    title_match_mode: int = 1,
) -> AutoItLibrary:
    """Load AutoItX3 from ``path`` and initialize it."""
    if sys.platform != "win32":
        raise UnsupportedOperationError(
            "AutoItX3 is only available on Windows",
            operation="load_library",
            reason=f"platform {sys.platform}",
        )
    try:
        dll = ctypes.WinDLL(str(path))
    except OSError as exc:
        raise DeskBindError(
            f"Unable to load AutoItX3 from {path}",
            details={"path": str(path)},
            cause=exc,
        ) from exc

    library = AutoItLibrary(dll, buffer_size=buffer_size)
    library.call("Init")
    library.set_option("WinTitleMatchMode", title_match_mode)
    logger.info("Loaded AutoItX3", extra={"path": str(path), "buffer_size": buffer_size})
    return library


@lru_cache()
def get_backend() -> AutoItLibrary:
    """Get the process-wide AutoItX3 backend built from settings."""
    settings = get_settings()
    return load_library(
        settings.au3_dll_path,
        buffer_size=settings.au3_buffer_size,
        title_match_mode=settings.au3_title_match_mode,
    )

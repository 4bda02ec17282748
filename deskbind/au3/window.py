"""Window identity model over AutoItX3.

A ``Window`` holds a (pseudo) reference to a window: the title (or part of
it, depending on ``WinTitleMatchMode``) and optionally the window text. No
handle is kept. Every call re-resolves the window through AutoItX3, so a
``Window`` goes stale silently when the real window closes and the next
call raises ``WindowNotFoundError``.

The text a window "holds" need not match what is visible on screen. An
empty text matches by title only.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from deskbind.au3.control import Control
from deskbind.au3.library import get_backend
from deskbind.core.interfaces import NativeBackend
from deskbind.core.types import NativeResult, Rect, ShowState, WindowState
from deskbind.error_handling import (
    NativeCallError,
    UnsupportedOperationError,
    WindowNotFoundError,
)
from deskbind.monitoring.logger import get_logger

# WinMenuSelectItem takes one menu plus up to seven submenu items.
MAX_MENU_ITEMS = 7

STATUSBAR_FAILURE_CAUSES = [
    "the window has no statusbar",
    "the statusbar is not a common-control statusbar",
    "the requested part is out of range",
]


class Window:
    """A window matched by (title, text)."""

    #: Title matching the desktop window.
    DESKTOP_WINDOW = "Program Manager"
    #: Title matching the active (foreground) window.
    ACTIVE_WINDOW = ""

    def __init__(
        self,
        title: str,
        text: str = "",
        backend: Optional[NativeBackend] = None,
    ) -> None:
        """
        Bind to the window matching ``title`` and ``text``.

        Args:
            title: Window title. Use ``DESKTOP_WINDOW`` or ``ACTIVE_WINDOW``
                for the desktop or the foreground window.
            text: Window text, empty to match by title only.
            backend: Native backend; defaults to the process-wide AutoItX3.

        Raises:
            WindowNotFoundError: No matching window exists right now.
        """
        self._title = title
        self._text = text
        self._backend = backend or get_backend()
        self._log = get_logger(__name__, title=title, text=text)
        if not Window.exists(title, text, backend=self._backend):
            raise WindowNotFoundError(
                title,
                text,
                operation="construct",
                message="Can't get a handle to a non-existing window!",
            )

    # -- class-level queries -------------------------------------------------

    @classmethod
    def exists(
        cls,
        title: str,
        text: str = "",
        backend: Optional[NativeBackend] = None,
    ) -> bool:
        """Return True if a window with the given title and text exists."""
        backend = backend or get_backend()
        return backend.call("WinExists", title, text).value == 1

    @classmethod
    def wait(
        cls,
        title: str,
        text: str = "",
        timeout: int = 0,
        backend: Optional[NativeBackend] = None,
    ) -> bool:
        """
        Block until a matching window exists.

        Args:
            timeout: Whole seconds to wait; 0 waits forever.

        Returns:
            True if the window appeared, False if the timeout elapsed.
        """
        backend = backend or get_backend()
        return backend.call("WinWait", title, text, timeout).value != 0

    @classmethod
    def caret_pos(cls, backend: Optional[NativeBackend] = None) -> Tuple[int, int]:
        """
        Return the caret position ``(x, y)`` in the active window.

        The values are rows and columns, not pixels. Many MDI windows report
        absolute or static coordinates instead.
        """
        backend = backend or get_backend()
        x = backend.call("WinGetCaretPosX")
        y = backend.call("WinGetCaretPosY")
        if x.failed or y.failed:
            raise NativeCallError(
                "Unknown error occurred while retrieving caret coordinates!",
                capability="WinGetCaretPos",
            )
        return x.value, y.value

    @classmethod
    def minimize_all(cls, backend: Optional[NativeBackend] = None) -> None:
        (backend or get_backend()).call("WinMinimizeAll")

    @classmethod
    def undo_minimize_all(cls, backend: Optional[NativeBackend] = None) -> None:
        (backend or get_backend()).call("WinMinimizeAllUndo")

    # -- identity ------------------------------------------------------------

    @property
    def match_title(self) -> str:
        """The title this object matches by (not read from the window)."""
        return self._title

    @property
    def match_text(self) -> str:
        """The text this object matches by (not read from the window)."""
        return self._text

    def __repr__(self) -> str:
        return f"<Window title={self._title!r} text={self._text!r}>"

    def __str__(self) -> str:
        return self._title

    def __int__(self) -> int:
        return int(self.handle(), 16)

    def is_valid(self) -> bool:
        """Return True if this object still refers to an existing window."""
        return Window.exists(self._title, self._text, backend=self._backend)

    # -- state ---------------------------------------------------------------

    def activate(self) -> bool:
        """Request input focus and return whether the window is active afterwards."""
        self._call("WinActivate")
        return self.is_active()

    def is_active(self) -> bool:
        return self._call("WinActive").value == 1

    def state(self) -> WindowState:
        """Return the combined state flags of the window."""
        return WindowState(self._checked_call("WinGetState").value)

    def is_visible(self) -> bool:
        return WindowState.VISIBLE in self.state()

    def is_enabled(self) -> bool:
        return WindowState.ENABLED in self.state()

    def is_minimized(self) -> bool:
        return WindowState.MINIMIZED in self.state()

    def is_maximized(self) -> bool:
        return WindowState.MAXIMIZED in self.state()

    # -- geometry ------------------------------------------------------------

    def rect(self) -> Rect:
        """
        Return the window's position and size.

        The four values come from four separate native calls. A window that
        moves or resizes while they run yields a mixed result.
        """
        results = [
            self._call("WinGetPosX"),
            self._call("WinGetPosY"),
            self._call("WinGetPosWidth"),
            self._call("WinGetPosHeight"),
        ]
        if any(result.failed for result in results):
            self._raise_unfound("rect")
        return Rect(*(result.value for result in results))

    def client_size(self) -> Tuple[int, int]:
        """Return the client area ``(width, height)``; ``(0, 0)`` when minimized."""
        width = self._call("WinGetClientSizeWidth")
        height = self._call("WinGetClientSizeHeight")
        if width.failed or height.failed:
            self._raise_unfound("client_size")
        return width.value, height.value

    def move(self, x: int, y: int, width: int = -1, height: int = -1) -> None:
        """Move (and optionally resize) the window. Has no effect on minimized windows."""
        self._call("WinMove", x, y, width, height)

    # -- reads ---------------------------------------------------------------

    def handle(self) -> str:
        """Return the native window handle as a hex string."""
        return self._checked_read("WinGetHandle").value.strip()

    def class_list(self) -> List[str]:
        """Return the window classes used by the window, in native order."""
        raw = self._checked_read("WinGetClassList").value
        return [line.strip() for line in raw.split("\n") if line.strip()]

    def pid(self) -> int:
        """Return the process id owning the window."""
        raw = self._read("WinGetProcess").value.strip()
        if not raw:
            raise NativeCallError(
                "Unknown error occurred while retrieving process ID. Does the window exist?",
                capability="WinGetProcess",
                title=self._title,
                text=self._text,
            )
        return int(raw)

    def get_text(self) -> str:
        """Read the window's text (independent of the text matched by)."""
        return self._read("WinGetText").value.strip()

    def get_title(self) -> str:
        """Read the window's title (independent of the title matched by)."""
        return self._read("WinGetTitle").value.strip()

    def statusbar_text(self, part: int = 1) -> str:
        """
        Read the text of statusbar part ``part``.

        Raises:
            NativeCallError: There is no statusbar, it is not a common-control
                statusbar, or ``part`` is out of range. AutoItX3 reports all
                three the same way.
        """
        result = self._read("StatusbarGetText", part)
        if result.failed:
            raise NativeCallError(
                "Couldn't read statusbar text! Possible causes: "
                + "; ".join(STATUSBAR_FAILURE_CAUSES),
                capability="StatusbarGetText",
                title=self._title,
                text=self._text,
                possible_causes=STATUSBAR_FAILURE_CAUSES,
            )
        return result.value.strip()

    def focused_control(self) -> Control:
        """
        Return the control holding input focus inside this window.

        If the window itself is not focused the returned control is unusable.
        """
        control_id = self._read("ControlGetFocus").value.strip()
        return Control(self._title, self._text, control_id, backend=self._backend)

    # -- mutators ------------------------------------------------------------

    def close(self) -> None:
        """Send WM_CLOSE, like clicking the [X] button. The window may ignore it."""
        self._call("WinClose")

    def kill(self) -> None:
        """
        Force the window to close.

        Some windows (notably Explorer windows) cannot be killed; that is not
        reported as an error.
        """
        result = self._call("WinKill")
        if result.failed or result.value == 0:
            self._log.warning("WinKill did not close the window")

    def select_menu_item(self, menu: str, *items: str) -> None:
        """
        Click an entry in the window's menu bar.

        Up to seven submenu items may follow ``menu``. The last item must
        trigger an action; this cannot be used to just open a menu.
        """
        if len(items) > MAX_MENU_ITEMS:
            raise TypeError(
                f"select_menu_item() takes at most {MAX_MENU_ITEMS} items "
                f"after the menu ({len(items)} given)"
            )
        padded = [item or "" for item in items]
        padded.extend([""] * (MAX_MENU_ITEMS - len(padded)))
        result = self._call("WinMenuSelectItem", menu, *padded)
        if result.value == 0:
            self._raise_unfound("select_menu_item")

    def set_on_top(self, flag: bool) -> None:
        """Turn the TOPMOST flag on or off."""
        self._call("WinSetOnTop", 1 if flag else 0)

    def set_state(self, show_state: ShowState) -> None:
        self._call("WinSetState", int(show_state))

    def set_title(self, title: str) -> None:
        """Rename the window. The title matched by is not changed."""
        self._call("WinSetTitle", title)

    def set_trans(self, value: int) -> None:
        """
        Set window transparency, 0 (invisible) to 255 (opaque).

        Raises:
            UnsupportedOperationError: The OS does not support transparency.
        """
        if self._call("WinSetTrans", value).value == 0:
            raise UnsupportedOperationError(
                "Window transparency is only implemented in Windows 2000 and newer!",
                operation="set_trans",
                reason="WinSetTrans returned 0",
            )

    set_transparency = set_trans

    # -- waits ---------------------------------------------------------------

    def wait_exists(self, timeout: int = 0) -> bool:
        return Window.wait(self._title, self._text, timeout, backend=self._backend)

    def wait_active(self, timeout: int = 0) -> bool:
        return self._call("WinWaitActive", timeout).value != 0

    def wait_close(self, timeout: int = 0) -> bool:
        return self._call("WinWaitClose", timeout).value != 0

    def wait_not_active(self, timeout: int = 0) -> bool:
        return self._call("WinWaitNotActive", timeout).value != 0

    # -- plumbing ------------------------------------------------------------

    def _call(self, capability: str, *args) -> NativeResult:
        return self._backend.call(capability, self._title, self._text, *args)

    def _read(self, capability: str, *args) -> NativeResult:
        return self._backend.read(capability, self._title, self._text, *args)

    def _checked_call(self, capability: str, *args) -> NativeResult:
        result = self._call(capability, *args)
        if result.failed:
            self._raise_unfound(capability)
        return result

    def _checked_read(self, capability: str, *args) -> NativeResult:
        result = self._read(capability, *args)
        if result.failed:
            self._raise_unfound(capability)
        return result

    def _raise_unfound(self, operation: str) -> None:
        raise WindowNotFoundError(self._title, self._text, operation=operation)

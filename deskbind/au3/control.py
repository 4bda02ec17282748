"""Controls inside an AutoItX3 window."""

from __future__ import annotations

from typing import Optional

from deskbind.au3.library import INTDEFAULT, get_backend
from deskbind.core.interfaces import NativeBackend
from deskbind.core.types import NativeResult
from deskbind.error_handling import NativeCallError


class Control:
    """A control identified by its owning window's (title, text) and a control id.

    Nothing is checked at construction. A control obtained while its window
    did not hold input focus has an empty id and every call on it fails.
    """

    def __init__(
        self,
        title: str,
        text: str,
        control_id: str,
        backend: Optional[NativeBackend] = None,
    ) -> None:
        self.title = title
        self.text = text
        self.control_id = control_id
        self._backend = backend or get_backend()

    def __repr__(self) -> str:
        return f"<Control {self.control_id!r} in window {self.title!r}>"

    def focus(self) -> None:
        self._checked("ControlFocus", self._backend.call("ControlFocus", *self._ident()))

    def get_text(self) -> str:
        result = self._backend.read("ControlGetText", *self._ident())
        return self._checked("ControlGetText", result).value

    def set_text(self, value: str) -> None:
        self._checked(
            "ControlSetText",
            self._backend.call("ControlSetText", *self._ident(), value),
        )

    def click(
        self,
        button: str = "left",
        clicks: int = 1,
        x: int = INTDEFAULT,
        y: int = INTDEFAULT,
    ) -> None:
        """Click the control, at its center unless ``x``/``y`` give an offset."""
        self._checked(
            "ControlClick",
            self._backend.call("ControlClick", *self._ident(), button, clicks, x, y),
        )

    def _ident(self) -> tuple:
        return self.title, self.text, self.control_id

    def _checked(self, capability: str, result: NativeResult) -> NativeResult:
        if result.failed or result.value == 0:
            raise NativeCallError(
                f"{capability} failed for control '{self.control_id}'",
                capability=capability,
                title=self.title,
                text=self.text,
            )
        return result

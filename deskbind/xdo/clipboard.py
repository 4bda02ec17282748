"""X selections (clipboard) through xsel."""

from __future__ import annotations

from typing import Optional

from deskbind.xdo.runner import XSEL, ToolRunner

SELECTION_FLAGS = {
    "primary": "--primary",
    "secondary": "--secondary",
    "clipboard": "--clipboard",
}


class Clipboard:
    """Read and write the X selections."""

    def __init__(self, runner: Optional[ToolRunner] = None) -> None:
        self.runner = runner or ToolRunner()

    def read(self, selection: str = "clipboard") -> str:
        return self.runner.run([XSEL, self._flag(selection), "--output"])

    def write(self, text: str, selection: str = "clipboard") -> None:
        self.runner.run([XSEL, self._flag(selection), "--input"], input_text=text)

    def clear(self, selection: str = "clipboard") -> None:
        self.runner.run([XSEL, self._flag(selection), "--clear"])

    @staticmethod
    def _flag(selection: str) -> str:
        try:
            return SELECTION_FLAGS[selection]
        except KeyError:
            raise ValueError(
                f"Unknown selection: {selection}. Allowed values: {sorted(SELECTION_FLAGS)}"
            ) from None

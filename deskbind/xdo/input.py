"""Keyboard and mouse input through xdotool."""

from __future__ import annotations

from typing import Optional, Tuple

from deskbind.error_handling import ParseError
from deskbind.xdo.runner import XDOTOOL, ToolRunner
from deskbind.xdo.window import parse_shell_output, shell_int

MOUSE_BUTTONS = {
    "left": 1,
    "middle": 2,
    "right": 3,
    "wheel_up": 4,
    "wheel_down": 5,
}


class Keyboard:
    """Synthesized key events."""

    def __init__(self, runner: Optional[ToolRunner] = None) -> None:
        self.runner = runner or ToolRunner()

    def type_text(self, text: str, delay_ms: int = 12) -> None:
        self.runner.run([XDOTOOL, "type", "--delay", str(delay_ms), "--", text])

    def key(self, combo: str) -> None:
        """Press a key or combination in xdotool syntax, e.g. ``ctrl+shift+t``."""
        self.runner.run([XDOTOOL, "key", "--", combo])


class Mouse:
    """Synthesized pointer events."""

    def __init__(self, runner: Optional[ToolRunner] = None) -> None:
        self.runner = runner or ToolRunner()

    def move(self, x: int, y: int) -> None:
        self.runner.run([XDOTOOL, "mousemove", "--sync", str(x), str(y)])

    def click(self, button: str = "left", repeat: int = 1) -> None:
        try:
            code = MOUSE_BUTTONS[button]
        except KeyError:
            raise ValueError(
                f"Unknown mouse button: {button}. Allowed values: {sorted(MOUSE_BUTTONS)}"
            ) from None
        self.runner.run([XDOTOOL, "click", "--repeat", str(max(repeat, 1)), str(code)])

    def position(self) -> Tuple[int, int]:
        """Return the pointer position in screen coordinates."""
        command = [XDOTOOL, "getmouselocation", "--shell"]
        output = self.runner.run(command)
        values = parse_shell_output(output, command)
        if not values:
            raise ParseError("getmouselocation printed nothing", command=command, output=output)
        return shell_int(values, "X", command, output), shell_int(values, "Y", command, output)

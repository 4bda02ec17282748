"""X11 windows driven through xdotool, xwininfo and xkill."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from deskbind.core.types import Rect
from deskbind.error_handling import ParseError, XError
from deskbind.xdo.runner import XDOTOOL, XKILL, XWININFO, ToolRunner

logger = logging.getLogger(__name__)

_XWININFO_LINE = re.compile(r"^\s*([A-Za-z][^:]*?):\s+(.*?)\s*$")


def parse_window_ids(output: str, command: List[str]) -> List[int]:
    """Parse one decimal window id per line, as printed by ``xdotool search``."""
    ids: List[int] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        if not (line.isascii() and line.isdigit()):
            raise ParseError(
                f"Expected a window id, got {line!r}",
                command=command,
                output=output,
            )
        ids.append(int(line))
    return ids


def parse_shell_output(output: str, command: List[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines printed by xdotool's ``--shell`` option."""
    values: Dict[str, str] = {}
    for line in output.splitlines():
        if not line.strip():
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ParseError(
                f"Malformed shell output line: {line!r}",
                command=command,
                output=output,
            )
        values[key.strip()] = value.strip()
    return values


def shell_int(values: Dict[str, str], key: str, command: List[str], output: str) -> int:
    try:
        return int(values[key])
    except (KeyError, ValueError) as exc:
        raise ParseError(
            f"Missing or non-numeric {key} in output",
            command=command,
            output=output,
            cause=exc,
        ) from exc


class XWindow:
    """An X11 window identified by its numeric id."""

    def __init__(self, window_id: int, runner: Optional[ToolRunner] = None) -> None:
        self.id = int(window_id)
        self.runner = runner or ToolRunner()

    @classmethod
    def search(
        cls,
        name: str,
        only_visible: bool = False,
        runner: Optional[ToolRunner] = None,
    ) -> List["XWindow"]:
        """Return all windows whose name matches the regular expression ``name``."""
        runner = runner or ToolRunner()
        command = [XDOTOOL, "search"]
        if only_visible:
            command.append("--onlyvisible")
        command.extend(["--name", name])
        # xdotool exits with 1 when nothing matches
        output = runner.run(command, ok_codes=(0, 1))
        return [cls(window_id, runner) for window_id in parse_window_ids(output, command)]

    @classmethod
    def from_name(cls, name: str, runner: Optional[ToolRunner] = None) -> "XWindow":
        """Return the first window matching ``name``."""
        windows = cls.search(name, runner=runner)
        if not windows:
            raise XError(f"The window '{name}' wasn't found!", command=[XDOTOOL, "search", "--name", name])
        return windows[0]

    @classmethod
    def exists(cls, name: str, runner: Optional[ToolRunner] = None) -> bool:
        return bool(cls.search(name, runner=runner))

    @classmethod
    def active(cls, runner: Optional[ToolRunner] = None) -> "XWindow":
        """Return the currently active window."""
        runner = runner or ToolRunner()
        command = [XDOTOOL, "getactivewindow"]
        ids = parse_window_ids(runner.run(command), command)
        if len(ids) != 1:
            raise ParseError("Expected exactly one active window id", command=command)
        return cls(ids[0], runner)

    def __int__(self) -> int:
        return self.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XWindow):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<XWindow {self.id}>"

    def name(self) -> str:
        return self.runner.run([XDOTOOL, "getwindowname", str(self.id)]).rstrip("\n")

    def pid(self) -> int:
        command = [XDOTOOL, "getwindowpid", str(self.id)]
        output = self.runner.run(command).strip()
        if not (output.isascii() and output.isdigit()):
            raise ParseError(f"Expected a process id, got {output!r}", command=command, output=output)
        return int(output)

    def geometry(self) -> Rect:
        """Return the window's position and size."""
        command = [XDOTOOL, "getwindowgeometry", "--shell", str(self.id)]
        output = self.runner.run(command)
        values = parse_shell_output(output, command)
        return Rect(
            x=shell_int(values, "X", command, output),
            y=shell_int(values, "Y", command, output),
            width=shell_int(values, "WIDTH", command, output),
            height=shell_int(values, "HEIGHT", command, output),
        )

    def info(self) -> Dict[str, str]:
        """Return the ``Key: value`` attributes reported by ``xwininfo -id``."""
        command = [XWININFO, "-id", str(self.id)]
        output = self.runner.run(command)
        attributes: Dict[str, str] = {}
        for line in output.splitlines():
            if line.startswith("xwininfo:"):
                continue
            match = _XWININFO_LINE.match(line)
            if match:
                attributes[match.group(1)] = match.group(2)
        if not attributes:
            raise ParseError("xwininfo printed no window attributes", command=command, output=output)
        return attributes

    def activate(self) -> None:
        self.runner.run([XDOTOOL, "windowactivate", "--sync", str(self.id)])

    def focus(self) -> None:
        self.runner.run([XDOTOOL, "windowfocus", "--sync", str(self.id)])

    def move(self, x: int, y: int) -> None:
        self.runner.run([XDOTOOL, "windowmove", str(self.id), str(x), str(y)])

    def resize(self, width: int, height: int) -> None:
        self.runner.run([XDOTOOL, "windowsize", str(self.id), str(width), str(height)])

    def minimize(self) -> None:
        self.runner.run([XDOTOOL, "windowminimize", str(self.id)])

    def kill(self) -> None:
        """Kill the client owning the window. The client gets no chance to clean up."""
        logger.info("Killing X client", extra={"window_id": self.id})
        self.runner.run([XKILL, "-id", str(self.id)])

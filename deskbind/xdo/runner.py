"""Subprocess runner for the X11 command-line tools."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Dict, Iterable, List, Optional

from deskbind.config.settings import Settings, get_settings
from deskbind.error_handling import XError

logger = logging.getLogger(__name__)

XDOTOOL = "xdotool"
XSEL = "xsel"
XWININFO = "xwininfo"
XKILL = "xkill"
EJECT = "eject"


class ToolRunner:
    """Run xdotool and friends and return their stdout."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self.timeout = settings.tool_timeout_seconds
        self.display = settings.x_display
        self.executables: Dict[str, str] = {
            XDOTOOL: settings.xdotool_command,
            XSEL: settings.xsel_command,
            XWININFO: settings.xwininfo_command,
            XKILL: settings.xkill_command,
            EJECT: EJECT,
        }

    def run(
        self,
        command: List[str],
        ok_codes: Iterable[int] = (0,),
        input_text: Optional[str] = None,
    ) -> str:
        """
        Run ``command`` and return its stdout.

        Args:
            command: Tool name (one of the module constants) followed by its arguments
            ok_codes: Exit codes treated as success
            input_text: Optional text written to the tool's stdin

        Raises:
            XError: The tool is missing, timed out, or exited with another code
        """
        argv = [self.executables.get(command[0], command[0]), *command[1:]]
        logger.debug("Running X11 tool", extra={"command": argv})
        try:
            result = subprocess.run(
                argv,
                input=input_text,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
                env=self._environment(),
            )
        except FileNotFoundError as exc:
            raise XError(
                f"Command not found: {argv[0]}",
                command=argv,
                cause=exc,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise XError(
                f"Command timed out after {self.timeout}s: {' '.join(argv)}",
                command=argv,
                cause=exc,
            ) from exc

        if result.returncode not in tuple(ok_codes):
            raise XError(
                f"Command failed: {' '.join(argv)} :: {result.stderr.strip()}",
                command=argv,
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
        return result.stdout

    def _environment(self) -> Optional[Dict[str, str]]:
        if not self.display:
            return None
        env = dict(os.environ)
        env["DISPLAY"] = self.display
        return env

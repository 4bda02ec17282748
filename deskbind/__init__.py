"""
deskbind - thin bindings for desktop UI automation.

``deskbind.au3`` wraps the Windows AutoItX3 library, ``deskbind.xdo`` wraps
the X11 command-line tools (xdotool, xsel, xwininfo, xkill).
"""

from pathlib import Path

__version__ = (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()

__all__ = ["__version__"]

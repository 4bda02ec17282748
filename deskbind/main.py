"""
deskbind command line entry point.
"""

import argparse
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table

from deskbind import __version__
from deskbind.au3 import Window
from deskbind.core.types import WindowState
from deskbind.error_handling import DeskBindError
from deskbind.monitoring.logger import get_logger, setup_logging
from deskbind.xdo import Clipboard, XWindow

console = Console()
logger = get_logger("deskbind.main")


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="deskbind",
        description=f"deskbind - desktop automation bindings v{__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List X11 windows whose name matches a regex
  deskbind search "Firefox"

  # Show geometry and xwininfo attributes of a window
  deskbind info 48234499

  # Print the clipboard
  deskbind clipboard --selection primary

  # Show the AutoItX3 state of a window (Windows only)
  deskbind au3-state "Untitled - Notepad"
        """,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search X11 windows by name")
    search.add_argument("name", help="Regular expression matched against window names")
    search.add_argument(
        "--visible",
        action="store_true",
        help="Only list visible windows",
    )

    info = subparsers.add_parser("info", help="Show details of an X11 window")
    info.add_argument("window_id", type=int, help="Numeric window id")

    clipboard = subparsers.add_parser("clipboard", help="Print an X selection")
    clipboard.add_argument(
        "--selection",
        choices=["primary", "secondary", "clipboard"],
        default="clipboard",
        help="Selection to read (default: clipboard)",
    )

    au3_state = subparsers.add_parser("au3-state", help="Show AutoItX3 window state")
    au3_state.add_argument("title", help="Window title")
    au3_state.add_argument("--text", default="", help="Window text")

    return parser


def run_search(name: str, only_visible: bool) -> int:
    windows = XWindow.search(name, only_visible=only_visible)
    if not windows:
        console.print(f"[yellow]No windows match {name!r}[/yellow]")
        return 0

    table = Table(title=f"Windows matching {name!r}")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for window in windows:
        table.add_row(str(window.id), window.name())
    console.print(table)
    return 0


def run_info(window_id: int) -> int:
    window = XWindow(window_id)
    rect = window.geometry()
    table = Table(title=f"Window {window_id}")
    table.add_column("Attribute")
    table.add_column("Value")
    table.add_row("Name", window.name())
    table.add_row("Geometry", f"{rect.width}x{rect.height}+{rect.x}+{rect.y}")
    for key, value in window.info().items():
        table.add_row(key, value)
    console.print(table)
    return 0


def run_clipboard(selection: str) -> int:
    console.print(Clipboard().read(selection), end="", markup=False, highlight=False)
    return 0


def run_au3_state(title: str, text: str) -> int:
    window = Window(title, text)
    state = window.state()
    rect = window.rect()
    table = Table(title=f"Window {title!r}")
    table.add_column("Property")
    table.add_column("Value")
    table.add_row("Handle", window.handle())
    table.add_row("State", str(int(state)))
    table.add_row("Flags", ", ".join(flag.name for flag in WindowState if flag and flag in state))
    table.add_row("Rect", f"{rect.width}x{rect.height}+{rect.x}+{rect.y}")
    console.print(table)
    return 0


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for deskbind.

    Args:
        args: Command line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    setup_logging(log_level="DEBUG" if parsed.debug else None)

    try:
        if parsed.command == "search":
            return run_search(parsed.name, parsed.visible)
        if parsed.command == "info":
            return run_info(parsed.window_id)
        if parsed.command == "clipboard":
            return run_clipboard(parsed.selection)
        return run_au3_state(parsed.title, parsed.text)
    except DeskBindError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {e.message}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())

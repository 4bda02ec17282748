"""Manual smoke test for the AutoItX3 window binding (Windows only)."""

from __future__ import annotations

import argparse
import subprocess
import sys

from deskbind.au3 import Window
from deskbind.core.types import ShowState
from deskbind.error_handling import DeskBindError


def main() -> int:
    parser = argparse.ArgumentParser(description="Open Notepad and exercise the window accessors.")
    parser.add_argument("--title", default="Untitled - Notepad", help="Title Notepad opens with.")
    parser.add_argument("--timeout", type=int, default=10, help="Seconds to wait for the window (default: 10).")
    args = parser.parse_args()

    process = subprocess.Popen(["notepad.exe"])
    try:
        if not Window.wait(args.title, timeout=args.timeout):
            print(f"No window titled {args.title!r} appeared within {args.timeout}s")
            return 1

        window = Window(args.title)
        print(f"Handle:     {window.handle()}")
        print(f"PID:        {window.pid()} (spawned {process.pid})")
        print(f"Rect:       {window.rect()}")
        print(f"Classes:    {window.class_list()}")
        print(f"Active:     {window.activate()}")

        window.set_state(ShowState.MAXIMIZE)
        print(f"Maximized:  {window.is_maximized()}")
        window.set_state(ShowState.RESTORE)
        window.move(50, 50, 800, 600)
        print(f"Moved to:   {window.rect()}")

        try:
            window.set_trans(180)
        except DeskBindError as exc:
            print(f"Transparency unavailable: {exc}")

        window.close()
        print(f"Closed:     {window.wait_close(5)}")
    except DeskBindError as exc:
        print(f"Automation failed: {exc}")
        return 1
    finally:
        if process.poll() is None:
            process.kill()
    return 0


if __name__ == "__main__":
    sys.exit(main())

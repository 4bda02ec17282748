"""X11 automation through xdotool, xsel, xwininfo and xkill."""

from deskbind import __version__ as VERSION  # noqa: F401
from deskbind.error_handling import ParseError, XError  # noqa: F401
from deskbind.xdo.clipboard import Clipboard  # noqa: F401
from deskbind.xdo.input import Keyboard, Mouse  # noqa: F401
from deskbind.xdo.runner import (  # noqa: F401
    EJECT,
    XDOTOOL,
    XKILL,
    XSEL,
    XWININFO,
    ToolRunner,
)
from deskbind.xdo.window import XWindow  # noqa: F401

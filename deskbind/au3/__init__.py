"""Windows automation through the AutoItX3 library."""

from deskbind.au3.codec import WideTextCodec  # noqa: F401
from deskbind.au3.control import Control  # noqa: F401
from deskbind.au3.library import (  # noqa: F401
    BUFFER_SIZE,
    CAPABILITIES,
    INTDEFAULT,
    AutoItLibrary,
    Signature,
    get_backend,
    load_library,
)
from deskbind.au3.window import Window  # noqa: F401

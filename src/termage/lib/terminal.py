"""
Terminal dimension query

Elements size themselves against the terminal width. The width comes from
(in order) an explicit value, the TERMAGE_TERMINAL_WIDTH setting, the OS,
then the configured fallback.
"""

import shutil
from typing import Optional

from ..config import appsettings


class Terminal:
    """
    Terminal width provider

    Attributes:
        width: Fixed width, or None to ask the OS on every call
    """

    def __init__(self, width: Optional[int] = None):
        self.width = width

    def width_get(self) -> int:
        """Current terminal width in columns (always >= 1)"""
        if self.width is not None:
            return max(1, self.width)

        queried: Optional[int]
        try:
            # (0, 0) fallback tells us the OS query failed
            queried = shutil.get_terminal_size((0, 0)).columns
        except OSError:
            queried = None
        return appsettings.width_resolve(queried)

    def __repr__(self) -> str:
        return f"Terminal(width={self.width!r})"

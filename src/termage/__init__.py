"""
termage - Terminal text styling with inline shortcodes

Styled elements (alerts, headings, blocks) and a [shortcode] mini-language
rendered to ANSI escape sequences sized to the terminal.
"""

__version__ = "1.0.0"

from .lib import (
    Termage,
    Shortcodes,
    HandlerRegistry,
    Theme,
    expand,
    shortcodes_strip,
    width_visible,
    LOG,
    state_connectToLogger,
)
from .lib.elements import el, div, span, alert, heading, strikethrough, bold, italic, underline, dim, rule, link

__all__ = [
    "Termage",
    "Shortcodes",
    "HandlerRegistry",
    "Theme",
    "expand",
    "shortcodes_strip",
    "width_visible",
    "LOG",
    "state_connectToLogger",
    "el",
    "div",
    "span",
    "alert",
    "heading",
    "strikethrough",
    "bold",
    "italic",
    "underline",
    "dim",
    "rule",
    "link",
    "__version__",
]

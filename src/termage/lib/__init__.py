"""
termage - Terminal text styling with inline shortcodes

Fluent styled elements and a [shortcode] mini-language rendered to ANSI.
"""

__version__ = "1.0.0"

from .ansi import AnsiCodec, codec
from .tokenizer import Tokenizer
from .parser import Parser
from .processor import Processor, expand, shortcodes_strip
from .handlers import HandlerRegistry, HandlerRegistryError
from .shortcodes import Shortcodes
from .theme import Theme, ThemeError, theme_get, theme_set
from .terminal import Terminal
from .layout import width_visible, width_truncate, padding_compute, boxWidth_clamp
from .elements import El, Alert, Heading, Strikethrough, Rule, Link
from .termage import Termage
from .log import LOG, state_connectToLogger

__all__ = [
    "AnsiCodec",
    "codec",
    "Tokenizer",
    "Parser",
    "Processor",
    "expand",
    "shortcodes_strip",
    "HandlerRegistry",
    "HandlerRegistryError",
    "Shortcodes",
    "Theme",
    "ThemeError",
    "theme_get",
    "theme_set",
    "Terminal",
    "width_visible",
    "width_truncate",
    "padding_compute",
    "boxWidth_clamp",
    "El",
    "Alert",
    "Heading",
    "Strikethrough",
    "Rule",
    "Link",
    "Termage",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

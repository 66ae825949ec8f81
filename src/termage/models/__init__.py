"""
Models package for termage

Contains data structures and type definitions for the shortcode engine,
styling and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .handlers import HandlerSpec, HandlerCategory, ShortcodeHandler
from .shortcodes import TextRun, TagBoundary, TagNode, Shortcode, ParsedNode, Token
from .style import StyleAttributes, DECORATIONS

__all__ = [
    "ProgramState",
    "pipeline",
    "HandlerSpec",
    "HandlerCategory",
    "ShortcodeHandler",
    "TextRun",
    "TagBoundary",
    "TagNode",
    "Shortcode",
    "ParsedNode",
    "Token",
    "StyleAttributes",
    "DECORATIONS",
]

"""
Shortcode data models

Type-safe structures passed between the tokenizer, the tree builder and the
processor. Nodes only live for the duration of one parse/expand call.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass
class TextRun:
    """
    Literal text between tags

    Attributes:
        text: Text as it should be rendered (escaped brackets collapsed,
              e.g. "[[" becomes "[")
        raw: The same text exactly as written in the source

    Example:
        For source "a [[b]] c":
        TextRun(text="a [b] c", raw="a [[b]] c")
    """
    text: str
    raw: str


@dataclass
class TagBoundary:
    """
    One bracketed tag found by the tokenizer, before nesting is resolved

    Attributes:
        start: Index of the opening "[" in the source
        end: Index just past the closing "]"
        name: Tag name (e.g., "color", "b", "pl")
        raw_parameters: Everything between the name and the "]"
                        (e.g., "=red" or ' href="https://x.io"')
        parameters: Named parameters in source order; bare flags map to None
        bbcode: Shorthand value (e.g., "red" for [color=red]), or None
        closing: True for [/name]
        self_closing: True for [name/]
        markup: The tag exactly as written, kept for literal fallback

    Example:
        For source '[a href="https://termage.dev"]' at position 0:
        TagBoundary(start=0, end=30, name="a",
                    raw_parameters=' href="https://termage.dev"',
                    parameters={"href": "https://termage.dev"},
                    bbcode=None, closing=False, self_closing=False,
                    markup='[a href="https://termage.dev"]')
    """
    start: int
    end: int
    name: str
    raw_parameters: str = ""
    parameters: Dict[str, Optional[str]] = field(default_factory=dict)
    bbcode: Optional[str] = None
    closing: bool = False
    self_closing: bool = False
    markup: str = ""


Token = Union[TextRun, TagBoundary]


@dataclass
class TagNode:
    """
    A matched shortcode in the parse tree

    Attributes:
        name: Tag name
        parameters: Named parameters
        bbcode: Shorthand value, or None
        children: Nested nodes in document order
        self_closing: True when written as [name/]
        opening: Opening markup as written (e.g., "[color=red]")
        closing: Closing markup as written (e.g., "[/color]"), "" if self-closing
    """
    name: str
    parameters: Dict[str, Optional[str]] = field(default_factory=dict)
    bbcode: Optional[str] = None
    children: List['ParsedNode'] = field(default_factory=list)
    self_closing: bool = False
    opening: str = ""
    closing: str = ""


ParsedNode = Union[TextRun, TagNode]


@dataclass
class Shortcode:
    """
    What a handler sees: one tag with its content already expanded

    Attributes:
        name: Tag name the handler was looked up by
        parameters: Named parameters
        bbcode: Shorthand value, or None
        content: Fully expanded inner content (nested shortcodes resolved)
    """
    name: str
    parameters: Dict[str, Optional[str]]
    bbcode: Optional[str]
    content: str

    def parameter_get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a named parameter, or default when absent or a bare flag"""
        value = self.parameters.get(key)
        return default if value is None else value

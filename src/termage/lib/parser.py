"""
Parser for [shortcode] markup

Turns the tokenizer's flat token list into a tree of text runs and matched
tags.

Matching follows stack discipline:
- A closing tag matches the nearest still-open tag of the same name
- Tags opened after that one and still open are unmatched; they fall back
  to literal text, their children stay where they are
- A closing tag with no open counterpart is literal text
- Tags still open at the end of input are literal text

So crossing tags keep the inner (later opened) tag as text:

    [b][i]x[/b][/i]  ->  b( "[i]" "x" )  "[/i]"

Parsing never fails: every input string produces a tree.

Example:
    >>> nodes = Parser("Hello [b]big [i]world[/i][/b]!").parse()
    >>> nodes[1].name
    'b'
    >>> nodes[1].children[1].name
    'i'
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..models.shortcodes import ParsedNode, TagBoundary, TagNode, TextRun
from .log import LOG
from .tokenizer import Tokenizer


@dataclass
class _OpenTag:
    """An opening tag waiting for its closing tag"""
    boundary: TagBoundary
    children: List[ParsedNode] = field(default_factory=list)


class Parser:
    """
    Tree builder for shortcode markup

    Attributes:
        source: Raw text being parsed
        stack: Currently open tags, innermost last
        nodes: Top-level nodes of the tree being built
    """

    def __init__(self, source: str):
        self.source = source
        self.stack: List[_OpenTag] = []
        self.nodes: List[ParsedNode] = []

    def parse(self) -> List[ParsedNode]:
        """
        Parse source text into a tree.

        Returns:
            Top-level nodes in document order. Empty source gives [].
        """
        self.stack = []
        self.nodes = []

        for token in Tokenizer(self.source).tokenize():
            if isinstance(token, TextRun):
                self.children_current().append(token)
            elif token.closing:
                self.closingTag_handle(token)
            elif token.self_closing:
                self.children_current().append(self.node_make(token, [], None))
            else:
                self.stack.append(_OpenTag(boundary=token))

        while self.stack:
            self.openTag_unwind(self.stack.pop())

        return self.nodes

    def children_current(self) -> List[ParsedNode]:
        """Child list that new nodes are appended to"""
        return self.stack[-1].children if self.stack else self.nodes

    def openTag_find(self, name: str) -> Optional[int]:
        """Stack index of the innermost open tag with this name"""
        for index in range(len(self.stack) - 1, -1, -1):
            if self.stack[index].boundary.name == name:
                return index
        return None

    def closingTag_handle(self, boundary: TagBoundary) -> None:
        """Match a closing tag against the open stack"""
        index = self.openTag_find(boundary.name)
        if index is None:
            LOG(f"Unmatched closing tag {boundary.markup!r} kept as text", level=2)
            self.children_current().append(self.literal_make(boundary))
            return

        while len(self.stack) - 1 > index:
            self.openTag_unwind(self.stack.pop())

        opened = self.stack.pop()
        self.children_current().append(
            self.node_make(opened.boundary, opened.children, boundary)
        )

    def openTag_unwind(self, opened: _OpenTag) -> None:
        """Degrade an unmatched opening tag to literal markup plus its children"""
        LOG(f"Unmatched opening tag {opened.boundary.markup!r} kept as text", level=2)
        target = self.children_current()
        target.append(self.literal_make(opened.boundary))
        target.extend(opened.children)

    @staticmethod
    def literal_make(boundary: TagBoundary) -> TextRun:
        return TextRun(text=boundary.markup, raw=boundary.markup)

    @staticmethod
    def node_make(
        opening: TagBoundary,
        children: List[ParsedNode],
        closing: Optional[TagBoundary],
    ) -> TagNode:
        return TagNode(
            name=opening.name,
            parameters=dict(opening.parameters),
            bbcode=opening.bbcode,
            children=children,
            self_closing=opening.self_closing,
            opening=opening.markup,
            closing=closing.markup if closing else "",
        )


def parse(source: str) -> List[ParsedNode]:
    """Parse source text into a tree (convenience wrapper)"""
    return Parser(source).parse()

"""
Processor for parsed shortcode trees

Expands a tree into styled text. Expansion is inside-out:
1. Expand all children first
2. Join them into the tag's content
3. Hand the expanded content to the tag's handler

A tag without a registered handler keeps its (expanded) content and loses
its markup. Nothing here raises on bad markup; the parser has already
degraded unmatched tags to text.
"""

import re
from typing import Iterator, List, Optional, Tuple

from ..models.shortcodes import ParsedNode, Shortcode, TagBoundary, TagNode, TextRun
from .handlers import HandlerRegistry
from .log import LOG
from .parser import Parser
from .theme import Theme, theme_get
from .tokenizer import Tokenizer

_BRACKETS_RE = re.compile(r'[\[\]]')


class Processor:
    """
    Expands shortcode markup using a handler registry and a theme

    Attributes:
        registry: Handlers looked up by tag name
        theme: Theme handed to every handler
    """

    def __init__(self, registry: Optional[HandlerRegistry] = None, theme: Optional[Theme] = None):
        self.registry = registry if registry is not None else HandlerRegistry()
        self.theme = theme if theme is not None else theme_get()

    def expand(self, text: str) -> str:
        """
        Expand all shortcodes in text.

        Text without brackets is returned unchanged.

        Example:
            >>> Processor().expand("[b]hi[/b]")
            '\\x1b[1mhi\\x1b[22m'
        """
        if not _BRACKETS_RE.search(text):
            return text
        return self.nodes_expand(Parser(text).parse())

    def nodes_expand(self, nodes: List[ParsedNode]) -> str:
        """
        Expand sibling nodes and join them in document order.

        Walks the tree with an explicit stack, so nesting depth is bounded
        only by memory. Each frame holds a tag (None for the top level), an
        iterator over its children and the expanded parts collected so far.
        """
        top: List[str] = []
        stack: List[Tuple[Optional[TagNode], Iterator[ParsedNode], List[str]]] = [
            (None, iter(nodes), top)
        ]

        while stack:
            tag, children, parts = stack[-1]
            child = next(children, None)

            if child is None:
                stack.pop()
                if tag is not None:
                    stack[-1][2].append(self.tag_apply(tag, ''.join(parts)))
            elif isinstance(child, TextRun):
                parts.append(child.text)
            else:
                stack.append((child, iter(child.children), []))

        return ''.join(top)

    def node_expand(self, node: ParsedNode) -> str:
        """
        Expand a single node.

        Text runs render as their unescaped text; tags are expanded
        inside-out and passed to their handler.
        """
        return self.nodes_expand([node])

    def tag_apply(self, node: TagNode, content: str) -> str:
        """Hand a tag's expanded content to its handler"""
        handler = self.registry.get(node.name)
        if handler is None:
            LOG(f"No handler for [{node.name}], markup dropped", level=2)
            return content

        shortcode = Shortcode(
            name=node.name,
            parameters=node.parameters,
            bbcode=node.bbcode,
            content=content,
        )
        return handler(shortcode, self.theme)


def shortcodes_strip(value: str) -> str:
    """
    Remove all shortcode markup, keeping the plain content.

    Every tag boundary goes (matched or not, registered or not); text runs
    are kept exactly as written, so escaped brackets stay doubled and the
    result is still valid markup. Dropping tags can join brackets into new
    tags (``[a[b]]`` -> ``[a]``), so passes repeat until nothing changes,
    which makes stripping idempotent.

    Example:
        >>> shortcodes_strip("[color=red]Stay [b]RAD[/b]![/color]")
        'Stay RAD!'
    """
    current = value
    while True:
        tokens = Tokenizer(current).tokenize()
        stripped = ''.join(token.raw for token in tokens if isinstance(token, TextRun))
        if stripped == current or not any(isinstance(token, TagBoundary) for token in tokens):
            return stripped
        current = stripped


def expand(text: str, registry: Optional[HandlerRegistry] = None, theme: Optional[Theme] = None) -> str:
    """Expand shortcodes in text (convenience wrapper)"""
    return Processor(registry, theme).expand(text)

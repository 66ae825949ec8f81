"""
Shortcodes facade

Bundles a handler registry, a theme and the processor behind the small API
elements and callers use: parse text into a tree, expand text, strip
markup, and add custom handlers.

Example:
    >>> shortcodes = Shortcodes(Theme(variables={'colors': {'brand': 'magenta'}}))
    >>> shortcodes.handler_add('shout', lambda s, theme: s.content.upper())
    >>> shortcodes.parse("[shout]hey[/shout]")
    'HEY'
"""

from typing import List, Optional

from ..models.handlers import HandlerCategory, ShortcodeHandler
from ..models.shortcodes import ParsedNode
from .handlers import HandlerRegistry
from .parser import Parser
from .processor import Processor, shortcodes_strip
from .theme import Theme, theme_get


class Shortcodes:
    """
    Shortcode engine bound to one theme

    Attributes:
        theme: Theme used by handlers
        registry: Handler registry (defaults pre-registered)
        processor: Processor expanding markup with registry and theme
    """

    def __init__(self, theme: Optional[Theme] = None, registry: Optional[HandlerRegistry] = None):
        self.theme = theme if theme is not None else theme_get()
        self.registry = registry if registry is not None else HandlerRegistry()
        self.processor = Processor(self.registry, self.theme)

    def theme_set(self, theme: Theme) -> "Shortcodes":
        """Switch the theme used for later expansions"""
        self.theme = theme
        self.processor = Processor(self.registry, theme)
        return self

    def handler_add(
        self,
        name: str,
        handler: ShortcodeHandler,
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> None:
        """Register a custom handler (last registration for a name wins)"""
        self.registry.add(name, handler, description, aliases, HandlerCategory.CUSTOM)

    def parse_text(self, text: str) -> List[ParsedNode]:
        """Parse text into a shortcode tree without expanding it"""
        return Parser(text).parse()

    def parse(self, text: str) -> str:
        """Expand all shortcodes in text"""
        return self.processor.expand(text)

    def strip(self, text: str) -> str:
        """Remove shortcode markup, keeping content"""
        return shortcodes_strip(text)

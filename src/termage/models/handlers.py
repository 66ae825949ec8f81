"""
Handler specification and metadata models

Defines the structure and categories of shortcode handlers for
validation, documentation and registry management.
"""

import re
from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..lib.theme import Theme
    from .shortcodes import Shortcode

# Handler signature: (shortcode, theme) -> expanded text
ShortcodeHandler = Callable[['Shortcode', 'Theme'], str]

# Same alphabet the tokenizer accepts for tag names
HANDLER_NAME_PATTERN = re.compile(r'[A-Za-z0-9-]+')


class HandlerCategory(Enum):
    """
    Categories of shortcode handlers

    Used for organization and documentation.
    """
    DECORATION = "decoration"   # [b], [i], [u], [s], [d], ...
    COLOR = "color"             # [color=], [bg=]
    LINK = "link"               # [a href=]
    SPACING = "spacing"         # [p], [px=], [ml=], ...
    CUSTOM = "custom"           # user registered


@dataclass
class HandlerSpec:
    """
    Specification for a shortcode handler

    Attributes:
        name: Tag name
        category: Category for organization
        description: Human-readable description
        handler: Expansion function (shortcode, theme) -> str
        aliases: Alternative tag names for the same handler
        examples: Example usage strings
    """
    name: str
    category: HandlerCategory
    description: str
    handler: ShortcodeHandler
    aliases: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)

    def names(self) -> List[str]:
        """Primary name followed by aliases"""
        return [self.name, *self.aliases]


def handlerName_isValid(name: str) -> bool:
    """Check if a name can be used as a shortcode tag"""
    return bool(name) and HANDLER_NAME_PATTERN.fullmatch(name) is not None

"""
Shortcode handler implementations for termage

Each handler turns one shortcode, whose content is already expanded, into
styled text. Handlers are registered in a HandlerRegistry by tag name; the
registry is filled with the defaults below, can be extended at runtime and
can be frozen once configuration is done.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..models.handlers import (
    HandlerCategory,
    HandlerSpec,
    ShortcodeHandler,
    handlerName_isValid,
)
from ..models.shortcodes import Shortcode
from ..models.style import StyleAttributes
from .ansi import codec
from .log import LOG
from .theme import Theme


class HandlerRegistryError(ValueError):
    """Raised when a handler can't be registered (bad name, frozen registry)"""
    pass


# Upper bound for any padding or margin run, in columns
SPACING_MAX = 1000

SpacingValue = Optional[Union[str, float]]


def count_parse(value: SpacingValue) -> float:
    """
    Parse a spacing amount; anything non-numeric or negative counts as 0,
    anything above SPACING_MAX counts as SPACING_MAX.

    Example:
        >>> count_parse("3"), count_parse("1.5"), count_parse("wide"), count_parse("-2")
        (3.0, 1.5, 0.0, 0.0)
        >>> count_parse("1e300")
        1000.0
    """
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or number < 0:
        return 0.0
    return float(min(number, SPACING_MAX))


def columns_clamp(amount: float) -> int:
    """Truncate a scaled spacing amount to a column count in 0..SPACING_MAX"""
    if math.isnan(amount) or amount <= 0:
        return 0
    return int(min(amount, SPACING_MAX))


def spaces(count: int) -> str:
    return ' ' * columns_clamp(count)


def spacingSide_compute(kind: str, side: str, value: SpacingValue, theme: Theme) -> int:
    """
    Columns for a one-sided spacing shortcode ([pl=], [pr=], [ml=], [mr=]).

    value * <kind>.<side> * <kind>.global, truncated.
    """
    amount = count_parse(value)
    return columns_clamp(amount * theme.number_get(f'{kind}.{side}', 1) * theme.number_get(f'{kind}.global', 1))


def spacingBoth_compute(kind: str, value: SpacingValue, theme: Theme) -> Tuple[int, int]:
    """
    Columns for a two-sided spacing shortcode ([px=], [mx=], [p=], [m=]).

    Half the value goes to each side, scaled by that side's multiplier and
    the global one, each truncated.
    """
    amount = count_parse(value) / 2
    scale = theme.number_get(f'{kind}.global', 1)
    left = columns_clamp(amount * theme.number_get(f'{kind}.left', 1) * scale)
    right = columns_clamp(amount * theme.number_get(f'{kind}.right', 1) * scale)
    return left, right


class HandlerRegistry:
    """
    Registry of shortcode handler specifications

    Maps tag names (and aliases) to HandlerSpec objects. The last
    registration for a name wins.
    """

    def __init__(self, defaults: bool = True) -> None:
        """
        Initialize the registry.

        Args:
            defaults: Register the built-in handlers
        """
        self.specs: Dict[str, HandlerSpec] = {}
        self.frozen = False
        if defaults:
            self.decorationHandlers_register()
            self.linkHandlers_register()
            self.colorHandlers_register()
            self.spacingHandlers_register()

    def register(self, spec: HandlerSpec) -> None:
        """
        Register a handler specification under its name and aliases.

        Raises:
            HandlerRegistryError: If a name is invalid or the registry is frozen
        """
        if self.frozen:
            raise HandlerRegistryError(
                f"Cannot register '{spec.name}': handler registry is frozen"
            )
        for name in spec.names():
            if not handlerName_isValid(name):
                raise HandlerRegistryError(
                    f"Invalid shortcode name {name!r}: use letters, digits and hyphens"
                )
        if not callable(spec.handler):
            raise HandlerRegistryError(f"Handler for '{spec.name}' is not callable")

        for name in spec.names():
            self.specs[name] = spec
        LOG(f"Registered shortcode handler [{spec.name}]", level=3)

    def add(
        self,
        name: str,
        handler: ShortcodeHandler,
        description: str = "",
        aliases: Optional[List[str]] = None,
        category: HandlerCategory = HandlerCategory.CUSTOM,
    ) -> None:
        """Register a plain handler function under a tag name"""
        self.register(HandlerSpec(
            name=name,
            category=category,
            description=description or f"Custom [{name}] shortcode",
            handler=handler,
            aliases=list(aliases or []),
        ))

    def get(self, name: str) -> Optional[ShortcodeHandler]:
        """
        Get handler by tag name

        Returns:
            Handler function or None if not registered
        """
        spec = self.specs.get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[HandlerSpec]:
        """Get full handler specification by name"""
        return self.specs.get(name)

    def handlers_listByCategory(self, category: HandlerCategory) -> List[HandlerSpec]:
        """Get all distinct handler specs in a category"""
        seen: List[HandlerSpec] = []
        for spec in self.specs.values():
            if spec.category == category and not any(spec is s for s in seen):
                seen.append(spec)
        return seen

    def names_list(self) -> List[str]:
        """All registered tag names, aliases included"""
        return sorted(self.specs)

    def freeze(self) -> "HandlerRegistry":
        """Stop accepting registrations; returns self for chaining"""
        self.frozen = True
        return self

    def __contains__(self, name: object) -> bool:
        return name in self.specs

    def decorationHandlers_register(self) -> None:
        """Register SGR decoration handlers"""

        def make_decoration(decoration: str) -> Callable[[Shortcode, Theme], str]:
            """Factory for single-decoration wrappers"""
            def handler(shortcode: Shortcode, theme: Theme) -> str:
                return codec.decoration_wrap(decoration, shortcode.content)
            return handler

        decoration_specs = [
            ('bold', ['b'], 'Bold text', ['[bold]Bold[/bold]', '[b]Bold[/b]']),
            ('italic', ['i'], 'Italic text', ['[italic]Italic[/italic]', '[i]Italic[/i]']),
            ('underline', ['u'], 'Underlined text', ['[underline]Underline[/underline]', '[u]Underline[/u]']),
            ('strikethrough', ['s'], 'Struck-through text', ['[strikethrough]Gone[/strikethrough]', '[s]Gone[/s]']),
            ('dim', ['d'], 'Dim (faint) text', ['[dim]Dim[/dim]', '[d]Dim[/d]']),
            ('blink', [], 'Blinking text', ['[blink]Blink[/blink]']),
            ('reverse', [], 'Swap foreground and background', ['[reverse]Reverse[/reverse]']),
            ('invisible', [], 'Hidden text', ['[invisible]Secret[/invisible]']),
        ]

        for name, aliases, desc, examples in decoration_specs:
            self.register(HandlerSpec(
                name=name,
                category=HandlerCategory.DECORATION,
                description=desc,
                handler=make_decoration(name),
                aliases=aliases,
                examples=examples,
            ))

    def linkHandlers_register(self) -> None:
        """Register the OSC-8 hyperlink handler"""

        def anchor_handler(shortcode: Shortcode, theme: Theme) -> str:
            """Handle [anchor href=] - clickable link in capable terminals"""
            href = shortcode.parameter_get('href') or shortcode.bbcode
            if not href:
                LOG(f"[{shortcode.name}] without href, content left unlinked", level=2)
                return shortcode.content
            return codec.link_wrap(href, shortcode.content)

        self.register(HandlerSpec(
            name='anchor',
            category=HandlerCategory.LINK,
            description='Terminal hyperlink (OSC-8)',
            handler=anchor_handler,
            aliases=['a'],
            examples=['[anchor href=https://example.org]Site[/anchor]', '[a href="https://example.org"]Site[/a]'],
        ))

    def colorHandlers_register(self) -> None:
        """Register foreground and background color handlers"""

        def make_color(background: bool) -> Callable[[Shortcode, Theme], str]:
            """Factory for color wrappers; the value goes through the theme palette"""
            def handler(shortcode: Shortcode, theme: Theme) -> str:
                value = shortcode.bbcode or shortcode.parameter_get(shortcode.name)
                if not value:
                    return shortcode.content

                resolved = theme.color_resolve(value)
                style = StyleAttributes(bg=resolved) if background else StyleAttributes(color=resolved)
                if not codec.codes_build(style):
                    LOG(f"Unknown color {value!r} in [{shortcode.name}], content left unstyled", level=2)
                    return shortcode.content
                return codec.style_apply(style, shortcode.content)
            return handler

        self.register(HandlerSpec(
            name='color',
            category=HandlerCategory.COLOR,
            description='Foreground color (palette name or raw color)',
            handler=make_color(background=False),
            examples=['[color=red]Red[/color]', '[color=#ff8800]Orange[/color]'],
        ))

        self.register(HandlerSpec(
            name='bg',
            category=HandlerCategory.COLOR,
            description='Background color (palette name or raw color)',
            handler=make_color(background=True),
            examples=['[bg=info]Info[/bg]'],
        ))

    def spacingHandlers_register(self) -> None:
        """Register padding and margin handlers"""

        def make_both(kind: str) -> Callable[[Shortcode, Theme], str]:
            """[p]/[m]: bare value split over both sides, l=/r= set a side exactly"""
            def handler(shortcode: Shortcode, theme: Theme) -> str:
                left, right = spacingBoth_compute(kind, shortcode.bbcode, theme)
                if shortcode.parameter_get('l') is not None:
                    left = columns_clamp(count_parse(shortcode.parameter_get('l')))
                if shortcode.parameter_get('r') is not None:
                    right = columns_clamp(count_parse(shortcode.parameter_get('r')))
                return spaces(left) + shortcode.content + spaces(right)
            return handler

        def make_x(kind: str) -> Callable[[Shortcode, Theme], str]:
            """[px=]/[mx=]: value split over both sides"""
            def handler(shortcode: Shortcode, theme: Theme) -> str:
                left, right = spacingBoth_compute(kind, shortcode.bbcode, theme)
                return spaces(left) + shortcode.content + spaces(right)
            return handler

        def make_side(kind: str, side: str) -> Callable[[Shortcode, Theme], str]:
            """[pl=]/[pr=]/[ml=]/[mr=]: one side only"""
            def handler(shortcode: Shortcode, theme: Theme) -> str:
                count = spacingSide_compute(kind, side, shortcode.bbcode, theme)
                if side == 'left':
                    return spaces(count) + shortcode.content
                return shortcode.content + spaces(count)
            return handler

        for kind, letter in (('padding', 'p'), ('margin', 'm')):
            self.register(HandlerSpec(
                name=letter,
                category=HandlerCategory.SPACING,
                description=f'{kind.capitalize()} left and right (l=, r= or a bare total)',
                handler=make_both(kind),
                examples=[f'[{letter} l=2 r=2]text[/{letter}]', f'[{letter}=4]text[/{letter}]'],
            ))
            self.register(HandlerSpec(
                name=f'{letter}x',
                category=HandlerCategory.SPACING,
                description=f'{kind.capitalize()} split over left and right',
                handler=make_x(kind),
                examples=[f'[{letter}x=4]text[/{letter}x]'],
            ))
            self.register(HandlerSpec(
                name=f'{letter}l',
                category=HandlerCategory.SPACING,
                description=f'{kind.capitalize()} left',
                handler=make_side(kind, 'left'),
                examples=[f'[{letter}l=2]text[/{letter}l]'],
            ))
            self.register(HandlerSpec(
                name=f'{letter}r',
                category=HandlerCategory.SPACING,
                description=f'{kind.capitalize()} right',
                handler=make_side(kind, 'right'),
                examples=[f'[{letter}r=2]text[/{letter}r]'],
            ))

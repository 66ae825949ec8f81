"""
Style attribute value object

Holds the resolved style state of one styled run: colors, decorations,
spacing, width, alignment and display. Every field is optional; None means
"not set here" so that layers (built-in defaults, theme values, explicit
per-call overrides) can be merged in priority order.
"""

from dataclasses import dataclass, field, fields, replace
from typing import FrozenSet, Optional, Union

# Fixed emission order for decorations. Suffixes are emitted in reverse.
DECORATIONS = (
    'bold',
    'dim',
    'italic',
    'underline',
    'blink',
    'reverse',
    'invisible',
    'strikethrough',
)

TEXT_ALIGNS = ('left', 'right')
DISPLAYS = ('inline', 'block')

FULL_WIDTH = 'full'


@dataclass(frozen=True)
class StyleAttributes:
    """
    Style state for a run of text.

    Attributes:
        color: Foreground color (semantic palette name or raw color value)
        bg: Background color (same forms as color)
        decorations: Subset of DECORATIONS to switch on
        padding_left: Spaces inside the colored run, before the content
        padding_right: Spaces inside the colored run, after the content
        margin_left: Spaces outside the colored run, before it
        margin_right: Spaces outside the colored run, after it
        width: Box width in columns, or "full" for the terminal width
        text_align: "left" or "right"
        display: "inline" or "block" (block appends a newline)

    Example:
        >>> base = StyleAttributes(color='white', decorations=frozenset({'bold'}))
        >>> base.merged(StyleAttributes(color='red')).color
        'red'
    """
    color: Optional[str] = None
    bg: Optional[str] = None
    decorations: FrozenSet[str] = field(default_factory=frozenset)
    padding_left: Optional[int] = None
    padding_right: Optional[int] = None
    margin_left: Optional[int] = None
    margin_right: Optional[int] = None
    width: Optional[Union[int, str]] = None
    text_align: Optional[str] = None
    display: Optional[str] = None

    def __post_init__(self) -> None:
        unknown = set(self.decorations) - set(DECORATIONS)
        if unknown:
            raise ValueError(f"Unknown decorations: {sorted(unknown)}")
        if self.text_align is not None and self.text_align not in TEXT_ALIGNS:
            raise ValueError(f"text_align must be one of {TEXT_ALIGNS}, got {self.text_align!r}")
        if self.display is not None and self.display not in DISPLAYS:
            raise ValueError(f"display must be one of {DISPLAYS}, got {self.display!r}")
        if isinstance(self.width, str) and self.width != FULL_WIDTH:
            raise ValueError(f"width must be an integer or {FULL_WIDTH!r}, got {self.width!r}")
        for name in ('padding_left', 'padding_right', 'margin_left', 'margin_right'):
            value = getattr(self, name)
            if value is not None and value < 0:
                object.__setattr__(self, name, 0)
        if isinstance(self.width, int) and self.width < 0:
            object.__setattr__(self, 'width', 0)

    def merged(self, other: Optional["StyleAttributes"]) -> "StyleAttributes":
        """
        Overlay another style on top of this one.

        Fields set on ``other`` win; decorations are combined.
        """
        if other is None:
            return self

        overrides = {}
        for f in fields(self):
            if f.name == 'decorations':
                continue
            value = getattr(other, f.name)
            if value is not None:
                overrides[f.name] = value
        overrides['decorations'] = frozenset(self.decorations | other.decorations)
        return replace(self, **overrides)

    @classmethod
    def resolve(
        cls,
        override: Optional["StyleAttributes"] = None,
        themed: Optional["StyleAttributes"] = None,
        builtin: Optional["StyleAttributes"] = None,
    ) -> "StyleAttributes":
        """
        Compute the effective style: override, else theme, else built-in.
        """
        return (builtin or cls()).merged(themed).merged(override)

    def decorations_ordered(self) -> list[str]:
        """Decorations in their fixed emission order"""
        return [name for name in DECORATIONS if name in self.decorations]

    def with_decoration(self, name: str) -> "StyleAttributes":
        return replace(self, decorations=frozenset(self.decorations | {name}))

    @property
    def full_width(self) -> bool:
        return self.width == FULL_WIDTH

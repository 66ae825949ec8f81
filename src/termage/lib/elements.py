"""
Styled elements for termage

Elements are small fluent builders around the shortcode engine and the ANSI
codec: set style attributes with explicit setter methods, then render()
(or str()) to get an ANSI-decorated string.

    div("[b]Deploy[/b] finished").color('green').pl(2).render()
    alert("Stay RAD!").danger().w_full().render()
    heading("Release notes").size(2).render()

Effective style values follow: explicit setter call, else theme variable,
else the element's built-in default.
"""

from dataclasses import replace
from typing import Any, Dict, Optional

from ..models.style import FULL_WIDTH, StyleAttributes
from .ansi import codec
from .handlers import spacingBoth_compute, spacingSide_compute
from .layout import box_render, boxWidth_clamp, line_fill, padding_compute, width_truncate, width_visible
from .shortcodes import Shortcodes
from .terminal import Terminal
from .theme import Theme, theme_get


class Element:
    """
    Base element: a value plus a style, rendered inline or as a block

    Attributes:
        value: Raw text, may contain shortcodes
        theme: Theme for palette and element defaults
        shortcodes: Engine used to expand the value
        terminal: Width provider for box sizing
        style: Explicitly set style attributes
    """

    # Theme section holding this element's defaults, e.g. "alert"
    THEME_KEY = ''
    DEFAULTS: Dict[str, Any] = {}

    def __init__(
        self,
        value: str = '',
        theme: Optional[Theme] = None,
        shortcodes: Optional[Shortcodes] = None,
        terminal: Optional[Terminal] = None,
        style: Optional[StyleAttributes] = None,
    ):
        self.value = value
        if theme is None:
            theme = shortcodes.theme if shortcodes is not None else theme_get()
        self.theme = theme
        self.shortcodes = shortcodes if shortcodes is not None else Shortcodes(theme)
        self.terminal = terminal if terminal is not None else Terminal()
        self.style = style if style is not None else StyleAttributes()

    def variable_get(self, key: str) -> Any:
        """<THEME_KEY>.<key> from the theme, else the built-in default"""
        default: Any = self.DEFAULTS
        for part in key.split('.'):
            default = default.get(part) if isinstance(default, dict) else None
        if not self.THEME_KEY:
            return default
        return self.theme.config_get(f'{self.THEME_KEY}.{key}', default)

    def style_update(self, **changes: Any) -> "Element":
        """Replace style fields; returns self for chaining"""
        self.style = replace(self.style, **changes)
        return self

    def decoration_add(self, name: str) -> "Element":
        self.style = self.style.with_decoration(name)
        return self

    # Colors

    def color(self, name: str) -> "Element":
        return self.style_update(color=name)

    def bg(self, name: str) -> "Element":
        return self.style_update(bg=name)

    # Decorations

    def bold(self) -> "Element":
        return self.decoration_add('bold')

    def italic(self) -> "Element":
        return self.decoration_add('italic')

    def underline(self) -> "Element":
        return self.decoration_add('underline')

    def strikethrough(self) -> "Element":
        return self.decoration_add('strikethrough')

    def dim(self) -> "Element":
        return self.decoration_add('dim')

    def blink(self) -> "Element":
        return self.decoration_add('blink')

    def reverse(self) -> "Element":
        return self.decoration_add('reverse')

    def invisible(self) -> "Element":
        return self.decoration_add('invisible')

    # Spacing, scaled like the [pl=] [px=] shortcodes

    def pl(self, value: float) -> "Element":
        return self.style_update(padding_left=spacingSide_compute('padding', 'left', value, self.theme))

    def pr(self, value: float) -> "Element":
        return self.style_update(padding_right=spacingSide_compute('padding', 'right', value, self.theme))

    def px(self, value: float) -> "Element":
        """Padding split over both sides"""
        left, right = spacingBoth_compute('padding', value, self.theme)
        return self.style_update(padding_left=left, padding_right=right)

    def ml(self, value: float) -> "Element":
        return self.style_update(margin_left=spacingSide_compute('margin', 'left', value, self.theme))

    def mr(self, value: float) -> "Element":
        return self.style_update(margin_right=spacingSide_compute('margin', 'right', value, self.theme))

    def mx(self, value: float) -> "Element":
        """Margin split over both sides"""
        left, right = spacingBoth_compute('margin', value, self.theme)
        return self.style_update(margin_left=left, margin_right=right)

    # Box

    def w(self, value: int) -> "Element":
        """Box width in columns"""
        return self.style_update(width=value)

    def w_full(self) -> "Element":
        """Box as wide as the terminal"""
        return self.style_update(width=FULL_WIDTH)

    def text_align_left(self) -> "Element":
        return self.style_update(text_align='left')

    def text_align_right(self) -> "Element":
        return self.style_update(text_align='right')

    def d(self, display: str) -> "Element":
        """Display mode: 'inline' or 'block'"""
        return self.style_update(display=display)

    # Rendering

    def value_expand(self) -> str:
        return self.shortcodes.parse(self.value)

    def colors_resolve(self, style: StyleAttributes) -> StyleAttributes:
        """Run the style's colors through the theme palette"""
        return replace(
            style,
            color=self.theme.color_resolve(style.color),
            bg=self.theme.color_resolve(style.bg),
        )

    def render(self) -> str:
        """
        Render margins, colored padding and content.

        Layout: margin-left, [style on] padding-left content padding-right
        [style off], margin-right, then a newline for block display. With a
        width set, padding is recomputed so the colored run fills the box.
        """
        style = self.colors_resolve(self.style)
        value = self.value_expand()
        left = style.padding_left or 0
        right = style.padding_right or 0

        if style.width is not None:
            box = boxWidth_clamp(
                style.width if isinstance(style.width, int) else 0,
                self.terminal.width_get(),
                style.full_width,
            )
            align = style.text_align or 'left'
            padding_x = min(right if align == 'right' else left, box)
            value = width_truncate(value, box - padding_x)
            left, right = padding_compute(width_visible(value), box, align, padding_x)

        text = codec.style_apply(style, f"{' ' * left}{value}{' ' * right}")
        text = f"{' ' * (style.margin_left or 0)}{text}{' ' * (style.margin_right or 0)}"

        if style.display == 'block':
            text += '\n'
        return text

    def __str__(self) -> str:
        return self.render()


class El(Element):
    """Generic element"""
    pass


class Strikethrough(Element):
    """Inline struck-through text"""

    def render(self) -> str:
        self.strikethrough()
        if self.style.display is None:
            self.d('inline')
        return super().render()


class Alert(Element):
    """
    Colored alert box: a background-filled header line, the message line
    and a footer line.
    """

    THEME_KEY = 'alert'

    TYPES = ('info', 'warning', 'danger', 'success', 'primary', 'secondary')

    DEFAULTS: Dict[str, Any] = {
        'text-align': 'left',
        'width-full': False,
        'width': 50,
        'padding-x': 2,
        'type': {
            'info': {'bg': 'info', 'color': 'black'},
            'warning': {'bg': 'warning', 'color': 'black'},
            'danger': {'bg': 'danger', 'color': 'white'},
            'success': {'bg': 'success', 'color': 'black'},
            'primary': {'bg': 'primary', 'color': 'white'},
            'secondary': {'bg': 'secondary', 'color': 'white'},
        },
    }

    def __init__(self, value: str = '', **kwargs: Any):
        super().__init__(value, **kwargs)
        self.alert_type: Optional[str] = None

    def type_set(self, alert_type: str) -> "Alert":
        if alert_type not in self.TYPES:
            raise ValueError(f"Alert type must be one of {self.TYPES}, got {alert_type!r}")
        self.alert_type = alert_type
        return self

    def info(self) -> "Alert":
        return self.type_set('info')

    def warning(self) -> "Alert":
        return self.type_set('warning')

    def danger(self) -> "Alert":
        return self.type_set('danger')

    def success(self) -> "Alert":
        return self.type_set('success')

    def primary(self) -> "Alert":
        return self.type_set('primary')

    def secondary(self) -> "Alert":
        return self.type_set('secondary')

    def render(self) -> str:
        alert_type = self.alert_type or 'info'
        align = self.style.text_align or self.variable_get('text-align')
        full = self.style.full_width or bool(self.variable_get('width-full'))
        width = self.style.width if isinstance(self.style.width, int) else self.variable_get('width')
        padding_x = self.variable_get('padding-x')

        bg = self.theme.color_resolve(self.style.bg or self.variable_get(f'type.{alert_type}.bg'))
        color = self.theme.color_resolve(self.style.color or self.variable_get(f'type.{alert_type}.color'))

        box = boxWidth_clamp(int(width), self.terminal.width_get(), full)
        fill = StyleAttributes(bg=bg)
        body_style = StyleAttributes(bg=bg, color=color, decorations=self.style.decorations)

        header = line_fill(box, fill)
        body = box_render(self.value_expand(), body_style, box, align, int(padding_x))
        footer = line_fill(box, fill)

        return f"{header}\n{body}\n{footer}\n"


class Heading(Element):
    """
    Heading in five sizes:
    1 double-line box, 2 single-line box, 3-4 bold, 5 dim.
    """

    THEME_KEY = 'heading'
    DEFAULTS: Dict[str, Any] = {'size': 1}

    BOXES = {
        1: ('╔', '═', '╗', '║', '╚', '╝'),
        2: ('┌', '─', '┐', '│', '└', '┘'),
    }

    def __init__(self, value: str = '', **kwargs: Any):
        super().__init__(value, **kwargs)
        self.heading_size: Optional[int] = None

    def size(self, value: int) -> "Heading":
        """Heading size, clamped to 1..5"""
        self.heading_size = value
        return self

    def render(self) -> str:
        size = self.heading_size
        if size is None:
            size = int(self.variable_get('size'))
        size = min(5, max(1, size))
        value = self.value_expand()

        if size in self.BOXES:
            top_left, horizontal, top_right, vertical, bottom_left, bottom_right = self.BOXES[size]
            inner = max(0, self.terminal.width_get() - 2)
            value = width_truncate(value, inner)
            fill = max(0, inner - width_visible(value))
            heading = (
                f"{top_left}{horizontal * inner}{top_right}\n"
                f"{vertical}{value}{' ' * fill}{vertical}\n"
                f"{bottom_left}{horizontal * inner}{bottom_right}\n"
            )
            return codec.decoration_wrap('bold', heading) + '\n'

        if size == 5:
            return codec.decoration_wrap('dim', value) + '\n\n'
        return codec.decoration_wrap('bold', value) + '\n\n'


class Rule(Element):
    """
    Horizontal line across the terminal, optionally with a label.

    The label sits two rule characters in from the aligned side:

        ── Changelog ──────────────
    """

    THEME_KEY = 'rule'

    DEFAULTS: Dict[str, Any] = {
        'char': '─',
        'text-align': 'left',
        'color': None,
    }

    def render(self) -> str:
        margin_left = self.style.margin_left or 0
        margin_right = self.style.margin_right or 0
        width = max(0, self.terminal.width_get() - margin_left - margin_right)
        char = str(self.variable_get('char') or self.DEFAULTS['char'])[0]
        align = self.style.text_align or self.variable_get('text-align')

        label = self.value_expand()
        if label:
            label = width_truncate(f' {label} ', width)
        fill = max(0, width - width_visible(label))
        lead = min(2, fill) if label else 0

        if align == 'right':
            line = f"{char * (fill - lead)}{label}{char * lead}"
        else:
            line = f"{char * lead}{label}{char * (fill - lead)}"

        style = self.colors_resolve(replace(self.style, color=self.style.color or self.variable_get('color')))
        return f"{' ' * margin_left}{codec.style_apply(style, line)}{' ' * margin_right}\n"


class Link(Element):
    """
    Clickable OSC-8 hyperlink

    The expanded value is the link text. Without href() the target is that
    text with escapes removed.
    """

    def __init__(self, value: str = '', **kwargs: Any):
        super().__init__(value, **kwargs)
        self.url: Optional[str] = None

    def href(self, url: str) -> "Link":
        self.url = url
        return self

    def value_expand(self) -> str:
        text = super().value_expand()
        target = self.url or codec.escapes_strip(text).strip()
        if not target:
            return text
        return codec.link_wrap(target, text)


def el(value: str = '', **kwargs: Any) -> El:
    return El(value, **kwargs)


def div(value: str = '', **kwargs: Any) -> El:
    """Block element"""
    element = El(value, **kwargs)
    element.d('block')
    return element


def span(value: str = '', **kwargs: Any) -> El:
    """Inline element"""
    element = El(value, **kwargs)
    element.d('inline')
    return element


def alert(value: str = '', **kwargs: Any) -> Alert:
    return Alert(value, **kwargs)


def heading(value: str = '', **kwargs: Any) -> Heading:
    return Heading(value, **kwargs)


def strikethrough(value: str = '', **kwargs: Any) -> Strikethrough:
    return Strikethrough(value, **kwargs)


def bold(value: str = '', **kwargs: Any) -> El:
    return span(value, **kwargs).bold()


def italic(value: str = '', **kwargs: Any) -> El:
    return span(value, **kwargs).italic()


def underline(value: str = '', **kwargs: Any) -> El:
    return span(value, **kwargs).underline()


def dim(value: str = '', **kwargs: Any) -> El:
    return span(value, **kwargs).dim()


def rule(value: str = '', **kwargs: Any) -> Rule:
    return Rule(value, **kwargs)


def link(value: str = '', **kwargs: Any) -> Link:
    return Link(value, **kwargs)

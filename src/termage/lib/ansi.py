"""
ANSI SGR codec

Maps style attributes to escape sequences and back.

Every attribute has its own "off" code, so closing one style never clobbers
its siblings (no blanket reset code 0 is ever emitted):

    bold           1 / 22        blink          5 / 25
    dim            2 / 22        reverse        7 / 27
    italic         3 / 23        invisible      8 / 28
    underline      4 / 24        strikethrough  9 / 29
    foreground  30-37, 90-97, 38;5;n, 38;2;r;g;b / 39
    background  40-47, 100-107, 48;5;n, 48;2;r;g;b / 49

Prefixes are emitted background, foreground, then decorations; suffixes in
exactly the reverse order, so overlapping runs close innermost-first.

Example:
    >>> codec = AnsiCodec()
    >>> codec.style_apply(StyleAttributes(color='red', decorations=frozenset({'bold'})), 'hi')
    '\\x1b[31m\\x1b[1mhi\\x1b[22m\\x1b[39m'
"""

import re
from typing import Dict, Iterator, List, Optional, Tuple

from ..models.style import StyleAttributes

ESC = '\x1b'
OSC_TERMINATOR = ESC + '\\'

FOREGROUND_OFF = 39
BACKGROUND_OFF = 49
BACKGROUND_OFFSET = 10

DECORATION_CODES: Dict[str, Tuple[int, int]] = {
    'bold': (1, 22),
    'dim': (2, 22),
    'italic': (3, 23),
    'underline': (4, 24),
    'blink': (5, 25),
    'reverse': (7, 27),
    'invisible': (8, 28),
    'strikethrough': (9, 29),
}

COLOR_CODES: Dict[str, int] = {
    'black': 30,
    'red': 31,
    'green': 32,
    'yellow': 33,
    'blue': 34,
    'magenta': 35,
    'cyan': 36,
    'white': 37,
    'default': 39,
    'gray': 90,
    'grey': 90,
    'bright-black': 90,
    'bright-red': 91,
    'bright-green': 92,
    'bright-yellow': 93,
    'bright-blue': 94,
    'bright-magenta': 95,
    'bright-cyan': 96,
    'bright-white': 97,
}

_HEX_RE = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# CSI (ESC [ ... final byte), OSC (ESC ] ... BEL|ST) and two-byte escapes.
_STRIP_RE = re.compile(
    r'\x1b\[[0-?]*[ -/]*[@-~]'
    r'|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)'
    r'|\x1b[@-Z\\-_]'
)


def sgr(code: object) -> str:
    """Build one SGR sequence, e.g. sgr(1) -> ESC[1m"""
    return f'{ESC}[{code}m'


class AnsiCodec:
    """
    Stateless translator between StyleAttributes and escape sequences.

    Colors given to the codec are already theme-resolved; the codec only
    knows terminal color names, 256-palette indices and hex values.
    """

    def color_resolve(self, value: Optional[str], background: bool = False) -> Optional[str]:
        """
        Translate a color value to its SGR parameter string.

        Args:
            value: Color name ("red", "bright-blue"), palette index ("208")
                   or hex ("#ff8800", "#f80")
            background: Produce the background variant

        Returns:
            SGR parameters (e.g., "31", "48;5;208", "38;2;255;136;0"), or
            None if the value is not a color this codec understands
        """
        if value is None:
            return None
        key = str(value).strip().lower().replace('_', '-')
        if not key:
            return None

        if key in COLOR_CODES:
            code = COLOR_CODES[key]
            return str(code + BACKGROUND_OFFSET if background else code)

        lead = '48' if background else '38'

        if key.isdigit():
            index = int(key)
            if 0 <= index <= 255:
                return f'{lead};5;{index}'
            return None

        if _HEX_RE.match(key):
            digits = key[1:]
            if len(digits) == 3:
                digits = ''.join(ch * 2 for ch in digits)
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
            return f'{lead};2;{r};{g};{b}'

        return None

    def codes_build(self, style: StyleAttributes) -> List[Tuple[str, str]]:
        """
        Ordered (on, off) SGR parameter pairs for a style.

        Order: background, foreground, decorations in DECORATIONS order.
        Unresolvable colors are skipped.
        """
        pairs: List[Tuple[str, str]] = []

        bg = self.color_resolve(style.bg, background=True)
        if bg is not None:
            pairs.append((bg, str(BACKGROUND_OFF)))

        fg = self.color_resolve(style.color)
        if fg is not None:
            pairs.append((fg, str(FOREGROUND_OFF)))

        for name in style.decorations_ordered():
            on, off = DECORATION_CODES[name]
            pairs.append((str(on), str(off)))

        return pairs

    def prefix_build(self, style: StyleAttributes) -> str:
        """Escape sequences switching the style on"""
        return ''.join(sgr(on) for on, _ in self.codes_build(style))

    def suffix_build(self, style: StyleAttributes) -> str:
        """Escape sequences switching the style off, in reverse order"""
        return ''.join(sgr(off) for _, off in reversed(self.codes_build(style)))

    def style_apply(self, style: StyleAttributes, text: str) -> str:
        """Wrap text in the style's prefix and suffix"""
        return f'{self.prefix_build(style)}{text}{self.suffix_build(style)}'

    def decoration_wrap(self, name: str, text: str) -> str:
        """Wrap text in a single decoration's on/off pair"""
        on, off = DECORATION_CODES[name]
        return f'{sgr(on)}{text}{sgr(off)}'

    def link_wrap(self, href: str, text: str) -> str:
        """Wrap text in an OSC-8 hyperlink"""
        return f'{ESC}]8;;{href}{OSC_TERMINATOR}{text}{ESC}]8;;{OSC_TERMINATOR}'

    def escapes_strip(self, text: str) -> str:
        """
        Remove escape sequences from text.

        Covers everything this codec emits plus other CSI, OSC and two-byte
        escapes, so text styled elsewhere can still be measured.
        """
        return _STRIP_RE.sub('', text)

    def escapes_split(self, text: str) -> Iterator[Tuple[bool, str]]:
        """
        Split text into escape sequences and visible runs, in order.

        Yields:
            (is_escape, chunk) pairs; empty visible runs are skipped
        """
        pos = 0
        for match in _STRIP_RE.finditer(text):
            if match.start() > pos:
                yield False, text[pos:match.start()]
            yield True, match.group(0)
            pos = match.end()
        if pos < len(text):
            yield False, text[pos:]


# Shared instance; the codec holds no state
codec = AnsiCodec()

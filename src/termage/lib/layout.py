"""
Width measurement and box layout

Layout math works on visible width: the character count left after escape
sequences are stripped. Text too wide for its box is cut with
width_truncate, which keeps every escape sequence so styles still close.
All elements size boxes with the same functions so their arithmetic stays
consistent.

Example:
    >>> padding_compute(content_width=4, box_width=10, align='left', padding_x=2)
    (2, 4)
    >>> padding_compute(content_width=4, box_width=10, align='right', padding_x=2)
    (4, 2)
"""

from typing import Optional, Tuple

from ..models.style import StyleAttributes
from .ansi import codec


def width_visible(text: str) -> int:
    """Character count of text once escape sequences are removed"""
    return len(codec.escapes_strip(text))


def width_truncate(text: str, width: int) -> str:
    """
    Cut text to at most width visible characters.

    Escape sequences are all kept, including those after the cut, so every
    style or link opened before the cut is still closed.

    Example:
        >>> width_truncate('\\x1b[1mbold text\\x1b[22m', 4)
        '\\x1b[1mbold\\x1b[22m'
    """
    remaining = max(0, width)
    if width_visible(text) <= remaining:
        return text

    parts = []
    for is_escape, chunk in codec.escapes_split(text):
        if is_escape:
            parts.append(chunk)
        elif remaining > 0:
            kept = chunk[:remaining]
            parts.append(kept)
            remaining -= len(kept)
    return ''.join(parts)


def padding_compute(content_width: int, box_width: int, align: str, padding_x: int) -> Tuple[int, int]:
    """
    Split a box's free space into left and right padding.

    Args:
        content_width: Visible width of the content
        box_width: Total box width
        align: "left" or "right"
        padding_x: Fixed padding on the aligned side

    Returns:
        (left, right); the computed side is clamped to >= 0
    """
    padding_x = max(0, padding_x)
    free = max(0, box_width - padding_x - content_width)
    if align == 'right':
        return free, padding_x
    return padding_x, free


def boxWidth_clamp(width: int, terminal_width: int, full: bool = False) -> int:
    """
    Fit a box width to the terminal.

    Full-width boxes take exactly the terminal width; others are capped
    at it.
    """
    if full:
        return terminal_width
    return max(0, min(width, terminal_width))


def box_render(
    content: str,
    style: StyleAttributes,
    box_width: int,
    align: str = 'left',
    padding_x: int = 0,
) -> str:
    """
    Pad content to a box width and wrap it in the style's colors.

    Content wider than the box (less padding_x) is truncated. Spaces are
    literal; background and foreground sequences wrap the whole padded run
    so the box is filled with the background.
    """
    padding_x = min(max(0, padding_x), max(0, box_width))
    content = width_truncate(content, box_width - padding_x)
    left, right = padding_compute(width_visible(content), box_width, align, padding_x)
    return codec.style_apply(style, f"{' ' * left}{content}{' ' * right}")


def line_fill(box_width: int, style: Optional[StyleAttributes] = None) -> str:
    """A run of box_width spaces in the given style (e.g. alert header)"""
    return codec.style_apply(style or StyleAttributes(), ' ' * max(0, box_width))

"""
Termage facade

One object owning the output stream, the theme, the shortcode engine and
the terminal, handing them to every element it creates.

Example:
    >>> t = Termage(output=io.StringIO(), theme=Theme(variables={}))
    >>> t.write(t.el("[b]ok[/b]").color('green'))
"""

import sys
from typing import Any, Optional, TextIO, Union

from .elements import Alert, El, Element, Heading, Link, Rule, Strikethrough
from .shortcodes import Shortcodes
from .terminal import Terminal
from .theme import Theme, theme_get


class Termage:
    """
    Element factory and writer

    Attributes:
        output: Stream rendered text is written to (default: sys.stdout)
        theme: Theme shared by all elements created here
        shortcodes: Shortcode engine bound to theme
        terminal: Width provider
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        theme: Optional[Theme] = None,
        terminal: Optional[Terminal] = None,
    ):
        self.output = output if output is not None else sys.stdout
        self.theme = theme if theme is not None else theme_get()
        self.terminal = terminal if terminal is not None else Terminal()
        self.shortcodes = Shortcodes(self.theme)

    def output_set(self, output: TextIO) -> "Termage":
        self.output = output
        return self

    def theme_set(self, theme: Theme) -> "Termage":
        """Use a new theme for elements created from now on"""
        self.theme = theme
        self.shortcodes.theme_set(theme)
        return self

    def _kwargs(self) -> dict[str, Any]:
        return {'theme': self.theme, 'shortcodes': self.shortcodes, 'terminal': self.terminal}

    def el(self, value: str = '') -> El:
        return El(value, **self._kwargs())

    def div(self, value: str = '') -> El:
        element = El(value, **self._kwargs())
        element.d('block')
        return element

    def span(self, value: str = '') -> El:
        element = El(value, **self._kwargs())
        element.d('inline')
        return element

    def alert(self, value: str = '') -> Alert:
        return Alert(value, **self._kwargs())

    def heading(self, value: str = '') -> Heading:
        return Heading(value, **self._kwargs())

    def strikethrough(self, value: str = '') -> Strikethrough:
        return Strikethrough(value, **self._kwargs())

    def rule(self, value: str = '') -> Rule:
        return Rule(value, **self._kwargs())

    def link(self, value: str = '', href: Optional[str] = None) -> Link:
        element = Link(value, **self._kwargs())
        if href:
            element.href(href)
        return element

    def render(self, value: Union[Element, str]) -> str:
        """Render an element, or expand shortcodes in plain text"""
        if isinstance(value, Element):
            return value.render()
        return self.shortcodes.parse(value)

    def write(self, value: Union[Element, str]) -> None:
        """Render and write to the output stream"""
        self.output.write(self.render(value))
        self.output.flush()

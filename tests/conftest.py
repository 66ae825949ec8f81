"""
Shared fixtures

Themes are built from in-memory variables so tests never depend on the
packaged theme files unless they say so.
"""

import pytest

from termage.lib.handlers import HandlerRegistry
from termage.lib.processor import Processor
from termage.lib.terminal import Terminal
from termage.lib.theme import Theme


THEME_VARIABLES = {
    'colors': {
        'red': 'red',
        'green': 'green',
        'blue': 'blue',
        'black': 'black',
        'white': 'white',
        'info': 'blue',
        'danger': 'red',
        'success': 'green',
    },
    'padding': {'global': 1, 'left': 1, 'right': 1},
    'margin': {'global': 1, 'left': 1, 'right': 1},
}


@pytest.fixture
def theme() -> Theme:
    return Theme(variables=THEME_VARIABLES)


@pytest.fixture
def registry() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def processor(registry: HandlerRegistry, theme: Theme) -> Processor:
    return Processor(registry, theme)


@pytest.fixture
def terminal() -> Terminal:
    return Terminal(width=40)

"""
Centralized logging using Loguru with context-aware verbosity.

The rendering engine never fails on bad markup; instead it degrades and
reports what it did through LOG(). Messages only appear when a ProgramState
with a high enough verbosity has been connected to the current context, so
library callers that never connect a state get silent rendering.

Usage:
    from termage.lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Rendered 3 elements", level=1)
    LOG("Unmatched closing tag [/b] kept as text", level=2)
    LOG("Token at position 42: [color=red]", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Any object with a ``verbosity`` attribute
    """
    _program_state.set(state)


def state_disconnectFromLogger() -> None:
    """Detach whatever state is connected, silencing LOG() again."""
    _program_state.set(None)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v): degraded markup, fallbacks
        3 = Debug (-vv or higher): tokenizer and handler traces
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        # opt(depth=1) reports the caller, not LOG itself
        logger.opt(depth=1).debug(message, **kwargs)

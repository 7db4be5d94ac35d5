"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of whichever ProgramState is connected to the
current context, so library code (the tag parser, the console hooks) can log
without having state passed into it.

Usage:
    from tagtint.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)

    LOG("Shown if verbosity >= 1", level=1)
    LOG("Token trace, shown if verbosity >= 3", level=3)

With no state connected, messages are dropped unless TAGTINT_DEBUG_MODE is
set, in which case every level is emitted.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

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
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """
    Verbosity of the connected state.

    Returns:
        The connected state's verbosity, 3 in debug mode without a state,
        otherwise 0
    """
    state = _program_state.get()
    if state is not None and hasattr(state, 'verbosity'):
        return state.verbosity
    return 3 if appsettings.debug_mode else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Read 42 characters", level=2)
        LOG("Stack after '</bg>': ['red', 'bold']", level=3)
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)

"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
ProgramState bound to the current context, without passing state around.
Library calls (parse, render) made outside a connected context log nothing.

Usage:
    from clformat.lib.log import LOG, logger_configure, state_connectToLogger

    # Once, in an application entry point:
    logger_configure()

    # At start of a pipeline stage:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Rendered 3 jobs", level=1)
    LOG("Job 'totals' -> out/totals.txt", level=2)
    LOG("Parsed 7 top-level directives", level=3)
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
    "<cyan>{module: <10}</cyan>:<cyan>{function: <18}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def logger_configure(sink: Optional[Any] = None) -> None:
    """
    Replace loguru's handlers with the clformat console format.

    Called by the CLI only; importing clformat as a library leaves the
    host application's handlers alone.
    """
    if sink is None:
        sink = sys.stderr
    logger.remove()
    logger.add(sink, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a verbosity attribute (normally a ProgramState)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru arguments

    Verbosity levels:
        1 = Stage progress (default)
        2 = Per-job detail (-v)
        3 = Parser and engine traces (-vv)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)

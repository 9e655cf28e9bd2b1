"""
Verbosity-gated logging for linecheck, built on Loguru.

The CLI connects its ProgramState once; from then on the parser, compiler,
matcher and CLI stages call LOG() with the verbosity a message needs and the
state decides whether it is shown. Library use (verify(), the tests) connects
no state, so nothing is logged there.

Verbosity levels (the -v count):
    1  progress of the pipeline stages           (Loguru INFO)
    2  resolved paths, directive counts, rejects  (Loguru DEBUG)
    3  per-directive match trace, ignored lines   (Loguru TRACE)

Usage:
    from linecheck.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Compiled 12 directives", level=2)
    LOG("CHECK-NEXT (line 4) matched target line 21", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with linecheck-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="TRACE")

# -v count to Loguru level name
LEVEL_NAMES = {1: "INFO", 2: "DEBUG", 3: "TRACE"}


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=progress, 2=detail, 3=match trace)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Parsed 12 directives", level=2)
        LOG("CHECK-NEXT (line 4) matched target line 21", level=3)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.log(LEVEL_NAMES.get(level, "TRACE"), message, **kwargs)

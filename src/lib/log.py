"""
Audit logging

Scanner, walker and manifest code call LOG() without a ProgramState in
hand. The state connected by the CLI decides what is shown; with no state
connected, LOG() is silent, which keeps library use and tests quiet.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:"
    "<cyan>{function: <22}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """Use the verbosity of `state` for LOG() in this context"""
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log an audit message at a verbosity level

    Levels: 1 = run summary and failed pages, 2 = per-page progress and
    skipped includes (-v), 3 = per-file scan details (-vv).
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)

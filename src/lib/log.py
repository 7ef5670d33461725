"""
Console output for inkpage commands.

Every message goes through loguru to stderr. Progress lines (asset names,
"Writing output file...") are gated by the -v count of the running command;
errors are not.

The command's ProgramState is stored in a context variable rather than
passed around, so the reader, builder and watcher can log without knowing
about the CLI. asyncio tasks and to_thread() workers copy the context when
they start, so a state connected before the build is visible inside it.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

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
    """Make `state.verbosity` the threshold for LOG() in this context."""
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state; 0 (silent) when none is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit a progress message when the command runs at `level` or above.

    1 is plain `inkpage build`, 2 adds per-step detail (-v), 3 adds
    character counts and dropped watch events (-vv). With no state
    connected, as in library use, nothing is printed.
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def LOG_error(message: str, **kwargs: Any) -> None:
    """Report a failure; shown at every verbosity"""
    logger.opt(depth=1).error(message, **kwargs)

"""Minimal stderr and termination utilities for core modules.

Core modules (error_functions, get_num) import from here so they stay
decoupled from click. The CLI layer (cli.py) does its own pretty printing
on top of them.
"""

import os
import sys
from typing import NoReturn

from .models import Termination

EXIT_FAILURE = 1

# Set to any non-empty value to make every terminating call dump core.
DUMPCORE_ENV = "EF_DUMPCORE"


def warn(message: str) -> None:
    """Emit a warning to stderr."""
    print(f"Warning: {message}", file=sys.stderr)


def should_dump_core() -> bool:
    """Return True if ``EF_DUMPCORE`` is set to a non-empty value.

    The environment is consulted on every call; nothing is cached.
    """
    return bool(os.environ.get(DUMPCORE_ENV))


def terminate(how: Termination) -> NoReturn:
    """End the process with a failure status.

    ``Termination.GRACEFUL`` goes through :func:`sys.exit`, so ``atexit``
    handlers run and buffered streams are flushed. ``Termination.IMMEDIATE``
    uses :func:`os._exit` and skips both. Either way, when
    :func:`should_dump_core` is true the process aborts itself with SIGABRT
    instead.
    """
    if should_dump_core():
        os.abort()
    if how is Termination.GRACEFUL:
        sys.exit(EXIT_FAILURE)
    os._exit(EXIT_FAILURE)

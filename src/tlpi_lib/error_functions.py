"""Error reporting for command-line tools.

Every entry point renders a printf-style template with ``%``-formatting and
writes one diagnostic to stderr::

    ERROR [ENOENT No such file or directory] could not open config
    ERROR: bad record count

The ``[...]`` annotation describes an OS error number, taken either from the
ambient errno (see :func:`get_errno`) or from the caller. Apart from
:func:`err_msg`, every function ends the process through
:func:`~tlpi_lib.cli_utils.terminate`, which honours ``EF_DUMPCORE``.

Stream writes are not locked; callers sharing stderr between threads must
serialise their calls.
"""

import ctypes
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import NoReturn

from .cli_utils import terminate
from .ename import error_annotation
from .models import DiagnosticMessage, Termination, bounded


# ---------------------------------------------------------------------------
# Ambient errno
# ---------------------------------------------------------------------------

def get_errno() -> int:
    """Return the calling thread's ctypes copy of C ``errno``."""
    return ctypes.get_errno()


def set_errno(value: int) -> int:
    """Set the calling thread's ctypes copy of C ``errno``; returns the old value."""
    return ctypes.set_errno(value)


@contextmanager
def preserved_errno() -> Iterator[int]:
    """Capture errno on entry and put it back on every way out."""
    saved = get_errno()
    try:
        yield saved
    finally:
        set_errno(saved)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _render(fmt: str, args: tuple) -> str:
    # Same convention as logging.LogRecord.getMessage.
    if not args:
        return fmt
    if len(args) == 1 and isinstance(args[0], Mapping):
        return fmt % args[0]
    return fmt % args


def output_error(
    use_err: bool,
    err: int,
    flush_stdout: bool,
    fmt: str,
    args: tuple,
) -> None:
    """Compose a diagnostic and write it to stderr.

    Parameters
    ----------
    use_err:
        Annotate with ``err``; otherwise the annotation is a bare ``:``.
    err:
        OS error number to describe.
    flush_stdout:
        Flush stdout first so earlier regular output appears before the
        diagnostic.
    fmt, args:
        Template and arguments for the user message. Text beyond the buffer
        size is dropped without notice.
    """
    text = bounded(_render(fmt, args))
    annotation = bounded(error_annotation(err)) if use_err else ":"
    message = DiagnosticMessage(annotation=annotation, text=text)

    if flush_stdout:
        sys.stdout.flush()
    sys.stderr.write(message.render())
    sys.stderr.flush()


def _output_usage(prefix: str, fmt: str, args: tuple) -> None:
    sys.stdout.flush()
    sys.stderr.write(prefix + _render(fmt, args))
    sys.stderr.flush()


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def err_msg(fmt: str, *args) -> None:
    """Print a diagnostic for the current errno and return.

    errno is left exactly as the caller had it.
    """
    with preserved_errno() as err:
        output_error(True, err, True, fmt, args)


def err_exit(fmt: str, *args) -> NoReturn:
    """Print a diagnostic for the current errno and exit, running cleanup."""
    output_error(True, get_errno(), True, fmt, args)
    terminate(Termination.GRACEFUL)


def err_exit_immediate(fmt: str, *args) -> NoReturn:
    """Print a diagnostic for the current errno and exit without cleanup.

    stdout is not flushed and ``atexit`` handlers do not run. Meant for
    child processes after ``fork()`` that must not flush the parent's
    buffers a second time.
    """
    output_error(True, get_errno(), False, fmt, args)
    terminate(Termination.IMMEDIATE)


def err_exit_en(errnum: int, fmt: str, *args) -> NoReturn:
    """Like :func:`err_exit`, but describe ``errnum`` instead of errno.

    Handy for APIs that return an error number, or with ``exc.errno`` from
    a caught :class:`OSError`.
    """
    output_error(True, errnum, True, fmt, args)
    terminate(Termination.GRACEFUL)


def fatal(fmt: str, *args) -> NoReturn:
    """Print a diagnostic with no errno annotation and exit."""
    output_error(False, 0, True, fmt, args)
    terminate(Termination.GRACEFUL)


def usage_err(fmt: str, *args) -> NoReturn:
    """Print ``Usage: `` followed by the rendered template and exit.

    No newline is added; include one in ``fmt``.
    """
    _output_usage("Usage: ", fmt, args)
    terminate(Termination.GRACEFUL)


def cmd_line_err(fmt: str, *args) -> NoReturn:
    """Print ``Command-line usage error: `` followed by the template and exit."""
    _output_usage("Command-line usage error: ", fmt, args)
    terminate(Termination.GRACEFUL)

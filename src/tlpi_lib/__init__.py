"""tlpi-lib: error reporting and numeric argument parsing for command-line tools."""

from .error_functions import (
    cmd_line_err,
    err_exit,
    err_exit_en,
    err_exit_immediate,
    err_msg,
    fatal,
    usage_err,
)
from .get_num import get_int, get_long
from .models import NumFlags, Termination

__version__ = "0.1.0"
__all__ = [
    "NumFlags",
    "Termination",
    "cmd_line_err",
    "err_exit",
    "err_exit_en",
    "err_exit_immediate",
    "err_msg",
    "fatal",
    "get_int",
    "get_long",
    "usage_err",
]

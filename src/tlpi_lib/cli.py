"""Command-line interface for tlpi-lib."""

import os

import click

from . import error_functions
from .cli_utils import warn
from .ename import UNKNOWN_NAME, error_name
from .get_num import get_int, get_long
from .models import NumFlags

_BASE_FLAGS = {
    "10": NumFlags.NONE,
    "8": NumFlags.BASE_8,
    "16": NumFlags.BASE_16,
    "any": NumFlags.ANY_BASE,
}

_C_INT = click.IntRange(-(2 ** 31), 2 ** 31 - 1)
_REPORT_KINDS = ("msg", "exit", "exit-now", "exit-en", "fatal", "usage", "cmdline")


# ---------------------------------------------------------------------------
# Pretty printing helpers
# ---------------------------------------------------------------------------

def _item(label: str, value: str) -> None:
    click.echo(f"{click.style(label, bold=True)} {value}")


# ---------------------------------------------------------------------------
# Flag resolution
# ---------------------------------------------------------------------------

def _resolve_flags(base: str, nonneg: bool, gt0: bool) -> NumFlags:
    """Combine CLI options into a :class:`NumFlags` value."""
    flags = _BASE_FLAGS[base]
    if nonneg:
        flags |= NumFlags.NONNEG
    if gt0:
        flags |= NumFlags.GT_0
    return flags


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="tlpi-lib")
def main() -> None:
    """Error reporting and numeric argument helpers for shell scripts.

    Diagnostics go to stderr in the same format the library uses:

    \b
        ERROR [ENOENT No such file or directory] message
        ERROR: message

    Set EF_DUMPCORE to a non-empty value to make fatal reports abort with a
    core dump instead of exiting.
    """


@main.command()
@click.argument("arg", metavar="ARG")
@click.option("--name", default=None, help="Label for ARG in error messages.")
@click.option("--nonneg", is_flag=True, default=False, help="Reject negative values.")
@click.option("--gt0", is_flag=True, default=False, help="Require a value greater than zero.")
@click.option(
    "--base", type=click.Choice(list(_BASE_FLAGS)), default="10", show_default=True,
    help="Number base; 'any' accepts 0x (hex) and 0 (octal) prefixes.",
)
@click.option("--int", "narrow", is_flag=True, default=False, help="Require a 32-bit int.")
def getnum(arg: str, name: str | None, nonneg: bool, gt0: bool, base: str, narrow: bool) -> None:
    """Validate ARG as an integer and print it in decimal.

    \b
    Examples
    --------
        tlpi-lib getnum 42 --gt0
        tlpi-lib getnum 0x1f --base any --name mask
    """
    flags = _resolve_flags(base, nonneg, gt0)
    parse = get_int if narrow else get_long
    click.echo(str(parse(arg, flags, name)))


@main.command()
@click.argument("code", type=_C_INT)
def errname(code: int) -> None:
    """Print the symbolic name and description of OS error CODE."""
    name = error_name(code)
    if name in ("", UNKNOWN_NAME):
        warn(f"no symbolic name for error number {code}")
    _item(name or UNKNOWN_NAME, os.strerror(code))


@main.command()
@click.argument("kind", type=click.Choice(_REPORT_KINDS))
@click.argument("message")
@click.option(
    "--errno", "errnum", type=_C_INT, default=None,
    help="Error number to describe (default: the current errno; required for exit-en).",
)
def report(kind: str, message: str, errnum: int | None) -> None:
    """Write MESSAGE to stderr as a KIND diagnostic.

    Every KIND except 'msg' exits with status 1.
    """
    if kind == "exit-en":
        if errnum is None:
            raise click.UsageError("'exit-en' requires --errno.")
    elif errnum is not None:
        error_functions.set_errno(errnum)

    # MESSAGE is literal text, never a template
    if kind == "msg":
        error_functions.err_msg("%s", message)
    elif kind == "exit":
        error_functions.err_exit("%s", message)
    elif kind == "exit-now":
        error_functions.err_exit_immediate("%s", message)
    elif kind == "exit-en":
        error_functions.err_exit_en(errnum, "%s", message)
    elif kind == "fatal":
        error_functions.fatal("%s", message)
    elif kind == "usage":
        error_functions.usage_err("%s\n", message)
    else:
        error_functions.cmd_line_err("%s\n", message)


if __name__ == "__main__":
    main()

"""Fail-fast parsing of numeric command-line arguments.

``get_long`` and ``get_int`` either return the parsed value or print a
diagnostic to stderr and exit with a failure status. There is no
recoverable error path: a bad argument ends the tool.
"""

import sys
from typing import NoReturn

from .cli_utils import EXIT_FAILURE
from .models import NumFlags

GN_NONNEG = NumFlags.NONNEG
GN_GT_0 = NumFlags.GT_0
GN_ANY_BASE = NumFlags.ANY_BASE
GN_BASE_8 = NumFlags.BASE_8
GN_BASE_16 = NumFlags.BASE_16

LONG_MIN, LONG_MAX = -(2 ** 63), 2 ** 63 - 1
INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1

# isspace() in the C locale
_C_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _digit_count(value: int, base: int) -> int:
    count = 0
    while value:
        value //= base
        count += 1
    return count


# Digits needed for the magnitude of LONG_MIN, the widest value in range
_LONG_DIGITS = {base: _digit_count(2 ** 63, base) for base in (8, 10, 16)}


# ---------------------------------------------------------------------------
# strtol
# ---------------------------------------------------------------------------

def _digit_run(text: str, pos: int, base: int) -> int:
    """Return the index just past the digits valid in ``base`` starting at ``pos``."""
    valid = _DIGITS[:base]
    while pos < len(text) and text[pos].lower() in valid:
        pos += 1
    return pos


def _strtol(text: str, base: int) -> tuple[int, int, bool]:
    """Convert the longest numeric prefix of ``text`` like C ``strtol``.

    Returns ``(value, end, overflow)`` where ``end`` is the index of the first
    unconsumed character. When no digits are found ``end`` is 0, as
    ``strtol`` leaves ``endptr`` at the start of the string. On overflow the
    value is clamped to ``LONG_MIN``/``LONG_MAX``.
    """
    pos = 0
    while pos < len(text) and text[pos] in _C_WHITESPACE:
        pos += 1

    negative = False
    if pos < len(text) and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1

    # "0x" only counts as a prefix when a hex digit follows it
    has_hex_prefix = (
        text[pos:pos + 2].lower() == "0x"
        and _digit_run(text, pos + 2, 16) > pos + 2
    )
    if base in (0, 16) and has_hex_prefix:
        pos += 2
        base = 16
    elif base == 0:
        base = 8 if text[pos:pos + 1] == "0" else 10

    end = _digit_run(text, pos, base)
    if end == pos:
        return 0, 0, False

    # Decide overflow by digit count so int() never sees an oversized string
    digits = text[pos:end].lstrip("0") or "0"
    if len(digits) > _LONG_DIGITS[base]:
        return (LONG_MIN if negative else LONG_MAX), end, True

    value = int(digits, base)
    if negative:
        value = -value

    if value > LONG_MAX:
        return LONG_MAX, end, True
    if value < LONG_MIN:
        return LONG_MIN, end, True
    return value, end, False


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _gn_fail(fname: str, msg: str, arg: str | None, name: str | None) -> NoReturn:
    """Print a structured validator error and exit."""
    parts = [f"{fname} error"]
    if name is not None:
        parts.append(f" (in {name})")
    parts.append(f": {msg}\n")
    if arg:
        parts.append(f" offending text: {arg}\n")

    sys.stderr.write("".join(parts))
    sys.stderr.flush()
    sys.exit(EXIT_FAILURE)


def _get_num(fname: str, arg: str | None, flags: int, name: str | None) -> int:
    if arg is None or arg == "":
        _gn_fail(fname, "null or empty string", arg, name)

    flags = NumFlags(flags)
    value, end, overflow = _strtol(arg, flags.base)

    if overflow:
        _gn_fail(fname, "conversion failed", arg, name)

    if end != len(arg):
        _gn_fail(fname, "nonnumeric characters", arg, name)

    if flags & NumFlags.NONNEG and value < 0:
        _gn_fail(fname, "negative value not allowed", arg, name)

    if flags & NumFlags.GT_0 and value <= 0:
        _gn_fail(fname, "value must be > 0", arg, name)

    return value


def get_long(arg: str | None, flags: int = 0, name: str | None = None) -> int:
    """Parse ``arg`` as a 64-bit signed integer.

    Parameters
    ----------
    arg:
        Text to convert, typically an element of ``sys.argv``.
    flags:
        :class:`~tlpi_lib.models.NumFlags` bits. With no base flag the text
        is decimal.
    name:
        Optional label for the argument, shown in the diagnostic.

    Returns
    -------
    int
        The parsed value. On any validation failure the process exits.
    """
    return _get_num("get_long", arg, flags, name)


def get_int(arg: str | None, flags: int = 0, name: str | None = None) -> int:
    """Like :func:`get_long`, but the value must also fit a 32-bit ``int``."""
    value = _get_num("get_int", arg, flags, name)

    if value > INT_MAX or value < INT_MIN:
        _gn_fail("get_int", "integer out of range", arg, name)

    return value

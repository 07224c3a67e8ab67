"""Symbolic names for OS error numbers.

The table is built once from the platform's :mod:`errno` module. Index is
the error number; numbers shared by several names (``EAGAIN`` and
``EWOULDBLOCK`` on Linux) are joined with ``/``, canonical name first.
Unassigned numbers inside the range hold an empty string.
"""

import errno
import os

UNKNOWN_NAME = "?UNKNOWN?"


def _build_table() -> tuple[str, ...]:
    aliases: dict[int, list[str]] = {}
    for name in sorted(dir(errno)):
        value = getattr(errno, name)
        if name.startswith("E") and isinstance(value, int):
            aliases.setdefault(value, []).append(name)

    size = max(errno.errorcode) + 1
    table = [""] * size
    for code, names in aliases.items():
        if not 0 <= code < size:
            continue
        canonical = errno.errorcode.get(code)
        if canonical in names:
            names.remove(canonical)
            names.insert(0, canonical)
        table[code] = "/".join(names)
    return tuple(table)


ENAME = _build_table()
MAX_ENAME = len(ENAME) - 1


def error_name(code: int) -> str:
    """Return the symbolic name for ``code``, or ``?UNKNOWN?`` outside 1..MAX_ENAME."""
    if 0 < code <= MAX_ENAME:
        return ENAME[code]
    return UNKNOWN_NAME


def error_annotation(code: int) -> str:
    """Format ``code`` as ``" [<name> <description>]"``.

    The description comes from :func:`os.strerror` and is present even when
    the name is unknown.
    """
    try:
        description = os.strerror(code)
    except OverflowError:
        # beyond a C int; same wording strerror uses for unassigned numbers
        description = f"Unknown error {code}"
    return f" [{error_name(code)} {description}]"

"""Core data models for tlpi-lib."""

import enum
from dataclasses import dataclass

# Upper bound on any single rendered diagnostic, terminator included.
BUF_SIZE = 500


def bounded(text: str, size: int = BUF_SIZE) -> str:
    """Truncate ``text`` to fit a buffer of ``size`` (one slot is the terminator)."""
    return text[: size - 1]


class Termination(enum.Enum):
    """How a fatal diagnostic ends the process."""

    GRACEFUL = "graceful"    # sys.exit: atexit handlers run, streams flushed
    IMMEDIATE = "immediate"  # os._exit: no handlers, no extra flushing


class NumFlags(enum.IntFlag):
    """Constraints accepted by :func:`tlpi_lib.get_num.get_long`."""

    NONE = 0
    NONNEG = 0o1       # value must be >= 0
    GT_0 = 0o2         # value must be > 0
    ANY_BASE = 0o100   # base chosen from the prefix, like strtol(3) with base 0
    BASE_8 = 0o200     # value is octal
    BASE_16 = 0o400    # value is hexadecimal

    @property
    def base(self) -> int:
        if self & NumFlags.ANY_BASE:
            return 0
        if self & NumFlags.BASE_8:
            return 8
        if self & NumFlags.BASE_16:
            return 16
        return 10


@dataclass(frozen=True)
class DiagnosticMessage:
    """A single ``ERROR...`` line, built per call and never kept."""

    annotation: str  # " [ENAME description]" or ":"
    text: str

    def render(self) -> str:
        return bounded(f"ERROR{self.annotation} {self.text}\n")

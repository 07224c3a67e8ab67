# test_get_num.py
#
# Tests:
# - Empty or missing argument aborts with "null or empty string"
# - Trailing garbage aborts with "nonnumeric characters"
# - NONNEG rejects negatives, GT_0 rejects zero
# - get_int rejects values outside 32-bit range; get_long accepts them
# - Values outside 64-bit range abort with "conversion failed"
# - Arbitrarily long digit strings abort cleanly; leading zeros are ignored
# - Base flags: octal, hex, prefix detection
# - strtol whitespace and sign handling
# - Diagnostic layout: function name, (in NAME), offending text
# - Decimal values survive a parse / str / parse cycle

import pytest

from tlpi_lib.get_num import (
    GN_ANY_BASE,
    GN_BASE_8,
    GN_BASE_16,
    GN_GT_0,
    GN_NONNEG,
    INT_MAX,
    INT_MIN,
    LONG_MAX,
    LONG_MIN,
    _strtol,
    get_int,
    get_long,
)


def _fails(capsys, func, *args, **kwargs) -> str:
    """Call ``func`` expecting an exit with status 1; return stderr."""
    with pytest.raises(SystemExit) as exc_info:
        func(*args, **kwargs)
    assert exc_info.value.code == 1
    return capsys.readouterr().err


# ---------------------------------------------------------------------------
# Validation failures
# ---------------------------------------------------------------------------

class TestFailures:
    def test_empty_string(self, capsys):
        err = _fails(capsys, get_long, "", 0)
        assert err == "get_long error: null or empty string\n"

    def test_none(self, capsys):
        err = _fails(capsys, get_int, None, 0, "count")
        assert err == "get_int error (in count): null or empty string\n"

    def test_trailing_characters(self, capsys):
        err = _fails(capsys, get_long, "42x", 0)
        assert "nonnumeric characters" in err
        assert " offending text: 42x\n" in err

    def test_no_digits(self, capsys):
        assert "nonnumeric characters" in _fails(capsys, get_long, "abc")

    def test_sign_only(self, capsys):
        assert "nonnumeric characters" in _fails(capsys, get_long, "-")

    def test_trailing_whitespace(self, capsys):
        assert "nonnumeric characters" in _fails(capsys, get_long, "42 ")

    def test_negative_not_allowed(self, capsys):
        err = _fails(capsys, get_long, "-5", GN_NONNEG)
        assert "negative value not allowed" in err

    def test_zero_not_positive(self, capsys):
        err = _fails(capsys, get_long, "0", GN_GT_0)
        assert "value must be > 0" in err

    def test_int_out_of_range(self, capsys):
        err = _fails(capsys, get_int, "2147483648", 0)
        assert err.startswith("get_int error: integer out of range\n")

    def test_int_below_range(self, capsys):
        assert "integer out of range" in _fails(capsys, get_int, "-2147483649")

    def test_long_overflow(self, capsys):
        err = _fails(capsys, get_long, "9223372036854775808")
        assert "conversion failed" in err

    def test_long_underflow(self, capsys):
        assert "conversion failed" in _fails(capsys, get_long, "-9223372036854775809")

    @pytest.mark.parametrize("text", ["1" * 5000, "-" + "7" * 5000])
    def test_very_long_number(self, capsys, text):
        assert "conversion failed" in _fails(capsys, get_long, text)

    def test_very_long_hex_number(self, capsys):
        assert "conversion failed" in _fails(capsys, get_long, "f" * 5000, GN_BASE_16)

    def test_range_error_reported_before_trailing_garbage(self, capsys):
        assert "conversion failed" in _fails(capsys, get_long, "99999999999999999999z")

    def test_nonneg_checked_before_positive(self, capsys):
        err = _fails(capsys, get_long, "-1", GN_NONNEG | GN_GT_0)
        assert "negative value not allowed" in err

    def test_full_layout(self, capsys):
        err = _fails(capsys, get_long, "12abc", GN_GT_0, "num-bytes")
        assert err == (
            "get_long error (in num-bytes): nonnumeric characters\n"
            " offending text: 12abc\n"
        )


# ---------------------------------------------------------------------------
# Successful conversions
# ---------------------------------------------------------------------------

class TestConversions:
    def test_decimal(self):
        assert get_long("42") == 42
        assert get_int("-17") == -17

    def test_leading_whitespace_and_plus(self):
        assert get_long("  \t+42") == 42

    def test_limits(self):
        assert get_long(str(LONG_MAX)) == LONG_MAX
        assert get_long(str(LONG_MIN)) == LONG_MIN
        assert get_int(str(INT_MAX)) == INT_MAX
        assert get_int(str(INT_MIN)) == INT_MIN

    def test_long_accepts_beyond_int(self):
        assert get_long("2147483648") == 2147483648

    def test_leading_zero_is_decimal_by_default(self):
        assert get_long("010") == 10

    def test_octal(self):
        assert get_long("17", GN_BASE_8) == 15

    def test_octal_rejects_eight(self, capsys):
        assert "nonnumeric characters" in _fails(capsys, get_long, "18", GN_BASE_8)

    def test_hex(self):
        assert get_long("ff", GN_BASE_16) == 255
        assert get_long("0XFF", GN_BASE_16) == 255

    def test_any_base(self):
        assert get_long("0x1f", GN_ANY_BASE) == 31
        assert get_long("017", GN_ANY_BASE) == 15
        assert get_long("-0x10", GN_ANY_BASE) == -16
        assert get_long("99", GN_ANY_BASE) == 99
        assert get_long("0", GN_ANY_BASE) == 0

    def test_any_base_bad_octal(self, capsys):
        assert "nonnumeric characters" in _fails(capsys, get_long, "08", GN_ANY_BASE)

    def test_many_leading_zeros(self):
        assert get_long("0" * 5000 + "1") == 1
        assert get_long("-" + "0" * 5000) == 0

    def test_zero_is_nonneg(self):
        assert get_long("0", GN_NONNEG) == 0

    @pytest.mark.parametrize("text", ["0", "7", "-7", "123456789", "-2147483648"])
    def test_decimal_round_trip(self, text):
        value = get_int(text)
        assert get_int(str(value)) == value == int(text)


class TestStrtol:
    def test_bare_hex_prefix_stops_at_x(self):
        assert _strtol("0x", 16) == (0, 1, False)

    def test_no_digits_end_is_zero(self):
        assert _strtol("  -", 10) == (0, 0, False)

    def test_overflow_clamps(self):
        assert _strtol("-" + "9" * 30, 10) == (LONG_MIN, 31, True)

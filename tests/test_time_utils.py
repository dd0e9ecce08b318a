import pytest
from datetime import datetime, timezone

from zzsleep.time_utils import (
    AbsoluteTimestamp,
    ClockTime,
    DurationSpec,
    EmptyInput,
    MalformedArgument,
    PastTimestamp,
    Unit,
    parse_arg,
    parse_args,
)


# --- Durations ---

@pytest.mark.parametrize("n", [0, 1, 59, 1230, 86400, 10**9])
def test_bare_integer_is_seconds(n):
    """A number without a unit is always seconds, even if it looks like HHMM."""
    parsed = parse_arg(str(n))
    assert parsed == DurationSpec(((n, Unit.SECONDS),))
    assert parsed.total_seconds == n


def test_compound_duration_sums_components():
    parsed = parse_arg("2h 5m 30s")
    assert parsed.components == ((2, Unit.HOURS), (5, Unit.MINUTES), (30, Unit.SECONDS))
    assert parsed.total_seconds == 7530


def test_compound_duration_is_order_independent():
    assert parse_arg("30s 2h 5m").total_seconds == 7530
    assert parse_args(["5m", "30s", "2h"]).total_seconds == 7530


def test_repeated_units_accumulate():
    assert parse_args(["1m", "1m", "10"]).total_seconds == 130


def test_single_unit_tokens():
    assert parse_arg("2h").total_seconds == 7200
    assert parse_arg("5m").total_seconds == 300
    assert parse_arg("30s").total_seconds == 30


# --- Clock times ---

def test_clock_time_hh_mm():
    assert parse_arg("12:30") == ClockTime(12, 30, 0)


def test_clock_time_hh_mm_ss():
    assert parse_arg("12:30:45") == ClockTime(12, 30, 45)


def test_clock_time_single_digit_hour():
    assert parse_arg("9:05") == ClockTime(9, 5, 0)


def test_clock_time_bounds():
    assert parse_arg("00:00") == ClockTime(0, 0, 0)
    assert parse_arg("23:59:59") == ClockTime(23, 59, 59)


# --- Absolute timestamps ---

def test_iso_utc():
    parsed = parse_arg("20260220T123000Z")
    assert isinstance(parsed, AbsoluteTimestamp)
    assert parsed.instant == datetime(2026, 2, 20, 12, 30, tzinfo=timezone.utc)


def test_iso_offset_equals_utc_equivalent():
    """+0900 12:30 is the same instant as 03:30Z."""
    east = parse_arg("20260220T123000+0900")
    utc = parse_arg("20260220T033000Z")
    assert east == utc
    assert east.instant.utcoffset().total_seconds() == 9 * 3600


def test_iso_negative_offset():
    parsed = parse_arg("20260220T073000-0500")
    assert parsed.instant == datetime(2026, 2, 20, 12, 30, tzinfo=timezone.utc)


# --- Failures ---

@pytest.mark.parametrize("arg", [
    "12:99",
    "24:00",
    "12:30:60",
    "2x",
    "abc",
    "1.5",
    "-5",
    "5M",
    "12:3",
    "20261320T000000Z",
    "20260230T000000Z",
    "20260220T250000Z",
    "20260220T123000+2400",
    "20260220T123000+0960",
    "20260220T123000+09",
])
def test_malformed_arguments(arg):
    with pytest.raises(MalformedArgument) as exc:
        parse_arg(arg)
    assert exc.value.token == arg
    assert exc.value.exit_code == 1
    assert arg in str(exc.value)


def test_overlong_number_is_malformed():
    """Digit strings past int() conversion limits are rejected, not crashed on."""
    token = "9" * 5000
    with pytest.raises(MalformedArgument, match="number too large") as exc:
        parse_args([token])
    assert exc.value.token == token


def test_malformed_names_offending_token():
    with pytest.raises(MalformedArgument) as exc:
        parse_args(["2h", "abc", "5m"])
    assert exc.value.token == "abc"


def test_clock_time_mixed_with_durations_is_malformed():
    with pytest.raises(MalformedArgument) as exc:
        parse_args(["12:30", "5m"])
    assert exc.value.token == "12:30"


def test_blank_token_among_others_is_malformed():
    with pytest.raises(MalformedArgument):
        parse_args(["", "5m"])


@pytest.mark.parametrize("tokens", [[], [""], ["   "]])
def test_empty_input(tokens):
    with pytest.raises(EmptyInput):
        parse_args(tokens)


def test_empty_string():
    with pytest.raises(EmptyInput):
        parse_arg("")


def test_errors_are_value_errors():
    """Callers that only know ValueError still catch every parse failure."""
    assert issubclass(MalformedArgument, ValueError)
    assert issubclass(EmptyInput, ValueError)
    assert issubclass(PastTimestamp, ValueError)
    assert PastTimestamp.exit_code == 2


# --- Purity ---

@pytest.mark.parametrize("arg", ["10", "2h 5m 30s", "12:30", "20260220T123000+0900"])
def test_parsing_is_idempotent(arg):
    assert parse_arg(arg) == parse_arg(arg)
    assert hash(parse_arg(arg)) == hash(parse_arg(arg))

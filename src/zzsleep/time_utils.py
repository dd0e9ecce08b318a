from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Sequence, Tuple, Union

# 20260220T123000Z / 20260220T123000+0900
ISO_RE = re.compile(
    r"(?P<date>\d{8})T(?P<time>\d{6})"
    r"(?:(?P<z>Z)|(?P<sign>[+-])(?P<oh>\d{2})(?P<om>\d{2}))",
    re.ASCII,
)
CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?", re.ASCII)
DURATION_RE = re.compile(r"(\d+)([hms]?)", re.ASCII)


class ZzError(ValueError):
    exit_code = 1


class ParseError(ZzError):
    exit_code = 1


class EmptyInput(ParseError):
    def __init__(self):
        super().__init__("no arguments provided")


class MalformedArgument(ParseError):
    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"invalid argument '{token}': {reason}")


class PastTimestamp(ZzError):
    exit_code = 2

    def __init__(self, instant: datetime, now: datetime):
        self.instant = instant
        self.now = now
        super().__init__(
            f"{instant.isoformat()} has already passed (now={now.isoformat()})"
        )


class Unit(enum.Enum):
    HOURS = 3600
    MINUTES = 60
    SECONDS = 1

    @classmethod
    def from_suffix(cls, suffix: str) -> "Unit":
        return {"h": cls.HOURS, "m": cls.MINUTES, "": cls.SECONDS, "s": cls.SECONDS}[suffix]


@dataclass(frozen=True)
class DurationSpec:
    components: Tuple[Tuple[int, Unit], ...]

    @property
    def total_seconds(self) -> int:
        return sum(n * unit.value for n, unit in self.components)


@dataclass(frozen=True)
class ClockTime:
    hour: int
    minute: int
    second: int = 0


@dataclass(frozen=True)
class AbsoluteTimestamp:
    instant: datetime


Target = Union[DurationSpec, ClockTime, AbsoluteTimestamp]


def _parse_iso(token: str, m: re.Match) -> AbsoluteTimestamp:
    if m.group("z"):
        tz = timezone.utc
    else:
        oh, om = int(m.group("oh")), int(m.group("om"))
        if oh > 23 or om > 59:
            raise MalformedArgument(token, "UTC offset out of range")
        offset = timedelta(hours=oh, minutes=om)
        tz = timezone(-offset if m.group("sign") == "-" else offset)

    try:
        naive = datetime.strptime(m.group("date") + m.group("time"), "%Y%m%d%H%M%S")
    except ValueError:
        raise MalformedArgument(token, "date or time out of range") from None

    return AbsoluteTimestamp(naive.replace(tzinfo=tz))


def _parse_clock(token: str, m: re.Match) -> ClockTime:
    hh = int(m.group(1))
    mm = int(m.group(2))
    ss = int(m.group(3)) if m.group(3) is not None else 0
    if not (0 <= hh <= 23 and 0 <= mm <= 59 and 0 <= ss <= 59):
        raise MalformedArgument(token, "time of day out of range")
    return ClockTime(hh, mm, ss)


def parse_args(tokens: Sequence[str]) -> Target:
    """
    Classify the command line into one wait target.

    - "20260220T123000Z", "20260220T123000+0900" -> AbsoluteTimestamp
    - "12:30", "12:30:45"                        -> ClockTime (next occurrence)
    - "10", "2h", "2h 5m 30s"                    -> DurationSpec (summed)

    A bare number is always seconds: "1230" is 1230s, not 12:30.
    """
    tokens = [t.strip() for t in tokens]
    if not any(tokens):
        raise EmptyInput()

    joined = " ".join(tokens)
    m = ISO_RE.fullmatch(joined)
    if m:
        return _parse_iso(joined, m)

    if len(tokens) == 1:
        m = CLOCK_RE.fullmatch(tokens[0])
        if m:
            return _parse_clock(tokens[0], m)

    components = []
    for token in tokens:
        m = DURATION_RE.fullmatch(token)
        if not m:
            if ":" in token:
                reason = "clock time must be HH:MM or HH:MM:SS and be the only argument"
            else:
                reason = "expected a duration like 10, 2h, 5m or 30s"
            raise MalformedArgument(token, reason)
        try:
            n = int(m.group(1))
        except ValueError:
            raise MalformedArgument(token, "number too large") from None
        components.append((n, Unit.from_suffix(m.group(2))))

    return DurationSpec(tuple(components))


def parse_arg(arg: str) -> Target:
    return parse_args(arg.split())

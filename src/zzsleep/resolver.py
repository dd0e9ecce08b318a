from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from zzsleep.time_utils import (
    AbsoluteTimestamp,
    ClockTime,
    DurationSpec,
    PastTimestamp,
    Target,
    ZzError,
)


@dataclass(frozen=True)
class ResolvedTarget:
    wait: timedelta
    deadline: datetime

    @property
    def seconds(self) -> float:
        return self.wait.total_seconds()


def current_time(tz: Optional[tzinfo] = None) -> datetime:
    """Aware "now"; system local zone unless tz is given."""
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def _localize(naive: datetime, tz: Optional[tzinfo]) -> datetime:
    # naive.astimezone() asks the OS for the local offset of that wall time,
    # so a DST change between today and tomorrow is picked up.
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def _next_occurrence(clock: ClockTime, now: datetime, tz: Optional[tzinfo]) -> datetime:
    local_now = now.astimezone(tz)
    wall = time(clock.hour, clock.minute, clock.second)

    target = _localize(datetime.combine(local_now.date(), wall), tz).astimezone(timezone.utc)
    # equal to now counts as due, not as tomorrow
    if target < now:
        tomorrow = local_now.date() + timedelta(days=1)
        target = _localize(datetime.combine(tomorrow, wall), tz).astimezone(timezone.utc)
    return target


def resolve(target: Target, now: datetime, tz: Optional[tzinfo] = None) -> ResolvedTarget:
    """
    Turn a parsed target into a wait relative to `now`.

    `now` is read once by the caller so the past check and the duration agree.
    `tz` is the zone clock times are interpreted in (None = system local).
    """
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("now must be timezone-aware")
    # all arithmetic in UTC: aware datetimes sharing a zone subtract as wall time
    now = now.astimezone(timezone.utc)

    if isinstance(target, DurationSpec):
        try:
            wait = timedelta(seconds=target.total_seconds)
            return ResolvedTarget(wait=wait, deadline=now + wait)
        except OverflowError:
            raise ZzError(f"duration of {target.total_seconds}s is too long") from None

    if isinstance(target, ClockTime):
        deadline = _next_occurrence(target, now, tz)
        return ResolvedTarget(wait=deadline - now, deadline=deadline)

    if isinstance(target, AbsoluteTimestamp):
        instant = target.instant.astimezone(timezone.utc)
        if instant < now:
            raise PastTimestamp(target.instant, now)
        return ResolvedTarget(wait=instant - now, deadline=instant)

    raise TypeError(f"unsupported target: {target!r}")


def format_eta(deadline: datetime, now: datetime) -> str:
    """
    - same day  -> "14:30:45"
    - same year -> "02-21 08:00:00"
    - otherwise -> "2027-01-01 00:00:00"
    """
    end = deadline.astimezone(now.tzinfo)
    if end.date() == now.date():
        return end.strftime("%H:%M:%S")
    if end.year == now.year:
        return end.strftime("%m-%d %H:%M:%S")
    return end.strftime("%Y-%m-%d %H:%M:%S")


def format_remaining(seconds: float) -> str:
    total = max(0, math.ceil(seconds))
    return f"{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}"

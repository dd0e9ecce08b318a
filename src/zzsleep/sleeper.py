from __future__ import annotations

import sys
import time
from datetime import datetime
from typing import Callable, Optional, TextIO

from zzsleep.resolver import ResolvedTarget, current_time, format_eta, format_remaining

CLEAR_LINE = "\33[2K\r"  # VT100: erase the whole line, back to column 0
BAR_WIDTH = 40
# time.sleep overflows the platform time_t well before timedelta does
MAX_SLEEP = 86400.0


def progress_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = int(width * min(max(fraction, 0.0), 1.0))
    return "[" + "█" * filled + "░" * (width - filled) + "]"


def sleep_quietly(target: ResolvedTarget, sleep: Callable[[float], None] = time.sleep) -> None:
    remaining = target.seconds
    while remaining > 0:
        chunk = min(remaining, MAX_SLEEP)
        sleep(chunk)
        remaining -= chunk


def sleep_with_countdown(
    target: ResolvedTarget,
    tick: float = 1.0,
    clock: Callable[[], datetime] = current_time,
    sleep: Callable[[float], None] = time.sleep,
    out: Optional[TextIO] = None,
) -> None:
    """
    Block until target.deadline, redrawing "[bar] HH:MM:SS | ETA ..." every tick.

    The clock is re-read each round so a slow redraw or a late wakeup
    does not push the end past the deadline.
    """
    out = out if out is not None else sys.stderr
    deadline = target.deadline
    total = (deadline - clock()).total_seconds()

    while True:
        now = clock()
        remaining = (deadline - now).total_seconds()
        if remaining <= 0:
            break
        bar = progress_bar(1 - remaining / max(total, remaining))
        line = f"{bar} {format_remaining(remaining)} | ETA {format_eta(deadline, now)}"
        print(CLEAR_LINE + line, end="", file=out, flush=True)
        sleep(min(tick, remaining, MAX_SLEEP))

    print(CLEAR_LINE + f"{progress_bar(1.0)} {format_remaining(0)} | done", file=out, flush=True)


def sleep_until(
    target: ResolvedTarget,
    quiet: bool,
    tick: float = 1.0,
    clock: Callable[[], datetime] = current_time,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    if quiet:
        sleep_quietly(target, sleep=sleep)
    else:
        sleep_with_countdown(target, tick=tick, clock=clock, sleep=sleep)

from __future__ import annotations

import sys
import time
from functools import partial
from typing import List, Optional, Tuple

import requests

from zzsleep.config import Settings
from zzsleep.resolver import current_time, format_eta, resolve
from zzsleep.sleeper import CLEAR_LINE, sleep_until
from zzsleep.telegram_sender import TelegramSender
from zzsleep.time_utils import ZzError, parse_args

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INTERRUPTED = 130
EXIT_CONFIG = 78

QUIET_FLAGS = ("-q", "--quiet")
HELP_FLAGS = ("-h", "--help")

USAGE = """\
Usage: zz [-q|--quiet] <duration|time>...
  zz 10                     # 10 seconds
  zz 2h                     # 2 hours
  zz 5m                     # 5 minutes
  zz 30s                    # 30 seconds
  zz 2h 5m 30s              # 2 hours 5 minutes 30 seconds
  zz 12:30                  # until 12:30 today (tomorrow if past)
  zz 12:30:45               # until 12:30:45 today (tomorrow if past)
  zz 20260220T123000+0900   # ISO 8601 with UTC offset
  zz 20260220T123000Z       # ISO 8601 UTC
  -q, --quiet               # no countdown"""


def split_args(raw: List[str]) -> Tuple[bool, List[str]]:
    quiet = any(a in QUIET_FLAGS for a in raw)
    return quiet, [a for a in raw if a not in QUIET_FLAGS]


def notify_done(settings: Settings, args: List[str]) -> None:
    sender = TelegramSender(settings.tg_bot_token, settings.tg_chat_id)
    try:
        sender.send_done(args)
    except requests.RequestException as e:
        print(f"[WARN] completion notice failed: {e}", file=sys.stderr)


def run(raw: List[str], settings: Settings, sleep=time.sleep, clock=None) -> int:
    if any(a in HELP_FLAGS for a in raw):
        print(USAGE)
        return EXIT_OK

    quiet, args = split_args(raw)
    quiet = quiet or settings.quiet
    if not args:
        print(USAGE, file=sys.stderr)
        return EXIT_USAGE

    clock = clock or partial(current_time, settings.tz)

    try:
        target = parse_args(args)
        now = clock()
        resolved = resolve(target, now, tz=settings.tz)
    except ZzError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return e.exit_code

    if not quiet:
        print(f"[OK] sleeping until {format_eta(resolved.deadline, now)}", file=sys.stderr)

    try:
        sleep_until(resolved, quiet, tick=settings.tick, clock=clock, sleep=sleep)
    except KeyboardInterrupt:
        if not quiet:
            print(CLEAR_LINE, end="", file=sys.stderr)
        print("[WARN] interrupted", file=sys.stderr)
        return EXIT_INTERRUPTED

    if settings.notify:
        notify_done(settings, args)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    raw = sys.argv[1:] if argv is None else argv
    try:
        settings = Settings.load()
    except RuntimeError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_CONFIG
    return run(raw, settings)


if __name__ == "__main__":
    sys.exit(main())

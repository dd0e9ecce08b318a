from __future__ import annotations
import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class Settings:
    quiet: bool
    tick: float
    tz: Optional[tzinfo]
    tg_bot_token: str
    tg_chat_id: str

    @property
    def notify(self) -> bool:
        return bool(self.tg_bot_token and self.tg_chat_id)

    @staticmethod
    def load() -> "Settings":
        # .env is looked up from the working directory, not from the installed package
        load_dotenv(find_dotenv(usecwd=True))

        quiet = os.getenv("ZZ_QUIET", "false").strip().lower() == "true"
        tick_raw = os.getenv("ZZ_TICK", "1.0").strip()
        tz_name = os.getenv("ZZ_TZ", "").strip()
        token = os.getenv("ZZ_TG_BOT_TOKEN", "").strip()
        chat_id = os.getenv("ZZ_TG_CHAT_ID", "").strip()

        try:
            tick = float(tick_raw)
        except ValueError:
            raise RuntimeError(f"ZZ_TICK is not a number: {tick_raw!r}") from None
        if not tick > 0:
            raise RuntimeError(f"ZZ_TICK must be positive: {tick_raw!r}")

        tz = None
        if tz_name:
            try:
                tz = ZoneInfo(tz_name)
            except (ZoneInfoNotFoundError, ValueError):
                raise RuntimeError(f"ZZ_TZ is not a known time zone: {tz_name!r}") from None

        if bool(token) != bool(chat_id):
            raise RuntimeError("ZZ_TG_BOT_TOKEN and ZZ_TG_CHAT_ID must be set together")

        return Settings(
            quiet=quiet,
            tick=tick,
            tz=tz,
            tg_bot_token=token,
            tg_chat_id=chat_id,
        )

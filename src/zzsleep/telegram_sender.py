from __future__ import annotations

from typing import List

import requests


class TelegramSender:
    def __init__(self, bot_token: str, chat_id: str):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.base = f"https://api.telegram.org/bot{bot_token}"

    def send_text(self, text: str) -> None:
        r = requests.post(
            f"{self.base}/sendMessage",
            data={"chat_id": self.chat_id, "text": text},
            timeout=30,
        )
        r.raise_for_status()

    def send_done(self, args: List[str]) -> None:
        """Completion notice, e.g. "zz: done (2h 5m)"."""
        self.send_text(f"zz: done ({' '.join(args)})")

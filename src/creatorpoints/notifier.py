"""Minimal Telegram Bot API client for posting leaderboard updates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import requests

from creatorpoints.models import CreatorScore

logger = logging.getLogger(__name__)

_API_BASE = "https://api.telegram.org"

# Telegram rejects messages longer than this.
_MAX_MESSAGE_CHARS = 4096


class TelegramError(Exception):
    """Raised when the Bot API returns an unexpected response."""


def format_top(rows: Sequence[CreatorScore], title: str, limit: int = 10) -> str:
    """Build a plain-text top-*limit* message."""
    lines = [title, ""]
    if not rows:
        lines.append("No creators scored yet.")
    for pos, row in enumerate(rows[:limit], start=1):
        streak = f" · {row.streak_days}d streak" if row.streak_days else ""
        lines.append(f"{pos}. @{row.username}: {row.balance:,} pts{streak}")
    return "\n".join(lines)


class TelegramNotifier:
    """Thin wrapper around ``POST /bot<token>/sendMessage``."""

    def __init__(self, bot_token: str, chat_id: str) -> None:
        if not bot_token or not chat_id:
            raise ValueError("TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID are required.")
        self._url = f"{_API_BASE}/bot{bot_token}/sendMessage"
        self._chat_id = chat_id
        self._session = requests.Session()

    def send(self, text: str) -> dict[str, Any]:
        """Send *text* to the configured chat and return the API result."""
        if len(text) > _MAX_MESSAGE_CHARS:
            logger.warning("Message is %d chars; truncating to %d", len(text), _MAX_MESSAGE_CHARS)
            text = text[: _MAX_MESSAGE_CHARS - 1] + "…"

        resp = self._session.post(
            self._url,
            json={"chat_id": self._chat_id, "text": text},
            timeout=30,
        )
        if resp.status_code != 200:
            raise TelegramError(
                f"Telegram API returned {resp.status_code}: {resp.text[:500]}"
            )
        data: dict[str, Any] = resp.json()
        if not data.get("ok", False):
            raise TelegramError(f"Telegram API error: {data.get('description', data)}")
        logger.info("Sent Telegram message (%d chars) to chat %s", len(text), self._chat_id)
        return data

"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[2]

HISTORY_DIR: Path = Path(
    os.getenv("CREATORPOINTS_HISTORY_DIR", str(PROJECT_ROOT / "data" / "history"))
)
ADJUSTMENTS_FILE: Path = Path(
    os.getenv(
        "CREATORPOINTS_ADJUSTMENTS_FILE",
        str(PROJECT_ROOT / "data" / "points-adjustments.json"),
    )
)
OUTPUT_DIR: Path = Path(os.getenv("CREATORPOINTS_OUTPUT_DIR", str(PROJECT_ROOT / "out")))

# Optional YAML overriding the default point rules.
RULES_FILE: Path | None = (
    Path(os.environ["CREATORPOINTS_RULES_FILE"])
    if os.getenv("CREATORPOINTS_RULES_FILE")
    else None
)

# ── Incentives ─────────────────────────────────────────────────────────────
INCENTIVES_START: date = date.fromisoformat(
    os.getenv("CREATORPOINTS_INCENTIVES_START", "2025-12-01")
)

# ── Telegram ───────────────────────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_CHAT_ID: str = os.getenv("TELEGRAM_CHAT_ID", "")


def telegram_enabled() -> bool:
    """Return True when both Telegram credentials are set."""
    return bool(TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID)

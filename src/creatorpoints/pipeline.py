"""Pipeline orchestration: load histories → rank index → score → report → notify."""

from __future__ import annotations

import logging
import sys
from datetime import UTC, date, datetime

from creatorpoints import config
from creatorpoints.leaderboard import build_leaderboard, month_window
from creatorpoints.models import CreatorScore
from creatorpoints.notifier import TelegramNotifier, format_top
from creatorpoints.report import write_report
from creatorpoints.rules import load_rules
from creatorpoints.store import HistoryStore, load_adjustments

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_leaderboard(
    today: date | None = None,
    since: date | None = None,
    month: bool = False,
    notify: bool = False,
    dry_run: bool = False,
) -> list[CreatorScore]:
    """Score every creator and publish the leaderboard.

    The window is the current month when *month* is set, otherwise
    ``[since, ∞)`` with *since* defaulting to the incentives start date.
    """
    setup_logging()
    now = datetime.now(UTC)
    today = today or now.date()

    if month:
        start, end = month_window(today)
        title = f"Points leaderboard {start.strftime('%B %Y')}"
    else:
        start, end = since or config.INCENTIVES_START, None
        title = f"Lifetime points since {start.isoformat()}"
    logger.info("=== leaderboard start [window=%s..%s, today=%s] ===", start, end or "", today)

    # ── 1. Load inputs ────────────────────────────────────────────────
    rules = load_rules(config.RULES_FILE)
    store = HistoryStore(config.HISTORY_DIR)
    histories = store.load_all()
    if not histories:
        logger.warning("No creator histories found — nothing to score.")
        return []
    adjustments = load_adjustments(config.ADJUSTMENTS_FILE)

    # ── 2. Score ──────────────────────────────────────────────────────
    ranked = build_leaderboard(
        {name: h.records for name, h in histories.items()},
        today,
        window_start=start,
        window_end=end,
        adjustments=adjustments,
        rules=rules,
    )

    if dry_run:
        logger.info("Dry-run mode — skipping report write and notification.")
        for row in ranked[:10]:
            logger.info("  [%d] @%s streak=%d", row.balance, row.username, row.streak_days)
        return ranked

    # ── 3. Report ─────────────────────────────────────────────────────
    # Label the report with the evaluation date so reruns of past days match.
    as_of = datetime.combine(today, now.timetz())
    out_path = write_report(ranked, config.OUTPUT_DIR, title, as_of, rules)

    # ── 4. Notify ─────────────────────────────────────────────────────
    if notify and config.telegram_enabled():
        try:
            notifier = TelegramNotifier(config.TELEGRAM_BOT_TOKEN, config.TELEGRAM_CHAT_ID)
            notifier.send(format_top(ranked, title))
        except Exception:
            logger.exception("Failed to send Telegram update")
    elif notify:
        logger.info(
            "Telegram not configured — skipping send. "
            "Set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID to enable."
        )

    logger.info("=== leaderboard done — %s ===", out_path)
    return ranked

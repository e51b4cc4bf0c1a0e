"""CLI entry-point: ``python -m creatorpoints leaderboard`` / ``score`` / ``streak`` / ``adjust``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, date, datetime

from creatorpoints import config
from creatorpoints.pipeline import run_leaderboard, setup_logging
from creatorpoints.points import score_creator
from creatorpoints.rank_index import build_rank_index
from creatorpoints.rules import load_rules
from creatorpoints.store import HistoryStore, load_adjustments, save_adjustment
from creatorpoints.streak import compute_streak

logger = logging.getLogger(__name__)


def _day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _score_one(username: str, today: date, since: date) -> None:
    """Print one creator's score (against every creator's rank index) as JSON."""
    setup_logging(logging.WARNING)
    rules = load_rules(config.RULES_FILE)
    store = HistoryStore(config.HISTORY_DIR)
    histories = store.load_all()
    if username not in histories:
        histories[username] = store.load(username)

    index = build_rank_index(
        {name: h.records for name, h in histories.items()}, rules.rank_bonuses
    )
    result = score_creator(
        username,
        histories[username].records,
        index,
        today,
        window_start=since,
        adjustment=load_adjustments(config.ADJUSTMENTS_FILE).get(username, 0),
        rules=rules,
    )
    print(json.dumps(result.model_dump(), indent=2))


def _streak_one(username: str, today: date) -> None:
    setup_logging(logging.WARNING)
    history = HistoryStore(config.HISTORY_DIR).load(username)
    print(compute_streak(history.records, today, load_rules(config.RULES_FILE)))


def _adjust(username: str, points: int) -> None:
    setup_logging()
    try:
        save_adjustment(config.ADJUSTMENTS_FILE, username, points)
    except (OSError, ValueError) as exc:
        logger.error("Adjustment not saved; fix %s first: %s", config.ADJUSTMENTS_FILE, exc)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="creatorpoints",
        description="Incentive points and streaks for livestream creators.",
    )
    sub = parser.add_subparsers(dest="command")
    today = datetime.now(UTC).date()

    # ── leaderboard ────────────────────────────────────────────────────
    lb_parser = sub.add_parser("leaderboard", help="Score all creators and write the report.")
    window = lb_parser.add_mutually_exclusive_group()
    window.add_argument("--month", action="store_true", help="Only count the current month.")
    window.add_argument(
        "--since",
        type=_day,
        default=None,
        help=f"Count days from this date (default: {config.INCENTIVES_START}).",
    )
    lb_parser.add_argument("--today", type=_day, default=today, help="Evaluation date.")
    lb_parser.add_argument(
        "--notify", action="store_true", help="Post the top 10 to Telegram."
    )
    lb_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Score and log but skip the report write and notification.",
    )

    # ── score ─────────────────────────────────────────────────────────
    score_parser = sub.add_parser("score", help="Print one creator's points as JSON.")
    score_parser.add_argument("username")
    score_parser.add_argument("--today", type=_day, default=today)
    score_parser.add_argument("--since", type=_day, default=config.INCENTIVES_START)

    # ── streak ────────────────────────────────────────────────────────
    streak_parser = sub.add_parser("streak", help="Print one creator's current streak.")
    streak_parser.add_argument("username")
    streak_parser.add_argument("--today", type=_day, default=today)

    # ── adjust ────────────────────────────────────────────────────────
    adjust_parser = sub.add_parser("adjust", help="Set a creator's manual points adjustment.")
    adjust_parser.add_argument("username")
    adjust_parser.add_argument("points", type=int)

    args = parser.parse_args(argv)

    if args.command == "leaderboard":
        run_leaderboard(
            today=args.today,
            since=args.since,
            month=args.month,
            notify=args.notify,
            dry_run=args.dry_run,
        )
    elif args.command == "score":
        _score_one(args.username, args.today, args.since)
    elif args.command == "streak":
        _streak_one(args.username, args.today)
    elif args.command == "adjust":
        _adjust(args.username, args.points)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

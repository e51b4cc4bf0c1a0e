"""Render the points leaderboard as Markdown, plus an HTML copy."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import markdown

from creatorpoints.models import CreatorScore
from creatorpoints.rules import DEFAULT_RULES, ScoringRules

logger = logging.getLogger(__name__)

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
{body}
</body>
</html>
"""


def _fmt(n: float) -> str:
    return f"{n:,.0f}" if float(n).is_integer() else f"{n:,.1f}"


def _rules_footer(rules: ScoringRules) -> list[str]:
    bonuses = ", ".join(f"#{i + 1} → {b}" for i, b in enumerate(rules.rank_bonuses))
    streaks = ", ".join(f"{d} days → {p}" for d, p in rules.streak_bonuses)
    return [
        "## How points are earned",
        "",
        f"- First {_fmt(rules.diamond_threshold)} diamonds in a day → "
        f"{rules.diamond_base_points} points, then {rules.diamond_step_points} "
        f"per extra {_fmt(rules.diamond_step)}",
        f"- {rules.hour_points} points per full hour live",
        f"- Valid day ({_fmt(rules.valid_day_hours)}h+) → {rules.valid_day_points} points",
        f"- Daily top diamonds: {bonuses}",
        f"- Valid go-live streak: {streaks}",
    ]


def render_leaderboard(
    rows: Sequence[CreatorScore],
    title: str,
    generated_at: datetime,
    rules: ScoringRules = DEFAULT_RULES,
) -> str:
    """Return the leaderboard as a Markdown document."""
    lines = [
        f"# {title}",
        "",
        f"_Generated {generated_at.strftime('%Y-%m-%d %H:%M UTC')}_",
        "",
    ]
    if not rows:
        lines += ["No creators with history yet.", ""]
    else:
        lines += [
            "| # | Creator | Points | Diamonds | Hours | Valid days | Streak | Extras |",
            "|---|---|---:|---:|---:|---:|---:|---:|",
        ]
        for pos, row in enumerate(rows, start=1):
            lines.append(
                f"| {pos} | {row.username} | {row.balance:,} | "
                f"{_fmt(row.total_diamonds)} | {_fmt(row.total_hours)} | "
                f"{row.valid_days} | {row.streak_days} | {row.adjustment_points:,} |"
            )
        lines.append("")
    lines += _rules_footer(rules)
    return "\n".join(lines) + "\n"


def to_html(md_text: str, title: str) -> str:
    html = markdown.markdown(md_text, extensions=["tables"], output_format="html")
    return _HTML_TEMPLATE.format(title=title, body=html)


def write_report(
    rows: Sequence[CreatorScore],
    output_dir: Path,
    title: str,
    generated_at: datetime,
    rules: ScoringRules = DEFAULT_RULES,
) -> Path:
    """Write ``leaderboard-<date>.md`` and its ``.html`` twin; return the .md path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    md_text = render_leaderboard(rows, title, generated_at, rules)
    stem = f"leaderboard-{generated_at.strftime('%Y-%m-%d')}"
    md_path = output_dir / f"{stem}.md"
    md_path.write_text(md_text, encoding="utf-8")
    (output_dir / f"{stem}.html").write_text(to_html(md_text, title), encoding="utf-8")
    logger.info("Wrote leaderboard report to %s", md_path)
    return md_path

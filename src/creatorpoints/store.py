"""File-backed history store: one ``<username>.json`` per creator."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from creatorpoints.models import CreatorHistory
from creatorpoints.normalize import normalize_records, to_number

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r'[<>:"/\\|?*]+')


def safe_filename(username: str) -> str:
    return _UNSAFE_CHARS_RE.sub("_", username)


class HistoryStore:
    """Read-only access to per-creator daily history files.

    Each file holds ``{"username": ..., "entries": [{date, daily, hours}, ...]}``;
    a bare list of entries is accepted too.
    """

    def __init__(self, history_dir: Path) -> None:
        self._dir = Path(history_dir)

    # ── public ──────────────────────────────────────────────────────────

    def usernames(self) -> list[str]:
        """Return the usernames with a history file, sorted by file name."""
        return [name for name, _ in self._index()]

    def load(self, username: str) -> CreatorHistory:
        """Load one creator's history; missing or unreadable files are empty."""
        path = self._path(username)
        if not path.exists():
            # The file's own username may not match its file name.
            path = next((p for name, p in self._index() if name == username), path)
        if not path.exists():
            return CreatorHistory(username=username)
        return self._load_path(username, path, self._read(path))

    def load_all(self, usernames: list[str] | None = None) -> dict[str, CreatorHistory]:
        """Load every creator (or just *usernames*) keyed by username."""
        if usernames is not None:
            histories = {name: self.load(name) for name in usernames}
        else:
            histories = {
                name: self._load_path(name, path, data)
                for name, path, data in self._scan()
            }
        logger.info(
            "Loaded %d histories (%d records) from %s",
            len(histories),
            sum(len(h.records) for h in histories.values()),
            self._dir,
        )
        return histories

    # ── private ─────────────────────────────────────────────────────────

    def _path(self, username: str) -> Path:
        return self._dir / f"{safe_filename(username)}.json"

    def _scan(self) -> list[tuple[str, Path, Any]]:
        """Read every history file once: ``(username, path, parsed json)``."""
        if not self._dir.exists():
            logger.warning("History directory not found: %s", self._dir)
            return []
        found: list[tuple[str, Path, Any]] = []
        for path in sorted(self._dir.glob("*.json")):
            data = self._read(path)
            name = data.get("username") if isinstance(data, dict) else None
            found.append((name if isinstance(name, str) and name else path.stem, path, data))
        return found

    def _index(self) -> list[tuple[str, Path]]:
        return [(name, path) for name, path, _ in self._scan()]

    @staticmethod
    def _load_path(username: str, path: Path, data: Any) -> CreatorHistory:
        rows = data.get("entries", []) if isinstance(data, dict) else data
        if not isinstance(rows, list):
            logger.warning("No entries list in %s", path)
            rows = []
        return CreatorHistory(username=username, records=normalize_records(rows))

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read history file %s: %s", path, exc)
            return {}


def load_adjustments(path: Path | None) -> dict[str, int]:
    """Load manual point adjustments (``{username: points}``)."""
    if path is None or not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read adjustments file %s: %s", path, exc)
        return {}
    if not isinstance(raw, dict):
        logger.warning("Adjustments file %s is not a mapping; ignoring", path)
        return {}
    return {str(name): _adjustment_value(points) for name, points in raw.items()}


def save_adjustment(path: Path, username: str, points: int) -> dict[str, int]:
    """Set *username*'s adjustment to *points* and rewrite the file.

    The existing file is read strictly: an unreadable or malformed file
    raises instead of being overwritten.
    """
    adjustments: dict[str, int] = {}
    if path.exists():
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Adjustments file {path} is not a mapping")
        adjustments = {str(name): _adjustment_value(v) for name, v in raw.items()}
    adjustments[username] = points
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(adjustments, indent=2, sort_keys=True), encoding="utf-8")
    logger.info("Saved adjustment %s=%d to %s", username, points, path)
    return adjustments


def _adjustment_value(value: Any) -> int:
    # Deductions are allowed, so the sign is kept.
    if isinstance(value, str) and value.strip().startswith("-"):
        return -int(to_number(value.strip()[1:]))
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
        return -int(to_number(-value))
    return int(to_number(value))

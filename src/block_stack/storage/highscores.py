from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence


logger = logging.getLogger(__name__)

MAX_ENTRIES = 10
DEFAULT_INITIALS = "AAA"


@dataclass(frozen=True)
class HighScoreEntry:
    initials: str
    score: int
    timestamp: str


def normalize_initials(initials: Optional[str]) -> str:
    if not isinstance(initials, str):
        return DEFAULT_INITIALS
    initials = initials.strip().upper()[:3]
    return initials or DEFAULT_INITIALS


def qualifies(entries: Sequence[HighScoreEntry], score: int, limit: int = MAX_ENTRIES) -> bool:
    if len(entries) < limit:
        return True
    lowest = entries[-1].score if entries else 0
    return score > lowest


def insert_entry(entries: Sequence[HighScoreEntry], initials: str, score: int,
                 limit: int = MAX_ENTRIES) -> List[HighScoreEntry]:
    entry = HighScoreEntry(
        initials=normalize_initials(initials),
        score=int(score),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    # sorted() is stable, so earlier entries win ties
    ranked = sorted([*entries, entry], key=lambda e: e.score, reverse=True)
    return ranked[:limit]


class InMemoryHighScoreStore:
    def __init__(self, entries: Optional[Sequence[HighScoreEntry]] = None, limit: int = MAX_ENTRIES) -> None:
        self.limit = limit
        self.entries: List[HighScoreEntry] = sorted(entries or [], key=lambda e: e.score, reverse=True)[:limit]

    def load(self) -> List[HighScoreEntry]:
        return list(self.entries)

    def save(self, initials: str, score: int) -> List[HighScoreEntry]:
        self.entries = insert_entry(self.entries, initials, score, self.limit)
        return list(self.entries)


class JsonHighScoreStore:
    """High-score table kept in a JSON file.

    A missing or unreadable file reads as an empty table. Write errors are
    left to the caller.
    """

    def __init__(self, path: str, limit: int = MAX_ENTRIES) -> None:
        self.path = os.path.expanduser(path)
        self.limit = limit

    def load(self) -> List[HighScoreEntry]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read high scores from %s: %s", self.path, e)
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed high score file %s", self.path)
            return []
        entries: List[HighScoreEntry] = []
        for item in raw:
            if not isinstance(item, dict) or "score" not in item:
                continue
            try:
                score = int(item["score"])
            except (TypeError, ValueError, OverflowError):
                logger.warning("Skipping high score entry with bad score in %s: %r", self.path, item)
                continue
            entries.append(
                HighScoreEntry(
                    initials=normalize_initials(item.get("initials")),
                    score=score,
                    timestamp=str(item.get("timestamp", "")),
                )
            )
        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[: self.limit]

    def save(self, initials: str, score: int) -> List[HighScoreEntry]:
        entries = insert_entry(self.load(), initials, score, self.limit)
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(
                [{"initials": e.initials, "score": e.score, "timestamp": e.timestamp} for e in entries],
                f,
                indent=2,
            )
        logger.info("Saved high score %s %d to %s", normalize_initials(initials), score, self.path)
        return entries

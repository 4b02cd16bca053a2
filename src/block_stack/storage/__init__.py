"""High-score persistence backends."""

from .highscores import (
    DEFAULT_INITIALS,
    MAX_ENTRIES,
    HighScoreEntry,
    InMemoryHighScoreStore,
    JsonHighScoreStore,
    normalize_initials,
    qualifies,
)

__all__ = [
    "DEFAULT_INITIALS",
    "MAX_ENTRIES",
    "HighScoreEntry",
    "InMemoryHighScoreStore",
    "JsonHighScoreStore",
    "normalize_initials",
    "qualifies",
]

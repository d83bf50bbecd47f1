"""Leaderboard service: validation and read-modify-write against a store."""

import asyncio
import logging
import math
import re
from typing import Any

from src.errors import InvalidScore
from src.models import LeaderboardEntry, MAX_NAME_LENGTH, utc_now
from src.stores.base import LeaderboardStore
from .ranking import upsert

logger = logging.getLogger(__name__)

DEFAULT_NAME = "익명 노동자"

# Largest score every store can hold (Firestore integers are int64)
MAX_SCORE = 2**63 - 1

# Plain decimal or exponent notation; no "inf", "nan", hex or underscores
_NUMERIC_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_score(raw_score: Any) -> int:
    """
    Coerce a client-supplied score to a non-negative integer.

    Numbers and plain decimal strings ("42", " 7.5 ", "1e3") are accepted;
    fractional values are floored. Scores above MAX_SCORE (int64) are
    rejected so every store can hold them.

    Raises:
        InvalidScore: if the score is missing, non-numeric, non-finite,
            negative or too large
    """
    if isinstance(raw_score, bool) or raw_score is None:
        raise InvalidScore(f"score must be a number, got {raw_score!r}")

    if isinstance(raw_score, int):
        value = raw_score
    elif isinstance(raw_score, float):
        if not math.isfinite(raw_score):
            raise InvalidScore(f"score must be finite, got {raw_score!r}")
        value = math.floor(raw_score)
    elif isinstance(raw_score, str):
        text = raw_score.strip()
        if not _NUMERIC_RE.fullmatch(text):
            raise InvalidScore(f"score is not numeric: {raw_score!r}")
        number = float(text)
        if not math.isfinite(number):
            raise InvalidScore(f"score must be finite, got {raw_score!r}")
        value = math.floor(number)
    else:
        raise InvalidScore(f"score must be a number, got {type(raw_score).__name__}")

    if value < 0 or value > MAX_SCORE:
        raise InvalidScore(f"score must be between 0 and {MAX_SCORE}, got {raw_score!r}")
    return value


def normalize_name(raw_name: Any) -> str:
    """Trim and cap a submitter name, falling back to the placeholder when empty."""
    if raw_name is None:
        return DEFAULT_NAME
    name = str(raw_name).strip()[:MAX_NAME_LENGTH]
    return name or DEFAULT_NAME


class LeaderboardService:
    """Service for reading and submitting leaderboard scores."""

    def __init__(self, store: LeaderboardStore):
        self.store = store
        # Serializes load-modify-save within this process only
        self._write_lock = asyncio.Lock()

    async def get_top(self) -> list[LeaderboardEntry]:
        """Current leaderboard, read from the store on every call."""
        return await self.store.load()

    async def submit(self, raw_name: Any, raw_score: Any) -> list[LeaderboardEntry]:
        """
        Validate a submission and merge it into the leaderboard.

        The submitter's previous entry (matched case-insensitively by name)
        is replaced by this one, even if the new score is lower.

        Args:
            raw_name: Client-supplied name, may be None or empty
            raw_score: Client-supplied score, any JSON value

        Returns:
            The leaderboard as just persisted

        Raises:
            InvalidScore: if the score fails validation (nothing is written)
        """
        score = parse_score(raw_score)
        entry = LeaderboardEntry(
            name=normalize_name(raw_name),
            score=score,
            submittedAt=utc_now(),
        )

        async with self._write_lock:
            current = await self.store.load()
            updated = upsert(current, entry)
            await self.store.save(updated)
            # Re-read so the result is exactly what the store kept
            persisted = await self.store.load()

        logger.info(f"Accepted score {entry.score} for {entry.name!r}")
        return persisted

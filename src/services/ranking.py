"""Ranking policy for the leaderboard: ordering, tie-break, truncation and upsert."""

from typing import Iterable

from src.models import LeaderboardEntry

MAX_ENTRIES = 5


def name_key(name: str) -> str:
    """Case-insensitive identity of a submitter name."""
    return name.lower()


def rank(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """
    Order entries and keep the top five.

    Higher scores rank first; equal scores are ordered by earlier submission.
    The sort is stable, so entries with identical score and timestamp keep
    their input order.

    Args:
        entries: Candidate entries in any order

    Returns:
        At most MAX_ENTRIES entries in ranked order
    """
    ordered = sorted(entries, key=lambda e: (-e.score, e.submittedAt))
    return ordered[:MAX_ENTRIES]


def upsert(
    entries: Iterable[LeaderboardEntry],
    candidate: LeaderboardEntry,
) -> list[LeaderboardEntry]:
    """
    Insert or replace the candidate's entry, then re-rank.

    Any existing entry sharing the candidate's name (case-insensitively) is
    dropped, so a submitter holds at most one slot and it always reflects
    their most recent score, not their best one.
    """
    key = name_key(candidate.name)
    remaining = [e for e in entries if name_key(e.name) != key]
    remaining.append(candidate)
    return rank(remaining)

"""Tests for score validation, name normalization and submission."""

import asyncio
import math

import pytest

from src.errors import InvalidScore
from src.services import DEFAULT_NAME, LeaderboardService, normalize_name, parse_score
from src.services.leaderboard_service import MAX_SCORE
from src.stores import FileStore


@pytest.fixture
def service(file_store):
    return LeaderboardService(file_store)


@pytest.mark.parametrize("raw", [
    -1, -0.5, float("nan"), float("inf"), math.inf, None, "abc", "", True, [], {},
    "inf", "nan", "Infinity", "1_000", "0x10", "1e400", "-0.5",
    10 ** 20, 1e20, "1e20", MAX_SCORE + 1,
])
def test_parse_score_rejects_invalid(raw):
    with pytest.raises(InvalidScore):
        parse_score(raw)


@pytest.mark.parametrize("raw, expected", [
    (0, 0),
    (0.0, 0),
    (120, 120),
    (99.9, 99),
    ("42", 42),
    (" 7.8 ", 7),
    ("1e3", 1000),
    (".5", 0),
    ("+12", 12),
    (MAX_SCORE, MAX_SCORE),
])
def test_parse_score_accepts_and_floors(raw, expected):
    assert parse_score(raw) == expected


def test_normalize_name_placeholder():
    assert normalize_name(None) == DEFAULT_NAME
    assert normalize_name("") == DEFAULT_NAME
    assert normalize_name("   \t ") == DEFAULT_NAME


def test_normalize_name_trims_and_caps():
    assert normalize_name("  Ada  ") == "Ada"
    assert normalize_name("x" * 40) == "x" * 32
    assert normalize_name(12345) == "12345"


def test_normalize_name_cap_keeps_inner_space():
    name = "a" * 31 + " " + "b" * 8
    assert normalize_name(name) == "a" * 31 + " "


def test_get_top_on_fresh_store_is_empty(service):
    assert asyncio.run(service.get_top()) == []


def test_submit_persists_entry(service, file_store):
    entries = asyncio.run(service.submit("Ada", 120))

    assert len(entries) == 1
    assert entries[0].name == "Ada"
    assert entries[0].score == 120
    assert asyncio.run(file_store.load()) == entries


def test_submit_most_recent_score_wins(service):
    asyncio.run(service.submit("Ada", 120))
    entries = asyncio.run(service.submit("ada", 80))

    assert len(entries) == 1
    assert entries[0].name == "ada"
    assert entries[0].score == 80


def test_submit_keeps_top_five(service):
    for name, score in zip("ABCDEF", [10, 9, 8, 7, 6, 5]):
        asyncio.run(service.submit(name, score))

    entries = asyncio.run(service.get_top())
    assert [e.score for e in entries] == [10, 9, 8, 7, 6]
    assert "F" not in [e.name for e in entries]


def test_invalid_submission_leaves_store_untouched(service, file_store):
    asyncio.run(service.submit("Ada", 120))
    before = asyncio.run(file_store.load())

    with pytest.raises(InvalidScore):
        asyncio.run(service.submit("Bob", "abc"))

    assert asyncio.run(file_store.load()) == before


def test_submit_assigns_server_timestamp(service):
    first = asyncio.run(service.submit("Ada", 5))[0]
    assert first.submittedAt.tzinfo is not None


def test_concurrent_submissions_are_not_lost(tmp_path):
    service = LeaderboardService(FileStore(tmp_path / "board.json"))

    async def submit_all():
        await asyncio.gather(*(service.submit(f"player{i}", i) for i in range(5)))
        return await service.get_top()

    entries = asyncio.run(submit_all())
    assert sorted(e.name for e in entries) == [f"player{i}" for i in range(5)]

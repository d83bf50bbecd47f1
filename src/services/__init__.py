from .leaderboard_service import LeaderboardService, parse_score, normalize_name, DEFAULT_NAME
from .ranking import rank, upsert, name_key, MAX_ENTRIES

__all__ = [
    "LeaderboardService",
    "parse_score",
    "normalize_name",
    "DEFAULT_NAME",
    "rank",
    "upsert",
    "name_key",
    "MAX_ENTRIES",
]

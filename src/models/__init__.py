from .leaderboard import (
    LeaderboardEntry,
    LeaderboardResponse,
    ErrorResponse,
    MAX_NAME_LENGTH,
    format_timestamp,
    utc_now,
)

__all__ = [
    "LeaderboardEntry",
    "LeaderboardResponse",
    "ErrorResponse",
    "MAX_NAME_LENGTH",
    "format_timestamp",
    "utc_now",
]

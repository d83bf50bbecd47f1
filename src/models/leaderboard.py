"""Leaderboard models shared by the stores, the service and the API."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, ConfigDict, field_serializer, field_validator

MAX_NAME_LENGTH = 32


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds, so it survives serialization."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class LeaderboardEntry(BaseModel):
    """
    A single named, timestamped score on the leaderboard.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    score: int = Field(ge=0, description="Non-negative integer score")
    submittedAt: datetime = Field(description="Server-assigned submission time (UTC)")

    @field_validator("submittedAt")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_serializer("submittedAt")
    def _serialize_submitted_at(self, value: datetime) -> str:
        return format_timestamp(value)


class LeaderboardResponse(BaseModel):
    """Body returned by the leaderboard endpoints."""

    entries: list[LeaderboardEntry]


class ErrorResponse(BaseModel):
    """Body returned for any failed request."""

    error: str

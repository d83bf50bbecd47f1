"""Domain exceptions raised by the leaderboard service and HTTP layer."""

# Localized client-facing messages
INVALID_SCORE_MESSAGE = "유효하지 않은 점수입니다."
BAD_REQUEST_MESSAGE = "요청을 처리할 수 없습니다."
METHOD_NOT_ALLOWED_MESSAGE = "메서드를 지원하지 않습니다."
BAD_PATH_MESSAGE = "잘못된 경로입니다."
INTERNAL_ERROR_MESSAGE = "서버 오류가 발생했습니다."


class LeaderboardError(Exception):
    """Base class for errors that map to a client-facing 4xx response."""

    status_code = 400
    message = BAD_REQUEST_MESSAGE

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidScore(LeaderboardError):
    """Submitted score is missing, non-numeric, non-finite or negative."""

    message = INVALID_SCORE_MESSAGE


class BodyParseError(LeaderboardError):
    """Request body is not a JSON object or exceeds the size cap."""

    message = BAD_REQUEST_MESSAGE


class PathTraversal(LeaderboardError):
    """Static asset path resolves outside the served root."""

    message = BAD_PATH_MESSAGE

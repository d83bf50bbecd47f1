"""API routes for the leaderboard service."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from src.config import Config
from src.errors import METHOD_NOT_ALLOWED_MESSAGE, PathTraversal
from src.models import LeaderboardResponse, ErrorResponse
from src.services import LeaderboardService
from .body import read_json_body
from .dependencies import get_config, get_service
from .static import content_type_for, resolve_static_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
static_router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    service: LeaderboardService = Depends(get_service),
) -> LeaderboardResponse:
    """
    Get the current top five.

    Returns: entries[] with name, score, submittedAt
    """
    return LeaderboardResponse(entries=await service.get_top())


@router.post(
    "/leaderboard",
    response_model=LeaderboardResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def submit_score(
    request: Request,
    service: LeaderboardService = Depends(get_service),
    config: Config = Depends(get_config),
) -> LeaderboardResponse:
    """
    Submit a score.

    Body: {"name"?: string, "score": number}. A later submission under the
    same name (case-insensitive) replaces the earlier one.
    """
    body = await read_json_body(request, config.max_body_bytes)
    entries = await service.submit(body.get("name"), body.get("score"))
    return LeaderboardResponse(entries=entries)


@router.api_route(
    "/leaderboard",
    methods=[m for m in ALL_METHODS if m not in ("GET", "POST")],
    include_in_schema=False,
)
async def leaderboard_method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": METHOD_NOT_ALLOWED_MESSAGE})


@static_router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def serve_static(path: str, config: Config = Depends(get_config)):
    """Serve the web client; "/" maps to index.html."""
    try:
        file_path = resolve_static_path(config.static_dir, path)
        is_file = file_path.is_file()
    except PathTraversal as e:
        logger.warning(f"Rejected static path: {e}")
        return PlainTextResponse(e.message, status_code=400)
    except (ValueError, OSError) as e:
        # e.g. embedded NUL bytes or over-long names; nothing can be served
        logger.info(f"Unresolvable static path {path!r}: {e}")
        is_file = False

    if not is_file:
        return PlainTextResponse("Not Found", status_code=404)

    return FileResponse(file_path, media_type=content_type_for(file_path))

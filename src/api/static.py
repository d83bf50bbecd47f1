"""Static asset lookup for the web client."""

from pathlib import Path

from src.errors import PathTraversal

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"
INDEX_DOCUMENT = "index.html"


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_static_path(root: str | Path, url_path: str) -> Path:
    """
    Map a decoded URL path onto a file path under root.

    "/" maps to the index document. The result may not exist; callers
    check that separately.

    Raises:
        PathTraversal: if the path resolves outside root
    """
    root = Path(root).resolve()
    relative = url_path.lstrip("/") or INDEX_DOCUMENT
    candidate = (root / relative).resolve()
    if candidate != root and root not in candidate.parents:
        raise PathTraversal(f"{url_path!r} escapes {root}")
    return candidate

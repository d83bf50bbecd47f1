"""Local JSON file store."""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from src.models import LeaderboardEntry
from .base import LeaderboardStore

logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(list[LeaderboardEntry])


class FileStore(LeaderboardStore):
    """
    Store implementation backed by a single JSON array on local disk.

    A corrupt file is reset to an empty leaderboard instead of failing the
    request. Writes go to a temp file that is renamed over the target, so
    readers never observe a partial document.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load(self) -> list[LeaderboardEntry]:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, entries: list[LeaderboardEntry]) -> None:
        await asyncio.to_thread(self._save_sync, entries)

    def _load_sync(self) -> list[LeaderboardEntry]:
        self._ensure_file()
        raw = self.path.read_bytes()
        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Failed to read leaderboard from {self.path}, resetting: {e}")
            self._write([])
            return []

    def _save_sync(self, entries: list[LeaderboardEntry]) -> None:
        self._ensure_file()
        self._write(entries)

    def _ensure_file(self) -> None:
        """Create the data directory and an empty document if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write([])

    def _write(self, entries: list[LeaderboardEntry]) -> None:
        payload = json.dumps(
            [e.model_dump(mode="json") for e in entries],
            ensure_ascii=False,
            indent=2,
        )
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            # Leave no stray temp file behind on a failed write
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

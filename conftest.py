"""Shared pytest fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from src.app import create_app
from src.config import Config
from src.models import LeaderboardEntry
from src.stores import FileStore
from src.stores.firestore import WriteBatch, decode_value

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_entry(name: str, score: int, offset_s: int = 0) -> LeaderboardEntry:
    """Entry submitted offset_s seconds after BASE_TIME."""
    return LeaderboardEntry(
        name=name,
        score=score,
        submittedAt=BASE_TIME + timedelta(seconds=offset_s),
    )


class FakeFirestoreClient:
    """In-memory stand-in for FirestoreClient with the same call surface."""

    documents_root = "projects/test/databases/(default)/documents"

    def __init__(self):
        self.collections: dict[str, dict[str, dict]] = {}
        self.commits: list[list[dict]] = []
        self.closed = False

    def document_name(self, collection: str, doc_id: str) -> str:
        return f"{self.documents_root}/{collection}/{doc_id}"

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    def put(self, collection: str, doc_id: str, fields: dict) -> None:
        self.collections.setdefault(collection, {})[doc_id] = dict(fields)

    async def run_query(self, collection, order_by, limit):
        docs = [
            {**fields, "id": doc_id}
            for doc_id, fields in self.collections.get(collection, {}).items()
        ]
        # Apply sort keys last-to-first so the first key dominates
        for field, direction in reversed(order_by):
            docs.sort(key=lambda d: d[field], reverse=direction == "DESCENDING")
        return docs[:limit]

    async def list_documents(self, collection):
        return [
            {**fields, "id": doc_id}
            for doc_id, fields in self.collections.get(collection, {}).items()
        ]

    async def commit(self, writes):
        self.commits.append(writes)
        for write in writes:
            if "update" in write:
                collection, doc_id = write["update"]["name"].split("/")[-2:]
                fields = {k: decode_value(v) for k, v in write["update"]["fields"].items()}
                self.put(collection, doc_id, fields)
            else:
                collection, doc_id = write["delete"].split("/")[-2:]
                self.collections.get(collection, {}).pop(doc_id, None)

    async def close(self):
        self.closed = True


@pytest.fixture
def config(tmp_path):
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>Dust Farm</h1>", encoding="utf-8")
    (static_dir / "app.js").write_text("console.log('ok');", encoding="utf-8")
    return Config(
        data_file=str(tmp_path / "data" / "leaderboard.json"),
        static_dir=str(static_dir),
    )


@pytest.fixture
def file_store(config):
    return FileStore(config.data_file)


@pytest.fixture
def client(config, file_store):
    app = create_app(config, store=file_store)
    with TestClient(app) as c:
        yield c

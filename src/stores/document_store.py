"""Firestore-backed leaderboard store."""

import logging
import re

from src.models import LeaderboardEntry
from src.services.ranking import MAX_ENTRIES
from .base import LeaderboardStore
from .firestore import FirestoreClient

logger = logging.getLogger(__name__)

FALLBACK_DOCUMENT_ID = "anonymous"

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_ID_CHARS_RE = re.compile(r"[^a-z0-9_-]")


def document_id(name: str) -> str:
    """
    Derive a stable document id from an entry name.

    Lowercases, collapses whitespace runs into "-", and drops anything
    outside [a-z0-9_-]. Names that reduce to nothing share a fallback id.
    """
    slug = _WHITESPACE_RE.sub("-", name.strip().lower())
    slug = _INVALID_ID_CHARS_RE.sub("", slug)
    return slug or FALLBACK_DOCUMENT_ID


class DocumentStore(LeaderboardStore):
    """
    Store implementation backed by a Firestore collection.

    The collection only ever holds the current top entries: every save
    writes the ranked entries and deletes every other document in the
    same atomic commit.
    """

    def __init__(self, client: FirestoreClient, collection: str = "leaderboard"):
        self.client = client
        self.collection = collection

    async def load(self) -> list[LeaderboardEntry]:
        documents = await self.client.run_query(
            self.collection,
            order_by=[("score", "DESCENDING"), ("submittedAt", "ASCENDING")],
            limit=MAX_ENTRIES,
        )
        return [
            LeaderboardEntry.model_validate({
                "name": doc.get("name"),
                "score": doc.get("score"),
                "submittedAt": doc.get("submittedAt"),
            })
            for doc in documents
        ]

    async def save(self, entries: list[LeaderboardEntry]) -> None:
        keep_ids: set[str] = set()

        batch = self.client.batch()
        for entry in entries:
            doc_id = document_id(entry.name)
            if doc_id in keep_ids:
                # Higher-ranked entry already owns this slug
                logger.warning(f"Document id collision for {entry.name!r} ({doc_id}), skipping")
                continue
            keep_ids.add(doc_id)
            batch.set(self.collection, doc_id, entry.model_dump(mode="json"))

        existing = await self.client.list_documents(self.collection)
        stale = 0
        for doc in existing:
            if doc["id"] in keep_ids:
                # Overwritten by this batch already
                continue
            batch.delete(self.collection, doc["id"])
            stale += 1

        await batch.commit()
        logger.debug(f"Saved {len(entries)} entries, deleted {stale} stale documents")

    async def close(self) -> None:
        await self.client.close()

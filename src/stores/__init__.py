from .base import LeaderboardStore
from .file_store import FileStore
from .document_store import DocumentStore, document_id
from .firestore import FirestoreClient
from .factory import create_store

__all__ = [
    "LeaderboardStore",
    "FileStore",
    "DocumentStore",
    "FirestoreClient",
    "create_store",
    "document_id",
]

"""Startup-time selection of the leaderboard store."""

import logging

from src.config import Config
from .base import LeaderboardStore
from .document_store import DocumentStore
from .file_store import FileStore
from .firestore import FirestoreClient

logger = logging.getLogger(__name__)


def create_store(config: Config) -> LeaderboardStore:
    """
    Build the store the process will use for its whole lifetime.

    Firestore is used only when the full service-account credential set is
    configured; otherwise the leaderboard lives in a local JSON file.
    """
    if config.firestore_enabled:
        logger.info(
            f"Using Firestore leaderboard store "
            f"(project={config.firebase_project_id}, collection={config.firestore_collection})"
        )
        client = FirestoreClient.from_service_account(
            project_id=config.firebase_project_id,
            client_email=config.firebase_client_email,
            private_key=config.firebase_private_key,
        )
        return DocumentStore(client, collection=config.firestore_collection)

    logger.info(f"Firestore credentials not configured, using file store at {config.data_file}")
    return FileStore(config.data_file)

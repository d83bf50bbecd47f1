"""Application configuration."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "public"
    max_body_bytes: int = 1_000_000
    log_level: str = "INFO"

    # Local file backend
    data_file: str = "data/leaderboard.json"

    # Firestore backend (used only when all three credentials are set)
    firebase_project_id: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firestore_collection: str = "leaderboard"

    @property
    def firestore_enabled(self) -> bool:
        """True when a full service-account credential set is configured."""
        return all((
            self.firebase_project_id,
            self.firebase_client_email,
            self.firebase_private_key,
        ))

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            static_dir=os.getenv("STATIC_DIR", "public"),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", "1000000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            data_file=os.getenv("LEADERBOARD_FILE", "data/leaderboard.json"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            firebase_client_email=os.getenv("FIREBASE_CLIENT_EMAIL") or None,
            firebase_private_key=os.getenv("FIREBASE_PRIVATE_KEY") or None,
            firestore_collection=os.getenv("FIRESTORE_COLLECTION", "leaderboard"),
        )

"""FastAPI dependencies for dependency injection."""

from src.config import Config
from src.services import LeaderboardService

# Global instances - initialized at app startup
_service: LeaderboardService | None = None
_config: Config | None = None


def set_service(service: LeaderboardService) -> None:
    """Set the global leaderboard service instance."""
    global _service
    _service = service


def get_service() -> LeaderboardService:
    """Get the global leaderboard service instance for dependency injection."""
    if _service is None:
        raise RuntimeError("LeaderboardService not initialized. Call set_service() first.")
    return _service


def set_config(config: Config) -> None:
    """Set the global configuration."""
    global _config
    _config = config


def get_config() -> Config:
    """Get the global configuration for dependency injection."""
    if _config is None:
        raise RuntimeError("Config not initialized. Call set_config() first.")
    return _config

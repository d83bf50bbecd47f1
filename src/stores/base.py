"""Abstract base class for leaderboard stores."""

from abc import ABC, abstractmethod

from src.models import LeaderboardEntry


class LeaderboardStore(ABC):
    """
    Abstract persistence interface for the leaderboard.

    Two implementations exist: a local JSON file and a Firestore collection.
    One is chosen at startup and shared by every request for the lifetime
    of the process.
    """

    @abstractmethod
    async def load(self) -> list[LeaderboardEntry]:
        """
        Read the persisted leaderboard.

        Returns:
            Entries in ranked order (at most five)

        Note:
            Infrastructure failures (disk, network) are not caught here.
        """
        pass

    @abstractmethod
    async def save(self, entries: list[LeaderboardEntry]) -> None:
        """
        Replace the persisted leaderboard with the given entries.

        Args:
            entries: Already ranked entries; stored as given
        """
        pass

    async def close(self) -> None:
        """
        Clean up resources (e.g., close HTTP sessions).

        Override this if the store holds resources that need cleanup.
        """
        pass

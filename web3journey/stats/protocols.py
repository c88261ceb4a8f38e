"""Stats storage contract."""

from typing import Any, Protocol
from uuid import UUID

from .schemas import UserStatsRecord


class StatsRepository(Protocol):
    """Access to the single user_stats row of a user.

    Implementations raise ``RemoteStoreError`` on any store failure.
    """

    async def get(self, user_id: UUID) -> UserStatsRecord | None:
        """The user's row, or None when it does not exist yet."""
        ...

    async def create(self, user_id: UUID) -> UserStatsRecord:
        """Insert a zero-valued row (or return the existing one)."""
        ...

    async def update(self, user_id: UUID, values: dict[str, Any]) -> None:
        """Write ``values`` to the user's row in one statement."""
        ...

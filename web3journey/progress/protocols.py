"""Progress storage contract.

The progress store only talks to the remote data store through this
protocol, so it can run against SQL, an HTTP backend or an in-memory fake.
"""

from typing import Protocol
from uuid import UUID

from .schemas import LearningProgressRecord, ProjectProgressRecord


class ProgressRepository(Protocol):
    """Select-all-by-user and upsert-by-unique-key access to progress rows.

    Implementations raise ``RemoteStoreError`` on any store failure.
    """

    async def fetch_learning(self, user_id: UUID) -> list[LearningProgressRecord]:
        """Every learning_progress row owned by the user."""
        ...

    async def fetch_projects(self, user_id: UUID) -> list[ProjectProgressRecord]:
        """Every project_progress row owned by the user."""
        ...

    async def upsert_learning(self, record: LearningProgressRecord) -> None:
        """Insert or update the row keyed by (user_id, module_id, topic_id)."""
        ...

    async def upsert_project(self, record: ProjectProgressRecord) -> None:
        """Insert or update the row keyed by (user_id, project_id)."""
        ...

"""Topic and project progress: store, aggregates, change feed and no-account cache."""

from .local_cache import LearningStatus, LocalProgressCache, format_learning_time
from .realtime import ChangeEvent, ChangeFeed, change_feed
from .schemas import LearningProgressRecord, ProgressStatus, ProjectProgressRecord, SyncResult
from .store import ProgressStore


__all__ = [
    "ChangeEvent",
    "ChangeFeed",
    "LearningProgressRecord",
    "LearningStatus",
    "LocalProgressCache",
    "ProgressStatus",
    "ProgressStore",
    "ProjectProgressRecord",
    "SyncResult",
    "change_feed",
    "format_learning_time",
]

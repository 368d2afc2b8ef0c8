"""数据模型."""

from autopull.models.outcome import SyncReport, TaskAction, TaskOutcome, TaskStatus
from autopull.models.repository import RepositoryRecord

__all__ = [
    "RepositoryRecord",
    "SyncReport",
    "TaskAction",
    "TaskOutcome",
    "TaskStatus",
]

"""同步结果模型."""

from dataclasses import dataclass, field
from enum import StrEnum


class TaskStatus(StrEnum):
    """单个仓库同步的最终状态."""

    UPDATED = "updated"
    CLONED = "cloned"
    FAILED = "failed"


class TaskAction(StrEnum):
    """同步动作."""

    PULL = "pull"
    CLONE = "clone"


@dataclass(frozen=True)
class TaskOutcome:
    """单个仓库的同步结果."""

    repo_name: str
    action: TaskAction
    status: TaskStatus
    reason: str | None = None  # 仅失败时有值
    timed_out: bool = False

    @property
    def failed(self) -> bool:
        return self.status is TaskStatus.FAILED

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "repo_name": self.repo_name,
            "action": self.action.value,
            "status": self.status.value,
            "reason": self.reason,
            "timed_out": self.timed_out,
        }


@dataclass
class SyncReport:
    """一次同步的汇总（按拉取顺序排列）."""

    outcomes: list[TaskOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if o.status is TaskStatus.FAILED]

    @property
    def updated(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if o.status is TaskStatus.UPDATED]

    @property
    def cloned(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if o.status is TaskStatus.CLONED]

    @property
    def ok(self) -> bool:
        return not self.failures

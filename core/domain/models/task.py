from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from core.domain.errors import (
    AlreadyCompletedError,
    EmptyTitleError,
    InvalidPriorityError,
    InvalidStatusError,
    TitleTooLongError,
)

MAX_TITLE_LENGTH = 255


class TaskStatus(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class TaskPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def coerce(enum_cls: type[Enum], value):
    """Return the enum member for ``value``, or ``value`` itself when unknown.

    Unknown values are left in place so that ``Task.validate`` reports them.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(slots=True)
class Task:
    id: str
    title: str
    status: TaskStatus = TaskStatus.ACTIVE
    priority: TaskPriority = TaskPriority.MEDIUM
    created_at: datetime = field(default_factory=datetime.now)
    due_date: datetime | None = None

    @classmethod
    def new(
        cls,
        title: str,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
    ) -> "Task":
        task = cls(
            id=str(uuid4()),
            title=title,
            status=TaskStatus.ACTIVE,
            priority=coerce(TaskPriority, priority),
            created_at=datetime.now(),
            due_date=due_date,
        )
        task.validate()
        return task

    def validate(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise EmptyTitleError()
        if len(self.title) > MAX_TITLE_LENGTH:
            raise TitleTooLongError()
        if not isinstance(self.status, TaskStatus):
            raise InvalidStatusError(f"invalid status: {self.status!r}")
        if not isinstance(self.priority, TaskPriority):
            raise InvalidPriorityError(f"invalid priority: {self.priority!r}")

    def complete(self) -> None:
        if self.status is TaskStatus.COMPLETED:
            raise AlreadyCompletedError()
        self.status = TaskStatus.COMPLETED

    def is_overdue(self, now: datetime | None = None) -> bool:
        if self.due_date is None or self.status is not TaskStatus.ACTIVE:
            return False
        return self.due_date < (now or datetime.now())

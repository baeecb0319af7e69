from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.application.get_dashboard import Dashboard
from core.application.list_tasks import TaskList
from core.domain.errors import InvalidDueDateError
from core.domain.models.task import Task


def local_datetime(value: datetime | str | None) -> datetime | None:
    """Normalize a timestamp to a naive local datetime, the form tasks are stored in."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            raise InvalidDueDateError(f"invalid due date: {value!r}") from e
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


class TaskView(BaseModel):
    """
    Plain-data view of a task as handed to the UI shell.

    Serialized with aliases: ``id``, ``title``, ``status``, ``priority``,
    ``createdAt`` and ``dueDate``.
    """

    id: str
    title: str
    status: str
    priority: str
    created_at: datetime = Field(alias="createdAt")
    due_date: datetime | None = Field(default=None, alias="dueDate")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, task: Task) -> "TaskView":
        return cls(
            id=task.id,
            title=task.title,
            status=task.status.value,
            priority=task.priority.value,
            created_at=task.created_at,
            due_date=task.due_date,
        )


class TaskListView(BaseModel):
    tasks: list[TaskView]
    total: int

    @classmethod
    def from_domain(cls, result: TaskList) -> "TaskListView":
        return cls(
            tasks=[TaskView.from_domain(task) for task in result.tasks],
            total=result.total,
        )


class DashboardView(BaseModel):
    active_count: int
    completed_count: int
    overdue_count: int
    due_today: list[TaskView]
    due_this_week: list[TaskView]
    recent_tasks: list[TaskView]

    @classmethod
    def from_domain(cls, dashboard: Dashboard) -> "DashboardView":
        return cls(
            active_count=dashboard.active_count,
            completed_count=dashboard.completed_count,
            overdue_count=dashboard.overdue_count,
            due_today=[TaskView.from_domain(t) for t in dashboard.due_today],
            due_this_week=[TaskView.from_domain(t) for t in dashboard.due_this_week],
            recent_tasks=[TaskView.from_domain(t) for t in dashboard.recent_tasks],
        )


class CreatedTaskView(BaseModel):
    id: str


class CreateTaskRequest(BaseModel):
    title: str
    priority: str | None = None
    due_date: datetime | None = Field(default=None, alias="dueDate")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("due_date")
    @classmethod
    def _local_due_date(cls, value: datetime | None) -> datetime | None:
        return local_datetime(value)


class UpdateTaskRequest(BaseModel):
    """Partial update: only the fields present in the payload are applied."""

    title: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: datetime | None = Field(default=None, alias="dueDate")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("due_date")
    @classmethod
    def _local_due_date(cls, value: datetime | None) -> datetime | None:
        return local_datetime(value)

    def provided(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}

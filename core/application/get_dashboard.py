from dataclasses import dataclass, field
from datetime import datetime

from core.application.errors import wrap_errors
from core.application.list_tasks import Clock, ListTasksUseCase
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository

RECENT_TASKS_LIMIT = 5


@dataclass(slots=True)
class Dashboard:
    active_count: int = 0
    completed_count: int = 0
    overdue_count: int = 0
    due_today: list[Task] = field(default_factory=list)
    due_this_week: list[Task] = field(default_factory=list)
    recent_tasks: list[Task] = field(default_factory=list)


class GetDashboardUseCase:
    def __init__(self, repository: TaskRepository, clock: Clock = datetime.now) -> None:
        self._repository = repository
        self._list_tasks = ListTasksUseCase(repository, clock=clock)

    def execute(self) -> Dashboard:
        with wrap_errors("get active tasks"):
            active = self._repository.get_by_status(TaskStatus.ACTIVE)
        with wrap_errors("get completed tasks"):
            completed = self._repository.get_by_status(TaskStatus.COMPLETED)
        with wrap_errors("get due today"):
            due_today = self._list_tasks.due_today()
        with wrap_errors("get due this week"):
            due_this_week = self._list_tasks.due_this_week()
        with wrap_errors("get overdue"):
            overdue = self._list_tasks.overdue()

        recent = sorted(active, key=lambda task: task.created_at, reverse=True)

        return Dashboard(
            active_count=len(active),
            completed_count=len(completed),
            overdue_count=len(overdue),
            due_today=due_today,
            due_this_week=due_this_week,
            recent_tasks=recent[:RECENT_TASKS_LIMIT],
        )

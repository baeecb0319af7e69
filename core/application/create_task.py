import logging
from dataclasses import dataclass
from datetime import datetime

from core.application.errors import wrap_errors
from core.domain.models.task import Task, TaskPriority
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateTaskCommand:
    title: str
    priority: TaskPriority | str | None = None
    due_date: datetime | None = None


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CreateTaskCommand) -> str:
        priority = cmd.priority or TaskPriority.MEDIUM

        with wrap_errors("create task"):
            task = Task.new(cmd.title, priority, cmd.due_date)

        with wrap_errors("save task"):
            self._repository.save(task)

        logger.info(f"Task {task.id} created (priority={task.priority.value})")
        return task.id

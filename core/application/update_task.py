import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from core.application.errors import wrap_errors
from core.domain.models.task import Task, TaskPriority, TaskStatus, coerce
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(slots=True)
class UpdateTaskCommand:
    """Patch for a task: only fields that are not UNSET are applied.

    ``due_date=None`` clears the due date.
    """

    title: str = UNSET
    status: TaskStatus | str = UNSET
    priority: TaskPriority | str = UNSET
    due_date: datetime | None = UNSET


class UpdateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: str, cmd: UpdateTaskCommand) -> Task:
        with wrap_errors("get task"):
            task = self._repository.get_by_id(task_id)

        previous_status = task.status

        if cmd.title is not UNSET:
            task.title = cmd.title
        if cmd.status is not UNSET:
            task.status = coerce(TaskStatus, cmd.status)
        if cmd.priority is not UNSET:
            task.priority = coerce(TaskPriority, cmd.priority)
        if cmd.due_date is not UNSET:
            task.due_date = cmd.due_date

        with wrap_errors("validate task"):
            task.validate()

        # Completion is one-way through CompleteTask, but an update may still
        # put a completed task back to active.
        if previous_status is TaskStatus.COMPLETED and task.status is TaskStatus.ACTIVE:
            logger.warning(f"Task {task_id} reopened through update")

        with wrap_errors("save task"):
            self._repository.save(task)

        logger.info(f"Task {task_id} updated")
        return task

from dataclasses import dataclass

from core.application.errors import wrap_errors
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class GetTaskCommand:
    id: str


class GetTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: GetTaskCommand) -> Task:
        with wrap_errors("get task"):
            return self._repository.get_by_id(cmd.id)

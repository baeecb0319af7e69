import logging
from dataclasses import dataclass

from core.application.errors import wrap_errors
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompleteTaskCommand:
    id: str


class CompleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CompleteTaskCommand) -> Task:
        def complete(repo: TaskRepository) -> Task:
            with wrap_errors("get task"):
                task = repo.get_by_id(cmd.id)
            with wrap_errors("complete task"):
                task.complete()
            with wrap_errors("save task"):
                repo.save(task)
            return task

        with wrap_errors("complete task", wrap_domain=False):
            task = self._repository.with_tx(complete)

        logger.info(f"Task {cmd.id} completed")
        return task

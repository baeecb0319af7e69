import logging
from dataclasses import dataclass

from core.application.errors import wrap_errors
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeleteTaskCommand:
    id: str


class DeleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: DeleteTaskCommand) -> None:
        # Separate existence check: a second delete reports NotFound.
        with wrap_errors("get task"):
            self._repository.get_by_id(cmd.id)

        with wrap_errors("delete task"):
            self._repository.delete(cmd.id)

        logger.info(f"Task {cmd.id} deleted")

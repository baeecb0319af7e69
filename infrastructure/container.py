import logging
from functools import lru_cache

from core.application.complete_task import CompleteTaskUseCase
from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.get_dashboard import GetDashboardUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from infrastructure.settings import ORM_MEMORY, ORM_SQLALCHEMY, get_settings
from presentation.task_handler import TaskHandler

logger = logging.getLogger(__name__)


def build_task_repository(orm: str) -> TaskRepository:
    # Adapters are imported lazily: each one opens its database on import.
    if orm == ORM_MEMORY:
        from infrastructure.memory.repository.task_repository import (
            InMemoryTaskRepository,
        )

        return InMemoryTaskRepository()
    if orm == ORM_SQLALCHEMY:
        from infrastructure.sqlalchemy.repository.task_repository import (
            SqlAlchemyTaskRepository,
        )

        return SqlAlchemyTaskRepository()
    # Default to Peewee
    from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

    return PeeweeTaskRepository()


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    orm = get_settings().orm
    logger.info(f"Using '{orm}' task repository")
    return build_task_repository(orm)


def get_create_task_use_case() -> CreateTaskUseCase:
    return CreateTaskUseCase(repository=get_task_repository())


def get_update_task_use_case() -> UpdateTaskUseCase:
    return UpdateTaskUseCase(repository=get_task_repository())


def get_complete_task_use_case() -> CompleteTaskUseCase:
    return CompleteTaskUseCase(repository=get_task_repository())


def get_delete_task_use_case() -> DeleteTaskUseCase:
    return DeleteTaskUseCase(repository=get_task_repository())


def get_get_task_use_case() -> GetTaskUseCase:
    return GetTaskUseCase(repository=get_task_repository())


def get_list_tasks_use_case() -> ListTasksUseCase:
    return ListTasksUseCase(repository=get_task_repository())


def get_dashboard_use_case() -> GetDashboardUseCase:
    return GetDashboardUseCase(repository=get_task_repository())


def get_task_handler() -> TaskHandler:
    """Handler for the desktop shell, bound to the configured repository."""
    return TaskHandler.for_repository(get_task_repository())

from core.application.get_dashboard import GetDashboardUseCase
from infrastructure.container import (
    build_task_repository,
    get_dashboard_use_case,
    get_task_handler,
    get_task_repository,
)
from infrastructure.memory.repository.task_repository import InMemoryTaskRepository
from infrastructure.settings import ORM_MEMORY, ORM_SQLALCHEMY
from presentation.task_handler import TaskHandler


def test_build_memory_repository():
    assert isinstance(build_task_repository(ORM_MEMORY), InMemoryTaskRepository)


def test_build_sqlalchemy_repository():
    from infrastructure.sqlalchemy.repository.task_repository import (
        SqlAlchemyTaskRepository,
    )

    assert isinstance(build_task_repository(ORM_SQLALCHEMY), SqlAlchemyTaskRepository)


def test_repository_is_shared_between_use_cases():
    # ORM=memory is set in conftest.
    assert get_task_repository() is get_task_repository()
    assert isinstance(get_task_repository(), InMemoryTaskRepository)
    assert isinstance(get_dashboard_use_case(), GetDashboardUseCase)


def test_task_handler_uses_the_shared_repository():
    handler = get_task_handler()
    task_id = handler.create_task("From the shell")["id"]

    assert isinstance(handler, TaskHandler)
    assert get_task_repository().get_by_id(task_id).title == "From the shell"

    get_task_repository().delete(task_id)

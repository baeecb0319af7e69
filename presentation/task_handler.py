from datetime import datetime
from typing import Any

from core.application.complete_task import CompleteTaskCommand, CompleteTaskUseCase
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.get_dashboard import GetDashboardUseCase
from core.application.get_task import GetTaskCommand, GetTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.update_task import UNSET, UpdateTaskCommand, UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from presentation.schemas import (
    CreatedTaskView,
    DashboardView,
    TaskListView,
    TaskView,
    local_datetime,
)


class TaskHandler:
    """
    Direct method-call binding between a UI shell and the use cases.

    Inputs are primitives (strings, ``None`` for absent values, datetimes or
    ISO-8601 strings); outputs are JSON-ready dicts. Errors are raised as
    they come out of the use cases.
    """

    def __init__(
        self,
        create_task: CreateTaskUseCase,
        update_task: UpdateTaskUseCase,
        complete_task: CompleteTaskUseCase,
        get_task: GetTaskUseCase,
        list_tasks: ListTasksUseCase,
        get_dashboard: GetDashboardUseCase,
        delete_task: DeleteTaskUseCase,
    ) -> None:
        self._create_task = create_task
        self._update_task = update_task
        self._complete_task = complete_task
        self._get_task = get_task
        self._list_tasks = list_tasks
        self._get_dashboard = get_dashboard
        self._delete_task = delete_task

    @classmethod
    def for_repository(cls, repository: TaskRepository) -> "TaskHandler":
        return cls(
            create_task=CreateTaskUseCase(repository),
            update_task=UpdateTaskUseCase(repository),
            complete_task=CompleteTaskUseCase(repository),
            get_task=GetTaskUseCase(repository),
            list_tasks=ListTasksUseCase(repository),
            get_dashboard=GetDashboardUseCase(repository),
            delete_task=DeleteTaskUseCase(repository),
        )

    def create_task(
        self,
        title: str,
        priority: str | None = None,
        due_date: datetime | str | None = None,
    ) -> dict[str, Any]:
        task_id = self._create_task.execute(
            CreateTaskCommand(
                title=title, priority=priority, due_date=local_datetime(due_date)
            )
        )
        return CreatedTaskView(id=task_id).model_dump()

    def update_task(
        self,
        task_id: str,
        title: str = UNSET,
        status: str = UNSET,
        priority: str = UNSET,
        due_date: datetime | str | None = UNSET,
    ) -> dict[str, Any]:
        if due_date is not UNSET:
            due_date = local_datetime(due_date)
        task = self._update_task.execute(
            task_id,
            UpdateTaskCommand(
                title=title, status=status, priority=priority, due_date=due_date
            ),
        )
        return _dump(TaskView.from_domain(task))

    def complete_task(self, task_id: str) -> dict[str, Any]:
        task = self._complete_task.execute(CompleteTaskCommand(id=task_id))
        return _dump(TaskView.from_domain(task))

    def get_task(self, task_id: str) -> dict[str, Any]:
        task = self._get_task.execute(GetTaskCommand(id=task_id))
        return _dump(TaskView.from_domain(task))

    def list_tasks(
        self,
        status: str | None = None,
        priority: str | None = None,
        filter: str | None = None,
    ) -> dict[str, Any]:
        result = self._list_tasks.execute(
            ListTasksCommand(status=status, priority=priority, filter=filter)
        )
        return _dump(TaskListView.from_domain(result))

    def get_dashboard(self) -> dict[str, Any]:
        return _dump(DashboardView.from_domain(self._get_dashboard.execute()))

    def delete_task(self, task_id: str) -> None:
        self._delete_task.execute(DeleteTaskCommand(id=task_id))


def _dump(view) -> dict[str, Any]:
    return view.model_dump(by_alias=True, mode="json")

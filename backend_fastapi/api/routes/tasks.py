from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend_fastapi.api.deps import (
    complete_task_use_case,
    create_task_use_case,
    dashboard_use_case,
    delete_task_use_case,
    get_task_use_case,
    list_tasks_use_case,
    update_task_use_case,
)
from core.application.complete_task import CompleteTaskCommand, CompleteTaskUseCase
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.get_dashboard import GetDashboardUseCase
from core.application.get_task import GetTaskCommand, GetTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.errors import (
    AlreadyCompletedError,
    InvalidFilterError,
    RepositoryError,
    TaskNotFoundError,
    ValidationError,
)
from presentation.schemas import (
    CreatedTaskView,
    CreateTaskRequest,
    DashboardView,
    TaskListView,
    TaskView,
    UpdateTaskRequest,
)

router = APIRouter(tags=["tasks"])


@contextmanager
def http_errors() -> Iterator[None]:
    """Translates domain errors into HTTP responses."""
    try:
        yield
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AlreadyCompletedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (ValidationError, InvalidFilterError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RepositoryError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )


@router.post(
    "/tasks",
    response_model=CreatedTaskView,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
def create_task(
    body: CreateTaskRequest,
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> CreatedTaskView:
    """
    Creates a new active task.

    - **title**: Task title, 1 to 255 characters.
    - **priority**: `low`, `medium` or `high` (defaults to `medium`).
    - **dueDate**: Optional due date.
    """
    with http_errors():
        task_id = use_case.execute(
            CreateTaskCommand(
                title=body.title, priority=body.priority, due_date=body.due_date
            )
        )
    return CreatedTaskView(id=task_id)


@router.get(
    "/tasks",
    response_model=TaskListView,
    summary="List tasks",
)
def list_tasks(
    status_: str | None = Query(default=None, alias="status"),
    priority: str | None = Query(default=None),
    filter_: str | None = Query(default=None, alias="filter"),
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
) -> TaskListView:
    """
    Lists tasks, optionally narrowed down.

    - **filter**: `today`, `week` or `overdue`; takes precedence over status.
    - **status**: `active` or `completed`.
    - **priority**: applied on top of the other filters.
    """
    with http_errors():
        result = use_case.execute(
            ListTasksCommand(status=status_, priority=priority, filter=filter_)
        )
    return TaskListView.from_domain(result)


@router.get(
    "/tasks/{task_id}",
    response_model=TaskView,
    summary="Get a task",
)
def get_task(
    task_id: str,
    use_case: GetTaskUseCase = Depends(get_task_use_case),
) -> TaskView:
    with http_errors():
        task = use_case.execute(GetTaskCommand(id=task_id))
    return TaskView.from_domain(task)


@router.patch(
    "/tasks/{task_id}",
    response_model=TaskView,
    summary="Update a task",
)
def update_task(
    task_id: str,
    body: UpdateTaskRequest,
    use_case: UpdateTaskUseCase = Depends(update_task_use_case),
) -> TaskView:
    """
    Applies only the fields present in the body. `"dueDate": null` clears
    the due date.
    """
    with http_errors():
        task = use_case.execute(task_id, UpdateTaskCommand(**body.provided()))
    return TaskView.from_domain(task)


@router.post(
    "/tasks/{task_id}/complete",
    response_model=TaskView,
    summary="Complete a task",
)
def complete_task(
    task_id: str,
    use_case: CompleteTaskUseCase = Depends(complete_task_use_case),
) -> TaskView:
    with http_errors():
        task = use_case.execute(CompleteTaskCommand(id=task_id))
    return TaskView.from_domain(task)


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
def delete_task(
    task_id: str,
    use_case: DeleteTaskUseCase = Depends(delete_task_use_case),
) -> None:
    with http_errors():
        use_case.execute(DeleteTaskCommand(id=task_id))


@router.get(
    "/dashboard",
    response_model=DashboardView,
    summary="Task dashboard",
)
def get_dashboard(
    use_case: GetDashboardUseCase = Depends(dashboard_use_case),
) -> DashboardView:
    """
    Active, completed and overdue counts, tasks due today and this week, and
    the five most recently created active tasks.
    """
    with http_errors():
        dashboard = use_case.execute()
    return DashboardView.from_domain(dashboard)

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from core.application.errors import wrap_errors
from core.domain.errors import InvalidFilterError, InvalidPriorityError, InvalidStatusError
from core.domain.models.task import Task, TaskPriority, TaskStatus, coerce
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)

FILTER_TODAY = "today"
FILTER_WEEK = "week"
FILTER_OVERDUE = "overdue"
FILTERS = (FILTER_TODAY, FILTER_WEEK, FILTER_OVERDUE)

# Lower bound for the overdue window.
EPOCH_FLOOR = datetime(1970, 1, 1)

Clock = Callable[[], datetime]


def day_window(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=24)


def week_window(now: datetime) -> tuple[datetime, datetime]:
    """Sunday-anchored week containing ``now``."""
    days_since_sunday = (now.weekday() + 1) % 7
    start, _ = day_window(now - timedelta(days=days_since_sunday))
    return start, start + timedelta(days=7)


@dataclass(slots=True)
class ListTasksCommand:
    status: TaskStatus | str | None = None
    priority: TaskPriority | str | None = None
    filter: str | None = None


@dataclass(slots=True)
class TaskList:
    tasks: list[Task] = field(default_factory=list)
    total: int = 0


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository, clock: Clock = datetime.now) -> None:
        self._repository = repository
        self._clock = clock

    def execute(self, cmd: ListTasksCommand | None = None) -> TaskList:
        cmd = cmd or ListTasksCommand()

        with wrap_errors("get tasks"):
            if cmd.filter is not None:
                tasks = self._select_by_filter(cmd.filter)
            elif cmd.status is not None:
                status = coerce(TaskStatus, cmd.status)
                if not isinstance(status, TaskStatus):
                    raise InvalidStatusError(f"invalid status: {cmd.status!r}")
                tasks = self._repository.get_by_status(status)
            else:
                tasks = self._repository.get_all()

        if cmd.priority is not None:
            with wrap_errors("filter tasks"):
                priority = coerce(TaskPriority, cmd.priority)
                if not isinstance(priority, TaskPriority):
                    raise InvalidPriorityError(f"invalid priority: {cmd.priority!r}")
            tasks = [task for task in tasks if task.priority is priority]

        logger.debug(
            f"Listed {len(tasks)} tasks "
            f"(filter={cmd.filter}, status={cmd.status}, priority={cmd.priority})"
        )
        return TaskList(tasks=tasks, total=len(tasks))

    def _select_by_filter(self, name: str) -> list[Task]:
        if name == FILTER_TODAY:
            return self.due_today()
        if name == FILTER_WEEK:
            return self.due_this_week()
        if name == FILTER_OVERDUE:
            return self.overdue()
        raise InvalidFilterError(f"invalid filter: {name!r}")

    def due_today(self) -> list[Task]:
        return self._repository.get_due_between(*day_window(self._clock()))

    def due_this_week(self) -> list[Task]:
        return self._repository.get_due_between(*week_window(self._clock()))

    def overdue(self) -> list[Task]:
        now = self._clock()
        tasks = self._repository.get_due_between(EPOCH_FLOOR, now)
        return [
            task
            for task in tasks
            if task.status is TaskStatus.ACTIVE and task.is_overdue(now)
        ]

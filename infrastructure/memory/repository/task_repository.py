import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable, TypeVar

from core.domain.errors import RepositoryError, TaskNotFoundError
from core.domain.models.task import Task, TaskStatus
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _newest_first(tasks: list[Task]) -> list[Task]:
    return sorted(tasks, key=lambda task: task.created_at, reverse=True)


class InMemoryTaskRepository(TaskRepository):
    """
    TaskRepository backed by a dict owned by the instance.

    Every access goes through a single reentrant lock. Tasks are copied on
    the way in and on the way out, so callers never share the stored objects.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._lock = threading.RLock()
        self._tx_thread: int | None = None

    def save(self, task: Task) -> None:
        if not task.id:
            raise RepositoryError("task id cannot be empty")
        with self._lock:
            self._tasks[task.id] = replace(task)

    def get_by_id(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                raise TaskNotFoundError()
            return replace(task)

    def get_all(self) -> list[Task]:
        return self._select(lambda task: True)

    def get_by_status(self, status: TaskStatus) -> list[Task]:
        return self._select(lambda task: task.status is status)

    def get_due_between(self, start: datetime, end: datetime) -> list[Task]:
        return self._select(
            lambda task: task.due_date is not None and start <= task.due_date < end
        )

    def delete(self, task_id: str) -> None:
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFoundError()
            del self._tasks[task_id]

    def with_tx(self, fn: Callable[[TaskRepository], T]) -> T:
        """
        Runs ``fn`` while holding the lock, so no other thread can interleave.

        On error the store is restored to the snapshot taken on entry and the
        error is re-raised.
        """
        with self._lock:
            if self._tx_thread == threading.get_ident():
                raise RepositoryError("nested transactions are not supported")

            snapshot = {task_id: replace(task) for task_id, task in self._tasks.items()}
            self._tx_thread = threading.get_ident()
            try:
                return fn(self)
            except Exception:
                self._tasks = snapshot
                logger.warning("In-memory transaction rolled back")
                raise
            finally:
                self._tx_thread = None

    def _select(self, predicate: Callable[[Task], bool]) -> list[Task]:
        with self._lock:
            tasks = [replace(task) for task in self._tasks.values() if predicate(task)]
        return _newest_first(tasks)

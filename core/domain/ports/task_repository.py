from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, TypeVar

from core.domain.models.task import Task, TaskStatus

T = TypeVar("T")


class TaskRepository(ABC):
    @abstractmethod
    def save(self, task: Task) -> None:
        """Insert or overwrite the task stored under ``task.id``."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, task_id: str) -> Task:
        """Raises TaskNotFoundError when no task has ``task_id``."""
        raise NotImplementedError

    @abstractmethod
    def get_all(self) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_by_status(self, status: TaskStatus) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_due_between(self, start: datetime, end: datetime) -> list[Task]:
        """Tasks whose due date lies in ``[start, end)``."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Raises TaskNotFoundError when no task has ``task_id``."""
        raise NotImplementedError

    @abstractmethod
    def with_tx(self, fn: Callable[["TaskRepository"], T]) -> T:
        """Run ``fn`` against a transactional view of this repository.

        Writes made through the view are committed together when ``fn``
        returns, or all discarded when it raises. Nesting is not supported.
        """
        raise NotImplementedError

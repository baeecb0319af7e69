import logging
from datetime import datetime
from typing import Callable, List, TypeVar

from peewee import SqliteDatabase

from core.domain.errors import RepositoryError, TaskNotFoundError
from core.domain.models.task import Task, TaskPriority, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.session.db import db

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        title=model.title,
        status=TaskStatus(model.status),
        priority=TaskPriority(model.priority),
        created_at=model.created_at,
        due_date=model.due_date,
    )


def _select_task(task_id: str, database=db):
    query = TaskModel.select().where(TaskModel.id == task_id)
    # Only backends with row locks (PostgreSQL) advertise for_update.
    if database.in_transaction() and database.for_update:
        query = query.for_update()
    return query


class PeeweeTaskRepository(TaskRepository):
    def __init__(self):
        # Tables are created on start-up; there is no migration tooling.
        db.connect(reuse_if_open=True)
        db.create_tables([TaskModel], safe=True)

    def save(self, task: Task) -> None:
        with db.atomic():
            try:
                existing = TaskModel.get(TaskModel.id == task.id)
                existing.title = task.title
                existing.status = task.status.value
                existing.priority = task.priority.value
                existing.created_at = task.created_at
                existing.due_date = task.due_date
                existing.save()
            except TaskModel.DoesNotExist:
                TaskModel.create(
                    id=task.id,
                    title=task.title,
                    status=task.status.value,
                    priority=task.priority.value,
                    created_at=task.created_at,
                    due_date=task.due_date,
                )

    def get_by_id(self, task_id: str) -> Task:
        try:
            return _to_domain(_select_task(task_id).get())
        except TaskModel.DoesNotExist:
            raise TaskNotFoundError()

    def get_all(self) -> List[Task]:
        return self._fetch(TaskModel.select())

    def get_by_status(self, status: TaskStatus) -> List[Task]:
        return self._fetch(TaskModel.select().where(TaskModel.status == status.value))

    def get_due_between(self, start: datetime, end: datetime) -> List[Task]:
        query = TaskModel.select().where(
            TaskModel.due_date.is_null(False),
            TaskModel.due_date >= start,
            TaskModel.due_date < end,
        )
        return self._fetch(query)

    def delete(self, task_id: str) -> None:
        deleted = TaskModel.delete().where(TaskModel.id == task_id).execute()
        if not deleted:
            raise TaskNotFoundError()

    def with_tx(self, fn: Callable[[TaskRepository], T]) -> T:
        """
        Runs ``fn`` inside one database transaction. SQLite takes the write
        lock up front (``BEGIN IMMEDIATE``); PostgreSQL locks the rows read
        through ``get_by_id``.

        Peewee keeps the connection per thread, so this repository already is
        the transactional view for the calling thread.
        """
        if db.in_transaction():
            raise RepositoryError("nested transactions are not supported")

        try:
            with self._write_transaction():
                return fn(self)
        except Exception:
            logger.warning("Peewee transaction rolled back")
            raise

    def _fetch(self, query) -> List[Task]:
        return [_to_domain(model) for model in query.order_by(TaskModel.created_at.desc())]

    @staticmethod
    def _write_transaction():
        if isinstance(db, SqliteDatabase):
            return db.atomic("IMMEDIATE")
        return db.atomic()

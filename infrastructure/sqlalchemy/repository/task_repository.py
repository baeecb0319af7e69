import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Query, Session

from core.domain.errors import RepositoryError, TaskNotFoundError
from core.domain.models.task import Task, TaskPriority, TaskStatus
from core.domain.ports.task_repository import TaskRepository
from infrastructure.sqlalchemy.model.models import TaskModel
from infrastructure.sqlalchemy.session.db import get_session, init_db

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


def _to_model(task: Task) -> TaskModel:
    return TaskModel(
        id=task.id,
        title=task.title,
        status=task.status.value,
        priority=task.priority.value,
        created_at=task.created_at,
        due_date=task.due_date,
    )


def _select_task(task_id: str, for_update: bool = False) -> Select:
    # SQLite has no row locks; its dialect leaves FOR UPDATE out.
    stmt = select(TaskModel).where(TaskModel.id == task_id)
    if for_update:
        stmt = stmt.with_for_update()
    return stmt


class SqlAlchemyTaskRepository(TaskRepository):
    """
    TaskRepository on top of a SQLAlchemy session.

    Without a session each call opens, commits and closes its own. With a
    session (the view handed out by ``with_tx``) calls only flush, and the
    owner of the session decides whether to commit.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session
        if session is None:
            init_db()

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        if self._session is not None:
            yield self._session
            self._session.flush()
            return

        session = get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def save(self, task: Task) -> None:
        with self._session_scope() as session:
            session.merge(_to_model(task))

    def get_by_id(self, task_id: str) -> Task:
        # Inside with_tx the row stays locked until the transaction ends.
        stmt = _select_task(task_id, for_update=self._session is not None)
        with self._session_scope() as session:
            model = session.execute(stmt).scalar_one_or_none()
            if model is None:
                raise TaskNotFoundError()
            return _to_domain(model)

    def get_all(self) -> list[Task]:
        with self._session_scope() as session:
            return self._fetch(session.query(TaskModel))

    def get_by_status(self, status: TaskStatus) -> list[Task]:
        with self._session_scope() as session:
            return self._fetch(
                session.query(TaskModel).filter(TaskModel.status == status.value)
            )

    def get_due_between(self, start: datetime, end: datetime) -> list[Task]:
        with self._session_scope() as session:
            return self._fetch(
                session.query(TaskModel).filter(
                    TaskModel.due_date.isnot(None),
                    TaskModel.due_date >= start,
                    TaskModel.due_date < end,
                )
            )

    def delete(self, task_id: str) -> None:
        with self._session_scope() as session:
            model = session.get(TaskModel, task_id)
            if model is None:
                raise TaskNotFoundError()
            session.delete(model)

    def with_tx(self, fn: Callable[[TaskRepository], T]) -> T:
        """
        Runs ``fn`` against a repository bound to a single new session.

        The session is committed when ``fn`` returns and rolled back when it
        raises; the exception is re-raised.
        """
        if self._session is not None:
            raise RepositoryError("nested transactions are not supported")

        session = get_session()
        try:
            result = fn(SqlAlchemyTaskRepository(session=session))
            session.commit()
            return result
        except Exception:
            session.rollback()
            logger.warning("SQLAlchemy transaction rolled back")
            raise
        finally:
            session.close()

    @staticmethod
    def _fetch(query: Query) -> list[Task]:
        return [_to_domain(model) for model in query.order_by(TaskModel.created_at.desc())]

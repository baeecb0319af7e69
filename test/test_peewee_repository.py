import os
import unittest
from unittest.mock import Mock, patch

# Use memory database for tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from peewee import PostgresqlDatabase

from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.repository.task_repository import (
    PeeweeTaskRepository,
    _select_task,
)
from infrastructure.peewee.session.db import db
from repository_contract import TaskRepositoryContract


class PeeweeTaskRepositoryTests(TaskRepositoryContract, unittest.TestCase):
    def setUp(self) -> None:
        if db.is_closed():
            db.connect()
        db.create_tables([TaskModel], safe=True)
        TaskModel.delete().execute()
        self.repo = PeeweeTaskRepository()

    def tearDown(self) -> None:
        db.drop_tables([TaskModel])
        db.close()

    def test_with_tx_takes_the_sqlite_write_lock_up_front(self) -> None:
        with patch.object(db, "begin", wraps=db.begin) as begin:
            self.repo.with_tx(lambda repo: repo.get_all())

        begin.assert_called_once_with("IMMEDIATE")

    def test_lookup_in_transaction_locks_row_on_postgresql(self) -> None:
        postgres = PostgresqlDatabase("tasks")
        in_transaction = Mock(for_update=True)
        in_transaction.in_transaction.return_value = True

        with TaskModel.bind_ctx(postgres):
            sql, params = _select_task("abc", in_transaction).sql()

        self.assertIn("FOR UPDATE", sql)
        self.assertEqual(params, ["abc"])

    def test_lookup_on_sqlite_never_locks(self) -> None:
        with db.atomic():
            sql, _ = _select_task("abc").sql()

        self.assertNotIn("FOR UPDATE", sql)


if __name__ == "__main__":
    unittest.main()

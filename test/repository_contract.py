"""Behaviour every TaskRepository adapter must share."""

from datetime import datetime, timedelta

from core.domain.errors import RepositoryError, TaskNotFoundError
from core.domain.models.task import Task, TaskPriority, TaskStatus
from core.domain.ports.task_repository import TaskRepository


class TaskRepositoryContract:
    repo: TaskRepository

    def _task(self, title: str, **fields) -> Task:
        task = Task.new(title, fields.pop("priority", TaskPriority.MEDIUM))
        for name, value in fields.items():
            setattr(task, name, value)
        return task

    def test_save_and_get_round_trip(self) -> None:
        task = self._task(
            "Round trip",
            priority=TaskPriority.HIGH,
            due_date=datetime(2026, 10, 21, 17, 45, 12, 500),
        )

        self.repo.save(task)
        loaded = self.repo.get_by_id(task.id)

        self.assertEqual(loaded, task)

    def test_save_overwrites_existing(self) -> None:
        task = self._task("Before")
        self.repo.save(task)

        task.title = "After"
        task.status = TaskStatus.COMPLETED
        task.due_date = datetime(2026, 1, 1, 8, 0)
        self.repo.save(task)

        self.assertEqual(self.repo.get_by_id(task.id), task)
        self.assertEqual(len(self.repo.get_all()), 1)

    def test_get_missing_raises_not_found(self) -> None:
        with self.assertRaises(TaskNotFoundError):
            self.repo.get_by_id("missing")

    def test_get_all_newest_first(self) -> None:
        base = datetime(2026, 10, 1, 9, 0)
        for i in range(3):
            self.repo.save(self._task(f"task {i}", created_at=base + timedelta(hours=i)))

        self.assertEqual(
            [t.title for t in self.repo.get_all()], ["task 2", "task 1", "task 0"]
        )

    def test_get_by_status(self) -> None:
        self.repo.save(self._task("open"))
        self.repo.save(self._task("done", status=TaskStatus.COMPLETED))

        active = self.repo.get_by_status(TaskStatus.ACTIVE)
        completed = self.repo.get_by_status(TaskStatus.COMPLETED)

        self.assertEqual([t.title for t in active], ["open"])
        self.assertEqual([t.title for t in completed], ["done"])

    def test_get_due_between_is_half_open(self) -> None:
        start = datetime(2026, 10, 21)
        end = datetime(2026, 10, 22)
        self.repo.save(self._task("at start", due_date=start))
        self.repo.save(self._task("inside", due_date=start + timedelta(hours=12)))
        self.repo.save(self._task("at end", due_date=end))
        self.repo.save(self._task("before", due_date=start - timedelta(seconds=1)))
        self.repo.save(self._task("no due date"))

        found = self.repo.get_due_between(start, end)

        self.assertEqual(sorted(t.title for t in found), ["at start", "inside"])

    def test_delete(self) -> None:
        task = self._task("Delete me")
        self.repo.save(task)

        self.repo.delete(task.id)

        with self.assertRaises(TaskNotFoundError):
            self.repo.get_by_id(task.id)

    def test_delete_missing_raises_not_found(self) -> None:
        with self.assertRaises(TaskNotFoundError):
            self.repo.delete("missing")

    def test_with_tx_commits(self) -> None:
        task = self._task("Tx")
        self.repo.save(task)

        def complete(repo: TaskRepository) -> str:
            loaded = repo.get_by_id(task.id)
            loaded.complete()
            repo.save(loaded)
            return loaded.id

        self.assertEqual(self.repo.with_tx(complete), task.id)
        self.assertEqual(self.repo.get_by_id(task.id).status, TaskStatus.COMPLETED)

    def test_with_tx_rolls_back_every_write(self) -> None:
        kept = self._task("Kept")
        self.repo.save(kept)
        added = self._task("Added")

        def unit(repo: TaskRepository) -> None:
            repo.save(added)
            loaded = repo.get_by_id(kept.id)
            loaded.title = "Changed"
            repo.save(loaded)
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            self.repo.with_tx(unit)

        self.assertEqual(self.repo.get_by_id(kept.id).title, "Kept")
        with self.assertRaises(TaskNotFoundError):
            self.repo.get_by_id(added.id)

    def test_nested_with_tx_is_rejected(self) -> None:
        with self.assertRaises(RepositoryError):
            self.repo.with_tx(lambda repo: repo.with_tx(lambda inner: None))

import threading
import unittest

from core.domain.models.task import Task, TaskStatus
from infrastructure.memory.repository.task_repository import InMemoryTaskRepository
from repository_contract import TaskRepositoryContract


class InMemoryTaskRepositoryTests(TaskRepositoryContract, unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryTaskRepository()

    def test_stored_tasks_do_not_leak_references(self) -> None:
        task = Task.new("Isolated")
        self.repo.save(task)

        task.title = "Mutated after save"
        loaded = self.repo.get_by_id(task.id)
        loaded.status = TaskStatus.COMPLETED

        stored = self.repo.get_by_id(task.id)
        self.assertEqual(stored.title, "Isolated")
        self.assertEqual(stored.status, TaskStatus.ACTIVE)

    def test_concurrent_transactions_complete_exactly_once(self) -> None:
        task = Task.new("Race")
        self.repo.save(task)
        results: list[str] = []
        barrier = threading.Barrier(8)

        def complete(repo) -> None:
            loaded = repo.get_by_id(task.id)
            loaded.complete()
            repo.save(loaded)

        def worker() -> None:
            barrier.wait()
            try:
                self.repo.with_tx(complete)
                results.append("ok")
            except Exception as e:
                results.append(type(e).__name__)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(results.count("ok"), 1)
        self.assertEqual(results.count("AlreadyCompletedError"), 7)


if __name__ == "__main__":
    unittest.main()

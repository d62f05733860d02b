"""Abstract task store."""
from abc import ABC, abstractmethod
from typing import List

from ..models import TaskRecord


class TaskStore(ABC):
    """Abstract base class for task stores.

    The billing core only reads the full collection; appending is the
    store's job.
    """

    @abstractmethod
    def load(self) -> List[TaskRecord]:
        """Return every stored task in insertion order."""
        pass

    @abstractmethod
    def save(self, tasks: List[TaskRecord]) -> None:
        """Replace the stored collection."""
        pass

    def add(self, task: TaskRecord) -> None:
        """Append a single task."""
        tasks = self.load()
        tasks.append(task)
        self.save(tasks)

from __future__ import annotations

from abc import ABC, abstractmethod

from .task import TaskSpec


class Scheduler(ABC):
    """Abstract ready set: holds arrived tasks and picks the next one to run."""

    @abstractmethod
    def add_task(self, task: TaskSpec) -> None:
        """Add a newly arrived task to the ready set."""

    @abstractmethod
    def pick_next(self) -> TaskSpec | None:
        """Remove and return the next task to run, or None when nothing is ready."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of tasks waiting in the ready set."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable


class DuplicateTaskIdError(ValueError):
    """Raised when a task set contains the same id more than once."""

    def __init__(self, task_ids: Iterable[int]) -> None:
        self.task_ids = sorted(task_ids)
        super().__init__(f"duplicate task ids: {', '.join(str(i) for i in self.task_ids)}")


def require_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {type(value).__name__}"
        raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class TaskSpec:
    """Immutable task record: when it is queued and how long it runs."""

    task_id: int
    queued_at: int
    execution_duration: int

    def __post_init__(self) -> None:
        require_int("task_id", self.task_id)
        require_int("queued_at", self.queued_at)
        require_int("execution_duration", self.execution_duration)
        if self.queued_at < 0:
            msg = "queued_at cannot be negative"
            raise ValueError(msg)
        if self.execution_duration < 0:
            msg = "execution_duration cannot be negative"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Completion:
    """A task as it actually ran on the processor."""

    task_id: int
    queued_at: int
    started_at: int
    finished_at: int
    execution_duration: int

    @property
    def wait_time(self) -> int:
        return self.started_at - self.queued_at

    @property
    def turnaround_time(self) -> int:
        return self.finished_at - self.queued_at

    @classmethod
    def of(cls, spec: TaskSpec, started_at: int) -> Completion:
        return cls(
            task_id=spec.task_id,
            queued_at=spec.queued_at,
            started_at=started_at,
            finished_at=started_at + spec.execution_duration,
            execution_duration=spec.execution_duration,
        )


def validate_tasks(tasks: Iterable[TaskSpec]) -> list[TaskSpec]:
    """Check a task set before simulation and return it as a list.

    Field ranges are enforced by ``TaskSpec`` itself; this adds the
    set-level rule that every id is unique.
    """

    materialised = list(tasks)
    for task in materialised:
        if not isinstance(task, TaskSpec):
            msg = f"expected TaskSpec, got {type(task).__name__}"
            raise TypeError(msg)
    counts = Counter(task.task_id for task in materialised)
    duplicates = [task_id for task_id, seen in counts.items() if seen > 1]
    if duplicates:
        raise DuplicateTaskIdError(duplicates)
    return materialised

from __future__ import annotations

import heapq
from collections.abc import Callable
from dataclasses import dataclass, field

from .scheduler import Scheduler
from .task import TaskSpec


@dataclass(order=True, slots=True)
class _HeapItem:
    duration: int
    task_id: int
    task: TaskSpec = field(compare=False)


def spt_key(task: TaskSpec) -> tuple[int, int]:
    """Selection key: shortest duration first, ties by ascending id."""

    return (task.execution_duration, task.task_id)


class SptScheduler(Scheduler):
    """Non-preemptive shortest-processing-time-first scheduler."""

    def __init__(self) -> None:
        self._heap: list[_HeapItem] = []

    def add_task(self, task: TaskSpec) -> None:
        heapq.heappush(self._heap, _HeapItem(task.execution_duration, task.task_id, task))

    def pick_next(self) -> TaskSpec | None:
        if not self._heap:
            return None
        return heapq.heappop(self._heap).task

    def __len__(self) -> int:
        return len(self._heap)


class ScanningSptScheduler(Scheduler):
    """SPT over a plain list, re-scanned for the minimum on every pick."""

    def __init__(self) -> None:
        self._ready: list[TaskSpec] = []

    def add_task(self, task: TaskSpec) -> None:
        self._ready.append(task)

    def pick_next(self) -> TaskSpec | None:
        if not self._ready:
            return None
        best = min(self._ready, key=spt_key)
        self._ready.remove(best)
        return best

    def __len__(self) -> int:
        return len(self._ready)


class FcfsScheduler(Scheduler):
    """Non-preemptive First-Come, First-Served baseline."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, TaskSpec]] = []

    def add_task(self, task: TaskSpec) -> None:
        heapq.heappush(self._heap, (task.queued_at, task.task_id, task))

    def pick_next(self) -> TaskSpec | None:
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


SCHEDULERS: dict[str, Callable[[], Scheduler]] = {
    "spt": SptScheduler,
    "spt-scan": ScanningSptScheduler,
    "fcfs": FcfsScheduler,
}


def make_scheduler(name: str) -> Scheduler:
    try:
        factory = SCHEDULERS[name]
    except KeyError:
        msg = f"unknown scheduler {name!r}; expected one of {', '.join(SCHEDULERS)}"
        raise ValueError(msg) from None
    return factory()

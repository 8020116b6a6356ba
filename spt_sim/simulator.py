from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable

from .log import get_logger
from .scheduler import Scheduler
from .schedulers import SptScheduler
from .task import Completion, TaskSpec, require_int, validate_tasks

logger = get_logger(__name__)


@dataclass(slots=True)
class SimulationResult:
    completions: list[Completion]
    start_time: int
    total_time: int
    busy_time: int
    idle_time: int
    selection_rounds: int = field(default=0)

    @property
    def order(self) -> list[int]:
        return [c.task_id for c in self.completions]

    @property
    def utilization(self) -> float:
        span = self.total_time - self.start_time
        if span <= 0:
            return 0.0
        return self.busy_time / span


@dataclass(slots=True)
class SimulationConfig:
    start_time: int = 0
    validate: bool = True

    def __post_init__(self) -> None:
        require_int("start_time", self.start_time)
        if self.start_time < 0:
            msg = "start_time cannot be negative"
            raise ValueError(msg)


class Simulation:
    """Single-processor, non-preemptive simulation driven by a ready-set policy."""

    def __init__(self, scheduler: Scheduler, tasks: Iterable[TaskSpec], config: SimulationConfig | None = None) -> None:
        self.scheduler = scheduler
        self.config = config or SimulationConfig()
        tasks = validate_tasks(tasks) if self.config.validate else list(tasks)
        self._pending: deque[TaskSpec] = deque(sorted(tasks, key=lambda t: (t.queued_at, t.task_id)))
        self._completed: list[Completion] = []
        self._now: int = self.config.start_time
        self._busy = 0
        self._idle = 0
        self._rounds = 0

    def run(self) -> SimulationResult:
        while self._pending or len(self.scheduler):
            self._enqueue_arrivals(self._now)
            task = self.scheduler.pick_next()

            if task is None:
                idle_until = self._next_arrival_time()
                if idle_until is None:
                    break
                logger.debug("t=%d idle until %d", self._now, idle_until)
                self._idle += idle_until - self._now
                self._now = max(self._now, idle_until)
                continue

            self._rounds += 1
            completion = Completion.of(task, started_at=self._now)
            logger.debug(
                "t=%d run task %d (duration %d, ready %d)",
                self._now,
                task.task_id,
                task.execution_duration,
                len(self.scheduler),
            )
            self._busy += task.execution_duration
            self._now = completion.finished_at
            self._completed.append(completion)

        result = SimulationResult(
            completions=self._completed,
            start_time=self.config.start_time,
            total_time=self._now,
            busy_time=self._busy,
            idle_time=self._idle,
            selection_rounds=self._rounds,
        )
        logger.debug(
            "completed %d tasks at t=%d (busy %d, idle %d)",
            len(result.completions),
            result.total_time,
            result.busy_time,
            result.idle_time,
        )
        return result

    def _enqueue_arrivals(self, now: int) -> None:
        while self._pending and self._pending[0].queued_at <= now:
            self.scheduler.add_task(self._pending.popleft())

    def _next_arrival_time(self) -> int | None:
        if not self._pending:
            return None
        return self._pending[0].queued_at

    @property
    def tasks(self) -> list[Completion]:
        return list(self._completed)


def simulate(tasks: Iterable[TaskSpec]) -> list[int]:
    """Return task ids in the order an SPT processor completes them."""

    return Simulation(SptScheduler(), tasks).run().order

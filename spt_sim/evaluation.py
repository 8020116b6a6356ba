from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Iterable, Sequence

from . import metrics
from .scheduler import Scheduler
from .schedulers import SCHEDULERS
from .simulator import Simulation, SimulationConfig, SimulationResult
from .task import TaskSpec, validate_tasks


SchedulerFactory = Callable[[], Scheduler]


@dataclass(slots=True)
class EvaluationOutcome:
    name: str
    simulation: SimulationResult
    per_task: list[metrics.TaskMetrics]
    aggregate: metrics.AggregateMetrics

    @property
    def order(self) -> list[int]:
        return self.simulation.order


def evaluate_scheduler(
    name: str,
    factory: SchedulerFactory,
    tasks: Sequence[TaskSpec],
    *,
    config: SimulationConfig | None = None,
) -> EvaluationOutcome:
    result = Simulation(scheduler=factory(), tasks=tasks, config=config).run()
    per_task = metrics.build_task_metrics(result.completions)
    return EvaluationOutcome(
        name=name,
        simulation=result,
        per_task=per_task,
        aggregate=metrics.summarise(per_task, result),
    )


def evaluate_suite(
    factories: Sequence[tuple[str, SchedulerFactory]],
    tasks: Sequence[TaskSpec],
    *,
    config: SimulationConfig | None = None,
) -> list[EvaluationOutcome]:
    return [evaluate_scheduler(name, factory, tasks, config=config) for name, factory in factories]


def evaluate_named(
    names: Iterable[str],
    tasks: Sequence[TaskSpec],
    *,
    config: SimulationConfig | None = None,
) -> list[EvaluationOutcome]:
    """Evaluate registered schedulers by name over one validated task set."""

    names = list(names)
    unknown = [name for name in names if name not in SCHEDULERS]
    if unknown:
        msg = f"unknown scheduler(s): {', '.join(unknown)}"
        raise ValueError(msg)
    if config is None or config.validate:
        tasks = validate_tasks(tasks)
    return evaluate_suite([(name, SCHEDULERS[name]) for name in names], tasks, config=config)

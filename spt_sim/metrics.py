from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Iterable, Sequence

from .simulator import SimulationResult
from .task import Completion


@dataclass(slots=True)
class TaskMetrics:
    task_id: int
    queued_at: int
    started_at: int
    finished_at: int
    execution_duration: int
    wait_time: int
    turnaround_time: int
    slowdown: float


@dataclass(slots=True)
class AggregateMetrics:
    count: int
    mean_wait_time: float
    mean_turnaround_time: float
    mean_slowdown: float
    p50_wait: float
    p90_wait: float
    p99_wait: float
    makespan: int
    throughput: float
    utilization: float


def build_task_metrics(completions: Iterable[Completion]) -> list[TaskMetrics]:
    metrics: list[TaskMetrics] = []
    for c in completions:
        turnaround = c.turnaround_time
        # zero-duration tasks finish as they start; their slowdown is nominal
        slowdown = turnaround / c.execution_duration if c.execution_duration else 1.0
        metrics.append(
            TaskMetrics(
                task_id=c.task_id,
                queued_at=c.queued_at,
                started_at=c.started_at,
                finished_at=c.finished_at,
                execution_duration=c.execution_duration,
                wait_time=c.wait_time,
                turnaround_time=turnaround,
                slowdown=slowdown,
            ),
        )
    return metrics


def summarise(metrics: Sequence[TaskMetrics], result: SimulationResult) -> AggregateMetrics:
    if not metrics:
        return AggregateMetrics(
            count=0,
            mean_wait_time=0.0,
            mean_turnaround_time=0.0,
            mean_slowdown=0.0,
            p50_wait=0.0,
            p90_wait=0.0,
            p99_wait=0.0,
            makespan=0,
            throughput=0.0,
            utilization=0.0,
        )
    wait_values = [m.wait_time for m in metrics]
    makespan = result.total_time - result.start_time
    return AggregateMetrics(
        count=len(metrics),
        mean_wait_time=mean(wait_values),
        mean_turnaround_time=mean(m.turnaround_time for m in metrics),
        mean_slowdown=mean(m.slowdown for m in metrics),
        p50_wait=_percentile(wait_values, 50),
        p90_wait=_percentile(wait_values, 90),
        p99_wait=_percentile(wait_values, 99),
        makespan=makespan,
        throughput=len(metrics) / makespan if makespan else 0.0,
        utilization=result.utilization,
    )


def _percentile(values: Sequence[float], percentile: float) -> float:
    if not values:
        return 0.0
    sorted_values = sorted(values)
    k = (len(sorted_values) - 1) * percentile / 100
    f = int(k)
    c = min(f + 1, len(sorted_values) - 1)
    if f == c:
        return float(sorted_values[f])
    d0 = sorted_values[f] * (c - k)
    d1 = sorted_values[c] * (k - f)
    return d0 + d1

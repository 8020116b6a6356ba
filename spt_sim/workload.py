from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Sequence
from random import Random

from .task import TaskSpec

_FIELD_SPLIT = re.compile(r"\s*,\s*|\s+")

DurationSource = Sequence[int] | Callable[[Random], int] | Iterable[int]


def from_triples(triples: Iterable[tuple[int, int, int]]) -> list[TaskSpec]:
    return [
        TaskSpec(task_id=task_id, queued_at=queued_at, execution_duration=duration)
        for task_id, queued_at, duration in triples
    ]


def parse_tasks(text: str) -> list[TaskSpec]:
    """Parse ``id queued_at duration`` lines.

    Fields are separated by a single comma or by whitespace. Blank lines
    and ``#`` comments are skipped.
    """

    tasks: list[TaskSpec] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        fields = _FIELD_SPLIT.split(line)
        if "" in fields:
            msg = f"line {lineno}: empty field in {line!r}"
            raise ValueError(msg)
        if len(fields) != 3:
            msg = f"line {lineno}: expected 3 fields (id, queued_at, duration), got {len(fields)}"
            raise ValueError(msg)
        try:
            task_id, queued_at, duration = (int(part) for part in fields)
        except ValueError:
            msg = f"line {lineno}: fields must be integers: {line!r}"
            raise ValueError(msg) from None
        try:
            tasks.append(TaskSpec(task_id=task_id, queued_at=queued_at, execution_duration=duration))
        except ValueError as exc:
            msg = f"line {lineno}: {exc}"
            raise ValueError(msg) from exc
    return tasks


def periodic_workload(
    period: int,
    execution_duration: int,
    count: int,
    *,
    first_id: int = 0,
) -> list[TaskSpec]:
    if period < 0:
        msg = "period cannot be negative"
        raise ValueError(msg)
    return [
        TaskSpec(task_id=first_id + i, queued_at=i * period, execution_duration=execution_duration)
        for i in range(count)
    ]


def poisson_workload(
    rate: float,
    duration_sampler: DurationSource,
    count: int,
    *,
    seed: int | None = None,
    first_id: int = 0,
) -> list[TaskSpec]:
    if rate <= 0:
        msg = "rate must be strictly positive"
        raise ValueError(msg)
    # generators are consumed once, up front
    if not isinstance(duration_sampler, Sequence) and isinstance(duration_sampler, Iterable):
        duration_sampler = tuple(duration_sampler)
    rng = Random(seed)
    tasks: list[TaskSpec] = []
    current_time = 0.0
    for i in range(count):
        current_time += rng.expovariate(rate)
        duration = _sample_duration(duration_sampler, rng)
        tasks.append(
            TaskSpec(task_id=first_id + i, queued_at=math.floor(current_time), execution_duration=duration),
        )
    return tasks


def _sample_duration(source: DurationSource, rng: Random) -> int:
    value = _sample_value(source, rng)
    if value < 0:
        msg = "sampled duration cannot be negative"
        raise ValueError(msg)
    return value


def _sample_value(source: DurationSource, rng: Random) -> int:
    if isinstance(source, Sequence):
        if not source:
            msg = "sampler sequence must not be empty"
            raise ValueError(msg)
        return rng.choice(source)
    return source(rng)

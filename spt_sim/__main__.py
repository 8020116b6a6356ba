from __future__ import annotations

import argparse
import sys
from typing import Sequence, TextIO

from . import evaluation, workload
from .log import get_logger, setup_logging
from .schedulers import SCHEDULERS
from .task import TaskSpec

logger = get_logger(__name__)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="spt-sim",
        description="Print the order in which a single non-preemptive processor completes queued tasks.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        metavar="FILE",
        help="File with one 'id queued_at duration' task per line ('-' for stdin).",
    )
    source.add_argument(
        "--task",
        action="append",
        metavar="ID,QUEUED_AT,DURATION",
        help="A single task; may be repeated.",
    )
    source.add_argument("--generate", type=int, metavar="N", help="Generate N tasks with Poisson arrivals.")
    parser.add_argument("--arrival-rate", type=float, default=0.5, help="Poisson arrival rate for --generate.")
    parser.add_argument(
        "--durations",
        type=str,
        default="1,2,3,5,8",
        help="Comma-separated durations sampled by --generate.",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for --generate.")
    parser.add_argument("--scheduler", choices=sorted(SCHEDULERS), default="spt", help="Ready-set policy.")
    parser.add_argument("--metrics", action="store_true", help="Also print aggregate metrics.")
    parser.add_argument("--compare", action="store_true", help="Print metrics for every scheduler.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    parser.add_argument("--verbose", action="store_true", help="Include logger name and line in log output.")
    return parser.parse_args(argv)


def parse_int_list(raw: str) -> list[int]:
    values = [int(item.strip()) for item in raw.split(",") if item.strip()]
    if not values:
        msg = "durations must contain at least one value"
        raise ValueError(msg)
    return values


def load_tasks(args: argparse.Namespace, stdin: TextIO | None = None) -> list[TaskSpec]:
    if args.input is not None:
        if args.input == "-":
            return workload.parse_tasks((stdin or sys.stdin).read())
        with open(args.input, encoding="utf-8") as handle:
            return workload.parse_tasks(handle.read())
    if args.task:
        return workload.parse_tasks("\n".join(args.task))
    if args.generate < 0:
        msg = "--generate must not be negative"
        raise ValueError(msg)
    return workload.poisson_workload(
        rate=args.arrival_rate,
        duration_sampler=parse_int_list(args.durations),
        count=args.generate,
        seed=args.seed,
    )


def print_metrics(outcomes: Sequence[evaluation.EvaluationOutcome], out: TextIO) -> None:
    header_fmt = "{:<10} {:>9} {:>9} {:>9} {:>9} {:>9} {:>9} {:>10}"
    row_fmt = "{:<10} {:>9.3f} {:>9.3f} {:>9.3f} {:>9.3f} {:>9d} {:>9.3f} {:>10.3f}"
    print(header_fmt.format("Scheduler", "MeanWait", "MeanTurn", "MeanSlow", "p90Wait", "Makespan", "Util", "Throughput"), file=out)
    for outcome in outcomes:
        m = outcome.aggregate
        print(
            row_fmt.format(
                outcome.name,
                m.mean_wait_time,
                m.mean_turnaround_time,
                m.mean_slowdown,
                m.p90_wait,
                m.makespan,
                m.utilization,
                m.throughput,
            ),
            file=out,
        )


def main(argv: Sequence[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    args = parse_arguments(argv)
    out = stdout or sys.stdout
    try:
        setup_logging(args.log_level, verbose=args.verbose)
        tasks = load_tasks(args, stdin=stdin)
        (chosen,) = evaluation.evaluate_named([args.scheduler], tasks)
        others = evaluation.evaluate_named(sorted(SCHEDULERS), tasks) if args.compare else []
    except (ValueError, TypeError, OSError) as exc:
        logger.debug("rejected input", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logger.info("simulated %d tasks with %s", len(tasks), args.scheduler)
    print(" ".join(str(task_id) for task_id in chosen.order), file=out)
    if args.compare:
        print(file=out)
        print_metrics(others, out)
    elif args.metrics:
        print(file=out)
        print_metrics([chosen], out)
    return 0


if __name__ == "__main__":
    sys.exit(main())

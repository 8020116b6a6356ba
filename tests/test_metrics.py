"""
Unit tests for spt_sim.metrics and spt_sim.evaluation.
"""

import pytest

from spt_sim import evaluation, metrics
from spt_sim.schedulers import FcfsScheduler, SptScheduler
from spt_sim.simulator import Simulation


class TestMetrics:
    """Tests for per-task and aggregate metrics."""

    @pytest.mark.unit
    def test_per_task(self, overlapping_tasks):
        result = Simulation(SptScheduler(), overlapping_tasks).run()
        per_task = {m.task_id: m for m in metrics.build_task_metrics(result.completions)}
        assert per_task[44].wait_time == 1
        assert per_task[44].turnaround_time == 3
        assert per_task[43].wait_time == 4
        assert per_task[43].slowdown == pytest.approx(7 / 3)

    @pytest.mark.unit
    def test_aggregate(self, overlapping_tasks):
        result = Simulation(SptScheduler(), overlapping_tasks).run()
        aggregate = metrics.summarise(metrics.build_task_metrics(result.completions), result)
        assert aggregate.count == 3
        assert aggregate.mean_wait_time == pytest.approx(5 / 3)
        assert aggregate.mean_turnaround_time == pytest.approx(13 / 3)
        assert aggregate.p50_wait == pytest.approx(1.0)
        assert aggregate.makespan == 8
        assert aggregate.throughput == pytest.approx(3 / 8)
        assert aggregate.utilization == pytest.approx(1.0)

    @pytest.mark.unit
    def test_zero_duration_slowdown(self):
        from spt_sim.workload import from_triples

        result = Simulation(SptScheduler(), from_triples([(1, 0, 0)])).run()
        (only,) = metrics.build_task_metrics(result.completions)
        assert only.slowdown == 1.0

    @pytest.mark.unit
    def test_empty_summary(self):
        result = Simulation(SptScheduler(), []).run()
        aggregate = metrics.summarise([], result)
        assert aggregate.count == 0
        assert aggregate.throughput == 0.0


class TestEvaluation:
    """Tests for running several policies over one task set."""

    @pytest.mark.unit
    def test_suite(self, overlapping_tasks):
        outcomes = evaluation.evaluate_suite(
            [("spt", SptScheduler), ("fcfs", FcfsScheduler)],
            overlapping_tasks,
        )
        assert [o.name for o in outcomes] == ["spt", "fcfs"]
        assert outcomes[0].simulation.order == [42, 44, 43]
        assert outcomes[1].simulation.order == [42, 43, 44]
        assert outcomes[0].aggregate.mean_wait_time < outcomes[1].aggregate.mean_wait_time

    @pytest.mark.unit
    def test_named(self, overlapping_tasks):
        outcomes = evaluation.evaluate_named(["spt-scan", "fcfs"], overlapping_tasks)
        assert [o.order for o in outcomes] == [[42, 44, 43], [42, 43, 44]]

    @pytest.mark.unit
    def test_named_unknown(self, overlapping_tasks):
        with pytest.raises(ValueError, match="unknown scheduler"):
            evaluation.evaluate_named(["spt", "random"], overlapping_tasks)

    @pytest.mark.unit
    def test_named_respects_disabled_validation(self):
        from spt_sim.simulator import SimulationConfig
        from spt_sim.workload import from_triples

        tasks = from_triples([(1, 0, 2), (1, 0, 1)])
        with pytest.raises(ValueError, match="duplicate task ids"):
            evaluation.evaluate_named(["spt"], tasks)
        (outcome,) = evaluation.evaluate_named(["spt"], tasks, config=SimulationConfig(validate=False))
        assert [c.execution_duration for c in outcome.simulation.completions] == [1, 2]

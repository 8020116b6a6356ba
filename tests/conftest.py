"""
Pytest configuration and shared fixtures for spt_sim tests.

Scenario fixtures are (id, queued_at, execution_duration) triples paired
with the completion order an SPT processor produces for them.
"""

from random import Random

import pytest

from spt_sim.workload import from_triples, poisson_workload


SCENARIOS = {
    "staggered": ([(42, 5, 3), (43, 2, 3), (44, 0, 2)], [44, 43, 42]),
    "shorter_arrives_while_running": ([(42, 0, 3), (43, 1, 3), (44, 2, 2)], [42, 44, 43]),
    "idle_gap": ([(42, 0, 1), (43, 3, 3)], [42, 43]),
    "arrival_during_second_run": ([(42, 0, 3), (43, 1, 5), (44, 2, 6), (45, 5, 1)], [42, 43, 45, 44]),
    "equal_arrival_and_duration": ([(42, 1, 3), (43, 1, 3)], [42, 43]),
}


@pytest.fixture(params=sorted(SCENARIOS))
def scenario(request):
    """Yield (tasks, expected_order) for each documented scenario."""
    triples, expected = SCENARIOS[request.param]
    return from_triples(triples), expected


@pytest.fixture
def overlapping_tasks():
    """Three tasks where a shorter one arrives while the first is running."""
    return from_triples(SCENARIOS["shorter_arrives_while_running"][0])


@pytest.fixture
def idle_tasks():
    """Two tasks separated by an idle gap from t=1 to t=3."""
    return from_triples(SCENARIOS["idle_gap"][0])


@pytest.fixture(params=[1, 7, 42, 1234])
def random_tasks(request):
    """A seeded Poisson workload with plenty of duration ties."""
    return poisson_workload(rate=0.7, duration_sampler=[0, 1, 2, 2, 3, 5], count=40, seed=request.param)


@pytest.fixture
def rng():
    return Random(2024)

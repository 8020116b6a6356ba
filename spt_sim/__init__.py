"""Shortest-processing-time-first completion order simulator."""

from .task import Completion, DuplicateTaskIdError, TaskSpec, validate_tasks
from .simulator import Simulation, SimulationConfig, SimulationResult, simulate
from . import schedulers
from . import workload
from . import metrics
from . import evaluation

__all__ = [
	"TaskSpec",
	"Completion",
	"DuplicateTaskIdError",
	"validate_tasks",
	"Simulation",
	"SimulationConfig",
	"SimulationResult",
	"simulate",
	"schedulers",
	"workload",
	"metrics",
	"evaluation",
]

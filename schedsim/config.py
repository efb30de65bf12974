from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError
from .policies import POLICIES

MAX_PROCESS = 20
MAX_ARRIVAL_TIME = 20
MAX_PRIORITY = 4
MAX_CPU_BURST = 20
MIN_PID = 1001
MAX_PID = 9999
DEFAULT_MAX_TICKS = 1000
DEFAULT_QUANTUM = 2


@dataclass
class SimulationConfig:
    """
    Run parameters.

    Attributes:
        num_processes: Number of processes to generate (1..MAX_PROCESS).
        algorithm: Policy key, one of ``schedsim.policies.POLICIES``.
        quantum: Round Robin time slice; ignored by other policies.
        use_priority: Draw priorities 1..MAX_PRIORITY instead of 0 (unused).
        seed: Seed for the process generator; ``None`` for a random workload.
        max_ticks: Hard limit on simulated time.
    """

    num_processes: int = 5
    algorithm: str = "fcfs"
    quantum: int = DEFAULT_QUANTUM
    use_priority: bool = False
    seed: Optional[int] = None
    max_ticks: int = DEFAULT_MAX_TICKS

    def validate(self) -> "SimulationConfig":
        if not 1 <= self.num_processes <= MAX_PROCESS:
            raise ConfigurationError(
                f"must be between 1 and {MAX_PROCESS}", field="num_processes", value=self.num_processes
            )
        if self.algorithm.lower() not in POLICIES:
            raise ConfigurationError(
                f"must be one of {', '.join(POLICIES)}", field="algorithm", value=self.algorithm
            )
        if self.quantum <= 0:
            raise ConfigurationError("must be a positive integer", field="quantum", value=self.quantum)
        if self.max_ticks <= 0:
            raise ConfigurationError("must be a positive integer", field="max_ticks", value=self.max_ticks)
        return self

from __future__ import annotations

import random
from typing import List

from .config import MAX_ARRIVAL_TIME, MAX_CPU_BURST, MAX_PID, MAX_PRIORITY, MIN_PID, SimulationConfig
from .models import NO_IO, Process


def generate_processes(config: SimulationConfig) -> List[Process]:
    """
    Build a random workload. The same seed always yields the same processes.

    Each process with a CPU burst of at least 2 performs one I/O burst,
    triggered after 1..burst-1 CPU ticks and lasting up to half its CPU burst.
    """
    config.validate()
    rng = random.Random(config.seed)

    pids = rng.sample(range(MIN_PID, MAX_PID + 1), config.num_processes)
    processes: List[Process] = []

    for pid in pids:
        cpu_burst = rng.randint(1, MAX_CPU_BURST)
        if cpu_burst >= 2:
            io_trigger = rng.randint(1, cpu_burst - 1)
            io_burst = rng.randint(1, max(1, cpu_burst // 2))
        else:
            io_trigger, io_burst = NO_IO, 0

        processes.append(
            Process(
                pid=pid,
                arrival_time=rng.randint(0, MAX_ARRIVAL_TIME),
                cpu_burst_total=cpu_burst,
                priority=rng.randint(1, MAX_PRIORITY) if config.use_priority else 0,
                io_trigger_offset=io_trigger,
                io_burst_remaining=io_burst,
            )
        )

    return processes

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import DEFAULT_MAX_TICKS
from .dispatcher import dispatch
from .errors import ConfigurationError
from .executors import cpu_tick, io_tick
from .metrics import build_report
from .models import Process, SimulationResult
from .policies import SchedulingPolicy, get_policy
from .table import EventListener, SchedulingTable
from .timeline import IDLE, Timeline

logger = logging.getLogger(__name__)


def step(table: SchedulingTable, policy: SchedulingPolicy, timeline: Timeline) -> None:
    """
    Advance the simulation by exactly one tick.

    Order within the tick: arrivals, I/O device, CPU dispatch and execution,
    timeline, wait-time bookkeeping, clock.
    """
    table.admit_arrivals()
    io_tick(table, policy)

    running = dispatch(table, policy)
    cpu_tick(table)
    timeline.record(table.clock, running.pid if running is not None else IDLE)

    table.update_wait_times()
    table.clock += 1


def simulate(
    processes: Sequence[Process],
    policy: SchedulingPolicy | str,
    quantum: Optional[int] = None,
    max_ticks: int = DEFAULT_MAX_TICKS,
    on_event: Optional[EventListener] = None,
) -> SimulationResult:
    """
    Run processes to completion (or until ``max_ticks``) under one policy.

    The processes are mutated in place. A run that hits the tick budget
    before every process terminates is returned with ``converged=False``.
    """
    if isinstance(policy, str):
        policy = get_policy(policy)
    if policy.uses_quantum and (quantum is None or quantum <= 0):
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")
    if max_ticks <= 0:
        raise ValueError("max_ticks must be positive")
    for p in processes:
        if p.cpu_burst_total <= 0 or p.cpu_burst_remaining <= 0:
            raise ConfigurationError("CPU burst must be positive", field="cpu_burst", value=p.cpu_burst_remaining)

    table = SchedulingTable(processes, quantum=quantum or 0, on_event=on_event)
    timeline = Timeline(max_ticks)

    logger.info("simulating %d processes with %s", table.total, policy.name)

    while not table.all_terminated() and table.clock < max_ticks:
        step(table, policy, timeline)

    converged = table.all_terminated()
    if not converged:
        logger.warning(
            "simulation did not converge: %d of %d processes terminated after %d ticks",
            table.terminated.count(),
            table.total,
            table.clock,
        )

    terminated = list(table.terminated)
    ticks = timeline.as_list()
    return SimulationResult(
        algorithm=policy.name,
        quantum=quantum if policy.uses_quantum else None,
        converged=converged,
        ticks=table.clock,
        terminated=terminated,
        timeline=ticks,
        events=table.events,
        report=build_report(terminated, ticks),
    )

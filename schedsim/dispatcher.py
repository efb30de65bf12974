from __future__ import annotations

from typing import Optional

from .models import EventKind, Process, ProcessState
from .policies import SchedulingPolicy
from .table import SchedulingTable


def dispatch(table: SchedulingTable, policy: SchedulingPolicy) -> Optional[Process]:
    """
    Apply the policy's decision for this tick and return the process that
    will run (``None`` if the CPU stays idle).

    A preempted incumbent goes back to the Ready tail. The quantum counter
    is reset whenever a process is dispatched from Ready; if a Round Robin
    quantum runs out while Ready is empty, the incumbent keeps the CPU and
    the quantum is renewed.
    """
    candidate = policy.select(table.ready, table.running, table.quantum_left)

    if candidate is None:
        if table.running is not None and policy.uses_quantum and table.quantum_left <= 0:
            table.quantum_left = table.quantum
        return table.running

    table.ready.dequeue(candidate)

    incumbent = table.running
    if incumbent is not None:
        incumbent.state = ProcessState.READY
        table.ready.enqueue(incumbent)
        table.emit(EventKind.PREEMPT, incumbent.pid, candidate.pid)

    candidate.state = ProcessState.RUNNING
    table.running = candidate
    table.quantum_left = table.quantum
    table.emit(EventKind.DISPATCH, candidate.pid)
    return candidate

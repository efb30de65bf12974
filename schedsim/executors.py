from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import NO_IO, EventKind, Process, ProcessState
from .policies import SchedulingPolicy
from .table import SchedulingTable


class CpuOutcome(Enum):
    IDLE = "idle"
    CONTINUING = "continuing"
    MOVED_TO_IO = "moved-to-io"
    FINISHED = "finished"


class IoOutcome(Enum):
    IDLE = "idle"
    CONTINUING = "continuing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TickResult:
    outcome: Enum
    process: Optional[Process] = None
    remaining: int = 0


def cpu_tick(table: SchedulingTable) -> TickResult:
    """
    Run the process in the Running slot for one tick.

    A process whose burst reaches zero finishes at the end of this tick
    (``clock + 1``). Otherwise its I/O trigger counts down, and when it fires
    the process leaves for the Wait queue and never triggers I/O again.
    """
    p = table.running
    if p is None:
        table.emit(EventKind.IDLE)
        return TickResult(CpuOutcome.IDLE)

    p.cpu_burst_remaining -= 1
    table.quantum_left -= 1

    if p.cpu_burst_remaining == 0:
        p.state = ProcessState.TERMINATED
        p.finish_time = table.clock + 1
        p.turnaround_time = p.finish_time - p.arrival_time
        table.terminated.enqueue(p)
        table.running = None
        table.emit(EventKind.TERMINATE, p.pid)
        return TickResult(CpuOutcome.FINISHED, p, 0)

    if p.has_pending_io:
        p.io_trigger_offset -= 1
        if p.io_trigger_offset == 0:
            p.io_trigger_offset = NO_IO
            p.state = ProcessState.WAITING
            table.wait.enqueue(p)
            table.running = None
            table.emit(EventKind.WAIT_ENQUEUE, p.pid)
            return TickResult(CpuOutcome.MOVED_TO_IO, p, p.cpu_burst_remaining)

    return TickResult(CpuOutcome.CONTINUING, p, p.cpu_burst_remaining)


def io_tick(table: SchedulingTable, policy: SchedulingPolicy) -> TickResult:
    """
    Service the I/O device for one tick.

    On completion, preemptive policies send the process to the Ready tail.
    Non-preemptive policies hand it straight to an idle CPU; if the CPU is
    busy it goes to the Ready head, so it comes first among ties when the
    next process is chosen.
    """
    p = table.io_process
    if p is None:
        p = table.wait.pop_head()
        if p is None:
            return TickResult(IoOutcome.IDLE)
        table.io_process = p
        table.emit(EventKind.IO_START, p.pid)

    p.io_burst_remaining -= 1
    if p.io_burst_remaining > 0:
        return TickResult(IoOutcome.CONTINUING, p, p.io_burst_remaining)

    table.io_process = None
    table.emit(EventKind.IO_COMPLETE, p.pid)
    if policy.is_preemptive():
        p.state = ProcessState.READY
        table.ready.enqueue(p)
    elif table.running is None:
        p.state = ProcessState.RUNNING
        table.running = p
        table.emit(EventKind.DISPATCH, p.pid)
    else:
        p.state = ProcessState.READY
        table.ready.enqueue(p, at_head=True)
    return TickResult(IoOutcome.COMPLETED, p, 0)

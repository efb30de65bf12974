from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

NO_IO = -1


class ProcessState(Enum):
    NEW = "new"
    READY = "ready"
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"


@dataclass(eq=False)
class Process:
    """
    A simulated process.

    Creation-time attributes are followed by the runtime counters the
    simulator mutates. Priority 0 means "priority not used"; otherwise a
    higher number is a higher priority. ``io_trigger_offset`` counts the CPU
    ticks left before the single I/O burst starts and is ``NO_IO`` once it
    has been consumed (or if the process never does I/O).

    Processes compare by identity so that queue removal always targets the
    exact record that was enqueued.
    """

    pid: int
    arrival_time: int
    cpu_burst_total: int
    priority: int = 0
    io_trigger_offset: int = NO_IO
    io_burst_remaining: int = 0

    state: ProcessState = ProcessState.NEW
    cpu_burst_remaining: int = field(default=-1)

    ready_wait_time: int = 0
    io_wait_time: int = 0
    turnaround_time: int = 0
    finish_time: int = 0

    def __post_init__(self) -> None:
        if self.cpu_burst_remaining < 0:
            self.cpu_burst_remaining = self.cpu_burst_total

    @property
    def has_pending_io(self) -> bool:
        return self.io_trigger_offset > 0


class EventKind(Enum):
    ARRIVAL = "arrival"
    DISPATCH = "dispatch"
    PREEMPT = "preempt"
    WAIT_ENQUEUE = "wait-enqueue"
    IO_START = "io-start"
    IO_COMPLETE = "io-complete"
    TERMINATE = "terminate"
    IDLE = "idle"


@dataclass(frozen=True)
class SimEvent:
    """
    One thing that happened during a tick. ``pids`` lists the affected
    processes; for PREEMPT it is ``(preempted, replacement)``.
    """

    tick: int
    kind: EventKind
    pids: Tuple[int, ...] = ()


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    cpu_burst: int
    priority: int
    ready_wait_time: int
    io_wait_time: int
    turnaround_time: int
    finish_time: int


@dataclass
class AggregateMetrics:
    count: int
    total_ready_wait: int
    total_io_wait: int
    total_turnaround: int
    avg_ready_wait: int
    avg_io_wait: int
    avg_turnaround: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    idle_ticks: int = 0


@dataclass
class MetricsReport:
    processes: List[ProcessMetrics] = field(default_factory=list)
    aggregate: Optional[AggregateMetrics] = None
    system: Optional[SystemMetrics] = None


@dataclass
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    converged: bool
    ticks: int
    terminated: List[Process] = field(default_factory=list)
    timeline: List[Optional[int]] = field(default_factory=list)
    events: List[SimEvent] = field(default_factory=list)
    report: MetricsReport = field(default_factory=MetricsReport)

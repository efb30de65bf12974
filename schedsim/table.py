from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .models import EventKind, Process, ProcessState, SimEvent
from .queues import ProcessQueue

logger = logging.getLogger(__name__)

EventListener = Callable[[SimEvent], None]


class SchedulingTable:
    """
    All mutable scheduling state for one simulation run.

    The table owns the New pool and the Ready, Wait and Terminated queues;
    ``running`` and ``io_process`` point at the process currently on the CPU
    and on the I/O device. It is passed explicitly to the dispatcher and the
    tick executors; nothing else holds simulation state.
    """

    def __init__(
        self,
        processes: Sequence[Process],
        quantum: int = 0,
        on_event: Optional[EventListener] = None,
    ) -> None:
        self.new_pool: List[Process] = list(processes)
        self.ready = ProcessQueue("ready")
        self.wait = ProcessQueue("wait")
        self.terminated = ProcessQueue("terminated")
        self.running: Optional[Process] = None
        self.io_process: Optional[Process] = None
        self.clock = 0
        self.quantum = quantum
        self.quantum_left = quantum
        self.events: List[SimEvent] = []
        self._on_event = on_event

    @property
    def total(self) -> int:
        return len(self.new_pool)

    def all_terminated(self) -> bool:
        return self.terminated.count() == self.total

    def emit(self, kind: EventKind, *pids: int) -> SimEvent:
        event = SimEvent(tick=self.clock, kind=kind, pids=tuple(pids))
        self.events.append(event)
        logger.debug("t=%d %s %s", event.tick, kind.value, " ".join(str(p) for p in pids))
        if self._on_event is not None:
            self._on_event(event)
        return event

    def admit_arrivals(self) -> List[Process]:
        """
        Move every New process whose arrival time has come to the Ready tail,
        in pool order.
        """
        admitted = []
        for p in self.new_pool:
            if p.state is ProcessState.NEW and p.arrival_time <= self.clock:
                p.state = ProcessState.READY
                self.ready.enqueue(p)
                self.emit(EventKind.ARRIVAL, p.pid)
                admitted.append(p)
        return admitted

    def update_wait_times(self) -> None:
        """
        Charge one tick to every process sitting in Ready, and to every
        process in the Waiting state (Wait queue or on the I/O device).
        """
        for p in self.ready:
            p.ready_wait_time += 1
        for p in self.wait:
            p.io_wait_time += 1
        if self.io_process is not None:
            self.io_process.io_wait_time += 1

    def location_of(self, process: Process) -> str:
        """
        Name the single place a process currently lives in. Used by tests
        and debugging output to check membership consistency.
        """
        places = []
        if process.state is ProcessState.NEW and process in self.new_pool:
            places.append("new")
        if process in self.ready:
            places.append("ready")
        if self.running is process:
            places.append("running")
        if process in self.wait or self.io_process is process:
            places.append("waiting")
        if process in self.terminated:
            places.append("terminated")
        return "+".join(places) or "nowhere"

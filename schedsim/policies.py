from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from .errors import ConfigurationError
from .models import Process
from .queues import ProcessQueue


def _first_min(ready: ProcessQueue, key: Callable[[Process], int]) -> Optional[Process]:
    """
    Single left-to-right scan; on ties the earliest queued process wins.
    """
    best: Optional[Process] = None
    for p in ready:
        if best is None or key(p) < key(best):
            best = p
    return best


def _first_max(ready: ProcessQueue, key: Callable[[Process], int]) -> Optional[Process]:
    best: Optional[Process] = None
    for p in ready:
        if best is None or key(p) > key(best):
            best = p
    return best


class SchedulingPolicy(ABC):
    """
    Decides which Ready process should occupy the CPU on the current tick.

    ``select`` returns the chosen Ready process, or ``None`` when the
    incumbent keeps the CPU (or the CPU stays idle). It never mutates the
    queue; the dispatcher applies the decision.
    """

    name: str = ""
    preemptive: bool = False
    uses_quantum: bool = False

    def is_preemptive(self) -> bool:
        return self.preemptive

    @abstractmethod
    def select(
        self,
        ready: ProcessQueue,
        running: Optional[Process],
        quantum_left: int = 0,
    ) -> Optional[Process]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FCFSPolicy(SchedulingPolicy):
    name = "FCFS"

    def select(self, ready, running, quantum_left=0):
        if running is not None:
            return None
        return ready.peek_head()


class SJFPolicy(SchedulingPolicy):
    """
    Shortest Job First (non-preemptive), by remaining CPU burst.
    """

    name = "SJF (non-preemptive)"

    def select(self, ready, running, quantum_left=0):
        if running is not None:
            return None
        return _first_min(ready, lambda p: p.cpu_burst_remaining)


class SRTFPolicy(SchedulingPolicy):
    """
    Shortest Remaining Time First. The incumbent is only displaced by a
    strictly shorter remaining burst.
    """

    name = "SRTF"
    preemptive = True

    def select(self, ready, running, quantum_left=0):
        candidate = _first_min(ready, lambda p: p.cpu_burst_remaining)
        if candidate is None:
            return None
        if running is None or candidate.cpu_burst_remaining < running.cpu_burst_remaining:
            return candidate
        return None


class PriorityPolicy(SchedulingPolicy):
    """
    Static priority (non-preemptive). Higher number means higher priority.
    """

    name = "Priority (non-preemptive)"

    def select(self, ready, running, quantum_left=0):
        if running is not None:
            return None
        return _first_max(ready, lambda p: p.priority)


class PreemptivePriorityPolicy(SchedulingPolicy):
    name = "Priority (preemptive)"
    preemptive = True

    def select(self, ready, running, quantum_left=0):
        candidate = _first_max(ready, lambda p: p.priority)
        if candidate is None:
            return None
        # -1 stands in for an empty CPU so any real priority wins.
        incumbent = running.priority if running is not None else -1
        if candidate.priority > incumbent:
            return candidate
        return None


class RoundRobinPolicy(SchedulingPolicy):
    """
    Round Robin with a fixed quantum. Always takes the Ready head; a running
    process is only replaced once its quantum is used up.
    """

    name = "Round Robin"
    preemptive = True
    uses_quantum = True

    def select(self, ready, running, quantum_left=0):
        if running is not None and quantum_left > 0:
            return None
        return ready.peek_head()


POLICIES: Dict[str, type[SchedulingPolicy]] = {
    "fcfs": FCFSPolicy,
    "sjf": SJFPolicy,
    "srtf": SRTFPolicy,
    "priority": PriorityPolicy,
    "priority-preemptive": PreemptivePriorityPolicy,
    "rr": RoundRobinPolicy,
}


def get_policy(name: str) -> SchedulingPolicy:
    key = name.lower()
    if key not in POLICIES:
        raise ConfigurationError(
            f"unknown scheduling algorithm (choose from {', '.join(POLICIES)})",
            field="algorithm",
            value=name,
        )
    return POLICIES[key]()

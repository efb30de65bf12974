from __future__ import annotations

from typing import List, Optional

from .models import ScheduledSlice

IDLE = None


class Timeline:
    """
    Fixed-capacity record of which pid occupied the CPU at each tick.

    ``IDLE`` (``None``) marks ticks where the CPU did no work.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("timeline capacity must be positive")
        self.capacity = capacity
        self._slots: List[Optional[int]] = [IDLE] * capacity
        self._length = 0

    def record(self, tick: int, pid: Optional[int]) -> None:
        if not 0 <= tick < self.capacity:
            raise IndexError(f"tick {tick} outside timeline capacity {self.capacity}")
        self._slots[tick] = pid
        self._length = max(self._length, tick + 1)

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, tick: int) -> Optional[int]:
        if not 0 <= tick < self._length:
            raise IndexError(tick)
        return self._slots[tick]

    def as_list(self) -> List[Optional[int]]:
        return self._slots[: self._length]

    def busy_ticks(self) -> int:
        return sum(1 for pid in self.as_list() if pid is not IDLE)


def to_slices(ticks: List[Optional[int]]) -> List[ScheduledSlice]:
    """
    Collapse a tick-by-tick timeline into contiguous execution slices.
    Idle ticks produce no slice, leaving a gap in the chart.
    """
    slices: List[ScheduledSlice] = []
    current: Optional[ScheduledSlice] = None

    for tick, pid in enumerate(ticks):
        if pid is IDLE:
            current = None
            continue
        label = str(pid)
        if current is not None and current.pid == label and current.end_time == tick:
            current.end_time = tick + 1
            continue
        current = ScheduledSlice(pid=label, start_time=tick, end_time=tick + 1)
        slices.append(current)

    return slices

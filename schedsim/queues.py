from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional

from .errors import InvariantViolation
from .models import Process


class ProcessQueue:
    """
    Ordered collection of process references.

    FIFO by default: ``enqueue`` appends at the tail unless ``at_head`` is
    set. Iteration walks from head (earliest enqueued) to tail, which is the
    order every selection scan relies on for tie-breaking.
    """

    def __init__(self, name: str = "queue") -> None:
        self.name = name
        self._items: Deque[Process] = deque()

    def enqueue(self, process: Process, at_head: bool = False) -> None:
        if at_head:
            self._items.appendleft(process)
        else:
            self._items.append(process)

    def dequeue(self, process: Process) -> Process:
        """
        Remove a specific process. The target must be present.
        """
        if not self._items:
            raise InvariantViolation(f"dequeue of pid {process.pid} from empty {self.name} queue")
        for idx, item in enumerate(self._items):
            if item is process:
                del self._items[idx]
                return item
        raise InvariantViolation(f"pid {process.pid} is not a member of the {self.name} queue")

    def pop_head(self) -> Optional[Process]:
        if not self._items:
            return None
        return self._items.popleft()

    def peek_head(self) -> Optional[Process]:
        return self._items[0] if self._items else None

    def is_empty(self) -> bool:
        return not self._items

    def count(self) -> int:
        return len(self._items)

    def pids(self) -> list[int]:
        return [p.pid for p in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Process]:
        return iter(tuple(self._items))

    def __contains__(self, process: object) -> bool:
        return any(item is process for item in self._items)

    def __repr__(self) -> str:
        return f"ProcessQueue({self.name!r}, pids={self.pids()})"

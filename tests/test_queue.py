import pytest

from schedsim.errors import InvariantViolation
from schedsim.models import Process
from schedsim.queues import ProcessQueue


def _p(pid, burst=3):
    return Process(pid, arrival_time=0, cpu_burst_total=burst)


def test_fifo_order_and_head_insert():
    q = ProcessQueue("ready")
    a, b, c = _p(1), _p(2), _p(3)
    q.enqueue(a)
    q.enqueue(b)
    q.enqueue(c, at_head=True)
    assert q.pids() == [3, 1, 2]
    assert q.count() == 3 == len(q)
    assert q.pop_head() is c
    assert q.pids() == [1, 2]


def test_dequeue_by_reference():
    q = ProcessQueue()
    a, b, c = _p(1), _p(2), _p(3)
    for p in (a, b, c):
        q.enqueue(p)
    assert q.dequeue(b) is b
    assert q.pids() == [1, 3]
    assert b not in q
    assert a in q


def test_dequeue_matches_identity_not_value():
    q = ProcessQueue()
    a = _p(1)
    twin = _p(1)
    q.enqueue(a)
    with pytest.raises(InvariantViolation):
        q.dequeue(twin)
    assert q.count() == 1


def test_dequeue_from_empty_queue_is_invariant_violation():
    q = ProcessQueue("wait")
    with pytest.raises(InvariantViolation, match="empty wait queue"):
        q.dequeue(_p(7))


def test_pop_head_on_empty_returns_none():
    q = ProcessQueue()
    assert q.is_empty()
    assert q.pop_head() is None
    assert q.peek_head() is None


def test_iteration_is_a_snapshot():
    q = ProcessQueue()
    a, b = _p(1), _p(2)
    q.enqueue(a)
    q.enqueue(b)
    for p in q:
        q.dequeue(p)
    assert q.is_empty()

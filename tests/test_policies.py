import pytest

from schedsim.errors import ConfigurationError
from schedsim.models import Process
from schedsim.policies import (
    FCFSPolicy,
    PreemptivePriorityPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    SJFPolicy,
    SRTFPolicy,
    get_policy,
)
from schedsim.queues import ProcessQueue


def _ready(*procs):
    q = ProcessQueue("ready")
    for p in procs:
        q.enqueue(p)
    return q


def _p(pid, burst, priority=0):
    return Process(pid, arrival_time=0, cpu_burst_total=burst, priority=priority)


def test_fcfs_takes_head_only_when_idle():
    a, b = _p(1, 9), _p(2, 1)
    ready = _ready(a, b)
    assert FCFSPolicy().select(ready, None) is a
    assert FCFSPolicy().select(ready, _p(3, 1)) is None
    assert FCFSPolicy().select(_ready(), None) is None


def test_sjf_picks_shortest_first_encountered_on_tie():
    a, b, c = _p(1, 4), _p(2, 2), _p(3, 2)
    assert SJFPolicy().select(_ready(a, b, c), None) is b
    assert SJFPolicy().select(_ready(a, b, c), _p(4, 10)) is None


def test_srtf_preempts_only_on_strictly_shorter():
    running = _p(1, 3)
    shorter, equal = _p(2, 2), _p(3, 3)
    policy = SRTFPolicy()
    assert policy.is_preemptive()
    assert policy.select(_ready(equal), running) is None
    assert policy.select(_ready(equal, shorter), running) is shorter
    assert policy.select(_ready(equal), None) is equal


def test_priority_higher_number_wins():
    low, high, high2 = _p(1, 5, priority=1), _p(2, 5, priority=4), _p(3, 5, priority=4)
    policy = PriorityPolicy()
    assert not policy.is_preemptive()
    assert policy.select(_ready(low, high, high2), None) is high
    assert policy.select(_ready(low, high), low) is None


def test_preemptive_priority_requires_strictly_greater():
    running = _p(1, 5, priority=3)
    same, higher = _p(2, 5, priority=3), _p(3, 5, priority=4)
    policy = PreemptivePriorityPolicy()
    assert policy.select(_ready(same), running) is None
    assert policy.select(_ready(same, higher), running) is higher
    # Unused priority (0) still beats an empty CPU.
    zero = _p(4, 1, priority=0)
    assert policy.select(_ready(zero), None) is zero


def test_round_robin_waits_for_quantum():
    running, head, other = _p(1, 5), _p(2, 1), _p(3, 1)
    policy = RoundRobinPolicy()
    assert policy.uses_quantum
    assert policy.select(_ready(head, other), running, quantum_left=1) is None
    assert policy.select(_ready(head, other), running, quantum_left=0) is head
    assert policy.select(_ready(head, other), None, quantum_left=2) is head
    assert policy.select(_ready(), running, quantum_left=0) is None


def test_get_policy_by_name():
    assert isinstance(get_policy("RR"), RoundRobinPolicy)
    assert isinstance(get_policy("priority-preemptive"), PreemptivePriorityPolicy)
    with pytest.raises(ConfigurationError):
        get_policy("lottery")

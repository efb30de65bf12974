import pytest

from schedsim.config import MAX_ARRIVAL_TIME, MAX_CPU_BURST, MAX_PRIORITY, SimulationConfig
from schedsim.errors import ConfigurationError
from schedsim.generator import generate_processes
from schedsim.models import ProcessState


def _snapshot(procs):
    return [
        (p.pid, p.arrival_time, p.cpu_burst_total, p.priority, p.io_trigger_offset, p.io_burst_remaining)
        for p in procs
    ]


def test_same_seed_same_workload():
    cfg = SimulationConfig(num_processes=10, seed=123)
    assert _snapshot(generate_processes(cfg)) == _snapshot(generate_processes(cfg))


def test_generated_values_within_ranges():
    procs = generate_processes(SimulationConfig(num_processes=20, seed=5, use_priority=True))
    assert len({p.pid for p in procs}) == 20
    for p in procs:
        assert 1001 <= p.pid <= 9999
        assert p.state is ProcessState.NEW
        assert 0 <= p.arrival_time <= MAX_ARRIVAL_TIME
        assert 1 <= p.cpu_burst_total <= MAX_CPU_BURST
        assert p.cpu_burst_remaining == p.cpu_burst_total
        assert 1 <= p.priority <= MAX_PRIORITY
        if p.cpu_burst_total >= 2:
            assert 1 <= p.io_trigger_offset < p.cpu_burst_total
            assert 1 <= p.io_burst_remaining <= max(1, p.cpu_burst_total // 2)
        else:
            assert p.io_trigger_offset == -1


def test_priority_unused_is_zero():
    procs = generate_processes(SimulationConfig(num_processes=6, seed=9))
    assert {p.priority for p in procs} == {0}


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"num_processes": 0}, "num_processes"),
        ({"num_processes": 21}, "num_processes"),
        ({"algorithm": "lottery"}, "algorithm"),
        ({"quantum": 0}, "quantum"),
        ({"max_ticks": -1}, "max_ticks"),
    ],
)
def test_invalid_config_is_rejected(kwargs, field):
    with pytest.raises(ConfigurationError) as exc_info:
        SimulationConfig(**kwargs).validate()
    assert exc_info.value.field == field

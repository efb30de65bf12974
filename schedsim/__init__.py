"""
Tick-based CPU scheduling simulator.

Models processes competing for one CPU and one I/O device under FCFS, SJF,
SRTF, Priority (with and without preemption) and Round Robin scheduling,
recording a per-tick timeline and wait/turnaround metrics.
"""

from .models import Process, ProcessState, SimulationResult
from .policies import POLICIES, get_policy
from .simulator import simulate

__all__ = ["POLICIES", "Process", "ProcessState", "SimulationResult", "get_policy", "simulate"]

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import AggregateMetrics, MetricsReport, Process, ProcessMetrics, SystemMetrics


def process_metrics(processes: Sequence[Process]) -> List[ProcessMetrics]:
    return [
        ProcessMetrics(
            pid=p.pid,
            arrival_time=p.arrival_time,
            cpu_burst=p.cpu_burst_total,
            priority=p.priority,
            ready_wait_time=p.ready_wait_time,
            io_wait_time=p.io_wait_time,
            turnaround_time=p.finish_time - p.arrival_time,
            finish_time=p.finish_time,
        )
        for p in processes
    ]


def aggregate_metrics(rows: Sequence[ProcessMetrics]) -> Optional[AggregateMetrics]:
    """
    Sums and integer-truncated means over terminated processes.

    Returns ``None`` when nothing terminated; there is no mean to report.
    """
    n = len(rows)
    if n == 0:
        return None

    total_ready = sum(r.ready_wait_time for r in rows)
    total_io = sum(r.io_wait_time for r in rows)
    total_turnaround = sum(r.turnaround_time for r in rows)
    return AggregateMetrics(
        count=n,
        total_ready_wait=total_ready,
        total_io_wait=total_io,
        total_turnaround=total_turnaround,
        avg_ready_wait=total_ready // n,
        avg_io_wait=total_io // n,
        avg_turnaround=total_turnaround // n,
    )


def compute_system_metrics(rows: Sequence[ProcessMetrics], timeline: Sequence[Optional[int]]) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the finished processes and
    the tick timeline.
    """
    cpu_busy_time = sum(1 for pid in timeline if pid is not None)
    idle_ticks = len(timeline) - cpu_busy_time

    if not rows:
        return SystemMetrics(cpu_busy_time=cpu_busy_time, makespan=0, throughput=0.0, cpu_utilization=0.0, idle_ticks=idle_ticks)

    makespan = max(r.finish_time for r in rows)
    throughput = len(rows) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / len(timeline) if timeline else 0.0

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        idle_ticks=idle_ticks,
    )


def build_report(terminated: Sequence[Process], timeline: Sequence[Optional[int]]) -> MetricsReport:
    rows = process_metrics(terminated)
    return MetricsReport(
        processes=rows,
        aggregate=aggregate_metrics(rows),
        system=compute_system_metrics(rows, timeline),
    )


def summarize_process_metrics(rows: Sequence[ProcessMetrics]) -> dict:
    """
    Return float averages of the key per-process metrics for quick comparison.
    """
    if not rows:
        return {"avg_ready_wait": 0.0, "avg_io_wait": 0.0, "avg_turnaround": 0.0}

    n = len(rows)
    return {
        "avg_ready_wait": sum(r.ready_wait_time for r in rows) / n,
        "avg_io_wait": sum(r.io_wait_time for r in rows) / n,
        "avg_turnaround": sum(r.turnaround_time for r in rows) / n,
    }

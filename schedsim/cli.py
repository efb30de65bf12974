from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import DEFAULT_MAX_TICKS, DEFAULT_QUANTUM, MAX_PROCESS, SimulationConfig
from .errors import ConfigurationError
from .gantt import build_rich_gantt
from .generator import generate_processes
from .metrics import summarize_process_metrics
from .models import Process, SimulationResult
from .policies import POLICIES
from .simulator import simulate
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file. If omitted, a random workload is generated.",
    )
    parser.add_argument(
        "--processes",
        "-n",
        type=int,
        default=5,
        help=f"Number of processes to generate without --workload (1-{MAX_PROCESS}, default: 5).",
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for the generated workload.",
    )
    parser.add_argument(
        "--use-priority",
        action="store_true",
        help="Give generated processes random priorities (higher number = higher priority).",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=DEFAULT_MAX_TICKS,
        help=f"Upper bound on simulated time (default: {DEFAULT_MAX_TICKS}).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling event.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Tick-based CPU scheduling simulator (FCFS, SJF, SRTF, Priority, Priority-preemptive, RR).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate one scheduling algorithm.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(POLICIES)}).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the simulation tick by tick in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )
    _add_workload_args(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(POLICIES),
        help=f"Algorithms to compare (default: {' '.join(POLICIES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )
    _add_workload_args(compare_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _load_processes(args: argparse.Namespace, algorithm: str, quantum: int) -> List[Process]:
    """
    Load the workload file, or generate one. With a file, the process count
    checked is the file's, not ``--processes``.
    """
    processes = load_workload(Path(args.workload)) if args.workload else None

    config = SimulationConfig(
        num_processes=len(processes) if processes is not None else args.processes,
        algorithm=algorithm,
        quantum=quantum,
        use_priority=args.use_priority,
        seed=args.seed,
        max_ticks=args.max_ticks,
    ).validate()

    if processes is not None:
        return processes
    return generate_processes(config)


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    if not result.converged:
        console.print(f"[red]Simulation did not converge within {result.ticks} ticks.[/red]")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Priority", "Ready wait", "I/O wait", "Turnaround", "Finish"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.report.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.arrival_time),
            str(p.cpu_burst),
            "" if p.priority == 0 else str(p.priority),
            str(p.ready_wait_time),
            str(p.io_wait_time),
            str(p.turnaround_time),
            str(p.finish_time),
        )

    console.print(proc_table)
    console.print()

    agg = result.report.aggregate
    if agg is None:
        console.print("[yellow]No process terminated; averages are not available.[/yellow]")
        return

    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Total", justify="right")
    sys_table.add_column("Average", justify="right")

    sys_table.add_row("Ready wait", str(agg.total_ready_wait), str(agg.avg_ready_wait))
    sys_table.add_row("I/O wait", str(agg.total_io_wait), str(agg.avg_io_wait))
    sys_table.add_row("Turnaround", str(agg.total_turnaround), str(agg.avg_turnaround))

    system = result.report.system
    if system is not None:
        sys_table.add_row("Throughput (proc/tick)", "", f"{system.throughput:.3f}")
        sys_table.add_row("CPU utilization", "", f"{system.cpu_utilization*100:.1f}%")
        sys_table.add_row("Idle ticks", str(system.idle_ticks), "")

    console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Replay the recorded timeline and events one tick at a time.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {len(result.timeline)} ticks)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    by_tick: dict[int, List[str]] = {}
    for ev in result.events:
        by_tick.setdefault(ev.tick, []).append(f"{ev.kind.value}({','.join(str(p) for p in ev.pids)})")

    run_length = 0
    previous = None
    for t, pid in enumerate(result.timeline):
        run_length = run_length + 1 if pid is not None and pid == previous else 1
        previous = pid
        bar = f"[green]{'█' * run_length}[/green]" if pid is not None else ""
        msg = f"t={t:3d}: " + ("[idle]" if pid is None else str(pid))
        console.print(msg + (" " + bar if bar else "") + "  [dim]" + " ".join(by_tick.get(t, [])) + "[/dim]")
        time.sleep(delay)


def _run_compare(args: argparse.Namespace, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg ready wait", justify="right")
    summary_table.add_column("Avg I/O wait", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Ticks", justify="right")

    for alg in args.algorithms:
        # Every policy mutates its processes, so each run gets a fresh copy.
        processes = _load_processes(args, alg, args.quantum)
        result = simulate(processes, alg, quantum=args.quantum, max_ticks=args.max_ticks)
        summary = summarize_process_metrics(result.report.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_ready_wait']:.2f}",
            f"{summary['avg_io_wait']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            str(result.ticks) if result.converged else f"{result.ticks}!",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    _configure_logging(args.verbose)

    try:
        if args.command == "run":
            processes = _load_processes(args, args.algorithm, args.quantum)
            result = simulate(processes, args.algorithm, quantum=args.quantum, max_ticks=args.max_ticks)
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console)
            return 0 if result.converged else 1

        if args.command == "compare":
            if args.seed is None and not args.workload:
                # All algorithms must see the same generated workload.
                args.seed = int(time.time())
                logger.info("using generated seed %d", args.seed)
            _run_compare(args, console)
            return 0
    except ConfigurationError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

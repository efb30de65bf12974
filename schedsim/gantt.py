from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .timeline import to_slices


def _cell_width(ticks: Sequence[Optional[int]]) -> int:
    return max([len(str(pid)) for pid in ticks if pid is not None] or [1])


def render_gantt(ticks: Sequence[Optional[int]]) -> str:
    """
    Plain-text Gantt chart, one fixed-width cell per tick. Idle ticks are
    drawn as dots.
    """
    if not ticks:
        return "(no execution)"

    width = _cell_width(ticks)
    cells = [("." * width if pid is None else str(pid).rjust(width)) for pid in ticks]
    marks = [str(t).rjust(width) for t in range(len(ticks))]

    return "\n".join(
        [
            "Gantt Chart:",
            "|" + "|".join(cells) + "|",
            " " + " ".join(marks),
        ]
    )


def build_rich_gantt(ticks: Sequence[Optional[int]]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    slices = to_slices(list(ticks))
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    # Each tick gets enough columns to fit a pid label.
    scale = _cell_width(ticks)
    timeline = Text()
    labels = Text()
    time_marks: List[str] = ["0"]
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append("." * idle_gap * scale, style="dim")
            labels.append(" " * idle_gap * scale)
            last_time = sl.start_time
            time_marks.append(str(last_time))

        width = (sl.end_time - sl.start_time) * scale
        color = pid_color(sl.pid)

        timeline.append(" " * width, style=f"on {color}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

        last_time = sl.end_time
        time_marks.append(str(last_time))

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, " ".join(time_marks)

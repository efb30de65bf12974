import pytest
from rich.console import Console

from schedsim.gantt import build_rich_gantt, render_gantt
from schedsim.timeline import Timeline, to_slices


def test_to_slices_merges_runs_and_skips_idle():
    slices = to_slices([1, 1, None, 2, 2, 1])
    assert [(s.pid, s.start_time, s.end_time) for s in slices] == [
        ("1", 0, 2),
        ("2", 3, 5),
        ("1", 5, 6),
    ]


def test_timeline_records_within_capacity():
    tl = Timeline(3)
    tl.record(0, 7)
    tl.record(2, None)
    assert tl.as_list() == [7, None, None]
    assert tl.busy_ticks() == 1
    with pytest.raises(IndexError):
        tl.record(3, 7)


def test_render_gantt_plain_text():
    text = render_gantt([1, None, 12])
    lines = text.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "| 1|..|12|"
    assert lines[2] == "  0  1  2"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_build_rich_gantt_time_marks():
    panel, marks = build_rich_gantt([5, 5, None, 6])
    assert marks == "0 2 3 4"
    console = Console(record=True, width=80)
    console.print(panel)
    assert "5" in console.export_text()


def test_build_rich_gantt_idle_only():
    panel, marks = build_rich_gantt([None, None])
    assert marks == ""

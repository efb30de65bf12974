from pathlib import Path

from schedsim.cli import build_parser, main


def _workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"cpu_burst":3},{"pid":2,"arrival_time":1,"cpu_burst":2}]')
    return p


def test_parser_defaults():
    args = build_parser().parse_args(["run", "-a", "rr"])
    assert args.quantum == 2
    assert args.workload is None
    assert args.processes == 5


def test_run_with_workload_file(tmp_path: Path, capsys):
    code = main(["run", "-a", "fcfs", "-w", str(_workload(tmp_path))])
    out = capsys.readouterr().out
    assert code == 0
    assert "FCFS" in out
    assert "Per-process metrics" in out
    assert "Turnaround" in out


def test_run_with_generated_workload(capsys):
    code = main(["run", "-a", "rr", "-q", "3", "-n", "4", "-s", "11"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Quantum:" in out


def test_run_reports_non_convergence(tmp_path: Path, capsys):
    code = main(["run", "-a", "fcfs", "-w", str(_workload(tmp_path)), "--max-ticks", "2"])
    out = capsys.readouterr().out
    assert code == 1
    assert "did not converge" in out


def test_invalid_algorithm_is_rejected(capsys):
    code = main(["run", "-a", "lottery", "-s", "1"])
    assert code == 2
    assert "Error" in capsys.readouterr().out


def test_compare_all_algorithms(tmp_path: Path, capsys):
    code = main(["compare", "-w", str(_workload(tmp_path))])
    out = capsys.readouterr().out
    assert code == 0
    assert "Algorithm comparison" in out
    assert "SRTF" in out


def test_truncated_workload_file_exits_with_2(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,')
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2
    assert "Error" in capsys.readouterr().out


def test_missing_workload_file_exits_with_2(tmp_path: Path, capsys):
    assert main(["compare", "-w", str(tmp_path / "nope.json")]) == 2
    assert "Error" in capsys.readouterr().out


def test_processes_flag_ignored_with_workload_file(tmp_path: Path):
    assert main(["run", "-a", "fcfs", "-w", str(_workload(tmp_path)), "-n", "30"]) == 0


def test_oversized_workload_file_is_rejected(tmp_path: Path, capsys):
    p = tmp_path / "big.csv"
    rows = "".join(f"{pid},0,1\n" for pid in range(1, 22))
    p.write_text("pid,arrival_time,cpu_burst\n" + rows)
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2
    assert "num_processes" in capsys.readouterr().out

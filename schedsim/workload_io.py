from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List, Mapping

from .config import MAX_PRIORITY
from .errors import ConfigurationError
from .models import NO_IO, Process


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in (".json", ".csv"):
        raise ConfigurationError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    try:
        processes = _load_json(path) if suffix == ".json" else _load_csv(path)
    except ConfigurationError:
        raise
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read workload {path}: {exc}") from exc

    _check_unique(processes)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise ConfigurationError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for entry in raw:
        processes.append(process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(process_from_mapping(row))
    return processes


def _as_int(value) -> int:
    # Reject JSON booleans and fractional numbers instead of truncating them.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _optional_int(mapping: Mapping, key: str, default: int) -> int:
    value = mapping.get(key)
    if value in (None, ""):
        return default
    return _as_int(value)


def process_from_mapping(mapping) -> Process:
    try:
        pid = _as_int(mapping["pid"])
        arrival_time = _as_int(mapping["arrival_time"])
        cpu_burst = _as_int(mapping["cpu_burst"])
        priority = _optional_int(mapping, "priority", 0)
        io_trigger = _optional_int(mapping, "io_trigger", NO_IO)
        io_burst = _optional_int(mapping, "io_burst", 0)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid process entry: {mapping!r}") from exc

    if arrival_time < 0:
        raise ConfigurationError("must not be negative", field="arrival_time", value=arrival_time)
    if cpu_burst <= 0:
        raise ConfigurationError("must be positive", field="cpu_burst", value=cpu_burst)
    if not 0 <= priority <= MAX_PRIORITY:
        raise ConfigurationError(f"must be between 0 and {MAX_PRIORITY}", field="priority", value=priority)

    if io_trigger <= 0:
        io_trigger, io_burst = NO_IO, 0
    elif io_trigger >= cpu_burst:
        raise ConfigurationError(
            "I/O must start before the CPU burst ends", field="io_trigger", value=io_trigger
        )
    elif io_burst <= 0:
        raise ConfigurationError("must be positive when io_trigger is set", field="io_burst", value=io_burst)

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        cpu_burst_total=cpu_burst,
        priority=priority,
        io_trigger_offset=io_trigger,
        io_burst_remaining=io_burst,
    )


def _check_unique(processes: List[Process]) -> None:
    seen = set()
    for p in processes:
        if p.pid in seen:
            raise ConfigurationError("duplicate pid in workload", field="pid", value=p.pid)
        seen.add(p.pid)

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import InvalidProcessSpec
from .models import Process

# Five processes covering every multilevel queue level.
SAMPLE_WORKLOAD = [
    {"pid": "P1", "arrival_time": 0, "burst_time": 4, "priority": 2},
    {"pid": "P2", "arrival_time": 1, "burst_time": 3, "priority": 1},
    {"pid": "P3", "arrival_time": 2, "burst_time": 1, "priority": 3},
    {"pid": "P4", "arrival_time": 3, "burst_time": 5, "priority": 2},
    {"pid": "P5", "arrival_time": 4, "burst_time": 2, "priority": 1},
]


def sample_processes() -> List[Process]:
    return [_process_from_mapping(entry) for entry in SAMPLE_WORKLOAD]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise InvalidProcessSpec("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else 1
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidProcessSpec(f"Invalid process entry: {mapping!r}") from exc

    process = Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
    process.validate()
    return process

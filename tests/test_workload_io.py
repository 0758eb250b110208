from pathlib import Path

import pytest

from schedsim.errors import InvalidProcessSpec
from schedsim.models import Process
from schedsim.workload_io import SAMPLE_WORKLOAD, load_workload, sample_processes


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority == 1
    assert procs[1].arrival_time == 1
    assert procs[1].remaining_time == 2


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,3\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[0].priority == 3
    assert procs[1].priority == 1


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("- pid: A\n")
    with pytest.raises(ValueError):
        load_workload(p)


@pytest.mark.parametrize(
    "body",
    [
        '{"pid": "A"}',
        '[{"pid": "A", "arrival_time": 0}]',
        '[{"pid": "A", "arrival_time": "soon", "burst_time": 1}]',
        '[{"pid": "A", "arrival_time": 0, "burst_time": 0}]',
        '[3]',
    ],
)
def test_invalid_json_entries(tmp_path: Path, body):
    p = tmp_path / "w.json"
    p.write_text(body)
    with pytest.raises(InvalidProcessSpec):
        load_workload(p)


def test_sample_processes():
    procs = sample_processes()
    assert [p.pid for p in procs] == [entry["pid"] for entry in SAMPLE_WORKLOAD]
    assert {p.priority for p in procs} == {1, 2, 3}

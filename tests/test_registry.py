import pytest

from schedsim.errors import DuplicateProcessId, InvalidProcessSpec, ProcessNotFound, UnknownAlgorithm
from schedsim.models import Process, SchedulerConfig
from schedsim.registry import ProcessRegistry


def _registry():
    registry = ProcessRegistry()
    registry.register("P1", 0, 4, priority=2)
    registry.register("P2", 1, 3, priority=1)
    return registry


def test_register_keeps_order():
    registry = _registry()
    registry.register("P0", 0, 1)
    assert [p.pid for p in registry] == ["P1", "P2", "P0"]
    assert len(registry) == 3
    assert "P2" in registry


def test_duplicate_id_is_rejected():
    registry = _registry()
    with pytest.raises(DuplicateProcessId):
        registry.register("P1", 5, 5)
    assert len(registry) == 2
    assert registry.get("P1").burst_time == 4


@pytest.mark.parametrize(
    "pid, arrival, burst",
    [("", 0, 1), ("   ", 0, 1), ("P9", 0, 0), ("P9", 0, -2), ("P9", -1, 3)],
)
def test_invalid_spec_is_rejected(pid, arrival, burst):
    registry = _registry()
    with pytest.raises(InvalidProcessSpec):
        registry.register(pid, arrival, burst)
    assert len(registry) == 2


def test_remove():
    registry = _registry()
    removed = registry.remove("P1")
    assert removed.pid == "P1"
    assert [p.pid for p in registry] == ["P2"]
    with pytest.raises(ProcessNotFound):
        registry.remove("P1")
    with pytest.raises(ProcessNotFound):
        registry.get("nope")


def test_reset_all_and_sample():
    registry = _registry()
    registry.reset_all()
    assert len(registry) == 0

    registry.load_sample()
    assert [p.pid for p in registry] == ["P1", "P2", "P3", "P4", "P5"]


def test_add_resets_runtime_state():
    p = Process("P1", 0, 3)
    p.remaining_time = 1
    p.start_time = 4
    ProcessRegistry().add(p)
    assert p.remaining_time == 3
    assert not p.has_started


def test_snapshot_is_independent():
    registry = _registry()
    snap = registry.snapshot()
    snap[0].remaining_time = 0
    snap[0].start_time = 2
    assert registry.get("P1").remaining_time == 4
    assert not registry.get("P1").has_started


def test_run_is_idempotent_and_leaves_registry_untouched():
    registry = _registry()
    first = registry.run("srtf")
    second = registry.run("srtf")
    assert first == second
    assert all(p.remaining_time == p.burst_time and not p.has_started for p in registry)


def test_run_on_empty_registry():
    res = ProcessRegistry().run("rr", SchedulerConfig(quantum=3))
    assert res.timeline == []
    assert res.processes == []
    assert res.system.cpu_utilization == 0.0


def test_run_unknown_algorithm():
    with pytest.raises(UnknownAlgorithm):
        _registry().run("edf")


def test_results_in_registration_order():
    res = _registry().run("priority")
    assert [p.pid for p in res.processes] == ["P1", "P2"]
    assert res.algorithm == "Priority Scheduling"
    assert res.quantum is None

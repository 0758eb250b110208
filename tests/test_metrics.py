import pytest

from schedsim.errors import MissingSegmentsError
from schedsim.metrics import compute_metrics, compute_system_metrics, summarize_process_metrics
from schedsim.models import Process, ProcessMetrics, ScheduledSlice
from schedsim.algorithms import run_algorithm
from schedsim.workload_io import sample_processes


def _fcfs_example():
    procs = [Process("P1", 0, 4), Process("P2", 1, 3), Process("P3", 2, 1)]
    return run_algorithm("fcfs", procs)


def test_per_process_metrics():
    res = _fcfs_example()
    assert [p.completion_time for p in res.processes] == [4, 7, 8]
    assert [p.turnaround_time for p in res.processes] == [4, 6, 6]
    assert [p.waiting_time for p in res.processes] == [0, 3, 5]
    assert [p.response_time for p in res.processes] == [0, 3, 5]


def test_system_metrics():
    sys = _fcfs_example().system
    assert sys.total_time == 8
    assert sys.cpu_busy_time == 8
    assert sys.cpu_utilization == pytest.approx(100.0)
    assert sys.throughput == pytest.approx(3 / 8)
    assert sys.avg_turnaround == pytest.approx(16 / 3)
    assert sys.avg_waiting == pytest.approx(8 / 3)
    assert sys.avg_response == pytest.approx(8 / 3)


def test_utilization_accounts_for_idle_time():
    res = run_algorithm("fcfs", [Process("P1", 0, 2), Process("P2", 5, 3)])
    assert res.system.total_time == 8
    assert res.system.cpu_utilization == pytest.approx(62.5)
    assert res.system.throughput == pytest.approx(0.25)


def test_response_uses_frozen_start_time():
    procs = [Process("P1", 0, 8), Process("P2", 1, 4)]
    res = run_algorithm("srtf", procs)
    p1, p2 = res.processes
    assert (p1.completion_time, p1.waiting_time, p1.response_time) == (12, 4, 0)
    assert (p2.completion_time, p2.waiting_time, p2.response_time) == (5, 0, 0)


def test_metrics_written_back_to_processes():
    procs = [Process("P1", 0, 2)]
    procs[0].start_time = 0
    compute_metrics(procs, [ScheduledSlice("P1", 0, 2)])
    assert procs[0].completion_time == 2
    assert procs[0].turnaround_time == 2


def test_missing_segments_is_fatal():
    procs = [Process("P1", 0, 3), Process("P2", 0, 1)]
    with pytest.raises(MissingSegmentsError) as excinfo:
        compute_metrics(procs, [ScheduledSlice("P1", 0, 3)])
    assert excinfo.value.pids == ["P2"]


def test_zero_total_time_does_not_divide():
    results = [ProcessMetrics("P1", 0, 0, 0, 0, 0, 0, 0)]
    sys = compute_system_metrics(results, [])
    assert sys.cpu_utilization == 0.0
    assert sys.throughput == 0.0


def test_empty_results():
    sys = compute_system_metrics([], [])
    assert sys.total_time == 0
    assert sys.avg_waiting == 0.0
    assert summarize_process_metrics([]) == {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}


def test_starvation_count():
    # FCFS waits on the sample workload: 0, 3, 5, 5, 9
    res = run_algorithm("fcfs", sample_processes())
    assert res.system.avg_waiting == pytest.approx(4.4)
    assert res.system.starvation_count == 1

import pytest

from schedsim.algorithms import run_algorithm
from schedsim.models import Process, ScheduledSlice, SchedulerConfig
from schedsim.timeline import build_timeline


def _rr_slices():
    procs = [Process("P1", 0, 4), Process("P2", 1, 3)]
    return run_algorithm("rr", procs, SchedulerConfig(quantum=2)).timeline


def test_rows_and_markers():
    timeline = build_timeline(_rr_slices())
    assert timeline.pids == ["P1", "P2"]
    assert [(s.start_time, s.end_time) for s in timeline.rows[0].slices] == [(0, 2), (4, 6)]
    assert [(s.start_time, s.end_time) for s in timeline.rows[1].slices] == [(2, 4), (6, 7)]
    assert timeline.markers == [0, 2, 4, 6, 7]
    assert timeline.span == 7


def test_rows_follow_first_appearance():
    procs = [Process("P1", 0, 5, priority=2), Process("P2", 0, 3, priority=1)]
    slices = run_algorithm("priority", procs).timeline
    assert build_timeline(slices).pids == ["P2", "P1"]


def test_blocks_are_proportional():
    row = build_timeline(_rr_slices()).rows[0]
    first, second = row.blocks
    assert first.offset == 0.0
    assert first.width == pytest.approx(2 / 7)
    assert second.offset == pytest.approx(4 / 7)
    assert second.width == pytest.approx(2 / 7)


def test_markers_include_idle_gaps():
    slices = [ScheduledSlice("A", 0, 2), ScheduledSlice("B", 5, 8)]
    assert build_timeline(slices).markers == [0, 2, 5, 8]


def test_empty_schedule():
    timeline = build_timeline([])
    assert timeline.rows == []
    assert timeline.markers == []
    assert timeline.span == 0

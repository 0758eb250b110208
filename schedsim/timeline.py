from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .models import ScheduledSlice


@dataclass
class TimelineBlock:
    """
    A slice with its position on a 0..1 scale, ready for proportional drawing.
    """

    slice: ScheduledSlice
    offset: float
    width: float


@dataclass
class TimelineRow:
    pid: str
    slices: List[ScheduledSlice] = field(default_factory=list)
    blocks: List[TimelineBlock] = field(default_factory=list)


@dataclass
class Timeline:
    rows: List[TimelineRow] = field(default_factory=list)
    markers: List[int] = field(default_factory=list)

    @property
    def span(self) -> int:
        return self.markers[-1] if self.markers else 0

    @property
    def pids(self) -> List[str]:
        return [row.pid for row in self.rows]


def build_timeline(slices: Sequence[ScheduledSlice]) -> Timeline:
    """
    Group a schedule into one row per process and collect the time markers.

    Rows follow the order in which each process first appears in the schedule.
    Markers are the sorted distinct start and end times of every slice.
    """
    rows: Dict[str, TimelineRow] = {}
    for sl in slices:
        rows.setdefault(sl.pid, TimelineRow(pid=sl.pid)).slices.append(sl)

    markers = sorted({t for sl in slices for t in (sl.start_time, sl.end_time)})
    timeline = Timeline(rows=list(rows.values()), markers=markers)

    span = timeline.span
    for row in timeline.rows:
        for sl in row.slices:
            if span > 0:
                block = TimelineBlock(slice=sl, offset=sl.start_time / span, width=sl.duration / span)
            else:
                block = TimelineBlock(slice=sl, offset=0.0, width=0.0)
            row.blocks.append(block)

    return timeline

from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice
from .timeline import Timeline, TimelineBlock, build_timeline

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _cells(block: TimelineBlock, width: int) -> tuple[int, int]:
    """
    Translate a block's 0..1 extents into a start column and a cell count.
    """
    start = round(block.offset * width)
    end = round((block.offset + block.width) * width)
    return start, max(1, end - start)


def _marker_line(timeline: Timeline, width: int, label_width: int) -> str:
    line = [" "] * (width + 8)
    for t in timeline.markers:
        col = round(t / timeline.span * width) if timeline.span else 0
        for i, ch in enumerate(str(t)):
            if col + i < len(line):
                line[col + i] = ch
    return " " * label_width + "".join(line).rstrip()


def render_gantt(slices: Sequence[ScheduledSlice], width: int = 40) -> str:
    """
    Plain-text Gantt chart with one row per process.
    """
    timeline = build_timeline(slices)
    if not timeline.rows:
        return "(no execution)"

    label_width = max(len(pid) for pid in timeline.pids) + 1
    lines: List[str] = ["Gantt Chart:"]
    for row in timeline.rows:
        bar = [" "] * width
        for block in row.blocks:
            start, cells = _cells(block, width)
            for col in range(start, min(width, start + cells)):
                bar[col] = "="
        lines.append(row.pid.ljust(label_width) + "|" + "".join(bar) + "|")

    lines.append(_marker_line(timeline, width, label_width + 1))
    return "\n".join(lines)


def build_rich_gantt(slices: Sequence[ScheduledSlice], width: int = 60) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    timeline = build_timeline(slices)
    if not timeline.rows:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    pid_to_color: Dict[str, str] = {
        pid: COLORS[idx % len(COLORS)] for idx, pid in enumerate(timeline.pids)
    }
    label_width = max(len(pid) for pid in timeline.pids) + 1

    table = Table.grid(padding=(0, 0))
    for row in timeline.rows:
        color = pid_to_color[row.pid]
        bar = Text()
        last_col = 0
        for block in row.blocks:
            start, cells = _cells(block, width)
            start = max(start, last_col)
            bar.append(" " * (start - last_col))
            label = f"{block.slice.start_time}-{block.slice.end_time}"
            bar.append(label[:cells].center(cells), style=f"bold on {color}")
            last_col = start + cells
        table.add_row(Text(row.pid.ljust(label_width), style="bold"), bar)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, _marker_line(timeline, width, label_width + 2)

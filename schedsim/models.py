from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .errors import InvalidProcessSpec

NOT_STARTED = -1


@dataclass
class Process:
    """
    A unit of work plus the mutable state a scheduling run keeps for it.

    Only ``pid``, ``arrival_time``, ``burst_time`` and ``priority`` are part of
    the specification; everything else is reset before each run.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 1
    remaining_time: int = field(default=0, compare=False)
    start_time: int = field(default=NOT_STARTED, compare=False)
    completion_time: int = field(default=0, compare=False)
    turnaround_time: int = field(default=0, compare=False)
    waiting_time: int = field(default=0, compare=False)
    response_time: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.remaining_time = self.burst_time
        self.start_time = NOT_STARTED
        self.completion_time = 0
        self.turnaround_time = 0
        self.waiting_time = 0
        self.response_time = 0

    def clone(self) -> "Process":
        return replace(self)

    def validate(self) -> None:
        if not isinstance(self.pid, str) or not self.pid.strip():
            raise InvalidProcessSpec(f"Process ID must be a non-empty string, got {self.pid!r}")
        for name in ("arrival_time", "burst_time", "priority"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidProcessSpec(f"{self.pid}: {name} must be an integer, got {value!r}")
        if self.arrival_time < 0:
            raise InvalidProcessSpec(f"{self.pid}: arrival_time cannot be negative")
        if self.burst_time <= 0:
            raise InvalidProcessSpec(f"{self.pid}: burst_time must be positive")

    @property
    def has_started(self) -> bool:
        return self.start_time != NOT_STARTED

    @property
    def is_finished(self) -> bool:
        return self.remaining_time <= 0

    def mark_started(self, time: int) -> None:
        # start_time is frozen once set
        if not self.has_started:
            self.start_time = time


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 1


@dataclass
class SystemMetrics:
    avg_turnaround: float = 0.0
    avg_waiting: float = 0.0
    avg_response: float = 0.0
    cpu_utilization: float = 0.0
    throughput: float = 0.0
    total_time: int = 0
    cpu_busy_time: int = 0
    starvation_count: int = 0


@dataclass
class SchedulerConfig:
    """
    Knobs shared by every policy.

    ``quantum`` is only read by round robin. ``strict_no_duplicate`` only
    affects the multilevel queue: when False a process still waiting in its
    queue may be enqueued again, which reproduces the duplicate segments of
    the reference simulator.
    """

    quantum: int = 2
    strict_no_duplicate: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.quantum, bool) or not isinstance(self.quantum, int):
            raise ValueError(f"quantum must be an integer, got {self.quantum!r}")
        if self.quantum <= 0:
            raise ValueError("Round Robin requires a positive quantum (use --quantum)")


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: SystemMetrics = field(default_factory=SystemMetrics)

"""
schedsim package.

Simulates CPU scheduling policies over a set of processes and derives
per-process and aggregate performance metrics.
"""

from .algorithms import ALGORITHM_INFO, ALGORITHMS, run_algorithm
from .errors import (
    DuplicateProcessId,
    InvalidProcessSpec,
    MissingSegmentsError,
    ProcessNotFound,
    SchedulerError,
    UnknownAlgorithm,
)
from .metrics import compute_metrics, compute_system_metrics
from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult, SchedulerConfig, SystemMetrics
from .registry import ProcessRegistry
from .timeline import Timeline, build_timeline

__version__ = "0.1.0"

__all__ = [
    "ALGORITHMS",
    "ALGORITHM_INFO",
    "DuplicateProcessId",
    "InvalidProcessSpec",
    "MissingSegmentsError",
    "Process",
    "ProcessMetrics",
    "ProcessNotFound",
    "ProcessRegistry",
    "ScheduleResult",
    "ScheduledSlice",
    "SchedulerConfig",
    "SchedulerError",
    "SystemMetrics",
    "Timeline",
    "UnknownAlgorithm",
    "build_timeline",
    "compute_metrics",
    "compute_system_metrics",
    "run_algorithm",
]

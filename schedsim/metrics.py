from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .errors import MissingSegmentsError
from .models import Process, ProcessMetrics, ScheduledSlice, SystemMetrics

logger = logging.getLogger(__name__)


def compute_metrics(processes: Sequence[Process], timeline: Sequence[ScheduledSlice]) -> List[ProcessMetrics]:
    """
    Derive completion, turnaround, waiting and response times for every
    process from the slices it received.

    Response time uses the ``start_time`` frozen during scheduling rather
    than the first slice, so the values are written back onto ``processes``
    as well as returned.
    """
    completion: Dict[str, int] = {}
    for slice_ in timeline:
        completion[slice_.pid] = max(slice_.end_time, completion.get(slice_.pid, slice_.end_time))

    missing = [p.pid for p in processes if p.pid not in completion]
    if missing:
        raise MissingSegmentsError(missing)

    results: List[ProcessMetrics] = []
    for p in processes:
        p.completion_time = completion[p.pid]
        p.turnaround_time = p.completion_time - p.arrival_time
        p.waiting_time = p.turnaround_time - p.burst_time
        p.response_time = p.start_time - p.arrival_time

        results.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=p.start_time,
                completion_time=p.completion_time,
                waiting_time=p.waiting_time,
                turnaround_time=p.turnaround_time,
                response_time=p.response_time,
                priority=p.priority,
            )
        )

    return results


def compute_system_metrics(results: Sequence[ProcessMetrics], timeline: Sequence[ScheduledSlice]) -> SystemMetrics:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process metrics and timeline slices.
    """
    if not results:
        return SystemMetrics()

    n = len(results)
    summary = summarize_process_metrics(results)
    total_time = max(p.completion_time for p in results)
    total_burst = sum(p.burst_time for p in results)
    cpu_busy_time = sum(slice_.duration for slice_ in timeline)

    if total_time > 0:
        cpu_utilization = total_burst / total_time * 100
        throughput = n / total_time
    else:
        logger.warning("Total time is zero; reporting zero utilization and throughput")
        cpu_utilization = 0.0
        throughput = 0.0

    # Starvation is flagged for processes whose waiting time is more than
    # twice the average waiting time.
    starvation_count = sum(1 for p in results if p.waiting_time > 2 * summary["avg_waiting"])

    return SystemMetrics(
        avg_turnaround=summary["avg_turnaround"],
        avg_waiting=summary["avg_waiting"],
        avg_response=summary["avg_response"],
        cpu_utilization=cpu_utilization,
        throughput=throughput,
        total_time=total_time,
        cpu_busy_time=cpu_busy_time,
        starvation_count=starvation_count,
    )


def summarize_process_metrics(processes: Sequence[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }

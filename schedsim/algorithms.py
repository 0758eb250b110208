from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import DuplicateProcessId, UnknownAlgorithm
from .metrics import compute_metrics, compute_system_metrics
from .models import Process, ScheduledSlice, ScheduleResult, SchedulerConfig

logger = logging.getLogger(__name__)

Policy = Callable[[List[Process], Optional[SchedulerConfig]], List[ScheduledSlice]]


def _dispatch(p: Process, time: int, run_time: int) -> ScheduledSlice:
    p.mark_started(time)
    p.remaining_time -= run_time
    logger.debug("t=%d: %s runs for %d (remaining %d)", time, p.pid, run_time, p.remaining_time)
    return ScheduledSlice(pid=p.pid, start_time=time, end_time=time + run_time)


def _idle_until(waiting: Iterable[Process], time: int) -> int:
    """
    Jump the clock to the next arrival instead of stepping one unit at a time.
    Callers only get here when nothing in ``waiting`` has arrived yet.
    """
    next_arrival = min(p.arrival_time for p in waiting)
    logger.debug("t=%d: CPU idle until %d", time, next_arrival)
    return next_arrival


def _first_min(candidates: Sequence[Process], key: Callable[[Process], int]) -> Process:
    # Linear scan so ties go to the earliest registered process.
    best = candidates[0]
    for p in candidates[1:]:
        if key(p) < key(best):
            best = p
    return best


def _without(processes: List[Process], done: Process) -> List[Process]:
    return [p for p in processes if p is not done]


def schedule_fcfs(processes: List[Process], config: Optional[SchedulerConfig] = None) -> List[ScheduledSlice]:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    # sorted() is stable, so equal arrivals keep registration order.
    processes_sorted = sorted(processes, key=lambda p: p.arrival_time)

    time = 0
    timeline: List[ScheduledSlice] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            time = p.arrival_time

        timeline.append(_dispatch(p, time, p.burst_time))
        time += p.burst_time

    return timeline


def _schedule_non_preemptive(processes: List[Process], key: Callable[[Process], int]) -> List[ScheduledSlice]:
    remaining: List[Process] = list(processes)

    time = 0
    timeline: List[ScheduledSlice] = []

    while remaining:
        ready = [p for p in remaining if p.arrival_time <= time]

        if not ready:
            time = _idle_until(remaining, time)
            continue

        p = _first_min(ready, key)
        timeline.append(_dispatch(p, time, p.burst_time))
        time += p.burst_time
        remaining = _without(remaining, p)

    return timeline


def schedule_sjf(processes: List[Process], config: Optional[SchedulerConfig] = None) -> List[ScheduledSlice]:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    process registered first, not the one that arrived first.
    """
    return _schedule_non_preemptive(processes, key=lambda p: p.burst_time)


def schedule_priority(processes: List[Process], config: Optional[SchedulerConfig] = None) -> List[ScheduledSlice]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. A process runs to
    completion once selected, even if a higher priority one arrives.
    """
    return _schedule_non_preemptive(processes, key=lambda p: p.priority)


def schedule_srtf(processes: List[Process], config: Optional[SchedulerConfig] = None) -> List[ScheduledSlice]:
    """
    Shortest Remaining Time First (preemptive SJF).

    The selected process runs until it finishes or the next process arrives,
    whichever comes first, so a shorter newcomer can preempt it at the
    earliest possible instant.
    """
    remaining: List[Process] = list(processes)

    time = 0
    timeline: List[ScheduledSlice] = []

    while remaining:
        ready = [p for p in remaining if p.arrival_time <= time]

        if not ready:
            time = _idle_until(remaining, time)
            continue

        current = _first_min(ready, key=lambda p: p.remaining_time)

        future = [p.arrival_time for p in remaining if p.arrival_time > time]
        run_time = current.remaining_time
        if future:
            run_time = min(run_time, min(future) - time)

        timeline.append(_dispatch(current, time, run_time))
        time += run_time

        if current.is_finished:
            remaining = _without(remaining, current)

    return timeline


def schedule_rr(processes: List[Process], config: Optional[SchedulerConfig] = None) -> List[ScheduledSlice]:
    """
    Round Robin scheduling with a fixed time quantum.

    A preempted process goes back to the tail of the ready queue behind any
    process that arrived while it was running.
    """
    quantum = (config or SchedulerConfig()).quantum
    proc_by_pid = {p.pid: p for p in processes}

    time = 0
    timeline: List[ScheduledSlice] = []

    # Ready queue as deque of PIDs
    ready: Deque[str] = deque()

    def enqueue_new_arrivals(current_time: int, running: Optional[str] = None) -> None:
        for p in processes:
            if p.pid == running or p.is_finished or p.pid in ready:
                continue
            if p.arrival_time <= current_time:
                ready.append(p.pid)

    while any(not p.is_finished for p in processes):
        enqueue_new_arrivals(time)

        if not ready:
            time = _idle_until((p for p in processes if not p.is_finished), time)
            continue

        pid = ready.popleft()
        p = proc_by_pid[pid]

        run_time = min(quantum, p.remaining_time)
        timeline.append(_dispatch(p, time, run_time))
        time += run_time

        if not p.is_finished:
            enqueue_new_arrivals(time, running=pid)
            ready.append(pid)

    return timeline


def _mlq_level(p: Process) -> int:
    if p.priority == 1:
        return 0
    if p.priority == 2:
        return 1
    return 2


def schedule_multilevel(processes: List[Process], config: Optional[SchedulerConfig] = None) -> List[ScheduledSlice]:
    """
    Multilevel Queue with three static levels.

    Priority 1 goes to the high queue, priority 2 to the medium queue and
    everything else to the low queue. The highest non-empty queue is always
    served first and each process runs to completion.

    With ``config.strict_no_duplicate`` disabled the arrival scan has no
    membership check: a process still waiting in its queue is appended again
    on every pass, and the stale copies are later served as extra segments
    after the process has already finished.
    """
    strict = (config or SchedulerConfig()).strict_no_duplicate
    proc_by_pid = {p.pid: p for p in processes}
    remaining: List[Process] = list(processes)

    queues: Tuple[Deque[str], Deque[str], Deque[str]] = (deque(), deque(), deque())
    time = 0
    timeline: List[ScheduledSlice] = []

    while remaining or any(queues):
        for p in remaining:
            if p.arrival_time > time:
                continue
            queue = queues[_mlq_level(p)]
            if strict and p.pid in queue:
                continue
            queue.append(p.pid)

        level = next((i for i, queue in enumerate(queues) if queue), None)
        if level is None:
            time = _idle_until(remaining, time)
            continue

        p = proc_by_pid[queues[level].popleft()]

        if p.is_finished:
            logger.warning("t=%d: %s served again from a duplicate queue entry", time, p.pid)
            timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + p.burst_time))
            time += p.burst_time
            continue

        timeline.append(_dispatch(p, time, p.burst_time))
        time += p.burst_time
        remaining = _without(remaining, p)

    return timeline


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    description: str
    preemptive: bool
    uses_quantum: bool = False
    uses_priority: bool = False


ALGORITHMS: Dict[str, Policy] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "rr": schedule_rr,
    "priority": schedule_priority,
    "multilevel": schedule_multilevel,
}

ALGORITHM_INFO: Dict[str, AlgorithmInfo] = {
    "fcfs": AlgorithmInfo(
        name="First Come First Serve (FCFS)",
        description=(
            "Processes are executed in the order they arrive. Simple but may lead to a "
            "convoy effect where short processes wait behind long ones."
        ),
        preemptive=False,
    ),
    "sjf": AlgorithmInfo(
        name="Shortest Job First (SJF)",
        description=(
            "Processes with the shortest burst time are executed first. Optimal for "
            "minimizing average waiting time but requires knowing burst times in advance."
        ),
        preemptive=False,
    ),
    "srtf": AlgorithmInfo(
        name="Shortest Remaining Time First (SRTF)",
        description=(
            "Preemptive version of SJF. The process with the shortest remaining time "
            "gets the CPU, and a shorter arrival can interrupt it."
        ),
        preemptive=True,
    ),
    "rr": AlgorithmInfo(
        name="Round Robin (RR)",
        description=(
            "Each process gets a fixed time slice (quantum). Fair scheduling that "
            "prevents starvation and provides good response time."
        ),
        preemptive=True,
        uses_quantum=True,
    ),
    "priority": AlgorithmInfo(
        name="Priority Scheduling",
        description=(
            "Processes are executed by priority, lower value first. Non-preemptive; "
            "low priority processes may starve."
        ),
        preemptive=False,
        uses_priority=True,
    ),
    "multilevel": AlgorithmInfo(
        name="Multilevel Queue",
        description=(
            "Processes are divided into high (1), medium (2) and low (other) priority "
            "queues. Higher queues are always served first."
        ),
        preemptive=False,
        uses_priority=True,
    ),
}


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    config: Optional[SchedulerConfig] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm and derive all metrics.

    The policy runs on fresh copies of ``processes``; the caller's objects
    are never mutated, so repeated runs give identical results.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise UnknownAlgorithm(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    config = config or SchedulerConfig()
    info = ALGORITHM_INFO[key]

    snapshot = [p.clone() for p in processes]
    seen: set[str] = set()
    for p in snapshot:
        p.validate()
        if p.pid in seen:
            raise DuplicateProcessId(p.pid)
        seen.add(p.pid)

    logger.debug("Running %s on %d process(es)", key, len(snapshot))
    timeline = ALGORITHMS[key](snapshot, config)
    results = compute_metrics(snapshot, timeline)

    return ScheduleResult(
        algorithm=info.name,
        quantum=config.quantum if info.uses_quantum else None,
        processes=results,
        timeline=timeline,
        system=compute_system_metrics(results, timeline),
    )

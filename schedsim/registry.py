from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .algorithms import run_algorithm
from .errors import DuplicateProcessId, ProcessNotFound
from .models import Process, ScheduleResult, SchedulerConfig
from .workload_io import sample_processes

logger = logging.getLogger(__name__)


class ProcessRegistry:
    """
    The caller-owned set of processes a simulation runs over.

    Processes are kept in registration order, which is the order every
    policy uses to break ties. Runs work on reset copies, so the registry
    itself is never touched by scheduling.
    """

    def __init__(self, processes: Optional[Iterable[Process]] = None) -> None:
        self._processes: Dict[str, Process] = {}
        for p in processes or ():
            self.add(p)

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(self._processes.values())

    def __contains__(self, pid: object) -> bool:
        return pid in self._processes

    def get(self, pid: str) -> Process:
        try:
            return self._processes[pid]
        except KeyError:
            raise ProcessNotFound(pid) from None

    def register(self, pid: str, arrival_time: int, burst_time: int, priority: int = 1) -> Process:
        return self.add(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority))

    def add(self, process: Process) -> Process:
        process.validate()
        if process.pid in self._processes:
            raise DuplicateProcessId(process.pid)

        process.reset()
        self._processes[process.pid] = process
        logger.info("Process %s added", process.pid)
        return process

    def remove(self, pid: str) -> Process:
        try:
            process = self._processes.pop(pid)
        except KeyError:
            raise ProcessNotFound(pid) from None
        logger.info("Process %s removed", pid)
        return process

    def reset_all(self) -> None:
        self._processes.clear()
        logger.info("All processes cleared")

    def load_sample(self) -> None:
        self.reset_all()
        for p in sample_processes():
            self.add(p)

    def snapshot(self) -> List[Process]:
        return [p.clone() for p in self._processes.values()]

    def run(self, algorithm: str, config: Optional[SchedulerConfig] = None) -> ScheduleResult:
        """
        Schedule the registered processes with ``algorithm``.

        An empty registry yields an empty result rather than an error.
        """
        result = run_algorithm(algorithm, self.snapshot(), config)
        logger.debug(
            "%s finished at t=%d with %d slice(s)",
            result.algorithm,
            result.system.total_time,
            len(result.timeline),
        )
        return result

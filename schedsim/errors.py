from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidProcessSpec(SchedulerError, ValueError):
    pass


class DuplicateProcessId(SchedulerError, ValueError):
    def __init__(self, pid: str) -> None:
        super().__init__(f"Process ID already exists: {pid!r}")
        self.pid = pid


class ProcessNotFound(SchedulerError, LookupError):
    def __init__(self, pid: str) -> None:
        super().__init__(f"No process with ID {pid!r}")
        self.pid = pid


class UnknownAlgorithm(SchedulerError, ValueError):
    pass


class MissingSegmentsError(SchedulerError, RuntimeError):
    """
    A registered process got no execution segment from a run that otherwise
    terminated. This is an engine defect, never a user error.
    """

    def __init__(self, pids) -> None:
        self.pids = list(pids)
        super().__init__(f"No execution segments for: {', '.join(self.pids)}")

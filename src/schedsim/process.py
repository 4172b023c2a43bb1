"""Process records — the unit of work every scheduling engine consumes.

A record holds the static attributes a workload file supplies (PID,
arrival time, burst time, priority) plus the two values an engine
computes for it (waiting time, turnaround time).

Records are mutable on purpose: an engine fills in ``waiting_time`` in
place and the turnaround step derives ``turnaround_time`` from it.  To
keep one algorithm's reordering or mutation from leaking into another,
each engine works on its own clone of the workload::

    fcfs_run = clone_workload(workload)
    rr_run = clone_workload(workload)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class WorkloadError(Exception):
    """Raise when a workload is malformed or empty."""


@dataclass
class ProcessRecord:
    """One process in a static scheduling workload.

    Attributes:
        pid: External identifier, assigned by input order.
        arrival_time: Time the process becomes eligible to run (>= 0).
        burst_time: Total CPU time the process needs (> 0).
        priority: Scheduling precedence (higher = more important).
        waiting_time: Computed time spent ready but not running.
        turnaround_time: Computed ``waiting_time + burst_time``.

    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    waiting_time: int = 0
    turnaround_time: int = 0

    @property
    def completion_time(self) -> int:
        """Return the time the process finished (arrival + turnaround)."""
        return self.arrival_time + self.turnaround_time

    def copy(self) -> ProcessRecord:
        """Return an independent by-value copy of this record."""
        return replace(self)

    def __str__(self) -> str:
        """Format as ``P<pid>(arrival=A, burst=B, priority=P)``."""
        return (
            f"P{self.pid}(arrival={self.arrival_time}, "
            f"burst={self.burst_time}, priority={self.priority})"
        )


def clone_workload(records: Iterable[ProcessRecord]) -> list[ProcessRecord]:
    """Return a deep copy of *records*, one fresh record per input."""
    return [record.copy() for record in records]

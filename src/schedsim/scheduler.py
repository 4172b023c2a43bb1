"""CPU scheduling engines — replay a static workload under four policies.

Each engine takes the full list of processes up front (arrival and burst
times are known in advance) and computes how long every process would
wait under its discipline.  Four policies ship out of the box:

- **FCFSPolicy** (First Come, First Served): serve in list order, never
  preempt.  Simple, but a long job delays everyone behind it (convoy
  effect).
- **PriorityPolicy**: sort the whole list by descending priority once,
  then serve it FCFS.  Arrival times only delay service; they never
  reorder it.
- **SRTFPolicy** (Shortest Remaining Time First, preemptive SJF): at
  every time unit run the arrived process with the least work left.
- **RoundRobinPolicy**: a FIFO ready queue where each process runs for
  at most one quantum before going to the back of the line.

Design: Strategy pattern
    ``Simulator`` is the *context*; each policy is a *strategy* that
    fills in ``waiting_time`` on a list of records it owns.  The
    simulator hands every policy its own clone of the workload, derives
    turnaround times afterwards, and packages the result.
"""

from __future__ import annotations

from collections import deque
from itertools import pairwise
from typing import TYPE_CHECKING, Protocol

from schedsim.logging import Logger, LogLevel
from schedsim.metrics import ScheduleResult
from schedsim.process import ProcessRecord, WorkloadError, clone_workload

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_QUANTUM = 2


class SchedulingPolicy(Protocol):
    """Interface that every scheduling engine must satisfy."""

    @property
    def name(self) -> str:
        """Return the short algorithm key (e.g. ``"rr"``)."""
        ...  # pragma: no cover

    @property
    def label(self) -> str:
        """Return the report heading for this algorithm."""
        ...  # pragma: no cover

    def find_waiting_times(
        self, records: list[ProcessRecord], *, logger: Logger | None = None
    ) -> None:
        """Fill in ``waiting_time`` for every record, in place."""
        ...  # pragma: no cover


def _check_workload(records: Sequence[ProcessRecord], source: str) -> None:
    """Reject workloads no engine can schedule.

    Raises:
        WorkloadError: If *records* is empty or holds an invalid record.

    """
    if not records:
        msg = f"{source}: workload must contain at least one process"
        raise WorkloadError(msg)
    for record in records:
        if record.burst_time <= 0:
            msg = f"{source}: process {record.pid} has non-positive burst time"
            raise WorkloadError(msg)
        if record.arrival_time < 0:
            msg = f"{source}: process {record.pid} has negative arrival time"
            raise WorkloadError(msg)


def _debug(logger: Logger | None, message: str, *, source: str, time: int) -> None:
    if logger is not None:
        logger.log(LogLevel.DEBUG, message, source=source, time=time)


def fcfs_waiting_times(
    records: list[ProcessRecord],
    *,
    logger: Logger | None = None,
    source: str = "FCFS",
) -> None:
    """Compute FCFS waiting times for *records* in their current order.

    The CPU becomes free at the first record's arrival time.  Each later
    record starts at ``max(previous start + previous burst, arrival)``
    and waits ``start - arrival`` (never below zero).  Records with equal
    arrival times are served in list order.

    Args:
        records: The records to schedule, already in service order.
        logger: Optional event log for completions and idle periods.
        source: Log source name (the Priority engine passes its own).

    Raises:
        WorkloadError: If *records* is empty or invalid.

    """
    _check_workload(records, source)
    first = records[0]
    start = first.arrival_time
    first.waiting_time = 0
    _debug(logger, f"P{first.pid} finished", source=source, time=start + first.burst_time)

    for prev, record in pairwise(records):
        free_at = start + prev.burst_time
        if free_at < record.arrival_time:
            _debug(logger, f"CPU idle until {record.arrival_time}", source=source, time=free_at)
        start = max(free_at, record.arrival_time)
        record.waiting_time = max(0, start - record.arrival_time)
        _debug(
            logger,
            f"P{record.pid} finished",
            source=source,
            time=start + record.burst_time,
        )


def find_turnaround_times(records: list[ProcessRecord]) -> None:
    """Set ``turnaround_time = waiting_time + burst_time`` on every record.

    Call only after the engine has finished computing waiting times.
    """
    for record in records:
        record.turnaround_time = record.waiting_time + record.burst_time


class FCFSPolicy:
    """First Come, First Served — run processes in list order.

    The list is *not* re-sorted by arrival time: the order
    the workload supplies is the order the CPU serves.
    """

    name = "fcfs"
    label = "FCFS"

    def find_waiting_times(
        self, records: list[ProcessRecord], *, logger: Logger | None = None
    ) -> None:
        """Apply the FCFS computation to *records* as given."""
        fcfs_waiting_times(records, logger=logger, source=self.name.upper())


class PriorityPolicy:
    """Non-preemptive priority — higher priority values are served first.

    This is the simplified form: the entire list is sorted once by
    descending priority and then served FCFS.  A high-priority process
    that arrives late is still served before an earlier low-priority
    one; the CPU simply sits idle until it arrives.  An arrival-aware
    ready queue would schedule differently.

    Tiebreaker: ``list.sort`` is stable, so equal priorities keep their
    input order.
    """

    name = "priority"
    label = "Priority"

    def find_waiting_times(
        self, records: list[ProcessRecord], *, logger: Logger | None = None
    ) -> None:
        """Sort *records* in place by descending priority, then run FCFS."""
        _check_workload(records, self.name.upper())
        records.sort(key=lambda r: r.priority, reverse=True)
        fcfs_waiting_times(records, logger=logger, source=self.name.upper())


class SRTFPolicy:
    """Shortest Remaining Time First — preemptive Shortest Job First.

    Time advances one unit at a time.  At each step the arrived process
    with the least remaining burst gets the CPU; a newly arrived shorter
    job therefore preempts the running one.  Ties go to the process
    listed first.  When nothing has arrived yet, the clock jumps straight
    to the next arrival instead of ticking through idle time.

    Among preemptive single-CPU policies this yields the minimum average
    waiting time for a static workload.
    """

    name = "sjf"
    label = "SJF"

    def find_waiting_times(
        self, records: list[ProcessRecord], *, logger: Logger | None = None
    ) -> None:
        """Simulate SRTF and record each process's waiting time."""
        _check_workload(records, self.name.upper())
        remaining = [r.burst_time for r in records]
        completed = 0
        now = 0

        while completed < len(records):
            shortest: int | None = None
            for i, record in enumerate(records):
                if record.arrival_time > now or remaining[i] == 0:
                    continue
                if shortest is None or remaining[i] < remaining[shortest]:
                    shortest = i

            if shortest is None:
                next_arrival = min(
                    r.arrival_time for i, r in enumerate(records) if remaining[i] > 0
                )
                _debug(logger, f"CPU idle until {next_arrival}", source="SJF", time=now)
                now = next_arrival
                continue

            remaining[shortest] -= 1
            now += 1

            if remaining[shortest] == 0:
                completed += 1
                record = records[shortest]
                record.waiting_time = max(0, now - record.burst_time - record.arrival_time)
                _debug(logger, f"P{record.pid} finished", source="SJF", time=now)


class RoundRobinPolicy:
    """Round Robin — a circular ready queue with a fixed time quantum.

    Processes enter the ready queue in arrival order the moment the
    clock reaches their arrival time.  The head of the queue runs for
    ``min(remaining, quantum)`` units.  Anything that arrived during
    that slice is admitted *before* the preempted process goes back to
    the tail, so newcomers get the CPU first.  If the queue drains while
    work is still to come, the clock jumps to the next arrival.
    """

    name = "rr"

    def __init__(self, *, quantum: int = DEFAULT_QUANTUM) -> None:
        """Create a Round Robin policy with the given time quantum.

        Args:
            quantum: Maximum time units a process runs per turn.

        Raises:
            ValueError: If *quantum* is not a positive integer.

        """
        if quantum < 1:
            msg = f"quantum must be at least 1, got {quantum}"
            raise ValueError(msg)
        self._quantum = quantum

    @property
    def quantum(self) -> int:
        """Return the time quantum (units per slice)."""
        return self._quantum

    @property
    def label(self) -> str:
        """Return the report heading, including the quantum."""
        return f"RR Quantum = {self._quantum}"

    def find_waiting_times(
        self, records: list[ProcessRecord], *, logger: Logger | None = None
    ) -> None:
        """Simulate the ready queue and record each process's waiting time."""
        _check_workload(records, "RR")
        n = len(records)
        remaining = [r.burst_time for r in records]
        # Indices in ascending arrival order; sorted() is stable so ties keep list order
        by_arrival = sorted(range(n), key=lambda i: records[i].arrival_time)
        admitted = [False] * n
        ready: deque[int] = deque()
        next_idx = 0
        now = 0
        completed = 0

        def admit_arrivals() -> None:
            nonlocal next_idx
            while next_idx < n and records[by_arrival[next_idx]].arrival_time <= now:
                idx = by_arrival[next_idx]
                if not admitted[idx] and remaining[idx] > 0:
                    ready.append(idx)
                    admitted[idx] = True
                next_idx += 1

        admit_arrivals()

        while completed < n:
            if not ready:
                next_arrival = records[by_arrival[next_idx]].arrival_time
                _debug(logger, f"CPU idle until {next_arrival}", source="RR", time=now)
                now = next_arrival
                admit_arrivals()
                continue

            current = ready.popleft()
            record = records[current]
            run_for = min(remaining[current], self._quantum)
            now += run_for
            remaining[current] -= run_for
            admit_arrivals()

            if remaining[current] == 0:
                completed += 1
                record.waiting_time = max(0, now - record.burst_time - record.arrival_time)
                _debug(logger, f"P{record.pid} finished", source="RR", time=now)
            else:
                _debug(
                    logger,
                    f"P{record.pid} preempted, {remaining[current]} left",
                    source="RR",
                    time=now,
                )
                ready.append(current)


def default_policies(*, quantum: int = DEFAULT_QUANTUM) -> list[SchedulingPolicy]:
    """Return the four engines in reporting order: FCFS, Priority, SJF, RR."""
    return [FCFSPolicy(), PriorityPolicy(), SRTFPolicy(), RoundRobinPolicy(quantum=quantum)]


class Simulator:
    """Run a workload through one or more scheduling policies.

    The simulator never touches the workload it is given.  Every policy
    receives a fresh clone, so one algorithm's sorting or bookkeeping
    cannot leak into the next.
    """

    def __init__(
        self,
        *,
        policies: Sequence[SchedulingPolicy] | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a simulator.

        Args:
            policies: Engines to run, in order (defaults to all four).
            logger: Event log to record into (a new one if omitted).

        """
        self._policies = list(policies) if policies is not None else default_policies()
        self._logger = logger if logger is not None else Logger()

    @property
    def policies(self) -> list[SchedulingPolicy]:
        """Return the configured policies in run order."""
        return list(self._policies)

    @property
    def logger(self) -> Logger:
        """Return the simulator's event log."""
        return self._logger

    def run_policy(
        self, policy: SchedulingPolicy, workload: Sequence[ProcessRecord]
    ) -> ScheduleResult:
        """Schedule a private copy of *workload* with *policy*.

        Returns:
            The finished records, in the order the policy left them.

        Raises:
            WorkloadError: If *workload* is empty or invalid.

        """
        if not workload:
            msg = "No processes to schedule"
            raise WorkloadError(msg)
        records = clone_workload(workload)
        self._logger.log(
            LogLevel.INFO,
            f"scheduling {len(records)} processes",
            source=policy.name.upper(),
        )
        policy.find_waiting_times(records, logger=self._logger)
        find_turnaround_times(records)
        result = ScheduleResult(algorithm=policy.label, records=tuple(records))
        self._logger.log(
            LogLevel.INFO,
            f"done: avg wait {result.average_waiting_time:.2f}, "
            f"avg turnaround {result.average_turnaround_time:.2f}",
            source=policy.name.upper(),
        )
        return result

    def run(self, workload: Sequence[ProcessRecord]) -> list[ScheduleResult]:
        """Run every configured policy on *workload*, in order."""
        if not workload:
            msg = "No processes to schedule"
            raise WorkloadError(msg)
        return [self.run_policy(policy, workload) for policy in self._policies]

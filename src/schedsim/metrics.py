"""Scheduling metrics — aggregate and render the outcome of one run.

A ``ScheduleResult`` freezes the records an engine produced together
with the algorithm's heading.  Averages are always float quotients
(``sum / n``), even when ``n`` divides the sum evenly.

Two renderings are provided:

- ``format_report`` — the tab-separated text table printed by the CLI.
- ``result_to_dict`` — a JSON-ready mapping for ``--json`` and the web API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from schedsim.process import ProcessRecord, WorkloadError

REPORT_SEPARATOR = "*********"


@dataclass(frozen=True)
class ScheduleResult:
    """The finished records of one algorithm run.

    Attributes:
        algorithm: Report heading (e.g. ``"FCFS"`` or ``"RR Quantum = 2"``).
        records: Records in the order the engine left them.

    """

    algorithm: str
    records: tuple[ProcessRecord, ...]

    def __post_init__(self) -> None:
        """Reject empty results — averages over zero processes are undefined."""
        if not self.records:
            msg = f"{self.algorithm}: cannot report on an empty workload"
            raise WorkloadError(msg)

    @property
    def total_waiting_time(self) -> int:
        """Return the sum of all waiting times."""
        return sum(r.waiting_time for r in self.records)

    @property
    def total_turnaround_time(self) -> int:
        """Return the sum of all turnaround times."""
        return sum(r.turnaround_time for r in self.records)

    @property
    def average_waiting_time(self) -> float:
        """Return the mean waiting time."""
        return self.total_waiting_time / len(self.records)

    @property
    def average_turnaround_time(self) -> float:
        """Return the mean turnaround time."""
        return self.total_turnaround_time / len(self.records)

    def waiting_times(self) -> dict[int, int]:
        """Return a PID → waiting time mapping."""
        return {r.pid: r.waiting_time for r in self.records}

    def turnaround_times(self) -> dict[int, int]:
        """Return a PID → turnaround time mapping."""
        return {r.pid: r.turnaround_time for r in self.records}


def format_report(result: ScheduleResult) -> str:
    """Render *result* as a labelled, tab-separated table.

    The layout is: a separator line, the algorithm heading, a header
    row, one row per process (pid, burst, waiting, turnaround) in the
    result's order, then both averages to two decimal places.
    """
    lines = [
        REPORT_SEPARATOR,
        result.algorithm,
        "\tProcesses\tBurst time\tWaiting time\tTurn around time",
    ]
    lines.extend(
        f"\t{r.pid}\t\t{r.burst_time}\t\t{r.waiting_time}\t\t{r.turnaround_time}"
        for r in result.records
    )
    lines.append("")
    lines.append(f"Average waiting time = {result.average_waiting_time:.2f}")
    lines.append(f"Average turn around time = {result.average_turnaround_time:.2f}")
    return "\n".join(lines)


def result_to_dict(result: ScheduleResult) -> dict[str, Any]:
    """Convert *result* to a JSON-serializable dict."""
    return {
        "algorithm": result.algorithm,
        "processes": [
            {
                "pid": r.pid,
                "arrival": r.arrival_time,
                "burst": r.burst_time,
                "priority": r.priority,
                "waiting": r.waiting_time,
                "turnaround": r.turnaround_time,
            }
            for r in result.records
        ],
        "average_waiting_time": round(result.average_waiting_time, 2),
        "average_turnaround_time": round(result.average_turnaround_time, 2),
    }

"""Tests for scheduling metrics and report rendering.

A ``ScheduleResult`` aggregates one engine's finished records.  Averages
are float quotients even when the division is exact.
"""

import json

import pytest

from schedsim.metrics import ScheduleResult, format_report, result_to_dict
from schedsim.process import ProcessRecord, WorkloadError


def _result(*rows: tuple[int, int, int], algorithm: str = "FCFS") -> ScheduleResult:
    """Build a result from ``(pid, burst, waiting)`` rows."""
    records = tuple(
        ProcessRecord(
            pid=pid,
            arrival_time=0,
            burst_time=burst,
            waiting_time=wait,
            turnaround_time=wait + burst,
        )
        for pid, burst, wait in rows
    )
    return ScheduleResult(algorithm=algorithm, records=records)


class TestAverages:
    """Verify totals and averages."""

    def test_totals(self) -> None:
        """Totals sum the per-process metrics."""
        result = _result((1, 5, 0), (2, 3, 3))
        expected_wait, expected_tat = 3, 11
        assert result.total_waiting_time == expected_wait
        assert result.total_turnaround_time == expected_tat

    def test_averages(self) -> None:
        """Averages divide totals by the process count."""
        result = _result((1, 5, 0), (2, 3, 3))
        assert result.average_waiting_time == pytest.approx(1.5)
        assert result.average_turnaround_time == pytest.approx(5.5)

    def test_average_is_float_when_exact(self) -> None:
        """An exact division still yields a float."""
        result = _result((1, 2, 2), (2, 2, 2))
        assert isinstance(result.average_waiting_time, float)
        assert result.average_waiting_time == pytest.approx(2.0)

    def test_per_pid_mappings(self) -> None:
        """waiting_times and turnaround_times are keyed by PID."""
        result = _result((1, 5, 0), (2, 3, 3))
        assert result.waiting_times() == {1: 0, 2: 3}
        assert result.turnaround_times() == {1: 5, 2: 6}

    def test_empty_result_rejected(self) -> None:
        """Averages over zero processes are undefined."""
        with pytest.raises(WorkloadError, match="empty"):
            ScheduleResult(algorithm="FCFS", records=())


class TestFormatReport:
    """Verify the text table."""

    def test_heading_and_rows(self) -> None:
        """The report starts with a separator and heading, then one row per process."""
        lines = format_report(_result((1, 5, 0), (2, 3, 3))).splitlines()
        assert lines[0] == "*********"
        assert lines[1] == "FCFS"
        assert lines[2] == "\tProcesses\tBurst time\tWaiting time\tTurn around time"
        assert lines[3] == "\t1\t\t5\t\t0\t\t5"
        assert lines[4] == "\t2\t\t3\t\t3\t\t6"

    def test_averages_two_decimals(self) -> None:
        """Averages are printed with two decimal places."""
        text = format_report(_result((1, 5, 0), (2, 3, 3), (3, 1, 1)))
        assert "Average waiting time = 1.33" in text
        assert "Average turn around time = 4.33" in text

    def test_rows_follow_result_order(self) -> None:
        """Rows appear in the order the engine left the records."""
        text = format_report(_result((2, 3, 0), (1, 5, 3), algorithm="Priority"))
        assert text.index("\t2\t\t3") < text.index("\t1\t\t5")


class TestResultToDict:
    """Verify the JSON-ready rendering."""

    def test_fields(self) -> None:
        """The dict carries the heading, per-process rows and averages."""
        data = result_to_dict(_result((1, 5, 0), (2, 3, 3)))
        assert data["algorithm"] == "FCFS"
        assert data["processes"][1] == {
            "pid": 2,
            "arrival": 0,
            "burst": 3,
            "priority": 0,
            "waiting": 3,
            "turnaround": 6,
        }
        assert data["average_waiting_time"] == pytest.approx(1.5)

    def test_serializable(self) -> None:
        """The dict survives json.dumps."""
        assert json.loads(json.dumps(result_to_dict(_result((1, 5, 0)))))["processes"]

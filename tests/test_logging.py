"""Tests for the simulation event log.

The logger records structured entries for simulator events: which
engine ran, when the CPU idled, when each process finished.
"""

from schedsim.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, source and time."""
        entry = LogEntry(level=LogLevel.INFO, message="P1 finished", source="RR", time=7)
        assert entry.level is LogLevel.INFO
        assert entry.message == "P1 finished"
        assert entry.source == "RR"
        expected_time = 7
        assert entry.time == expected_time

    def test_entry_str_with_time(self) -> None:
        """String form includes level, source, time and message."""
        entry = LogEntry(level=LogLevel.DEBUG, message="CPU idle until 4", source="SJF", time=1)
        assert str(entry) == "[DEBUG] SJF @1: CPU idle until 4"

    def test_entry_str_without_time(self) -> None:
        """Entries without a simulated time omit the marker."""
        entry = LogEntry(level=LogLevel.INFO, message="scheduling 3 processes", source="FCFS")
        assert str(entry) == "[INFO] FCFS: scheduling 3 processes"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable."""
        logger = Logger()
        logger.log(LogLevel.INFO, "started", source="FCFS")
        assert len(logger) == 1
        assert logger.entries[0].message == "started"

    def test_entries_are_ordered(self) -> None:
        """Entries should be in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_entries_returns_copy(self) -> None:
        """Mutating the returned list does not affect the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="test")
        logger.entries.clear()
        assert len(logger) == 1

    def test_filter_by_level(self) -> None:
        """Filtering should return only entries at or above the level."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "debug msg", source="test")
        logger.log(LogLevel.INFO, "info msg", source="test")
        logger.log(LogLevel.ERROR, "error msg", source="test")
        warnings_and_above = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings_and_above) == 1
        assert warnings_and_above[0].level is LogLevel.ERROR

    def test_filter_by_source(self) -> None:
        """Filtering by source should return matching entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "rr event", source="RR")
        logger.log(LogLevel.INFO, "sjf event", source="SJF")
        rr_logs = logger.filter(source="RR")
        assert len(rr_logs) == 1
        assert rr_logs[0].source == "RR"

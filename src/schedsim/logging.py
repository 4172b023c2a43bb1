"""Simulation event log.

Every scheduling run leaves a trail of events: which engine started,
when the CPU sat idle, when each process finished.  The logger keeps
those events as structured records in memory, much like a kernel's
``dmesg`` ring buffer:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source,
  simulated time).
- **Logger** — an append-only log with level and source filtering.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Filter returns a list, not a generator** — a run's log is small
      and callers usually want to iterate multiple times.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "RR").
        time: Simulated clock value when the event happened, if any.

    """

    level: LogLevel
    message: str
    source: str
    time: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source @t: message``."""
        when = f" @{self.time}" if self.time is not None else ""
        return f"[{self.level.name}] {self.source}{when}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        time: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            time: Simulated time of the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, time=time))

    def filter(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries at or above *min_level*, optionally from one *source*.

        Args:
            min_level: Lowest severity to include (default: everything).
            source: If set, only return entries from this component.

        Returns:
            A new list of matching entries, in chronological order.

        """
        return [
            e
            for e in self._entries
            if e.level >= min_level and (source is None or e.source == source)
        ]

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)

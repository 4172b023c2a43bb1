"""Workload loading — turn text or JSON input into process records.

The text format is one process per line::

    # pid  burst  arrival  [priority]
    1      5      0        2
    2      3      2

Fields are whitespace-separated integers.  Blank lines and ``#``
comments are ignored, and a missing priority defaults to 0.

Key rules:
    - **Validate at the edge** — burst must be positive, arrival must
      be non-negative, and PIDs must be unique.  Engines assume every
      record they see already passed these checks.
    - **Empty is not an error here** — an input with no records loads as
      an empty list.  Deciding that there is nothing to schedule is the
      caller's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schedsim.process import ProcessRecord, WorkloadError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path
    from typing import TextIO

_MIN_FIELDS = 3
_MAX_FIELDS = 4


def _make_record(
    *, pid: int, burst: int, arrival: int, priority: int, where: str
) -> ProcessRecord:
    """Build a validated record; *where* prefixes error messages."""
    if burst <= 0:
        msg = f"{where}: burst time must be positive, got {burst}"
        raise WorkloadError(msg)
    if arrival < 0:
        msg = f"{where}: arrival time must be non-negative, got {arrival}"
        raise WorkloadError(msg)
    return ProcessRecord(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority)


def _check_unique(records: list[ProcessRecord], record: ProcessRecord, where: str) -> None:
    if any(r.pid == record.pid for r in records):
        msg = f"{where}: duplicate pid {record.pid}"
        raise WorkloadError(msg)


def parse_workload(text: str) -> list[ProcessRecord]:
    """Parse workload *text* into records, in input order.

    Args:
        text: The full input, one ``pid burst arrival [priority]`` per line.

    Returns:
        The parsed records (possibly empty).

    Raises:
        WorkloadError: If any line is malformed.

    """
    records: list[ProcessRecord] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        where = f"line {lineno}"
        fields = line.split()
        if not _MIN_FIELDS <= len(fields) <= _MAX_FIELDS:
            msg = f"{where}: expected 'pid burst arrival [priority]', got {raw.strip()!r}"
            raise WorkloadError(msg)
        try:
            values = [int(f) for f in fields]
        except ValueError:
            msg = f"{where}: fields must be integers, got {raw.strip()!r}"
            raise WorkloadError(msg) from None
        pid, burst, arrival = values[:3]
        priority = values[3] if len(values) == _MAX_FIELDS else 0
        record = _make_record(pid=pid, burst=burst, arrival=arrival, priority=priority, where=where)
        _check_unique(records, record, where)
        records.append(record)
    return records


def load_workload(stream: TextIO) -> list[ProcessRecord]:
    """Read and parse a whole workload from an open text stream.

    Raises:
        WorkloadError: If the stream is not valid text or a line is malformed.

    """
    try:
        text = stream.read()
    except UnicodeDecodeError:
        msg = "input is not valid UTF-8"
        raise WorkloadError(msg) from None
    return parse_workload(text)


def load_workload_file(path: Path) -> list[ProcessRecord]:
    """Read and parse the workload stored at *path*.

    Raises:
        OSError: If the file cannot be opened.
        WorkloadError: If the file is not valid UTF-8 or a line is malformed.

    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        msg = f"{path} is not valid UTF-8"
        raise WorkloadError(msg) from None
    return parse_workload(text)


def _int_field(item: Mapping[str, Any], key: str, default: int | None = None) -> int:
    """Return ``item[key]`` if it is a JSON integer (booleans excluded)."""
    value = item[key] if default is None else item.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(key)
    return value


def workload_from_dicts(items: Iterable[Mapping[str, Any]]) -> list[ProcessRecord]:
    """Build records from JSON-style mappings.

    Each mapping needs ``pid``, ``burst`` and ``arrival`` keys and may
    carry ``priority``.  Values must already be integers; floats,
    booleans and numeric strings are rejected rather than coerced.

    Raises:
        WorkloadError: If a mapping is missing a key or holds a bad value.

    """
    records: list[ProcessRecord] = []
    for index, item in enumerate(items):
        where = f"process {index}"
        if not isinstance(item, dict):
            msg = f"{where}: expected an object, got {item!r}"
            raise WorkloadError(msg)
        try:
            pid = _int_field(item, "pid")
            burst = _int_field(item, "burst")
            arrival = _int_field(item, "arrival")
            priority = _int_field(item, "priority", 0)
        except KeyError as e:
            msg = f"{where}: missing field {e.args[0]!r}"
            raise WorkloadError(msg) from None
        except TypeError as e:
            msg = f"{where}: field {e.args[0]!r} must be an integer"
            raise WorkloadError(msg) from None
        record = _make_record(pid=pid, burst=burst, arrival=arrival, priority=priority, where=where)
        _check_unique(records, record, where)
        records.append(record)
    return records

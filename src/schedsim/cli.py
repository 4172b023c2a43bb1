"""Command-line driver — load a workload, run every engine, print reports.

Usage::

    schedsim [input-file] [-q QUANTUM] [-a ALGO ...] [--json] [-v | -vv]

With no input file the workload is read from standard input.  The
driver is the thin I/O wrapper around the simulator:

    1. **Configure** — environment first, then command-line flags.
    2. **Load** — parse the workload (exit 1 if unreadable or empty).
    3. **Simulate** — each engine runs on its own copy of the workload.
    4. **Report** — print one section per algorithm (or JSON).

``main`` returns the exit status so it can be tested without spawning
a process; ``run`` is the console entry point.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import os
import sys
from pathlib import Path

from schedsim.config import ALGORITHMS, SimulatorConfig, build_policies
from schedsim.loader import load_workload, load_workload_file
from schedsim.logging import LogLevel
from schedsim.metrics import format_report, result_to_dict
from schedsim.process import WorkloadError
from schedsim.scheduler import Simulator

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``schedsim`` command."""
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Compare FCFS, Priority, SJF (SRTF) and Round Robin on a static workload.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="workload file, one 'pid burst arrival [priority]' per line (default: stdin)",
    )
    parser.add_argument(
        "-q",
        "--quantum",
        type=int,
        default=None,
        help="Round Robin time quantum (default: $SCHEDSIM_QUANTUM or 2)",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        dest="algorithms",
        action="append",
        choices=ALGORITHMS,
        default=None,
        help="algorithm to run; repeat to select several (default: all)",
    )
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="print the event log after the reports (-v: summaries, -vv: every event)",
    )
    return parser


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)  # noqa: T201
    return EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    """Run the simulator from command-line arguments.

    Args:
        argv: Arguments without the program name (defaults to ``sys.argv[1:]``).

    Returns:
        0 on success, 1 if the input cannot be read or holds no processes.

    """
    args = build_parser().parse_args(argv)

    try:
        config = SimulatorConfig.from_environ(os.environ)
        if args.quantum is not None:
            config = dataclasses.replace(config, quantum=args.quantum)
        if args.algorithms:
            config = dataclasses.replace(config, algorithms=tuple(args.algorithms))
    except ValueError as e:
        return _error(str(e))

    try:
        if args.input is not None:
            path = Path(args.input)
            try:
                workload = load_workload_file(path)
            except OSError:
                return _error(f"Could not open file {args.input}")
        else:
            workload = load_workload(sys.stdin)
    except WorkloadError as e:
        return _error(str(e))

    if not workload:
        return _error("No processes to schedule")

    simulator = Simulator(policies=build_policies(config))
    results = simulator.run(workload)

    if args.json:
        print(json.dumps({"results": [result_to_dict(r) for r in results]}, indent=2))  # noqa: T201
    else:
        for result in results:
            print()  # noqa: T201
            print(format_report(result))  # noqa: T201

    if args.verbose:
        min_level = LogLevel.DEBUG if args.verbose > 1 else LogLevel.INFO
        print()  # noqa: T201
        for entry in simulator.logger.filter(min_level=min_level):
            print(entry)  # noqa: T201

    return EXIT_OK


def run() -> None:
    """Console entry point for ``schedsim``."""
    sys.exit(main())

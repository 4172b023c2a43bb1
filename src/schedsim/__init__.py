"""SchedSim — an offline CPU-scheduling simulator.

Re-exports public symbols so callers can write::

    from schedsim import ProcessRecord, Simulator
"""

from schedsim.config import SimulatorConfig, build_policies
from schedsim.loader import load_workload, load_workload_file, parse_workload
from schedsim.logging import LogEntry, Logger, LogLevel
from schedsim.metrics import ScheduleResult, format_report, result_to_dict
from schedsim.process import ProcessRecord, WorkloadError, clone_workload
from schedsim.scheduler import (
    DEFAULT_QUANTUM,
    FCFSPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    SchedulingPolicy,
    Simulator,
    SRTFPolicy,
    default_policies,
    fcfs_waiting_times,
    find_turnaround_times,
)

__all__ = [
    "DEFAULT_QUANTUM",
    "FCFSPolicy",
    "LogEntry",
    "LogLevel",
    "Logger",
    "PriorityPolicy",
    "ProcessRecord",
    "RoundRobinPolicy",
    "SRTFPolicy",
    "ScheduleResult",
    "SchedulingPolicy",
    "Simulator",
    "SimulatorConfig",
    "WorkloadError",
    "build_policies",
    "clone_workload",
    "default_policies",
    "fcfs_waiting_times",
    "find_turnaround_times",
    "format_report",
    "load_workload",
    "load_workload_file",
    "parse_workload",
    "result_to_dict",
]

"""Simulator configuration — which engines to run and with what quantum.

There is one tunable number (the Round Robin quantum) and one choice
(which algorithms to report).  Both can come from environment
variables, the usual ``KEY=VALUE`` way a Unix process is configured
by its parent:

- ``SCHEDSIM_QUANTUM`` — positive integer time slice (default 2).
- ``SCHEDSIM_ALGORITHMS`` — comma-separated subset of
  ``fcfs,priority,sjf,rr`` (default: all four, in that order).

Command-line flags override the environment; the CLI merges them with
``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from schedsim.scheduler import (
    DEFAULT_QUANTUM,
    FCFSPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    SchedulingPolicy,
    SRTFPolicy,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

ALGORITHMS: tuple[str, ...] = ("fcfs", "priority", "sjf", "rr")

QUANTUM_VAR = "SCHEDSIM_QUANTUM"
ALGORITHMS_VAR = "SCHEDSIM_ALGORITHMS"


def parse_quantum(value: str | int) -> int:
    """Return *value* as a positive quantum.

    Strings (environment variables) are parsed; anything else must
    already be an ``int``.  Floats and booleans are rejected, not
    truncated.

    Raises:
        ValueError: If *value* is not an integer of at least 1.

    """
    if isinstance(value, str):
        try:
            quantum = int(value)
        except ValueError:
            msg = f"quantum must be an integer, got {value!r}"
            raise ValueError(msg) from None
    elif isinstance(value, int) and not isinstance(value, bool):
        quantum = value
    else:
        msg = f"quantum must be an integer, got {value!r}"
        raise ValueError(msg)
    if quantum < 1:
        msg = f"quantum must be at least 1, got {quantum}"
        raise ValueError(msg)
    return quantum


def parse_algorithms(names: str | list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Normalise algorithm names, preserving order and dropping repeats.

    Accepts a comma-separated string or a sequence of names.

    Raises:
        ValueError: If a name is unknown or nothing is selected.

    """
    if isinstance(names, str):
        raw: list[object] = list(names.split(","))
    elif isinstance(names, (list, tuple)):
        raw = list(names)
    else:
        msg = f"algorithms must be a list of names, got {names!r}"
        raise ValueError(msg)
    selected: list[str] = []
    for name in raw:
        if not isinstance(name, str):
            msg = f"algorithm names must be strings, got {name!r}"
            raise ValueError(msg)
        key = name.strip().lower()
        if not key:
            continue
        if key not in ALGORITHMS:
            msg = f"unknown algorithm {name!r} (choose from {', '.join(ALGORITHMS)})"
            raise ValueError(msg)
        if key not in selected:
            selected.append(key)
    if not selected:
        msg = "at least one algorithm must be selected"
        raise ValueError(msg)
    return tuple(selected)


@dataclass(frozen=True)
class SimulatorConfig:
    """Settings for one simulator invocation.

    Attributes:
        quantum: Round Robin time slice.
        algorithms: Algorithm keys to run, in report order.

    """

    quantum: int = DEFAULT_QUANTUM
    algorithms: tuple[str, ...] = ALGORITHMS

    def __post_init__(self) -> None:
        """Validate the quantum and algorithm names."""
        object.__setattr__(self, "quantum", parse_quantum(self.quantum))
        object.__setattr__(self, "algorithms", parse_algorithms(self.algorithms))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> SimulatorConfig:
        """Build a config from environment variables, falling back to defaults.

        Args:
            environ: Usually ``os.environ``.

        Raises:
            ValueError: If a variable holds an invalid value.

        """
        quantum = environ.get(QUANTUM_VAR)
        algorithms = environ.get(ALGORITHMS_VAR)
        return cls(
            quantum=parse_quantum(quantum) if quantum else DEFAULT_QUANTUM,
            algorithms=parse_algorithms(algorithms) if algorithms else ALGORITHMS,
        )


def build_policies(config: SimulatorConfig) -> list[SchedulingPolicy]:
    """Instantiate the engines *config* selects, in its order."""
    factories = {
        "fcfs": FCFSPolicy,
        "priority": PriorityPolicy,
        "sjf": SRTFPolicy,
        "rr": lambda: RoundRobinPolicy(quantum=config.quantum),
    }
    return [factories[name]() for name in config.algorithms]

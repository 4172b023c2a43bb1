"""Flask application factory for the simulator's JSON API.

The ``create_app`` function returns a Flask app with two endpoints:

- ``GET /api/algorithms`` — list the algorithm keys and the default quantum.
- ``POST /api/simulate`` — schedule a workload and return per-algorithm
  results.

Request body for ``/api/simulate``::

    {
        "processes": [{"pid": 1, "burst": 5, "arrival": 0, "priority": 2}],
        "quantum": 4,
        "algorithms": ["fcfs", "rr"]
    }

``quantum`` and ``algorithms`` are optional; they default to the
environment-derived configuration captured when the app was created.
"""

from __future__ import annotations

import dataclasses
import os

from flask import Flask, Response, jsonify, request

from schedsim.config import ALGORITHMS, SimulatorConfig, build_policies
from schedsim.loader import workload_from_dicts
from schedsim.metrics import result_to_dict
from schedsim.process import WorkloadError
from schedsim.scheduler import Simulator

_HTTP_BAD_REQUEST = 400


def create_app(config: SimulatorConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Base configuration (defaults to one read from ``os.environ``).

    Returns:
        A configured Flask application ready to serve.

    """
    base_config = config if config is not None else SimulatorConfig.from_environ(os.environ)

    app = Flask(__name__)

    @app.route("/api/algorithms")
    def algorithms() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the available algorithms and the default quantum."""
        return jsonify(
            {
                "algorithms": list(ALGORITHMS),
                "default": list(base_config.algorithms),
                "quantum": base_config.quantum,
            }
        )

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run the requested algorithms and return their results.

        Returns:
            JSON with a ``results`` list, or ``error`` and status 400.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("processes"), list):
            return jsonify({"error": "Missing 'processes' list"}), _HTTP_BAD_REQUEST

        try:
            run_config = base_config
            if "quantum" in data:
                run_config = dataclasses.replace(run_config, quantum=data["quantum"])
            if "algorithms" in data:
                run_config = dataclasses.replace(run_config, algorithms=data["algorithms"])
            workload = workload_from_dicts(data["processes"])
            if not workload:
                msg = "No processes to schedule"
                raise WorkloadError(msg)
            simulator = Simulator(policies=build_policies(run_config))
            results = simulator.run(workload)
        except (WorkloadError, ValueError, TypeError) as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        return jsonify({"results": [result_to_dict(r) for r in results]})

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``schedsim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)

"""Optional JSON web API for the scheduling simulator.

This package provides a Flask application that exposes the simulator
over HTTP.  It is an **optional** extra — install with::

    pip install schedsim[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``GET /api/algorithms`` — the available algorithms and default quantum.
- ``POST /api/simulate`` — run a workload and return the results as JSON.
"""

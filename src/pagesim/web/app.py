"""Flask application factory for the PageSim dashboard.

The ``create_app`` function builds a simulation and returns a Flask app
with these endpoints:

- ``GET /`` — render the dashboard page with the current tables.
- ``GET /api/snapshot`` — both page tables as JSON.
- ``POST /api/step`` — run one simulation step and return its result.
- ``POST /api/free`` — release a live process by pid.
- ``GET /api/log`` — the event log, optionally filtered by level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import Flask, Response, jsonify, render_template, request

from pagesim.config import SimulationConfig
from pagesim.logging import LogLevel
from pagesim.simulation import Simulation

if TYPE_CHECKING:
    from pagesim.memory.page_table import PageTableSnapshot

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409


def snapshot_to_json(snapshot: PageTableSnapshot) -> dict[str, list[int | None]]:
    """Return the owners of every slot, per tier, None for free."""
    return {
        "ram": [slot.owner for slot in snapshot.ram],
        "swap": [slot.owner for slot in snapshot.swap],
    }


def create_app(config: SimulationConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Simulation settings.  Defaults to a small seeded run so
            the dashboard fills up quickly.

    Returns:
        A configured Flask application ready to serve.

    """
    if config is None:
        config = SimulationConfig(ram_mb=1, swap_mb=1, page_kb=64, max_process_pages=6, seed=0)
    simulation = Simulation(config)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the dashboard HTML page."""
        return render_template(
            "index.html",
            snapshot=simulation.manager.snapshot(),
            time=simulation.time,
            finished=simulation.finished,
        )

    @app.route("/api/snapshot")
    def snapshot() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return both page tables and the live processes."""
        return jsonify(
            {
                **snapshot_to_json(simulation.manager.snapshot()),
                "time": simulation.time,
                "finished": simulation.finished,
                "processes": [
                    {"pid": p.pid, "pages": p.pages} for p in simulation.live_processes
                ],
            }
        )

    @app.route("/api/step", methods=["POST"])
    def step() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run one step.

        Returns:
            JSON describing the step, or 409 once memory is exhausted.

        """
        if simulation.finished:
            return jsonify({"error": "Simulation finished"}), _HTTP_CONFLICT

        result = simulation.step()
        body: dict[str, Any] = {
            "time": result.time,
            "pid": result.pid,
            "pages": result.pages,
            "allocated": result.allocated,
            "released_pid": result.released_pid,
            **snapshot_to_json(result.snapshot),
        }
        return jsonify(body)

    @app.route("/api/free", methods=["POST"])
    def free() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Release a live process.

        Expects JSON body: ``{"pid": n}``

        """
        data = request.get_json(silent=True)
        pid = data.get("pid") if isinstance(data, dict) else None
        if isinstance(pid, bool) or not isinstance(pid, int):
            return jsonify({"error": "Missing integer 'pid' field"}), _HTTP_BAD_REQUEST

        if not simulation.release(pid):
            return jsonify({"error": f"No live process {pid}"}), _HTTP_NOT_FOUND
        return jsonify({"released": pid, **snapshot_to_json(simulation.manager.snapshot())})

    @app.route("/api/log")
    def log() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return log lines, filtered by ``?level=`` (default INFO)."""
        name = request.args.get("level", "INFO").upper()
        if name not in LogLevel.__members__:
            return jsonify({"error": f"Unknown level {name!r}"}), _HTTP_BAD_REQUEST
        return jsonify({"lines": simulation.logger.lines(min_level=LogLevel[name])})

    return app


def main() -> None:
    """Run the dashboard development server.

    This is the ``pagesim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)

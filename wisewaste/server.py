"""HTTP server entry point with CORS handling and background completion."""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
import threading

from flask import Flask, Response

from wisewaste.controller import WastePickupController
from wisewaste.database import DB_FILE, Database, DatabaseError
from wisewaste.waste_pickup import PickupStore

log = logging.getLogger(__name__)

DEFAULT_PORT = 8000
DEFAULT_INTERVAL = 300.0

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "X-Requested-With, Content-Type, Accept",
}


def create_app(store: PickupStore) -> Flask:
    """Build the Flask application serving the pickup API."""
    app = Flask("wisewaste")

    def cors(path: str) -> Response:
        return Response("", status=200, headers=_CORS_HEADERS)

    app.add_url_rule(
        "/<path:path>",
        "cors",
        cors,
        methods=["POST", "GET", "PUT", "DELETE", "OPTIONS"],
    )
    WastePickupController(store).register_routes(app)
    return app


class _CompletionWorker(threading.Thread):
    def __init__(self, store: PickupStore, interval: float) -> None:
        super().__init__(name="pickup-completion", daemon=True)
        self.store = store
        self.interval = interval
        self._halt = threading.Event()

    def run(self) -> None:
        while not self._halt.wait(self.interval):
            try:
                self.store.update_completed_status()
            except sqlite3.Error as exc:
                log.error("Failed to update completed pickups: %s", exc)

    def stop(self) -> None:
        self._halt.set()


def start_completion_thread(
    store: PickupStore, interval: float = DEFAULT_INTERVAL
) -> _CompletionWorker:
    """Start a daemon thread marking past pickups completed every interval seconds."""
    worker = _CompletionWorker(store, interval)
    worker.start()
    return worker


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Waste pickup HTTP server.")
    parser.add_argument("--database", default=DB_FILE, help="SQLite database file")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL,
        help="seconds between completion checks",
    )
    args = parser.parse_args(argv)

    database = Database(args.database)
    try:
        database.connect()
    except DatabaseError as exc:
        print(exc, file=sys.stderr)
        print("Failed to connect to database. Exiting...", file=sys.stderr)
        return 1
    print("Database connected successfully.")

    try:
        store = PickupStore(database.connection)
        app = create_app(store)
        worker = start_completion_thread(store, args.interval)
        try:
            app.run(host=args.host, port=args.port, threaded=True)
        finally:
            worker.stop()
    finally:
        database.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Waste pickup scheduling backend: SQLite storage, a Python view layer and a JSON HTTP API."""

__version__ = "0.1.0"
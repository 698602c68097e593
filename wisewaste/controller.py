"""HTTP handlers for the waste pickup REST API."""

from __future__ import annotations

import json
from typing import Any

from flask import Flask, request

from wisewaste.waste_pickup import (
    PickupStore,
    parse_status,
    parse_timestamp,
    parse_waste_type,
    pickup_from_json,
)

REQUIRED_FIELDS = ("wasteType", "pickupLocation", "pickupDateTime", "userName")

Reply = tuple[str, int]


def _text(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


class WastePickupController:
    """Turns HTTP requests into store operations and replies with (body, status)."""

    def __init__(self, store: PickupStore) -> None:
        self.store = store

    def register_routes(self, app: Flask) -> None:
        """Attach the /api/wastepickups routes to a Flask application."""

        def list_pickups() -> Reply:
            return self.get_all_pickups()

        def show_pickup(pickup_id: int) -> Reply:
            return self.get_pickup_by_id(pickup_id)

        def create_pickup() -> Reply:
            return self.create_pickup(request.get_data(as_text=True))

        def update_pickup(pickup_id: int) -> Reply:
            return self.update_pickup(request.get_data(as_text=True), pickup_id)

        def delete_pickup(pickup_id: int) -> Reply:
            return self.delete_pickup(pickup_id)

        collection = "/api/wastepickups"
        member = "/api/wastepickups/<int(signed=True):pickup_id>"
        routes = [
            (collection, "list_pickups", "GET", list_pickups),
            (member, "show_pickup", "GET", show_pickup),
            (collection, "create_pickup", "POST", create_pickup),
            (member, "update_pickup", "PUT", update_pickup),
            (member, "delete_pickup", "DELETE", delete_pickup),
        ]
        for rule, endpoint, method, handler in routes:
            app.add_url_rule(
                rule,
                endpoint,
                handler,
                methods=[method],
                provide_automatic_options=False,
            )

    def get_all_pickups(self) -> Reply:
        try:
            pickups = self.store.get_all()
        except Exception as exc:
            return str(exc), 500
        if not pickups:
            # An empty document is rendered as JSON null.
            return "null", 200
        documents = [json.loads(pickup.to_json()) for pickup in pickups]
        return json.dumps(documents, separators=(",", ":"), sort_keys=True), 200

    def get_pickup_by_id(self, pickup_id: int) -> Reply:
        try:
            pickup = self.store.get_by_id(pickup_id)
        except Exception as exc:
            return str(exc), 500
        if pickup is None:
            return "Pickup not found", 404
        return pickup.to_json(), 200

    def create_pickup(self, body: str) -> Reply:
        try:
            data = json.loads(body)
            if not isinstance(data, dict) or any(
                key not in data for key in REQUIRED_FIELDS
            ):
                return "Missing required fields", 400
            pickup = pickup_from_json(body)
            self.store.create(pickup)
            return pickup.to_json(), 201
        except Exception as exc:
            return str(exc), 500

    def update_pickup(self, body: str, pickup_id: int) -> Reply:
        try:
            pickup = self.store.get_by_id(pickup_id)
            if pickup is None:
                return "Pickup not found", 404
            data = json.loads(body)
            if not isinstance(data, dict):
                raise TypeError("request body must be a JSON object")
            if "wasteType" in data:
                pickup.waste_type = parse_waste_type(_text(data, "wasteType"))
            if "pickupLocation" in data:
                pickup.pickup_location = _text(data, "pickupLocation")
            if "pickupDateTime" in data:
                pickup.pickup_datetime = parse_timestamp(_text(data, "pickupDateTime"))
            if "status" in data:
                pickup.status = parse_status(_text(data, "status"))
            if "userName" in data:
                pickup.user_name = _text(data, "userName")
            if not self.store.update(pickup):
                return "Failed to update pickup", 500
            return pickup.to_json(), 200
        except Exception as exc:
            return str(exc), 500

    def delete_pickup(self, pickup_id: int) -> Reply:
        try:
            if not self.store.remove(pickup_id):
                return "Pickup not found", 404
            return "", 204
        except Exception as exc:
            return str(exc), 500
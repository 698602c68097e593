"""Waste pickup records, their JSON form and their SQLite storage."""

from __future__ import annotations

import json
import sqlite3
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class WasteType(Enum):
    PLASTIC = "PLASTIC"
    ELECTRONIC = "ELECTRONIC"
    ORGANIC = "ORGANIC"
    HAZARDOUS = "HAZARDOUS"


class PickupStatus(Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"


def parse_waste_type(text: str) -> WasteType:
    """Map a name to a WasteType; unknown names fall back to PLASTIC."""
    try:
        return WasteType(text)
    except ValueError:
        return WasteType.PLASTIC


def parse_status(text: str) -> PickupStatus:
    """Map a name to a PickupStatus; unknown names fall back to PENDING."""
    try:
        return PickupStatus(text)
    except ValueError:
        return PickupStatus.PENDING


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render a moment as 'YYYY-MM-DD HH:MM:SS' in UTC."""
    return _as_utc(moment).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM:SS' as a UTC moment; raises ValueError."""
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class WastePickup:
    """One requested pickup of a kind of waste at a place and time."""

    id: int = -1
    waste_type: WasteType = WasteType.PLASTIC
    pickup_location: str = ""
    pickup_datetime: datetime = field(default_factory=_now)
    status: PickupStatus = PickupStatus.PENDING
    user_name: str = ""

    def to_json(self) -> str:
        """Serialise with the pickup time as epoch seconds in a string."""
        seconds = int(_as_utc(self.pickup_datetime).timestamp())
        return json.dumps(
            {
                "id": self.id,
                "wasteType": self.waste_type.value,
                "pickupLocation": self.pickup_location,
                "pickupDateTime": str(seconds),
                "status": self.status.value,
                "userName": self.user_name,
            },
            separators=(",", ":"),
        )


def pickup_from_json(text: str) -> WastePickup:
    """Build a pickup from a JSON object, keeping defaults for absent fields.

    The pickup time is not read from the document; it stays at the current time.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("pickup JSON must be an object")
    pickup = WastePickup()
    pickup_id = data.get("id")
    if isinstance(pickup_id, int) and not isinstance(pickup_id, bool):
        pickup.id = pickup_id
    if isinstance(data.get("wasteType"), str):
        pickup.waste_type = parse_waste_type(data["wasteType"])
    if isinstance(data.get("pickupLocation"), str):
        pickup.pickup_location = data["pickupLocation"]
    if isinstance(data.get("status"), str):
        pickup.status = parse_status(data["status"])
    if isinstance(data.get("userName"), str):
        pickup.user_name = data["userName"]
    return pickup


_COLUMNS = "id, waste_type, pickup_location, pickup_datetime, status, user_name"


def _row_to_pickup(row: tuple) -> WastePickup:
    pickup_id, waste_type, location, when, status, user_name = row
    return WastePickup(
        id=pickup_id,
        waste_type=parse_waste_type(waste_type),
        pickup_location=location,
        pickup_datetime=parse_timestamp(when),
        status=parse_status(status),
        user_name=user_name,
    )


class PickupStore:
    """Reads and writes pickups in the waste_pickups table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self._lock = threading.Lock()

    def _select(self, where: str = "", params: tuple = ()) -> list[WastePickup]:
        sql = f"SELECT {_COLUMNS} FROM waste_pickups {where}".strip()
        with self._lock:
            rows = self.connection.execute(sql, params).fetchall()
        return [_row_to_pickup(row) for row in rows]

    def create(self, pickup: WastePickup) -> int:
        """Insert a pickup and return the id the database gave it."""
        with self._lock, self.connection:
            cursor = self.connection.execute(
                "INSERT INTO waste_pickups (waste_type, pickup_location, "
                "pickup_datetime, status, user_name) VALUES (?, ?, ?, ?, ?)",
                (
                    pickup.waste_type.value,
                    pickup.pickup_location,
                    format_timestamp(pickup.pickup_datetime),
                    pickup.status.value,
                    pickup.user_name,
                ),
            )
        return cursor.lastrowid

    def get_by_id(self, pickup_id: int) -> WastePickup | None:
        found = self._select("WHERE id = ?", (pickup_id,))
        return found[0] if found else None

    def get_by_status(self, status: PickupStatus) -> list[WastePickup]:
        return self._select("WHERE status = ?", (status.value,))

    def get_by_user(self, user_name: str) -> list[WastePickup]:
        return self._select("WHERE user_name = ?", (user_name,))

    def get_all(self) -> list[WastePickup]:
        return self._select()

    def update(self, pickup: WastePickup) -> bool:
        """Write every field of the pickup back; True if a row was changed."""
        with self._lock, self.connection:
            cursor = self.connection.execute(
                "UPDATE waste_pickups SET waste_type = ?, pickup_location = ?, "
                "pickup_datetime = ?, status = ?, user_name = ? WHERE id = ?",
                (
                    pickup.waste_type.value,
                    pickup.pickup_location,
                    format_timestamp(pickup.pickup_datetime),
                    pickup.status.value,
                    pickup.user_name,
                    pickup.id,
                ),
            )
        return cursor.rowcount > 0

    def remove(self, pickup_id: int) -> bool:
        """Delete a pickup; True if a row was deleted."""
        with self._lock, self.connection:
            cursor = self.connection.execute(
                "DELETE FROM waste_pickups WHERE id = ?", (pickup_id,)
            )
        return cursor.rowcount > 0

    def update_completed_status(self) -> int:
        """Mark every pickup whose time has passed as completed; return the count."""
        completed = PickupStatus.COMPLETED.value
        with self._lock, self.connection:
            cursor = self.connection.execute(
                "UPDATE waste_pickups SET status = ? "
                "WHERE pickup_datetime < datetime('now') AND status != ?",
                (completed, completed),
            )
        return cursor.rowcount
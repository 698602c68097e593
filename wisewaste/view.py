"""Plain-function interface over the pickup store, with impact statistics."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass

from wisewaste.waste_pickup import (
    PickupStatus,
    PickupStore,
    WastePickup,
    parse_status,
    parse_timestamp,
    parse_waste_type,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WasteImpact:
    waste_kg: float
    co2_reduction_kg: float


# Keyed by display name; waste type values that do not match contribute nothing.
_WASTE_IMPACT_FACTORS = {
    "Plastic": _WasteImpact(2.5, 5.0),
    "Electronic": _WasteImpact(5.0, 20.0),
    "Hazardous": _WasteImpact(1.0, 10.0),
    "Organic": _WasteImpact(3.0, 3.0),
}


class WastePickupView:
    """Validates user-facing requests and forwards them to the store."""

    def __init__(self, store: PickupStore) -> None:
        self.store = store

    def create_pickup_request(
        self,
        waste_type: str,
        pickup_location: str,
        pickup_datetime: str,
        user_name: str,
    ) -> bool:
        """Record a pending pickup at the current time; False on bad input."""
        if not (waste_type and pickup_location and pickup_datetime and user_name):
            return False
        pickup = WastePickup(
            waste_type=parse_waste_type(waste_type),
            pickup_location=pickup_location,
            status=PickupStatus.PENDING,
            user_name=user_name,
        )
        try:
            self.store.create(pickup)
        except sqlite3.Error as exc:
            log.error("Error creating pickup request: %s", exc)
            return False
        return True

    def get_pickup_by_id(self, pickup_id: int) -> WastePickup | None:
        return self.store.get_by_id(pickup_id)

    def get_all_pickups(self) -> list[WastePickup]:
        return self.store.get_all()

    def get_pickups_by_status(self, status: str) -> list[WastePickup]:
        return self.store.get_by_status(parse_status(status))

    def get_pickups_by_user(self, user_name: str) -> list[WastePickup]:
        return self.store.get_by_user(user_name)

    def update_pickup_request(
        self,
        pickup_id: int,
        waste_type: str,
        pickup_location: str,
        pickup_datetime: str,
        status: str,
        user_name: str,
    ) -> bool:
        """Replace every field of an existing pickup; False on bad input."""
        if not (
            waste_type and pickup_location and pickup_datetime and status and user_name
        ) or pickup_id <= 0:
            return False
        pickup = self.store.get_by_id(pickup_id)
        if pickup is None:
            return False
        try:
            when = parse_timestamp(pickup_datetime)
        except ValueError:
            return False
        pickup.waste_type = parse_waste_type(waste_type)
        pickup.pickup_location = pickup_location
        pickup.pickup_datetime = when
        pickup.status = parse_status(status)
        pickup.user_name = user_name
        return self.store.update(pickup)

    def cancel_pickup_request(self, pickup_id: int) -> bool:
        if pickup_id <= 0:
            return False
        return self.store.remove(pickup_id)

    def check_and_update_completed_status(self) -> None:
        self.store.update_completed_status()

    def get_environmental_impact_data(self) -> str:
        """Summarise completed pickups as a JSON document."""
        try:
            completed = self.store.get_by_status(PickupStatus.COMPLETED)
        except sqlite3.Error as exc:
            log.error("Error calculating environmental impact: %s", exc)
            return json.dumps(
                {"error": "Failed to calculate environmental impact"},
                separators=(",", ":"),
            )
        total_waste = 0.0
        co2_reduction = 0.0
        distribution: dict[str, int] = {}
        for pickup in completed:
            name = pickup.waste_type.value
            distribution[name] = distribution.get(name, 0) + 1
            factor = _WASTE_IMPACT_FACTORS.get(name)
            if factor is not None:
                total_waste += factor.waste_kg
                co2_reduction += factor.co2_reduction_kg
        return json.dumps(
            {
                "totalRecycledWaste": total_waste,
                "co2Reduction": co2_reduction,
                "wasteTypeDistribution": distribution,
                "totalCompletedPickups": len(completed),
            },
            separators=(",", ":"),
            sort_keys=True,
        )
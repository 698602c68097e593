import json
from datetime import datetime, timezone

import pytest
from flask import Flask

from wisewaste.controller import WastePickupController
from wisewaste.database import Database
from wisewaste.waste_pickup import (
    PickupStatus,
    PickupStore,
    WastePickup,
    WasteType,
    parse_timestamp,
)


@pytest.fixture
def store():
    database = Database(":memory:")
    database.connect()
    yield PickupStore(database.connection)
    database.close()


@pytest.fixture
def controller(store):
    return WastePickupController(store)


def _new_body(**overrides):
    data = {
        "wasteType": "ORGANIC",
        "pickupLocation": "Main Street 1",
        "pickupDateTime": "2030-01-01 10:00:00",
        "userName": "alice",
    }
    data.update(overrides)
    return json.dumps(data)


def _stored(store, **fields):
    pickup = WastePickup(
        waste_type=WasteType.PLASTIC,
        pickup_location="Depot",
        pickup_datetime=datetime(2030, 5, 1, 8, 0, tzinfo=timezone.utc),
        user_name="bob",
        **fields,
    )
    return store.create(pickup)


def test_get_all_empty_is_null(controller):
    assert controller.get_all_pickups() == ("null", 200)


def test_get_all_lists_every_pickup(controller, store):
    _stored(store)
    _stored(store)
    body, status = controller.get_all_pickups()
    assert status == 200
    documents = json.loads(body)
    assert [doc["userName"] for doc in documents] == ["bob", "bob"]


def test_get_missing_pickup_is_404(controller):
    assert controller.get_pickup_by_id(42) == ("Pickup not found", 404)


def test_get_pickup_by_id(controller, store):
    pickup_id = _stored(store)
    body, status = controller.get_pickup_by_id(pickup_id)
    assert status == 200
    assert json.loads(body)["id"] == pickup_id
    assert json.loads(body)["wasteType"] == "PLASTIC"


@pytest.mark.parametrize("missing", ["wasteType", "pickupLocation", "pickupDateTime", "userName"])
def test_create_requires_fields(controller, store, missing):
    data = json.loads(_new_body())
    del data[missing]
    assert controller.create_pickup(json.dumps(data)) == ("Missing required fields", 400)
    assert store.get_all() == []


def test_create_stores_pickup(controller, store):
    body, status = controller.create_pickup(_new_body())
    assert status == 201
    document = json.loads(body)
    assert document["wasteType"] == "ORGANIC"
    assert document["status"] == "PENDING"
    stored = store.get_all()
    assert len(stored) == 1
    assert stored[0].pickup_location == "Main Street 1"
    assert stored[0].user_name == "alice"


def test_create_with_bad_json_is_500(controller):
    _, status = controller.create_pickup("{not json")
    assert status == 500


def test_update_missing_is_404(controller):
    assert controller.update_pickup(_new_body(), 7) == ("Pickup not found", 404)


def test_update_changes_fields(controller, store):
    pickup_id = _stored(store)
    body, status = controller.update_pickup(
        json.dumps(
            {
                "pickupLocation": "Harbour",
                "status": "SCHEDULED",
                "wasteType": "HAZARDOUS",
                "pickupDateTime": "2031-02-03 04:05:06",
            }
        ),
        pickup_id,
    )
    assert status == 200
    assert json.loads(body)["pickupLocation"] == "Harbour"
    stored = store.get_by_id(pickup_id)
    assert stored.status is PickupStatus.SCHEDULED
    assert stored.waste_type is WasteType.HAZARDOUS
    assert stored.pickup_datetime == parse_timestamp("2031-02-03 04:05:06")
    assert stored.user_name == "bob"


def test_update_with_non_string_field_is_500(controller, store):
    pickup_id = _stored(store)
    _, status = controller.update_pickup(json.dumps({"userName": 5}), pickup_id)
    assert status == 500
    assert store.get_by_id(pickup_id).user_name == "bob"


def test_delete_then_missing(controller, store):
    pickup_id = _stored(store)
    assert controller.delete_pickup(pickup_id) == ("", 204)
    assert controller.delete_pickup(pickup_id) == ("Pickup not found", 404)
    assert store.get_by_id(pickup_id) is None


def test_register_routes_serves_api(controller, store):
    app = Flask("routes")
    controller.register_routes(app)
    client = app.test_client()
    response = client.post("/api/wastepickups", data=_new_body())
    assert response.status_code == 201
    listing = client.get("/api/wastepickups")
    assert len(json.loads(listing.get_data(as_text=True))) == 1
    assert client.get("/api/wastepickups/99").status_code == 404
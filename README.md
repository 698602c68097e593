# wisewaste

A small HTTP backend for booking and tracking waste pickups. Pickup requests
are kept in a SQLite database and served as JSON over a REST API built with
Flask. A background thread marks pickups as `COMPLETED` once their scheduled
time has passed.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
wisewaste
```

Options:

| Option         | Default        | Meaning                                   |
|----------------|----------------|-------------------------------------------|
| `--database`   | `wisewaste.db` | SQLite database file                      |
| `--host`       | `0.0.0.0`      | address to listen on                      |
| `--port`       | `8000`         | port to listen on                         |
| `--interval`   | `300`          | seconds between completion checks         |

On start the database file is opened (and the `waste_pickups` table created
if it does not exist); if that fails the command prints
`Failed to connect to database. Exiting...` and exits with status 1.
The background thread then sets every pickup whose date-time lies in the past
to `COMPLETED` once per interval.

The server uses Flask's built-in threaded server.

## API

| Method | Path                       | Result                                          |
|--------|----------------------------|-------------------------------------------------|
| GET    | `/api/wastepickups`        | all pickups as a JSON array (`null` when empty) |
| GET    | `/api/wastepickups/<id>`   | one pickup, or 404 `Pickup not found`           |
| POST   | `/api/wastepickups`        | creates a pickup, answers 201                   |
| PUT    | `/api/wastepickups/<id>`   | changes the fields given in the body            |
| DELETE | `/api/wastepickups/<id>`   | removes the pickup, answers 204, or 404         |

Any other path answers any of `GET`, `POST`, `PUT`, `DELETE` and `OPTIONS`
with an empty 200 response carrying `Access-Control-Allow-*` headers, so that
browser preflight requests succeed. The API routes themselves do not add
these headers.

A pickup is returned as:

```json
{"id":1,"wasteType":"ELECTRONIC","pickupLocation":"12 Example Street","pickupDateTime":"1903941000","status":"PENDING","userName":"alice"}
```

`pickupDateTime` in responses is the pickup time in Unix seconds, as a string.

### Creating

`POST` needs `wasteType`, `pickupLocation`, `pickupDateTime` and `userName`;
without them the server answers 400 `Missing required fields`.

```json
{
  "wasteType": "ELECTRONIC",
  "pickupLocation": "12 Example Street",
  "pickupDateTime": "2030-05-01 09:30:00",
  "userName": "alice"
}
```

The `pickupDateTime` value is checked for presence but not used: the new
pickup is stored with the current time. `status` may be given and defaults to
`PENDING`. The 201 response echoes the pickup with `id` set to `-1`; fetch the
collection to see the id the database assigned.

### Updating

`PUT` changes only the fields present in the body. Here `pickupDateTime` is
read, in the form `YYYY-MM-DD HH:MM:SS` (UTC). A malformed body or date-time
is answered with status 500 and the error text.

### Values

Waste types are `PLASTIC`, `ELECTRONIC`, `ORGANIC` and `HAZARDOUS`; an
unknown name is read as `PLASTIC`. Statuses are `PENDING`, `SCHEDULED` and
`COMPLETED`; an unknown name is read as `PENDING`.

## Using it from Python

```python
from wisewaste.database import Database
from wisewaste.waste_pickup import PickupStore
from wisewaste.view import WastePickupView

with Database("wisewaste.db") as db:
    view = WastePickupView(PickupStore(db.connection))
    view.create_pickup_request("ORGANIC", "Market Square", "2030-05-01 09:30:00", "alice")
    view.check_and_update_completed_status()
    print(view.get_environmental_impact_data())
```

- `wisewaste.database.Database` opens the SQLite file, creates the table, and
  offers `execute` for statements and `query` for rows as dictionaries;
  failures raise `DatabaseError`.
- `wisewaste.waste_pickup` holds the `WastePickup` dataclass, the `WasteType`
  and `PickupStatus` enums, `PickupStore` (create, get by id, status or user,
  update, remove, `update_completed_status`), and the helpers
  `parse_waste_type`, `parse_status`, `format_timestamp`, `parse_timestamp`
  and `pickup_from_json`.
- `wisewaste.view.WastePickupView` validates plain string arguments and
  returns `False` on empty or invalid input. `create_pickup_request` stores
  the pickup as `PENDING` at the current time. `get_environmental_impact_data`
  returns JSON with `totalCompletedPickups` and `wasteTypeDistribution`; its
  `totalRecycledWaste` and `co2Reduction` figures come from a factor table
  keyed by names (`Plastic`, `Electronic`, ...) that do not match the stored
  type names, so they are reported as `0.0`.
- `wisewaste.controller.WastePickupController` holds the HTTP handlers, each
  returning a `(body, status)` pair, and `register_routes(app)` attaches them
  to a Flask application.
- `wisewaste.server.create_app(store)` builds the Flask application for use
  with any WSGI server, and `start_completion_thread(store, interval)` starts
  the background status updater on its own; call `stop()` on the returned
  thread to end it.

## What it does not do

There is no authentication or per-user access control: any client can read,
change or delete any pickup. The view layer and impact statistics are
available from Python only; the HTTP API does not expose them.
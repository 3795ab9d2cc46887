import sys
from pathlib import Path

import pytest

# Allow running the suite from a checkout without installing
root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(root / "backend"))

from refill.api.amenities import AmenityStore
from refill.api.db import InMemoryPlaceStore


class FailingStore:
    """Every round trip fails like an unreachable database."""

    def __init__(self, fail_on=("fetch_row", "fetch_rows", "insert_row", "update_row")):
        self.fail_on = set(fail_on)
        self.writes = []

    def _maybe_fail(self, name):
        if name in self.fail_on:
            raise ConnectionError(f"{name}: storage unavailable")

    async def fetch_row(self, key):
        self._maybe_fail("fetch_row")
        return None

    async def fetch_rows(self, keys):
        self._maybe_fail("fetch_rows")
        return []

    async def insert_row(self, row):
        self._maybe_fail("insert_row")
        self.writes.append(row)

    async def update_row(self, key, row):
        self._maybe_fail("update_row")
        self.writes.append(row)


class FakeGoogleMaps:
    """Stands in for googlemaps.Client; records calls and replays canned responses."""

    def __init__(self, nearby=None, text=None, details=None, error=None):
        self.nearby = nearby or {"status": "OK", "results": []}
        self.text = text or {"status": "OK", "results": []}
        self.details = details or {"status": "OK", "result": {}}
        self.error = error
        self.calls = []

    def _respond(self, name, kwargs, response):
        self.calls.append((name, kwargs))
        if self.error:
            raise self.error
        return response

    def places_nearby(self, **kwargs):
        return self._respond("places_nearby", kwargs, self.nearby)

    def places(self, **kwargs):
        return self._respond("places", kwargs, self.text)

    def place(self, place_id, **kwargs):
        return self._respond("place", dict(kwargs, place_id=place_id), self.details)


def make_place(place_id, name, lat, lng, types=None, **extra):
    place = {
        "place_id": place_id,
        "name": name,
        "vicinity": f"{name} Street",
        "geometry": {"location": {"lat": lat, "lng": lng}},
        "types": types or ["restaurant", "food", "point_of_interest", "establishment"],
    }
    place.update(extra)
    return place


@pytest.fixture
def memory_store():
    return InMemoryPlaceStore()


@pytest.fixture
def amenity_store(memory_store):
    return AmenityStore(memory_store)

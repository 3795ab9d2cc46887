import asyncio

import pytest

from refill.api.amenities import AmenityStore
from refill.api.restaurants import DEFAULT_SEARCH_LOCATION, RestaurantService, merge_restaurant_data
from refill.models import AmenityReport, Location, RestaurantAmenities, RestaurantData
from refill.places import GooglePlacesClient, get_mock_restaurants, map_place_to_restaurant

from conftest import FailingStore, FakeGoogleMaps, make_place

ORIGIN = Location(latitude=41.88, longitude=-87.63)
REPORT = AmenityReport(free_refills=True, bread_basket=False, pay_at_table=None, attendant=False, base_score=7)


def build_service(amenity_store, places):
    fake = FakeGoogleMaps(
        nearby={"status": "OK", "results": places},
        text={"status": "OK", "results": places},
    )
    return RestaurantService(GooglePlacesClient("key", client=fake), amenity_store), fake


def test_merge_keeps_defaults_without_data():
    restaurants = get_mock_restaurants(ORIGIN)
    data = {"mock-place-2": RestaurantData(amenities=RestaurantAmenities(free_refills=False), score=3.5)}

    merged = merge_restaurant_data(restaurants, data)
    assert merged[0].amenities == restaurants[0].amenities
    assert merged[0].score is None
    assert merged[1].amenities.free_refills is False
    assert merged[1].score == 3.5
    assert restaurants[1].score is None


def test_load_nearby_merges_stored_data(amenity_store):
    places = [make_place("a", "A", 41.89, -87.63), make_place("b", "B", 41.87, -87.63)]
    service, fake = build_service(amenity_store, places)
    asyncio.run(amenity_store.submit_report("b", REPORT))

    results = asyncio.run(service.load_nearby(ORIGIN))
    assert [r.place_id for r in results] == ["a", "b"]
    assert results[0].score is None
    assert results[0].amenities.free_refills is None
    assert results[1].score == pytest.approx(6.2)
    assert results[1].amenities.free_refills is True
    assert results[1].amenities.bread_basket is False
    assert fake.calls[0][1]["radius"] == 5000


def test_search_limits_and_defaults_location(amenity_store):
    places = [make_place(f"p{i}", f"Diner {i}", 41.0, -87.0) for i in range(8)]
    service, fake = build_service(amenity_store, places)

    results = asyncio.run(service.search("diner"))
    assert len(results) == 5
    assert fake.calls[0][1]["location"] == (DEFAULT_SEARCH_LOCATION.latitude, DEFAULT_SEARCH_LOCATION.longitude)


def test_search_ignores_short_queries(amenity_store):
    service, fake = build_service(amenity_store, [])
    assert asyncio.run(service.search(" a ")) == []
    assert fake.calls == []


def test_read_failure_falls_back_to_no_data():
    places = [make_place("a", "A", 41.89, -87.63)]
    service, _ = build_service(AmenityStore(FailingStore()), places)

    results = asyncio.run(service.load_nearby(ORIGIN))
    assert len(results) == 1
    assert results[0].score is None


def test_submit_report_refreshes_restaurant(amenity_store):
    restaurant = map_place_to_restaurant(make_place("a", "A", 41.89, -87.63), ORIGIN)
    service, _ = build_service(amenity_store, [])

    updated = asyncio.run(service.submit_report(restaurant, REPORT))
    assert updated.place_id == "a"
    assert updated.amenities.free_refills_stats.total == 1
    assert updated.score is not None


def test_submit_report_failure_returns_none():
    restaurant = map_place_to_restaurant(make_place("a", "A", 41.89, -87.63), ORIGIN)
    service, _ = build_service(AmenityStore(FailingStore()), [])
    assert asyncio.run(service.submit_report(restaurant, REPORT)) is None

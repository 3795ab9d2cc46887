"""
Google Places Lookup
====================
Finds restaurants with the googlemaps Places web service and maps each
result to the Restaurant view model (distance, cuisine, photo URL).
"""

import re
import math
import asyncio
import logging
from typing import Any, Dict, List, Optional

import googlemaps

from refill.models import AmenityStats, Location, Restaurant, RestaurantAmenities

logger = logging.getLogger(__name__)

PLACES_API_BASE_URL = "https://maps.googleapis.com/maps/api/place"
EARTH_RADIUS_MILES = 3959
GENERIC_TYPES = {"restaurant", "food", "point_of_interest", "establishment"}
DETAIL_FIELDS = ["name", "formatted_address", "geometry", "rating", "opening_hours", "price_level", "photo", "type"]
OK_STATUSES = {"OK", "ZERO_RESULTS"}


class PlacesAPIError(Exception):
    """Places web service answered with a non-OK status."""


def calculate_distance(origin: Location, destination: Location) -> float:
    """Great-circle distance in miles (haversine)."""
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lon = math.radians(destination.longitude - origin.longitude)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(destination.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def round_distance(distance: float) -> float:
    # Half-up to one decimal, like Math.round(d * 10) / 10 on the client
    return math.floor(distance * 10 + 0.5) / 10


def extract_cuisine(types: List[str]) -> str:
    """First non-generic place type as a display label, e.g. `italian_restaurant` -> `Italian Restaurant`."""
    specific = [t for t in types if t not in GENERIC_TYPES]
    if not specific:
        return "Restaurant"
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), specific[0].replace("_", " "))


def get_photo_url(photo_reference: str, api_key: Optional[str], max_width: int = 400) -> str:
    return (
        f"{PLACES_API_BASE_URL}/photo?maxwidth={max_width}"
        f"&photo_reference={photo_reference}&key={api_key or ''}"
    )


def map_place_to_restaurant(place: Dict[str, Any], origin: Location, api_key: Optional[str] = None) -> Restaurant:
    """Map a Places search result to a Restaurant with no community data yet."""
    loc = place["geometry"]["location"]
    location = Location(latitude=loc["lat"], longitude=loc["lng"])
    photos = place.get("photos") or []

    return Restaurant(
        id=place["place_id"],
        place_id=place["place_id"],
        name=place["name"],
        address=place.get("vicinity") or place.get("formatted_address") or "",
        location=location,
        distance=round_distance(calculate_distance(origin, location)),
        rating=place.get("rating"),
        price_level=place.get("price_level"),
        cuisine=extract_cuisine(place.get("types", [])),
        is_open=(place.get("opening_hours") or {}).get("open_now"),
        photo_url=get_photo_url(photos[0]["photo_reference"], api_key) if photos else None,
    )


def _check_status(response: Dict[str, Any]) -> None:
    status = response.get("status", "OK")
    if status not in OK_STATUSES:
        raise PlacesAPIError(f"Places API error: {status}")


class GooglePlacesClient:
    """Restaurant search over the googlemaps client. Failures log and return empty results."""

    def __init__(self, api_key: Optional[str], client: Optional[googlemaps.Client] = None):
        self.api_key = api_key
        self.client = client or self._init_client()

    def _init_client(self) -> Optional[googlemaps.Client]:
        if not self.api_key:
            logger.warning("GOOGLE_MAPS_API_KEY not set")
            return None
        try:
            return googlemaps.Client(key=self.api_key)
        except Exception as e:
            logger.error(f"Failed to initialize googlemaps client: {e}")
            return None

    async def search_nearby(self, location: Location, radius: int = 5000, keyword: Optional[str] = None) -> List[Restaurant]:
        if not self.client:
            return []
        try:
            response = await asyncio.to_thread(
                self.client.places_nearby,
                location=(location.latitude, location.longitude),
                radius=radius,
                keyword=keyword,
                type="restaurant",
            )
            _check_status(response)
            return [map_place_to_restaurant(p, location, self.api_key) for p in response.get("results", [])]
        except Exception as e:
            logger.error(f"Error searching restaurants near {location.latitude},{location.longitude}: {e}")
            return []

    async def search_by_text(self, query: str, location: Optional[Location] = None) -> List[Restaurant]:
        """Text search; `location` biases results but does not restrict them."""
        if not self.client:
            return []
        try:
            kwargs: Dict[str, Any] = {"query": query, "type": "restaurant"}
            if location:
                kwargs["location"] = (location.latitude, location.longitude)
            response = await asyncio.to_thread(self.client.places, **kwargs)
            _check_status(response)
            results = response.get("results", [])

            reference = location
            if reference is None:
                if results:
                    first = results[0]["geometry"]["location"]
                    reference = Location(latitude=first["lat"], longitude=first["lng"])
                else:
                    reference = Location(latitude=0.0, longitude=0.0)

            return [map_place_to_restaurant(p, reference, self.api_key) for p in results]
        except Exception as e:
            logger.error(f"Error searching restaurants for '{query}': {e}")
            return []

    async def get_place_details(self, place_id: str) -> Optional[Dict[str, Any]]:
        if not self.client:
            return None
        try:
            response = await asyncio.to_thread(self.client.place, place_id, fields=DETAIL_FIELDS)
            if response.get("status") != "OK":
                raise PlacesAPIError(f"Places API error: {response.get('status')}")
            return response.get("result")
        except Exception as e:
            logger.error(f"Error getting place details for {place_id}: {e}")
            return None


def get_mock_restaurants(origin: Location) -> List[Restaurant]:
    """Fixture restaurants around `origin` for running without an API key."""

    def near(d_lat: float, d_lng: float) -> Location:
        return Location(latitude=origin.latitude + d_lat, longitude=origin.longitude + d_lng)

    def stats(yes: int, no: int, total: int) -> AmenityStats:
        return AmenityStats(yes=yes, no=no, total=total)

    return [
        Restaurant(
            id="mock-1",
            place_id="mock-place-1",
            name="Olive Garden",
            address="123 Pasta Lane",
            location=near(0.01, 0.01),
            distance=0.4,
            rating=4.5,
            price_level=2,
            cuisine="Italian",
            is_open=True,
            closing_time="10 PM",
            amenities=RestaurantAmenities(
                free_refills=True,
                bread_basket=True,
                pay_at_table=True,
                attendant=False,
                free_refills_stats=stats(45, 3, 48),
                bread_basket_stats=stats(50, 0, 50),
                pay_at_table_stats=stats(32, 8, 40),
                attendant_stats=stats(5, 35, 40),
            ),
        ),
        Restaurant(
            id="mock-2",
            place_id="mock-place-2",
            name="Red Lobster",
            address="456 Seafood Ave",
            location=near(0.02, -0.01),
            distance=0.8,
            rating=4.2,
            price_level=3,
            cuisine="Seafood",
            is_open=True,
            closing_time="11 PM",
            amenities=RestaurantAmenities(
                free_refills=True,
                bread_basket=False,
                pay_at_table=False,
                attendant=True,
                free_refills_stats=stats(28, 5, 33),
                bread_basket_stats=stats(8, 25, 33),
                pay_at_table_stats=stats(10, 20, 30),
                attendant_stats=stats(22, 8, 30),
            ),
        ),
        Restaurant(
            id="mock-3",
            place_id="mock-place-3",
            name="Chipotle",
            address="789 Burrito Blvd",
            location=near(-0.015, 0.02),
            distance=1.2,
            rating=4.0,
            price_level=1,
            cuisine="Mexican",
            is_open=False,
            closing_time="10 PM",
            amenities=RestaurantAmenities(
                free_refills=True,
                bread_basket=False,
                pay_at_table=False,
                attendant=False,
                free_refills_stats=stats(60, 2, 62),
                bread_basket_stats=stats(1, 58, 59),
                pay_at_table_stats=stats(3, 55, 58),
                attendant_stats=stats(2, 56, 58),
            ),
        ),
    ]


class MockPlacesClient:
    """Places lookup over the fixture restaurants."""

    async def search_nearby(self, location: Location, radius: int = 5000, keyword: Optional[str] = None) -> List[Restaurant]:
        restaurants = get_mock_restaurants(location)
        if keyword:
            return [r for r in restaurants if _matches(r, keyword)]
        return restaurants

    async def search_by_text(self, query: str, location: Optional[Location] = None) -> List[Restaurant]:
        origin = location or Location(latitude=0.0, longitude=0.0)
        return [r for r in get_mock_restaurants(origin) if _matches(r, query)]

    async def get_place_details(self, place_id: str) -> Optional[Dict[str, Any]]:
        return None


def _matches(restaurant: Restaurant, text: str) -> bool:
    needle = text.lower()
    return needle in restaurant.name.lower() or needle in (restaurant.cuisine or "").lower()

"""Merge Places search results with community amenity data."""

import logging
from typing import Dict, List, Optional, Protocol

from refill.api.amenities import AmenityStore
from refill.models import AmenityReport, Location, Restaurant, RestaurantData

logger = logging.getLogger(__name__)

# Geographic centre of the contiguous US, used when the user location is unknown
DEFAULT_SEARCH_LOCATION = Location(latitude=39.8283, longitude=-98.5795)
SUGGESTION_LIMIT = 5


class PlacesLookup(Protocol):
    async def search_nearby(self, location: Location, radius: int = 5000, keyword: Optional[str] = None) -> List[Restaurant]: ...

    async def search_by_text(self, query: str, location: Optional[Location] = None) -> List[Restaurant]: ...


def merge_restaurant_data(restaurants: List[Restaurant], data_map: Dict[str, RestaurantData]) -> List[Restaurant]:
    """Attach stored amenities and score; restaurants without data keep their defaults and no score."""
    merged = []
    for restaurant in restaurants:
        data = data_map.get(restaurant.place_id)
        if data:
            merged.append(restaurant.model_copy(update={"amenities": data.amenities, "score": data.score}))
        else:
            merged.append(restaurant.model_copy(update={"score": None}))
    return merged


class RestaurantService:
    """Read/merge boundary used by the UI."""

    def __init__(self, places: PlacesLookup, amenities: AmenityStore, radius: int = 5000):
        self.places = places
        self.amenities = amenities
        self.radius = radius

    async def _enrich(self, restaurants: List[Restaurant]) -> List[Restaurant]:
        if not restaurants:
            return []
        data_map = await self.amenities.get_multiple_amenities(r.place_id for r in restaurants)
        return merge_restaurant_data(restaurants, data_map)

    async def load_nearby(self, location: Location, radius: Optional[int] = None) -> List[Restaurant]:
        results = await self.places.search_nearby(location, radius or self.radius)
        logger.info(f"Loading amenities for {len(results)} restaurants")
        return await self._enrich(results)

    async def search(self, query: str, location: Optional[Location] = None, limit: int = SUGGESTION_LIMIT) -> List[Restaurant]:
        """Search suggestions; queries shorter than two characters return nothing."""
        if len(query.strip()) < 2:
            return []
        results = await self.places.search_by_text(query, location or DEFAULT_SEARCH_LOCATION)
        return (await self._enrich(results))[:limit]

    async def refresh(self, restaurant: Restaurant) -> Restaurant:
        return (await self._enrich([restaurant]))[0]

    async def submit_report(self, restaurant: Restaurant, report: AmenityReport) -> Optional[Restaurant]:
        """Submit a report and return the refreshed restaurant, or None if the submit failed."""
        if not await self.amenities.submit_report(restaurant.place_id, report):
            logger.warning(f"Report for {restaurant.place_id} was not saved")
            return None
        return await self.refresh(restaurant)

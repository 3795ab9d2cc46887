import logging
from dataclasses import dataclass
from contextlib import asynccontextmanager
from typing import Optional, Union

from refill.config import Settings
from refill.api.db import InMemoryPlaceStore, SupabasePlaceStore, create_supabase_client
from refill.api.amenities import AmenityStore
from refill.api.restaurants import RestaurantService
from refill.places import GooglePlacesClient, MockPlacesClient

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Container for all app services."""
    settings: Settings
    places: Union[GooglePlacesClient, MockPlacesClient]
    amenities: AmenityStore
    restaurants: RestaurantService


@asynccontextmanager
async def create_services(settings: Optional[Settings] = None):
    """
    Initialize all services with proper lifecycle management.

    Usage:
        async with create_services() as services:
            # use services.amenities, services.restaurants, etc.
    """
    settings = settings or Settings.from_env()

    if settings.use_mock_data:
        logger.info("Using in-memory store and mock restaurants")
        store = InMemoryPlaceStore()
    else:
        client = await create_supabase_client(settings)
        if client is None:
            logger.warning("Falling back to in-memory store")
            store = InMemoryPlaceStore()
        else:
            store = SupabasePlaceStore(client, table=settings.supabase_table)

    if settings.use_mock_data or not settings.google_maps_api_key:
        places = MockPlacesClient()
    else:
        places = GooglePlacesClient(settings.google_maps_api_key)

    amenities = AmenityStore(store)
    services = Services(
        settings=settings,
        places=places,
        amenities=amenities,
        restaurants=RestaurantService(places, amenities, radius=settings.search_radius),
    )

    try:
        yield services
    finally:
        logger.debug("Services shut down")

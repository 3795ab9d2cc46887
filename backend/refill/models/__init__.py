"""
Refill Data Models
==================
Pydantic models for stored rows, reports and the restaurant view model.
"""

from .enums import Amenity, AnswerBucket
from .amenities import AmenityStats, AmenityTally, AmenityReport, RestaurantAmenities
from .restaurant import RestaurantRecord, RestaurantData, Location, Restaurant

__all__ = [
    # Enums
    "Amenity",
    "AnswerBucket",
    # Amenities
    "AmenityStats",
    "AmenityTally",
    "AmenityReport",
    "RestaurantAmenities",
    # Restaurants
    "RestaurantRecord",
    "RestaurantData",
    "Location",
    "Restaurant",
]

"""Stored restaurant rows and the restaurant view model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .amenities import AmenityTally, RestaurantAmenities
from .enums import Amenity


class RestaurantRecord(BaseModel):
    """Row in the `places` table, keyed by Google place id."""
    key: str
    created_at: Optional[datetime] = None

    bread: AmenityTally = Field(default_factory=AmenityTally)
    refill: AmenityTally = Field(default_factory=AmenityTally)
    attendant: AmenityTally = Field(default_factory=AmenityTally)
    pay: AmenityTally = Field(default_factory=AmenityTally)

    score: float = Field(0.0, ge=0.0, le=10.0)

    model_config = {"extra": "ignore"}

    @field_validator("score", mode="before")
    @classmethod
    def coerce_float(cls, v):
        return float(v) if v is not None else 0.0

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_datetime(cls, v):
        if isinstance(v, str):
            return datetime.fromisoformat(v.replace("Z", "+00:00"))
        return v

    def tally(self, amenity: Amenity) -> AmenityTally:
        return getattr(self, amenity.value)

    def to_row(self, include_key: bool = True) -> dict:
        """Serialize for insert/update. `created_at` is owned by the table default."""
        exclude = {"created_at"} if include_key else {"created_at", "key"}
        return self.model_dump(mode="json", exclude=exclude)


class RestaurantData(BaseModel):
    """Stored community data for one restaurant, as the UI consumes it."""
    amenities: RestaurantAmenities
    score: float = 0.0


class Location(BaseModel):
    latitude: float
    longitude: float


class Restaurant(BaseModel):
    """Restaurant view model: Places metadata merged with community data."""
    id: str
    place_id: str
    name: str
    address: str = ""
    location: Location

    distance: Optional[float] = None
    rating: Optional[float] = None
    price_level: Optional[int] = None
    cuisine: Optional[str] = None
    is_open: Optional[bool] = None
    closing_time: Optional[str] = None
    photo_url: Optional[str] = None

    amenities: RestaurantAmenities = Field(default_factory=RestaurantAmenities)
    score: Optional[float] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def has_score(self) -> bool:
        return self.score is not None

"""Amenity report, tally and status models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import Amenity, AnswerBucket


class AmenityStats(BaseModel):
    """Per-amenity counts shown next to a status. `total` includes idk answers."""
    yes: int = 0
    no: int = 0
    total: int = 0


class AmenityTally(BaseModel):
    """Running yes/no/idk counters for one amenity at one restaurant."""
    yes: int = Field(0, ge=0)
    no: int = Field(0, ge=0)
    idk: int = Field(0, ge=0)

    model_config = {"extra": "ignore"}

    @field_validator("yes", "no", "idk", mode="before")
    @classmethod
    def coerce_int(cls, v):
        return int(v) if v is not None else 0

    @property
    def total(self) -> int:
        return self.yes + self.no + self.idk

    def status(self) -> Optional[bool]:
        """Strict majority of yes over no; ties (including 0/0) are unknown."""
        if self.yes > self.no:
            return True
        if self.no > self.yes:
            return False
        return None

    def stats(self) -> AmenityStats:
        return AmenityStats(yes=self.yes, no=self.no, total=self.total)

    def record(self, answer: Optional[bool]) -> "AmenityTally":
        """Return a copy with the bucket for `answer` incremented by one."""
        bucket = AnswerBucket.for_answer(answer).value
        return self.model_copy(update={bucket: getattr(self, bucket) + 1})


class AmenityReport(BaseModel):
    """One user's answers. `None` means "don't know" for that amenity."""
    free_refills: Optional[bool] = None
    bread_basket: Optional[bool] = None
    pay_at_table: Optional[bool] = None
    attendant: Optional[bool] = None
    base_score: Optional[float] = Field(None, ge=0, le=10, description="Baseline experience (0-10)")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def answer_for(self, amenity: Amenity) -> Optional[bool]:
        return getattr(self, amenity.report_field)


class RestaurantAmenities(BaseModel):
    """Majority-vote amenity statuses plus the counts behind them."""
    free_refills: Optional[bool] = None
    bread_basket: Optional[bool] = None
    pay_at_table: Optional[bool] = None
    attendant: Optional[bool] = None
    verified_at: Optional[datetime] = None

    free_refills_stats: Optional[AmenityStats] = None
    bread_basket_stats: Optional[AmenityStats] = None
    pay_at_table_stats: Optional[AmenityStats] = None
    attendant_stats: Optional[AmenityStats] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def status_for(self, amenity: Amenity) -> Optional[bool]:
        return getattr(self, amenity.report_field)

    def stats_for(self, amenity: Amenity) -> Optional[AmenityStats]:
        return getattr(self, amenity.stats_field)

    @property
    def total_reports(self) -> int:
        stats = self.free_refills_stats
        return stats.total if stats else 0

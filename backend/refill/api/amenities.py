"""
Amenity Aggregation
===================
Reads community tallies for a restaurant and folds new reports into them.

Submitting is a read-modify-write over two round trips (fetch, then insert or
update) with no lock or version check. Two concurrent submits for the same
place can both read the same row, and the later write wins.
"""

import logging
from typing import Dict, Iterable, Optional

from refill.api.db import PlaceStore
from refill.models import (
    Amenity,
    AmenityReport,
    AmenityTally,
    RestaurantAmenities,
    RestaurantData,
    RestaurantRecord,
)
from refill.scoring import calculate_score, clamp_score

logger = logging.getLogger(__name__)


def derive_amenities(record: RestaurantRecord) -> RestaurantAmenities:
    """Majority-vote statuses and stats for every amenity on a stored record."""
    data = {"verified_at": record.created_at}
    for amenity in Amenity:
        tally = record.tally(amenity)
        data[amenity.report_field] = tally.status()
        data[amenity.stats_field] = tally.stats()
    return RestaurantAmenities(**data)


def new_record(key: str, report: AmenityReport) -> RestaurantRecord:
    """First report for a place: one counter set per amenity, score from this report alone."""
    tallies = {a.value: AmenityTally().record(report.answer_for(a)) for a in Amenity}
    return RestaurantRecord(key=key, score=clamp_score(calculate_score(report)), **tallies)


def apply_report(record: RestaurantRecord, report: AmenityReport) -> RestaurantRecord:
    """Fold one more report into an existing record (returns a new record)."""
    # Every report touches all four tallies, so the refill total is the report count.
    old_count = record.refill.total
    old_score = record.score
    user_score = calculate_score(report)

    if old_count > 0:
        score = (old_score * old_count + user_score) / (old_count + 1)
    else:
        score = user_score

    update = {a.value: record.tally(a).record(report.answer_for(a)) for a in Amenity}
    update["score"] = clamp_score(score)
    return record.model_copy(update=update)


class AmenityStore:
    """Failure-as-value adapter over a PlaceStore: never raises to the caller."""

    def __init__(self, store: PlaceStore):
        self.store = store

    async def get_amenities(self, place_id: str) -> Optional[RestaurantAmenities]:
        """Amenity statuses for one place, or None when nobody has reported it yet."""
        try:
            row = await self.store.fetch_row(place_id)
            if row is None:
                logger.info(f"No data found for place: {place_id}")
                return None
            return derive_amenities(RestaurantRecord.model_validate(row))
        except Exception as e:
            logger.error(f"Error fetching restaurant amenities for {place_id}: {e}")
            return None

    async def get_multiple_amenities(self, place_ids: Iterable[str]) -> Dict[str, RestaurantData]:
        """Batch lookup. Places without a stored row are absent from the result."""
        keys = list(dict.fromkeys(place_ids))
        if not keys:
            return {}

        try:
            rows = await self.store.fetch_rows(keys)
        except Exception as e:
            logger.error(f"Error fetching amenities for {len(keys)} places: {e}")
            return {}

        data_map: Dict[str, RestaurantData] = {}
        try:
            for row in rows:
                record = RestaurantRecord.model_validate(row)
                data_map[record.key] = RestaurantData(
                    amenities=derive_amenities(record),
                    score=record.score,
                )
        except Exception as e:
            logger.error(f"Error reading stored amenity rows: {e}")
            return {}

        logger.info(f"Got data for {len(data_map)} of {len(keys)} places")
        return data_map

    async def submit_report(self, place_id: str, report: AmenityReport) -> bool:
        """Create or update the record for `place_id`. Returns False on any failure."""
        try:
            row = await self.store.fetch_row(place_id)
            if row is None:
                record = new_record(place_id, report)
                await self.store.insert_row(record.to_row())
                logger.info(f"Created record for {place_id} (score {record.score:.2f})")
            else:
                record = apply_report(RestaurantRecord.model_validate(row), report)
                await self.store.update_row(place_id, record.to_row(include_key=False))
                logger.info(f"Updated record for {place_id} (score {record.score:.2f}, reports {record.refill.total})")
            return True
        except Exception as e:
            logger.error(f"Error submitting report for {place_id}: {e}")
            return False

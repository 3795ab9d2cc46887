"""Row storage for restaurant amenity data (Supabase `places` table)."""

import copy
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol

from supabase import AsyncClient, acreate_client

from refill.config import Settings

logger = logging.getLogger(__name__)


class PlaceStore(Protocol):
    """Get/insert/update interface over rows keyed by place id."""

    async def fetch_row(self, key: str) -> Optional[dict]: ...

    async def fetch_rows(self, keys: Iterable[str]) -> List[dict]: ...

    async def insert_row(self, row: dict) -> None: ...

    async def update_row(self, key: str, row: dict) -> None: ...


async def create_supabase_client(settings: Settings) -> AsyncClient | None:
    """Create the Supabase client (called once by the app entry point)."""
    if not settings.has_supabase:
        logger.warning("Supabase credentials not configured; no client created")
        return None
    client = await acreate_client(settings.supabase_url, settings.supabase_key)
    logger.info(f"Supabase client initialized: {settings.supabase_url[:30]}...")
    return client


class SupabasePlaceStore:
    """PlaceStore backed by a Supabase table. Errors propagate to the caller."""

    def __init__(self, client: AsyncClient, table: str = "places"):
        self.client = client
        self.table = table

    async def fetch_row(self, key: str) -> Optional[dict]:
        result = await self.client.table(self.table).select("*").eq("key", key).limit(1).execute()
        return result.data[0] if result.data else None

    async def fetch_rows(self, keys: Iterable[str]) -> List[dict]:
        unique_keys = list(dict.fromkeys(keys))
        if not unique_keys:
            return []
        logger.debug(f"Querying {self.table} for {len(unique_keys)} place ids")
        result = await self.client.table(self.table).select("*").in_("key", unique_keys).execute()
        return result.data or []

    async def insert_row(self, row: dict) -> None:
        await self.client.table(self.table).insert(row).execute()

    async def update_row(self, key: str, row: dict) -> None:
        await self.client.table(self.table).update(row).eq("key", key).execute()


class InMemoryPlaceStore:
    """Dict-backed PlaceStore for mock runs and tests."""

    def __init__(self, rows: Optional[Dict[str, dict]] = None):
        self._rows: Dict[str, dict] = copy.deepcopy(rows) if rows else {}

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: str) -> bool:
        return key in self._rows

    async def fetch_row(self, key: str) -> Optional[dict]:
        row = self._rows.get(key)
        return copy.deepcopy(row) if row is not None else None

    async def fetch_rows(self, keys: Iterable[str]) -> List[dict]:
        return [copy.deepcopy(self._rows[k]) for k in dict.fromkeys(keys) if k in self._rows]

    async def insert_row(self, row: dict) -> None:
        key = row["key"]
        if key in self._rows:
            raise ValueError(f"duplicate key value: {key}")
        stored = copy.deepcopy(row)
        stored.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self._rows[key] = stored

    async def update_row(self, key: str, row: dict) -> None:
        # Matches an UPDATE ... WHERE key = ? that hits no rows
        if key not in self._rows:
            return
        self._rows[key].update(copy.deepcopy(row))

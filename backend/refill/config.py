"""Runtime settings read from the environment (and a local .env file)."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "places"
DEFAULT_RADIUS_METERS = 5000


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_table: str = DEFAULT_TABLE
    google_maps_api_key: Optional[str] = None
    search_radius: int = DEFAULT_RADIUS_METERS
    use_mock_data: bool = False
    log_level: str = "INFO"

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        settings = cls(
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_key=os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_SECRET_KEY") or None,
            supabase_table=os.getenv("SUPABASE_TABLE", DEFAULT_TABLE),
            google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY") or None,
            search_radius=int(os.getenv("SEARCH_RADIUS_METERS", DEFAULT_RADIUS_METERS)),
            use_mock_data=os.getenv("USE_MOCK_DATA", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

        if not settings.has_supabase:
            logger.warning(
                "Supabase credentials not configured (SUPABASE_URL: %s, SUPABASE_ANON_KEY: %s)",
                "configured" if settings.supabase_url else "MISSING",
                "configured" if settings.supabase_key else "MISSING",
            )
        if not settings.google_maps_api_key:
            logger.warning("GOOGLE_MAPS_API_KEY not set")
        return settings

"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    database_url: str
    worker_port: int = 9000
    seed_max_candidates: int = 5
    seed_delay_seconds: float = 0.1


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_PLACES_API_KEY", "")
    database_url = os.getenv("DATABASE_URL", "")
    worker_port = int(os.getenv("WORKER_PORT", "9000"))
    seed_max_candidates = int(os.getenv("SEED_MAX_CANDIDATES", "5"))
    seed_delay_seconds = float(os.getenv("SEED_DELAY_SECONDS", "0.1"))

    if not database_url:
        logger.warning("DATABASE_URL is not set; database operations will fail.")
    if not google_api_key:
        logger.warning("GOOGLE_PLACES_API_KEY is not configured; seeding requires an apiKey in the request body.")
    if seed_max_candidates <= 0:
        logger.warning("SEED_MAX_CANDIDATES=%d is not positive; falling back to 5.", seed_max_candidates)
        seed_max_candidates = 5

    return Settings(
        google_api_key=google_api_key,
        database_url=database_url,
        worker_port=worker_port,
        seed_max_candidates=seed_max_candidates,
        seed_delay_seconds=max(seed_delay_seconds, 0.0),
    )

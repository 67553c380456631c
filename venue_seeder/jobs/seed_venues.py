"""Seed the venues table from Google Places, area by area."""

import argparse
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from venue_seeder.core import db
from venue_seeder.core.config import Settings, get_settings
from venue_seeder.core.db import StorageError
from venue_seeder.etl.catalog import DEFAULT_AREAS, SUPPORTED_AREAS, AreaCatalog, UnknownAreaError, get_area
from venue_seeder.etl.transform import to_candidates, to_enriched_detail, to_venue
from venue_seeder.models import Candidate, CandidateOutcome, EnrichedDetail, OutcomeStatus, RunResult, RunState
from venue_seeder.vendors import google_places
from venue_seeder.vendors.google_places import UpstreamError

logger = logging.getLogger(__name__)


class VenueSeeder:
    """Runs the search, enrich, normalize and insert pipeline sequentially.

    ``store`` needs ``venue_exists``, ``insert_venue`` and ``venue_stats``;
    the ``db`` module is the production store.
    """

    def __init__(
        self,
        api_key: str,
        store: Any = db,
        *,
        max_candidates: int = 5,
        delay_seconds: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_key = api_key
        self.store = store
        self.max_candidates = max_candidates
        self.delay_seconds = delay_seconds
        self.sleep = sleep
        self.state = RunState.IDLE
        self.area_counts: Dict[str, int] = {}
        self.errors: List[str] = []

    def search(self, catalog: AreaCatalog, query: str) -> List[Candidate]:
        results = google_places.text_search(query, catalog.location, catalog.radius, self.api_key)
        return to_candidates(results)

    def enrich(self, candidate: Candidate) -> Optional[EnrichedDetail]:
        try:
            details = google_places.place_details(candidate.external_id, self.api_key)
            return to_enriched_detail(details)
        except UpstreamError as exc:
            logger.warning("Enrichment unavailable for %s: %s", candidate.external_id, exc)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Unusable enrichment for %s: %s", candidate.external_id, exc)
        return None

    def process_candidate(self, candidate: Candidate) -> CandidateOutcome:
        """Enrich, convert and insert one candidate. StorageError propagates."""
        detail = self.enrich(candidate)
        try:
            venue = to_venue(candidate, detail)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error processing place %s: %s", candidate.raw_name, exc)
            return CandidateOutcome(OutcomeStatus.FAILED, error=f'Place "{candidate.raw_name}" failed: {exc}')

        if self.store.venue_exists(venue.name, venue.district):
            logger.info("Venue already exists: %s", venue.name)
            return CandidateOutcome(OutcomeStatus.DUPLICATE, venue=venue)

        self.store.insert_venue(venue)
        logger.info("Inserted: %s (%s) in %s", venue.name, venue.category, venue.district)
        return CandidateOutcome(OutcomeStatus.INSERTED, venue=venue)

    def seed_area(self, area: str) -> int:
        """Seed one area and return how many venues it inserted.

        The running count is kept in ``area_counts`` so an aborted run still
        reports what was inserted before the failure.
        """
        catalog = get_area(area)
        self.state = RunState.RUNNING_AREA
        logger.info("Seeding area %s (%d queries)", catalog.area, len(catalog.queries))
        self.area_counts.setdefault(catalog.area, 0)

        inserted = 0
        for query in catalog.queries:
            self.state = RunState.RUNNING_QUERY
            logger.info("Searching: %s", query)
            try:
                candidates = self.search(catalog, query)
            except StorageError:
                raise
            except Exception as exc:  # noqa: BLE001
                logger.error('Error searching for "%s": %s', query, exc)
                self.errors.append(f'Query "{query}" failed: {exc}')
                continue
            logger.info("Found %d places", len(candidates))

            for candidate in candidates[: self.max_candidates]:
                outcome = self.process_candidate(candidate)
                if outcome.status is OutcomeStatus.INSERTED:
                    inserted += 1
                    self.area_counts[catalog.area] += 1
                elif outcome.status is OutcomeStatus.FAILED:
                    self.errors.append(outcome.error)
                self.sleep(self.delay_seconds)

        self.state = RunState.RUNNING_AREA
        logger.info("Area %s done: inserted=%d", catalog.area, inserted)
        return inserted

    def run(self, areas: Iterable[str] = DEFAULT_AREAS) -> RunResult:
        self.area_counts = {}
        self.errors = []
        result = RunResult(area_counts=self.area_counts, errors=self.errors)
        try:
            for area in areas:
                try:
                    get_area(area)
                except UnknownAreaError as exc:
                    logger.warning("Skipping area: %s", exc)
                    self.errors.append(str(exc))
                    continue
                self.seed_area(area)
            result.stats = self.store.venue_stats()
        except StorageError as exc:
            self.state = RunState.FAILED
            logger.error("Seeding aborted: %s", exc)
            self.errors.append(str(exc))
            result.success = False
            return result

        self.state = RunState.COMPLETED
        result.success = True
        return result


def seed_database(
    settings: Settings,
    areas: Optional[Iterable[str]] = None,
    api_key: Optional[str] = None,
    store: Any = db,
) -> RunResult:
    """Build a seeder from ``settings`` and run it over ``areas`` (both areas by default)."""
    key = api_key or settings.google_api_key
    if not key:
        raise RuntimeError("GOOGLE_PLACES_API_KEY is required")

    seeder = VenueSeeder(
        key,
        store,
        max_candidates=settings.seed_max_candidates,
        delay_seconds=settings.seed_delay_seconds,
    )
    return seeder.run(list(areas) if areas else DEFAULT_AREAS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the venues table from Google Places")
    parser.add_argument(
        "area",
        nargs="?",
        default="all",
        choices=(*SUPPORTED_AREAS, "all"),
        help="Area to seed (default: all)",
    )
    return parser


def _log_result(result: RunResult) -> None:
    for area, count in result.area_counts.items():
        logger.info("%s venues: %d", area, count)
    logger.info("Total inserted: %d", result.total)
    if result.stats:
        logger.info("Total venues in database: %d", result.stats["total"])
        for row in result.stats["byCategory"]:
            logger.info("  category %s: %d", row["category"], row["count"])
        for row in result.stats["byDistrict"]:
            logger.info("  district %s: %d", row["district"], row["count"])
    for error in result.errors:
        logger.warning("Error: %s", error)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()
    areas = DEFAULT_AREAS if args.area == "all" else (args.area,)

    settings = get_settings()
    if not settings.google_api_key:
        logger.error("GOOGLE_PLACES_API_KEY environment variable not set")
        raise SystemExit(1)

    started = time.monotonic()
    result = seed_database(settings, areas)
    logger.info("Seeding finished in %.2fs", time.monotonic() - started)
    _log_result(result)
    if not result.success:
        raise SystemExit(1)


if __name__ == "__main__":
    main()

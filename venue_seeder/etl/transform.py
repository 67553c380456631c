"""Utilities for transforming Google Places responses into venue rows."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from venue_seeder.etl.normalize import extract_district, map_category
from venue_seeder.models import Candidate, EnrichedDetail, Venue

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 500
_PLACE_URL = "https://www.google.com/maps/place/?q=place_id:{place_id}"
_SEARCH_URL = "https://www.google.com/maps/search/?"


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def to_candidate(result: Dict[str, Any]) -> Optional[Candidate]:
    """Build a Candidate from one text-search item, or None when it lacks an id or name."""
    if not isinstance(result, dict):
        return None
    place_id = _strip_or_none(result.get("place_id"))
    name = _strip_or_none(result.get("name"))
    if not place_id or not name:
        logger.debug("Skipping result without place_id or name: %s", result)
        return None

    types = result.get("types") or []
    return Candidate(
        external_id=place_id,
        raw_name=name,
        type_tags=[str(t) for t in types] if isinstance(types, list) else [],
        rough_location=_strip_or_none(result.get("vicinity")) or _strip_or_none(result.get("formatted_address")),
        rating=_safe_float(result.get("rating")),
        raw_snapshot=result,
    )


def to_candidates(results: List[Dict[str, Any]]) -> List[Candidate]:
    candidates = []
    for result in results or []:
        candidate = to_candidate(result)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def to_enriched_detail(result: Optional[Dict[str, Any]]) -> Optional[EnrichedDetail]:
    if not result or not isinstance(result, dict):
        return None
    summary = result.get("editorial_summary")
    overview = summary.get("overview") if isinstance(summary, dict) else None
    return EnrichedDetail(
        formatted_address=_strip_or_none(result.get("formatted_address")),
        editorial_summary=_strip_or_none(overview),
        rating=_safe_float(result.get("rating")),
    )


def truncate_description(text: str, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    # str slicing counts code points, so multi-byte Japanese text is never split mid-character.
    return text[:limit]


def to_venue(candidate: Candidate, detail: Optional[EnrichedDetail] = None) -> Venue:
    name = (candidate.raw_name or "").strip()
    if not name:
        raise ValueError(f"Candidate {candidate.external_id!r} has no name")

    category = map_category(candidate.type_tags)
    address = (detail.formatted_address if detail else None) or candidate.rough_location
    district = extract_district(address)

    summary = detail.editorial_summary if detail else None
    description = summary or f"{name} - {category}"

    rating = candidate.rating
    if rating is None and detail is not None:
        rating = detail.rating

    return Venue(
        name=name,
        category=category,
        district=district,
        description=truncate_description(description),
        map_url=_PLACE_URL.format(place_id=candidate.external_id),
        rating=rating if rating is not None else 0.0,
    )


def build_search_map_url(name: str, district: str) -> str:
    """Maps search link for venues added by hand, which have no place id."""
    return _SEARCH_URL + urlencode({"api": 1, "query": f"{name} {district}"}, quote_via=quote)

"""Client utilities for the Google Places API."""

import logging
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_TIMEOUT_SECONDS = 10

DETAIL_FIELDS = "name,rating,formatted_address,types,geometry,editorial_summary,website"


class UpstreamError(RuntimeError):
    """Raised when the Places API fails or returns a non-successful status."""


def _get_json(endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    try:
        response = _SESSION.get(f"{_BASE_URL}/{endpoint}/json", params=params, timeout=_TIMEOUT_SECONDS)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("%s request failed: %s", endpoint, exc)
        raise UpstreamError(f"Google Places {endpoint} request failed: {exc}") from exc
    if not isinstance(payload, dict):
        logger.error("%s returned a non-object payload: %r", endpoint, payload)
        raise UpstreamError(f"Google Places {endpoint} returned an unexpected payload")
    return payload


def text_search(query: str, location: str, radius: int, api_key: str) -> List[Dict[str, Any]]:
    """Run one text search around ``location`` and return the raw result items.

    ``ZERO_RESULTS`` is a successful, empty search.
    """
    if not query or not query.strip():
        raise ValueError("Search query must not be empty")
    if radius <= 0:
        raise ValueError("Search radius must be positive")

    params = {"query": query.strip(), "location": location, "radius": str(radius), "key": api_key}
    payload = _get_json("textsearch", params)
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("text_search failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise UpstreamError(f"Google Places API error: {payload.get('error_message') or status}")
    return payload.get("results") or []


def place_details(place_id: str, api_key: str) -> Dict[str, Any]:
    params = {"place_id": place_id, "key": api_key, "fields": DETAIL_FIELDS}
    payload = _get_json("details", params)
    status = payload.get("status")
    if status != "OK":
        raise UpstreamError(f"Failed to get details for place {place_id}: {payload.get('error_message') or status}")
    return payload.get("result") or {}

"""Static search catalog for each supported seeding area."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


class UnknownAreaError(ValueError):
    """Raised for an area identifier outside the supported set."""


@dataclass(frozen=True)
class AreaCatalog:
    area: str
    location: str  # "lat,lng"
    radius: int
    queries: Tuple[str, ...]


_CATALOGS: Dict[str, AreaCatalog] = {
    "ginza": AreaCatalog(
        area="ginza",
        location="35.6717,139.7647",
        radius=1500,
        queries=(
            "luxury shopping Ginza Tokyo",
            "department store Ginza",
            "designer boutique Ginza",
            "jewelry store Ginza",
            "high-end restaurant Ginza",
            "sushi restaurant Ginza",
            "Ginza shopping mall",
            "Ginza art gallery",
            "Ginza Six",
            "Mitsukoshi Ginza",
            "Ginza Wako",
            "Dover Street Market Ginza",
        ),
    ),
    "osaka": AreaCatalog(
        area="osaka",
        location="34.6937,135.5023",
        radius=2000,
        queries=(
            "shopping Dotonbori Osaka",
            "restaurant Namba Osaka",
            "Shinsaibashi shopping",
            "Umeda department store",
            "takoyaki Dotonbori",
            "okonomiyaki Osaka",
            "Osaka Castle",
            "Kuromon Market Osaka",
            "nightlife Namba",
            "Osaka street food",
            "Amerikamura shopping",
            "Tennoji shopping",
        ),
    ),
}

SUPPORTED_AREAS: Tuple[str, ...] = tuple(_CATALOGS)
DEFAULT_AREAS: Tuple[str, ...] = SUPPORTED_AREAS


def get_area(area: str) -> AreaCatalog:
    key = area.strip().lower() if isinstance(area, str) else ""
    try:
        return _CATALOGS[key]
    except KeyError:
        raise UnknownAreaError(f"Unsupported area: {area!r}") from None

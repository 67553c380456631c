"""Map raw Places type tags and addresses onto the venue vocabularies.

Both mappers are pure and total: unknown or malformed input yields the
fallback value, never an exception.
"""

from typing import Any, Dict, Iterable, Optional, Tuple

DEFAULT_CATEGORY = "Venue"
DEFAULT_DISTRICT = "Central"

CATEGORY_MAP: Dict[str, str] = {
    "shopping_mall": "Shopping Mall",
    "department_store": "Department Store",
    "clothing_store": "Fashion Boutique",
    "jewelry_store": "Jewelry & Luxury",
    "restaurant": "Restaurant",
    "cafe": "Cafe",
    "bar": "Bar",
    "night_club": "Nightlife",
    "tourist_attraction": "Tourist Attraction",
    "museum": "Museum",
    "art_gallery": "Art Gallery",
    "park": "Park",
    "spa": "Spa & Wellness",
    "store": "Shopping",
}

TOKYO_DISTRICTS: Tuple[str, ...] = (
    "Ginza",
    "Shibuya",
    "Shinjuku",
    "Roppongi",
    "Harajuku",
    "Asakusa",
    "Akihabara",
    "Ikebukuro",
    "Ueno",
    "Odaiba",
    "Chuo",
    "Koto",
    "Minato",
    "Chiyoda",
)

OSAKA_DISTRICTS: Tuple[str, ...] = (
    "Namba",
    "Umeda",
    "Dotonbori",
    "Shinsaibashi",
    "Tennoji",
    "Osaka",
    "Kita",
    "Chuo",
    "Minami",
)


def map_category(type_tags: Optional[Iterable[Any]]) -> str:
    """Return the category of the first tag, in upstream order, that has a mapping."""
    for tag in type_tags or ():
        if isinstance(tag, str) and tag in CATEGORY_MAP:
            return CATEGORY_MAP[tag]
    return DEFAULT_CATEGORY


def extract_district(address: Optional[str]) -> str:
    """Return the first known district name found as a substring of ``address``.

    Tokyo names are scanned before Osaka names. Incidental matches (a district
    name inside a street name) are accepted.
    """
    if not isinstance(address, str) or not address:
        return DEFAULT_DISTRICT
    for district in TOKYO_DISTRICTS + OSAKA_DISTRICTS:
        if district in address:
            return district
    return DEFAULT_DISTRICT

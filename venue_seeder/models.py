"""Core data models shared by the venue seeding pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class Candidate:
    """Raw Places text-search hit, before enrichment and normalization."""

    external_id: str
    raw_name: str
    type_tags: List[str] = field(default_factory=list)
    rough_location: Optional[str] = None
    rating: Optional[float] = None
    raw_snapshot: Optional[Dict[str, Any]] = field(default=None, repr=False)


@dataclass(slots=True)
class EnrichedDetail:
    formatted_address: Optional[str] = None
    editorial_summary: Optional[str] = None
    rating: Optional[float] = None


@dataclass(slots=True)
class Venue:
    """Persisted venue row. (name, district) is the dedupe key."""

    name: str
    category: str
    district: str
    description: str
    map_url: str
    rating: float = 0.0

    def to_row(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "district": self.district,
            "description": self.description,
            "map_url": self.map_url,
            "rating": self.rating,
        }


class OutcomeStatus(str, Enum):
    INSERTED = "inserted"
    DUPLICATE = "duplicate"
    FAILED = "failed"


@dataclass(slots=True)
class CandidateOutcome:
    status: OutcomeStatus
    venue: Optional[Venue] = None
    error: Optional[str] = None


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING_AREA = "running_area"
    RUNNING_QUERY = "running_query"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class RunResult:
    area_counts: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    stats: Optional[Dict[str, Any]] = None
    success: bool = False

    @property
    def total(self) -> int:
        return sum(self.area_counts.values())

    def to_results(self) -> Dict[str, int]:
        """Per-area inserted counts plus the run total, as exposed over HTTP."""
        results = dict(self.area_counts)
        results["total"] = self.total
        return results

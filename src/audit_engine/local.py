"""Local competitive visibility: where a business sits in the local pack."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .checklist import as_count, as_number, is_present

logger = logging.getLogger(__name__)

# Points by 0-based pack position; anything lower gets POSITION_FLOOR
POSITION_POINTS = [50, 40, 30, 20, 20]
POSITION_FLOOR = 10
RATING_POINTS = 25
REVIEW_POINTS = 15
REVIEWS_FOR_FULL_POINTS = 100
COMPLETENESS_POINTS = 2
COMPLETENESS_FIELDS = ("name", "address", "phone", "website", "category")


@dataclass(frozen=True)
class LocalCompetitor:
    """One listing in the local pack."""
    position: int
    name: str
    rating: float | None = None
    reviews: int = 0
    address: str = ""
    phone: str | None = None
    website: str | None = None
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "name": self.name,
            "rating": self.rating,
            "reviews": self.reviews,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "category": self.category,
        }


def _rating(item: Mapping[str, Any]) -> float | None:
    rating = item.get("rating")
    if isinstance(rating, Mapping):
        rating = rating.get("value")
    number = as_number(rating)
    return number if number and number > 0 else None


def _competitor(item: Mapping[str, Any], position: int) -> LocalCompetitor:
    address = item.get("address")
    if not address and isinstance(item.get("address_lines"), list):
        address = ", ".join(str(line) for line in item["address_lines"])
    return LocalCompetitor(
        position=position,
        name=str(item.get("title") or item.get("name") or "").strip(),
        rating=_rating(item),
        reviews=as_count(item.get("reviews_count") or item.get("reviews")),
        address=str(address or "").strip(),
        phone=item.get("phone") or None,
        website=item.get("website") or None,
        category=item.get("category") or item.get("type") or None,
    )


def flatten_pack(items: Iterable[Mapping[str, Any]] | None) -> list[LocalCompetitor]:
    """Expand local-pack items (which may nest their listings) into competitors."""
    competitors: list[LocalCompetitor] = []
    for item in items or []:
        if not isinstance(item, Mapping):
            continue
        nested = item.get("items")
        listings = nested if isinstance(nested, list) else [item]
        for listing in listings:
            if isinstance(listing, Mapping):
                competitors.append(_competitor(listing, len(competitors) + 1))
    return competitors


def find_business(competitors: list[LocalCompetitor], business_name: str | None) -> int:
    """Index of the audited business in the pack, -1 when absent."""
    target = (business_name or "").strip().lower()
    if not target:
        return -1
    for index, competitor in enumerate(competitors):
        name = competitor.name.lower()
        if name and (target in name or name in target):
            return index
    logger.debug("%r not among %d local pack listings", business_name, len(competitors))
    return -1


def position_score(index: int) -> float:
    if index < 0:
        return 0
    if index < len(POSITION_POINTS):
        return POSITION_POINTS[index]
    return POSITION_FLOOR


def rating_score(business: LocalCompetitor) -> float:
    return (business.rating / 5) * RATING_POINTS if business.rating else 0.0


def review_score(business: LocalCompetitor) -> float:
    return min(business.reviews / REVIEWS_FOR_FULL_POINTS, 1) * REVIEW_POINTS


def completeness_score(business: LocalCompetitor) -> float:
    return sum(
        COMPLETENESS_POINTS for name in COMPLETENESS_FIELDS if is_present(getattr(business, name))
    )


def local_component_scores(index: int, business: LocalCompetitor | None) -> dict[str, float]:
    if business is None or index < 0:
        return {"position": 0.0, "rating": 0.0, "reviews": 0.0, "completeness": 0.0}
    return {
        "position": float(position_score(index)),
        "rating": round(rating_score(business), 2),
        "reviews": round(review_score(business), 2),
        "completeness": float(completeness_score(business)),
    }


def local_visibility_score(components: dict[str, float]) -> int:
    """Sum of the components, rounded half up and clamped to 0-100."""
    total = sum(components.values())
    return int(min(max(math.floor(total + 0.5), 0), 100))


def average_rating(competitors: Iterable[LocalCompetitor]) -> float | None:
    ratings = [c.rating for c in competitors if c.rating]
    if not ratings:
        return None
    return round(sum(ratings) / len(ratings), 2)

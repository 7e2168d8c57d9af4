"""Completeness checklist for structured profiles (e.g. a local-business listing)."""

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .models import ChecklistItem, Effort, Priority

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 250
MIN_PHOTOS = 10
MIN_RATING = 4.0
MIN_REVIEWS = 10


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, Mapping)):
        return len(value) > 0
    return True


def as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def as_count(value: Any) -> int:
    if isinstance(value, (list, tuple, set, Mapping)):
        return len(value)
    number = as_number(value)
    return int(number) if number is not None and number > 0 else 0


def text_length(value: Any) -> int:
    return len(value.strip()) if isinstance(value, str) else 0


@dataclass(frozen=True)
class ChecklistField:
    """A checklist entry: identity fields weigh most, cosmetic fields least."""
    id: str
    weight: int
    tier: Priority
    completed: Callable[[Any], bool] = is_present
    effort: Effort = Effort.EASY


CHECKLIST_FIELDS: list[ChecklistField] = [
    ChecklistField("name", 10, Priority.CRITICAL),
    ChecklistField("address", 15, Priority.CRITICAL),
    ChecklistField("phone", 10, Priority.CRITICAL),
    ChecklistField("website", 10, Priority.HIGH),
    ChecklistField("category", 12, Priority.CRITICAL),
    ChecklistField("additional_categories", 5, Priority.MEDIUM),
    ChecklistField("description", 10, Priority.HIGH,
                   completed=lambda v: text_length(v) >= MIN_DESCRIPTION_LENGTH),
    ChecklistField("hours", 8, Priority.HIGH),
    ChecklistField("photos", 8, Priority.HIGH,
                   completed=lambda v: as_count(v) >= MIN_PHOTOS, effort=Effort.MODERATE),
    ChecklistField("rating", 5, Priority.HIGH,
                   completed=lambda v: (as_number(v) or 0) >= MIN_RATING, effort=Effort.MODERATE),
    ChecklistField("review_count", 5, Priority.HIGH,
                   completed=lambda v: as_count(v) >= MIN_REVIEWS, effort=Effort.MODERATE),
    ChecklistField("attributes", 2, Priority.MEDIUM),
]

FIELDS_BY_ID = {f.id: f for f in CHECKLIST_FIELDS}


def _display_value(field_id: str, value: Any) -> Any:
    if field_id == "description":
        return text_length(value) or None
    if field_id in ("photos", "review_count", "additional_categories", "attributes"):
        return as_count(value)
    if field_id == "rating":
        return as_number(value)
    if field_id == "hours":
        return is_present(value)
    return value if is_present(value) else None


def build_checklist(observed: Mapping[str, Any] | None) -> tuple[ChecklistItem, ...]:
    """Evaluate every checklist field against the observed profile values."""
    observed = observed or {}
    return tuple(
        ChecklistItem(
            field=entry.id,
            weight=entry.weight,
            completed=bool(entry.completed(observed.get(entry.id))),
            observed_value=_display_value(entry.id, observed.get(entry.id)),
        )
        for entry in CHECKLIST_FIELDS
    )


def checklist_score(items: tuple[ChecklistItem, ...] | list[ChecklistItem]) -> int:
    """Earned weight over total weight, as a 0-100 integer (half rounds up)."""
    total = sum(item.weight for item in items)
    if total == 0:
        return 0
    earned = sum(item.weight for item in items if item.completed)
    return int(math.floor(earned / total * 100 + 0.5))


def profile_strength(score: float) -> str:
    if score >= 90:
        return "excellent"
    if score >= 70:
        return "good"
    if score >= 50:
        return "needs_improvement"
    return "poor"


# Listing payload adapter. Listing providers are inconsistent about field
# names, so each extractor tries the known spellings in order.

HOURS_FIELDS = (
    "work_hours", "work_time", "working_hours", "opening_hours", "hours", "business_hours",
    "current_opening_hours", "regular_opening_hours",
)


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key):
            return data[key]
    return None


def extract_hours(data: Mapping[str, Any]) -> Any:
    for key in HOURS_FIELDS:
        if is_present(data.get(key)) and isinstance(data[key], (Mapping, list)):
            return data[key]
    return None


def extract_rating(data: Mapping[str, Any]) -> float | None:
    rating = data.get("rating")
    if isinstance(rating, Mapping) and rating.get("value") is not None:
        return as_number(rating["value"])
    for value in (rating, data.get("rating_value"), data.get("average_rating")):
        number = as_number(value)
        if number is not None:
            return number
    return None


def extract_review_count(data: Mapping[str, Any]) -> int:
    rating = data.get("rating")
    if isinstance(rating, Mapping) and rating.get("votes_count") is not None:
        return as_count(rating["votes_count"])
    for key in ("reviews_count", "review_count", "total_reviews"):
        if isinstance(data.get(key), (int, float)) and not isinstance(data[key], bool):
            return as_count(data[key])
    if isinstance(rating, Mapping) and rating.get("reviews_count") is not None:
        return as_count(rating["reviews_count"])
    return 0


def extract_attributes(data: Mapping[str, Any]) -> Any:
    attributes = data.get("attributes")
    if isinstance(attributes, Mapping) and attributes.get("available_attributes"):
        return attributes["available_attributes"]
    if isinstance(attributes, list):
        return attributes
    if isinstance(attributes, Mapping):
        flattened = []
        for value in attributes.values():
            flattened.extend(value if isinstance(value, list) else [value])
        return flattened
    return _first(data, "business_attributes", "features")


def count_photos(data: Mapping[str, Any]) -> int:
    """Photo count, trusting ``total_photos`` over every other hint."""
    if isinstance(data.get("total_photos"), (int, float)) and not isinstance(data["total_photos"], bool):
        return as_count(data["total_photos"])

    count = 0
    for key in ("photos_count", "media_count"):
        if isinstance(data.get(key), (int, float)) and not isinstance(data[key], bool):
            count = max(count, as_count(data[key]))
    for key in ("photos", "snippet_photos"):
        if isinstance(data.get(key), list):
            count = max(count, len(data[key]))
    for link in data.get("local_business_links") or []:
        if not isinstance(link, Mapping):
            continue
        if link.get("type") == "photos" or "photo" in str(link.get("title") or "").lower():
            count = max(count, as_count(link.get("count")))
    if count == 0 and data.get("main_image"):
        count = 1
    return count


def observed_fields_from_listing(data: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Map a business-listing record to checklist observed fields."""
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise TypeError(f"Listing must be a mapping, got {type(data).__name__}")

    observed = {
        "name": _first(data, "title", "name"),
        "address": _first(data, "address", "address_str"),
        "phone": _first(data, "phone", "phone_number"),
        "website": _first(data, "url", "website", "domain"),
        "category": _first(data, "category", "main_category"),
        "additional_categories": _first(data, "additional_categories", "categories") or [],
        "description": _first(data, "description", "snippet"),
        "hours": extract_hours(data),
        "photos": count_photos(data),
        "rating": extract_rating(data),
        "review_count": extract_review_count(data),
        "attributes": extract_attributes(data),
    }
    logger.debug("Observed listing fields: %s", {k: is_present(v) for k, v in observed.items()})
    return observed

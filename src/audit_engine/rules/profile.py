"""Rule table for the profile completeness audit."""

from dataclasses import dataclass
from typing import Any

from ..checklist import (
    CHECKLIST_FIELDS,
    MIN_DESCRIPTION_LENGTH,
    MIN_PHOTOS,
    MIN_RATING,
    MIN_REVIEWS,
    ChecklistField,
    as_count,
    as_number,
    is_present,
    text_length,
)
from ..models import ChecklistItem, Effort, Priority
from .base import Rule

GOOD_DESCRIPTION_LENGTH = 500
GOOD_PHOTOS = 25
GOOD_REVIEWS = 50

FIELD_CATEGORIES = {
    "description": "content",
    "photos": "content",
    "rating": "reviews",
    "review_count": "reviews",
}


@dataclass(frozen=True)
class ProfileContext:
    observed: dict[str, Any]
    checklist: tuple[ChecklistItem, ...]
    score: int

    def completed(self, field_id: str) -> bool:
        return any(item.completed for item in self.checklist if item.field == field_id)

    def value(self, field_id: str) -> Any:
        return self.observed.get(field_id)


def _absent(field_id: str, value: Any) -> bool:
    if field_id in ("photos", "review_count"):
        return as_count(value) == 0
    if field_id == "rating":
        return as_number(value) is None
    return not is_present(value)


def _field_rule(entry: ChecklistField) -> Rule[ProfileContext]:
    return Rule(
        entry.id,
        entry.tier,
        FIELD_CATEGORIES.get(entry.id, "profile"),
        lambda c: not c.completed(entry.id) and _absent(entry.id, c.value(entry.id)),
        effort=entry.effort,
    )


def _photos(c: ProfileContext) -> int:
    return as_count(c.value("photos"))


def _reviews(c: ProfileContext) -> int:
    return as_count(c.value("review_count"))


def _description_length(c: ProfileContext) -> int:
    return text_length(c.value("description"))


METRIC_RULES: list[Rule[ProfileContext]] = [
    # Present but below the completion threshold
    Rule("short_description", Priority.MEDIUM, "content",
         lambda c: 0 < _description_length(c) < MIN_DESCRIPTION_LENGTH,
         variables=lambda c: {"length": _description_length(c), "target": MIN_DESCRIPTION_LENGTH}),
    Rule("few_photos", Priority.MEDIUM, "content",
         lambda c: 0 < _photos(c) < MIN_PHOTOS,
         effort=Effort.MODERATE,
         variables=lambda c: {"count": _photos(c), "target": MIN_PHOTOS}),
    Rule("low_rating", Priority.HIGH, "reviews",
         lambda c: as_number(c.value("rating")) is not None and as_number(c.value("rating")) < MIN_RATING,
         effort=Effort.MODERATE,
         variables=lambda c: {"rating": as_number(c.value("rating"))}),
    Rule("low_review_count", Priority.HIGH, "reviews",
         lambda c: 0 < _reviews(c) < MIN_REVIEWS,
         effort=Effort.MODERATE,
         variables=lambda c: {"count": _reviews(c), "target": GOOD_REVIEWS}),

    # Complete but worth improving
    Rule("longer_description", Priority.MEDIUM, "content",
         lambda c: MIN_DESCRIPTION_LENGTH <= _description_length(c) < GOOD_DESCRIPTION_LENGTH,
         variables=lambda c: {"length": _description_length(c), "target": GOOD_DESCRIPTION_LENGTH}),
    Rule("more_photos", Priority.MEDIUM, "content",
         lambda c: MIN_PHOTOS <= _photos(c) < GOOD_PHOTOS,
         effort=Effort.MODERATE,
         variables=lambda c: {"count": _photos(c), "target": GOOD_PHOTOS}),
    Rule("more_reviews", Priority.MEDIUM, "reviews",
         lambda c: MIN_REVIEWS <= _reviews(c) < GOOD_REVIEWS,
         effort=Effort.MODERATE,
         variables=lambda c: {"count": _reviews(c), "target": max(100, _reviews(c) * 2)}),

    # Summary
    Rule("profile_incomplete", Priority.LOW, "profile",
         lambda c: 70 <= c.score < 100,
         variables=lambda c: {"score": c.score}),
    Rule("excellent_profile", Priority.LOW, "success",
         lambda c: c.score == 100,
         variables=lambda c: {"score": c.score}),
]

PROFILE_RULES: list[Rule[ProfileContext]] = [_field_rule(entry) for entry in CHECKLIST_FIELDS] + METRIC_RULES

NOT_FOUND_RULE: Rule[ProfileContext] = Rule(
    "not_found", Priority.CRITICAL, "setup", lambda c: True, effort=Effort.MODERATE,
)

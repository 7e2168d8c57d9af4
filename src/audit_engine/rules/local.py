"""Rule table for the local visibility audit."""

from dataclasses import dataclass

from ..local import LocalCompetitor
from ..models import BenchmarkStats, Effort, Priority
from .base import Rule

TOP_POSITIONS = 3
MIN_RATING = 4.0
FEW_REVIEWS = 20


@dataclass(frozen=True)
class LocalContext:
    business: LocalCompetitor | None
    index: int
    competitors: tuple[LocalCompetitor, ...]
    benchmark: BenchmarkStats | None
    competitor_rating: float | None

    @property
    def found(self) -> bool:
        return self.business is not None

    @property
    def top_rivals(self) -> tuple[LocalCompetitor, ...]:
        """Other listings among the first TOP_POSITIONS of the pack."""
        return tuple(c for c in self.competitors[:TOP_POSITIONS] if c != self.business)


def _found(predicate):
    return lambda c: c.found and predicate(c)


LOCAL_RULES: list[Rule[LocalContext]] = [
    Rule("not_in_local_pack", Priority.HIGH, "visibility",
         lambda c: not c.found, effort=Effort.MODERATE),
    Rule("low_position", Priority.HIGH, "visibility",
         _found(lambda c: c.index >= TOP_POSITIONS), effort=Effort.MODERATE,
         variables=lambda c: {"position": c.index + 1}),
    Rule("competitors_better_rating", Priority.HIGH, "reviews",
         _found(lambda c: c.business.rating is not None and c.competitor_rating is not None
                and c.business.rating < c.competitor_rating),
         effort=Effort.MODERATE,
         variables=lambda c: {"rating": c.business.rating, "average": c.competitor_rating}),
    Rule("low_rating", Priority.HIGH, "reviews",
         _found(lambda c: c.business.rating is not None and c.business.rating < MIN_RATING),
         effort=Effort.MODERATE,
         variables=lambda c: {"rating": c.business.rating}),
    Rule("no_reviews", Priority.HIGH, "reviews",
         _found(lambda c: c.business.reviews == 0), effort=Effort.MODERATE),
    Rule("few_reviews", Priority.MEDIUM, "reviews",
         _found(lambda c: 0 < c.business.reviews < FEW_REVIEWS), effort=Effort.MODERATE,
         variables=lambda c: {"count": c.business.reviews}),
    Rule("competitors_more_reviews", Priority.MEDIUM, "reviews",
         _found(lambda c: c.benchmark is not None and c.business.reviews < c.benchmark.mean_size),
         effort=Effort.MODERATE,
         variables=lambda c: {"count": c.business.reviews, "average": int(round(c.benchmark.mean_size))}),
    Rule("missing_phone", Priority.HIGH, "profile",
         _found(lambda c: not c.business.phone)),
    Rule("missing_address", Priority.MEDIUM, "profile",
         _found(lambda c: not c.business.address)),
    Rule("missing_website", Priority.MEDIUM, "profile",
         _found(lambda c: not c.business.website)),
    Rule("missing_category", Priority.MEDIUM, "profile",
         _found(lambda c: not c.business.category)),
    Rule("competitors_have_category", Priority.LOW, "profile",
         _found(lambda c: not c.business.category and any(r.category for r in c.top_rivals)),
         variables=lambda c: {"count": sum(1 for r in c.top_rivals if r.category)}),
    Rule("category_mismatch", Priority.MEDIUM, "profile",
         _found(lambda c: c.benchmark is not None and bool(c.benchmark.dominant_category)
                and bool(c.business.category)
                and c.business.category.strip().lower() != c.benchmark.dominant_category.strip().lower()),
         variables=lambda c: {"category": c.benchmark.dominant_category, "own": c.business.category}),
]

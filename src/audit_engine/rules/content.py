"""Rule table for the content audit."""

from dataclasses import dataclass

from ..models import BenchmarkStats, Effort, KeywordAnalysis, Priority, Signals
from ..scoring import SLOW_LOAD_SECONDS, TITLE_MATCH_EXPECTED
from .base import Rule

TITLE_LENGTH = (30, 60)
DESCRIPTION_LENGTH = (120, 160)
NEAR_EMPTY_WORDS = 100
THIN_WORDS = 300
DENSITY_TOO_LOW = 1.0
DENSITY_TOO_HIGH = 3.0


@dataclass(frozen=True)
class ContentContext:
    signals: Signals
    keyword: KeywordAnalysis | None
    benchmark: BenchmarkStats | None
    length_ratio: float | None

    @property
    def title_expected(self) -> bool:
        """Most references carry the phrase in their title."""
        return self.benchmark is not None and self.benchmark.title_match_ratio >= TITLE_MATCH_EXPECTED


def _outside(value: int, bounds: tuple[int, int]) -> bool:
    return not bounds[0] <= value <= bounds[1]


def _kw(ctx: ContentContext) -> dict:
    return {"keyword": ctx.keyword.keyword if ctx.keyword else ""}


def _missing(attr: str):
    return lambda c: c.keyword is not None and not getattr(c.keyword, attr)


def _benchmark_vars(ctx: ContentContext) -> dict:
    return {
        "count": ctx.benchmark.count,
        "words": ctx.signals.word_count,
        "median": int(round(ctx.benchmark.median_size)),
        "category": ctx.benchmark.dominant_category or "",
        "keyword": ctx.keyword.keyword if ctx.keyword else "",
    }


CONTENT_RULES: list[Rule[ContentContext]] = [
    # Structure
    Rule("title_missing", Priority.CRITICAL, "meta",
         lambda c: not c.signals.title),
    Rule("title_length", Priority.MEDIUM, "meta",
         lambda c: bool(c.signals.title) and _outside(c.signals.title_length, TITLE_LENGTH),
         variables=lambda c: {"length": c.signals.title_length}),
    Rule("description_missing", Priority.CRITICAL, "meta",
         lambda c: not c.signals.description),
    Rule("description_length", Priority.MEDIUM, "meta",
         lambda c: bool(c.signals.description)
         and _outside(c.signals.description_length, DESCRIPTION_LENGTH),
         variables=lambda c: {"length": c.signals.description_length}),
    Rule("h1_missing", Priority.CRITICAL, "structure",
         lambda c: c.signals.h1_count == 0),
    Rule("multiple_h1", Priority.MEDIUM, "structure",
         lambda c: c.signals.h1_count > 1,
         variables=lambda c: {"count": c.signals.h1_count}),

    # Technical hygiene
    Rule("broken_links", Priority.CRITICAL, "technical",
         lambda c: c.signals.broken_links > 0,
         variables=lambda c: {"count": c.signals.broken_links}),
    Rule("canonical_missing", Priority.HIGH, "technical",
         lambda c: not c.signals.has_canonical),
    Rule("slow_load", Priority.HIGH, "technical",
         lambda c: c.signals.load_time is not None and c.signals.load_time > SLOW_LOAD_SECONDS,
         effort=Effort.MODERATE,
         variables=lambda c: {"seconds": round(c.signals.load_time, 1)}),
    Rule("images_missing_alt", Priority.HIGH, "technical",
         lambda c: c.signals.images_missing_alt > 0,
         variables=lambda c: {"count": c.signals.images_missing_alt}),

    # Content depth
    Rule("near_empty_content", Priority.CRITICAL, "content",
         lambda c: c.signals.word_count < NEAR_EMPTY_WORDS,
         effort=Effort.MODERATE,
         variables=lambda c: {"words": c.signals.word_count}),
    Rule("thin_content", Priority.MEDIUM, "content",
         lambda c: NEAR_EMPTY_WORDS <= c.signals.word_count < THIN_WORDS,
         effort=Effort.MODERATE,
         variables=lambda c: {"words": c.signals.word_count}),
    Rule("below_benchmark", Priority.HIGH, "competitors",
         lambda c: c.length_ratio is not None and c.length_ratio < 0.7,
         effort=Effort.MODERATE, variables=_benchmark_vars),
    Rule("shorter_than_benchmark", Priority.MEDIUM, "competitors",
         lambda c: c.length_ratio is not None and 0.7 <= c.length_ratio < 1,
         effort=Effort.MODERATE, variables=_benchmark_vars),
    Rule("category_mismatch", Priority.MEDIUM, "competitors",
         lambda c: c.benchmark is not None and bool(c.benchmark.dominant_category)
         and bool(c.signals.category)
         and c.signals.category.strip().lower() != c.benchmark.dominant_category.strip().lower(),
         effort=Effort.MODERATE,
         variables=lambda c: {**_benchmark_vars(c), "own": c.signals.category}),

    # Keyword placement
    Rule("keyword_title_expected", Priority.CRITICAL, "keywords",
         lambda c: _missing("in_title")(c) and c.title_expected,
         variables=lambda c: {**_kw(c), "share": int(round(c.benchmark.title_match_ratio * 100))}),
    Rule("keyword_title", Priority.HIGH, "keywords",
         lambda c: _missing("in_title")(c) and not c.title_expected,
         variables=_kw),
    Rule("keyword_description", Priority.HIGH, "keywords",
         _missing("in_description"), variables=_kw),
    Rule("keyword_h1", Priority.HIGH, "keywords",
         _missing("in_primary_heading"), variables=_kw),
    Rule("keyword_body", Priority.CRITICAL, "keywords",
         _missing("in_body"), effort=Effort.MODERATE, variables=_kw),
    Rule("keyword_first_words", Priority.HIGH, "keywords",
         _missing("in_first_words"), variables=_kw),
    Rule("keyword_url", Priority.HIGH, "keywords",
         lambda c: _missing("in_url")(c) and bool(c.signals.url),
         effort=Effort.MODERATE, variables=_kw),

    # Density
    Rule("density_low", Priority.HIGH, "keywords",
         lambda c: c.keyword is not None and c.keyword.in_body
         and c.keyword.density < DENSITY_TOO_LOW,
         variables=lambda c: {**_kw(c), "density": c.keyword.density,
                              "min": c.keyword.recommended_min, "max": c.keyword.recommended_max}),
    Rule("density_high", Priority.MEDIUM, "keywords",
         lambda c: c.keyword is not None and c.keyword.density > DENSITY_TOO_HIGH,
         variables=lambda c: {**_kw(c), "density": c.keyword.density,
                              "min": c.keyword.recommended_min, "max": c.keyword.recommended_max}),

    # Informational
    Rule("competitors_reviewed", Priority.LOW, "competitors",
         lambda c: c.benchmark is not None and c.benchmark.count > 0,
         variables=_benchmark_vars),
    Rule("no_significant_issues", Priority.LOW, "success",
         lambda c: c.keyword is not None,
         variables=_kw, when_clear=True),
]

# Fired alone when the provider returned nothing usable
NO_DATA_RULE: Rule[ContentContext] = Rule(
    "no_data", Priority.CRITICAL, "setup", lambda c: True, effort=Effort.MODERATE,
)

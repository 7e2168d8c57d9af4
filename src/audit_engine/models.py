"""Data models for audit inputs and results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, TypedDict


class Priority(Enum):
    """Priority tier of a recommendation, the sole ordering key."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @property
    def impact(self) -> "Impact":
        if self in (Priority.CRITICAL, Priority.HIGH):
            return Impact.HIGH
        if self is Priority.MEDIUM:
            return Impact.MEDIUM
        return Impact.LOW


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Impact(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Effort(Enum):
    EASY = "easy"
    MODERATE = "moderate"


class DensityBucket(Enum):
    """How healthy a keyword density is."""
    POOR = "poor"
    NEEDS_IMPROVEMENT = "needs_improvement"
    GOOD = "good"


class RawSignals(TypedDict, total=False):
    """Provider measurements for one audited page, any key may be missing."""
    url: str
    title: Optional[str]
    description: Optional[str]
    headings: dict[str, Any]  # "h1".."h3" -> list of texts or a count
    images: int
    images_missing_alt: int
    internal_links: int
    external_links: int
    broken_links: int
    load_time: Optional[float]  # seconds
    word_count: int
    canonical: Any
    body_text: str
    technical_score: Optional[float]
    category: Optional[str]


@dataclass(frozen=True)
class Signals:
    """Canonical measurements of the audited item."""
    url: str = ""
    title: str = ""
    description: str = ""
    primary_headings: tuple[str, ...] = ()
    secondary_headings: tuple[str, ...] = ()
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    image_count: int = 0
    images_missing_alt: int = 0
    internal_links: int = 0
    external_links: int = 0
    broken_links: int = 0
    load_time: Optional[float] = None
    word_count: int = 0
    has_canonical: bool = False
    body_text: str = ""
    technical_score: Optional[float] = None
    category: Optional[str] = None

    @property
    def title_length(self) -> int:
        return len(self.title)

    @property
    def description_length(self) -> int:
        return len(self.description)

    @property
    def is_empty(self) -> bool:
        """True when the provider gave us nothing worth scoring."""
        return (
            not self.title
            and not self.description
            and self.h1_count + self.h2_count + self.h3_count == 0
            and self.word_count == 0
        )


@dataclass(frozen=True)
class KeywordAnalysis:
    """Placement and frequency of the target phrase."""
    keyword: str
    phrase: str  # normalized form used for matching
    in_title: bool
    in_description: bool
    in_primary_heading: bool
    in_secondary_heading: bool
    in_body: bool
    in_url: bool
    in_first_words: bool
    occurrences: int
    density: float
    density_bucket: DensityBucket
    recommended_min: int
    recommended_max: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "in_title": self.in_title,
            "in_description": self.in_description,
            "in_primary_heading": self.in_primary_heading,
            "in_secondary_heading": self.in_secondary_heading,
            "in_body": self.in_body,
            "in_url": self.in_url,
            "in_first_words": self.in_first_words,
            "occurrences": self.occurrences,
            "density": self.density,
            "density_bucket": self.density_bucket.value,
            "recommended_range": [self.recommended_min, self.recommended_max],
        }


@dataclass(frozen=True)
class ReferenceItem:
    """One competing item in the benchmark set."""
    size: float = 0
    title_match: bool = False
    category: Optional[str] = None


@dataclass(frozen=True)
class BenchmarkStats:
    """Summary statistics over the reference set."""
    count: int
    median_size: float
    mean_size: float
    title_match_ratio: float
    dominant_category: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "median_size": self.median_size,
            "mean_size": self.mean_size,
            "title_match_ratio": self.title_match_ratio,
            "dominant_category": self.dominant_category,
        }


@dataclass(frozen=True)
class Recommendation:
    """A prioritized, rendered issue/action pair."""
    key: str
    priority: Priority
    category: str
    issue: str
    action: str
    impact: Impact
    effort: Effort

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "priority": self.priority.value,
            "category": self.category,
            "issue": self.issue,
            "action": self.action,
            "impact": self.impact.value,
            "effort": self.effort.value,
        }


@dataclass(frozen=True)
class ChecklistItem:
    """A weighted completeness check of a structured profile."""
    field: str
    weight: int
    completed: bool
    observed_value: Any = None

    def __post_init__(self):
        if isinstance(self.weight, bool) or not isinstance(self.weight, int) or self.weight <= 0:
            raise ValueError(f"Checklist weight must be a positive integer, got {self.weight!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "weight": self.weight,
            "completed": self.completed,
            "value": self.observed_value,
        }


@dataclass(frozen=True)
class AuditResult:
    """Complete audit result, the sole output of the engine."""
    score: float
    component_scores: dict[str, float] = field(default_factory=dict)
    keyword_analysis: Optional[KeywordAnalysis] = None
    recommendations: tuple[Recommendation, ...] = ()
    benchmark_summary: Optional[BenchmarkStats] = None
    variant: str = "content"
    checklist: tuple[ChecklistItem, ...] = ()
    strength: Optional[str] = None
    error: Optional[str] = None

    @property
    def quick_wins(self) -> list[Recommendation]:
        """Critical and high items that are easy to fix."""
        return [
            r for r in self.recommendations
            if r.priority.rank <= Priority.HIGH.rank and r.effort is Effort.EASY
        ]

    def to_dict(self) -> dict[str, Any]:
        output: dict[str, Any] = {
            "variant": self.variant,
            "score": self.score,
            "component_scores": dict(self.component_scores),
            "keyword_analysis": self.keyword_analysis.to_dict() if self.keyword_analysis else None,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "benchmark_summary": self.benchmark_summary.to_dict() if self.benchmark_summary else None,
        }
        if self.checklist:
            output["checklist"] = [item.to_dict() for item in self.checklist]
        if self.strength is not None:
            output["strength"] = self.strength
        if self.error is not None:
            output["error"] = self.error
        return output

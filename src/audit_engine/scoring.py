"""Component scores and weighted total for the content audit.

The total is a weighted sum of three sub-scores:

- competitiveness (45%): size against the benchmark median, keyword
  placement, heading structure and category alignment
- content quality (35%): absolute size, heading richness, keyword placement
- technical health (20%): provider technical score minus hygiene penalties

Thin content relative to the benchmark caps the total.
"""

import logging

from .models import BenchmarkStats, KeywordAnalysis, Signals

logger = logging.getLogger(__name__)

COMPONENT_WEIGHTS = {
    "competitiveness": 0.45,
    "content_quality": 0.35,
    "technical_health": 0.20,
}

COMPETITIVENESS_PARTS = {
    "length": 0.50,
    "keyword": 0.25,
    "headings": 0.15,
    "category": 0.10,
}

CONTENT_QUALITY_PARTS = {
    "length": 0.40,
    "headings": 0.30,
    "keyword": 0.30,
}

# (minimum words, score), checked top-down
LENGTH_TIERS = [(2000, 95), (1500, 85), (800, 70), (400, 50)]
LENGTH_FLOOR = 30

# (minimum h2 count, score), checked top-down
HEADING_TIERS = [(6, 95), (3, 80), (1, 60)]
HEADING_FLOOR = 30

KEYWORD_POINTS = {
    "in_title": 30,
    "in_primary_heading": 25,
    "in_description": 15,
    "in_body": 20,
    "in_first_words": 10,
}
NO_KEYWORD_POINTS = 50

# Share of references with the phrase in their title above which a missing
# title mention is punished harder
TITLE_MATCH_EXPECTED = 0.7

CATEGORY_MATCH = 100
CATEGORY_MISMATCH = 60
CATEGORY_UNKNOWN = 70

TECHNICAL_BASELINE = 70
BROKEN_LINKS_PENALTY = 15
NO_CANONICAL_PENALTY = 10
SLOW_LOAD_PENALTY = 10
SLOW_LOAD_SECONDS = 5.0

# (ratio below, cap on total)
LENGTH_CAPS = [(0.5, 55.0), (0.7, 70.0)]


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def length_ratio(signals: Signals, benchmark: BenchmarkStats | None) -> float | None:
    """Content length over the benchmark median, None without a usable median."""
    if benchmark is None or benchmark.median_size <= 0:
        return None
    return signals.word_count / benchmark.median_size


def length_vs_benchmark_score(ratio: float) -> float:
    if ratio >= 1:
        return 100.0
    if ratio >= 0.7:
        return 60 + (ratio - 0.7) / 0.3 * 40
    return 10 + max(ratio, 0.0) / 0.7 * 50


def competitive_keyword_score(
    keyword: KeywordAnalysis | None,
    benchmark: BenchmarkStats | None,
) -> float:
    expected = benchmark is not None and benchmark.title_match_ratio >= TITLE_MATCH_EXPECTED
    if keyword is not None and keyword.in_title:
        score = 100
    else:
        score = 25 if expected else 60
    if keyword is not None:
        if keyword.in_primary_heading:
            score += 10
        if keyword.in_first_words:
            score += 10
    return min(score, 100)


def heading_structure_score(signals: Signals) -> float:
    if signals.h2_count >= 4 and signals.h3_count >= 2:
        return 100
    if signals.h2_count >= 2:
        return 70
    if signals.h2_count > 0:
        return 50
    return 20


def category_alignment_score(signals: Signals, benchmark: BenchmarkStats | None) -> float:
    if benchmark is None or not benchmark.dominant_category or not signals.category:
        return CATEGORY_UNKNOWN
    if signals.category.strip().lower() == benchmark.dominant_category.strip().lower():
        return CATEGORY_MATCH
    return CATEGORY_MISMATCH


def competitiveness_score(
    signals: Signals,
    keyword: KeywordAnalysis | None,
    benchmark: BenchmarkStats | None,
) -> float:
    """Weighted competitive score; drops the length part when unbenchmarked."""
    parts = {
        "keyword": competitive_keyword_score(keyword, benchmark),
        "headings": heading_structure_score(signals),
        "category": category_alignment_score(signals, benchmark),
    }
    ratio = length_ratio(signals, benchmark)
    if ratio is not None:
        parts["length"] = length_vs_benchmark_score(ratio)

    total_weight = sum(COMPETITIVENESS_PARTS[name] for name in parts)
    weighted = sum(COMPETITIVENESS_PARTS[name] * value for name, value in parts.items())
    return clamp(weighted / total_weight)


def _tier(value: int, tiers: list[tuple[int, int]], floor: int) -> int:
    for minimum, score in tiers:
        if value >= minimum:
            return score
    return floor


def keyword_placement_points(keyword: KeywordAnalysis | None) -> float:
    """Placement points out of 100, neutral when no phrase was supplied."""
    if keyword is None:
        return NO_KEYWORD_POINTS
    points = sum(p for attr, p in KEYWORD_POINTS.items() if getattr(keyword, attr))
    return min(points, 100)


def content_quality_score(signals: Signals, keyword: KeywordAnalysis | None) -> float:
    parts = {
        "length": _tier(signals.word_count, LENGTH_TIERS, LENGTH_FLOOR),
        "headings": _tier(signals.h2_count, HEADING_TIERS, HEADING_FLOOR),
        "keyword": keyword_placement_points(keyword),
    }
    return clamp(sum(CONTENT_QUALITY_PARTS[name] * value for name, value in parts.items()))


def technical_health_score(signals: Signals) -> float:
    score = signals.technical_score if signals.technical_score is not None else TECHNICAL_BASELINE
    if signals.broken_links > 0:
        score -= BROKEN_LINKS_PENALTY
    if not signals.has_canonical:
        score -= NO_CANONICAL_PENALTY
    if signals.load_time is not None and signals.load_time > SLOW_LOAD_SECONDS:
        score -= SLOW_LOAD_PENALTY
    return clamp(score)


def component_scores(
    signals: Signals,
    keyword: KeywordAnalysis | None,
    benchmark: BenchmarkStats | None,
) -> dict[str, float]:
    return {
        "competitiveness": round(competitiveness_score(signals, keyword, benchmark), 2),
        "content_quality": round(content_quality_score(signals, keyword), 2),
        "technical_health": round(technical_health_score(signals), 2),
    }


def combine_scores(components: dict[str, float], ratio: float | None = None) -> float:
    """Weighted total, capped when content is thin against the benchmark."""
    total = sum(COMPONENT_WEIGHTS[name] * components.get(name, 0.0) for name in COMPONENT_WEIGHTS)
    if ratio is not None:
        for below, cap in LENGTH_CAPS:
            if ratio < below:
                logger.debug("Length ratio %.2f caps total at %s", ratio, cap)
                total = min(total, cap)
                break
    return round(clamp(total), 2)

"""Audit entry points.

Each call is a pure computation over already-fetched inputs: no I/O, no
state kept between calls, safe to run from many threads at once. Missing
or malformed inputs degrade the result instead of raising.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .benchmark import aggregate_benchmark
from .checklist import build_checklist, checklist_score, profile_strength
from .config import DEFAULT_LOCALE
from .keywords import analyze_keyword
from .local import (
    average_rating,
    find_business,
    flatten_pack,
    local_component_scores,
    local_visibility_score,
)
from .models import AuditResult, RawSignals, ReferenceItem, Signals
from .phrases import PhraseLookup, default_catalog
from .rules import (
    CONTENT_RULES,
    LOCAL_RULES,
    NO_DATA_RULE,
    NOT_FOUND_RULE,
    PROFILE_RULES,
    ContentContext,
    LocalContext,
    ProfileContext,
    evaluate_rules,
    sort_recommendations,
)
from .scoring import COMPONENT_WEIGHTS, combine_scores, component_scores, length_ratio
from .signals import normalize_signals

logger = logging.getLogger(__name__)


def run_audit(
    signals: RawSignals | Mapping[str, Any] | Signals | None,
    keyword: str | None = None,
    benchmark_set: Iterable[ReferenceItem | Mapping[str, Any]] | None = None,
    locale: str = DEFAULT_LOCALE,
    phrases: PhraseLookup | None = None,
) -> AuditResult:
    """Score a page and build its recommendation list.

    Args:
        signals: Provider measurements (or already-normalized Signals); None when
            the provider returned nothing
        keyword: Optional target phrase
        benchmark_set: Optional competing items to score against
        locale: Locale of the rendered recommendation text
        phrases: Phrase lookup, defaults to the bundled catalogs

    Returns:
        AuditResult with a 0-100 score and recommendations sorted by priority
    """
    phrases = phrases or default_catalog()
    normalized = signals if isinstance(signals, Signals) else normalize_signals(signals)
    keyword_analysis = analyze_keyword(keyword, normalized)
    benchmark = aggregate_benchmark(benchmark_set)
    ratio = length_ratio(normalized, benchmark)
    context = ContentContext(normalized, keyword_analysis, benchmark, ratio)

    if normalized.is_empty:
        logger.debug("Empty signals, returning no-data result")
        recommendations = evaluate_rules([NO_DATA_RULE], context, "content", phrases, locale)
        return AuditResult(
            score=0.0,
            component_scores={name: 0.0 for name in COMPONENT_WEIGHTS},
            keyword_analysis=keyword_analysis,
            recommendations=sort_recommendations(recommendations),
            benchmark_summary=benchmark,
        )

    components = component_scores(normalized, keyword_analysis, benchmark)
    total = combine_scores(components, ratio)
    logger.debug("Content audit components=%s total=%s", components, total)

    recommendations = evaluate_rules(CONTENT_RULES, context, "content", phrases, locale)
    return AuditResult(
        score=total,
        component_scores=components,
        keyword_analysis=keyword_analysis,
        recommendations=sort_recommendations(recommendations),
        benchmark_summary=benchmark,
    )


def run_checklist_audit(
    observed_fields: Mapping[str, Any] | None,
    locale: str = DEFAULT_LOCALE,
    phrases: PhraseLookup | None = None,
) -> AuditResult:
    """Score a structured profile by weighted field completeness."""
    phrases = phrases or default_catalog()
    observed = dict(observed_fields or {})
    checklist = build_checklist(observed)
    rules = PROFILE_RULES

    if not observed:
        score = 0
        rules = [NOT_FOUND_RULE]
    else:
        score = checklist_score(checklist)

    context = ProfileContext(observed, checklist, score)
    recommendations = evaluate_rules(rules, context, "profile", phrases, locale)
    return AuditResult(
        score=float(score),
        component_scores={"completeness": float(score)},
        recommendations=sort_recommendations(recommendations),
        variant="checklist",
        checklist=checklist,
        strength=profile_strength(score),
    )


def run_local_audit(
    business_name: str | None,
    pack_items: Iterable[Mapping[str, Any]] | None,
    locale: str = DEFAULT_LOCALE,
    phrases: PhraseLookup | None = None,
) -> AuditResult:
    """Score how visible a business is in the local pack for a query."""
    phrases = phrases or default_catalog()
    competitors = flatten_pack(pack_items)
    index = find_business(competitors, business_name)
    business = competitors[index] if index >= 0 else None
    others = [c for i, c in enumerate(competitors) if i != index]

    benchmark = aggregate_benchmark(
        [ReferenceItem(size=c.reviews, category=c.category) for c in others]
    )
    components = local_component_scores(index, business)
    score = local_visibility_score(components) if business is not None else 0

    context = LocalContext(
        business=business,
        index=index,
        competitors=tuple(competitors),
        benchmark=benchmark,
        competitor_rating=average_rating(others),
    )
    recommendations = evaluate_rules(LOCAL_RULES, context, "local", phrases, locale)
    return AuditResult(
        score=float(score),
        component_scores=components,
        recommendations=sort_recommendations(recommendations),
        benchmark_summary=benchmark,
        variant="local",
    )

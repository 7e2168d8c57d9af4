"""Reduce a competitive reference set to summary statistics."""

import logging
import math
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from .models import BenchmarkStats, ReferenceItem

logger = logging.getLogger(__name__)


def median(values: list[float]) -> float:
    """Sorted-list midpoint; mean of the two middle values for even lengths."""
    if not values:
        raise ValueError("median() of an empty list")
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return float(ordered[mid])
    return (ordered[mid - 1] + ordered[mid]) / 2


def to_reference_item(item: ReferenceItem | Mapping[str, Any]) -> ReferenceItem:
    """Accept a ReferenceItem or a plain mapping with the same keys."""
    if isinstance(item, ReferenceItem):
        size, title_match, category = item.size, item.title_match, item.category
    elif isinstance(item, Mapping):
        size = item.get("size")
        title_match = item.get("title_match", False)
        category = item.get("category")
    else:
        raise TypeError(f"Reference item must be a mapping, got {type(item).__name__}")

    try:
        size = float(size) if size is not None else 0.0
    except (TypeError, ValueError):
        size = 0.0
    if not math.isfinite(size) or size < 0:
        size = 0.0

    category = str(category).strip() if category else None
    return ReferenceItem(size=size, title_match=bool(title_match), category=category or None)


def dominant_category(categories: Iterable[str | None]) -> str | None:
    """Most frequent label; ties go to the label seen first."""
    counts = Counter(c for c in categories if c)
    if not counts:
        return None
    # Counter preserves insertion order, so max() keeps the first-seen label on ties
    return max(counts, key=lambda label: counts[label])


def aggregate_benchmark(
    items: Iterable[ReferenceItem | Mapping[str, Any]] | None,
) -> BenchmarkStats | None:
    """Summarize the reference set, or None when there is nothing to compare against."""
    if items is None:
        return None
    references = [to_reference_item(item) for item in items]
    if not references:
        logger.debug("Empty reference set, audit is unbenchmarked")
        return None

    sizes = [ref.size for ref in references]
    matches = sum(1 for ref in references if ref.title_match)

    return BenchmarkStats(
        count=len(references),
        median_size=median(sizes),
        mean_size=round(sum(sizes) / len(sizes), 2),
        title_match_ratio=round(matches / len(references), 4),
        dominant_category=dominant_category(ref.category for ref in references),
    )

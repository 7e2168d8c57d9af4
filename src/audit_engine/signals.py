"""Turn provider measurements into canonical Signals.

Normalization never fails on missing or malformed data: every absent
field gets an explicit default (empty text, zero count, unknown timing),
counts are clamped to be non-negative and non-finite numbers are dropped.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from .models import RawSignals, Signals
from .text import count_words, plain_text

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = next((v for v in value if v), "")
    return str(value).strip()


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _count(value: Any) -> int:
    """Coerce a provider count to a non-negative int."""
    if isinstance(value, Mapping):
        value = value.get("count")
    elif isinstance(value, (list, tuple, set)):
        return len(value)
    number = _number(value)
    if number is None or number < 0:
        return 0
    return int(number)


def _seconds(value: Any) -> float | None:
    number = _number(value)
    if number is None:
        return None
    return max(number, 0.0)


def _score(value: Any) -> float | None:
    number = _number(value)
    if number is None:
        return None
    return min(max(number, 0.0), 100.0)


def _headings(raw: Any, level: str) -> tuple[tuple[str, ...], int]:
    if not isinstance(raw, Mapping):
        return (), 0
    value = raw.get(level)
    if isinstance(value, (list, tuple)):
        texts = tuple(_text(v) for v in value if _text(v))
        return texts, len(value)
    if isinstance(value, str):
        return ((value.strip(),), 1) if value.strip() else ((), 0)
    return (), _count(value)


def _canonical(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def normalize_signals(raw: RawSignals | Mapping[str, Any] | None) -> Signals:
    """Build a Signals record from a (possibly partial or absent) payload."""
    if raw is None:
        logger.debug("No signal payload, using empty signals")
        return Signals()
    if not isinstance(raw, Mapping):
        raise TypeError(f"Signal payload must be a mapping, got {type(raw).__name__}")

    headings = raw.get("headings") or {}
    h1_texts, h1_count = _headings(headings, "h1")
    h2_texts, h2_count = _headings(headings, "h2")
    _, h3_count = _headings(headings, "h3")

    body_text = plain_text(_text(raw.get("body_text")))
    word_count = _count(raw.get("word_count"))
    if not word_count and body_text:
        word_count = count_words(body_text)

    image_count = _count(raw.get("images"))
    # A page cannot have more images without alt text than images
    missing_alt = _count(raw.get("images_missing_alt"))
    if image_count:
        missing_alt = min(missing_alt, image_count)

    category = _text(raw.get("category")) or None

    return Signals(
        url=_text(raw.get("url")),
        title=_text(raw.get("title")),
        description=_text(raw.get("description")),
        primary_headings=h1_texts,
        secondary_headings=h2_texts,
        h1_count=h1_count,
        h2_count=h2_count,
        h3_count=h3_count,
        image_count=max(image_count, missing_alt),
        images_missing_alt=missing_alt,
        internal_links=_count(raw.get("internal_links")),
        external_links=_count(raw.get("external_links")),
        broken_links=_count(raw.get("broken_links")),
        load_time=_seconds(raw.get("load_time")),
        word_count=word_count,
        has_canonical=_canonical(raw.get("canonical")),
        body_text=body_text,
        technical_score=_score(raw.get("technical_score")),
        category=category,
    )


def _dig(data: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def raw_signals_from_onpage(item: Mapping[str, Any] | None) -> RawSignals | None:
    """Map an on-page crawler item into RawSignals.

    Accepts the item shape of instant on-page crawls: page facts under
    ``meta``, link and image counters, and page timing in milliseconds.
    Returns None when there is no item at all.
    """
    if item is None:
        return None
    if not isinstance(item, Mapping):
        raise TypeError(f"On-page item must be a mapping, got {type(item).__name__}")

    meta = item.get("meta") or {}
    htags = _dig(meta, "htags") or {}

    raw: RawSignals = {
        "headings": {level: htags.get(level) or [] for level in ("h1", "h2", "h3")}
        if isinstance(htags, Mapping) else {},
    }

    url = item.get("url")
    if url:
        raw["url"] = url
    for key in ("title", "description", "canonical"):
        if meta.get(key):
            raw[key] = meta[key]

    images = _dig(item, "images", "images_count")
    if images is None:
        images = meta.get("images_count")
    if images is not None:
        raw["images"] = images
    missing_alt = _dig(item, "images", "images_without_alt")
    if missing_alt is not None:
        raw["images_missing_alt"] = missing_alt

    for kind in ("internal", "external", "broken"):
        count = _dig(item, "links", kind, "count")
        if count is None:
            count = meta.get(f"{kind}_links_count")
        if count is not None:
            raw[f"{kind}_links"] = count

    tti = _number(_dig(item, "page_timing", "time_to_interactive"))
    if tti is not None:
        raw["load_time"] = tti / 1000.0

    word_count = _dig(meta, "content", "plain_text_word_count")
    if word_count is not None:
        raw["word_count"] = word_count
    body = _dig(meta, "content", "plain_text_content")
    if body:
        raw["body_text"] = body

    if item.get("onpage_score") is not None:
        raw["technical_score"] = item["onpage_score"]

    return raw

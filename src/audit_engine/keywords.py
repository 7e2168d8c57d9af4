"""Where and how often the target phrase appears."""

from .models import DensityBucket, KeywordAnalysis, Signals
from .text import count_occurrences, normalize_slug, normalize_text, plain_text

# Number of leading body words checked for an early mention
FIRST_WORDS = 100


def density_bucket(density: float) -> DensityBucket:
    """Classify a keyword density percentage.

    Below 0.5% the phrase is barely there, above 3% it reads as stuffing;
    1-2% is the target band.
    """
    if density < 0.5 or density > 3:
        return DensityBucket.POOR
    if 1 <= density <= 2:
        return DensityBucket.GOOD
    return DensityBucket.NEEDS_IMPROVEMENT


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def recommended_occurrences(content_length: int) -> tuple[int, int]:
    """Occurrence range matching a 1-2% density for the given length."""
    low = max(1, _round_half_up(content_length * 0.01))
    high = max(low, _round_half_up(content_length * 0.02))
    return low, high


def analyze_keyword(
    keyword: str | None,
    signals: Signals,
    body_text: str | None = None,
) -> KeywordAnalysis | None:
    """Analyze the placement of ``keyword`` across the signals.

    Args:
        keyword: Target phrase; None or blank means no analysis
        signals: Normalized signals of the audited item
        body_text: Raw body text, defaults to the text carried by the signals

    Returns:
        KeywordAnalysis, or None when no phrase was supplied
    """
    phrase = normalize_text(keyword)
    if not phrase:
        return None

    body = normalize_text(plain_text(body_text) if body_text is not None else signals.body_text)
    body_words = body.split()
    content_length = signals.word_count or len(body_words)

    occurrences = min(count_occurrences(body, phrase), content_length)
    density = round(occurrences / max(content_length, 1) * 100, 2)
    low, high = recommended_occurrences(content_length)

    first_words = " ".join(body_words[:FIRST_WORDS])
    slug_phrase = normalize_slug(phrase)

    return KeywordAnalysis(
        keyword=keyword.strip(),
        phrase=phrase,
        in_title=phrase in normalize_text(signals.title),
        in_description=phrase in normalize_text(signals.description),
        in_primary_heading=any(phrase in normalize_text(h) for h in signals.primary_headings),
        in_secondary_heading=any(phrase in normalize_text(h) for h in signals.secondary_headings),
        in_body=occurrences > 0,
        in_url=bool(slug_phrase) and slug_phrase in normalize_slug(signals.url),
        in_first_words=phrase in first_words,
        occurrences=occurrences,
        density=density,
        density_bucket=density_bucket(density),
        recommended_min=low,
        recommended_max=high,
    )

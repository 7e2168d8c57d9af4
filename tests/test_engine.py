import pytest

from audit_engine import run_audit, run_checklist_audit, run_local_audit
from audit_engine.models import Priority, Signals
from audit_engine.rules import CONTENT_RULES

KEYWORD = "emergency plumber"


def _keys(result):
    return [r.key for r in result.recommendations]


def _is_sorted(result):
    ranks = [r.priority.rank for r in result.recommendations]
    return ranks == sorted(ranks)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"title": "x"},
        {"word_count": 10**9, "technical_score": 10**6, "broken_links": -4},
        {"images": "many", "load_time": float("nan"), "headings": "h1"},
    ],
)
def test_score_is_always_in_range(payload):
    result = run_audit(payload, keyword="seo", benchmark_set=[{"size": 0}, {"size": 10}])
    assert 0 <= result.score <= 100
    assert all(0 <= v <= 100 for v in result.component_scores.values())
    assert _is_sorted(result)


def test_no_data_result():
    for payload in (None, {}, {"url": "https://example.com/"}):
        result = run_audit(payload, keyword="plumber")
        assert result.score == 0
        assert set(result.component_scores.values()) == {0.0}
        assert _keys(result) == ["no_data"]
        assert result.recommendations[0].priority is Priority.CRITICAL


def test_strong_page_scores_high(strong_page, benchmark_items):
    result = run_audit(strong_page, keyword=KEYWORD, benchmark_set=benchmark_items)
    assert result.score >= 85
    assert result.score == pytest.approx(95.2)
    assert not [r for r in result.recommendations if r.priority.rank <= Priority.HIGH.rank]
    assert _keys(result) == ["competitors_reviewed", "no_significant_issues"]
    assert result.benchmark_summary.median_size == 1200
    assert result.keyword_analysis.density == 2.0


def test_weak_page_is_sorted_and_stable(weak_page):
    result = run_audit(weak_page, keyword="emergency plumber")
    assert _is_sorted(result)
    table_order = [rule.key for rule in CONTENT_RULES]
    for priority in Priority:
        keys = [r.key for r in result.recommendations if r.priority is priority]
        assert keys == sorted(keys, key=table_order.index)
    assert _keys(result)[:3] == ["description_missing", "broken_links", "keyword_body"]
    assert "no_significant_issues" not in _keys(result)


def test_audit_is_deterministic(weak_page, benchmark_items):
    first = run_audit(weak_page, keyword="pipes", benchmark_set=benchmark_items, locale="fr")
    second = run_audit(weak_page, keyword="pipes", benchmark_set=benchmark_items, locale="fr")
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_normalized_signals_are_accepted(strong_page):
    from audit_engine.signals import normalize_signals

    assert run_audit(normalize_signals(strong_page)) == run_audit(strong_page)
    assert run_audit(Signals()).score == 0


def test_thin_page_against_benchmark_is_capped(strong_page, benchmark_items):
    strong_page["word_count"] = 500
    result = run_audit(strong_page, keyword=KEYWORD, benchmark_set=benchmark_items)
    assert result.score <= 55
    assert "below_benchmark" in _keys(result)


def test_title_keyword_expected_by_competitors(strong_page, benchmark_items):
    strong_page["title"] = "Fast 24/7 Repairs in Paris by Our Team"
    result = run_audit(strong_page, keyword=KEYWORD, benchmark_set=benchmark_items)
    assert _keys(result)[0] == "keyword_title_expected"
    assert "100%" in result.recommendations[0].issue

    unbenchmarked = run_audit(strong_page, keyword=KEYWORD)
    assert "keyword_title" in _keys(unbenchmarked)
    assert "keyword_title_expected" not in _keys(unbenchmarked)


def test_recommendations_are_localized(weak_page):
    english = run_audit(weak_page, locale="en")
    french = run_audit(weak_page, locale="fr_FR")
    assert _keys(english) == _keys(french)
    assert english.recommendations[0].issue != french.recommendations[0].issue


def test_missing_phrase_falls_back_to_default_locale(weak_page):
    def lookup(locale, key, variables):
        if locale == "nl":
            return None
        return f"{key} in {locale}"

    english = run_audit(weak_page, locale="en", phrases=lookup)
    result = run_audit(weak_page, locale="nl", phrases=lookup)
    assert _keys(result) == _keys(english)
    assert result.recommendations[0].issue == "content.description_missing.issue in en"

    empty = run_audit(None, locale="nl", phrases=lookup)
    assert _keys(empty) == ["no_data"]
    assert empty.recommendations[0].priority is Priority.CRITICAL

    from audit_engine.phrases import PhraseCatalog

    catalog = PhraseCatalog({"en": {"content": {"description_missing": {"issue": "i", "action": "a"}}}, "nl": {}})
    result = run_audit(weak_page, locale="nl", phrases=catalog)
    assert _keys(result) == ["description_missing"]


def test_to_dict_shape(strong_page, benchmark_items):
    data = run_audit(strong_page, keyword=KEYWORD, benchmark_set=benchmark_items).to_dict()
    assert data["variant"] == "content"
    assert set(data["component_scores"]) == {"competitiveness", "content_quality", "technical_health"}
    assert data["recommendations"][0]["priority"] == "low"
    assert data["keyword_analysis"]["density_bucket"] == "good"
    assert "checklist" not in data
    assert "error" not in data


def test_checklist_audit_complete(full_listing):
    from audit_engine.checklist import observed_fields_from_listing

    result = run_checklist_audit(observed_fields_from_listing(full_listing))
    assert result.score == 100
    assert result.variant == "checklist"
    assert result.strength == "excellent"
    assert len(result.checklist) == 12
    assert _keys(result) == ["longer_description", "excellent_profile"]


def test_checklist_audit_empty_profile():
    for observed in (None, {}):
        result = run_checklist_audit(observed)
        assert result.score == 0
        assert result.strength == "poor"
        assert _keys(result) == ["not_found"]
        assert result.recommendations[0].priority is Priority.CRITICAL
        assert not any(item.completed for item in result.checklist)


def test_checklist_audit_partial_profile():
    result = run_checklist_audit({
        "name": "Acme",
        "address": "1 Main St",
        "description": "Short text",
        "photos": 3,
        "rating": 3.5,
        "review_count": 4,
    })
    assert result.score == 25
    keys = _keys(result)
    assert keys[:2] == ["phone", "category"]
    assert {"short_description", "few_photos", "low_rating", "low_review_count"} <= set(keys)
    assert "description" not in keys
    assert "photos" not in keys
    assert "profile_incomplete" not in keys
    assert _is_sorted(result)


def test_local_audit(local_pack):
    result = run_local_audit("Acme Plumbing", local_pack)
    assert result.variant == "local"
    assert result.score == 71
    assert result.benchmark_summary.count == 2
    assert result.benchmark_summary.mean_size == 90
    assert _keys(result) == [
        "competitors_better_rating",
        "few_reviews",
        "competitors_more_reviews",
        "missing_website",
    ]


def test_local_audit_business_missing(local_pack):
    result = run_local_audit("Nobody Plumbing Co", local_pack)
    assert result.score == 0
    assert _keys(result) == ["not_in_local_pack"]

    empty = run_local_audit("Acme", [])
    assert empty.score == 0
    assert empty.benchmark_summary is None
    assert _keys(empty) == ["not_in_local_pack"]


def test_local_audit_low_position():
    pack = [{"title": f"Rival {i}", "reviews_count": 50, "rating": 4.5} for i in range(4)]
    pack.append({"title": "Acme", "reviews_count": 50, "rating": 4.5, "phone": "555",
                 "website": "https://acme.example"})
    result = run_local_audit("acme", pack)
    assert _keys(result)[0] == "low_position"
    assert "5" in result.recommendations[0].issue


def test_local_audit_nap_and_citations():
    pack = [
        {"title": "Rival", "reviews_count": 30, "rating": 4.5, "address": "1 Main St",
         "phone": "111", "website": "https://rival.example", "category": "Plumber"},
        {"title": "Acme", "reviews_count": 30, "rating": 4.5, "phone": "555",
         "website": "https://acme.example"},
    ]
    result = run_local_audit("Acme", pack)
    assert _keys(result) == ["missing_address", "missing_category", "competitors_have_category"]
    assert result.recommendations[-1].priority is Priority.LOW
    assert result.recommendations[-1].issue.startswith("1 ")

    pack[0]["category"] = None
    assert _keys(run_local_audit("Acme", pack)) == ["missing_address", "missing_category"]

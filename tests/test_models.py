import pytest

from audit_engine.models import AuditResult, Effort, Impact, Priority, Recommendation


def test_priority_rank_and_impact():
    assert [p.rank for p in Priority] == [0, 1, 2, 3]
    assert Priority.CRITICAL.impact is Impact.HIGH
    assert Priority.HIGH.impact is Impact.HIGH
    assert Priority.MEDIUM.impact is Impact.MEDIUM
    assert Priority.LOW.impact is Impact.LOW


def test_unknown_priority_is_rejected():
    assert Priority("high") is Priority.HIGH
    with pytest.raises(ValueError):
        Priority("urgent")


def test_quick_wins_are_urgent_and_easy():
    recs = (
        Recommendation("a", Priority.CRITICAL, "x", "i", "a", Impact.HIGH, Effort.EASY),
        Recommendation("b", Priority.CRITICAL, "x", "i", "a", Impact.HIGH, Effort.MODERATE),
        Recommendation("c", Priority.HIGH, "x", "i", "a", Impact.HIGH, Effort.EASY),
        Recommendation("d", Priority.MEDIUM, "x", "i", "a", Impact.MEDIUM, Effort.EASY),
    )
    result = AuditResult(score=10.0, recommendations=recs)
    assert [r.key for r in result.quick_wins] == ["a", "c"]


def test_to_dict_omits_unset_extras():
    data = AuditResult(score=0.0).to_dict()
    assert data == {
        "variant": "content",
        "score": 0.0,
        "component_scores": {},
        "keyword_analysis": None,
        "recommendations": [],
        "benchmark_summary": None,
    }
    assert AuditResult(score=0.0, error="Timeout after 60s").to_dict()["error"] == "Timeout after 60s"

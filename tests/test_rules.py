import logging

from audit_engine.models import Effort, Impact, Priority, Recommendation
from audit_engine.phrases import PhraseCatalog, default_catalog
from audit_engine.rules import (
    CONTENT_RULES,
    LOCAL_RULES,
    PROFILE_RULES,
    Rule,
    evaluate_rules,
    render_recommendation,
    sort_recommendations,
)
from audit_engine.rules.content import ContentContext
from audit_engine.signals import normalize_signals

PHRASES = PhraseCatalog({
    "en": {
        "t": {
            key: {"issue": f"{key} issue {{n}}", "action": f"{key} action"}
            for key in ("a", "b", "c", "d", "e", "ok")
        },
    },
})


def _rec(key, priority):
    return Recommendation(key, priority, "x", "issue", "action", priority.impact, Effort.EASY)


def test_sort_is_stable_within_tiers():
    recs = [
        _rec("low1", Priority.LOW),
        _rec("crit1", Priority.CRITICAL),
        _rec("med1", Priority.MEDIUM),
        _rec("crit2", Priority.CRITICAL),
        _rec("low2", Priority.LOW),
        _rec("high1", Priority.HIGH),
    ]
    ordered = sort_recommendations(recs)
    assert [r.key for r in ordered] == ["crit1", "crit2", "high1", "med1", "low1", "low2"]
    assert sort_recommendations(ordered) == ordered


def test_evaluation_follows_table_order():
    rules = [
        Rule("a", Priority.MEDIUM, "x", lambda c: True),
        Rule("b", Priority.HIGH, "x", lambda c: False),
        Rule("c", Priority.MEDIUM, "x", lambda c: c["n"] > 1, variables=lambda c: {"n": c["n"]}),
    ]
    fired = evaluate_rules(rules, {"n": 2}, "t", PHRASES, "en")
    assert [r.key for r in fired] == ["a", "c"]
    assert fired[1].issue == "c issue 2"
    assert fired[1].impact is Impact.MEDIUM


def test_when_clear_rule_needs_no_urgent_items():
    ok = Rule("ok", Priority.LOW, "success", lambda c: True, when_clear=True)
    medium = Rule("a", Priority.MEDIUM, "x", lambda c: True)
    high = Rule("b", Priority.HIGH, "x", lambda c: True)
    assert [r.key for r in evaluate_rules([medium, ok], None, "t", PHRASES, "en")] == ["a", "ok"]
    assert [r.key for r in evaluate_rules([high, ok], None, "t", PHRASES, "en")] == ["b"]


def test_unresolved_phrase_skips_rule(caplog):
    rule = Rule("missing", Priority.CRITICAL, "x", lambda c: True)
    with caplog.at_level(logging.WARNING, logger="audit_engine.rules.base"):
        assert render_recommendation(rule, {}, "t", PHRASES, "en") is None
    assert "t.missing" in caplog.text


def test_raising_lookup_is_treated_as_unresolved():
    def lookup(locale, key, variables):
        raise KeyError(key)

    rules = [Rule("a", Priority.HIGH, "x", lambda c: True)]
    assert evaluate_rules(rules, None, "t", lookup, "en") == []


def test_every_bundled_rule_has_phrases():
    catalog = default_catalog()
    for namespace, rules in (("content", CONTENT_RULES), ("profile", PROFILE_RULES), ("local", LOCAL_RULES)):
        for rule in rules:
            for part in ("issue", "action"):
                assert catalog("en", f"{namespace}.{rule.key}.{part}", {}), (namespace, rule.key)


def test_content_rules_on_weak_page(weak_page):
    signals = normalize_signals(weak_page)
    context = ContentContext(signals, None, None, None)
    keys = [r.key for r in evaluate_rules(CONTENT_RULES, context, "content", default_catalog(), "en")]
    assert keys == [
        "title_length",
        "description_missing",
        "multiple_h1",
        "broken_links",
        "canonical_missing",
        "slow_load",
        "images_missing_alt",
        "thin_content",
    ]


def test_render_retries_default_locale():
    calls = []

    def lookup(locale, key, variables):
        calls.append(locale)
        if locale != "en":
            raise KeyError(key)
        return f"{key} ({variables['n']})"

    rule = Rule("a", Priority.HIGH, "x", lambda c: True)
    recommendation = render_recommendation(rule, {"n": 2}, "t", lookup, "fr")
    assert recommendation.issue == "t.a.issue (2)"
    assert recommendation.action == "t.a.action (2)"
    assert calls == ["fr", "fr", "en", "en"]

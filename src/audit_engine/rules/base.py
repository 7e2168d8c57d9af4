"""Declarative recommendation rules and their evaluation."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..config import DEFAULT_LOCALE
from ..models import Effort, Priority, Recommendation
from ..phrases import PhraseLookup

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass(frozen=True)
class Rule(Generic[C]):
    """One entry of a rule table.

    ``when`` is a pure predicate over the audit context; ``variables``
    supplies the placeholder values for the rendered phrases. The issue and
    action phrases live under ``<namespace>.<key>.issue`` / ``.action``.
    """
    key: str
    priority: Priority
    category: str
    when: Callable[[C], bool]
    effort: Effort = Effort.EASY
    variables: Callable[[C], Mapping[str, Any]] | None = None
    # Only fires when nothing critical or high was emitted before it
    when_clear: bool = False


def _lookup(phrases: PhraseLookup, locale: str, key: str, variables: Mapping[str, Any]) -> str | None:
    try:
        return phrases(locale, key, variables)
    except LookupError:
        return None


def _resolve(
    phrases: PhraseLookup, locale: str, key: str, variables: Mapping[str, Any]
) -> tuple[str | None, str | None]:
    issue = _lookup(phrases, locale, f"{key}.issue", variables)
    action = _lookup(phrases, locale, f"{key}.action", variables)
    return issue, action


def render_recommendation(
    rule: Rule,
    variables: Mapping[str, Any],
    namespace: str,
    phrases: PhraseLookup,
    locale: str,
) -> Recommendation | None:
    """Render a fired rule, or None when its phrases cannot be resolved.

    Phrases missing in ``locale`` are looked up again in the default locale.
    """
    key = f"{namespace}.{rule.key}"
    issue, action = _resolve(phrases, locale, key, variables)
    if (not issue or not action) and locale != DEFAULT_LOCALE:
        logger.debug("No phrase for %s in %r, using %r", key, locale, DEFAULT_LOCALE)
        issue, action = _resolve(phrases, DEFAULT_LOCALE, key, variables)
    if not issue or not action:
        logger.warning("Skipping rule %s: no phrase for locale %r", key, locale)
        return None
    return Recommendation(
        key=rule.key,
        priority=rule.priority,
        category=rule.category,
        issue=issue,
        action=action,
        impact=rule.priority.impact,
        effort=rule.effort,
    )


def evaluate_rules(
    rules: Iterable[Rule[C]],
    context: C,
    namespace: str,
    phrases: PhraseLookup,
    locale: str,
) -> list[Recommendation]:
    """Evaluate every rule once, in table order."""
    fired: list[Recommendation] = []
    for rule in rules:
        if rule.when_clear and any(r.priority.rank <= Priority.HIGH.rank for r in fired):
            continue
        if not rule.when(context):
            continue
        variables = rule.variables(context) if rule.variables else {}
        recommendation = render_recommendation(rule, variables, namespace, phrases, locale)
        if recommendation is not None:
            fired.append(recommendation)
    logger.debug("%s rules fired: %s", namespace, [r.key for r in fired])
    return fired


def sort_recommendations(recommendations: Iterable[Recommendation]) -> tuple[Recommendation, ...]:
    """Order by priority tier; equal tiers keep evaluation order."""
    return tuple(sorted(recommendations, key=lambda r: r.priority.rank))

"""Recommendation rule tables."""

from .base import Rule, evaluate_rules, render_recommendation, sort_recommendations
from .content import CONTENT_RULES, NO_DATA_RULE, ContentContext
from .local import LOCAL_RULES, LocalContext
from .profile import NOT_FOUND_RULE, PROFILE_RULES, ProfileContext

__all__ = [
    "Rule",
    "evaluate_rules",
    "render_recommendation",
    "sort_recommendations",
    "CONTENT_RULES",
    "NO_DATA_RULE",
    "ContentContext",
    "LOCAL_RULES",
    "LocalContext",
    "PROFILE_RULES",
    "NOT_FOUND_RULE",
    "ProfileContext",
]

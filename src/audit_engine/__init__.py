"""Audit Engine - weighted scoring and prioritized recommendations for pages and profiles."""

__version__ = "0.1.0"

from .engine import run_audit, run_checklist_audit, run_local_audit
from .models import (
    AuditResult,
    BenchmarkStats,
    ChecklistItem,
    KeywordAnalysis,
    Priority,
    Recommendation,
    ReferenceItem,
    Signals,
)

__all__ = [
    "run_audit",
    "run_checklist_audit",
    "run_local_audit",
    "AuditResult",
    "BenchmarkStats",
    "ChecklistItem",
    "KeywordAnalysis",
    "Priority",
    "Recommendation",
    "ReferenceItem",
    "Signals",
]

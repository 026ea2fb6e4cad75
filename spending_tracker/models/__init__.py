"""
Data Models Package

This package contains all Pydantic models used by the spending tracker.
Everything the store holds or persists conforms to these schemas.
"""

from spending_tracker.models.spending import (
    Category,
    CategorySlice,
    HistoryEntry,
    MonthBreakdown,
    MonthlyData,
    SpendingRecord,
    ValidationIssue,
    ValidationResult,
    YearlySummary,
    generate_id,
    month_label,
    seed_categories,
)
from spending_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Spending models
    "Category",
    "CategorySlice",
    "HistoryEntry",
    "MonthBreakdown",
    "MonthlyData",
    "SpendingRecord",
    "ValidationIssue",
    "ValidationResult",
    "YearlySummary",
    "generate_id",
    "month_label",
    "seed_categories",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

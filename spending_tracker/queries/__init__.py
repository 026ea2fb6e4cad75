"""Read-side queries package."""

from spending_tracker.queries.insights import (
    SpendingInsights,
    format_amount,
    percentage_of,
)

__all__ = ["SpendingInsights", "format_amount", "percentage_of"]

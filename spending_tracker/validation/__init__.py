"""Form validation package."""

from spending_tracker.validation.validator import (
    ADD_CATEGORY_FAILED,
    ADD_EXPENSE_FAILED,
    DUPLICATE_CATEGORY,
    EMPTY_CATEGORY_NAME,
    FILL_ALL_FIELDS,
    INVALID_AMOUNT,
    SpendingValidator,
    parse_amount,
)

__all__ = [
    "ADD_CATEGORY_FAILED",
    "ADD_EXPENSE_FAILED",
    "DUPLICATE_CATEGORY",
    "EMPTY_CATEGORY_NAME",
    "FILL_ALL_FIELDS",
    "INVALID_AMOUNT",
    "SpendingValidator",
    "parse_amount",
]

"""
Form Validation

DESIGN DECISION: The domain store trusts its callers completely.
All checks on user input happen here, at the presentation boundary,
before any store mutation is invoked.

Errors block the mutation. Warnings (e.g. an unusually large amount)
are shown but do not block.

IMPORTANT: Validation NEVER silently fixes input beyond trimming
whitespace and parsing the amount. It reports issues for the user.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from spending_tracker.config import get_settings
from spending_tracker.models.spending import (
    Category,
    ValidationIssue,
    ValidationResult,
    is_exact_float,
)


FILL_ALL_FIELDS = "Please fill in all fields"
INVALID_AMOUNT = "Please enter a valid amount"
EMPTY_CATEGORY_NAME = "Please enter a category name"
DUPLICATE_CATEGORY = "Category already exists"

# Shown when a store mutation itself raises
ADD_EXPENSE_FAILED = "Failed to add expense"
ADD_CATEGORY_FAILED = "Failed to add category"


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse user-entered amount text; None if it is not a finite number.

    Accepts plain decimal notation with an optional sign and exponent,
    surrounded by whitespace. Digit-group underscores ("1_000") and
    trailing text ("12abc") are rejected.
    """
    if not isinstance(text, str) or "_" in text:
        return None
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


class SpendingValidator:
    """
    Validates the add-expense and add-category forms.

    Args:
        categories: Known categories, used for duplicate name detection
        max_amount: Amounts above this produce a warning.
                    Defaults to the configured AppSettings.max_amount.
    """

    def __init__(
        self,
        categories: Iterable[Category] = (),
        max_amount: Optional[Decimal] = None,
    ):
        self._category_names = [c.name for c in categories]
        if max_amount is None:
            max_amount = Decimal(str(get_settings().app.max_amount))
        self._max_amount = max_amount

    def validate_spending(
        self,
        amount_text: str,
        category: str,
        description: str,
    ) -> ValidationResult:
        """
        Check the add-expense form.

        Returns a result whose `amount` is the parsed Decimal when valid.
        """
        issues = []

        if not all((value or "").strip() for value in (amount_text, category, description)):
            issues.append(ValidationIssue(
                field="form",
                issue_type="missing",
                message=FILL_ALL_FIELDS,
                severity="error",
            ))
            return ValidationResult(is_valid=False, issues=issues)

        amount = parse_amount(amount_text)
        # Amounts are stored as JSON numbers, so they must survive a float
        if amount is None or amount <= 0 or not is_exact_float(amount):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=INVALID_AMOUNT,
                severity="error",
            ))
            return ValidationResult(is_valid=False, issues=issues)

        if amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
            ))

        return ValidationResult(is_valid=True, issues=issues, amount=amount)

    def validate_category(self, name: str) -> ValidationResult:
        """Check the add-category form: non-blank, not a duplicate (ignoring case)."""
        name = (name or "").strip()
        if not name:
            return ValidationResult(is_valid=False, issues=[ValidationIssue(
                field="name",
                issue_type="missing",
                message=EMPTY_CATEGORY_NAME,
                severity="error",
            )])

        lowered = name.lower()
        if any(existing.lower() == lowered for existing in self._category_names):
            return ValidationResult(is_valid=False, issues=[ValidationIssue(
                field="name",
                issue_type="duplicate",
                message=DUPLICATE_CATEGORY,
                severity="error",
            )])

        return ValidationResult(is_valid=True)

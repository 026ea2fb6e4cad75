"""
Core Data Models for the Spending Tracker

These models define the schemas for everything the domain store holds
and everything it writes to the key-value store.
They are designed to:
1. Mirror the persisted JSON layout exactly (camelCase keys, numeric amounts)
2. Be serializable for storage and logging
3. Keep derived fields (month, year) frozen once a record exists

DESIGN DECISION: Amounts are Decimal in memory and plain JSON numbers on disk.
Existing data files store numbers, so we keep that wire format and convert
at the edge. An amount a float cannot hold exactly is written as its decimal
string instead, which loads back to the same Decimal.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from spending_tracker.constants import MONTHS, SEED_CATEGORIES


def generate_id() -> str:
    """Collision-free identifier, safe for records created in the same instant."""
    return uuid4().hex


def month_label(timestamp: datetime) -> str:
    """Long-form English month name for a timestamp."""
    return MONTHS[timestamp.month - 1]


def is_exact_float(amount: Decimal) -> bool:
    """True when float(amount) is finite and converts back to the same value."""
    as_float = float(amount)
    return math.isfinite(as_float) and Decimal(repr(as_float)) == amount


def json_amount(amount: Decimal) -> Union[float, str]:
    if is_exact_float(amount):
        return float(amount)
    return str(amount)


# =============================================================================
# CORE SPENDING MODELS
# =============================================================================

class SpendingRecord(BaseModel):
    """
    One discrete expense event.

    Records are immutable. `month` and `year` are derived from `date`
    when the record is created and never recomputed, even if the data
    is later loaded on a device in another timezone.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=generate_id,
        description="Unique record ID"
    )
    amount: Decimal = Field(
        ...,
        description="Amount spent"
    )
    category: str = Field(
        ...,
        description="Category name, matched case-sensitively"
    )
    description: str = Field(
        ...,
        description="What the money was spent on"
    )
    date: datetime = Field(
        ...,
        description="When the expense was entered"
    )
    month: str = Field(
        ...,
        description="Long month name derived from date at creation"
    )
    year: int = Field(
        ...,
        description="Year derived from date at creation"
    )

    @field_validator('date')
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        """Store local naive timestamps so records sort against each other."""
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, amount: Decimal) -> Union[float, str]:
        return json_amount(amount)

    @classmethod
    def create(
        cls,
        amount: Decimal,
        category: str,
        description: str,
        timestamp: datetime,
    ) -> "SpendingRecord":
        """Build a new record, deriving id, month and year."""
        return cls(
            amount=amount,
            category=category,
            description=description,
            date=timestamp,
            month=month_label(timestamp),
            year=timestamp.year,
        )


class Category(BaseModel):
    """
    A named, colored tag applied to spending records.

    NOTE: total_spent is only meaningful inside a MonthlyData snapshot.
    On the top-level category list it stays at zero.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(
        default_factory=generate_id,
        description="Unique category ID"
    )
    name: str = Field(
        ...,
        description="Display name"
    )
    color: str = Field(
        ...,
        description="Hex color token"
    )
    icon: str = Field(
        ...,
        description="Icon glyph"
    )
    total_spent: Decimal = Field(
        default=Decimal("0"),
        alias="totalSpent",
        description="Amount attributed to this category in a snapshot"
    )

    @field_serializer('total_spent', when_used='json')
    def serialize_total(self, total: Decimal) -> Union[float, str]:
        return json_amount(total)


class MonthlyData(BaseModel):
    """
    Derived per-(month, year) aggregate.

    Rebuilt from scratch every time the record list changes.
    """
    model_config = ConfigDict(populate_by_name=True)

    month: str
    year: int
    total_spent: Decimal = Field(
        default=Decimal("0"),
        alias="totalSpent",
    )
    categories: list[Category] = Field(default_factory=list)

    @field_serializer('total_spent', when_used='json')
    def serialize_total(self, total: Decimal) -> Union[float, str]:
        return json_amount(total)


def seed_categories() -> list[Category]:
    """The categories a fresh install starts with."""
    return [
        Category(id=cat_id, name=name, color=color, icon=icon)
        for cat_id, name, color, icon in SEED_CATEGORIES
    ]


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'duplicate')"
    )
    message: str = Field(
        ...,
        description="Message shown to the user"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a form before a store mutation.

    The store never validates; the caller must check is_valid first.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    # Parsed amount for spending forms
    amount: Optional[Decimal] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_message(self) -> Optional[str]:
        """First error message, suitable for an alert."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]


# =============================================================================
# INSIGHT MODELS (dashboard, history and analysis views)
# =============================================================================

class CategorySlice(BaseModel):
    """One category's share of a total, as shown in a pie chart legend."""

    name: str
    color: str
    icon: str
    total_spent: Decimal
    percentage: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Share of the total, one decimal place"
    )


class MonthBreakdown(BaseModel):
    """Dashboard view of a single month."""

    month: str
    year: int
    total_spent: Decimal = Decimal("0")
    slices: list[CategorySlice] = Field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return bool(self.slices) or self.total_spent > 0


class YearlySummary(BaseModel):
    """Analysis view of a year."""

    year: int
    total_spent: Decimal = Decimal("0")
    category_totals: list[Category] = Field(default_factory=list)
    months: list[MonthlyData] = Field(default_factory=list)
    top_category_name: str = "None"
    top_category_total: Decimal = Decimal("0")
    monthly_average: Decimal = Field(
        default=Decimal("0"),
        description="Yearly total spread over twelve months"
    )


class HistoryEntry(BaseModel):
    """A record decorated with its category's icon and color."""

    record: SpendingRecord
    icon: str
    color: str

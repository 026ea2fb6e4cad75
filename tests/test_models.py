"""
Tests for the Spending Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, aggregation)
2. Store tests against the in-memory key-value backend
3. No real files outside pytest's tmp_path
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from spending_tracker.audit import AuditLogger
from spending_tracker.constants import CHART_COLORS, next_category_color
from spending_tracker.models.spending import (
    Category,
    MonthlyData,
    SpendingRecord,
    ValidationIssue,
    ValidationResult,
    month_label,
    seed_categories,
)
from spending_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestSpendingRecord:
    """Tests for SpendingRecord."""

    def test_create_derives_month_and_year(self):
        """Test month label and year come from the timestamp."""
        record = SpendingRecord.create(
            amount=Decimal("12.50"),
            category="Food",
            description="lunch",
            timestamp=datetime(2024, 3, 15, 12, 30),
        )
        assert record.month == "March"
        assert record.year == 2024
        assert record.amount == Decimal("12.50")

    def test_create_generates_unique_ids_for_same_timestamp(self):
        """Test ids differ even when created at the same instant."""
        ts = datetime(2024, 3, 15, 12, 30)
        ids = {
            SpendingRecord.create(Decimal("1"), "Food", "x", ts).id
            for _ in range(50)
        }
        assert len(ids) == 50

    def test_record_is_immutable(self):
        """Test records cannot be changed after creation."""
        record = SpendingRecord.create(
            Decimal("5"), "Food", "snack", datetime(2024, 1, 1)
        )
        with pytest.raises(ValueError):
            record.amount = Decimal("6")

    def test_json_layout(self):
        """Test the persisted keys and numeric amount."""
        record = SpendingRecord.create(
            Decimal("12.50"), "Food", "lunch", datetime(2024, 3, 15, 12, 30, 45)
        )
        data = json.loads(record.model_dump_json())
        assert set(data) == {"id", "amount", "category", "description", "date", "month", "year"}
        assert data["amount"] == 12.5
        assert data["date"] == "2024-03-15T12:30:45"

    @pytest.mark.parametrize("amount", ["12345678901234567.89", "1E+400", "0.1"])
    def test_amount_survives_json(self, amount):
        """Test amounts load back unchanged, even when a float cannot hold them."""
        record = SpendingRecord.create(
            Decimal(amount), "Food", "lunch", datetime(2024, 3, 15)
        )
        payload = record.model_dump_json()
        assert json.loads(payload)["amount"] is not None
        assert SpendingRecord.model_validate_json(payload).amount == Decimal(amount)

    def test_ordinary_amount_stays_a_number(self):
        record = SpendingRecord.create(
            Decimal("0.1"), "Food", "gum", datetime(2024, 3, 15)
        )
        assert json.loads(record.model_dump_json())["amount"] == 0.1

    def test_parses_javascript_iso_dates(self):
        """Test UTC timestamps with milliseconds and 'Z' suffix load as naive local time."""
        record = SpendingRecord.model_validate_json(json.dumps({
            "id": "1710505845000",
            "amount": 12.5,
            "category": "Food",
            "description": "lunch",
            "date": "2024-03-15T12:30:45.000Z",
            "month": "March",
            "year": 2024,
        }))
        assert record.date.tzinfo is None
        expected = datetime(2024, 3, 15, 12, 30, 45, tzinfo=timezone.utc).astimezone()
        assert record.date == expected.replace(tzinfo=None)
        assert record.month == "March"

    def test_month_label_is_english(self):
        """Test every month maps to its English long name."""
        assert month_label(datetime(2024, 1, 31)) == "January"
        assert month_label(datetime(2024, 12, 1)) == "December"


class TestCategory:
    """Tests for Category and the seed list."""

    def test_seed_categories(self):
        """Test the eight default categories."""
        categories = seed_categories()
        assert [c.name for c in categories] == [
            "Food", "Shopping", "Transport", "Entertainment",
            "Health", "Education", "Travel", "Bills",
        ]
        assert [c.id for c in categories] == [str(i) for i in range(1, 9)]
        assert all(c.total_spent == 0 for c in categories)

    def test_total_spent_uses_camel_case_alias(self):
        """Test totalSpent is the persisted key."""
        category = Category(name="Gifts", color="#FFB6C1", icon="📝")
        data = json.loads(category.model_dump_json(by_alias=True))
        assert data["totalSpent"] == 0
        assert "total_spent" not in data

    def test_loads_from_alias(self):
        """Test categories written by older installs load."""
        category = Category.model_validate(
            {"id": "9", "name": "Pets", "color": "#87CEEB", "icon": "🐶", "totalSpent": 0}
        )
        assert category.name == "Pets"
        assert category.total_spent == Decimal("0")

    def test_next_category_color_cycles(self):
        """Test custom category colors wrap around the chart palette."""
        assert next_category_color(8) == CHART_COLORS[8]
        assert next_category_color(len(CHART_COLORS)) == CHART_COLORS[0]


class TestMonthlyData:
    """Tests for MonthlyData serialization."""

    def test_total_serializes_as_number(self):
        """Test totals are JSON numbers under totalSpent."""
        data = MonthlyData(month="March", year=2024, total_spent=Decimal("12.50"))
        dumped = json.loads(data.model_dump_json(by_alias=True))
        assert dumped["totalSpent"] == 12.5


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.SPENDING_ADDED,
            description="Spending added",
        )
        assert event.event_type == AuditEventType.SPENDING_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.spending_added("abc", "Food", "12.50")
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "spending_added"
        assert log_dict["entity_id"] == "abc"
        assert log_dict["details"]["amount"] == "12.50"

    def test_persistence_failed_is_error(self):
        """Test AuditEventBuilder.persistence_failed."""
        event = AuditEventBuilder.persistence_failed("spendings", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.entity_id == "spendings"
        assert event.error_message == "disk full"

    def test_logger_history_is_bounded(self):
        """Test only the most recent events are kept, oldest first."""
        logger = AuditLogger(history_size=3)
        for i in range(5):
            logger.log_spending_deleted(f"r{i}")
        assert [e.entity_id for e in logger.events] == ["r2", "r3", "r4"]
        assert isinstance(logger.events, list)


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors and error_message."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Please enter a valid amount",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_message == "Please enter a valid amount"

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="suspicious_value",
                    message="Amount seems unusually high",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_message is None
        assert result.warnings == ["Amount seems unusually high"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

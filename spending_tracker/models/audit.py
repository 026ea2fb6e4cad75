"""
Audit Models for the Spending Tracker

Every store mutation and every persistence problem becomes an audit event.
Persistence failures are never raised to callers, so these events are
the only place they become visible.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Lifecycle
    STORE_INITIALIZED = "store_initialized"
    STORE_DISPOSED = "store_disposed"
    DATA_LOAD_FAILED = "data_load_failed"

    # Mutations
    SPENDING_ADDED = "spending_added"
    SPENDING_DELETED = "spending_deleted"
    CATEGORY_ADDED = "category_added"

    # Persistence
    DATA_SAVED = "data_saved"
    PERSISTENCE_FAILED = "persistence_failed"

    # Onboarding flag
    ONBOARDING_FLAG_FAILED = "onboarding_flag_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'spending', 'category', 'key')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.spending_added(record_id, "Food", "12.50")
        event = AuditEventBuilder.persistence_failed("spendings", str(exc))
    """

    @staticmethod
    def store_initialized(spending_count: int, category_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_INITIALIZED,
            description=(
                f"Store loaded {spending_count} spendings "
                f"and {category_count} categories"
            ),
            details={
                "spending_count": spending_count,
                "category_count": category_count,
            },
        )

    @staticmethod
    def store_disposed(pending_writes: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_DISPOSED,
            description="Store disposed",
            details={"pending_writes": pending_writes},
        )

    @staticmethod
    def data_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="key",
            entity_id=key,
            description=f"Error loading data for '{key}', using defaults",
            error_message=error_message,
        )

    @staticmethod
    def spending_added(record_id: str, category: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SPENDING_ADDED,
            entity_type="spending",
            entity_id=record_id,
            description=f"Spending added: {category} - {amount}",
            details={
                "category": category,
                "amount": amount,
            },
        )

    @staticmethod
    def spending_deleted(record_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SPENDING_DELETED,
            entity_type="spending",
            entity_id=record_id,
            description="Spending deleted",
        )

    @staticmethod
    def category_added(category_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category added: {name}",
            details={"name": name},
        )

    @staticmethod
    def data_saved(key: str, item_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="key",
            entity_id=key,
            description=f"Saved {item_count} items to '{key}'",
            details={"item_count": item_count},
        )

    @staticmethod
    def persistence_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTENCE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="key",
            entity_id=key,
            description=f"Error saving data for '{key}'",
            error_message=error_message,
        )

    @staticmethod
    def onboarding_flag_failed(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ONBOARDING_FLAG_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="key",
            entity_id="hasLaunchedBefore",
            description=f"Error during first launch {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

"""
Audit Logger

DESIGN DECISION: Every store mutation and every persistence problem is logged.
Persistence runs in detached tasks, so a failed write has no caller to
raise to. The log is where those failures surface.

The audit logger:
- Emits structured events through structlog
- Keeps a bounded in-memory history of recent events
"""

from collections import deque
from typing import Optional

import structlog

from spending_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Keeps the most recent events in memory so callers (and tests) can
    inspect what happened without parsing log output.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("spending_tracker.audit")
        self._events: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def events(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._events)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._events.append(event)

        log_dict = event.to_log_dict()
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_store_initialized(self, spending_count: int, category_count: int) -> None:
        self.log(AuditEventBuilder.store_initialized(spending_count, category_count))

    def log_store_disposed(self, pending_writes: int) -> None:
        self.log(AuditEventBuilder.store_disposed(pending_writes))

    def log_data_load_failed(self, key: str, error: Exception) -> None:
        """Log a read or parse failure for one persisted key."""
        self.log(AuditEventBuilder.data_load_failed(key, str(error)))

    def log_spending_added(self, record_id: str, category: str, amount: str) -> None:
        self.log(AuditEventBuilder.spending_added(record_id, category, amount))

    def log_spending_deleted(self, record_id: str) -> None:
        self.log(AuditEventBuilder.spending_deleted(record_id))

    def log_category_added(self, category_id: str, name: str) -> None:
        self.log(AuditEventBuilder.category_added(category_id, name))

    def log_data_saved(self, key: str, item_count: int) -> None:
        self.log(AuditEventBuilder.data_saved(key, item_count))

    def log_persistence_failed(self, key: str, error: Exception) -> None:
        """Log a write that did not land. The in-memory state is unaffected."""
        self.log(AuditEventBuilder.persistence_failed(key, str(error)))

    def log_onboarding_flag_failed(self, operation: str, error: Exception) -> None:
        self.log(AuditEventBuilder.onboarding_flag_failed(operation, str(error)))


_default_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Shared logger for components constructed without one."""
    global _default_logger
    if _default_logger is None:
        _default_logger = AuditLogger()
    return _default_logger

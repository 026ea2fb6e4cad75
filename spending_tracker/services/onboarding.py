"""
First-launch flag.

Presence of any value under the flag key means onboarding was already shown.
Both helpers are best-effort: a storage failure shows onboarding again
rather than crashing the app.
"""

from typing import Optional

from spending_tracker.audit import AuditLogger, get_audit_logger
from spending_tracker.constants import FIRST_LAUNCH_KEY
from spending_tracker.services.storage.interface import KeyValueStoreInterface


async def check_first_launch(
    storage: KeyValueStoreInterface,
    audit_logger: Optional[AuditLogger] = None,
) -> bool:
    """Return True if onboarding has never been completed."""
    try:
        value = await storage.get(FIRST_LAUNCH_KEY)
    except Exception as e:
        (audit_logger or get_audit_logger()).log_onboarding_flag_failed("check", e)
        return True
    return value is None


async def set_first_launch_complete(
    storage: KeyValueStoreInterface,
    audit_logger: Optional[AuditLogger] = None,
) -> None:
    """Record that onboarding was shown."""
    try:
        await storage.set(FIRST_LAUNCH_KEY, "true")
    except Exception as e:
        (audit_logger or get_audit_logger()).log_onboarding_flag_failed("update", e)

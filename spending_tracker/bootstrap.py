"""
Application Bootstrap

Wires the storage backend, audit logger, domain store and insight
queries together, and decides whether onboarding should be shown.
The presentation layer calls start_app() once at launch and
AppComponents.shutdown() when it exits.
"""

from dataclasses import dataclass
from typing import Optional

from spending_tracker.audit import AuditLogger
from spending_tracker.queries import SpendingInsights
from spending_tracker.services.onboarding import check_first_launch
from spending_tracker.services.storage import (
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
)
from spending_tracker.store import SpendingStore


@dataclass
class AppComponents:
    """Everything a running app needs."""

    storage: KeyValueStoreInterface
    store: SpendingStore
    insights: SpendingInsights
    audit_logger: AuditLogger
    show_onboarding: bool

    async def shutdown(self) -> None:
        await self.store.dispose()


async def start_app(
    storage: Optional[KeyValueStoreInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
    store: Optional[SpendingStore] = None,
) -> AppComponents:
    """
    Factory function to create and initialize all application components.

    Args:
        storage: Key-value backend. Defaults to the configured JSON file.
        audit_logger: Defaults to a fresh AuditLogger.
        store: Pre-built store (e.g. with a fixed clock). Must use `storage`.

    Returns:
        Initialized components; the store has finished loading.
    """
    if storage is None:
        storage = JsonFileKeyValueStore()
    if audit_logger is None:
        audit_logger = AuditLogger()
    if store is None:
        store = SpendingStore(storage, audit_logger=audit_logger)

    show_onboarding = await check_first_launch(storage, audit_logger)
    await store.initialize()

    return AppComponents(
        storage=storage,
        store=store,
        insights=SpendingInsights(store),
        audit_logger=audit_logger,
        show_onboarding=show_onboarding,
    )

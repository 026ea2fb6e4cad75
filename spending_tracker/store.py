"""
Domain Store

The single source of truth for spending data in a running process.

DESIGN DECISION: In-memory state is authoritative.
- Every mutation updates memory synchronously, then recomputes aggregates
- Persistence of the full collection is scheduled as a detached task
- A failed write is logged and never reaches the caller

The store performs no input validation; callers validate with
SpendingValidator before mutating.

Flow:
    store = SpendingStore(JsonFileKeyValueStore())
    await store.initialize()
    with spending_store_scope(store):
        ...  # views call get_spending_store()
    await store.dispose()
"""

import asyncio
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterator, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from spending_tracker.aggregation import compute_monthly_data
from spending_tracker.audit import AuditLogger, get_audit_logger
from spending_tracker.constants import CATEGORIES_KEY, SPENDINGS_KEY
from spending_tracker.models.spending import (
    Category,
    MonthlyData,
    SpendingRecord,
    seed_categories,
)
from spending_tracker.services.storage import KeyValueStoreInterface


_records_adapter = TypeAdapter(list[SpendingRecord])
_categories_adapter = TypeAdapter(list[Category])

Amount = Union[Decimal, int, float, str]


class StoreError(Exception):
    """Base exception for domain store errors."""
    pass


class StoreScopeError(StoreError):
    """The store was looked up outside an active scope."""
    pass


class StoreDisposedError(StoreError):
    """A mutation was attempted after dispose()."""
    pass


class StoreState(BaseModel):
    """Read-only snapshot of everything the store holds."""

    spendings: list[SpendingRecord] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    monthly_data: list[MonthlyData] = Field(default_factory=list)
    is_loading: bool = True


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() first so 12.1 becomes Decimal("12.1"), not its binary expansion
    return Decimal(str(amount))


class SpendingStore:
    """
    Holds spending records, categories and monthly aggregates.

    Args:
        storage: Key-value backend for durability across restarts
        audit_logger: Where load/save problems and mutations are logged
        clock: Returns "now"; decides the current calendar year
    """

    def __init__(
        self,
        storage: KeyValueStoreInterface,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._storage = storage
        self._audit = audit_logger or get_audit_logger()
        self._clock = clock

        self._spendings: list[SpendingRecord] = []
        self._categories: list[Category] = seed_categories()
        self._monthly_data: list[MonthlyData] = []
        self._is_loading = True
        self._disposed = False

        # Strong references keep detached save tasks alive until they finish
        self._pending_writes: set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return StoreState(
            spendings=list(self._spendings),
            categories=list(self._categories),
            monthly_data=list(self._monthly_data),
            is_loading=self._is_loading,
        )

    @property
    def spendings(self) -> list[SpendingRecord]:
        return list(self._spendings)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def monthly_data(self) -> list[MonthlyData]:
        return list(self._monthly_data)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def pending_write_count(self) -> int:
        return len(self._pending_writes)

    def now(self) -> datetime:
        return self._clock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Load persisted collections.

        Each key is handled on its own: if one fails to read or parse,
        it keeps its default and the other still loads.
        """
        try:
            spendings_raw, categories_raw = await asyncio.gather(
                self._storage.get(SPENDINGS_KEY),
                self._storage.get(CATEGORIES_KEY),
                return_exceptions=True,
            )

            if isinstance(spendings_raw, Exception):
                self._audit.log_data_load_failed(SPENDINGS_KEY, spendings_raw)
            elif spendings_raw:
                try:
                    self._spendings = _records_adapter.validate_json(spendings_raw)
                except ValueError as e:
                    self._audit.log_data_load_failed(SPENDINGS_KEY, e)

            if isinstance(categories_raw, Exception):
                self._audit.log_data_load_failed(CATEGORIES_KEY, categories_raw)
            elif categories_raw:
                try:
                    self._categories = _categories_adapter.validate_json(categories_raw)
                except ValueError as e:
                    self._audit.log_data_load_failed(CATEGORIES_KEY, e)

            if self._spendings:
                self.recompute()
        finally:
            self._is_loading = False

        self._audit.log_store_initialized(len(self._spendings), len(self._categories))

    async def wait_for_pending_writes(self) -> None:
        """Wait until every scheduled save has finished (or failed)."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    async def dispose(self) -> None:
        """Drain outstanding writes and refuse further mutations."""
        if self._disposed:
            return
        pending = len(self._pending_writes)
        self._disposed = True
        await self.wait_for_pending_writes()
        self._audit.log_store_disposed(pending)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def add_spending(
        self,
        amount: Amount,
        category: str,
        description: str,
        timestamp: Optional[datetime] = None,
    ) -> SpendingRecord:
        """Record a new expense. The save runs in the background."""
        self._check_not_disposed()

        record = SpendingRecord.create(
            amount=_to_decimal(amount),
            category=category,
            description=description,
            timestamp=timestamp or self._clock(),
        )
        self._spendings = [*self._spendings, record]
        self.recompute()

        self._audit.log_spending_added(record.id, record.category, str(record.amount))
        self._schedule_save(
            SPENDINGS_KEY,
            _records_adapter.dump_json(self._spendings),
            len(self._spendings),
        )
        return record

    async def add_category(self, name: str, color: str, icon: str) -> Category:
        """Create a custom category. Name uniqueness is the caller's job."""
        self._check_not_disposed()

        category = Category(name=name, color=color, icon=icon)
        self._categories = [*self._categories, category]
        if self._spendings:
            self.recompute()

        self._audit.log_category_added(category.id, category.name)
        self._schedule_save(
            CATEGORIES_KEY,
            _categories_adapter.dump_json(self._categories, by_alias=True),
            len(self._categories),
        )
        return category

    async def delete_spending(self, spending_id: str) -> None:
        """Remove a record by id. Unknown ids are ignored."""
        self._check_not_disposed()

        remaining = [s for s in self._spendings if s.id != spending_id]
        if len(remaining) == len(self._spendings):
            return

        self._spendings = remaining
        self.recompute()

        self._audit.log_spending_deleted(spending_id)
        self._schedule_save(
            SPENDINGS_KEY,
            _records_adapter.dump_json(self._spendings),
            len(self._spendings),
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_monthly_data(self, year: int) -> list[MonthlyData]:
        """Aggregates for a year, in the order of the last recompute."""
        return [data for data in self._monthly_data if data.year == year]

    def get_category_spending(self, category_id: str, year: int) -> Decimal:
        """
        Total spent in a category during a year.

        Unlike the monthly aggregates this looks at every year,
        not just the current one.
        """
        category = next((c for c in self._categories if c.id == category_id), None)
        if category is None:
            return Decimal("0")

        return sum(
            (
                s.amount for s in self._spendings
                if s.category == category.name and s.year == year
            ),
            Decimal("0"),
        )

    def recompute(self) -> None:
        """Rebuild the monthly aggregates from the current records."""
        self._monthly_data = compute_monthly_data(
            self._spendings,
            self._categories,
            current_year=self._clock().year,
        )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _schedule_save(self, key: str, payload: bytes, item_count: int) -> None:
        """Fire-and-forget write of an already serialized collection."""
        task = asyncio.get_running_loop().create_task(
            self._save(key, payload.decode("utf-8"), item_count)
        )
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _save(self, key: str, value: str, item_count: int) -> None:
        try:
            await self._storage.set(key, value)
        except Exception as e:
            # Memory stays authoritative; the next successful write catches up
            self._audit.log_persistence_failed(key, e)
            return
        self._audit.log_data_saved(key, item_count)

    def _check_not_disposed(self) -> None:
        if self._disposed:
            raise StoreDisposedError("SpendingStore has been disposed")


# =============================================================================
# SCOPED LOOKUP
# =============================================================================

_current_store: ContextVar[Optional[SpendingStore]] = ContextVar(
    "spending_store", default=None
)


@contextmanager
def spending_store_scope(store: SpendingStore) -> Iterator[SpendingStore]:
    """Make `store` available to get_spending_store() within the block."""
    token = _current_store.set(store)
    try:
        yield store
    finally:
        _current_store.reset(token)


def get_spending_store() -> SpendingStore:
    """
    Look up the active store.

    Raises:
        StoreScopeError: If called outside spending_store_scope()
    """
    store = _current_store.get()
    if store is None:
        raise StoreScopeError(
            "get_spending_store must be used within a spending_store_scope"
        )
    return store

"""
Read-side Insight Queries

DESIGN DECISION: Views never compute totals themselves.
Everything the dashboard, history and analysis views show comes from
this module, which only reads the domain store.

GUARANTEES:
- Never mutates the store
- Empty data gives empty results, never an error
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from spending_tracker.constants import DEFAULT_CATEGORY_ICON, GRAY, MONTHS
from spending_tracker.models.spending import (
    Category,
    CategorySlice,
    HistoryEntry,
    MonthBreakdown,
    YearlySummary,
)
from spending_tracker.store import SpendingStore


CURRENCY_SYMBOL = "₹"


def format_amount(amount: Decimal) -> str:
    """Format an amount the way the views show it, e.g. ₹12.50."""
    return f"{CURRENCY_SYMBOL}{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"


def percentage_of(part: Decimal, total: Decimal) -> float:
    """Share of `total`, one decimal place; 0 when total is 0."""
    if total <= 0:
        return 0.0
    share = (part / total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(share)


class SpendingInsights:
    """
    Queries over a SpendingStore for the presentation layer.

    "Now" comes from the store's clock, so the current-year and
    current-month rules follow whatever clock the store was built with.
    """

    def __init__(self, store: SpendingStore):
        self._store = store

    def available_years(self) -> list[int]:
        """Years with data from the current year onward, most recent first."""
        current_year = self._store.now().year
        years = {s.year for s in self._store.spendings if s.year >= current_year}
        return sorted(years, reverse=True)

    def default_year(self) -> int:
        """Year a view should open on."""
        years = self.available_years()
        return years[0] if years else self._store.now().year

    def available_months(self, year: int) -> list[int]:
        """
        Zero-based month indices with data in `year`.

        For the current year only months from the current month onward
        are offered.
        """
        now = self._store.now()
        months = set()
        for spending in self._store.spendings:
            if spending.year != year:
                continue
            month_index = spending.date.month - 1
            if year == now.year and month_index < now.month - 1:
                continue
            months.add(month_index)
        return sorted(months)

    def default_month(self, year: int) -> int:
        months = self.available_months(year)
        return months[0] if months else self._store.now().month - 1

    def month_breakdown(self, year: int, month_index: int) -> MonthBreakdown:
        """Total and per-category shares for one month of the monthly aggregates."""
        month = MONTHS[month_index]
        data = next(
            (d for d in self._store.get_monthly_data(year) if d.month == month),
            None,
        )
        if data is None:
            return MonthBreakdown(month=month, year=year)

        slices = [
            CategorySlice(
                name=category.name,
                color=category.color,
                icon=category.icon,
                total_spent=category.total_spent,
                percentage=percentage_of(category.total_spent, data.total_spent),
            )
            for category in data.categories
            if category.total_spent > 0
        ]
        return MonthBreakdown(
            month=month,
            year=year,
            total_spent=data.total_spent,
            slices=slices,
        )

    def yearly_summary(self, year: int) -> YearlySummary:
        """
        Year view for the analysis screen.

        The yearly total comes from the monthly aggregates, while the
        per-category totals use get_category_spending. For past years the
        first is empty and the second is not.
        """
        monthly = self._store.get_monthly_data(year)
        total = sum((m.total_spent for m in monthly), Decimal("0"))

        category_totals: list[Category] = []
        for category in self._store.categories:
            spent = self._store.get_category_spending(category.id, year)
            if spent > 0:
                category_totals.append(category.model_copy(update={"total_spent": spent}))

        top_name, top_total = "None", Decimal("0")
        for category in category_totals:
            if category.total_spent > top_total:
                top_name, top_total = category.name, category.total_spent

        return YearlySummary(
            year=year,
            total_spent=total,
            category_totals=category_totals,
            months=[m for m in monthly if m.total_spent > 0],
            top_category_name=top_name,
            top_category_total=top_total,
            monthly_average=total / 12,
        )

    def history(self, category: Optional[str] = None) -> list[HistoryEntry]:
        """All records newest first, decorated with category icon and color."""
        by_name: dict[str, Category] = {}
        for c in self._store.categories:
            by_name.setdefault(c.name, c)

        records = self._store.spendings
        if category is not None:
            records = [r for r in records if r.category == category]
        records.sort(key=lambda r: r.date, reverse=True)

        entries = []
        for record in records:
            known = by_name.get(record.category)
            entries.append(HistoryEntry(
                record=record,
                icon=known.icon if known else DEFAULT_CATEGORY_ICON,
                color=known.color if known else GRAY,
            ))
        return entries

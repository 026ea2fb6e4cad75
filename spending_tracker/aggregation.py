"""
Monthly aggregation.

DESIGN DECISION: Aggregates are rebuilt from scratch on every change.
At one person's data volume this is cheap, and it means there is no
incremental state that can drift from the record list.

Only records from the current calendar year are aggregated. Year-scoped
category totals (SpendingStore.get_category_spending) do not apply this
filter; both behaviors are kept as they are.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from spending_tracker.models.spending import Category, MonthlyData, SpendingRecord


def compute_monthly_data(
    records: Iterable[SpendingRecord],
    categories: Sequence[Category],
    current_year: int,
) -> list[MonthlyData]:
    """
    Group current-year records by (month, year) and total them.

    Each group carries a snapshot of every known category with its own
    total. A record whose category name matches no snapshot still counts
    toward the group total but is not attributed to any category line.

    Groups appear in the order their first record appears in `records`.
    """
    group_totals: dict[tuple[str, int], Decimal] = {}
    category_totals: dict[tuple[str, int], dict[str, Decimal]] = {}

    for record in records:
        if record.year != current_year:
            continue

        key = (record.month, record.year)
        if key not in group_totals:
            group_totals[key] = Decimal("0")
            category_totals[key] = {}

        group_totals[key] += record.amount

        by_name = category_totals[key]
        by_name[record.category] = by_name.get(record.category, Decimal("0")) + record.amount

    result = []
    for (month, year), total in group_totals.items():
        by_name = category_totals[(month, year)]
        snapshots = []
        claimed: set[str] = set()
        for category in categories:
            # Duplicate names: the first category with the name takes the amount
            if category.name in claimed:
                line_total = Decimal("0")
            else:
                line_total = by_name.get(category.name, Decimal("0"))
                claimed.add(category.name)
            snapshots.append(category.model_copy(update={"total_spent": line_total}))
        result.append(
            MonthlyData(month=month, year=year, total_spent=total, categories=snapshots)
        )
    return result

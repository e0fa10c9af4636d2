"""Subtotal and grand-total aggregation over filtered rows."""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from functools import cmp_to_key

from fleet_dashboard.domain.models.records import FlatRow
from fleet_dashboard.domain.models.reporting import (
    AggregationSummary,
    GroupSubtotal,
)
from fleet_dashboard.domain.policies.status_categories import (
    StatusCategoryMap,
)
from fleet_dashboard.domain.services.sorting import compare_text


def row_amount(row: FlatRow, bucket: str | None = None) -> Decimal:
    """Return the row total, or a single bucket when one is selected."""
    if bucket is None:
        return row.total
    return row.amounts.get(bucket, Decimal("0"))


def summarize_by_group(
    rows: Iterable[FlatRow],
    level: str,
    bucket: str | None = None,
) -> AggregationSummary:
    """Sum amounts per group of the coarsest level.

    Subtotals are ordered alphabetically by label and the grand total is
    the sum of the subtotals, so both always reconcile.

    Args:
        rows: Full filtered rows, never a page slice.
        level: Grouping level to key subtotals by.
        bucket: Sum only this bucket; None sums row totals.

    Returns:
        AggregationSummary: Ordered subtotals and the grand total.
    """
    totals: dict[str, Decimal] = {}
    for row in rows:
        label = row.value(level) or ""
        totals[label] = totals.get(label, Decimal("0")) + row_amount(
            row, bucket
        )
    labels = sorted(totals, key=cmp_to_key(compare_text))
    subtotals = tuple(
        GroupSubtotal(label=label, amount=totals[label]) for label in labels
    )
    grand_total = sum(
        (subtotal.amount for subtotal in subtotals),
        Decimal("0"),
    )
    return AggregationSummary(
        level=level,
        subtotals=subtotals,
        grand_total=grand_total,
    )


def bucket_totals(
    rows: Iterable[FlatRow],
    buckets: Sequence[str],
) -> tuple[tuple[str, Decimal], ...]:
    """Return the total per bucket, in bucket order."""
    totals = {bucket: Decimal("0") for bucket in buckets}
    for row in rows:
        for bucket in buckets:
            totals[bucket] += row.amounts.get(bucket, Decimal("0"))
    return tuple((bucket, totals[bucket]) for bucket in buckets)


def count_groups(rows: Iterable[FlatRow], level: str) -> int:
    """Return the number of distinct values at a level."""
    return len({row.value(level) for row in rows})


def count_by_category(
    rows: Iterable[FlatRow],
    status_map: StatusCategoryMap,
) -> dict[str, int]:
    """Count rows per mapped status category."""
    counts = {category: 0 for category in status_map.categories}
    for row in rows:
        category = status_map.categorize(row.status)
        counts[category] = counts.get(category, 0) + 1
    return counts


__all__ = [
    "row_amount",
    "summarize_by_group",
    "bucket_totals",
    "count_groups",
    "count_by_category",
]

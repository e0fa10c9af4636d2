"""Column descriptors as a function of the status scope."""

from collections.abc import Sequence

from fleet_dashboard.domain.constants import ALL
from fleet_dashboard.domain.models.reporting import (
    COLUMN_AMOUNT,
    COLUMN_GROUP,
    COLUMN_TOTAL,
    ColumnDescriptor,
)


def resolve_bucket(
    buckets: Sequence[tuple[str, str]],
    status_scope: str | None,
) -> str | None:
    """Return the bucket key selected by a status scope.

    Matches the bucket key or label case-insensitively, then a label
    containing the scope without its "For " prefix.

    Returns:
        str | None: The bucket key, or None for "All" or no match.
    """
    if not status_scope or status_scope == ALL:
        return None
    wanted = status_scope.strip().casefold()
    for key, label in buckets:
        if wanted in (key.casefold(), label.casefold()):
            return key
    short = wanted.removeprefix("for ").strip()
    if short:
        for key, label in buckets:
            if short in label.casefold():
                return key
    return None


def build_columns(
    group_columns: Sequence[tuple[str, str]],
    buckets: Sequence[tuple[str, str]],
    status_scope: str | None = ALL,
    extra_columns: Sequence[ColumnDescriptor] = (),
) -> tuple[ColumnDescriptor, ...]:
    """Build the table columns for a status scope.

    Grouping columns and extra columns are always present. With the "All"
    scope every bucket gets a column followed by a row-total column; a
    specific status keeps only its bucket column. Views without buckets
    show one amount column. An unmatched status falls back to "All".

    Args:
        group_columns: (key, label) of the grouping levels.
        buckets: (key, label) of the status buckets; empty for
            single-amount views.
        status_scope: "All" or a status/bucket label.
        extra_columns: Columns placed after the grouping columns.

    Returns:
        tuple[ColumnDescriptor, ...]: Ordered column descriptors.
    """
    columns = [
        ColumnDescriptor(key=key, label=label, kind=COLUMN_GROUP)
        for key, label in group_columns
    ]
    columns.extend(extra_columns)
    if not buckets:
        columns.append(
            ColumnDescriptor(key="total", label="Amount", kind=COLUMN_TOTAL)
        )
        return tuple(columns)

    selected = resolve_bucket(buckets, status_scope)
    if selected is not None:
        label = dict(buckets)[selected]
        columns.append(
            ColumnDescriptor(key=selected, label=label, kind=COLUMN_AMOUNT)
        )
        return tuple(columns)

    columns.extend(
        ColumnDescriptor(key=key, label=label, kind=COLUMN_AMOUNT)
        for key, label in buckets
    )
    columns.append(
        ColumnDescriptor(key="total", label="Total", kind=COLUMN_TOTAL)
    )
    return tuple(columns)


__all__ = ["resolve_bucket", "build_columns"]

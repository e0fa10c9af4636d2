"""Row ordering with a fixed tie-break chain."""

import locale
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from functools import cmp_to_key

from fleet_dashboard.domain.models.query import SortDirection, SortSpec
from fleet_dashboard.domain.models.records import FlatRow


def _sign(value) -> int:
    return (value > 0) - (value < 0)


def compare_text(left: str, right: str) -> int:
    """Locale-aware comparison, case-insensitive first, then exact."""
    primary = locale.strcoll(left.casefold(), right.casefold())
    if primary:
        return _sign(primary)
    return _sign(locale.strcoll(left, right))


def compare_values(left, right) -> int:
    """Compare two cell values; None sorts before any value."""
    if left is None or right is None:
        return (left is not None) - (right is not None)
    if isinstance(left, (int, float, Decimal)) and isinstance(
        right, (int, float, Decimal)
    ):
        return _sign(Decimal(str(left)) - Decimal(str(right)))
    if isinstance(left, str) and isinstance(right, str):
        return compare_text(left, right)
    if isinstance(left, date) and isinstance(right, date):
        return (left > right) - (left < right)
    return compare_text(str(left), str(right))


def sort_rows(
    rows: Iterable[FlatRow],
    sort_spec: SortSpec | None,
    tie_break: Sequence[str],
) -> list[FlatRow]:
    """Order rows by the primary key, then the fixed tie-break chain.

    The primary comparison honours the requested direction. When it ties,
    each tie-break key is compared ascending regardless of direction,
    stopping at the first difference. The sort is stable, so sorting an
    already sorted list by the same spec leaves it unchanged.

    Args:
        rows: Rows to order.
        sort_spec: User-selected key and direction, or None.
        tie_break: Grouping keys, outermost first.

    Returns:
        list[FlatRow]: A new, sorted list.
    """

    def _compare(left: FlatRow, right: FlatRow) -> int:
        if sort_spec is not None:
            result = compare_values(
                left.value(sort_spec.key),
                right.value(sort_spec.key),
            )
            if sort_spec.direction == SortDirection.DESC:
                result = -result
            if result:
                return result
        for key in tie_break:
            result = compare_values(left.value(key), right.value(key))
            if result:
                return result
        return 0

    return sorted(rows, key=cmp_to_key(_compare))


def toggle_sort(current: SortSpec | None, key: str) -> SortSpec:
    """Flip direction when re-selecting the key, else sort ascending."""
    if current is not None and current.key == key:
        direction = (
            SortDirection.DESC
            if current.direction == SortDirection.ASC
            else SortDirection.ASC
        )
        return SortSpec(key=key, direction=direction)
    return SortSpec(key=key, direction=SortDirection.ASC)


def keeps_groups_contiguous(
    sort_spec: SortSpec | None,
    tie_break: Sequence[str],
) -> bool:
    """Return True when the sort cannot split an outermost group."""
    if sort_spec is None or not tie_break:
        return True
    return sort_spec.key == tie_break[0]


__all__ = [
    "compare_text",
    "compare_values",
    "sort_rows",
    "toggle_sort",
    "keeps_groups_contiguous",
]

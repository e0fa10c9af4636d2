"""Shared filter, roll-up, sort and span pipeline for report views."""

from collections.abc import Iterable
from dataclasses import dataclass

from fleet_dashboard.application.ports.record_store import RecordQuery
from fleet_dashboard.application.views import ViewDefinition
from fleet_dashboard.domain.models import (
    FilterCriteria,
    FlatRow,
    GroupNode,
    SortSpec,
    TransactionRecord,
)
from fleet_dashboard.domain.services import (
    compute_group_spans,
    flatten_records,
    rollup_rows,
    sort_rows,
)


@dataclass(frozen=True)
class ProcessedRows:
    """Rows ready for paging or export.

    Attributes:
        rows: Filtered, rolled-up, sorted rows with spans over the full list.
        record_count: Matching source records before any roll-up.
    """

    rows: tuple[FlatRow, ...]
    record_count: int


def build_store_query(criteria: FilterCriteria, limit: int) -> RecordQuery:
    """Return the store query pre-filtering by search and date."""
    date_filter = ""
    if criteria.date_interval is not None:
        date_filter = criteria.date_interval.to_filter_param()
    return RecordQuery(
        page=1,
        limit=limit,
        search=criteria.search.strip(),
        date_filter=date_filter,
    )


def process_records(
    items: Iterable[GroupNode | TransactionRecord],
    view: ViewDefinition,
    criteria: FilterCriteria,
    sort_spec: SortSpec | None,
) -> ProcessedRows:
    """Run filter, roll-up, sort and span computation in that order.

    Args:
        items: Nested or flat records from the store.
        view: View configuration.
        criteria: Filters to apply.
        sort_spec: Primary sort, or None for the tie-break chain only.

    Returns:
        ProcessedRows: Spanned rows and the matching record count.
    """
    rows = flatten_records(items)
    filtered = view.filter_pipeline().apply(rows, criteria)
    record_count = len(filtered)
    if view.rollup_attribute:
        filtered = rollup_rows(filtered, view.rollup_attribute)
    ordered = sort_rows(filtered, sort_spec, view.sort_chain)
    spanned = compute_group_spans(ordered, view.span_levels)
    return ProcessedRows(rows=tuple(spanned), record_count=record_count)


__all__ = ["ProcessedRows", "build_store_query", "process_records"]

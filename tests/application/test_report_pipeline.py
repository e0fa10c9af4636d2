"""Tests for the shared filter, roll-up, sort and span pipeline."""

from datetime import date, datetime
from decimal import Decimal

from fleet_dashboard.application.use_cases import (
    build_store_query,
    process_records,
)
from fleet_dashboard.application.views import (
    DISPATCH_SUMMARY,
    PENDING_DELIVERIES,
)
from fleet_dashboard.domain.models import (
    DateInterval,
    FilterCriteria,
    SortDirection,
    SortSpec,
    TransactionRecord,
)
from fleet_dashboard.domain.services import iter_runs, nest_flat_record


def _pending(
    order_no: str,
    customer: str,
    status: str,
    amount: str,
    day: int = 6,
):
    record = TransactionRecord(
        record_id=order_no,
        status=status,
        timestamp=datetime(2025, 1, day, 9, 0),
        amounts={"picking": Decimal(amount)},
        attributes={"order_day": f"2025-01-{day:02d}"},
    )
    return nest_flat_record(
        [("cluster", "North"), ("customer", customer), ("salesman", "Sam")],
        record,
    )


def _dispatch(record_id: str, vehicle: str, driver: str, amount: str):
    record = TransactionRecord(
        record_id=record_id,
        status="Approved",
        amounts={"amount": Decimal(amount)},
        attributes={"dp_number": f"DP-{record_id}"},
    )
    return nest_flat_record(
        [("vehicle", vehicle), ("driver", driver), ("customer", "Acme")],
        record,
    )


def test_build_store_query_forwards_search_and_dates() -> None:
    """Store queries should carry the trimmed search and date filter."""
    criteria = FilterCriteria(
        date_interval=DateInterval(date(2025, 1, 6), date(2025, 1, 12)),
        search="  acme ",
    )

    query = build_store_query(criteria, 200)

    assert query.page == 1
    assert query.limit == 200
    assert query.search == "acme"
    assert query.date_filter == "2025-01-06T00:00:00,2025-01-12T23:59:59"
    assert build_store_query(FilterCriteria(), 10).date_filter == ""


def test_pending_orders_are_rolled_up_after_filtering() -> None:
    """Pending orders should be rolled up after filtering."""
    items = [
        _pending("SO-1", "Acme", "For Picking", "100"),
        _pending("SO-2", "Acme", "For Picking", "50"),
        _pending("SO-3", "Acme", "Delivered", "999"),
        _pending("SO-4", "Beta", "For Picking", "70", day=7),
    ]

    processed = process_records(
        items, PENDING_DELIVERIES, FilterCriteria(), None
    )

    assert processed.record_count == 3
    assert len(processed.rows) == 2
    assert processed.rows[0].total == Decimal("150")
    assert [row.spans for row in processed.rows] == [(2, 1), (0, 1)]


def test_rows_are_sorted_and_spanned_over_full_list() -> None:
    """Rows should be sorted and spanned over the full list."""
    items = [
        _dispatch("1", "TRK-2", "Ben", "10"),
        _dispatch("2", "TRK-1", "Amy", "30"),
        _dispatch("3", "TRK-1", "Amy", "20"),
    ]

    by_chain = process_records(items, DISPATCH_SUMMARY, FilterCriteria(), None)
    by_amount = process_records(
        items,
        DISPATCH_SUMMARY,
        FilterCriteria(),
        SortSpec(key="total", direction=SortDirection.DESC),
    )

    assert [row.record_id for row in by_chain.rows] == ["2", "3", "1"]
    assert [row.spans for row in by_chain.rows] == [(2, 2), (0, 0), (1, 1)]
    assert [row.record_id for row in by_amount.rows] == ["2", "3", "1"]
    assert by_chain.record_count == 3


def test_amount_sort_keeps_span_conservation_across_runs() -> None:
    """A vehicle split by an amount sort should get one span per run."""
    items = [
        _dispatch("1", "TRK-1", "Amy", "30"),
        _dispatch("2", "TRK-2", "Ben", "20"),
        _dispatch("3", "TRK-1", "Amy", "10"),
    ]

    processed = process_records(
        items,
        DISPATCH_SUMMARY,
        FilterCriteria(),
        SortSpec(key="total", direction=SortDirection.DESC),
    )

    assert [row.record_id for row in processed.rows] == ["1", "2", "3"]
    assert [row.spans for row in processed.rows] == [(1, 1), (1, 1), (1, 1)]
    assert iter_runs(processed.rows, 0) == [(0, 1), (1, 1), (2, 1)]


def test_rolled_up_days_are_ordered_within_a_salesman() -> None:
    """Same customer and salesman on different days should sort by day."""
    items = [
        _pending("SO-1", "Acme", "For Picking", "10", day=8),
        _pending("SO-2", "Acme", "For Picking", "20", day=6),
        _pending("SO-3", "Acme", "For Picking", "30", day=7),
    ]

    processed = process_records(
        items, PENDING_DELIVERIES, FilterCriteria(), None
    )

    assert [row.value("order_day") for row in processed.rows] == [
        "2025-01-06",
        "2025-01-07",
        "2025-01-08",
    ]
    assert [row.total for row in processed.rows] == [
        Decimal("20"),
        Decimal("30"),
        Decimal("10"),
    ]

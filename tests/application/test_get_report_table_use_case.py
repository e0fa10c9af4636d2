"""Tests for the GetReportTableUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from fleet_dashboard.application.ports import RecordPage, RecordQuery
from fleet_dashboard.application.use_cases import (
    GetReportTableUseCase,
    TableRequest,
)
from fleet_dashboard.application.views import (
    DISPATCH_SUMMARY,
    LOGISTICS_SUMMARY,
)
from fleet_dashboard.domain.models import (
    FilterCriteria,
    SortDirection,
    SortSpec,
    TransactionRecord,
)
from fleet_dashboard.domain.services import nest_flat_record


class _FakeStore:
    def __init__(self, items) -> None:
        self._items = tuple(items)
        self.queries: list[RecordQuery] = []

    def fetch_page(self, query: RecordQuery) -> RecordPage:
        self.queries.append(query)
        start = (query.page - 1) * query.limit
        return RecordPage(
            items=self._items[start:start + query.limit],
            filter_count=len(self._items),
        )


def _delivery(
    record_id: str,
    chain: tuple[str, str, str, str],
    bucket: str,
    amount: str,
    status: str,
):
    record = TransactionRecord(
        record_id=record_id,
        status=status,
        amounts={bucket: Decimal(amount)},
        attributes={"town_city": "Cebu"},
    )
    levels = ("vehicle", "driver", "cluster", "customer")
    return nest_flat_record(list(zip(levels, chain)), record)


_ITEMS = [
    _delivery(
        "1", ("TRK-1", "Amy", "North", "Acme"), "fulfilled", "100", "Fulfilled"
    ),
    _delivery(
        "2",
        ("TRK-1", "Amy", "North", "Beta"),
        "not_fulfilled",
        "250",
        "Not Fulfilled",
    ),
    _delivery(
        "3", ("TRK-2", "Ben", "South", "Acme"), "fulfilled", "500", "Fulfilled"
    ),
]


def _use_case(items=_ITEMS, view=LOGISTICS_SUMMARY, **kwargs):
    store = _FakeStore(items)
    use_case = GetReportTableUseCase(
        record_store=store,
        view=view,
        logger=MagicMock(),
        **kwargs,
    )
    return use_case, store


def test_returns_page_with_full_set_aggregates() -> None:
    """Use case should page rows while aggregating the full set."""
    use_case, _ = _use_case(page_size=2)

    result = use_case.execute(TableRequest())

    assert [row.record_id for row in result.page.rows] == ["1", "2"]
    assert result.page.total_rows == 3
    assert result.page.total_pages == 2
    assert result.record_count == 3
    assert result.group_count == 2
    assert result.summary.subtotal_for("TRK-1") == Decimal("350")
    assert result.summary.subtotal_for("TRK-2") == Decimal("500")
    assert result.summary.grand_total == Decimal("850")
    assert dict(result.bucket_totals) == {
        "fulfilled": Decimal("600"),
        "not_fulfilled": Decimal("250"),
        "fulfilled_with_returns": Decimal("0"),
        "fulfilled_with_concerns": Decimal("0"),
    }
    assert result.category_counts == {}
    assert result.grouping_contiguous


def test_second_page_keeps_spans_from_full_list() -> None:
    """Later pages should keep spans computed over the full list."""
    use_case, _ = _use_case(page_size=2)

    result = use_case.execute(TableRequest(page=2))

    assert [row.record_id for row in result.page.rows] == ["3"]
    assert result.page.rows[0].spans == (1, 1, 1)


def test_status_scope_filters_rows_and_columns() -> None:
    """A status scope should narrow both rows and columns."""
    use_case, _ = _use_case()

    result = use_case.execute(TableRequest(status_scope="Not Fulfilled"))

    assert [row.record_id for row in result.page.rows] == ["2"]
    assert result.columns[-1].key == "not_fulfilled"
    assert result.summary.grand_total == Decimal("250")


def test_fetches_every_store_page() -> None:
    """Use case should read every store page before processing."""
    use_case, store = _use_case(fetch_page_size=1)

    result = use_case.execute(
        TableRequest(criteria=FilterCriteria(search=" acme "))
    )

    assert result.record_count == 2
    assert [query.page for query in store.queries] == [1, 2, 3]
    assert store.queries[0].search == "acme"


def test_non_grouping_sort_is_flagged() -> None:
    """Sorting by a non-grouping column should be flagged."""
    use_case, _ = _use_case()

    result = use_case.execute(TableRequest(sort=SortSpec(key="total")))

    assert not result.grouping_contiguous
    assert [row.record_id for row in result.page.rows] == ["1", "2", "3"]


def test_category_counts_for_mapped_views() -> None:
    """Mapped views should count records per status category."""
    record = TransactionRecord(
        record_id="9",
        status="In Transit",
        amounts={"amount": Decimal("5")},
    )
    item = nest_flat_record(
        [("vehicle", "TRK-1"), ("driver", "Amy"), ("customer", "Acme")],
        record,
    )
    use_case, _ = _use_case(items=[item], view=DISPATCH_SUMMARY)

    result = use_case.execute(TableRequest())

    assert result.category_counts["For Inbound"] == 1
    assert result.category_counts["For Dispatch"] == 0
    assert result.bucket_totals == ()
    assert use_case.view is DISPATCH_SUMMARY


def test_sort_by_amount_splits_a_vehicle_into_runs() -> None:
    """Sorting by total should interleave vehicles into separate runs."""
    items = [
        _delivery(
            "a", ("TRK-1", "Amy", "North", "Acme"), "fulfilled", "30", "F"
        ),
        _delivery(
            "b", ("TRK-2", "Ben", "North", "Beta"), "fulfilled", "20", "F"
        ),
        _delivery(
            "c", ("TRK-1", "Amy", "South", "Core"), "fulfilled", "10", "F"
        ),
    ]
    use_case, _ = _use_case(items=items)

    result = use_case.execute(
        TableRequest(sort=SortSpec(key="total", direction=SortDirection.DESC))
    )

    rows = result.page.rows
    assert [row.key_for("vehicle") for row in rows] == [
        "TRK-1",
        "TRK-2",
        "TRK-1",
    ]
    assert [row.spans[0] for row in rows] == [1, 1, 1]
    assert sum(row.spans[0] for row in rows) == len(rows)
    assert result.grouping_contiguous is False
    assert result.summary.subtotals[0].amount == Decimal("40")

"""Tests for the report view definitions."""

import pytest

from fleet_dashboard.application.views import (
    DISPATCH_SUMMARY,
    LOGISTICS_SUMMARY,
    PENDING_DELIVERIES,
    VIEWS,
    get_view,
)
from fleet_dashboard.domain.constants import ALL
from fleet_dashboard.domain.models import FilterCriteria


def test_views_are_registered_by_report_type() -> None:
    """Every view should be registered under its report type."""
    assert set(VIEWS) == {
        "logistics_summary",
        "pending_deliveries",
        "dispatch_summary",
    }
    assert get_view("dispatch_summary") is DISPATCH_SUMMARY


def test_get_view_rejects_unknown_type() -> None:
    """Unknown report types should raise."""
    with pytest.raises(ValueError, match="Unknown report view"):
        get_view("payroll")


def test_summary_level_is_outermost_tie_break() -> None:
    """Summary level should be the outermost grouping key."""
    assert LOGISTICS_SUMMARY.summary_level == "vehicle"
    assert PENDING_DELIVERIES.summary_level == "cluster"


def test_status_options() -> None:
    """Status options should start with All."""
    assert LOGISTICS_SUMMARY.status_options() == (
        ALL,
        "Fulfilled",
        "Not Fulfilled",
        "Fulfilled w/ Returns",
        "Fulfilled w/ Concerns",
    )
    assert DISPATCH_SUMMARY.status_options() == (
        ALL,
        "For Dispatch",
        "For Inbound",
        "For Clearance",
    )


def test_with_status_uses_view_mode() -> None:
    """Status scopes should filter by category or raw status per view."""
    criteria = FilterCriteria(search="acme")

    raw = LOGISTICS_SUMMARY.with_status(criteria, "Not Fulfilled")
    category = PENDING_DELIVERIES.with_status(criteria, "For Picking")
    unscoped = DISPATCH_SUMMARY.with_status(criteria, ALL)

    assert raw.raw_status == "Not Fulfilled"
    assert raw.status_category is None
    assert category.status_category == "For Picking"
    assert unscoped is criteria


def test_columns_follow_status_scope() -> None:
    """View columns should follow the status scope."""
    all_columns = [column.key for column in LOGISTICS_SUMMARY.columns(ALL)]
    scoped = [
        column.key for column in LOGISTICS_SUMMARY.columns("Fulfilled")
    ]
    dispatch = [column.key for column in DISPATCH_SUMMARY.columns()]

    assert all_columns[-1] == "total"
    assert scoped[-1] == "fulfilled"
    assert "total" not in scoped
    assert dispatch == [
        "vehicle",
        "driver",
        "customer",
        "dp_number",
        "salesman",
        "status",
        "total",
    ]


def test_pending_sort_chain_ends_with_order_day() -> None:
    """Pending rows should sort by day last without adding a column."""
    group_keys = [
        column.key
        for column in PENDING_DELIVERIES.columns()
        if column.kind == "group"
    ]

    assert PENDING_DELIVERIES.sort_chain == (
        "cluster",
        "customer",
        "salesman",
        "order_day",
    )
    assert group_keys == ["cluster", "customer", "salesman"]
    assert DISPATCH_SUMMARY.sort_chain == DISPATCH_SUMMARY.tie_break

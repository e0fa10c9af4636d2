"""Tests for rolling rows up by key chain and attribute."""

from datetime import datetime
from decimal import Decimal

from fleet_dashboard.domain.models import FlatRow
from fleet_dashboard.domain.services.rollup import MIXED_STATUS, rollup_rows


def _row(
    record_id: str,
    customer: str,
    day: str,
    amount: str,
    status: str = "For Picking",
    hour: int = 8,
) -> FlatRow:
    return FlatRow(
        record_id=record_id,
        levels=("cluster", "customer"),
        keys=("North", customer),
        status=status,
        timestamp=datetime(2025, 1, int(day[-2:]), hour, 0),
        amounts={"picking": Decimal(amount)},
        attributes={"order_day": day},
        total=Decimal(amount),
    )


def test_rows_sharing_keys_and_day_are_merged() -> None:
    """Rows sharing keys and day should be merged."""
    rows = [
        _row("A-1", "Acme", "2025-01-06", "100", hour=10),
        _row("B-1", "Beta", "2025-01-06", "70"),
        _row("A-2", "Acme", "2025-01-06", "50", hour=7),
        _row("A-3", "Acme", "2025-01-07", "20"),
    ]

    result = rollup_rows(rows, "order_day")

    assert len(result) == 3
    merged = result[0]
    assert merged.keys == ("North", "Acme")
    assert merged.amounts == {"picking": Decimal("150")}
    assert merged.total == Decimal("150")
    assert merged.timestamp == datetime(2025, 1, 6, 7, 0)
    assert merged.status == "For Picking"
    assert [row.keys[1] for row in result] == ["Acme", "Beta", "Acme"]


def test_differing_status_becomes_mixed() -> None:
    """Merged rows with different statuses should be Mixed."""
    rows = [
        _row("A-1", "Acme", "2025-01-06", "100"),
        _row("A-2", "Acme", "2025-01-06", "50", status="For Loading"),
    ]

    result = rollup_rows(rows, "order_day")

    assert result[0].status == MIXED_STATUS


def test_rollup_does_not_mutate_input() -> None:
    """Roll-up should leave its input rows untouched."""
    rows = [
        _row("A-1", "Acme", "2025-01-06", "100"),
        _row("A-2", "Acme", "2025-01-06", "50"),
    ]

    rollup_rows(rows, "order_day")

    assert rows[0].amounts == {"picking": Decimal("100")}

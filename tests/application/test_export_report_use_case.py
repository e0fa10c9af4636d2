"""Tests for the ExportReportUseCase."""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fleet_dashboard.application.errors import (
    RecordStoreError,
    ReportExportError,
)
from fleet_dashboard.application.ports import RecordPage
from fleet_dashboard.application.use_cases import (
    ExportReportUseCase,
    ExportScope,
)
from fleet_dashboard.application.use_cases import export_report
from fleet_dashboard.application.views import PENDING_DELIVERIES
from fleet_dashboard.domain.models import (
    DateInterval,
    FilterCriteria,
    TransactionRecord,
)
from fleet_dashboard.domain.services import nest_flat_record


class _FakeRenderer:
    extension = "txt"

    def __init__(self) -> None:
        self.documents = []

    def render(self, document) -> bytes:
        self.documents.append(document)
        return f"{len(document.rows)} rows".encode()


def _order(order_no: str, cluster: str, status: str, bucket: str, amount):
    record = TransactionRecord(
        record_id=order_no,
        status=status,
        timestamp=datetime(2025, 1, 7, 10, 0),
        amounts={bucket: Decimal(amount)},
        attributes={"order_day": "2025-01-07"},
    )
    return nest_flat_record(
        [("cluster", cluster), ("customer", order_no), ("salesman", "Sam")],
        record,
    )


_ITEMS = (
    _order("SO-1", "North", "For Picking", "picking", "100"),
    _order("SO-2", "North", "For Approval", "approval", "250"),
    _order("SO-3", "South", "For Picking", "picking", "50"),
)


def _store(items=_ITEMS) -> MagicMock:
    store = MagicMock()
    store.fetch_page.return_value = RecordPage(items=items)
    return store


def _use_case(tmp_path: Path, store=None, renderer=None):
    usage_logger = MagicMock()
    use_case = ExportReportUseCase(
        record_store=store or _store(),
        renderer=renderer or _FakeRenderer(),
        view=PENDING_DELIVERIES,
        output_dir=tmp_path / "exports",
        logger=MagicMock(),
        usage_logger=usage_logger,
        clock=lambda: datetime(2025, 1, 8, 17, 30),
    )
    return use_case, usage_logger


def test_export_writes_named_file(tmp_path: Path) -> None:
    """Export should write a file named after the view and date."""
    renderer = _FakeRenderer()
    use_case, usage_logger = _use_case(tmp_path, renderer=renderer)
    scope = ExportScope(
        criteria=FilterCriteria(
            date_interval=DateInterval(date(2025, 1, 6), date(2025, 1, 12))
        ),
        range_id="this-week",
    )

    result = use_case.execute(scope)

    assert result.path == tmp_path / "exports" / (
        "pending_deliveries_2025-01-08.txt"
    )
    assert result.path.read_bytes() == b"3 rows"
    assert list(result.path.parent.glob("*.tmp")) == []
    document = renderer.documents[0]
    assert document.header.title == "Delivery Monitor"
    assert document.header.period_label.startswith("This Week (")
    assert document.header.filter_summary == "No filters"
    usage_logger.info.assert_called_once()


def test_summary_matches_exported_table(tmp_path: Path) -> None:
    """Summary subtotals should reconcile with the exported rows."""
    use_case, _ = _use_case(tmp_path)

    document = use_case.build_document(
        ExportScope(status_scope="For Picking")
    )

    assert [row.record_id for row in document.rows] == [
        "North||SO-1||Sam||2025-01-07",
        "South||SO-3||Sam||2025-01-07",
    ]
    assert document.summary.grand_total == Decimal("150")
    assert document.summary.subtotal_for("North") == Decimal("100")
    assert document.bucket_totals == (("picking", Decimal("150")),)
    assert [column.key for column in document.columns][-1] == "picking"
    assert document.record_count == 2
    assert document.span_levels == PENDING_DELIVERIES.span_levels


def test_all_scope_totals_every_bucket(tmp_path: Path) -> None:
    """The All scope should total every status bucket."""
    use_case, _ = _use_case(tmp_path)

    document = use_case.build_document(ExportScope())

    totals = dict(document.bucket_totals)
    assert totals["picking"] == Decimal("150")
    assert totals["approval"] == Decimal("250")
    assert document.summary.grand_total == sum(totals.values())


def test_empty_result_still_exports(tmp_path: Path) -> None:
    """An empty result should still produce a report file."""
    use_case, _ = _use_case(tmp_path, store=_store(items=()))

    result = use_case.execute(ExportScope())

    assert result.document.is_empty
    assert result.path.exists()


def test_render_failure_writes_nothing(tmp_path: Path) -> None:
    """A render failure should leave no file behind."""
    renderer = MagicMock()
    renderer.extension = "xlsx"
    renderer.render.side_effect = RuntimeError("boom")
    use_case, _ = _use_case(tmp_path, renderer=renderer)

    with pytest.raises(ReportExportError, match="boom"):
        use_case.execute(ExportScope())

    assert not (tmp_path / "exports").exists()


def test_write_failure_leaves_no_partial_file(
    tmp_path: Path,
    monkeypatch,
) -> None:
    """A write failure should remove the temporary file."""
    use_case, _ = _use_case(tmp_path)

    def _fail_replace(src, dst) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(export_report.os, "replace", _fail_replace)

    with pytest.raises(ReportExportError, match="disk full"):
        use_case.execute(ExportScope())

    assert list((tmp_path / "exports").iterdir()) == []


def test_store_failure_propagates(tmp_path: Path) -> None:
    """Export should surface store failures."""
    store = MagicMock()
    store.fetch_page.side_effect = RecordStoreError("timeout")
    use_case, _ = _use_case(tmp_path, store=store)

    with pytest.raises(RecordStoreError):
        use_case.execute(ExportScope())

    assert not (tmp_path / "exports").exists()

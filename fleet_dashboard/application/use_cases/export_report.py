"""Use case to export a complete report view to a file."""

import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from fleet_dashboard.application.cancellation import CancellationToken
from fleet_dashboard.application.collector import collect_records
from fleet_dashboard.application.errors import ReportExportError
from fleet_dashboard.application.ports.record_store import RecordStorePort
from fleet_dashboard.application.ports.report_renderer import (
    ReportRendererPort,
)
from fleet_dashboard.application.use_cases.report_pipeline import (
    build_store_query,
    process_records,
)
from fleet_dashboard.application.views import ViewDefinition
from fleet_dashboard.domain.constants import ALL
from fleet_dashboard.domain.models import (
    FilterCriteria,
    ReportDocument,
    ReportHeader,
    SortSpec,
)
from fleet_dashboard.domain.services import (
    bucket_totals,
    describe_period,
    resolve_bucket,
    summarize_by_group,
)
from fleet_dashboard.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


@dataclass(frozen=True)
class ExportScope:
    """Filters and sort the export re-applies to the full dataset.

    Attributes:
        criteria: Date, dimension and search filters.
        sort: Primary sort, or None for the tie-break chain only.
        status_scope: Status category, raw status or ``All``.
        range_id: Date range identifier used for the period label.
    """

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec | None = None
    status_scope: str = ALL
    range_id: str | None = None


@dataclass(frozen=True)
class ExportResult:
    """Written export file and the document it was rendered from."""

    path: Path
    document: ReportDocument


class ExportReportUseCase:
    """Assemble, render and write a report for one view."""

    def __init__(
        self,
        record_store: RecordStorePort,
        renderer: ReportRendererPort,
        view: ViewDefinition,
        output_dir: Path,
        logger=None,
        usage_logger=None,
        clock: Callable[[], datetime] | None = None,
        fetch_page_size: int = 200,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port serving the view's records.
            renderer: Port turning a report document into file bytes.
            view: View configuration.
            output_dir: Directory receiving export files.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording completed exports.
            clock: Callable returning the generation timestamp.
            fetch_page_size: Items requested per store page.
        """
        self._record_store = record_store
        self._renderer = renderer
        self._view = view
        self._output_dir = Path(output_dir)
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._clock = clock or datetime.now
        self._fetch_page_size = fetch_page_size

    def build_document(
        self,
        scope: ExportScope,
        cancel_token: CancellationToken | None = None,
    ) -> ReportDocument:
        """Collect every matching record and assemble the report.

        The summary is computed over exactly the rows of the main table.

        Args:
            scope: Filters, sort and status scope to apply.
            cancel_token: Optional token aborting the store paging.

        Returns:
            ReportDocument: Header, table, summary and bucket totals.
        """
        view = self._view
        criteria = view.with_status(scope.criteria, scope.status_scope)
        items = collect_records(
            self._record_store,
            build_store_query(criteria, self._fetch_page_size),
            cancel_token=cancel_token,
            logger=self._logger,
        )
        processed = process_records(items, view, criteria, scope.sort)
        rows = processed.rows
        bucket = resolve_bucket(view.buckets, scope.status_scope)
        columns = view.columns(scope.status_scope)
        shown_buckets = tuple(
            column.key for column in columns if column.key in view.bucket_keys
        )
        header = ReportHeader(
            title=view.title,
            report_type=view.report_type,
            period_label=describe_period(
                scope.range_id, criteria.date_interval
            ),
            generated_at=self._clock(),
            filter_summary=criteria.describe(),
        )
        return ReportDocument(
            header=header,
            columns=columns,
            rows=rows,
            summary=summarize_by_group(rows, view.summary_level, bucket),
            bucket_totals=bucket_totals(rows, shown_buckets),
            record_count=processed.record_count,
            span_levels=view.span_levels,
        )

    def execute(
        self,
        scope: ExportScope,
        cancel_token: CancellationToken | None = None,
    ) -> ExportResult:
        """Export the view and write the file atomically.

        Args:
            scope: Filters, sort and status scope to apply.
            cancel_token: Optional token aborting the store paging.

        Returns:
            ExportResult: Path of the written file and its document.

        Raises:
            RecordStoreError: If the records cannot be fetched.
            OperationCancelledError: If the token is cancelled.
            ReportExportError: If rendering or writing fails.
        """
        document = self.build_document(scope, cancel_token)
        if document.is_empty:
            self._logger.warning(
                f"Exporting empty {self._view.report_type} report"
            )
        try:
            payload = self._renderer.render(document)
        except Exception as exc:
            self._logger.error(f"Failed to render report: {exc}")
            raise ReportExportError(f"Failed to render report: {exc}") from exc

        path = self._output_dir / document.filename(self._renderer.extension)
        self._write_atomic(path, payload)
        self._logger.info(
            f"Exported {len(document.rows)} rows to {path.as_posix()}"
        )
        self._usage_logger.info(
            f"export report={document.header.report_type} "
            f"rows={len(document.rows)} "
            f"filters={document.header.filter_summary}"
        )
        return ExportResult(path=path, document=document)

    def _write_atomic(self, path: Path, payload: bytes) -> None:
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            self._logger.error(f"Failed to write report {path}: {exc}")
            raise ReportExportError(
                f"Failed to write report {path}: {exc}"
            ) from exc


__all__ = ["ExportScope", "ExportResult", "ExportReportUseCase"]

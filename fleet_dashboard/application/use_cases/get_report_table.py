"""Use case producing the on-screen report table for a view."""

from dataclasses import dataclass, field
from decimal import Decimal

from fleet_dashboard.application.cancellation import CancellationToken
from fleet_dashboard.application.collector import collect_records
from fleet_dashboard.application.ports.record_store import RecordStorePort
from fleet_dashboard.application.use_cases.report_pipeline import (
    build_store_query,
    process_records,
)
from fleet_dashboard.application.views import ViewDefinition
from fleet_dashboard.domain.constants import ALL
from fleet_dashboard.domain.models import (
    AggregationSummary,
    ColumnDescriptor,
    FilterCriteria,
    Page,
    SortSpec,
)
from fleet_dashboard.domain.services import (
    bucket_totals,
    count_by_category,
    count_groups,
    keeps_groups_contiguous,
    paginate,
    resolve_bucket,
    summarize_by_group,
)
from fleet_dashboard.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class TableRequest:
    """Filters, sort and page requested by the live view."""

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec | None = None
    page: int = 1
    status_scope: str = ALL


@dataclass(frozen=True)
class ReportTableView:
    """Everything the live view renders for one request.

    Attributes:
        page: Current page of spanned rows.
        columns: Column descriptors for the status scope.
        summary: Subtotals per outermost group over all filtered rows.
        bucket_totals: Total per status bucket over all filtered rows.
        record_count: Matching source records.
        group_count: Distinct outermost groups.
        category_counts: Rows per status category, when the view maps
            statuses.
        grouping_contiguous: False when the sort may split groups into
            several runs.
    """

    page: Page
    columns: tuple[ColumnDescriptor, ...]
    summary: AggregationSummary
    bucket_totals: tuple[tuple[str, Decimal], ...]
    record_count: int
    group_count: int
    category_counts: dict[str, int]
    grouping_contiguous: bool


class GetReportTableUseCase:
    """Fetch, process and page the rows of one report view."""

    def __init__(
        self,
        record_store: RecordStorePort,
        view: ViewDefinition,
        logger=None,
        page_size: int | None = None,
        fetch_page_size: int = 200,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port serving the view's records.
            view: View configuration.
            logger: Optional logger compatible with logging.Logger-like API.
            page_size: Rows per on-screen page; defaults to the view's.
            fetch_page_size: Items requested per store page.
        """
        self._record_store = record_store
        self._view = view
        self._logger = logger or get_app_logger()
        self._page_size = page_size or view.page_size
        self._fetch_page_size = fetch_page_size

    @property
    def view(self) -> ViewDefinition:
        return self._view

    def execute(
        self,
        request: TableRequest,
        cancel_token: CancellationToken | None = None,
    ) -> ReportTableView:
        """Return the requested page plus full-set aggregates.

        Args:
            request: Filters, sort, page and status scope.
            cancel_token: Optional token aborting the store paging.

        Returns:
            ReportTableView: Page, columns and aggregates.
        """
        view = self._view
        criteria = view.with_status(request.criteria, request.status_scope)
        items = collect_records(
            self._record_store,
            build_store_query(criteria, self._fetch_page_size),
            cancel_token=cancel_token,
            logger=self._logger,
        )
        processed = process_records(items, view, criteria, request.sort)
        self._logger.info(
            f"{view.report_type}: {processed.record_count} matching records, "
            f"{len(processed.rows)} rows"
        )

        rows = processed.rows
        page = paginate(rows, request.page, self._page_size)
        bucket = resolve_bucket(view.buckets, request.status_scope)
        summary = summarize_by_group(rows, view.summary_level, bucket)
        category_counts = (
            count_by_category(rows, view.status_map)
            if view.status_map is not None
            else {}
        )
        return ReportTableView(
            page=page,
            columns=view.columns(request.status_scope),
            summary=summary,
            bucket_totals=bucket_totals(rows, view.bucket_keys),
            record_count=processed.record_count,
            group_count=count_groups(rows, view.summary_level),
            category_counts=category_counts,
            grouping_contiguous=keeps_groups_contiguous(
                request.sort, view.tie_break
            ),
        )


__all__ = ["TableRequest", "ReportTableView", "GetReportTableUseCase"]

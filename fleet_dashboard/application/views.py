"""View definitions configuring the shared reporting pipeline.

Each dashboard view (logistics summary, pending deliveries, dispatch
summary) is a value of ``ViewDefinition``; the pipeline itself is shared.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from fleet_dashboard.domain.constants import (
    ALL,
    DEFAULT_PAGE_SIZE,
    DISPATCH_ACTIVE_CATEGORIES,
    DISPATCH_STATUS_CATEGORIES,
    LEVEL_CLUSTER,
    LEVEL_CUSTOMER,
    LEVEL_DRIVER,
    LEVEL_SALESMAN,
    LEVEL_VEHICLE,
    LOGISTICS_BUCKETS,
    PENDING_BUCKETS,
    PENDING_EXCLUDED_STATUSES,
    PENDING_STATUS_KEYWORDS,
)
from fleet_dashboard.domain.models import ColumnDescriptor, FilterCriteria
from fleet_dashboard.domain.models.reporting import COLUMN_DATE, COLUMN_TEXT
from fleet_dashboard.domain.policies import StatusCategoryMap
from fleet_dashboard.domain.services import FilterPipeline, build_columns

STATUS_BY_CATEGORY = "category"
STATUS_BY_RAW = "raw"

LEVEL_LABELS = {
    LEVEL_VEHICLE: "Truck Plate",
    LEVEL_DRIVER: "Driver",
    LEVEL_CLUSTER: "Cluster",
    LEVEL_CUSTOMER: "Customer",
    LEVEL_SALESMAN: "Salesman",
}


@dataclass(frozen=True)
class ViewDefinition:
    """Configuration of one report view.

    Attributes:
        report_type: Identifier used in export filenames.
        title: Human-readable title.
        tie_break: Grouping keys, outermost first; also the fixed
            secondary sort chain.
        span_levels: Levels rendered as merged cells.
        buckets: (key, label) status buckets; empty for single-amount views.
        search_fields: Fields matched by free-text search.
        dimension_fields: Fields offered as equality filters.
        status_map: Raw status to category mapping.
        status_mode: Whether status filters compare categories or raw
            statuses.
        excluded_statuses: Normalized raw statuses never listed.
        visible_categories: Categories listed; empty lists all.
        rollup_attribute: Attribute completing the roll-up key, if rows
            are rolled up.
        extra_columns: Columns after the grouping columns.
        sort_tail: Keys appended after the tie-break chain when sorting.
        page_size: Rows per on-screen page.
    """

    report_type: str
    title: str
    tie_break: tuple[str, ...]
    span_levels: tuple[str, ...]
    buckets: tuple[tuple[str, str], ...] = ()
    search_fields: tuple[str, ...] = ()
    dimension_fields: tuple[str, ...] = ()
    status_map: StatusCategoryMap | None = None
    status_mode: str = STATUS_BY_CATEGORY
    excluded_statuses: frozenset[str] = frozenset()
    visible_categories: tuple[str, ...] = ()
    rollup_attribute: str | None = None
    extra_columns: tuple[ColumnDescriptor, ...] = ()
    sort_tail: tuple[str, ...] = ()
    page_size: int = DEFAULT_PAGE_SIZE
    level_labels: Mapping[str, str] = field(
        default_factory=lambda: dict(LEVEL_LABELS)
    )

    @property
    def summary_level(self) -> str:
        return self.tie_break[0]

    @property
    def sort_chain(self) -> tuple[str, ...]:
        return self.tie_break + self.sort_tail

    @property
    def bucket_keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.buckets)

    def filter_pipeline(self) -> FilterPipeline:
        return FilterPipeline(
            search_fields=self.search_fields,
            status_map=self.status_map,
            excluded_statuses=self.excluded_statuses,
            visible_categories=self.visible_categories,
        )

    def columns(self, status_scope: str | None = ALL):
        """Return the table columns for a status scope."""
        group_columns = [
            (level, self.level_labels.get(level, level.title()))
            for level in self.tie_break
        ]
        return build_columns(
            group_columns,
            self.buckets,
            status_scope,
            extra_columns=self.extra_columns,
        )

    def status_options(self) -> tuple[str, ...]:
        """Return the status choices offered by filters and exports."""
        if self.visible_categories:
            return (ALL,) + self.visible_categories
        if self.buckets:
            return (ALL,) + tuple(label for _, label in self.buckets)
        return (ALL,)

    def with_status(
        self,
        criteria: FilterCriteria,
        status_scope: str | None,
    ) -> FilterCriteria:
        """Return criteria restricted to a status scope."""
        if not status_scope or status_scope == ALL:
            return criteria
        if self.status_mode == STATUS_BY_RAW:
            return replace(criteria, raw_status=status_scope)
        return replace(criteria, status_category=status_scope)


LOGISTICS_SUMMARY = ViewDefinition(
    report_type="logistics_summary",
    title="Logistics Summary",
    tie_break=(LEVEL_VEHICLE, LEVEL_DRIVER, LEVEL_CLUSTER, LEVEL_CUSTOMER),
    span_levels=(LEVEL_VEHICLE, LEVEL_DRIVER, LEVEL_CLUSTER),
    buckets=LOGISTICS_BUCKETS,
    search_fields=(LEVEL_VEHICLE, LEVEL_DRIVER, LEVEL_CUSTOMER, LEVEL_CLUSTER),
    dimension_fields=(
        LEVEL_VEHICLE,
        LEVEL_DRIVER,
        LEVEL_CLUSTER,
        LEVEL_CUSTOMER,
    ),
    status_mode=STATUS_BY_RAW,
    extra_columns=(
        ColumnDescriptor(key="town_city", label="Town/City", kind=COLUMN_TEXT),
    ),
)

PENDING_DELIVERIES = ViewDefinition(
    report_type="pending_deliveries",
    title="Delivery Monitor",
    tie_break=(LEVEL_CLUSTER, LEVEL_CUSTOMER, LEVEL_SALESMAN),
    span_levels=(LEVEL_CLUSTER, LEVEL_CUSTOMER),
    buckets=PENDING_BUCKETS,
    search_fields=(LEVEL_CUSTOMER, LEVEL_SALESMAN),
    dimension_fields=(LEVEL_CLUSTER, LEVEL_CUSTOMER, LEVEL_SALESMAN),
    status_map=StatusCategoryMap(keywords=PENDING_STATUS_KEYWORDS),
    excluded_statuses=PENDING_EXCLUDED_STATUSES,
    rollup_attribute="order_day",
    extra_columns=(
        ColumnDescriptor(key="order_day", label="Date", kind=COLUMN_DATE),
    ),
    sort_tail=("order_day",),
)

DISPATCH_SUMMARY = ViewDefinition(
    report_type="dispatch_summary",
    title="Dispatch Summary",
    tie_break=(LEVEL_VEHICLE, LEVEL_DRIVER, LEVEL_CUSTOMER),
    span_levels=(LEVEL_VEHICLE, LEVEL_DRIVER),
    search_fields=(
        LEVEL_VEHICLE,
        LEVEL_DRIVER,
        LEVEL_SALESMAN,
        LEVEL_CUSTOMER,
        "dp_number",
    ),
    dimension_fields=(LEVEL_VEHICLE, LEVEL_DRIVER, LEVEL_SALESMAN),
    status_map=StatusCategoryMap(table=DISPATCH_STATUS_CATEGORIES),
    visible_categories=DISPATCH_ACTIVE_CATEGORIES,
    extra_columns=(
        ColumnDescriptor(key="dp_number", label="DP Number", kind=COLUMN_TEXT),
        ColumnDescriptor(key="salesman", label="Salesman", kind=COLUMN_TEXT),
        ColumnDescriptor(key="status", label="Status", kind=COLUMN_TEXT),
    ),
)

VIEWS = {
    view.report_type: view
    for view in (LOGISTICS_SUMMARY, PENDING_DELIVERIES, DISPATCH_SUMMARY)
}


def get_view(report_type: str) -> ViewDefinition:
    """Return the view registered under a report type.

    Raises:
        ValueError: If no view has that report type.
    """
    try:
        return VIEWS[report_type]
    except KeyError:
        raise ValueError(
            f"Unknown report view: {report_type}. "
            f"Expected one of {', '.join(sorted(VIEWS))}."
        ) from None


__all__ = [
    "STATUS_BY_CATEGORY",
    "STATUS_BY_RAW",
    "ViewDefinition",
    "LOGISTICS_SUMMARY",
    "PENDING_DELIVERIES",
    "DISPATCH_SUMMARY",
    "VIEWS",
    "get_view",
]

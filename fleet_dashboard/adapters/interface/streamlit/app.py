"""Streamlit dashboard entry point."""

import asyncio
from datetime import date, datetime
from decimal import Decimal

import streamlit as st

from fleet_dashboard.adapters.interface.streamlit.table_html import (
    render_table_html,
)
from fleet_dashboard.application.errors import (
    RecordStoreError,
    ReportExportError,
)
from fleet_dashboard.application.use_cases import (
    ExportReportUseCase,
    ExportResult,
    ExportScope,
    LiveTableController,
    TableRequest,
    TableState,
)
from fleet_dashboard.application.views import VIEWS, ViewDefinition
from fleet_dashboard.domain.constants import ALL, DATE_RANGE_IDS
from fleet_dashboard.domain.models import (
    FilterCriteria,
    SortDirection,
    SortSpec,
)
from fleet_dashboard.domain.services import resolve_date_range
from fleet_dashboard.infrastructure.container import (
    build_export_use_case,
    build_live_table_controller,
)
from fleet_dashboard.infrastructure.settings import FleetDashboardSettings


DEFAULT_SORT = "Default"
ALL_DATES = "all-dates"


@st.cache_resource(show_spinner=False)
def _get_controller(report_type: str) -> LiveTableController:
    """Keep one live controller per view across reruns."""
    return build_live_table_controller(report_type)


def _load_table(
    controller: LiveTableController,
    request: TableRequest,
) -> TableState:
    """Request a refresh and wait for the controller to settle."""

    async def _refresh() -> TableState:
        controller.request(request)
        return await controller.wait_idle()

    return asyncio.run(_refresh())


@st.cache_resource(show_spinner=False)
def _get_export_use_case(report_type: str) -> ExportReportUseCase:
    """Keep one export use case, and its record store, per view."""
    return build_export_use_case(report_type)


def _export_report(report_type: str, scope: ExportScope) -> ExportResult:
    """Run the export use case for a view."""
    return _get_export_use_case(report_type).execute(scope)


def _format_amount(value: Decimal) -> str:
    """Format amounts for display."""
    return f"{value:,.2f}"


def _range_label(range_id: str) -> str:
    return range_id.replace("-", " ").title()


def _build_criteria(
    view: ViewDefinition,
    range_id: str | None,
    custom_start: date | None,
    custom_end: date | None,
    search: str,
    dimensions: dict[str, str],
    reference: datetime,
    tz=None,
) -> FilterCriteria:
    """Assemble filter criteria from the sidebar inputs.

    Args:
        view: Active view definition.
        range_id: Selected date range identifier.
        custom_start: First day of a custom range.
        custom_end: Last day of a custom range.
        search: Free-text search.
        dimensions: Required value per dimension field.
        reference: The "now" anchoring relative ranges.
        tz: Records' timezone.

    Returns:
        FilterCriteria: Criteria without the status scope applied.
    """
    interval = resolve_date_range(
        range_id,
        reference,
        custom_start=custom_start,
        custom_end=custom_end,
        tz=tz,
    )
    active = {
        field: value.strip()
        for field, value in dimensions.items()
        if field in view.dimension_fields and value.strip()
    }
    return FilterCriteria(
        date_interval=interval,
        dimensions=active,
        search=search,
    )


def _build_sort(
    view: ViewDefinition,
    sort_label: str,
    descending: bool,
) -> SortSpec | None:
    """Map the selected column label to a sort spec."""
    if sort_label == DEFAULT_SORT:
        return None
    for column in view.columns(ALL):
        if column.label == sort_label:
            direction = SortDirection.DESC if descending else SortDirection.ASC
            return SortSpec(key=column.key, direction=direction)
    return None


def _render_stats(view: ViewDefinition, state: TableState) -> None:
    """Render count and bucket total cards."""
    result = state.result
    if result is None:
        return
    level_label = view.level_labels.get(view.summary_level, "Groups")
    cards = [
        ("Records", f"{result.record_count:,}"),
        (f"{level_label} groups", f"{result.group_count:,}"),
        ("Grand Total", _format_amount(result.summary.grand_total)),
    ]
    labels = dict(view.buckets)
    cards.extend(
        (labels.get(bucket, bucket), _format_amount(amount))
        for bucket, amount in result.bucket_totals
    )
    cards.extend(
        (category, f"{count:,}")
        for category, count in result.category_counts.items()
        if not view.visible_categories or category in view.visible_categories
    )
    for column, (label, value) in zip(st.columns(len(cards)), cards):
        column.metric(label, value)


def _render_table(view: ViewDefinition, state: TableState) -> None:
    """Render the current page and the per-group summary."""
    if state.error:
        st.error(f"Failed to load {view.title}: {state.error}")
    result = state.result
    if result is None:
        st.info("No data to display.")
        return
    if not result.grouping_contiguous:
        st.caption(
            "Sorted by a non-grouping column: groups may appear in "
            "several runs."
        )
    st.markdown(
        render_table_html(result.page, result.columns, view.span_levels),
        unsafe_allow_html=True,
    )
    page = result.page
    st.caption(
        f"Page {page.number} of {max(page.total_pages, 1)} "
        f"({page.total_rows} rows)"
    )
    level_label = view.level_labels.get(view.summary_level, "Group")
    summary_rows = [
        {level_label: subtotal.label, "Amount": float(subtotal.amount)}
        for subtotal in result.summary.subtotals
    ]
    summary_rows.append(
        {
            level_label: "Grand Total",
            "Amount": float(result.summary.grand_total),
        }
    )
    st.subheader(f"Summary by {level_label}")
    st.dataframe(summary_rows, use_container_width=True, hide_index=True)


def _read_export_scope(
    view: ViewDefinition,
    reference: datetime,
    tz=None,
) -> ExportScope:
    """Read the export form's own range, status, dimension and sort.

    The form is independent of the sidebar, so an export can cover all
    dates or other groups than the ones on screen.

    Args:
        view: Active view definition.
        reference: The "now" anchoring relative ranges.
        tz: Records' timezone.

    Returns:
        ExportScope: Scope handed to the export use case.
    """
    range_id = st.selectbox(
        "Export period",
        (ALL_DATES,) + DATE_RANGE_IDS,
        format_func=_range_label,
        key="export_range",
    )
    custom_start = custom_end = None
    if range_id == "custom":
        custom_start = st.date_input(
            "Export from", value=None, key="export_from"
        )
        custom_end = st.date_input("Export to", value=None, key="export_to")
    status_scope = st.selectbox(
        "Export status", view.status_options(), key="export_status"
    )
    dimensions = {
        field: st.text_input(
            view.level_labels.get(field, field.replace("_", " ").title()),
            value="",
            key=f"export_{field}",
        )
        for field in view.dimension_fields
    }
    sort_label = st.selectbox(
        "Export sort by",
        [DEFAULT_SORT] + [column.label for column in view.columns(ALL)],
        key="export_sort",
    )
    descending = st.checkbox(
        "Descending", value=False, key="export_descending"
    )
    selected_range = None if range_id == ALL_DATES else range_id
    return ExportScope(
        criteria=_build_criteria(
            view,
            selected_range,
            custom_start,
            custom_end,
            "",
            dimensions,
            reference=reference,
            tz=tz,
        ),
        sort=_build_sort(view, sort_label, descending),
        status_scope=status_scope,
        range_id=selected_range,
    )


def _render_export(report_type: str, scope: ExportScope) -> None:
    """Render the export button and report the outcome."""
    if not st.button("Export"):
        return
    try:
        result = _export_report(report_type, scope)
    except (RecordStoreError, ReportExportError) as exc:
        st.error(f"Export failed: {exc}")
        return
    st.success(f"Saved {result.path.name}")
    st.download_button(
        "Download report",
        data=result.path.read_bytes(),
        file_name=result.path.name,
        mime=(
            "application/vnd.openxmlformats-officedocument."
            "spreadsheetml.sheet"
        ),
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Fleet Dashboard", layout="wide")
    settings = FleetDashboardSettings.from_env()
    titles = {view.title: report_type for report_type, view in VIEWS.items()}
    selected_title = st.sidebar.selectbox("View", list(titles))
    report_type = titles[selected_title]
    view = VIEWS[report_type]
    st.title(view.title)

    range_id = st.sidebar.selectbox(
        "Date range",
        DATE_RANGE_IDS,
        index=DATE_RANGE_IDS.index("this-month"),
        format_func=_range_label,
    )
    custom_start = custom_end = None
    if range_id == "custom":
        custom_start = st.sidebar.date_input("From", value=None)
        custom_end = st.sidebar.date_input("To", value=None)
    search = st.sidebar.text_input("Search", placeholder="Type to filter")
    status_scope = st.sidebar.selectbox("Status", view.status_options())
    dimensions = {
        field: st.sidebar.text_input(
            view.level_labels.get(field, field.replace("_", " ").title()),
            value="",
        )
        for field in view.dimension_fields
    }
    sort_options = [DEFAULT_SORT] + [
        column.label for column in view.columns(ALL)
    ]
    sort_label = st.sidebar.selectbox("Sort by", sort_options)
    descending = st.sidebar.checkbox("Descending", value=False)
    page_number = int(
        st.sidebar.number_input("Page", min_value=1, value=1, step=1)
    )

    tz = settings.zone()
    criteria = _build_criteria(
        view,
        range_id,
        custom_start,
        custom_end,
        search,
        dimensions,
        reference=datetime.now(tz),
        tz=tz,
    )
    sort = _build_sort(view, sort_label, descending)
    state = _load_table(
        _get_controller(report_type),
        TableRequest(
            criteria=criteria,
            sort=sort,
            page=page_number,
            status_scope=status_scope,
        ),
    )
    _render_stats(view, state)
    _render_table(view, state)
    with st.expander("Export to Excel"):
        _render_export(
            report_type,
            _read_export_scope(view, reference=datetime.now(tz), tz=tz),
        )


if __name__ == "__main__":  # pragma: no cover
    main()

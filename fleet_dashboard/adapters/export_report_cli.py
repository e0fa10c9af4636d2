"""CLI adapter to export a report view to an Excel file.

The view and filters come from environment variables so the job can be
scheduled the same way as the dashboard is configured.
"""

from datetime import date, datetime
import os

from fleet_dashboard.application.errors import (
    RecordStoreError,
    ReportExportError,
)
from fleet_dashboard.application.use_cases import ExportScope
from fleet_dashboard.domain.constants import ALL
from fleet_dashboard.domain.models import FilterCriteria
from fleet_dashboard.domain.services import resolve_date_range
from fleet_dashboard.infrastructure.container import build_export_use_case
from fleet_dashboard.infrastructure.logging.logger import get_app_logger
from fleet_dashboard.infrastructure.settings import FleetDashboardSettings


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def main() -> None:
    """Export one report view using environment-provided filters."""
    logger = get_app_logger()
    settings = FleetDashboardSettings.from_env()
    report_type = os.getenv("EXPORT_REPORT_TYPE", "logistics_summary")
    range_id = os.getenv("EXPORT_RANGE", "this-month")
    tz = settings.zone()
    interval = resolve_date_range(
        range_id,
        datetime.now(tz),
        custom_start=_parse_date(os.getenv("EXPORT_FROM"), logger),
        custom_end=_parse_date(os.getenv("EXPORT_TO"), logger),
        tz=tz,
    )
    scope = ExportScope(
        criteria=FilterCriteria(
            date_interval=interval,
            search=os.getenv("EXPORT_SEARCH", ""),
        ),
        status_scope=os.getenv("EXPORT_STATUS", ALL),
        range_id=range_id,
    )

    try:
        use_case = build_export_use_case(report_type, settings=settings)
        result = use_case.execute(scope)
    except (ValueError, RecordStoreError, ReportExportError) as exc:
        logger.error(str(exc))
        print(f"Export failed: {exc}")
        return

    print(
        f"Exported {len(result.document.rows)} rows "
        f"to {result.path}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()

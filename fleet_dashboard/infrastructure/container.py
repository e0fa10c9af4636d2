"""Composition root for wiring infrastructure adapters."""

from fleet_dashboard.application.ports.database import DatabaseEnginePort
from fleet_dashboard.application.ports.record_store import RecordStorePort
from fleet_dashboard.application.use_cases import (
    ExportReportUseCase,
    GetReportTableUseCase,
    LiveTableController,
)
from fleet_dashboard.application.views import get_view
from fleet_dashboard.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from fleet_dashboard.infrastructure.logging.logger import get_app_logger
from fleet_dashboard.infrastructure.record_store_factory import (
    create_record_store,
)
from fleet_dashboard.infrastructure.settings import FleetDashboardSettings
from fleet_dashboard.infrastructure.xlsx_report_renderer import (
    XlsxReportRenderer,
)
from fleet_dashboard.utils.utils import get_project_root


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_record_store(
    report_type: str,
    db_port: DatabaseEnginePort | None = None,
    settings: FleetDashboardSettings | None = None,
) -> RecordStorePort:
    """Return the configured record store for a view."""
    resolved_settings = settings or FleetDashboardSettings.from_env()
    resolved_db = db_port
    if resolved_db is None and resolved_settings.record_store == "sql":
        resolved_db = build_database_adapter()
    return create_record_store(
        get_view(report_type),
        db_port=resolved_db,
        logger=get_app_logger(),
        settings=resolved_settings,
    )


def build_table_use_case(
    report_type: str,
    record_store: RecordStorePort | None = None,
    settings: FleetDashboardSettings | None = None,
) -> GetReportTableUseCase:
    """Return the live table use case for a view."""
    resolved_settings = settings or FleetDashboardSettings.from_env()
    store = record_store or build_record_store(
        report_type, settings=resolved_settings
    )
    return GetReportTableUseCase(
        store,
        get_view(report_type),
        logger=get_app_logger(),
        page_size=resolved_settings.page_size,
        fetch_page_size=resolved_settings.export_page_size,
    )


def build_export_use_case(
    report_type: str,
    record_store: RecordStorePort | None = None,
    settings: FleetDashboardSettings | None = None,
) -> ExportReportUseCase:
    """Return the export use case for a view."""
    resolved_settings = settings or FleetDashboardSettings.from_env()
    store = record_store or build_record_store(
        report_type, settings=resolved_settings
    )
    return ExportReportUseCase(
        store,
        XlsxReportRenderer(),
        get_view(report_type),
        resolved_settings.export_dir or get_project_root() / "exports",
        logger=get_app_logger(),
        fetch_page_size=resolved_settings.export_page_size,
    )


def build_live_table_controller(
    report_type: str,
    settings: FleetDashboardSettings | None = None,
) -> LiveTableController:
    """Return a debounced live table controller for a view."""
    resolved_settings = settings or FleetDashboardSettings.from_env()
    return LiveTableController(
        build_table_use_case(report_type, settings=resolved_settings),
        debounce_seconds=resolved_settings.debounce_seconds,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_record_store",
    "build_table_use_case",
    "build_export_use_case",
    "build_live_table_controller",
]

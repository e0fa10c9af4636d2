"""Factory helpers to select the record store backend."""

from fleet_dashboard.application.ports.database import DatabaseEnginePort
from fleet_dashboard.application.ports.record_store import RecordStorePort
from fleet_dashboard.application.views import ViewDefinition
from fleet_dashboard.infrastructure.logging.logger import get_app_logger
from fleet_dashboard.infrastructure.settings import FleetDashboardSettings
from fleet_dashboard.infrastructure.stores.http_record_store import (
    HttpRecordStore,
    build_http_client,
)
from fleet_dashboard.infrastructure.stores.payload_mappers import (
    PAYLOAD_MAPPERS,
)
from fleet_dashboard.infrastructure.stores.sql_record_store import (
    SQL_TABLE_SPECS,
    SqlRecordStore,
)

API_ENDPOINTS = {
    "logistics_summary": "logistics-summary",
    "pending_deliveries": "pending-deliveries",
    "dispatch_summary": "dispatch-summary",
}


def create_record_store(
    view: ViewDefinition,
    db_port: DatabaseEnginePort | None = None,
    logger=None,
    backend: str | None = None,
    settings: FleetDashboardSettings | None = None,
) -> RecordStorePort:
    """Return a record store implementation based on configuration.

    Args:
        view: View whose records the store serves.
        db_port: Port providing access to the analytics engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        backend: Optional backend override (api or sql).
        settings: Optional settings override.

    Returns:
        RecordStorePort: Concrete record store.

    Raises:
        ValueError: If the backend is unsupported.
        RuntimeError: If the SQL backend is selected without a db_port.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or FleetDashboardSettings.from_env()
    selected_backend = (
        backend or resolved_settings.record_store
    ).strip().lower()
    tz = resolved_settings.zone()

    if selected_backend == "api":
        client = build_http_client(
            resolved_settings.api_base_url,
            resolved_settings.api_timeout,
        )
        return HttpRecordStore(
            client,
            API_ENDPOINTS[view.report_type],
            PAYLOAD_MAPPERS[view.report_type],
            tz=tz,
            logger=resolved_logger,
        )

    if selected_backend == "sql":
        if db_port is None:
            raise RuntimeError("SQL record store requires a database port.")
        return SqlRecordStore(
            db_port,
            SQL_TABLE_SPECS[view.report_type],
            tz=tz,
            logger=resolved_logger,
        )

    raise ValueError(
        "Unsupported record store backend: "
        f"{selected_backend}. Expected api or sql."
    )


__all__ = ["API_ENDPOINTS", "create_record_store"]

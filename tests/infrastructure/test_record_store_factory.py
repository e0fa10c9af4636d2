"""Tests for record store backend selection."""

from unittest.mock import MagicMock

import pytest

from fleet_dashboard.application.views import (
    DISPATCH_SUMMARY,
    PENDING_DELIVERIES,
)
from fleet_dashboard.infrastructure.record_store_factory import (
    create_record_store,
)
from fleet_dashboard.infrastructure.settings import FleetDashboardSettings
from fleet_dashboard.infrastructure.stores.http_record_store import (
    HttpRecordStore,
)
from fleet_dashboard.infrastructure.stores.sql_record_store import (
    SqlRecordStore,
)

_SETTINGS = FleetDashboardSettings(
    api_base_url="https://fleet.example/api",
    timezone="UTC",
)


def test_api_backend_builds_http_store() -> None:
    """API backend should build an HTTP store."""
    store = create_record_store(
        PENDING_DELIVERIES,
        logger=MagicMock(),
        settings=_SETTINGS,
    )

    try:
        assert isinstance(store, HttpRecordStore)
        assert store._endpoint == "pending-deliveries"
        assert str(store._client.base_url) == "https://fleet.example/api/"
    finally:
        store.close()


def test_sql_backend_requires_db_port() -> None:
    """SQL backend should require a database port."""
    with pytest.raises(RuntimeError):
        create_record_store(
            DISPATCH_SUMMARY,
            logger=MagicMock(),
            backend="sql",
            settings=_SETTINGS,
        )


def test_sql_backend_builds_sql_store() -> None:
    """SQL backend should build a SQL store."""
    store = create_record_store(
        DISPATCH_SUMMARY,
        db_port=MagicMock(),
        logger=MagicMock(),
        backend=" SQL ",
        settings=_SETTINGS,
    )

    assert isinstance(store, SqlRecordStore)
    assert store._spec.table == "dispatch_transactions"


def test_unsupported_backend_raises() -> None:
    """Unsupported backends should raise ValueError."""
    with pytest.raises(ValueError, match="Unsupported record store backend"):
        create_record_store(
            DISPATCH_SUMMARY,
            logger=MagicMock(),
            backend="csv",
            settings=_SETTINGS,
        )

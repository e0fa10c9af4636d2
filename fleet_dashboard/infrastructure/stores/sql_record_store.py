"""Record store reading flat report tables from the analytics database."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, tzinfo

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fleet_dashboard.application.errors import RecordStoreError
from fleet_dashboard.application.ports.database import DatabaseEnginePort
from fleet_dashboard.application.ports.record_store import (
    RecordPage,
    RecordQuery,
    RecordStorePort,
)
from fleet_dashboard.domain.constants import (
    LEVEL_CLUSTER,
    LEVEL_CUSTOMER,
    LEVEL_DRIVER,
    LEVEL_SALESMAN,
    LEVEL_VEHICLE,
    LOGISTICS_BUCKETS,
    SINGLE_AMOUNT_BUCKET,
)
from fleet_dashboard.domain.models import TransactionRecord
from fleet_dashboard.domain.services import nest_flat_record
from fleet_dashboard.infrastructure.logging.logger import get_app_logger
from fleet_dashboard.infrastructure.stores.payload_mappers import (
    local_day_key,
    parse_timestamp,
    pending_amounts,
)
from fleet_dashboard.utils.decimal_utils import parse_amount


@dataclass(frozen=True)
class SqlTableSpec:
    """Describes how to read one view's flat table.

    Attributes:
        table: Table name.
        id_column: Column ordering rows and identifying records.
        level_columns: (level, column) pairs, outermost level first.
        timestamp_column: Column filtered by the date range.
        search_columns: Columns matched by free-text search.
        build_record: Callable turning a row mapping into a record.
    """

    table: str
    id_column: str
    level_columns: tuple[tuple[str, str], ...]
    timestamp_column: str
    search_columns: tuple[str, ...]
    build_record: Callable[[Mapping, tzinfo | None], TransactionRecord]


class SqlRecordStore(RecordStorePort):
    """RecordStorePort implementation using SQLAlchemy ``text()`` queries."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        spec: SqlTableSpec,
        tz: tzinfo | None = None,
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the analytics engine.
            spec: Table layout of the view.
            tz: Zone handed to the record builder for local day keys.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._spec = spec
        self._tz = tz
        self._logger = logger or get_app_logger()

    def fetch_page(self, query: RecordQuery) -> RecordPage:
        """Fetch one page of rows and the matching row count.

        Args:
            query: Page number, page size and server-side filters.

        Returns:
            RecordPage: Records nested under their level chain.

        Raises:
            RecordStoreError: If the database query fails.
        """
        spec = self._spec
        where, params = self._build_where(query)
        select_sql = text(
            f"SELECT * FROM {spec.table}{where} "
            f"ORDER BY {spec.id_column} LIMIT :limit OFFSET :offset"
        )
        count_sql = text(
            f"SELECT COUNT(*) AS filter_count FROM {spec.table}{where}"
        )
        page_params = {
            **params,
            "limit": query.limit,
            "offset": (query.page - 1) * query.limit,
        }
        engine = self._db_port.get_analytics_engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(select_sql, page_params).all()
                filter_count = conn.execute(count_sql, params).scalar_one()
        except SQLAlchemyError as exc:
            self._logger.error(f"Failed to read {spec.table}: {exc}")
            raise RecordStoreError(f"Failed to read {spec.table}") from exc

        items = []
        for row in rows:
            mapping = row._mapping
            record = spec.build_record(mapping, self._tz)
            chain = [
                (level, str(mapping[column] or ""))
                for level, column in spec.level_columns
            ]
            items.append(nest_flat_record(chain, record))
        return RecordPage(
            items=tuple(items),
            filter_count=int(filter_count),
            fetched_count=len(rows),
        )

    def _build_where(self, query: RecordQuery) -> tuple[str, dict]:
        spec = self._spec
        clauses = []
        params = {}
        if query.search and spec.search_columns:
            params["search"] = f"%{query.search.lower()}%"
            clauses.append(
                "("
                + " OR ".join(
                    f"LOWER({column}) LIKE :search"
                    for column in spec.search_columns
                )
                + ")"
            )
        bounds = _parse_date_filter(query.date_filter)
        if bounds is not None:
            params["start_ts"], params["end_ts"] = bounds
            clauses.append(
                f"{spec.timestamp_column} BETWEEN :start_ts AND :end_ts"
            )
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params


def _parse_date_filter(date_filter: str) -> tuple[str, str] | None:
    """Split ``start,end`` into SQL timestamp strings."""
    if not date_filter or "," not in date_filter:
        return None
    raw_start, raw_end = date_filter.split(",", 1)
    try:
        start = datetime.fromisoformat(raw_start.strip())
        end = datetime.fromisoformat(raw_end.strip())
    except ValueError:
        return None
    return start.isoformat(sep=" "), end.isoformat(sep=" ")


def _logistics_record(row: Mapping, tz: tzinfo | None) -> TransactionRecord:
    return TransactionRecord(
        record_id=str(row["id"]),
        status=row["status"] or "",
        timestamp=parse_timestamp(row["dispatch_date"]),
        amounts={key: parse_amount(row[key]) for key, _ in LOGISTICS_BUCKETS},
        attributes={"town_city": row["town_city"] or ""},
    )


def _pending_record(row: Mapping, tz: tzinfo | None) -> TransactionRecord:
    status = row["order_status"] or ""
    timestamp = parse_timestamp(row["order_date"])
    return TransactionRecord(
        record_id=str(row["order_no"]),
        status=status,
        timestamp=timestamp,
        amounts=pending_amounts(status, parse_amount(row["allocated_amount"])),
        attributes={"order_day": local_day_key(timestamp, tz)},
    )


def _dispatch_record(row: Mapping, tz: tzinfo | None) -> TransactionRecord:
    return TransactionRecord(
        record_id=str(row["id"]),
        status=row["status"] or "",
        timestamp=parse_timestamp(row["created_at"]),
        amounts={SINGLE_AMOUNT_BUCKET: parse_amount(row["amount"])},
        attributes={
            "dp_number": row["dp_number"] or "",
            "salesman": row["salesman_name"] or "",
            "address": row["address"] or "",
        },
    )


SQL_TABLE_SPECS = {
    "logistics_summary": SqlTableSpec(
        table="logistics_deliveries",
        id_column="id",
        level_columns=(
            (LEVEL_VEHICLE, "truck_plate"),
            (LEVEL_DRIVER, "driver_name"),
            (LEVEL_CLUSTER, "cluster_name"),
            (LEVEL_CUSTOMER, "customer_name"),
        ),
        timestamp_column="dispatch_date",
        search_columns=(
            "truck_plate",
            "driver_name",
            "cluster_name",
            "customer_name",
        ),
        build_record=_logistics_record,
    ),
    "pending_deliveries": SqlTableSpec(
        table="pending_orders",
        id_column="order_no",
        level_columns=(
            (LEVEL_CLUSTER, "cluster_name"),
            (LEVEL_CUSTOMER, "customer_name"),
            (LEVEL_SALESMAN, "salesman_name"),
        ),
        timestamp_column="order_date",
        search_columns=("customer_name", "salesman_name"),
        build_record=_pending_record,
    ),
    "dispatch_summary": SqlTableSpec(
        table="dispatch_transactions",
        id_column="id",
        level_columns=(
            (LEVEL_VEHICLE, "vehicle_plate_no"),
            (LEVEL_DRIVER, "driver_name"),
            (LEVEL_CUSTOMER, "customer_name"),
        ),
        timestamp_column="created_at",
        search_columns=(
            "vehicle_plate_no",
            "driver_name",
            "salesman_name",
            "customer_name",
            "dp_number",
        ),
        build_record=_dispatch_record,
    ),
}


__all__ = ["SqlTableSpec", "SqlRecordStore", "SQL_TABLE_SPECS"]

"""Map record store payloads into group trees and transaction records.

API payloads arrive nested (plan, then deliveries; cluster, then customers,
then orders) and SQL rows arrive flat. Both are turned into ``GroupNode``
trees whose leaves are ``TransactionRecord`` values. Amounts always go
through ``parse_amount`` so malformed numbers become zero.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, tzinfo
from decimal import Decimal

from fleet_dashboard.domain.constants import (
    LEVEL_CLUSTER,
    LEVEL_CUSTOMER,
    LEVEL_DRIVER,
    LEVEL_SALESMAN,
    LEVEL_VEHICLE,
    LOGISTICS_BUCKETS,
    PENDING_BUCKETS,
    PENDING_STATUS_KEYWORDS,
    SINGLE_AMOUNT_BUCKET,
    UNASSIGNED_CLUSTER,
    UNMAPPED_BUCKET,
)
from fleet_dashboard.domain.models import GroupNode, TransactionRecord
from fleet_dashboard.domain.policies import StatusCategoryMap
from fleet_dashboard.domain.services import (
    classify_delivery,
    nest_flat_record,
)
from fleet_dashboard.utils.decimal_utils import parse_amount

_PENDING_STATUS_MAP = StatusCategoryMap(keywords=PENDING_STATUS_KEYWORDS)
_PENDING_BUCKET_BY_LABEL = {label: key for key, label in PENDING_BUCKETS}
_LOGISTICS_PAYLOAD_KEYS = {
    "fulfilled": "fulfilled",
    "not_fulfilled": "notFulfilled",
    "fulfilled_with_returns": "fulfilledWithReturns",
    "fulfilled_with_concerns": "fulfilledWithConcerns",
}


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO timestamp, returning None when absent or malformed."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def local_day_key(timestamp: datetime | None, tz: tzinfo | None = None) -> str:
    """Return the ``YYYY-MM-DD`` day of a timestamp in a zone."""
    if timestamp is None:
        return ""
    if tz is not None and timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.date().isoformat()


def _text(value, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _optional_amount(value) -> Decimal | None:
    return None if value is None else parse_amount(value)


def _logistics_status(amounts: Mapping[str, Decimal]) -> str:
    for key, label in LOGISTICS_BUCKETS:
        if amounts.get(key):
            return label
    return ""


def _logistics_amounts(delivery: Mapping) -> dict[str, Decimal]:
    if "invoiceTotal" in delivery:
        return classify_delivery(
            parse_amount(delivery.get("invoiceTotal")),
            delivery.get("dispatchStatus"),
            returned_amount=_optional_amount(delivery.get("returnedAmount")),
            concern_variance=_optional_amount(delivery.get("concernVariance")),
        )
    return {
        key: parse_amount(delivery.get(payload_key))
        for key, payload_key in _LOGISTICS_PAYLOAD_KEYS.items()
    }


def map_logistics_payload(
    data: Iterable[Mapping],
    tz: tzinfo | None = None,
) -> tuple[GroupNode, ...]:
    """Map dispatch plans with deliveries into vehicle-rooted trees.

    Each plan becomes vehicle, driver, cluster and customer nodes around
    one record per delivery. Deliveries either carry the four bucket
    amounts or the raw invoice fields classified into one bucket.

    Args:
        data: Plans as returned under the payload's ``data`` key.
        tz: Unused; accepted so every mapper shares one signature.

    Returns:
        tuple[GroupNode, ...]: One tree per plan, in payload order.
    """
    nodes = []
    for plan in data:
        plan_id = _text(plan.get("id"), "")
        timestamp = parse_timestamp(
            plan.get("dispatchDate") or plan.get("createdAt")
        )
        children = []
        for index, delivery in enumerate(plan.get("deliveries") or ()):
            amounts = _logistics_amounts(delivery)
            record = TransactionRecord(
                record_id=_text(delivery.get("id"), f"{plan_id}-{index}"),
                status=_text(
                    delivery.get("status"), _logistics_status(amounts)
                ),
                timestamp=timestamp,
                amounts=amounts,
                attributes={
                    "town_city": _text(delivery.get("city"), ""),
                },
            )
            cluster = _text(delivery.get("clusterName"), UNASSIGNED_CLUSTER)
            customer = _text(delivery.get("customerName"), "Unknown Customer")
            children.append(
                nest_flat_record(
                    ((LEVEL_CLUSTER, cluster), (LEVEL_CUSTOMER, customer)),
                    record,
                )
            )
        if not children:
            continue
        driver = GroupNode(
            level=LEVEL_DRIVER,
            value=_text(plan.get("driver"), "Unknown Driver"),
            children=tuple(children),
        )
        nodes.append(
            GroupNode(
                level=LEVEL_VEHICLE,
                value=_text(plan.get("truckPlate"), "Unknown Plate"),
                children=(driver,),
            )
        )
    return tuple(nodes)


def pending_amounts(status: str, amount: Decimal) -> dict[str, Decimal]:
    """Place an order amount in the bucket its status maps to."""
    category = _PENDING_STATUS_MAP.categorize(status)
    bucket = _PENDING_BUCKET_BY_LABEL.get(category, UNMAPPED_BUCKET)
    return {bucket: amount}


def pending_order_record(
    order: Mapping,
    tz: tzinfo | None = None,
) -> TransactionRecord:
    """Map one sales order into a record bucketed by its status."""
    status = _text(order.get("order_status"), "")
    raw_amount = order.get("allocated_amount")
    if raw_amount is None:
        raw_amount = order.get("total_amount")
    timestamp = parse_timestamp(order.get("order_date"))
    return TransactionRecord(
        record_id=_text(
            order.get("order_no"), _text(order.get("order_id"), "")
        ),
        status=status,
        timestamp=timestamp,
        amounts=pending_amounts(status, parse_amount(raw_amount)),
        attributes={"order_day": local_day_key(timestamp, tz)},
    )


def map_pending_payload(
    data: Iterable[Mapping],
    tz: tzinfo | None = None,
) -> tuple[GroupNode, ...]:
    """Map cluster groups of customer orders into cluster-rooted trees.

    Args:
        data: Clusters with their ``customers`` and each customer's
            ``orders``.
        tz: Zone used to derive each order's local day.

    Returns:
        tuple[GroupNode, ...]: One tree per cluster, in payload order.
    """
    nodes = []
    for cluster in data:
        customers = []
        for customer in cluster.get("customers") or ():
            orders = tuple(
                pending_order_record(order, tz)
                for order in customer.get("orders") or ()
            )
            salesman = GroupNode(
                level=LEVEL_SALESMAN,
                value=_text(customer.get("salesmanName"), "Unknown Salesman"),
                children=orders,
            )
            customers.append(
                GroupNode(
                    level=LEVEL_CUSTOMER,
                    value=_text(
                        customer.get("customerName"), "Unknown Customer"
                    ),
                    children=(salesman,),
                )
            )
        nodes.append(
            GroupNode(
                level=LEVEL_CLUSTER,
                value=_text(cluster.get("clusterName"), UNASSIGNED_CLUSTER),
                children=tuple(customers),
            )
        )
    return tuple(nodes)


def map_dispatch_payload(
    data: Iterable[Mapping],
    tz: tzinfo | None = None,
) -> tuple[GroupNode, ...]:
    """Map dispatch plans into vehicle, driver and customer trees.

    The plan status applies to every customer transaction of the plan.

    Args:
        data: Dispatch plans with ``customerTransactions``.
        tz: Unused; accepted so every mapper shares one signature.

    Returns:
        tuple[GroupNode, ...]: One tree per plan, in payload order.
    """
    nodes = []
    for plan in data:
        status = _text(plan.get("status"), "")
        timestamp = parse_timestamp(plan.get("createdAt"))
        attributes = {
            "dp_number": _text(plan.get("dpNumber"), ""),
            "salesman": _text(plan.get("salesmanName"), "Unknown Salesman"),
        }
        customers = []
        for transaction in plan.get("customerTransactions") or ():
            record = TransactionRecord(
                record_id=_text(transaction.get("id"), ""),
                status=status,
                timestamp=timestamp,
                amounts={
                    SINGLE_AMOUNT_BUCKET: parse_amount(
                        transaction.get("amount")
                    )
                },
                attributes={
                    **attributes,
                    "address": _text(transaction.get("address"), ""),
                },
            )
            customer = _text(
                transaction.get("customerName"), "Unknown Customer"
            )
            customers.append(
                nest_flat_record(((LEVEL_CUSTOMER, customer),), record)
            )
        nodes.append(
            GroupNode(
                level=LEVEL_VEHICLE,
                value=_text(plan.get("vehiclePlateNo"), "Unknown Plate"),
                children=(
                    GroupNode(
                        level=LEVEL_DRIVER,
                        value=_text(plan.get("driverName"), "Unknown Driver"),
                        children=tuple(customers),
                    ),
                ),
            )
        )
    return tuple(nodes)


PAYLOAD_MAPPERS = {
    "logistics_summary": map_logistics_payload,
    "pending_deliveries": map_pending_payload,
    "dispatch_summary": map_dispatch_payload,
}


__all__ = [
    "parse_timestamp",
    "local_day_key",
    "pending_amounts",
    "pending_order_record",
    "map_logistics_payload",
    "map_pending_payload",
    "map_dispatch_payload",
    "PAYLOAD_MAPPERS",
]

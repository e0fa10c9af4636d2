"""Domain constants for fleet reporting."""

ALL = "All"
OTHER_CATEGORY = "Other"
UNASSIGNED_CLUSTER = "Unassigned"

DEFAULT_PAGE_SIZE = 50

DATE_RANGE_IDS = (
    "yesterday",
    "today",
    "tomorrow",
    "this-week",
    "this-month",
    "this-year",
    "custom",
)

# Grouping levels and record attributes.
LEVEL_VEHICLE = "vehicle"
LEVEL_DRIVER = "driver"
LEVEL_CLUSTER = "cluster"
LEVEL_CUSTOMER = "customer"
LEVEL_SALESMAN = "salesman"

SINGLE_AMOUNT_BUCKET = "amount"
UNMAPPED_BUCKET = "other"

LOGISTICS_BUCKETS = (
    ("fulfilled", "Fulfilled"),
    ("not_fulfilled", "Not Fulfilled"),
    ("fulfilled_with_returns", "Fulfilled w/ Returns"),
    ("fulfilled_with_concerns", "Fulfilled w/ Concerns"),
)

PENDING_BUCKETS = (
    ("approval", "For Approval"),
    ("consolidation", "For Conso"),
    ("picking", "For Picking"),
    ("invoicing", "For Invoicing"),
    ("loading", "For Loading"),
    ("shipping", "For Shipping"),
)

# Substring rules for pending order statuses, checked in order.
PENDING_STATUS_KEYWORDS = (
    ("approval", "For Approval"),
    ("conso", "For Conso"),
    ("picking", "For Picking"),
    ("invoicing", "For Invoicing"),
    ("loading", "For Loading"),
    ("shipping", "For Shipping"),
)

PENDING_EXCLUDED_STATUSES = frozenset(
    {
        "en route",
        "delivered",
        "on hold",
        "cancelled",
        "no fulfilled",
        "not fulfilled",
    }
)

DISPATCH_STATUS_CATEGORIES = {
    "approved": "For Dispatch",
    "for dispatch": "For Dispatch",
    "for inbound": "For Inbound",
    "dispatched": "For Inbound",
    "inbound": "For Inbound",
    "in transit": "For Inbound",
    "arrived": "For Clearance",
    "for clearance": "For Clearance",
    "posted": "For Approval",
    "cleared": "Completed",
    "completed": "Completed",
}

DISPATCH_ACTIVE_CATEGORIES = (
    "For Dispatch",
    "For Inbound",
    "For Clearance",
)

NOT_FULFILLED_STATUS = "Not Fulfilled"


__all__ = [
    "ALL",
    "OTHER_CATEGORY",
    "UNASSIGNED_CLUSTER",
    "DEFAULT_PAGE_SIZE",
    "DATE_RANGE_IDS",
    "LEVEL_VEHICLE",
    "LEVEL_DRIVER",
    "LEVEL_CLUSTER",
    "LEVEL_CUSTOMER",
    "LEVEL_SALESMAN",
    "SINGLE_AMOUNT_BUCKET",
    "UNMAPPED_BUCKET",
    "LOGISTICS_BUCKETS",
    "PENDING_BUCKETS",
    "PENDING_STATUS_KEYWORDS",
    "PENDING_EXCLUDED_STATUSES",
    "DISPATCH_STATUS_CATEGORIES",
    "DISPATCH_ACTIVE_CATEGORIES",
    "NOT_FULFILLED_STATUS",
]

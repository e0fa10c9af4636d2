"""Domain package for reporting rules and core models."""

from .constants import ALL, DEFAULT_PAGE_SIZE, OTHER_CATEGORY
from .models import (
    AggregationSummary,
    ColumnDescriptor,
    DateInterval,
    FilterCriteria,
    FlatRow,
    GroupNode,
    GroupSubtotal,
    Page,
    ReportDocument,
    ReportHeader,
    SortDirection,
    SortSpec,
    TransactionRecord,
)
from .policies import StatusCategoryMap, normalize_status

__all__ = [
    "ALL",
    "DEFAULT_PAGE_SIZE",
    "OTHER_CATEGORY",
    "AggregationSummary",
    "ColumnDescriptor",
    "DateInterval",
    "FilterCriteria",
    "FlatRow",
    "GroupNode",
    "GroupSubtotal",
    "Page",
    "ReportDocument",
    "ReportHeader",
    "SortDirection",
    "SortSpec",
    "TransactionRecord",
    "StatusCategoryMap",
    "normalize_status",
]

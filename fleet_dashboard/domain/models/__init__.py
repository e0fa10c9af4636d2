"""Domain models package."""

from .query import DateInterval, FilterCriteria, SortDirection, SortSpec
from .records import FlatRow, GroupNode, TransactionRecord
from .reporting import (
    AggregationSummary,
    ColumnDescriptor,
    GroupSubtotal,
    Page,
    ReportDocument,
    ReportHeader,
)

__all__ = [
    "DateInterval",
    "FilterCriteria",
    "SortDirection",
    "SortSpec",
    "FlatRow",
    "GroupNode",
    "TransactionRecord",
    "AggregationSummary",
    "ColumnDescriptor",
    "GroupSubtotal",
    "Page",
    "ReportDocument",
    "ReportHeader",
]
